"""Notify command execution."""

from .command import Notifier, RecordingNotifier, SubprocessNotifier

__all__ = ["Notifier", "RecordingNotifier", "SubprocessNotifier"]
