"""The resolve, render, write and notify cycle."""

from .loop import WatchLoop, run_tick

__all__ = ["WatchLoop", "run_tick"]
