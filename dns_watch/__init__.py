"""dns-watch - render templates from live DNS answers.

Resolves hostnames, renders a Jinja2 template with the addresses and, in
watch mode, re-renders on an interval and runs a command when the output
changes.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
