"""Utility functions for the safe emitter."""

from .formatters import format_event_name, describe_listener
from .logging_setup import setup_logging
from .inspection import build_listener_table, print_listener_table

__all__ = [
    'format_event_name',
    'describe_listener',
    'setup_logging',
    'build_listener_table',
    'print_listener_table',
]
