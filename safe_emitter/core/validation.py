"""Argument validation shared by every public entry point."""

import math

from .errors import InvalidArgument
from .types import Symbol


def is_event_name(value) -> bool:
    """Known if a given value is a str or a Symbol."""
    return isinstance(value, (str, Symbol))


def require_event_name(value) -> None:
    if not is_event_name(value):
        raise InvalidArgument("event_name should be a str or Symbol")


def require_listener(value) -> None:
    if not callable(value):
        raise InvalidArgument("listener should be callable")


def require_error_handler(value) -> None:
    if not callable(value):
        raise InvalidArgument("error_handler should be callable")


def is_number(value) -> bool:
    """True for int/float values other than bool and NaN."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def require_timeout(value) -> None:
    if not is_number(value) or value < 0:
        raise InvalidArgument("timeout_ms should be a non-negative number")
