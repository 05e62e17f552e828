"""Formatting utilities for log lines and error messages."""

import functools


def format_event_name(event_name) -> str:
    """Format an event name for display.
    
    Strings are shown as-is, any other token through its repr:
    - 'foo' -> 'foo'
    - Symbol('hey!') -> 'Symbol(hey!)'
    
    Args:
        event_name: Event name to format
        
    Returns:
        Formatted string representation
    """
    if isinstance(event_name, str):
        return event_name
    return repr(event_name)


def describe_listener(listener) -> str:
    """Return a short, human readable name for a listener.
    
    Args:
        listener: Registered callable
        
    Returns:
        Qualified name when available, repr otherwise
    """
    if isinstance(listener, functools.partial):
        return f"partial({describe_listener(listener.func)})"
    name = getattr(listener, '__qualname__', None) or getattr(listener, '__name__', None)
    if name:
        return name
    return repr(listener)
