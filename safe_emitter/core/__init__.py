"""Core emitter: registry, dispatch engine and wait bridge."""

from .types import (
    Symbol,
    EventName,
    Listener,
    ErrorHandler,
    NEW_LISTENER_EVENT,
    REMOVE_LISTENER_EVENT,
    ERROR_EVENT,
)
from .errors import InvalidArgument, CapacityExceeded, EmitterTimeout, UnsupportedOperation
from .registry import ListenerRegistry, is_same_listener
from .dispatch import Dispatcher
from .waiter import wait_for_event
from .emitter import SafeEmitter

__all__ = [
    'Symbol',
    'EventName',
    'Listener',
    'ErrorHandler',
    'NEW_LISTENER_EVENT',
    'REMOVE_LISTENER_EVENT',
    'ERROR_EVENT',
    'InvalidArgument',
    'CapacityExceeded',
    'EmitterTimeout',
    'UnsupportedOperation',
    'ListenerRegistry',
    'is_same_listener',
    'Dispatcher',
    'wait_for_event',
    'SafeEmitter',
]
