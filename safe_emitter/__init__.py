"""Safe in-process event emitter.

Listeners run on the next event-loop turn, failures are isolated per
listener and funneled to one error handler, listener lists are bounded.
"""

from .config import AppConfig, EmitterConfig, LoggingConfig, SafeEmitterError, ConfigError
from .core import (
    SafeEmitter,
    Symbol,
    InvalidArgument,
    CapacityExceeded,
    EmitterTimeout,
    UnsupportedOperation,
    NEW_LISTENER_EVENT,
    REMOVE_LISTENER_EVENT,
    ERROR_EVENT,
)

__version__ = "1.0.0"

__all__ = [
    'SafeEmitter',
    'Symbol',
    'AppConfig',
    'EmitterConfig',
    'LoggingConfig',
    'SafeEmitterError',
    'ConfigError',
    'InvalidArgument',
    'CapacityExceeded',
    'EmitterTimeout',
    'UnsupportedOperation',
    'NEW_LISTENER_EVENT',
    'REMOVE_LISTENER_EVENT',
    'ERROR_EVENT',
    '__version__',
]
