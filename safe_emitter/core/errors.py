"""Caller-facing errors raised by the emitter."""

from ..config import SafeEmitterError
from ..utils.formatters import format_event_name


class InvalidArgument(SafeEmitterError, TypeError):
    """Malformed event name, listener or option at a public entry point."""


class CapacityExceeded(SafeEmitterError):
    """Listener-count guard tripped for one event name."""

    def __init__(self, limit):
        super().__init__(f"The maximum number of listeners ({limit}) has been reached.")
        self.limit = limit


class EmitterTimeout(SafeEmitterError, TimeoutError):
    """A once() wait elapsed before its event fired."""

    def __init__(self, event_name, timeout_ms):
        super().__init__(f"once timeout for event name {format_event_name(event_name)}")
        self.event_name = event_name
        self.timeout_ms = timeout_ms


class UnsupportedOperation(SafeEmitterError, NotImplementedError):
    """Operation deliberately not provided by SafeEmitter."""

    def __init__(self, method_name: str):
        super().__init__(f"SafeEmitter doesn't implement the method {method_name}")
        self.method_name = method_name
