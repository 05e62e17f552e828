"""SafeEmitter: in-process event emitter with failure isolation.

Listeners never run inside the emitting caller's stack, a failing listener
never stops its siblings, and every failure ends up in one error handler
(see catch()) followed by an 'error' meta-event.

Example:
    emitter = SafeEmitter().catch(lambda error, name, listener: print(error))
    emitter.on('stage:complete', lambda stage: print(f"{stage} done"))
    emitter.emit('stage:complete', 'scan')      # runs on the next loop turn
    await emitter.emit_and_wait('stage:complete', 'parse')
    args = await emitter.once('ready', 500)
"""

import asyncio
import logging
from typing import Any, Awaitable, Optional

from ..config import AppConfig, EmitterConfig, DEFAULT_MAX_LISTENERS
from ..utils.formatters import describe_listener, format_event_name
from .dispatch import Dispatcher
from .errors import UnsupportedOperation
from .registry import ListenerRegistry
from .types import (
    ERROR_EVENT,
    NEW_LISTENER_EVENT,
    REMOVE_LISTENER_EVENT,
    ErrorHandler,
    EventName,
    Listener,
)
from .validation import (
    is_event_name,
    require_error_handler,
    require_event_name,
    require_listener,
)
from .waiter import wait_for_event

logger = logging.getLogger(__name__)


def _log_failure(error: Exception, event_name: EventName, listener: Listener) -> None:
    logger.error(
        "Listener %s failed on '%s': %s",
        describe_listener(listener), format_event_name(event_name), error,
        exc_info=error
    )


def _ignore_failure(error: Exception, event_name: EventName, listener: Listener) -> None:
    pass


class SafeEmitter:
    """Event emitter with bounded listener lists and funneled failures.

    Args:
        config: Emitter configuration (capacity, default error logging)
        loop: Event loop used to schedule dispatch passes and once() timers.
            Defaults to the loop running at call time.
    """

    default_max_listeners = DEFAULT_MAX_LISTENERS

    def __init__(
        self,
        config: Optional[EmitterConfig] = None,
        *,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        config = config or EmitterConfig(max_listeners=type(self).default_max_listeners)
        self._registry = ListenerRegistry(type(self).default_max_listeners)
        self.set_max_listeners(config.max_listeners)
        self._error_handler: ErrorHandler = _log_failure if config.log_errors else _ignore_failure
        self._dispatcher = Dispatcher(self._report_failure)
        self._loop = loop

    @classmethod
    def from_config(cls, app_config: AppConfig, **kwargs) -> 'SafeEmitter':
        """Create an emitter from the emitter section of an AppConfig."""
        return cls(app_config.emitter, **kwargs)

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def _emit_meta(self, meta_event: str, event_name: EventName, listener: Listener) -> None:
        """Emit a registry meta-event; skipped when no loop could run it."""
        if self._dispatcher.meta_suppressed:
            return
        listeners = self._registry.snapshot(meta_event)
        if not listeners:
            return
        try:
            loop = self._get_loop()
        except RuntimeError:
            logger.debug(
                "No running event loop, '%s' for '%s' not emitted",
                meta_event, format_event_name(event_name)
            )
            return
        self._dispatcher.schedule(loop, meta_event, listeners, (event_name, listener))

    # --- ERROR FUNNELING ---

    def catch(self, error_handler: ErrorHandler) -> 'SafeEmitter':
        """Install the handler receiving (error, event_name, listener).

        Returns:
            Self for method chaining
        """
        require_error_handler(error_handler)
        self._error_handler = error_handler
        return self

    def _report_failure(self, error: Exception, event_name: EventName, listener: Listener) -> None:
        try:
            self._error_handler(error, event_name, listener)
        except Exception:
            logger.exception(
                "Error handler failed while handling a failure of %s on '%s'",
                describe_listener(listener), format_event_name(event_name)
            )

        # Failures of 'error' listeners stop here
        if event_name != ERROR_EVENT:
            self.emit(ERROR_EVENT, error)

    # --- CAPACITY ---

    def get_max_listeners(self):
        """Maximum number of listeners that can be added to one event."""
        return self._registry.get_capacity()

    def set_max_listeners(self, max_listeners) -> None:
        """Set the maximum number of listeners per event.

        A negative value resets the limit to default_max_listeners.

        Raises:
            InvalidArgument: If max_listeners is not a number
        """
        self._registry.set_capacity(max_listeners, default=type(self).default_max_listeners)

    # --- REGISTRATION ---

    def on(self, event_name: EventName, listener: Listener) -> None:
        """Append a listener to the event named event_name.

        Raises:
            InvalidArgument: If event_name or listener is malformed
            CapacityExceeded: If the event already has the maximum of listeners
        """
        self._add(event_name, listener, at_front=False)

    def prepend_listener(self, event_name: EventName, listener: Listener) -> None:
        """Insert a listener before every listener of event_name.

        Raises:
            InvalidArgument: If event_name or listener is malformed
            CapacityExceeded: If the event already has the maximum of listeners
        """
        self._add(event_name, listener, at_front=True)

    def _add(self, event_name: EventName, listener: Listener, at_front: bool) -> None:
        require_event_name(event_name)
        require_listener(listener)

        self._registry.register(event_name, listener, at_front)
        self._emit_meta(NEW_LISTENER_EVENT, event_name, listener)

    def prepend_once_listener(self, *args, **kwargs):
        """Not implemented.

        Raises:
            UnsupportedOperation: Always
        """
        raise UnsupportedOperation("prepend_once_listener")

    def off(self, event_name: EventName, listener: Listener) -> bool:
        """Remove the first occurrence of listener from event_name.

        Returns:
            True if a listener was removed, False if none matched

        Raises:
            InvalidArgument: If event_name or listener is malformed
        """
        require_event_name(event_name)
        require_listener(listener)

        if not self._registry.contains(event_name, listener):
            return False

        self._emit_meta(REMOVE_LISTENER_EVENT, event_name, listener)
        return self._registry.unregister(event_name, listener)

    def remove_all_listeners(self, event_name: Optional[EventName] = None) -> None:
        """Remove every listener, or only those of event_name.

        Raises:
            InvalidArgument: If event_name is given but malformed
        """
        if event_name is not None:
            require_event_name(event_name)
        self._registry.clear(event_name)

    def once(self, event_name: EventName, timeout_ms: Optional[float] = None) -> asyncio.Future:
        """Wait for the next occurrence of event_name.

        Args:
            event_name: Event to wait for
            timeout_ms: Optional deadline in milliseconds

        Returns:
            Future resolved with the tuple of emitted arguments, or failed
            with EmitterTimeout once the deadline elapses

        Raises:
            InvalidArgument: If event_name or timeout_ms is malformed
        """
        return wait_for_event(self, event_name, timeout_ms, loop=self._loop)

    # --- INTROSPECTION ---

    def event_names(self) -> list[EventName]:
        """Event names with a listener list, in first-registration order."""
        return self._registry.names()

    def listener_count(self, event_name: EventName) -> int:
        """Number of listeners listening to event_name."""
        if not is_event_name(event_name):
            return 0
        return self._registry.count(event_name)

    def listeners(self, event_name: EventName) -> Optional[list[Listener]]:
        """Copy of the listeners of event_name.

        Returns:
            None if event_name was never registered (or was cleared),
            an empty list if all its listeners were removed with off()
        """
        if not is_event_name(event_name):
            return None
        return self._registry.listeners(event_name)

    def has_listener(self, event_name: EventName, listener: Listener) -> bool:
        """True if listener (or the same bound method) is registered on event_name."""
        if not is_event_name(event_name):
            return False
        return self._registry.contains(event_name, listener)

    # --- CONTROL FLOW ---

    def stop_propagation(self, event_name: EventName) -> None:
        """Stop the next dispatch pass of event_name before its next listener.

        Raises:
            InvalidArgument: If event_name is malformed
        """
        require_event_name(event_name)
        self._dispatcher.arm_breakpoint(event_name)

    # --- DISPATCH ---

    def emit(self, event_name: EventName, *args: Any) -> None:
        """Emit an event on the next loop iteration.

        The listener list is copied now; listeners added or removed before
        the pass runs only affect later emits. Listener failures are
        funneled to the error handler, never raised here.
        """
        if not is_event_name(event_name):
            return
        listeners = self._registry.snapshot(event_name)
        if not listeners:
            return
        self._dispatcher.schedule(self._get_loop(), event_name, listeners, args)

    def emit_and_wait(self, event_name: EventName, *args: Any) -> Awaitable[None]:
        """Emit an event and wait for every listener to complete, one by one.

        The listener list is copied when this is called, not when the
        returned coroutine is first awaited.
        """
        listeners = self._registry.snapshot(event_name) if is_event_name(event_name) else ()
        return self._dispatcher.run_sequential(event_name, listeners, args)

    async def drain(self) -> None:
        """Wait until async listeners started by emit() have settled."""
        await self._dispatcher.drain()

    # Aliases
    add_listener = on
    add_event_listener = on
    remove_listener = off
    remove_event_listener = off
    raw_listeners = listeners
