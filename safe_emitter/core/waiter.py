"""Wait bridge turning a one-shot event into an awaitable future."""

import asyncio
import logging
from typing import Optional

from ..utils.formatters import format_event_name
from .errors import EmitterTimeout
from .types import EventName
from .validation import require_event_name, require_timeout

logger = logging.getLogger(__name__)


def wait_for_event(
    emitter,
    event_name: EventName,
    timeout_ms: Optional[float] = None,
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> asyncio.Future:
    """Register a one-time listener and return a future of its arguments.

    The first of three outcomes wins and disarms the others:
    - the event fires: the listener removes itself, the timer is cancelled
      and the future resolves to the tuple of emitted arguments;
    - the timer expires: the listener is removed and the future fails with
      EmitterTimeout;
    - the caller cancels the future: listener and timer are both removed.

    Args:
        emitter: SafeEmitter to listen on
        event_name: Event to wait for
        timeout_ms: Optional deadline in milliseconds
        loop: Event loop owning the future and the timer (defaults to the
            running loop)

    Returns:
        Future resolved with a tuple of the positional emit arguments

    Raises:
        InvalidArgument: If event_name or timeout_ms is malformed
        CapacityExceeded: If the event already has the maximum of listeners
    """
    require_event_name(event_name)
    if timeout_ms is not None:
        require_timeout(timeout_ms)

    loop = loop or asyncio.get_running_loop()
    future = loop.create_future()
    timer: Optional[asyncio.TimerHandle] = None

    def resolve(*args):
        if future.done():
            return
        emitter.off(event_name, resolve)
        if timer is not None:
            timer.cancel()
        future.set_result(args)

    def expire():
        if future.done():
            return
        emitter.off(event_name, resolve)
        logger.debug(
            "once('%s') timed out after %sms", format_event_name(event_name), timeout_ms
        )
        future.set_exception(EmitterTimeout(event_name, timeout_ms))

    def on_cancelled(fut: asyncio.Future):
        if not fut.cancelled():
            return
        if timer is not None:
            timer.cancel()
        if emitter.has_listener(event_name, resolve):
            emitter.off(event_name, resolve)

    emitter.on(event_name, resolve)
    if timeout_ms is not None:
        timer = loop.call_later(timeout_ms / 1000, expire)
    future.add_done_callback(on_cancelled)

    return future
