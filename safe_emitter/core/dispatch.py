"""Dispatch engine: runs listener snapshots with per-listener failure isolation.

Two protocols share the same snapshot-then-iterate discipline:

- run_pass() is the fire-and-continue protocol behind emit(). It is scheduled
  on the event loop, never run inside the emitting caller's stack. Sync
  listeners run inside a failure boundary; awaitables returned by async
  listeners are spawned as tasks whose failures are reported when they settle.
- run_sequential() is the fire-and-await protocol behind emit_and_wait().
  Every listener is awaited before the next one starts.

Every failure goes to a single report_failure callable. Breakpoints armed
with arm_breakpoint() truncate the next pass over their event name.
"""

import asyncio
import functools
import inspect
import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from ..utils.formatters import describe_listener, format_event_name
from .types import REGISTRY_META_EVENTS, EventName, Listener

logger = logging.getLogger(__name__)

FailureReporter = Callable[[Exception, EventName, Listener], None]


class Dispatcher:
    """Executes listener snapshots and funnels their failures.

    Args:
        report_failure: Called with (error, event_name, listener) for every
            failing listener, sync or async
    """

    def __init__(self, report_failure: FailureReporter):
        self._report_failure = report_failure
        self._breakpoints: set[EventName] = set()
        self._pending: set[asyncio.Future] = set()
        self._meta_depth = 0

    # --- BREAKPOINTS ---

    def arm_breakpoint(self, event_name: EventName) -> None:
        """Arm a single-use breakpoint; arming twice does not stack."""
        self._breakpoints.add(event_name)

    def has_breakpoint(self, event_name: EventName) -> bool:
        return event_name in self._breakpoints

    def _consume_breakpoint(self, event_name: EventName) -> bool:
        if event_name not in self._breakpoints:
            return False
        self._breakpoints.discard(event_name)
        return True

    # --- META-EVENT SUPPRESSION ---

    @property
    def meta_suppressed(self) -> bool:
        """True while a newListener/removeListener listener is running."""
        return self._meta_depth > 0

    @contextmanager
    def _listener_scope(self, event_name: EventName) -> Iterator[None]:
        if event_name not in REGISTRY_META_EVENTS:
            yield
            return
        self._meta_depth += 1
        try:
            yield
        finally:
            self._meta_depth -= 1

    # --- FIRE-AND-CONTINUE ---

    def schedule(
        self,
        loop: asyncio.AbstractEventLoop,
        event_name: EventName,
        listeners: tuple[Listener, ...],
        args: tuple[Any, ...],
    ) -> asyncio.Handle:
        """Run a pass over ``listeners`` on the next loop iteration."""
        return loop.call_soon(self.run_pass, event_name, listeners, args)

    def run_pass(
        self,
        event_name: EventName,
        listeners: tuple[Listener, ...],
        args: tuple[Any, ...],
    ) -> None:
        logger.debug(
            "Dispatching '%s' to %d listeners", format_event_name(event_name), len(listeners)
        )
        for index, listener in enumerate(listeners):
            if self._consume_breakpoint(event_name):
                logger.debug(
                    "Breakpoint on '%s' consumed, %d listeners skipped",
                    format_event_name(event_name), len(listeners) - index
                )
                break

            try:
                with self._listener_scope(event_name):
                    result = listener(*args)
            except Exception as error:
                self._report_failure(error, event_name, listener)
                continue

            if inspect.isawaitable(result):
                self._spawn_tail(event_name, listener, result)

    def _spawn_tail(self, event_name: EventName, listener: Listener, awaitable) -> None:
        task = asyncio.ensure_future(awaitable)
        self._pending.add(task)
        task.add_done_callback(functools.partial(self._on_tail_done, event_name, listener))

    def _on_tail_done(self, event_name: EventName, listener: Listener, task: asyncio.Future) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.debug(
                "Async listener %s on '%s' was cancelled",
                describe_listener(listener), format_event_name(event_name)
            )
            return
        error = task.exception()
        if isinstance(error, Exception):
            self._report_failure(error, event_name, listener)

    @property
    def pending_count(self) -> int:
        """Number of async listener tails still running."""
        return len(self._pending)

    async def drain(self) -> None:
        """Wait until every async tail spawned so far has settled."""
        while True:
            running = [task for task in self._pending if not task.done()]
            if not running:
                return
            await asyncio.wait(running)

    # --- FIRE-AND-AWAIT ---

    async def run_sequential(
        self,
        event_name: EventName,
        listeners: tuple[Listener, ...],
        args: tuple[Any, ...],
    ) -> None:
        logger.debug(
            "Dispatching '%s' sequentially to %d listeners",
            format_event_name(event_name), len(listeners)
        )
        for index, listener in enumerate(listeners):
            if self._consume_breakpoint(event_name):
                logger.debug(
                    "Breakpoint on '%s' consumed, %d listeners skipped",
                    format_event_name(event_name), len(listeners) - index
                )
                break

            try:
                with self._listener_scope(event_name):
                    result = listener(*args)
                if inspect.isawaitable(result):
                    await result
            except Exception as error:
                self._report_failure(error, event_name, listener)
