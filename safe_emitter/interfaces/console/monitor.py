"""Console monitor for emitter meta-events.

This module renders registry mutations and listener failures on a rich
console by subscribing to the emitter's own meta-events.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from ...core import (
    ERROR_EVENT,
    NEW_LISTENER_EVENT,
    REMOVE_LISTENER_EVENT,
    SafeEmitter,
    is_same_listener,
)
from ...utils import describe_listener, format_event_name


class EmitterMonitor:
    """Prints one line per newListener / removeListener / error occurrence.
    
    Its own subscriptions are not reported, and it keeps running counters:
    - added: listeners registered while attached
    - removed: listeners removed while attached
    - errors: listener failures observed while attached
    
    Example:
        monitor = EmitterMonitor()
        monitor.attach(emitter)
        ...
        monitor.detach()
    """
    
    def __init__(self, console: Optional[Console] = None):
        """Initialize monitor.
        
        Args:
            console: Console to write to (defaults to stdout)
        """
        self.console = console or Console()
        self.emitter: Optional[SafeEmitter] = None
        self.added = 0
        self.removed = 0
        self.errors = 0
        self._handlers = {
            NEW_LISTENER_EVENT: self._on_new_listener,
            REMOVE_LISTENER_EVENT: self._on_remove_listener,
            ERROR_EVENT: self._on_error,
        }
    
    def attach(self, emitter: SafeEmitter):
        """Subscribe to the meta-events of an emitter.
        
        Args:
            emitter: Emitter to observe
        
        Raises:
            RuntimeError: If already attached to an emitter
        """
        if self.emitter is not None:
            raise RuntimeError("EmitterMonitor is already attached")
        self.emitter = emitter
        for event_name, handler in self._handlers.items():
            emitter.on(event_name, handler)
    
    def detach(self):
        """Unsubscribe from the observed emitter, if any."""
        if self.emitter is None:
            return
        emitter, self.emitter = self.emitter, None
        for event_name, handler in self._handlers.items():
            emitter.off(event_name, handler)
    
    def _is_own(self, listener) -> bool:
        return any(is_same_listener(handler, listener) for handler in self._handlers.values())
    
    def _on_new_listener(self, event_name, listener):
        if self._is_own(listener):
            return
        self.added += 1
        self.console.print(
            f"[green]+[/] {escape(format_event_name(event_name))} "
            f"[dim]{escape(describe_listener(listener))}[/]",
            highlight=False,
        )
    
    def _on_remove_listener(self, event_name, listener):
        if self._is_own(listener):
            return
        self.removed += 1
        self.console.print(
            f"[yellow]-[/] {escape(format_event_name(event_name))} "
            f"[dim]{escape(describe_listener(listener))}[/]",
            highlight=False,
        )
    
    def _on_error(self, error):
        self.errors += 1
        self.console.print(
            f"[bold red]❗️{type(error).__name__}:[/] {escape(str(error))}",
            highlight=False,
        )
