"""Rich table rendering of an emitter's listener registry."""

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .formatters import describe_listener, format_event_name


def build_listener_table(emitter) -> Table:
    """Build a table with one row per registered event name.
    
    Args:
        emitter: SafeEmitter to inspect
        
    Returns:
        rich Table with event name, listener count, capacity and listeners
    """
    capacity = emitter.get_max_listeners()
    table = Table(title="Registered listeners", box=box.SIMPLE_HEAVY)
    table.add_column("Event", style="cyan", no_wrap=True)
    table.add_column("Count", justify="right")
    table.add_column("Capacity", justify="right")
    table.add_column("Listeners", style="green")

    for event_name in emitter.event_names():
        listeners = emitter.listeners(event_name) or []
        count = len(listeners)
        count_style = "bold red" if count >= capacity else ""
        table.add_row(
            escape(format_event_name(event_name)),
            f"[{count_style}]{count}[/]" if count_style else str(count),
            str(capacity),
            escape(", ".join(describe_listener(listener) for listener in listeners)) or "-",
        )

    return table


def print_listener_table(emitter, console: Optional[Console] = None) -> None:
    """Print the listener table of an emitter.
    
    Args:
        emitter: SafeEmitter to inspect
        console: Console to print to (defaults to a new stdout console)
    """
    (console or Console()).print(build_listener_table(emitter))
