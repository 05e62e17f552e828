"""Shared types for the emitter core."""

from typing import Any, Callable, Union


class Symbol:
    """Opaque, unique event name token.

    Two symbols never compare equal unless they are the same object,
    whatever their description.
    """

    __slots__ = ('description',)

    def __init__(self, description: str = ""):
        self.description = description

    def __repr__(self) -> str:
        return f"Symbol({self.description})"


EventName = Union[str, Symbol]
Listener = Callable[..., Any]
ErrorHandler = Callable[[Exception, EventName, Listener], Any]

# Meta-events emitted by the emitter itself
NEW_LISTENER_EVENT = "newListener"
REMOVE_LISTENER_EVENT = "removeListener"
ERROR_EVENT = "error"

REGISTRY_META_EVENTS = frozenset({NEW_LISTENER_EVENT, REMOVE_LISTENER_EVENT})
