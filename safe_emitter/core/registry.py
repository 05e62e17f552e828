"""Ordered per-event listener registry with capacity enforcement."""

import logging
from typing import Optional

from ..config import DEFAULT_MAX_LISTENERS
from ..utils.formatters import describe_listener, format_event_name
from .errors import CapacityExceeded, InvalidArgument
from .types import EventName, Listener
from .validation import is_number

logger = logging.getLogger(__name__)


def is_same_listener(registered: Listener, candidate: Listener) -> bool:
    """Identity match; bound methods match on the same instance and function."""
    if registered is candidate:
        return True
    func = getattr(registered, '__func__', None)
    if func is None or func is not getattr(candidate, '__func__', None):
        return False
    return getattr(registered, '__self__', None) is getattr(candidate, '__self__', None)


class ListenerRegistry:
    """Mapping from event name to its ordered listener list.
    
    Lists are created lazily on first registration and keep their key even
    once emptied by removals, so an emptied name stays distinguishable from
    an unknown one. Only clear() forgets names.
    
    The capacity limit is shared by every event name of the registry and is
    checked strictly before insertion.
    """

    def __init__(self, max_listeners: int = DEFAULT_MAX_LISTENERS):
        self._lists: dict[EventName, list[Listener]] = {}
        self._max_listeners = DEFAULT_MAX_LISTENERS
        self.set_capacity(max_listeners)

    def register(self, event_name: EventName, listener: Listener, at_front: bool = False) -> None:
        """Insert a listener at the front or the back of its event list.
        
        Args:
            event_name: Event to listen to
            listener: Callable to register
            at_front: Insert before existing listeners instead of after
        
        Raises:
            CapacityExceeded: If the list is already full (nothing is mutated)
        """
        current = self._lists.get(event_name)
        count = len(current) if current is not None else 0
        if count + 1 > self._max_listeners:
            raise CapacityExceeded(self._max_listeners)

        if current is None:
            current = self._lists[event_name] = []
        if at_front:
            current.insert(0, listener)
        else:
            current.append(listener)

        logger.debug(
            "Registered %s on '%s' (%s, %d/%s)",
            describe_listener(listener), format_event_name(event_name),
            "front" if at_front else "back", len(current), self._max_listeners
        )

    def contains(self, event_name: EventName, listener: Listener) -> bool:
        return self._index_of(event_name, listener) is not None

    def _index_of(self, event_name: EventName, listener: Listener) -> Optional[int]:
        for index, registered in enumerate(self._lists.get(event_name, ())):
            if is_same_listener(registered, listener):
                return index
        return None

    def unregister(self, event_name: EventName, listener: Listener) -> bool:
        """Remove the first occurrence of a listener.
        
        Returns:
            False if the event name is unknown or the listener is not found
        """
        index = self._index_of(event_name, listener)
        if index is None:
            return False
        current = self._lists[event_name]
        del current[index]

        logger.debug(
            "Removed %s from '%s' (%d left)",
            describe_listener(listener), format_event_name(event_name), len(current)
        )
        return True

    def clear(self, event_name: Optional[EventName] = None) -> None:
        """Discard every list, or only the list of ``event_name``."""
        if event_name is None:
            self._lists = {}
            logger.debug("Cleared all listeners")
            return
        if self._lists.pop(event_name, None) is not None:
            logger.debug("Cleared listeners of '%s'", format_event_name(event_name))

    def count(self, event_name: EventName) -> int:
        return len(self._lists.get(event_name, ()))

    def names(self) -> list[EventName]:
        """Registered names in first-registration order."""
        return list(self._lists)

    def snapshot(self, event_name: EventName) -> tuple[Listener, ...]:
        """Immutable copy of a listener list; empty for unknown names."""
        return tuple(self._lists.get(event_name, ()))

    def listeners(self, event_name: EventName) -> Optional[list[Listener]]:
        """Copy of a listener list, or None if the name was never registered."""
        current = self._lists.get(event_name)
        if current is None:
            return None
        return list(current)

    def set_capacity(self, max_listeners, default: int = DEFAULT_MAX_LISTENERS) -> None:
        """Set the per-event listener limit.

        A negative value resets the limit to ``default`` instead of failing.

        Raises:
            InvalidArgument: If max_listeners is not a number
        """
        if not is_number(max_listeners):
            raise InvalidArgument("max_listeners should be a number")
        self._max_listeners = default if max_listeners < 0 else max_listeners

    def get_capacity(self):
        return self._max_listeners
