"""Synchronous publish/subscribe primitives and event payloads."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

Handler = Callable[..., None]

_TOKENS = itertools.count(1)


@dataclass(frozen=True, slots=True)
class Subscription:
    event: str
    handler: Handler
    token: int = field(default_factory=lambda: next(_TOKENS))


class EventEmitter:
    """Callback lists keyed by event name.

    Handlers run synchronously in subscription order on the caller's thread.
    Exceptions raised by a handler propagate to whoever triggered the emit.
    Handlers must not call ``accept``/``release`` on the segment that is
    currently dispatching to them.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Subscription]] = {}

    def subscribe(self, event: str, handler: Handler) -> Subscription:
        if not callable(handler):
            raise TypeError("Event handler must be callable")
        subscription = Subscription(event=event, handler=handler)
        self._listeners.setdefault(event, []).append(subscription)
        return subscription

    def unsubscribe(self, subscription: Optional[Subscription]) -> bool:
        if subscription is None:
            return False
        listeners = self._listeners.get(subscription.event, [])
        if subscription in listeners:
            listeners.remove(subscription)
            return True
        return False

    def emit(self, event: str, *args: Any) -> None:
        for subscription in list(self._listeners.get(event, ())):
            subscription.handler(*args)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def clear_listeners(self) -> None:
        self._listeners.clear()


@dataclass(frozen=True, slots=True)
class AttributeChange:
    name: str
    old_value: Any
    new_value: Any


@dataclass(frozen=True, slots=True)
class SegmentChange:
    segment: Any
    element: Any
    summary: str
    index: int


@dataclass(frozen=True, slots=True)
class PendingChange:
    segment_index: int
    element_index: int
    element: Any
    summary: str

    @property
    def key(self) -> tuple:
        return (self.segment_index, self.element_index)


@dataclass(frozen=True, slots=True)
class BoardChange:
    board: Any
    changes: List[PendingChange]
    checksums: Dict[int, int]
