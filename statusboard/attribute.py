"""A single named, timestamped asset attribute."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from .events import AttributeChange, EventEmitter
from .utils import normalize_timestamp, utc_now


class Attribute(EventEmitter):
    """Named value with a default and the time of its last update.

    Emits ``changed`` with an :class:`AttributeChange` on every write, even
    when the new value equals the old one.
    """

    def __init__(self, name: str, default: Any = None) -> None:
        super().__init__()
        self._name = name
        self._default = default
        self._value: Any = None
        self._written = False
        self._timestamp: Optional[datetime] = None

    def __repr__(self) -> str:
        return f"Attribute(name={self._name!r}, value={self.value!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def default(self) -> Any:
        return self._default

    @property
    def value(self) -> Any:
        return self._value if self._written else self._default

    @value.setter
    def value(self, value: Any) -> None:
        self.set_value(value)

    @property
    def timestamp(self) -> Optional[datetime]:
        return self._timestamp

    def set_value(self, value: Any, timestamp: datetime | date | str | None = None) -> None:
        resolved = utc_now() if timestamp is None else normalize_timestamp(timestamp)
        old_value = self.value
        self._value = value
        self._written = True
        self._timestamp = resolved
        self.emit("changed", AttributeChange(self._name, old_value, value))
