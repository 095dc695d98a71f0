"""Row bucketing policies used when laying out a segment."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .element import Element
from .errors import InvalidInput

CONDITION_ROWS = {"green": 0, "unknown": 1, "yellow": 2, "red": 3}


class RowSorter:
    """Puts every element in a single row."""

    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        self.config = dict(config or {})

    @property
    def rows(self) -> int:
        return 1

    def sort(self, element: Element) -> int:
        self._check(element)
        return 0

    def _check(self, element: Any) -> None:
        if not isinstance(element, Element):
            raise InvalidInput(f"{type(self).__name__}.sort() requires an Element instance.")


class ConditionRowSorter(RowSorter):
    """Rows ordered green, unknown, yellow, red."""

    @property
    def rows(self) -> int:
        return len(CONDITION_ROWS)

    def sort(self, element: Element) -> int:
        self._check(element)
        return CONDITION_ROWS[element.condition.condition]
