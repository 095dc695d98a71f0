"""Color-coded condition carried by an element."""

from __future__ import annotations

from typing import Any, Dict

from .errors import InvalidCondition

VALID_CONDITIONS = ("green", "yellow", "red", "unknown")
SEVERITY = ("unknown", "green", "yellow", "red")


def _check(kind: str, value: Any) -> str:
    if not ElementCondition.validate_condition(value):
        raise InvalidCondition(
            f"Invalid {kind} '{value}' provided. Valid conditions are: {', '.join(VALID_CONDITIONS)}"
        )
    return value


def _check_message(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidCondition(f"Invalid message '{value}' provided. Message must be a string.")
    return value


class ElementCondition:
    def __init__(self, condition: str = "green", trend: str = "unknown", message: str = "") -> None:
        self._condition = _check("condition", condition)
        self._trend = _check("trend", trend)
        self._message = _check_message(message)

    @staticmethod
    def validate_condition(condition: Any) -> bool:
        return isinstance(condition, str) and condition in VALID_CONDITIONS

    @staticmethod
    def compare(a: "ElementCondition", b: "ElementCondition") -> int:
        """Negative when ``a`` is less severe than ``b``; trend breaks ties."""
        diff = SEVERITY.index(a.condition) - SEVERITY.index(b.condition)
        if diff:
            return diff
        return SEVERITY.index(a.trend) - SEVERITY.index(b.trend)

    @property
    def condition(self) -> str:
        return self._condition

    @condition.setter
    def condition(self, value: str) -> None:
        self._condition = _check("condition", value)

    @property
    def trend(self) -> str:
        return self._trend

    @trend.setter
    def trend(self, value: str) -> None:
        self._trend = _check("trend", value)

    @property
    def message(self) -> str:
        return self._message

    @message.setter
    def message(self, value: str) -> None:
        self._message = _check_message(value)

    def __str__(self) -> str:
        text = self._condition
        if self._trend != "unknown":
            text += f" ({self._trend})"
        if self._message:
            text += f": {self._message}"
        return text

    def __repr__(self) -> str:
        return f"ElementCondition({self._condition!r}, {self._trend!r}, {self._message!r})"

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": type(self).__name__,
            "condition": self._condition,
            "trend": self._trend,
            "message": self._message,
        }
