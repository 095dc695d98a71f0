"""Elements: opinionated, cached views paired with at most one asset."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional, Pattern, Union

from .asset import Asset
from .condition import ElementCondition
from .errors import ConfigurationError, NothingToUnpair, UnsupportedFormat
from .events import EventEmitter

LOGGER = logging.getLogger("statusboard.element")

Matcher = Union[str, Pattern[str]]

ANY_ASSET = re.compile(r".+")


class Element(EventEmitter):
    """Base class for everything a segment displays.

    An element is either static (configured up front, survives without an
    asset) or manufactured on demand for exactly one asset. Subclasses that
    react to asset attribute changes must call :meth:`dirty` whenever their
    :attr:`summary` may have changed; pairing and unpairing do it for them.

    Events:
        ``paired(element, asset)``, ``unpaired(element, asset)`` and
        ``changed(element)`` when the summary differs from the cached one.
    """

    def __init__(self, static: bool = False, asset_class_matcher: Optional[Matcher] = None) -> None:
        super().__init__()
        if not isinstance(static, bool):
            raise ConfigurationError(f"Element static flag must be a boolean, got {static!r}.")
        self._static = static
        self._matcher: Matcher = asset_class_matcher or ANY_ASSET
        self._asset: Optional[Asset] = None
        self._cached_summary: Optional[str] = None

    def __str__(self) -> str:
        asset = "none" if self._asset is None else str(self._asset)
        static = "static " if self._static else ""
        return f"{type(self).__name__}{{{static}for={self.asset_type} asset={asset}}}"

    def __repr__(self) -> str:
        return str(self)

    @property
    def static(self) -> bool:
        return self._static

    @property
    def asset(self) -> Optional[Asset]:
        return self._asset

    @property
    def paired(self) -> bool:
        return self._asset is not None

    @property
    def asset_class_matcher(self) -> Matcher:
        return self._matcher

    @property
    def asset_type(self) -> str:
        if self._asset is not None:
            return type(self._asset).__name__
        if isinstance(self._matcher, re.Pattern):
            return f"/{self._matcher.pattern}/"
        return self._matcher

    @property
    def condition(self) -> ElementCondition:
        return ElementCondition()

    @property
    def summary(self) -> str:
        """Cache key of the visual state; override alongside :meth:`render`."""
        return str(self)

    @property
    def cached_summary(self) -> Optional[str]:
        return self._cached_summary

    def accepts(self, asset: Asset) -> bool:
        return re.search(self._matcher, type(asset).__name__) is not None

    def dirty(self) -> bool:
        """Recompute the summary and emit ``changed`` if it moved."""
        summary = self.summary
        if summary == self._cached_summary:
            return False
        self._cached_summary = summary
        self.emit("changed", self)
        return True

    def pair(self, asset: Asset, test: bool = False) -> bool:
        """Bind ``asset``; with ``test`` only report whether it would be accepted."""
        if self._asset is not None:
            return False
        if not self.accepts(asset):
            return False
        if test:
            return True
        self._asset = asset
        LOGGER.debug("%s paired with %s", type(self).__name__, asset)
        self.emit("paired", self, asset)
        self.dirty()
        return True

    def unpair(self) -> Asset:
        if self._asset is None:
            raise NothingToUnpair()
        asset = self._asset
        self._asset = None
        LOGGER.debug("%s unpaired from %s", type(self).__name__, asset)
        self.emit("unpaired", self, asset)
        self.dirty()
        return asset

    def render(self, fmt: str = "text") -> Any:
        if fmt == "text":
            return str(self)
        if fmt == "object":
            return self.to_dict()
        raise UnsupportedFormat(fmt)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "static": self._static,
            "condition": self.condition.condition,
            "asset_type": self.asset_type,
            "summary": self.summary,
            "asset": "" if self._asset is None else str(self._asset),
        }
