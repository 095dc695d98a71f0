"""The board: routes assets to segments and coalesces their change events."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .asset import Asset, valid_id
from .element import Element
from .errors import (
    AssetRemovalFailed,
    ConfigurationError,
    DuplicateId,
    InvalidId,
    NoSegmentAccepted,
    NoSuchViewType,
    TypeNotAccepted,
    WrongAssetType,
)
from .events import BoardChange, EventEmitter, PendingChange, SegmentChange
from .geo import GeoSegment
from .segment import Segment
from .services.scheduler import SchedulerService
from .sorting import ConditionRowSorter, RowSorter
from .utils import split_tag

LOGGER = logging.getLogger("statusboard.board")

DEFAULT_MIN_INTERVAL = 0.5

ElementFactory = Callable[..., Element]


class Board(EventEmitter):
    """Top-level owner of segments.

    New assets go to the first segment that accepts them. Every segment
    ``changed`` event is buffered; at most once per ``min_interval`` seconds
    the buffer is collapsed (latest entry per ``(segment, slot)``) into one
    ``changed`` notification carrying a :class:`BoardChange` with the
    checksums of the segments that moved.
    """

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        element_types: Optional[Mapping[str, ElementFactory]] = None,
        segment_types: Optional[Mapping[str, type]] = None,
        sorters: Optional[Mapping[str, type]] = None,
        *,
        min_interval: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        config = config or {}
        self._name: str = config.get("name") or ""
        self._element_types: Dict[str, ElementFactory] = {}
        self._segment_types: Dict[str, type] = {}
        self._sorters: Dict[str, type] = {}
        self._views: Dict[str, str] = dict(config.get("views") or {})
        self._segments: List[Segment] = []

        self._clock = clock
        if min_interval is None:
            min_interval = config.get("min_interval", DEFAULT_MIN_INTERVAL)
        self.min_interval = float(min_interval)
        self._pending: List[PendingChange] = []
        self._last_emit = clock()
        self._lock = threading.RLock()
        # held from checksum snapshot to the end of dispatch
        self._emit_lock = threading.RLock()
        self._scheduler: Optional[SchedulerService] = None

        self.register_element_type("Element", Element)
        for tag, factory in (element_types or {}).items():
            self.register_element_type(tag, factory)
        self.register_segment_type("Segment", Segment)
        self.register_segment_type("GeoSegment", GeoSegment)
        for tag, cls in (segment_types or {}).items():
            self.register_segment_type(tag, cls)
        self.register_sorter("RowSorter", RowSorter)
        self.register_sorter("ConditionRowSorter", ConditionRowSorter)
        for tag, cls in (sorters or {}).items():
            self.register_sorter(tag, cls)

        for spec in config.get("segments") or []:
            self.add_segment(spec)

    def __repr__(self) -> str:
        return f"Board(name={self._name!r}, segments={len(self._segments)})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def segments(self) -> List[Segment]:
        return list(self._segments)

    @property
    def assets(self) -> List[Asset]:
        return [asset for segment in self._segments for asset in segment.assets]

    @property
    def element_types(self) -> Dict[str, ElementFactory]:
        return dict(self._element_types)

    @property
    def pending(self) -> List[PendingChange]:
        with self._lock:
            return list(self._pending)

    # ------------------------------------------------------------------
    # Registries
    # ------------------------------------------------------------------

    def register_element_type(self, tag: str, factory: ElementFactory) -> None:
        if not tag or not isinstance(tag, str):
            raise ConfigurationError("Element type tag must be a non-empty string.")
        if isinstance(factory, type):
            if not issubclass(factory, Element):
                raise ConfigurationError(f"Element type '{tag}' must inherit from Element.")
        elif not callable(factory):
            raise ConfigurationError(f"Element type '{tag}' must be a class or factory callable.")
        self._element_types[tag] = factory

    def register_segment_type(self, tag: str, cls: type) -> None:
        if not isinstance(cls, type) or not issubclass(cls, Segment):
            raise ConfigurationError(f"Segment class '{tag}' must be a Segment or inherit from Segment.")
        self._segment_types[tag] = cls

    def register_sorter(self, tag: str, cls: type) -> None:
        if not isinstance(cls, type) or not issubclass(cls, RowSorter):
            raise ConfigurationError(f"Sorter '{tag}' must inherit from RowSorter.")
        self._sorters[tag] = cls

    def sorter_factory(self, tag: str, config: Optional[Mapping[str, Any]] = None) -> RowSorter:
        cls = self._sorters.get(tag)
        if cls is None:
            raise ConfigurationError(f"Unable to find sorter type '{tag}'.")
        return cls(config)

    def element_type_for(self, asset: Asset) -> str:
        return asset.element_type or self._views.get(type(asset).__name__) or "Element"

    def element_factory(self, source: Asset | str, **params: Any) -> Element:
        """Build an element from a tag, or one guaranteed to pair with ``source``."""
        tag = self.element_type_for(source) if isinstance(source, Asset) else source
        factory = self._element_types.get(tag)
        if factory is None:
            LOGGER.error("Element type %s is not registered on board %s", tag, self._name)
            raise NoSuchViewType(tag)
        element = factory(**params)
        if not isinstance(element, Element):
            raise ConfigurationError(f"Factory for '{tag}' did not return an Element.")
        if isinstance(source, Asset) and not element.pair(source, test=True):
            raise TypeNotAccepted(f"Element type '{tag}' does not accept {type(source).__name__}.")
        element.dirty()
        return element

    def add_segment(self, spec: Mapping[str, Any]) -> Segment:
        tag, params = split_tag(spec, "Segment")
        cls = self._segment_types.get(tag)
        if cls is None:
            LOGGER.error("Segment type %s is not registered on board %s", tag, self._name)
            raise ConfigurationError(
                f"Unable to find segment type '{tag}', did you forget to register it with the board?"
            )
        segment = cls(params, self)
        index = len(self._segments)
        self._segments.append(segment)
        segment.subscribe("changed", lambda change: self._on_segment_change(index, change))
        return segment

    # ------------------------------------------------------------------
    # Assets
    # ------------------------------------------------------------------

    def find_asset(self, asset_id: str) -> Tuple[Optional[Segment], Optional[Asset]]:
        if not valid_id(asset_id):
            raise InvalidId()
        for segment in self._segments:
            asset = segment.find_asset(asset_id)
            if asset is not None:
                return segment, asset
        return None, None

    def add_asset(self, asset: Asset) -> Segment:
        if not isinstance(asset, Asset):
            raise WrongAssetType("Only instances of Asset can be added.")
        if self.find_asset(asset.id)[1] is not None:
            raise DuplicateId(asset.id)
        for segment in self._segments:
            if segment.accept(asset):
                LOGGER.info("Asset %s admitted to segment %s", asset.id, segment.name)
                return segment
        LOGGER.error("No segment of board %s accepted %s", self._name, asset)
        raise NoSegmentAccepted(asset)

    def remove_asset(self, asset_id: str) -> bool:
        segment, _ = self.find_asset(asset_id)
        if segment is None:
            return False
        if not segment.release(asset_id):
            raise AssetRemovalFailed(
                f"Segment {segment.name} failed to release asset {asset_id}."
            )
        LOGGER.info("Asset %s removed from segment %s", asset_id, segment.name)
        return True

    def clear_assets(self) -> None:
        for asset in self.assets:
            self.remove_asset(asset.id)

    # ------------------------------------------------------------------
    # Change coalescing
    # ------------------------------------------------------------------

    def _on_segment_change(self, segment_index: int, change: SegmentChange) -> None:
        with self._lock:
            self._pending.append(
                PendingChange(segment_index, change.index, change.element, change.summary)
            )
        self.flush()

    def flush(self) -> Optional[BoardChange]:
        """Emit the buffered changes if ``min_interval`` has elapsed.

        Notifications are dispatched one at a time: a flush on another thread
        waits until the handlers of the current one have returned, and only
        then snapshots checksums, so the last notification delivered always
        carries the newest state.
        """
        with self._emit_lock:
            notification = self._collect()
            if notification is None:
                return None
            LOGGER.debug("Board %s flushed %d change(s)", self._name, len(notification.changes))
            self.emit("changed", notification)
            return notification

    def _collect(self) -> Optional[BoardChange]:
        with self._lock:
            now = self._clock()
            if not self._pending or now - self._last_emit < self.min_interval:
                return None
            latest: Dict[tuple, PendingChange] = {}
            for change in self._pending:
                latest.pop(change.key, None)
                latest[change.key] = change
            changes = list(latest.values())
            touched = sorted({change.segment_index for change in changes})
            checksums = {index: self._segments[index].checksum for index in touched}
            self._pending.clear()
            self._last_emit = now
        return BoardChange(self, changes, checksums)

    def start(self, tick: Optional[float] = None) -> None:
        """Run :meth:`flush` periodically on a background thread."""
        if self._scheduler is not None:
            return
        tick = self.min_interval if tick is None else tick
        self._scheduler = SchedulerService(resolution=tick)
        self._scheduler.add_task("flush", 0.0, self.flush)
        self._scheduler.start()

    def stop(self) -> None:
        if self._scheduler is not None:
            self._scheduler.stop()
            self._scheduler = None
