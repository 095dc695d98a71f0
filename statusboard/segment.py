"""Segments: positionally stable owners of assets and their elements."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from .asset import Asset, valid_id
from .element import Element
from .errors import ConfigurationError, InvalidId, TypeNotAccepted, WrongAssetType
from .events import EventEmitter, SegmentChange, Subscription
from .sorting import RowSorter
from .utils import checksum, split_tag

LOGGER = logging.getLogger("statusboard.segment")


class Segment(EventEmitter):
    """Ordered container of elements plus the assets paired with them.

    ``elements`` is an arena: a slot keeps its index for as long as it is
    occupied, a pruned element leaves ``None`` behind, and the next
    manufactured element takes the first vacant slot. The list length is a
    high-water mark, not a live count.

    Emits ``changed`` with a :class:`SegmentChange` whose ``index`` is the
    element's slot.
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None, board: Any = None) -> None:
        super().__init__()
        if board is None or not callable(getattr(board, "element_factory", None)):
            raise ConfigurationError(
                "A valid Board instance must be provided to the Segment constructor."
            )
        config = config or {}
        self._name: str = config.get("name") or "Segment"
        self._board = board
        self._assets: List[Asset] = []
        self._elements: List[Optional[Element]] = []
        self._subscriptions: Dict[int, Subscription] = {}
        self._sorter = self._make_sorter(config.get("sorter"))

        for spec in config.get("elements") or []:
            tag, params = split_tag(spec, "Element")
            params["static"] = True
            element = board.element_factory(tag, **params)
            self._place(element)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def board(self) -> Any:
        return self._board

    @property
    def assets(self) -> List[Asset]:
        return list(self._assets)

    @property
    def elements(self) -> List[Optional[Element]]:
        return list(self._elements)

    @property
    def sorter(self) -> RowSorter:
        return self._sorter

    @property
    def checksum(self) -> int:
        return checksum(
            element.summary if element is not None else "" for element in self._elements
        )

    def find_asset(self, asset_id: str) -> Optional[Asset]:
        if not valid_id(asset_id):
            raise InvalidId()
        for asset in self._assets:
            if asset.id == asset_id:
                return asset
        return None

    def admits(self, asset: Asset) -> bool:
        """Acceptance policy consulted before an asset is stored."""
        return True

    def accept(self, asset: Asset) -> bool:
        """Take ownership of ``asset`` and pair it with an element.

        Static elements are offered the asset first, in slot order. If none
        of them pairs, the board manufactures a new element for it.
        Returns False when the policy rejects the asset or its ID is taken.
        """
        if not isinstance(asset, Asset):
            raise WrongAssetType("Only instances of Asset can be added.")
        if not self.admits(asset):
            return False
        if self.find_asset(asset.id) is not None:
            LOGGER.warning("Segment %s already holds asset %s", self._name, asset.id)
            return False

        element = next(
            (
                candidate
                for candidate in self._elements
                if candidate is not None and candidate.static and candidate.pair(asset, test=True)
            ),
            None,
        )
        if element is None:
            # the factory may raise; nothing is stored until it succeeds
            element = self._board.element_factory(asset)
            self._place(element)

        self._assets.append(asset)
        if not element.pair(asset):
            self._assets.remove(asset)
            self._prune()
            raise TypeNotAccepted(f"{element} refused asset {asset}.")
        LOGGER.debug(
            "Asset %s paired with %s at slot %d of %s",
            asset.id,
            "static element" if element.static else "new element",
            self._index_of(element),
            self._name,
        )
        return True

    def release(self, asset_id: str) -> bool:
        """Drop the asset, unpair its element and prune vacated elements."""
        if not valid_id(asset_id):
            raise InvalidId()
        asset = self.find_asset(asset_id)
        if asset is None:
            return False
        self._assets.remove(asset)

        for element in self._elements:
            if element is not None and element.asset is asset:
                element.unpair()
                break
        self._prune()
        return True

    def rows(self) -> List[List[int]]:
        """Occupied slot indices bucketed by the configured row sorter."""
        buckets: List[List[int]] = [[] for _ in range(self._sorter.rows)]
        for index, element in enumerate(self._elements):
            if element is not None:
                buckets[self._sorter.sort(element)].append(index)
        return buckets

    def _make_sorter(self, tag: Optional[str]) -> RowSorter:
        if not tag:
            return RowSorter()
        factory = getattr(self._board, "sorter_factory", None)
        if factory is None:
            raise ConfigurationError(f"Board cannot build sorter '{tag}'.")
        return factory(tag)

    def _place(self, element: Element) -> int:
        if not isinstance(element, Element):
            raise ConfigurationError("Only instances of Element can be added.")
        if element in self._elements:
            raise ConfigurationError("Element already exists in the segment.")
        try:
            index = self._elements.index(None)
            self._elements[index] = element
        except ValueError:
            index = len(self._elements)
            self._elements.append(element)
        self._subscriptions[index] = element.subscribe("changed", self._relay)
        return index

    def _prune(self) -> None:
        for index, element in enumerate(self._elements):
            if element is None or element.static or element.paired:
                continue
            # a pruned element is discarded; detach everyone still listening to it
            self._subscriptions.pop(index, None)
            element.clear_listeners()
            self._elements[index] = None
            LOGGER.debug("Pruned element at slot %d of %s", index, self._name)
            self.emit("changed", SegmentChange(self, None, "", index))

    def _relay(self, element: Element) -> None:
        index = self._index_of(element)
        if index is None:
            return
        self.emit("changed", SegmentChange(self, element, element.summary, index))

    def _index_of(self, element: Element) -> Optional[int]:
        for index, candidate in enumerate(self._elements):
            if candidate is element:
                return index
        return None
