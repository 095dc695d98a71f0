"""Hierarchical status aggregation: assets, elements, segments and boards."""

from .asset import Asset, Position, PositionedAsset
from .attribute import Attribute
from .board import Board
from .condition import ElementCondition
from .element import Element
from .events import BoardChange, EventEmitter, PendingChange, SegmentChange, Subscription
from .geo import GeoSegment, point_in_polygon
from .segment import Segment
from .sorting import ConditionRowSorter, RowSorter

__all__ = [
    "Asset",
    "Attribute",
    "Board",
    "BoardChange",
    "ConditionRowSorter",
    "Element",
    "ElementCondition",
    "EventEmitter",
    "GeoSegment",
    "PendingChange",
    "Position",
    "PositionedAsset",
    "RowSorter",
    "Segment",
    "SegmentChange",
    "Subscription",
    "point_in_polygon",
]
