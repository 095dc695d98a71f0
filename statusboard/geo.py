"""Segments bounded by a GeoJSON area."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterable, List, Optional, Tuple

from shapely.errors import ShapelyError
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

from .asset import Asset
from .errors import ConfigurationError
from .segment import LOGGER, Segment

Point = Tuple[float, float]
ContainsPredicate = Callable[[Mapping, Point], bool]

AREAL_TYPES = ("Polygon", "MultiPolygon")


def _geometries(geojson: Mapping) -> Iterable[Mapping]:
    kind = geojson.get("type")
    if kind == "Feature":
        geometry = geojson.get("geometry")
        if isinstance(geometry, Mapping):
            yield geometry
    elif kind == "FeatureCollection":
        for feature in geojson.get("features") or []:
            yield from _geometries(feature)
    else:
        yield geojson


def boundary_shapes(boundary: Mapping) -> List[BaseGeometry]:
    """Areal shapely geometries of a GeoJSON object, Features unwrapped."""
    try:
        shapes = [shape(geometry) for geometry in _geometries(boundary)]
    except (ShapelyError, ValueError, TypeError, KeyError, IndexError) as exc:
        raise ConfigurationError(f"Boundary must be a valid GeoJSON object: {exc}") from exc
    areal: List[BaseGeometry] = []
    for geometry in shapes:
        if geometry.geom_type == "GeometryCollection":
            areal.extend(part for part in geometry.geoms if part.geom_type in AREAL_TYPES)
        elif geometry.geom_type in AREAL_TYPES:
            areal.append(geometry)
    return areal


def _contains(shapes: List[BaseGeometry], point: Point) -> bool:
    location = ShapelyPoint(point)
    return any(geometry.contains(location) for geometry in shapes)


def point_in_polygon(boundary: Mapping, point: Point) -> bool:
    """True when the ``(lon, lat)`` point lies inside a polygon of ``boundary``."""
    return _contains(boundary_shapes(boundary), point)


class GeoSegment(Segment):
    """Segment that only admits assets positioned inside its boundary."""

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        board: Any = None,
        contains: Optional[ContainsPredicate] = None,
    ) -> None:
        config = config or {}
        boundary = config.get("boundary")
        if not isinstance(boundary, Mapping) or not boundary.get("type"):
            raise ConfigurationError("Boundary must be a valid GeoJSON object.")
        shapes = boundary_shapes(boundary)
        super().__init__(config, board)
        self._boundary = boundary
        self._shapes = shapes
        self._contains = contains

    @property
    def boundary(self) -> Mapping:
        return self._boundary

    def admits(self, asset: Asset) -> bool:
        position = asset.position
        if position is None:
            LOGGER.debug("%s rejected %s: no position", self.name, asset)
            return False
        point = (position.lon, position.lat)
        if self._contains is not None:
            return bool(self._contains(self._boundary, point))
        return _contains(self._shapes, point)
