"""Assets: identified bags of attributes fed into a board."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from numbers import Real
from typing import Any, ClassVar, Dict, List, NamedTuple, Optional

from .attribute import Attribute
from .errors import InvalidId, InvalidInput, UnknownAttribute
from .utils import get_path, has_path, iso


class Position(NamedTuple):
    """WGS84 coordinates: degrees for lat/lon, meters for altitude."""

    lat: float
    lon: float
    alt: float


def valid_id(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


class Asset:
    """An identified external fact to be summarized on a board.

    Attributes are declared at construction time with their default values;
    only declared attributes can be written afterwards.
    """

    #: Element tag the board factory uses when no static element pairs.
    element_type: ClassVar[Optional[str]] = None

    def __init__(self, id: str, **defaults: Any) -> None:
        if not valid_id(id):
            raise InvalidId()
        self._id = id
        self._attributes: Dict[str, Attribute] = {
            name: Attribute(name, default) for name, default in defaults.items()
        }

    def __str__(self) -> str:
        return f"{type(self).__name__}{{id={self._id}}}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r})"

    @property
    def id(self) -> str:
        return self._id

    @property
    def position(self) -> Optional[Position]:
        return None

    @property
    def attribute_names(self) -> List[str]:
        return list(self._attributes)

    def add_attribute(self, attribute: Attribute) -> None:
        if not isinstance(attribute, Attribute):
            raise InvalidInput("Attribute must be an instance of Attribute.")
        self._attributes[attribute.name] = attribute

    def get_attribute(self, name: str) -> Optional[Attribute]:
        return self._attributes.get(name)

    def p(self, name: str) -> Any:
        attribute = self._attributes.get(name)
        return attribute.value if attribute else None

    def set_value(
        self, name: str, value: Any, timestamp: datetime | date | str | None = None
    ) -> None:
        attribute = self._attributes.get(name)
        if attribute is None:
            raise UnknownAttribute(name)
        attribute.set_value(value, timestamp)

    def update_from(self, obj: Mapping, reverse_keyed: bool = False) -> None:
        """Write every declared attribute found in ``obj``.

        By default declared names are looked up as top-level keys. With
        ``reverse_keyed`` each declared name is treated as a dotted path into
        ``obj`` (``"position.lat"``). Missing keys and undeclared keys are
        skipped.
        """
        if not isinstance(obj, Mapping):
            raise InvalidInput("Input must be a valid object.")
        for name in list(self._attributes):
            if reverse_keyed:
                if has_path(obj, name):
                    self.set_value(name, get_path(obj, name))
            elif name in obj:
                self.set_value(name, obj[name])

    def as_dict(self) -> Dict[str, Any]:
        return {name: attribute.value for name, attribute in self._attributes.items()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self._id,
            "attributes": [
                {
                    "name": name,
                    "value": attribute.value,
                    "timestamp": iso(attribute.timestamp),
                }
                for name, attribute in self._attributes.items()
                if attribute.value is not None
            ],
        }


class PositionedAsset(Asset):
    """Asset whose ``position`` attribute holds ``{"lat", "lon", "alt"}``."""

    def __init__(self, id: str, **defaults: Any) -> None:
        defaults.setdefault("position", None)
        super().__init__(id, **defaults)

    @property
    def position(self) -> Optional[Position]:
        raw = self.p("position")
        if not isinstance(raw, Mapping):
            return None
        lat, lon = raw.get("lat"), raw.get("lon")
        alt = raw.get("alt")
        if alt is None:
            alt = 0.0
        if not all(isinstance(v, Real) and not isinstance(v, bool) for v in (lat, lon, alt)):
            return None
        return Position(float(lat), float(lon), float(alt))
