from datetime import datetime

import pytest

from statusboard import Asset, Attribute, Position, PositionedAsset
from statusboard.errors import InvalidId, InvalidInput, UnknownAttribute


def test_asset_requires_non_empty_string_id():
    assert Asset("test-asset").id == "test-asset"
    for bad in ("", "   ", None, 42):
        with pytest.raises(InvalidId, match="Asset ID must be a non-empty string"):
            Asset(bad)


def test_asset_str_includes_class_and_id():
    class Pump(Asset):
        pass

    assert str(Pump("p-1")) == "Pump{id=p-1}"


def test_declared_attributes_get_and_set():
    asset = Asset("test-asset", name=None, status="active")
    assert asset.get_attribute("name").value is None
    assert asset.p("status") == "active"

    asset.set_value("name", "Test Asset Name")
    assert asset.p("name") == "Test Asset Name"

    stamp = datetime(2025, 5, 1, 8, 30)
    asset.set_value("name", "New Name", stamp)
    assert asset.get_attribute("name").timestamp == stamp


def test_unknown_attribute_lookup_and_write():
    asset = Asset("test-asset", name="Test Asset")
    assert asset.get_attribute("status") is None
    assert asset.p("status") is None
    with pytest.raises(UnknownAttribute, match='Attribute "status" does not exist'):
        asset.set_value("status", "active")


def test_add_attribute_requires_attribute_instance():
    asset = Asset("a")
    asset.add_attribute(Attribute("speed", 0))
    assert asset.attribute_names == ["speed"]
    with pytest.raises(InvalidInput):
        asset.add_attribute("speed")


def test_update_from_sets_declared_top_level_keys_only():
    asset = Asset("test-asset", name=None, status="active", location=None)
    asset.update_from(
        {
            "name": "Test Asset",
            "status": "inactive",
            "location": {"lat": 40.7128, "lon": -74.0060},
            "unknown": "ignored",
        }
    )
    assert asset.p("name") == "Test Asset"
    assert asset.p("status") == "inactive"
    assert asset.p("location") == {"lat": 40.7128, "lon": -74.0060}
    assert isinstance(asset.get_attribute("status").timestamp, datetime)
    assert asset.get_attribute("unknown") is None


def test_update_from_skips_missing_fields():
    asset = Asset("test-asset", name="Initial Name", status="active")
    asset.update_from({"status": "inactive"})
    assert asset.p("name") == "Initial Name"
    assert asset.get_attribute("name").timestamp is None
    assert asset.p("status") == "inactive"


def test_update_from_reverse_keyed_follows_dotted_paths():
    asset = Asset("test-asset", **{"name.x.y.z": "Billy", "position.lat": None, "missing.path": 1})
    asset.update_from({"name": {"x": {"y": {"z": "New Billy"}}}, "position": {"lat": 44.5}}, True)
    assert asset.p("name.x.y.z") == "New Billy"
    assert asset.p("position.lat") == 44.5
    assert asset.p("missing.path") == 1
    assert asset.get_attribute("missing.path").timestamp is None


@pytest.mark.parametrize("bad", [None, "not an object", 3, ["name"]])
def test_update_from_rejects_non_mappings(bad):
    with pytest.raises(InvalidInput, match="Input must be a valid object"):
        Asset("test-asset").update_from(bad)


def test_exported_values_round_trip_through_update_from():
    asset = Asset("a", name="n", status="active", count=3)
    asset.set_value("status", "inactive")
    exported = asset.as_dict()
    asset.update_from(exported)
    assert asset.as_dict() == exported


def test_to_dict_lists_valued_attributes_with_iso_timestamps():
    asset = Asset("test-asset", name="Test Asset", status="active", note=None)
    stamp = datetime(2025, 1, 2, 3, 4, 5)
    asset.set_value("name", "Test Asset", stamp)

    result = asset.to_dict()
    assert result["id"] == "test-asset"
    assert result["attributes"] == [
        {"name": "name", "value": "Test Asset", "timestamp": "2025-01-02T03:04:05.000Z"},
        {"name": "status", "value": "active", "timestamp": None},
    ]


def test_base_asset_has_no_position():
    assert Asset("a").position is None


def test_positioned_asset_reads_position_attribute():
    asset = PositionedAsset("p", position={"lat": 44.5, "lon": -123.3, "alt": 80})
    assert asset.position == Position(44.5, -123.3, 80.0)

    asset.set_value("position", {"lat": "north", "lon": 1, "alt": 0})
    assert asset.position is None

    asset.set_value("position", {"lon": 1})
    assert asset.position is None

    asset.set_value("position", None)
    assert asset.position is None


def test_positioned_asset_without_altitude_defaults_to_ground():
    asset = PositionedAsset("p", position={"lat": 1.0, "lon": 2.0, "alt": None})
    assert asset.position == Position(1.0, 2.0, 0.0)

    asset.set_value("position", {"lat": 1.0, "lon": 2.0})
    assert asset.position == Position(1.0, 2.0, 0.0)
