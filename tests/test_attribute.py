from datetime import date, datetime, timedelta, timezone

import pytest

from statusboard import Attribute
from statusboard.errors import InvalidTimestamp, ValidationError


def test_attribute_reads_default_until_written():
    attribute = Attribute("status", "idle")
    assert attribute.name == "status"
    assert attribute.value == "idle"
    assert attribute.timestamp is None


def test_attribute_value_setter_stamps_now():
    attribute = Attribute("status", "idle")
    before = datetime.now(tz=timezone.utc).replace(tzinfo=None) - timedelta(seconds=1)
    attribute.value = "busy"
    assert attribute.value == "busy"
    assert attribute.timestamp >= before


def test_attribute_written_none_is_not_replaced_by_default():
    attribute = Attribute("status", "idle")
    attribute.set_value(None)
    assert attribute.value is None


def test_attribute_accepts_datetime_date_and_iso_strings():
    attribute = Attribute("status")
    attribute.set_value("a", datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc))
    assert attribute.timestamp == datetime(2025, 1, 1, 12, 0)

    attribute.set_value("b", "2025-01-01T14:00:00+02:00")
    assert attribute.timestamp == datetime(2025, 1, 1, 12, 0)

    attribute.set_value("c", "2025-03-04T05:06:07Z")
    assert attribute.timestamp == datetime(2025, 3, 4, 5, 6, 7)

    attribute.set_value("d", date(2025, 6, 1))
    assert attribute.timestamp == datetime(2025, 6, 1)


@pytest.mark.parametrize("bad", ["not a date", 12345, object()])
def test_attribute_rejects_invalid_timestamps(bad):
    attribute = Attribute("status", "idle")
    with pytest.raises(InvalidTimestamp):
        attribute.set_value("busy", bad)
    assert attribute.value == "idle"
    assert attribute.timestamp is None


def test_invalid_timestamp_is_a_validation_error():
    assert issubclass(InvalidTimestamp, ValidationError)
    assert issubclass(InvalidTimestamp, ValueError)


def test_attribute_emits_on_every_write_even_when_unchanged():
    attribute = Attribute("status", "idle")
    seen = []
    attribute.subscribe("changed", seen.append)

    attribute.set_value("busy")
    attribute.set_value("busy")

    assert [(c.name, c.old_value, c.new_value) for c in seen] == [
        ("status", "idle", "busy"),
        ("status", "busy", "busy"),
    ]


def test_unsubscribed_handler_stops_receiving():
    attribute = Attribute("status")
    seen = []
    subscription = attribute.subscribe("changed", seen.append)
    attribute.value = 1
    assert attribute.unsubscribe(subscription) is True
    assert attribute.unsubscribe(subscription) is False
    attribute.value = 2
    assert len(seen) == 1
