from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from core.models import DatasetMeta, Fixture, parse_instant


def test_parse_instant_variants() -> None:
    expected = datetime(2026, 3, 5, 3, 30, tzinfo=timezone.utc)
    assert parse_instant("2026-03-05T03:30:00Z") == expected
    assert parse_instant("2026-03-05T03:30:00.000Z") == expected
    assert parse_instant("2026-03-05T14:30:00+11:00") == expected
    # senza offset -> UTC
    assert parse_instant("2026-03-05T03:30:00") == expected


def test_parse_instant_truncates_to_milliseconds() -> None:
    assert parse_instant("2026-03-31T23:59:59.9995Z") == datetime(2026, 3, 31, 23, 59, 59, 999000, tzinfo=timezone.utc)


def test_parse_instant_out_of_range_offsets() -> None:
    assert parse_instant("0001-01-01T00:00:00+01:00") is None
    assert parse_instant("9999-12-31T23:30:00-01:00") is None
    assert parse_instant("0001-01-01T00:00:00Z") == datetime(1, 1, 1, tzinfo=timezone.utc)


def test_parse_instant_invalid() -> None:
    assert parse_instant("TBC") is None
    assert parse_instant("") is None
    assert parse_instant(None) is None
    assert parse_instant(12345) is None


def test_from_dict_tolerant() -> None:
    fx = Fixture.from_dict({"id": 7, "startTime": "2026-01-01T00:00:00Z", "opponent": None, "tv": "Fox"})
    assert fx.id == "7"
    assert fx.opponent == ""
    assert fx.status == "scheduled"
    assert fx.to_dict()["tv"] == "Fox"


def test_to_dict_preserves_raw_values() -> None:
    raw = {
        "id": "aus-ind-odi-1",
        "startTime": "not-a-date",
        "endTime": None,
        "format": "ODI",
        "opponent": "India",
        "homeAway": "home",
        "venue": "",
        "city": "Perth",
        "country": "Australia",
        "competition": "",
        "status": "cancelled",
    }
    assert Fixture.from_dict(raw).to_dict() == raw


def test_location_skips_empty_parts(make_fixture) -> None:
    assert make_fixture(venue="", city="Perth", country="").location == "Perth"
    assert make_fixture(venue="", city="", country="").location == ""


def test_fixture_is_immutable(make_fixture) -> None:
    fx = make_fixture()
    with pytest.raises(FrozenInstanceError):
        fx.opponent = "England"  # type: ignore[misc]


def test_dataset_meta() -> None:
    meta = DatasetMeta.from_dict({"generatedAt": "2026-02-01", "team": {"id": "aus", "name": "Australia"}})
    assert meta.to_dict() == {
        "generatedAt": "2026-02-01",
        "source": None,
        "team": {"id": "aus", "name": "Australia"},
    }


def test_to_dict_returns_record_as_is() -> None:
    raw = {"id": 42, "startTime": None, "format": "ODI", "opponent": "India"}
    fx = Fixture.from_dict(raw)
    assert fx.start_time == ""
    assert fx.status == "scheduled"
    assert fx.to_dict() == raw
    out = fx.to_dict()
    out["format"] = "Test"
    assert fx.to_dict()["format"] == "ODI"


def test_to_dict_without_source_record() -> None:
    fx = Fixture(id="x", start_time="2026-03-05T03:30:00Z", format="ODI")
    assert fx.to_dict()["startTime"] == "2026-03-05T03:30:00Z"
    assert fx.to_dict()["status"] == "scheduled"
