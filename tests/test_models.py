import uuid

import pytest

from timelogger.models import (
    TimeEntry,
    format_clock,
    format_duration,
    format_total,
    round_minutes,
)


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "0s"),
        (45, "45s"),
        (60, "1m 00s"),
        (1830, "30m 30s"),
        (3600, "1h 00m 00s"),
        (3725, "1h 02m 05s"),
        (5400, "1h 30m 00s"),
    ],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0m"), (59, "0m"), (90, "1m"), (3599, "59m"), (3790, "1h 03m"), (36000, "10h 00m")],
)
def test_format_total_floors_minutes(seconds, expected):
    assert format_total(seconds) == expected


def test_format_clock():
    assert format_clock(0) == "00:00:00"
    assert format_clock(3725) == "01:02:05"


@pytest.mark.parametrize(
    "seconds, expected",
    [(45, 0.75), (1, 0.02), (30, 0.5), (1830, 30.5), (100, 1.67), (3790, 63.17)],
)
def test_round_minutes_half_up(seconds, expected):
    assert round_minutes(seconds) == expected


def test_entry_ids_are_unique_and_stable():
    first = TimeEntry(name="A", duration_seconds=5)
    second = TimeEntry(name="A", duration_seconds=5)
    assert isinstance(first.id, uuid.UUID)
    assert first.id != second.id
    assert first.id == first.id


def test_entry_is_immutable():
    entry = TimeEntry(name="A", duration_seconds=5)
    with pytest.raises(AttributeError):
        entry.name = "B"  # type: ignore[misc]


def test_entry_name_is_trimmed():
    entry = TimeEntry(name="  A \t", duration_seconds=5)
    assert entry.name == "A"
    assert entry.to_export_dict()["name"] == "A"


def test_entry_rejects_invalid_values():
    with pytest.raises(ValueError):
        TimeEntry(name="   ", duration_seconds=5)
    with pytest.raises(ValueError):
        TimeEntry(name="A", duration_seconds=-1)


def test_entry_derived_values():
    entry = TimeEntry(name="Code review", duration_seconds=1830)
    assert entry.formatted_time == "30m 30s"
    assert entry.decimal_minutes == 30.5
    assert entry.to_export_dict() == {
        "name": "Code review",
        "minutes": 30.5,
        "formatted": "30m 30s",
    }
