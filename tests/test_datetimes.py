"""Tests for date/time parsing helpers."""

from datetime import datetime, timezone

from replica.datetimes import (
    format_display_dt,
    parse_flexible_dt,
    parse_local_dt,
    to_local_input_value,
    ts_from_dt,
    ts_from_local_dt,
)


def test_parse_local_dt():
    assert parse_local_dt('2024-05-06T07:08') == datetime(2024, 5, 6, 7, 8)


def test_parse_local_dt_rejects_other_shapes():
    assert parse_local_dt('06.05.2024 07:08') is None
    assert parse_local_dt('2024-13-01T00:00') is None
    assert parse_local_dt('') is None


def test_flexible_accepts_space_separator():
    assert parse_flexible_dt('2024-05-06 07:08') == datetime(2024, 5, 6, 7, 8)


def test_flexible_zoned_offsets():
    expected = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert parse_flexible_dt('2024-01-01T00:00:00Z') == expected
    assert parse_flexible_dt('2024-01-01T02:00:00+02:00') == expected
    assert parse_flexible_dt('2024-01-01T02:00:00+0200') == expected


def test_ts_helpers():
    assert ts_from_dt('2024-01-01T00:00Z') == 1704067200000
    assert ts_from_local_dt('2024-01-01T00:00') == int(datetime(2024, 1, 1).timestamp() * 1000)
    assert ts_from_local_dt('not a date') is None


def test_local_input_value_and_display():
    assert to_local_input_value(datetime(2024, 5, 6, 7, 8, 9)) == '2024-05-06T07:08'
    assert format_display_dt('2024-05-06T07:08') == '2024-05-06 07:08'
    assert format_display_dt('') == ''
