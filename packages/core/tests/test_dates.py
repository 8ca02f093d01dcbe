"""Tests for timestamp parsing and relative time formatting."""

from datetime import datetime, timedelta, timezone

import pytest

from prboard_core.utils.dates import format_time_ago, parse_timestamp

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestParseTimestamp:
    def test_z_suffix(self):
        assert parse_timestamp("2024-06-01T12:00:00Z") == NOW

    def test_offset(self):
        assert parse_timestamp("2024-06-01T14:00:00+02:00") == NOW

    def test_naive_datetime_assumed_utc(self):
        assert parse_timestamp(datetime(2024, 6, 1, 12, 0)) == NOW

    def test_result_is_utc(self):
        assert parse_timestamp("2024-06-01T14:00:00+02:00").tzinfo == timezone.utc


@pytest.mark.parametrize(
    "delta,expected",
    [
        (timedelta(seconds=10), "just now"),
        (timedelta(minutes=1), "1 minute ago"),
        (timedelta(minutes=5), "5 minutes ago"),
        (timedelta(hours=1), "about 1 hour ago"),
        (timedelta(hours=5), "about 5 hours ago"),
        (timedelta(days=1), "1 day ago"),
        (timedelta(days=3), "3 days ago"),
        (timedelta(days=40), "about 1 month ago"),
        (timedelta(days=95), "3 months ago"),
        (timedelta(days=400), "about 1 year ago"),
        (timedelta(days=800), "2 years ago"),
    ],
)
def test_format_time_ago(delta, expected):
    assert format_time_ago(NOW - delta, NOW) == expected


def test_format_time_in_future():
    assert format_time_ago(NOW + timedelta(days=3), NOW) == "in 3 days"
