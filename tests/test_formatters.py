"""Tests for rfms_trip/formatters.py."""

from __future__ import annotations

import pytest

from rfms_trip.formatters import format_duration, format_minutes


class TestFormatDuration:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (3600, "01:00:00"),
            (59.9, "00:00:59"),
            (3723, "01:02:03"),
            (90061, "25:01:01"),
        ],
    )
    def test_formats(self, seconds, expected):
        assert format_duration(seconds) == expected

    @pytest.mark.parametrize("seconds", [None, 0, -5])
    def test_empty(self, seconds):
        assert format_duration(seconds) == "00:00:00"


class TestFormatMinutes:
    def test_under_an_hour(self):
        assert format_minutes(45) == "45m"

    def test_hours(self):
        assert format_minutes(125) == "2h 5m"
        assert format_minutes(60) == "1h 0m"
