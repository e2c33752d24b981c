"""Unit tests for route-info text formatting."""

from courtnav.domain.formatting import format_distance, format_duration


class TestFormatDistance:
    def test_meters_under_one_km(self):
        assert format_distance(850.4) == "850 m"

    def test_rounds_half_up(self):
        assert format_distance(12.5) == "13 m"

    def test_zero(self):
        assert format_distance(0) == "0 m"

    def test_exactly_one_km_switches_to_km(self):
        assert format_distance(1000) == "1.0 km"

    def test_km_one_decimal(self):
        assert format_distance(109_505) == "109.5 km"


class TestFormatDuration:
    def test_minutes_rounded_up(self):
        assert format_duration(181) == "4 min"

    def test_just_under_an_hour(self):
        assert format_duration(59 * 60) == "59 min"

    def test_exactly_an_hour(self):
        assert format_duration(3600) == "1 hr 0 min"

    def test_hours_and_minutes(self):
        assert format_duration(219 * 60) == "3 hr 39 min"
