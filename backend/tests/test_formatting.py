"""Tests for display formatting helpers."""
from datetime import datetime, timezone

from globetrotter.utils.formatting import (
    epoch_millis,
    format_currency,
    group_digits_indian,
    round_half_up,
    safe_filename_stem,
)


class TestIndianGrouping:
    def test_small_numbers(self):
        assert group_digits_indian(0) == "0"
        assert group_digits_indian(999) == "999"

    def test_lakhs_and_crores(self):
        assert group_digits_indian(1000) == "1,000"
        assert group_digits_indian(100000) == "1,00,000"
        assert group_digits_indian(12345678) == "1,23,45,678"

    def test_negative(self):
        assert group_digits_indian(-150000) == "-1,50,000"


class TestCurrency:
    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.49) == 2

    def test_format_currency(self):
        assert format_currency(1500) == "₹1,500"
        assert format_currency(99999.5) == "₹1,00,000"
        assert format_currency(10, "$") == "$10"


class TestFilenames:
    def test_safe_stem(self):
        assert safe_filename_stem("Trip: Goa/Kerala 2024") == "Trip__Goa_Kerala_2024"

    def test_epoch_millis(self):
        assert epoch_millis(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)) == 1000
