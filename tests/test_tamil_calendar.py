"""
tests/test_tamil_calendar.py

Covers:
  - Month reference data (12 months, fixed order)
  - Approximate conversion at month boundaries
  - Tamil New Year boundary and year offset
  - Date coercion (datetime, Timestamp, ISO strings, invalid input)
  - Formatting helpers
"""

from datetime import date, datetime, timedelta

import numpy as np
import pandas as pd
import pytest

from tamil_calendar import (
    TAMIL_MONTHS, InvalidDateError, as_date, format_dual_date, format_tamil_date,
    get_tamil_month, gregorian_to_tamil, tamil_year,
)


# ── Reference data ────────────────────────────────────────────────────────────

class TestMonths:

    def test_twelve_months(self):
        assert len(TAMIL_MONTHS) == 12

    def test_order_starts_at_chithirai(self):
        names = [m.english_name for m in TAMIL_MONTHS]
        assert names[0] == "Chithirai"
        assert names[9] == "Thai"
        assert names[-1] == "Panguni"

    def test_indices_match_position(self):
        assert [m.index for m in TAMIL_MONTHS] == list(range(12))

    def test_lookup_by_name(self):
        assert get_tamil_month("Thai").tamil_name == "தை"
        assert get_tamil_month("January") is None


# ── Approximate conversion ────────────────────────────────────────────────────

class TestApproximateConversion:

    @pytest.mark.parametrize("year", [1999, 2024, 2025, 2030])
    def test_april_14_is_chithirai_1(self, year):
        t = gregorian_to_tamil(date(year, 4, 14))
        assert t.month.english_name == "Chithirai"
        assert t.day == 1

    def test_april_13_is_end_of_panguni(self):
        t = gregorian_to_tamil(date(2024, 4, 13))
        assert t.month.english_name == "Panguni"
        assert t.day == 29

    def test_pongal_day_is_thai_2(self):
        t = gregorian_to_tamil(date(2024, 1, 15))
        assert t.month.english_name == "Thai"
        assert t.day == 2

    @pytest.mark.parametrize("greg, month, day", [
        (date(2024, 1, 13), "Maargazhi", 30),
        (date(2024, 1, 14), "Thai", 1),
        (date(2024, 2, 12), "Thai", 30),
        (date(2024, 2, 13), "Maasi", 1),
        (date(2024, 3, 15), "Panguni", 1),
        (date(2024, 5, 15), "Vaikaasi", 1),
        (date(2024, 6, 16), "Aani", 1),
        (date(2024, 7, 17), "Aadi", 1),
        (date(2024, 8, 18), "Aavani", 1),
        (date(2024, 9, 18), "Purattasi", 1),
        (date(2024, 10, 18), "Aippasi", 1),
        (date(2024, 11, 17), "Karthikai", 1),
        (date(2024, 12, 15), "Karthikai", 31),
        (date(2024, 12, 16), "Maargazhi", 1),
    ])
    def test_month_boundaries(self, greg, month, day):
        t = gregorian_to_tamil(greg)
        assert (t.month.english_name, t.day) == (month, day)

    def test_every_day_of_a_year_resolves(self):
        d = date(2024, 1, 1)
        while d.year == 2024:
            t = gregorian_to_tamil(d)
            assert t.month in TAMIL_MONTHS
            assert 1 <= t.day <= 31
            d += timedelta(days=1)

    def test_deterministic(self):
        assert gregorian_to_tamil(date(2024, 8, 1)) == gregorian_to_tamil(date(2024, 8, 1))

    def test_approximate_has_no_tithi(self):
        t = gregorian_to_tamil(date(2024, 8, 1))
        assert t.strategy == "approximate"
        assert t.tithi is None
        assert not t.is_amavasai


# ── Tamil year ────────────────────────────────────────────────────────────────

class TestTamilYear:

    @pytest.mark.parametrize("greg, expected", [
        (date(2024, 4, 14), 68),
        (date(2024, 5, 1), 68),
        (date(2024, 12, 31), 68),
        (date(2024, 4, 13), 67),
        (date(2024, 3, 1), 67),
        (date(2024, 1, 1), 67),
    ])
    def test_offset_around_new_year(self, greg, expected):
        assert tamil_year(greg) == expected
        assert gregorian_to_tamil(greg).year == expected


# ── Coercion ──────────────────────────────────────────────────────────────────

class TestAsDate:

    def test_date_passthrough(self):
        assert as_date(date(2024, 1, 15)) == date(2024, 1, 15)

    def test_datetime_and_timestamp(self):
        assert as_date(datetime(2024, 1, 15, 23, 59)) == date(2024, 1, 15)
        assert as_date(pd.Timestamp("2024-01-15 08:00")) == date(2024, 1, 15)

    def test_iso_string_and_datetime64(self):
        assert as_date("2024-01-15") == date(2024, 1, 15)
        assert as_date(np.datetime64("2024-01-15")) == date(2024, 1, 15)

    def test_iso_datetime_string(self):
        assert as_date("2024-01-15T08:30") == date(2024, 1, 15)

    @pytest.mark.parametrize("bad", [
        "not a date", "2024-13-45", "", None, 12345, "now", "today", "15/01/2024",
    ])
    def test_invalid_input_raises(self, bad):
        with pytest.raises(InvalidDateError):
            as_date(bad)

    def test_invalid_date_error_is_value_error(self):
        with pytest.raises(ValueError):
            gregorian_to_tamil("garbage")


# ── Formatting ────────────────────────────────────────────────────────────────

class TestFormatting:

    def test_format_both_scripts(self):
        t = gregorian_to_tamil(date(2024, 1, 15))
        assert format_tamil_date(t) == "தை 2, 67 / Thai 2, 67"

    def test_format_english_only_without_year(self):
        t = gregorian_to_tamil(date(2024, 4, 14))
        assert format_tamil_date(t, show_year=False, show_tamil=False) == "Chithirai 1"

    def test_dual_date(self):
        assert format_dual_date(date(2024, 1, 15)) == "15/01/2024 (தை 2 / Thai 2)"

    def test_dual_date_with_festivals(self):
        out = format_dual_date(date(2024, 1, 15), show_festivals=True)
        assert out.endswith(" - பொங்கல்")
