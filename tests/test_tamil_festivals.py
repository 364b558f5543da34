"""
tests/test_tamil_festivals.py

Covers:
  - Festival table shape and immutability
  - Lookups by month, importance and type
  - Day-keyed matching with the approximate converter
  - Gregorian-anchored solar festivals (Pongal, Tamil New Year)
"""

from datetime import date, timedelta

import pytest

from tamil_calendar import TAMIL_MONTHS, gregorian_to_tamil
from tamil_festivals import (
    FESTIVAL_TABLE, FESTIVAL_TYPES, LUNAR_OBSERVANCES, festival_table_frame,
    get_festivals_by_type, get_festivals_for_date, get_major_festivals,
    get_month_festivals, has_festivals, match_day_festivals,
)


def names(matches):
    return [m.name for m in matches]


# ── Table ─────────────────────────────────────────────────────────────────────

class TestFestivalTable:

    def test_every_month_has_records(self):
        assert set(FESTIVAL_TABLE) == {m.english_name for m in TAMIL_MONTHS}
        for records in FESTIVAL_TABLE.values():
            assert records

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            FESTIVAL_TABLE["Thai"] = ()

    def test_records_carry_their_month(self):
        for month, records in FESTIVAL_TABLE.items():
            assert all(r.month == month for r in records)

    def test_every_record_has_one_key(self):
        for records in FESTIVAL_TABLE.values():
            for r in records:
                assert (r.day is not None) != (r.tithi is not None)

    def test_type_metadata_is_read_only(self):
        with pytest.raises(TypeError):
            FESTIVAL_TYPES["major"]["color"] = "black"
        assert FESTIVAL_TYPES["major"]["color"] == "red"

    def test_all_types_are_described(self):
        types = {r.type for records in FESTIVAL_TABLE.values() for r in records}
        types |= {r.type for r in LUNAR_OBSERVANCES}
        assert types <= set(FESTIVAL_TYPES)

    def test_day_records_precede_tithi_records(self):
        records = get_month_festivals("Thai")
        kinds = ["day" if r.day is not None else "tithi" for r in records]
        assert kinds == sorted(kinds)

    def test_frame_has_one_row_per_record(self):
        df = festival_table_frame()
        assert len(df) == sum(len(r) for r in FESTIVAL_TABLE.values())
        assert {"month", "name", "tamil", "type"} <= set(df.columns)


# ── Lookups ───────────────────────────────────────────────────────────────────

class TestLookups:

    def test_unknown_month_is_empty(self):
        assert get_month_festivals("Smarch") == ()

    def test_major_festivals_of_thai(self):
        majors = [r.name for r in get_major_festivals("Thai")]
        assert "Pongal" in majors
        assert "Thai Poosam" in majors
        assert "Mattu Pongal" not in majors

    def test_by_type_in_month_order(self):
        starts = get_festivals_by_type("month_start")
        assert len(starts) == 12
        assert starts[0].month == "Chithirai"
        assert starts[-1].month == "Panguni"

    def test_unknown_type_is_empty(self):
        assert get_festivals_by_type("carnival") == []


# ── Approximate matching ──────────────────────────────────────────────────────

class TestDayMatching:

    def test_pongal_on_january_15(self):
        matches = get_festivals_for_date(date(2024, 1, 15))
        assert names(matches) == ["Pongal"]
        assert matches[0].tamil == "பொங்கல்"
        assert matches[0].date == date(2024, 1, 15)

    @pytest.mark.parametrize("year", [2023, 2024, 2025])
    def test_tamil_new_year(self, year):
        assert names(get_festivals_for_date(date(year, 4, 14))) == [
            "Chithirai Month Begins", "Tamil New Year", "Vishu",
        ]

    def test_pongal_week(self):
        assert names(get_festivals_for_date(date(2024, 1, 14))) == [
            "Thai Month Begins", "Makara Sankranti",
        ]
        assert names(get_festivals_for_date(date(2024, 1, 16))) == ["Mattu Pongal"]
        assert names(get_festivals_for_date(date(2024, 1, 17))) == ["Kaanum Pongal"]

    def test_day_keyed_record(self):
        # Thai 15 under the approximate converter
        assert names(get_festivals_for_date(date(2024, 1, 28))) == ["Thai Pournami"]

    def test_republic_day_is_anchored(self):
        assert "Republic Day" in names(get_festivals_for_date(date(2024, 1, 26)))
        assert "Republic Day" not in names(get_festivals_for_date(date(2024, 1, 25)))

    def test_tithi_records_never_match_by_day(self):
        d = date(2024, 1, 1)
        while d.year == 2024:
            for m in match_day_festivals(gregorian_to_tamil(d)):
                assert m.record.tithi is None
            d += timedelta(days=1)

    def test_quiet_day(self):
        # Aadi 29
        assert get_festivals_for_date(date(2024, 8, 15)) == []
        assert not has_festivals(date(2024, 8, 15))

    def test_match_serialises_with_date(self):
        out = get_festivals_for_date(date(2024, 1, 15))[0].to_dict()
        assert out["date"] == "2024-01-15"
        assert out["gregorian"] == [1, 15]
        assert out["month"] == "Thai"
