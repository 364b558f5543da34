"""
Calendar resolution: picks a conversion strategy and resolves festivals.

The approximate and accurate strategies are kept apart: each resolves its own
TamilDate and matches the festival table on its own key (Tamil day vs tithi).

Exports:
  resolve_tamil_date(date, strategy)          → TamilDate | None
  resolve_festivals(date, strategy)           → list of FestivalMatch
  upcoming_important_days(start, days)        → list of {"date", "festivals"}
  festival_calendar(start, end)               → DataFrame, one row per match
  tamil_date_frame(dates)                     → DataFrame aligned with dates
  tamil_year_calendar(tamil_year)             → DataFrame for a Tamil year
"""
import logging
from datetime import date, timedelta
from typing import List, Optional

import holidays
import pandas as pd

from panchang import Location, PanchangProvider, get_accurate_tamil_date, match_tithi_festivals
from tamil_calendar import (
    CalendarError, TAMIL_EPOCH_OFFSET, TAMIL_MONTHS, TamilDate, as_date, gregorian_to_tamil,
)
from tamil_festivals import FestivalMatch, FestivalRecord, match_day_festivals
from templecal.config import (
    DEFAULT_LOCATION, DEFAULT_STRATEGY, HOLIDAY_SUBDIV, MAX_RANGE_DAYS,
    MONTH_SCAN_DAYS, STRATEGIES, UPCOMING_DAYS,
)

log = logging.getLogger(__name__)

IMPORTANT_LEVELS = ("major", "high")

CALENDAR_COLUMNS = [
    "date", "tamil_month", "tamil_month_ta", "tamil_day", "tamil_year", "tithi",
    "name", "tamil", "type", "importance", "description",
]


class StrategyError(CalendarError, ValueError):
    """Unknown conversion strategy."""


def get_strategy(strategy: Optional[str] = None) -> str:
    name = (strategy or DEFAULT_STRATEGY).lower()
    if name not in STRATEGIES:
        raise StrategyError(f"Unknown strategy {strategy!r}; expected one of {STRATEGIES}")
    return name


# ═══════════════════════════════════════════════════════════════
#  Single-date queries
# ═══════════════════════════════════════════════════════════════

def resolve_tamil_date(value, strategy: Optional[str] = None,
                       location: Optional[Location] = None,
                       provider: Optional[PanchangProvider] = None) -> Optional[TamilDate]:
    """Tamil date for a Gregorian date; None when panchang data is unavailable."""
    name = get_strategy(strategy)
    log.debug("Resolving %s with the %s strategy", value, name)
    if name == "accurate":
        return get_accurate_tamil_date(
            value, location or DEFAULT_LOCATION, provider, MONTH_SCAN_DAYS,
        )
    return gregorian_to_tamil(value)


def public_holidays(day: date) -> List[FestivalMatch]:
    """Tamil Nadu public holidays falling on a date."""
    calendar = holidays.India(subdiv=HOLIDAY_SUBDIV, years=day.year)
    return [
        FestivalMatch(FestivalRecord(name, name, "national", description="Public holiday"), day)
        for name in calendar.get_list(day)
    ]


def resolve_festivals(value, strategy: Optional[str] = None,
                      location: Optional[Location] = None,
                      provider: Optional[PanchangProvider] = None,
                      include_public_holidays: bool = False) -> List[FestivalMatch]:
    """Festivals on a Gregorian date, in table order."""
    tamil_date = resolve_tamil_date(value, strategy, location, provider)
    return _festivals_for(as_date(value), tamil_date, include_public_holidays)


def _festivals_for(day: date, tamil_date: Optional[TamilDate],
                   include_public_holidays: bool = False) -> List[FestivalMatch]:
    if tamil_date is None:
        matches = []
    elif tamil_date.strategy == "accurate":
        matches = match_tithi_festivals(tamil_date)
    else:
        matches = match_day_festivals(tamil_date)

    if include_public_holidays:
        seen = {m.name for m in matches}
        matches.extend(m for m in public_holidays(day) if m.name not in seen)
    return matches


def is_important(match: FestivalMatch) -> bool:
    return match.importance in IMPORTANT_LEVELS or match.record.type == "major"


def upcoming_important_days(start=None, days: int = UPCOMING_DAYS,
                            strategy: Optional[str] = None,
                            location: Optional[Location] = None,
                            provider: Optional[PanchangProvider] = None) -> List[dict]:
    """Days within the window that carry at least one major/high festival."""
    first = as_date(start) if start is not None else date.today()
    out = []
    for i in range(days):
        day = first + timedelta(days=i)
        important = [m for m in resolve_festivals(day, strategy, location, provider)
                     if is_important(m)]
        if important:
            out.append({"date": day, "festivals": important})
    return out


# ═══════════════════════════════════════════════════════════════
#  Range queries (DataFrames)
# ═══════════════════════════════════════════════════════════════

def _match_rows(tamil_date: TamilDate, matches: List[FestivalMatch]) -> List[dict]:
    return [{
        "date": pd.Timestamp(tamil_date.gregorian_date),
        "tamil_month": tamil_date.month.english_name,
        "tamil_month_ta": tamil_date.month.tamil_name,
        "tamil_day": tamil_date.day,
        "tamil_year": tamil_date.year,
        "tithi": tamil_date.tithi,
        "name": m.record.name,
        "tamil": m.record.tamil,
        "type": m.record.type,
        "importance": m.record.importance,
        "description": m.record.description,
    } for m in matches]


def festival_calendar(start, end, strategy: Optional[str] = None,
                      location: Optional[Location] = None,
                      provider: Optional[PanchangProvider] = None,
                      include_public_holidays: bool = False) -> pd.DataFrame:
    """One row per festival match between start and end (inclusive)."""
    first, last = as_date(start), as_date(end)
    if last < first:
        raise CalendarError(f"End date {last} is before start date {first}")
    if (last - first).days >= MAX_RANGE_DAYS:
        raise CalendarError(f"Range longer than {MAX_RANGE_DAYS} days")

    rows = []
    for ts in pd.date_range(first, last, freq="D"):
        tamil_date = resolve_tamil_date(ts, strategy, location, provider)
        if tamil_date is None:
            continue
        matches = _festivals_for(ts.date(), tamil_date, include_public_holidays)
        rows.extend(_match_rows(tamil_date, matches))
    log.debug("festival_calendar %s..%s → %d rows", first, last, len(rows))
    df = pd.DataFrame(rows, columns=CALENDAR_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    return df


def tamil_date_frame(dates: pd.Series, strategy: Optional[str] = None,
                     location: Optional[Location] = None,
                     provider: Optional[PanchangProvider] = None) -> pd.DataFrame:
    """
    Tamil date and festival summary for a Series of dates.
    Returns a DataFrame aligned with the input index.
    """
    records = []
    for value in dates:
        tamil_date = resolve_tamil_date(value, strategy, location, provider)
        if tamil_date is None:
            records.append({"tamil_month": None, "tamil_day": None, "tamil_year": None,
                            "tithi": None, "festival_count": 0, "festivals": "",
                            "is_major": False})
            continue
        matches = _festivals_for(tamil_date.gregorian_date, tamil_date)
        records.append({
            "tamil_month": tamil_date.month.english_name,
            "tamil_day": tamil_date.day,
            "tamil_year": tamil_date.year,
            "tithi": tamil_date.tithi,
            "festival_count": len(matches),
            "festivals": ", ".join(m.name for m in matches),
            "is_major": any(m.record.is_major for m in matches),
        })
    return pd.DataFrame(records, index=dates.index)


def tamil_year_calendar(tamil_year_no: int, strategy: Optional[str] = None,
                        location: Optional[Location] = None,
                        provider: Optional[PanchangProvider] = None) -> pd.DataFrame:
    """
    Festivals of a Tamil year, grouped by month slot.

    Each slot scans 30 days from the 14th of the Gregorian month in which the
    Tamil month starts (April for Chithirai).
    """
    new_year = pd.Timestamp(tamil_year_no + TAMIL_EPOCH_OFFSET, 4, 14)
    frames = []
    for month in TAMIL_MONTHS:
        slot_start = new_year + pd.DateOffset(months=month.index)
        slot_end = slot_start + pd.Timedelta(days=29)
        frame = festival_calendar(slot_start, slot_end, strategy, location, provider)
        frame.insert(0, "month_slot", month.english_name)
        frames.append(frame)
    return pd.concat(frames, ignore_index=True)
