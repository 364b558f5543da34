"""
Tamil Calendar reference data and the approximate Gregorian → Tamil converter.

The approximate strategy splits every Gregorian month at a fixed day threshold:
days up to the threshold belong to the earlier Tamil month, later days to the
next one.  Thresholds are not recomputed per year, so month boundaries drift by
a day or two against the true solar ingress.

Exports:
  TAMIL_MONTHS                    → the 12 TamilMonth records (Chithirai first)
  gregorian_to_tamil(date)        → TamilDate
  tamil_year(date)                → int
  format_tamil_date(tamil_date)   → "தை 2, 67 / Thai 2, 67"
  format_dual_date(date)          → "15/01/2024 (தை 2 / Thai 2)"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Optional, Tuple

import numpy as np
import pandas as pd


# ═══════════════════════════════════════════════════════════════
#  Errors
# ═══════════════════════════════════════════════════════════════
class CalendarError(Exception):
    """Base exception for all calendar-related errors."""


class InvalidDateError(CalendarError, ValueError):
    """The input could not be interpreted as a calendar date."""


# ═══════════════════════════════════════════════════════════════
#  Tamil months  (ordinal order, starting at Tamil New Year)
# ═══════════════════════════════════════════════════════════════
@dataclass(frozen=True)
class TamilMonth:
    index: int
    tamil_name: str
    english_name: str
    short_form: str
    approx_gregorian: str
    season: str

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "tamil": self.tamil_name,
            "english": self.english_name,
            "short_form": self.short_form,
            "approx_gregorian": self.approx_gregorian,
            "season": self.season,
        }


# (tamil, english, short form, approx. Gregorian span, season)
_MONTH_ROWS = [
    ("சித்திரை",   "Chithirai", "சித்",  "Apr-May", "Spring"),
    ("வைகாசி",    "Vaikaasi",  "வை",   "May-Jun", "Summer"),
    ("ஆனி",       "Aani",      "ஆனி",  "Jun-Jul", "Summer"),
    ("ஆடி",       "Aadi",      "ஆடி",  "Jul-Aug", "Monsoon"),
    ("ஆவணி",      "Aavani",    "ஆவ",   "Aug-Sep", "Monsoon"),
    ("புரட்டாசி",  "Purattasi", "புர",   "Sep-Oct", "Autumn"),
    ("ஐப்பசி",     "Aippasi",   "ஐப்",   "Oct-Nov", "Autumn"),
    ("கார்த்திகை", "Karthikai", "கார்",  "Nov-Dec", "Pre-Winter"),
    ("மார்கழி",    "Maargazhi", "மார்",  "Dec-Jan", "Winter"),
    ("தை",        "Thai",      "தை",   "Jan-Feb", "Winter"),
    ("மாசி",       "Maasi",     "மாசி",  "Feb-Mar", "Spring"),
    ("பங்குனி",    "Panguni",   "பங்",   "Mar-Apr", "Spring"),
]

TAMIL_MONTHS: Tuple[TamilMonth, ...] = tuple(
    TamilMonth(i, ta, en, short, span, season)
    for i, (ta, en, short, span, season) in enumerate(_MONTH_ROWS)
)

MONTHS_BY_NAME: Dict[str, TamilMonth] = {m.english_name: m for m in TAMIL_MONTHS}

# Index constants used by the threshold table below
CHITHIRAI, VAIKAASI, AANI, AADI, AAVANI, PURATTASI = range(6)
AIPPASI, KARTHIKAI, MAARGAZHI, THAI, MAASI, PANGUNI = range(6, 12)

# ═══════════════════════════════════════════════════════════════
#  Approximate month boundaries
#  Gregorian month → (threshold, earlier month, +offset, later month)
#    day <= threshold → earlier month, tamil day = day + offset
#    day >  threshold → later month,   tamil day = day - threshold
# ═══════════════════════════════════════════════════════════════
MONTH_BOUNDARIES: Dict[int, Tuple[int, int, int, int]] = {
    1:  (13, MAARGAZHI, 17, THAI),
    2:  (12, THAI,      18, MAASI),
    3:  (14, MAASI,     17, PANGUNI),
    4:  (13, PANGUNI,   16, CHITHIRAI),
    5:  (14, CHITHIRAI, 17, VAIKAASI),
    6:  (15, VAIKAASI,  16, AANI),
    7:  (16, AANI,      15, AADI),
    8:  (17, AADI,      14, AAVANI),
    9:  (17, AAVANI,    14, PURATTASI),
    10: (17, PURATTASI, 14, AIPPASI),
    11: (16, AIPPASI,   15, KARTHIKAI),
    12: (15, KARTHIKAI, 16, MAARGAZHI),
}

# Tamil New Year boundary and epoch offset
NEW_YEAR_MONTH, NEW_YEAR_DAY = 4, 14
TAMIL_EPOCH_OFFSET = 1956


# ═══════════════════════════════════════════════════════════════
#  TamilDate
# ═══════════════════════════════════════════════════════════════
@dataclass(frozen=True)
class TamilDate:
    """A Tamil calendar date derived from a Gregorian date.  Never stored."""

    gregorian_date: date
    month: TamilMonth
    day: int
    year: int
    strategy: str = "approximate"
    tithi: Optional[str] = None
    tithi_tamil: Optional[str] = None
    paksha: Optional[str] = None
    moon_phase: Optional[str] = None
    panchang: Dict[str, Dict[str, str]] = field(default_factory=dict, compare=False)

    @property
    def is_amavasai(self) -> bool:
        return self.tithi == "Amavasya"

    @property
    def is_pournami(self) -> bool:
        return self.tithi == "Punnami"

    @property
    def is_ekadasi(self) -> bool:
        return self.tithi == "Ekadasi"

    def element(self, key: str) -> Optional[str]:
        """English name of a panchang element (nakshatra, yoga, ...), if known."""
        entry = self.panchang.get(key)
        return entry["english"] if entry else None

    @property
    def nakshatra(self) -> Optional[str]:
        return self.element("nakshatra")

    @property
    def yoga(self) -> Optional[str]:
        return self.element("yoga")

    @property
    def karana(self) -> Optional[str]:
        return self.element("karana")

    @property
    def raasi(self) -> Optional[str]:
        return self.element("rashi")

    @property
    def ritu(self) -> Optional[str]:
        return self.element("season")

    def to_dict(self) -> dict:
        out = {
            "gregorian_date": self.gregorian_date.isoformat(),
            "month": self.month.to_dict(),
            "day": self.day,
            "year": self.year,
            "strategy": self.strategy,
            "tithi": self.tithi,
            "tithi_tamil": self.tithi_tamil,
            "paksha": self.paksha,
            "moon_phase": self.moon_phase,
            "is_amavasai": self.is_amavasai,
            "is_pournami": self.is_pournami,
            "is_ekadasi": self.is_ekadasi,
        }
        out.update({k: dict(v) for k, v in self.panchang.items()})
        return out


# ═══════════════════════════════════════════════════════════════
#  PUBLIC API
# ═══════════════════════════════════════════════════════════════

def as_date(value) -> date:
    """Coerce date-like input (date, datetime, Timestamp, datetime64, ISO str).

    Strings must be ISO formatted: "2024-01-15" or "2024-01-15T08:00".
    """
    if value is None or value is pd.NaT:
        raise InvalidDateError(f"Not a valid date: {value!r}")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # ISO strings only
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError as e:
            raise InvalidDateError(f"Not a valid date: {value!r}") from e
    if isinstance(value, np.datetime64):
        try:
            ts = pd.Timestamp(value)
        except (ValueError, TypeError) as e:
            raise InvalidDateError(f"Not a valid date: {value!r}") from e
        if pd.isna(ts):
            raise InvalidDateError(f"Not a valid date: {value!r}")
        return ts.date()
    raise InvalidDateError(f"Unsupported date value: {value!r}")


def tamil_year(value) -> int:
    """Tamil year: Gregorian year − 1956 from 14 April on, − 1957 before."""
    d = as_date(value)
    if (d.month, d.day) >= (NEW_YEAR_MONTH, NEW_YEAR_DAY):
        return d.year - TAMIL_EPOCH_OFFSET
    return d.year - TAMIL_EPOCH_OFFSET - 1


def gregorian_to_tamil(value) -> TamilDate:
    """Convert a Gregorian date to an approximate Tamil date."""
    d = as_date(value)
    threshold, earlier, offset, later = MONTH_BOUNDARIES[d.month]
    if d.day <= threshold:
        month_index, day = earlier, d.day + offset
    else:
        month_index, day = later, d.day - threshold
    return TamilDate(
        gregorian_date=d,
        month=TAMIL_MONTHS[month_index],
        day=day,
        year=tamil_year(d),
    )


def get_tamil_month(name: str) -> Optional[TamilMonth]:
    return MONTHS_BY_NAME.get(name)


def format_tamil_date(tamil_date: TamilDate, show_year: bool = True,
                      show_english: bool = True, show_tamil: bool = True,
                      show_day: bool = True) -> str:
    """Render a TamilDate, e.g. "தை 2, 67 / Thai 2, 67"."""
    def _part(month_name: str) -> str:
        text = month_name
        if show_day:
            text += f" {tamil_date.day}"
        if show_year:
            text += f", {tamil_date.year}"
        return text

    parts = []
    if show_tamil:
        parts.append(_part(tamil_date.month.tamil_name))
    if show_english:
        parts.append(_part(tamil_date.month.english_name))
    return " / ".join(parts)


def format_dual_date(value, date_format: str = "%d/%m/%Y",
                     show_festivals: bool = False) -> str:
    """Gregorian date followed by its approximate Tamil date (and festivals)."""
    d = as_date(value)
    tamil = gregorian_to_tamil(d)
    result = f"{d.strftime(date_format)} ({format_tamil_date(tamil, show_year=False)})"
    if show_festivals:
        # late import: tamil_festivals depends on this module
        from tamil_festivals import get_festivals_for_date
        names = [m.record.tamil for m in get_festivals_for_date(d)]
        if names:
            result += " - " + ", ".join(names)
    return result
