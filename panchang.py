"""
Panchang-backed ("accurate") Tamil calendar.

Lunar/solar positions come from a PanchangProvider.  The bundled provider,
MeanMotionPanchang, uses truncated series for the Sun and Moon (good to a few
tenths of a degree), evaluated at local sunrise with the Lahiri ayanamsa.  Its
vocabulary (Chaitra, Baisakha, ... / Padyami, Vidhiya, ... Punnami, Amavasya)
is what the month and tithi mappings below translate into Tamil.

Exports:
  PanchangProvider, MeanMotionPanchang, Location, DEFAULT_LOCATION
  get_accurate_tamil_date(date, location, provider) → TamilDate | None
  get_accurate_festivals(date, location, provider)  → list of FestivalMatch
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Dict, List, NamedTuple, Optional, Protocol, Tuple

import numpy as np

from tamil_calendar import (
    CalendarError, TAMIL_MONTHS, TamilDate, TamilMonth, as_date, tamil_year,
)
from tamil_festivals import (
    LUNAR_OBSERVANCES, FestivalMatch, FestivalRecord, get_month_festivals,
)

log = logging.getLogger(__name__)


class PanchangError(CalendarError):
    """The panchang provider failed or returned unknown vocabulary."""


class Location(NamedTuple):
    latitude: float
    longitude: float
    name: str = ""


DEFAULT_LOCATION = Location(13.0827, 80.2707, "Chennai")
MONTH_SCAN_DAYS = 35


# ═══════════════════════════════════════════════════════════════
#  Provider interface
# ═══════════════════════════════════════════════════════════════
class PanchangElement(NamedTuple):
    name_en: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {"english": self.name_en, "tamil": self.name}


@dataclass(frozen=True)
class PanchangReading:
    masa: PanchangElement
    tithi: PanchangElement
    paksha: PanchangElement
    nakshatra: PanchangElement
    yoga: PanchangElement
    karana: PanchangElement
    raasi: PanchangElement
    ritu: PanchangElement
    moon_phase: str = ""


class PanchangProvider(Protocol):
    def calendar(self, day: date, latitude: float, longitude: float) -> PanchangReading:
        ...


# ═══════════════════════════════════════════════════════════════
#  Vocabulary
# ═══════════════════════════════════════════════════════════════
MASA_NAMES = [
    "Chaitra", "Baisakha", "Jyestha", "Asadha", "Srabana", "Bhadraba",
    "Aswina", "Karttika", "Margasira", "Pausa", "Magha", "Phalguna",
]

# Tithis 1-14 repeat in both fortnights; 15 = Punnami, 30 = Amavasya
TITHI_NAMES = [
    "Padyami", "Vidhiya", "Thadiya", "Chavithi", "Panchami", "Shasti",
    "Sapthami", "Ashtami", "Navami", "Dasami", "Ekadasi", "Dvadasi",
    "Trayodasi", "Chaturdasi",
]

NAKSHATRAS = [
    ("Ashwini", "அஸ்வினி"), ("Bharani", "பரணி"), ("Krittika", "கிருத்திகை"),
    ("Rohini", "ரோகிணி"), ("Mrigashira", "மிருகசீரிஷம்"), ("Ardra", "திருவாதிரை"),
    ("Punarvasu", "புனர்பூசம்"), ("Pushya", "பூசம்"), ("Ashlesha", "ஆயில்யம்"),
    ("Magha", "மகம்"), ("Purva Phalguni", "பூரம்"), ("Uttara Phalguni", "உத்திரம்"),
    ("Hasta", "அஸ்தம்"), ("Chitra", "சித்திரை"), ("Swati", "சுவாதி"),
    ("Vishakha", "விசாகம்"), ("Anuradha", "அனுஷம்"), ("Jyeshtha", "கேட்டை"),
    ("Mula", "மூலம்"), ("Purva Ashadha", "பூராடம்"), ("Uttara Ashadha", "உத்திராடம்"),
    ("Shravana", "திருவோணம்"), ("Dhanishta", "அவிட்டம்"), ("Shatabhisha", "சதயம்"),
    ("Purva Bhadrapada", "பூரட்டாதி"), ("Uttara Bhadrapada", "உத்திரட்டாதி"),
    ("Revati", "ரேவதி"),
]

YOGAS = [
    "Vishkambha", "Priti", "Ayushman", "Saubhagya", "Shobhana", "Atiganda",
    "Sukarma", "Dhriti", "Shula", "Ganda", "Vriddhi", "Dhruva", "Vyaghata",
    "Harshana", "Vajra", "Siddhi", "Vyatipata", "Variyana", "Parigha", "Shiva",
    "Siddha", "Sadhya", "Shubha", "Shukla", "Brahma", "Indra", "Vaidhriti",
]

MOVABLE_KARANAS = ["Bava", "Balava", "Kaulava", "Taitila", "Garaja", "Vanija", "Vishti"]

RAASIS = [
    ("Aries", "மேஷம்"), ("Taurus", "ரிஷபம்"), ("Gemini", "மிதுனம்"),
    ("Cancer", "கடகம்"), ("Leo", "சிம்மம்"), ("Virgo", "கன்னி"),
    ("Libra", "துலாம்"), ("Scorpio", "விருச்சிகம்"), ("Sagittarius", "தனுசு"),
    ("Capricorn", "மகரம்"), ("Aquarius", "கும்பம்"), ("Pisces", "மீனம்"),
]

RITUS = [
    ("Spring", "இளவேனில்"), ("Summer", "முதுவேனில்"), ("Monsoon", "கார்"),
    ("Autumn", "கூதிர்"), ("Pre-Winter", "முன்பனி"), ("Winter", "பின்பனி"),
]

# Masa → Tamil month.  Follows observed Tamil months rather than a
# one-to-one solar correspondence, hence Chaitra → Panguni.
TAMIL_MONTH_MAPPING: Dict[str, TamilMonth] = {
    masa: TAMIL_MONTHS[(i - 1) % 12] for i, masa in enumerate(MASA_NAMES)
}

TAMIL_TITHI_MAPPING: Dict[str, str] = {
    "Padyami": "பிரதமை",
    "Vidhiya": "துவிதியை",
    "Thadiya": "திருதியை",
    "Chavithi": "சதுர்த்தி",
    "Chaviti": "சதுர்த்தி",
    "Panchami": "பஞ்சமி",
    "Shasti": "சஷ்டி",
    "Sapthami": "சப்தமி",
    "Ashtami": "அஷ்டமி",
    "Navami": "நவமி",
    "Dasami": "தசமி",
    "Ekadasi": "ஏகாதசி",
    "Dvadasi": "துவாதசி",
    "Trayodasi": "திரயோதசி",
    "Chaturdasi": "சதுர்தசி",
    "Punnami": "பௌர்ணமி",
    "Amavasya": "அமாவாசை",
}


# ═══════════════════════════════════════════════════════════════
#  Sun / Moon positions  (scalar or array Julian days)
# ═══════════════════════════════════════════════════════════════
J2000 = 2451545.0
SYNODIC_RATE = 360.0 / 29.530588853   # mean elongation, degrees per day


def julian_day(day: date, hour_ut: float = 0.0) -> float:
    return day.toordinal() + 1721424.5 + hour_ut / 24.0


def sun_longitude(jd):
    """Apparent tropical longitude of the Sun, degrees."""
    n = np.asarray(jd, dtype=float) - J2000
    g = np.radians(357.529 + 0.98560028 * n)
    q = 280.459 + 0.98564736 * n
    return np.mod(q + 1.915 * np.sin(g) + 0.020 * np.sin(2 * g), 360.0)


def moon_longitude(jd):
    """Tropical longitude of the Moon from the leading periodic terms, degrees."""
    t = (np.asarray(jd, dtype=float) - J2000) / 36525.0
    lp = 218.3164477 + 481267.88123421 * t
    d = np.radians(297.8501921 + 445267.1114034 * t)
    m = np.radians(357.5291092 + 35999.0502909 * t)
    mp = np.radians(134.9633964 + 477198.8675055 * t)
    f = np.radians(93.2720950 + 483202.0175233 * t)
    lon = (
        lp
        + 6.288774 * np.sin(mp)
        + 1.274027 * np.sin(2 * d - mp)
        + 0.658314 * np.sin(2 * d)
        + 0.213618 * np.sin(2 * mp)
        - 0.185116 * np.sin(m)
        - 0.114332 * np.sin(2 * f)
        + 0.058793 * np.sin(2 * d - 2 * mp)
        + 0.057066 * np.sin(2 * d - m - mp)
        + 0.053322 * np.sin(2 * d + mp)
        + 0.045758 * np.sin(2 * d - m)
        - 0.040923 * np.sin(m - mp)
        - 0.034720 * np.sin(d)
        - 0.030383 * np.sin(m + mp)
    )
    return np.mod(lon, 360.0)


def lahiri_ayanamsa(jd):
    return 23.853 + 0.0139667 * (np.asarray(jd, dtype=float) - J2000) / 365.25


def elongation(jd):
    return np.mod(moon_longitude(jd) - sun_longitude(jd), 360.0)


def previous_new_moon(jd: float) -> float:
    """Julian day of the new moon at or before jd."""
    t = jd - float(elongation(jd)) / SYNODIC_RATE
    for _ in range(3):
        e = float(elongation(t))
        if e > 180.0:
            e -= 360.0
        t -= e / SYNODIC_RATE
    return t


class MeanMotionPanchang:
    """Self-contained PanchangProvider, evaluated at 06:00 local mean time."""

    SUNRISE_HOUR = 6.0

    def calendar(self, day: date, latitude: float, longitude: float) -> PanchangReading:
        jd = julian_day(day, self.SUNRISE_HOUR - longitude / 15.0)
        ayanamsa = float(lahiri_ayanamsa(jd))
        sun = float(sun_longitude(jd))
        moon = float(moon_longitude(jd))
        sid_sun = (sun - ayanamsa) % 360.0
        sid_moon = (moon - ayanamsa) % 360.0
        elong = (moon - sun) % 360.0

        tithi_no = int(elong // 12.0) + 1          # 1..30
        if tithi_no == 15:
            tithi = "Punnami"
        elif tithi_no == 30:
            tithi = "Amavasya"
        else:
            tithi = TITHI_NAMES[(tithi_no - 1) % 15]
        waxing = tithi_no <= 15

        nm = previous_new_moon(jd)
        nm_sun = (float(sun_longitude(nm)) - float(lahiri_ayanamsa(nm))) % 360.0
        masa_index = (int(nm_sun // 30.0) + 1) % 12

        nak_en, nak_ta = NAKSHATRAS[int(sid_moon // (360.0 / 27)) % 27]
        yoga = YOGAS[int(((sid_sun + sid_moon) % 360.0) // (360.0 / 27)) % 27]
        raasi_en, raasi_ta = RAASIS[int(sid_moon // 30.0) % 12]
        ritu_en, ritu_ta = RITUS[masa_index // 2]
        karana = _karana(elong)

        return PanchangReading(
            masa=PanchangElement(MASA_NAMES[masa_index], MASA_NAMES[masa_index]),
            tithi=PanchangElement(tithi, TAMIL_TITHI_MAPPING.get(tithi, tithi)),
            paksha=PanchangElement(
                "Shukla" if waxing else "Krishna",
                "வளர்பிறை" if waxing else "தேய்பிறை",
            ),
            nakshatra=PanchangElement(nak_en, nak_ta),
            yoga=PanchangElement(yoga, yoga),
            karana=PanchangElement(karana, karana),
            raasi=PanchangElement(raasi_en, raasi_ta),
            ritu=PanchangElement(ritu_en, ritu_ta),
            moon_phase="Waxing" if waxing else "Waning",
        )


def _karana(elong: float) -> str:
    k = int(elong // 6.0)                       # half-tithi 0..59
    if k == 0:
        return "Kimstughna"
    if k >= 57:
        return ("Shakuni", "Chatushpada", "Naga")[k - 57]
    return MOVABLE_KARANAS[(k - 1) % 7]


DEFAULT_PROVIDER = MeanMotionPanchang()


# ═══════════════════════════════════════════════════════════════
#  Accurate Tamil date
# ═══════════════════════════════════════════════════════════════

def masa_to_tamil_month(masa: str) -> TamilMonth:
    try:
        return TAMIL_MONTH_MAPPING[masa]
    except KeyError:
        raise PanchangError(f"Unknown masa {masa!r}") from None


def calculate_tamil_day(provider: PanchangProvider, day: date, masa: str,
                        location: Location = DEFAULT_LOCATION,
                        scan_days: int = MONTH_SCAN_DAYS) -> int:
    """Days elapsed since the masa began, found by scanning backwards.

    The first earlier day whose masa differs marks the month start; if none
    is found within scan_days the day falls back to 1.
    """
    for i in range(1, scan_days + 1):
        earlier = day - timedelta(days=i)
        reading = provider.calendar(earlier, location.latitude, location.longitude)
        if reading.masa.name_en != masa:
            return i
    log.debug("No masa boundary within %d days of %s", scan_days, day)
    return 1


def get_accurate_tamil_date(value, location: Optional[Location] = None,
                            provider: Optional[PanchangProvider] = None,
                            scan_days: int = MONTH_SCAN_DAYS) -> Optional[TamilDate]:
    """Tamil date from panchang data, or None when it cannot be computed."""
    d = as_date(value)
    location = location or DEFAULT_LOCATION
    provider = provider or DEFAULT_PROVIDER
    try:
        reading = provider.calendar(d, location.latitude, location.longitude)
        month = masa_to_tamil_month(reading.masa.name_en)
        day = calculate_tamil_day(provider, d, reading.masa.name_en, location, scan_days)
    except Exception:
        log.exception("Error calculating Tamil date for %s", d)
        return None

    tithi = reading.tithi.name_en
    return TamilDate(
        gregorian_date=d,
        month=month,
        day=day,
        year=tamil_year(d),
        strategy="accurate",
        tithi=tithi,
        tithi_tamil=TAMIL_TITHI_MAPPING.get(tithi, tithi),
        paksha=reading.paksha.name_en,
        moon_phase=reading.moon_phase,
        panchang={
            "nakshatra": reading.nakshatra.to_dict(),
            "yoga": reading.yoga.to_dict(),
            "karana": reading.karana.to_dict(),
            "rashi": reading.raasi.to_dict(),
            "season": reading.ritu.to_dict(),
        },
    )


# ═══════════════════════════════════════════════════════════════
#  Special days derived from month + weekday / nakshatra / date
#  Format: (month or None for any month, predicate(TamilDate), record)
# ═══════════════════════════════════════════════════════════════
_Rule = Tuple[Optional[str], Callable[[TamilDate], bool], FestivalRecord]

SPECIAL_DAY_RULES: Tuple[_Rule, ...] = (
    # solar date; the lunar month around 14 April is usually still Panguni
    (None,
     lambda t: (t.gregorian_date.month, t.gregorian_date.day) == (4, 14),
     FestivalRecord("Tamil New Year", "தமிழ் புத்தாண்டு", "major", month="Chithirai",
                    description="Tamil New Year celebration", importance="major")),
    ("Vaikaasi",
     lambda t: t.element("nakshatra") == "Vishakha",
     FestivalRecord("Vaikaasi Visakam", "வைகாசி விசாகம்", "major", month="Vaikaasi",
                    description="Birth star of Lord Murugan", importance="major")),
    ("Aadi",
     lambda t: t.gregorian_date.weekday() == 4,
     FestivalRecord("Aadi Velli", "ஆடி வெள்ளி", "weekly", month="Aadi",
                    description="Special Friday for goddess worship", importance="medium")),
    ("Purattasi",
     lambda t: t.gregorian_date.weekday() == 5,
     FestivalRecord("Purattasi Sani", "புரட்டாசி சனி", "weekly", month="Purattasi",
                    description="Saturday - Vishnu worship", importance="medium")),
    ("Karthikai",
     lambda t: t.gregorian_date.weekday() == 0,
     FestivalRecord("Karthikai Somavaram", "கார்த்திகை சோமவாரம்", "weekly", month="Karthikai",
                    description="Monday fasting for Shiva", importance="medium")),
    ("Maargazhi",
     lambda t: True,
     FestivalRecord("Maargazhi Month", "மார்கழி மாதம்", "devotional", month="Maargazhi",
                    description="Holy month of devotion", importance="high")),
)


def match_tithi_festivals(tamil_date: TamilDate) -> List[FestivalMatch]:
    """Lunar observances, month tithi records, then special-day rules."""
    d = tamil_date.gregorian_date
    month = tamil_date.month.english_name
    matches = [FestivalMatch(r, d) for r in LUNAR_OBSERVANCES if r.tithi == tamil_date.tithi]
    matches.extend(
        FestivalMatch(r, d) for r in get_month_festivals(month)
        if r.tithi is not None and r.tithi == tamil_date.tithi
    )
    matches.extend(
        FestivalMatch(rec, d) for rule_month, applies, rec in SPECIAL_DAY_RULES
        if rule_month in (None, month) and applies(tamil_date)
    )
    return matches


def get_accurate_festivals(value, location: Optional[Location] = None,
                           provider: Optional[PanchangProvider] = None) -> List[FestivalMatch]:
    tamil_date = get_accurate_tamil_date(value, location, provider)
    if tamil_date is None:
        return []
    return match_tithi_festivals(tamil_date)


def format_accurate_tamil_date(value, show_english: bool = True,
                               show_tamil: bool = True, show_day: bool = True,
                               location: Optional[Location] = None,
                               provider: Optional[PanchangProvider] = None) -> str:
    tamil_date = get_accurate_tamil_date(value, location, provider)
    if tamil_date is None:
        return "Date calculation error"
    parts = []
    for name, wanted in ((tamil_date.month.tamil_name, show_tamil),
                         (tamil_date.month.english_name, show_english)):
        if wanted:
            parts.append(f"{name} {tamil_date.day}" if show_day else name)
    return " / ".join(parts)
