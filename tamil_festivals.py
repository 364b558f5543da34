"""
Tamil Festival Table and the approximate festival resolver.

The table is keyed by the English name of the Tamil month.  A record matches
on one of three keys:
  - day        Tamil day of month (approximate strategy)
  - tithi      lunar day name     (accurate strategy, see panchang.py)
  - gregorian  fixed (month, day) for solar observances such as Pongal; these
               are matched on the Gregorian date inside their Tamil month

Exports:
  FESTIVAL_TABLE, LUNAR_OBSERVANCES, FESTIVAL_TYPES
  get_month_festivals(month)       → tuple of FestivalRecord
  get_major_festivals(month)       → list of FestivalRecord
  get_festivals_by_type(type)      → list of FestivalRecord
  get_festivals_for_date(date)     → list of FestivalMatch
  festival_table_frame()           → DataFrame of the whole table
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

import pandas as pd

from tamil_calendar import TAMIL_MONTHS, TamilDate, gregorian_to_tamil


@dataclass(frozen=True)
class FestivalRecord:
    name: str
    tamil: str
    type: str
    month: str = ""
    day: Optional[int] = None
    tithi: Optional[str] = None
    gregorian: Optional[Tuple[int, int]] = None
    description: Optional[str] = None
    importance: Optional[str] = None

    @property
    def is_major(self) -> bool:
        return self.type == "major" or self.importance == "major"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "tamil": self.tamil,
            "type": self.type,
            "month": self.month,
            "day": self.day,
            "tithi": self.tithi,
            "gregorian": list(self.gregorian) if self.gregorian else None,
            "description": self.description,
            "importance": self.importance,
        }


@dataclass(frozen=True)
class FestivalMatch:
    """A FestivalRecord matched against a Gregorian date."""

    record: FestivalRecord
    date: date

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def tamil(self) -> str:
        return self.record.tamil

    @property
    def importance(self) -> Optional[str]:
        return self.record.importance

    def to_dict(self) -> dict:
        out = self.record.to_dict()
        out["date"] = self.date.isoformat()
        return out


# ═══════════════════════════════════════════════════════════════
#  FESTIVALS BY TAMIL DAY OF MONTH
#  Format: (day, name, tamil, type, description)
# ═══════════════════════════════════════════════════════════════
_DAY_FESTIVALS = {
    "Chithirai": [
        (1,  "Chithirai Month Begins", "சித்திரை மாதம் தொடக்கம்", "month_start", None),
        (14, "Tamil New Year", "தமிழ் புத்தாண்டு", "major", "Tamil New Year - Beginning of new Tamil calendar year"),
        (14, "Vishu", "விஷு", "festival", "Malayalam New Year"),
        (15, "Chithirai Pournami", "சித்திரை பௌர்ணமி", "pournami", "Full moon day"),
        (20, "Chithirai Thiruvizha", "சித்திரை திருவிழா", "temple", "Madurai Meenakshi temple festival"),
        (30, "Chithirai Amavasai", "சித்திரை அமாவாசை", "amavasai", "New moon day"),
    ],
    "Vaikaasi": [
        (1,  "Vaikaasi Month Begins", "வைகாசி மாதம் தொடக்கம்", "month_start", None),
        (10, "Akshaya Tritiya", "அக்ஷய திருதியை", "auspicious", "Auspicious day for new beginnings"),
        (15, "Vaikaasi Pournami", "வைகாசி பௌர்ணமி", "pournami", "Buddha Purnima - Full moon"),
        (20, "Vaikaasi Visakam", "வைகாசி விசாகம்", "major", "Birth star of Lord Murugan"),
        (30, "Vaikaasi Amavasai", "வைகாசி அமாவாசை", "amavasai", "New moon day"),
    ],
    "Aani": [
        (1,  "Aani Month Begins", "ஆனி மாதம் தொடக்கம்", "month_start", None),
        (10, "Aani Thirumanjanam", "ஆனி திருமஞ்சனம்", "temple", "Sacred bath for deities in temples"),
        (15, "Aani Pournami", "ஆனி பௌர்ணமி", "pournami", "Full moon day"),
        (18, "Aani Uthiram", "ஆனி உத்திரம்", "temple", "Important day for Nataraja temples"),
        (30, "Aani Amavasai", "ஆனி அமாவாசை", "amavasai", "New moon day"),
    ],
    "Aadi": [
        (1,  "Aadi Month Begins", "ஆடி மாதம் தொடக்கம்", "month_start", "Auspicious month for Amman worship"),
        (3,  "Aadi Velli", "ஆடி வெள்ளி", "weekly", "Special Friday for goddess worship"),
        (10, "Aadi Velli", "ஆடி வெள்ளி", "weekly", "Special Friday for goddess worship"),
        (15, "Aadi Pournami", "ஆடி பௌர்ணமி", "pournami", "Full moon day"),
        (17, "Aadi Velli", "ஆடி வெள்ளி", "weekly", "Special Friday for goddess worship"),
        (18, "Aadi Perukku", "ஆடி பெருக்கு", "major", "Monsoon festival - River worship"),
        (24, "Aadi Velli", "ஆடி வெள்ளி", "weekly", "Special Friday for goddess worship"),
        (30, "Aadi Amavasai", "ஆடி அமாவாசை", "amavasai", "Important new moon for ancestor worship"),
    ],
    "Aavani": [
        (1,  "Aavani Month Begins", "ஆவணி மாதம் தொடக்கம்", "month_start", None),
        (4,  "Vinayaka Chaturthi", "விநாயக சதுர்த்தி", "major", "Ganesha Chaturthi festival"),
        (12, "Krishna Jayanthi", "கிருஷ்ண ஜயந்தி", "major", "Birth of Lord Krishna"),
        (15, "Aavani Avittam", "ஆவணி அவிட்டம்", "major", "Sacred thread changing ceremony"),
        (15, "Aavani Pournami", "ஆவணி பௌர்ணமி", "pournami", "Full moon - Raksha Bandhan"),
        (21, "Varalakshmi Vratham", "வரலட்சுமி விரதம்", "festival", "Goddess Lakshmi worship"),
        (30, "Aavani Amavasai", "ஆவணி அமாவாசை", "amavasai", "New moon day"),
    ],
    "Purattasi": [
        (1,  "Purattasi Month Begins", "புரட்டாசி மாதம் தொடக்கம்", "month_start", "Month dedicated to Lord Vishnu"),
        (5,  "Purattasi Sani", "புரட்டாசி சனி", "weekly", "Saturday - Vishnu worship"),
        (12, "Purattasi Sani", "புரட்டாசி சனி", "weekly", "Saturday - Vishnu worship"),
        (15, "Purattasi Pournami", "புரட்டாசி பௌர்ணமி", "pournami", "Full moon day"),
        (17, "Mahalaya Paksha", "மகாளய பக்ஷம்", "ancestor", "Fortnight for ancestor rituals begins"),
        (19, "Purattasi Sani", "புரட்டாசி சனி", "weekly", "Saturday - Vishnu worship"),
        (26, "Purattasi Sani", "புரட்டாசி சனி", "weekly", "Saturday - Vishnu worship"),
        (30, "Mahalaya Amavasai", "மகாளய அமாவாசை", "amavasai", "Most important day for ancestor worship"),
    ],
    "Aippasi": [
        (1,  "Aippasi Month Begins", "ஐப்பசி மாதம் தொடக்கம்", "month_start", None),
        (1,  "Navaratri Begins", "நவராத்திரி தொடக்கம்", "major", "Nine nights festival begins"),
        (7,  "Saraswati Puja", "சரஸ்வதி பூஜை", "festival", "Worship of goddess of learning"),
        (8,  "Ayudha Puja", "ஆயுத பூஜை", "festival", "Worship of tools and instruments"),
        (9,  "Vijaya Dasami", "விஜய தசமி", "major", "Victory day - End of Navaratri"),
        (15, "Aippasi Pournami", "ஐப்பசி பௌர்ணமி", "pournami", "Full moon - Annabishekam"),
        (20, "Kedara Gauri Vratham", "கேதார கௌரி விரதம்", "vratham", "Fasting for Goddess Parvati"),
        (30, "Aippasi Amavasai", "ஐப்பசி அமாவாசை", "amavasai", "Deepavali Amavasai"),
    ],
    "Karthikai": [
        (1,  "Karthikai Month Begins", "கார்த்திகை மாதம் தொடக்கம்", "month_start", "Month of lights"),
        (1,  "Deepavali", "தீபாவளி", "major", "Festival of lights"),
        (6,  "Soorasamharam", "சூரசம்ஹாரம்", "temple", "Skanda Shasti - Victory over evil"),
        (7,  "Karthikai Somavaram", "கார்த்திகை சோமவாரம்", "weekly", "Monday fasting for Shiva"),
        (14, "Karthikai Somavaram", "கார்த்திகை சோமவாரம்", "weekly", "Monday fasting for Shiva"),
        (15, "Karthikai Deepam", "கார்த்திகை தீபம்", "major", "Festival of lights - Full moon"),
        (21, "Karthikai Somavaram", "கார்த்திகை சோமவாரம்", "weekly", "Monday fasting for Shiva"),
        (28, "Karthikai Somavaram", "கார்த்திகை சோமவாரம்", "weekly", "Monday fasting for Shiva"),
        (30, "Karthikai Amavasai", "கார்த்திகை அமாவாசை", "amavasai", "New moon day"),
    ],
    "Maargazhi": [
        (1,  "Maargazhi Month Begins", "மார்கழி மாதம் தொடக்கம்", "month_start", "Most sacred month for devotion"),
        (1,  "Maargazhi Bhajans Begin", "மார்கழி பஜனை தொடக்கம்", "devotion", "Early morning devotional songs begin"),
        (5,  "Karthikai Deepam Festival", "திருவண்ணாமலை தீபம்", "temple", "Thiruvannamalai Deepam"),
        (10, "Vaikunta Ekadasi", "வைகுண்ட ஏகாதசி", "major", "Gateway to heaven opens"),
        (15, "Maargazhi Pournami", "மார்கழி பௌர்ணமி", "pournami", "Thiruvadhirai - Ardra Darshan"),
        (16, "Thiruvadhirai", "திருவாதிரை", "major", "Cosmic dance of Nataraja"),
        (25, "Hanuman Jayanthi", "ஹனுமான் ஜயந்தி", "festival", "Birth of Lord Hanuman"),
        (30, "Maargazhi Amavasai", "மார்கழி அமாவாசை", "amavasai", "New moon day"),
    ],
    "Thai": [
        (1,  "Thai Month Begins", "தை மாதம் தொடக்கம்", "month_start", "Thai Pirandhal Vazhi Pirakkum"),
        (14, "Makara Sankranti", "மகர சங்கராந்தி", "harvest", "Sun enters Capricorn"),
        (15, "Pongal", "பொங்கல்", "major", "Tamil harvest festival"),
        (15, "Thai Pournami", "தை பௌர்ணமி", "pournami", "Full moon day"),
        (16, "Mattu Pongal", "மாட்டுப் பொங்கல்", "festival", "Cattle worship day"),
        (17, "Kaanum Pongal", "காணும் பொங்கல்", "festival", "Family reunion day"),
        (18, "Thai Poosam", "தைப்பூசம்", "major", "Murugan festival - Kavadi"),
        (25, "Republic Day", "குடியரசு தினம்", "national", "National holiday"),
        (30, "Thai Amavasai", "தை அமாவாசை", "amavasai", "New moon day"),
    ],
    "Maasi": [
        (1,  "Maasi Month Begins", "மாசி மாதம் தொடக்கம்", "month_start", None),
        (5,  "Vasant Panchami", "வசந்த பஞ்சமி", "festival", "Spring festival"),
        (13, "Maha Shivaratri", "மகா சிவராத்திரி", "major", "Great night of Lord Shiva"),
        (15, "Maasi Magam", "மாசி மகம்", "major", "Holy dip festival - Full moon"),
        (20, "Maasi Makam", "மாசி மகம்", "temple", "Float festival in temples"),
        (30, "Maasi Amavasai", "மாசி அமாவாசை", "amavasai", "New moon day"),
    ],
    "Panguni": [
        (1,  "Panguni Month Begins", "பங்குனி மாதம் தொடக்கம்", "month_start", None),
        (8,  "Holi", "ஹோலி", "festival", "Festival of colors"),
        (14, "Karadayan Nombu", "காரடையான் நோன்பு", "vratham", "Married women fast"),
        (15, "Panguni Uthiram", "பங்குனி உத்திரம்", "major", "Divine marriages - Full moon"),
        (17, "Ramanavami", "ராம நவமி", "festival", "Birth of Lord Rama"),
        (25, "Tamil New Year Eve", "தமிழ் புத்தாண்டு முன்தினம்", "preparation", "Preparations for new year"),
        (30, "Panguni Amavasai", "பங்குனி அமாவாசை", "amavasai", "Last new moon of Tamil year"),
    ],
}

# Solar observances: the Tamil-day column above was authored against these
# Gregorian dates, so they are matched on (month, day) instead.
_GREGORIAN_ANCHORS: Dict[str, Tuple[int, int]] = {
    "Tamil New Year":   (4, 14),
    "Vishu":            (4, 14),
    "Makara Sankranti": (1, 14),
    "Pongal":           (1, 15),
    "Mattu Pongal":     (1, 16),
    "Kaanum Pongal":    (1, 17),
    "Republic Day":     (1, 26),
}

# ═══════════════════════════════════════════════════════════════
#  FESTIVALS BY TITHI (accurate strategy)
#  Format: (tithi, name, tamil, type, description, importance)
# ═══════════════════════════════════════════════════════════════
_TITHI_FESTIVALS = {
    "Aadi": [
        ("Amavasya", "Aadi Amavasai", "ஆடி அமாவாசை", "major", "Important Amavasai for ancestors", "high"),
    ],
    "Purattasi": [
        ("Amavasya", "Mahalaya Amavasai", "மகாளய அமாவாசை", "major", "Most important day for ancestor worship", "major"),
    ],
    "Karthikai": [
        ("Punnami", "Karthikai Deepam", "கார்த்திகை தீபம்", "major", "Festival of lights", "major"),
    ],
    "Maargazhi": [
        ("Ekadasi", "Vaikunta Ekadasi", "வைகுண்ட ஏகாதசி", "major", "Gateway to heaven opens", "major"),
    ],
    "Thai": [
        ("Punnami", "Thai Poosam", "தைப்பூசம்", "major", "Murugan festival with Kavadi", "major"),
    ],
    "Maasi": [
        ("Punnami", "Maasi Magam", "மாசி மகம்", "major", "Holy dip festival", "major"),
    ],
    "Panguni": [
        ("Punnami", "Panguni Uthiram", "பங்குனி உத்திரம்", "major", "Divine marriage festival", "major"),
    ],
}

# Month-independent lunar days, checked before the month table
LUNAR_OBSERVANCES: Tuple[FestivalRecord, ...] = (
    FestivalRecord("Amavasai", "அமாவாசை", "lunar", tithi="Amavasya",
                   description="New Moon Day - Ancestor worship", importance="high"),
    FestivalRecord("Pournami", "பௌர்ணமி", "lunar", tithi="Punnami",
                   description="Full Moon Day", importance="medium"),
    FestivalRecord("Ekadasi", "ஏகாதசி", "spiritual", tithi="Ekadasi",
                   description="Fasting day for Lord Vishnu", importance="medium"),
)


def _build_table() -> Mapping[str, Tuple[FestivalRecord, ...]]:
    table = {}
    for month in TAMIL_MONTHS:
        name = month.english_name
        records = [
            FestivalRecord(
                fname, tamil, ftype, month=name, day=day,
                gregorian=_GREGORIAN_ANCHORS.get(fname),
                description=desc,
            )
            for day, fname, tamil, ftype, desc in _DAY_FESTIVALS.get(name, [])
        ]
        records.extend(
            FestivalRecord(
                fname, tamil, ftype, month=name, tithi=tithi,
                description=desc, importance=importance,
            )
            for tithi, fname, tamil, ftype, desc, importance in _TITHI_FESTIVALS.get(name, [])
        )
        table[name] = tuple(records)
    return MappingProxyType(table)


FESTIVAL_TABLE: Mapping[str, Tuple[FestivalRecord, ...]] = _build_table()

# Festival types → display metadata
_TYPE_ROWS = {
    "major":       {"name": "Major Festivals",    "tamil": "முக்கிய திருவிழாக்கள்", "color": "red"},
    "festival":    {"name": "Festivals",          "tamil": "திருவிழாக்கள்",        "color": "orange"},
    "temple":      {"name": "Temple Festivals",   "tamil": "கோவில் திருவிழாக்கள்",  "color": "purple"},
    "vratham":     {"name": "Vratham Days",       "tamil": "விரத நாட்கள்",          "color": "yellow"},
    "pournami":    {"name": "Full Moon",          "tamil": "பௌர்ணமி",              "color": "blue"},
    "amavasai":    {"name": "New Moon",           "tamil": "அமாவாசை",              "color": "gray"},
    "weekly":      {"name": "Weekly Observances", "tamil": "வார விரதங்கள்",         "color": "green"},
    "harvest":     {"name": "Harvest Festivals",  "tamil": "அறுவடை திருவிழாக்கள்",  "color": "amber"},
    "devotion":    {"name": "Devotional Days",    "tamil": "பக்தி நாட்கள்",          "color": "indigo"},
    "devotional":  {"name": "Devotional Months",  "tamil": "பக்தி மாதம்",           "color": "indigo"},
    "ancestor":    {"name": "Ancestor Worship",   "tamil": "பித்ரு வழிபாடு",        "color": "brown"},
    "auspicious":  {"name": "Auspicious Days",    "tamil": "நல்ல நாட்கள்",          "color": "emerald"},
    "month_start": {"name": "Month Beginning",    "tamil": "மாத தொடக்கம்",          "color": "slate"},
    "national":    {"name": "National Holidays",  "tamil": "தேசிய விடுமுறைகள்",     "color": "pink"},
    "preparation": {"name": "Preparation Days",   "tamil": "முன்னேற்பாடு நாட்கள்",   "color": "slate"},
    "lunar":       {"name": "Lunar Days",         "tamil": "சந்திர நாட்கள்",         "color": "sky"},
    "spiritual":   {"name": "Fasting Days",       "tamil": "உபவாச நாட்கள்",         "color": "teal"},
}

FESTIVAL_TYPES: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {ftype: MappingProxyType(meta) for ftype, meta in _TYPE_ROWS.items()}
)


# ═══════════════════════════════════════════════════════════════
#  PUBLIC API
# ═══════════════════════════════════════════════════════════════

def get_month_festivals(month_name: str) -> Tuple[FestivalRecord, ...]:
    """All records for a Tamil month (English name); unknown names → ()."""
    return FESTIVAL_TABLE.get(month_name, ())


def get_major_festivals(month_name: str) -> List[FestivalRecord]:
    return [r for r in get_month_festivals(month_name) if r.type == "major"]


def get_festivals_by_type(ftype: str) -> List[FestivalRecord]:
    """Records of one type across the whole year, in month order."""
    return [r for records in FESTIVAL_TABLE.values() for r in records if r.type == ftype]


def match_day_festivals(tamil_date: TamilDate) -> List[FestivalMatch]:
    """Day-keyed and Gregorian-anchored records matching a TamilDate."""
    d = tamil_date.gregorian_date
    key = (d.month, d.day)
    matches = []
    for rec in get_month_festivals(tamil_date.month.english_name):
        if rec.gregorian is not None:
            hit = rec.gregorian == key
        else:
            hit = rec.day is not None and rec.day == tamil_date.day
        if hit:
            matches.append(FestivalMatch(rec, d))
    return matches


def get_festivals_for_date(value) -> List[FestivalMatch]:
    """Festivals on a Gregorian date using the approximate converter."""
    return match_day_festivals(gregorian_to_tamil(value))


def has_festivals(value) -> bool:
    return bool(get_festivals_for_date(value))


def festival_table_frame() -> pd.DataFrame:
    """Flatten the festival table into one row per record."""
    rows = [r.to_dict() for records in FESTIVAL_TABLE.values() for r in records]
    return pd.DataFrame(rows, columns=[
        "month", "day", "tithi", "gregorian", "name", "tamil",
        "type", "importance", "description",
    ])
