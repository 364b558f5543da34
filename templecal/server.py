"""
FastAPI server for Tamil calendar lookups.

Endpoints:
    GET  /health                              — health check
    GET  /tamil-date?date=2024-01-15          — Tamil date for a Gregorian date
    GET  /festivals?date=2024-01-15           — festivals on a date
    GET  /upcoming?start=2024-01-01&days=30   — important days in a window
    GET  /calendar?start=...&end=...          — festival rows for a date range
    GET  /months                              — the 12 Tamil months
    GET  /festival-types                      — festival categories
    GET  /festival-table?month=Thai           — static festival records

Every lookup accepts ?strategy=approximate|accurate; the accurate strategy
also accepts ?lat=&lon=.
"""
import logging
from datetime import date, datetime
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from panchang import Location
from tamil_calendar import TAMIL_MONTHS, CalendarError, format_tamil_date
from tamil_festivals import FESTIVAL_TYPES, get_festivals_by_type, get_month_festivals
from templecal.config import (
    API_HOST, API_PORT, DEFAULT_LOCATION, LOG_FORMAT, LOG_LEVEL, MAX_RANGE_DAYS,
)
from templecal.resolution import (
    festival_calendar, get_strategy, resolve_festivals, resolve_tamil_date,
    upcoming_important_days,
)

log = logging.getLogger(__name__)

app = FastAPI(
    title="Tamil Calendar API",
    description="Gregorian → Tamil date conversion and festival lookup",
    version="1.0.0",
)

# Allow CORS for the dashboard
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _location(lat: Optional[float], lon: Optional[float]) -> Location:
    if lat is None and lon is None:
        return DEFAULT_LOCATION
    return Location(
        lat if lat is not None else DEFAULT_LOCATION.latitude,
        lon if lon is not None else DEFAULT_LOCATION.longitude,
    )


def _day(value: Optional[str]) -> date:
    if value is None:
        return date.today()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date {value!r}; use YYYY-MM-DD")


def _check_strategy(strategy: Optional[str]) -> str:
    try:
        return get_strategy(strategy)
    except CalendarError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ── Health ──────────────────────────────────────────────────────────
@app.get("/health")
def health():
    return {
        "status": "ok",
        "default_strategy": get_strategy(),
        "location": DEFAULT_LOCATION._asdict(),
        "timestamp": datetime.now().isoformat(),
    }


# ── Tamil date ──────────────────────────────────────────────────────
@app.get("/tamil-date")
def tamil_date(
    date: Optional[str] = Query(default=None, description="YYYY-MM-DD, default today"),
    strategy: Optional[str] = None,
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
):
    """Tamil calendar date for a Gregorian date."""
    day = _day(date)
    name = _check_strategy(strategy)
    result = resolve_tamil_date(day, name, _location(lat, lon))
    if result is None:
        raise HTTPException(status_code=503, detail="Calendar data unavailable")
    body = result.to_dict()
    body["formatted"] = format_tamil_date(result)
    return body


# ── Festivals ───────────────────────────────────────────────────────
@app.get("/festivals")
def festivals(
    date: Optional[str] = Query(default=None, description="YYYY-MM-DD, default today"),
    strategy: Optional[str] = None,
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
    holidays: bool = Query(default=False, description="Include public holidays"),
):
    day = _day(date)
    name = _check_strategy(strategy)
    matches = resolve_festivals(day, name, _location(lat, lon),
                                include_public_holidays=holidays)
    return {
        "date": day.isoformat(),
        "strategy": name,
        "festivals": [m.to_dict() for m in matches],
    }


@app.get("/upcoming")
def upcoming(
    start: Optional[str] = None,
    days: int = Query(default=30, ge=1, le=90),
    strategy: Optional[str] = None,
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
):
    """Major and high-importance days in the next N days."""
    first = _day(start)
    name = _check_strategy(strategy)
    entries = upcoming_important_days(first, days, name, _location(lat, lon))
    return {
        "start": first.isoformat(),
        "days": days,
        "strategy": name,
        "upcoming": [
            {"date": e["date"].isoformat(), "festivals": [m.to_dict() for m in e["festivals"]]}
            for e in entries
        ],
    }


@app.get("/calendar")
def calendar_range(
    start: str,
    end: str,
    strategy: Optional[str] = None,
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
    holidays: bool = False,
):
    first, last = _day(start), _day(end)
    name = _check_strategy(strategy)
    try:
        df = festival_calendar(first, last, name, _location(lat, lon),
                                include_public_holidays=holidays)
    except CalendarError as e:
        raise HTTPException(status_code=400, detail=str(e))
    df["date"] = df["date"].dt.strftime("%Y-%m-%d")
    records = df.astype(object).where(df.notna(), None).to_dict(orient="records")
    return {
        "start": first.isoformat(),
        "end": last.isoformat(),
        "max_days": MAX_RANGE_DAYS,
        "festivals": records,
    }


# ── Reference data ──────────────────────────────────────────────────
@app.get("/months")
def months():
    return {"months": [m.to_dict() for m in TAMIL_MONTHS]}


@app.get("/festival-types")
def festival_types():
    return {"types": {k: dict(v) for k, v in FESTIVAL_TYPES.items()}}


@app.get("/festival-table")
def festival_table(month: Optional[str] = None, type: Optional[str] = None):
    if month is not None:
        records = get_month_festivals(month)
        if type is not None:
            records = [r for r in records if r.type == type]
    elif type is not None:
        records = get_festivals_by_type(type)
    else:
        raise HTTPException(status_code=400, detail="Pass month and/or type")
    return {"festivals": [r.to_dict() for r in records]}


def run():
    import uvicorn
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    log.info("Starting Tamil calendar API on %s:%s", API_HOST, API_PORT)
    uvicorn.run("templecal.server:app", host=API_HOST, port=API_PORT, reload=False)


# ── Run server ──────────────────────────────────────────────────────
if __name__ == "__main__":
    run()
