"""
Shared configuration for the Tamil calendar service.

Values are read once at import from the environment (a local .env file is
honoured).
"""
import os

from dotenv import load_dotenv

from panchang import Location

load_dotenv()

# ── Calendar ──
STRATEGIES = ("approximate", "accurate")
DEFAULT_STRATEGY = os.environ.get("TEMPLECAL_STRATEGY", "approximate").lower()

DEFAULT_LOCATION = Location(
    latitude=float(os.environ.get("TEMPLECAL_LATITUDE", "13.0827")),
    longitude=float(os.environ.get("TEMPLECAL_LONGITUDE", "80.2707")),
    name=os.environ.get("TEMPLECAL_LOCATION_NAME", "Chennai"),
)

MONTH_SCAN_DAYS = int(os.environ.get("TEMPLECAL_MONTH_SCAN_DAYS", "35"))
UPCOMING_DAYS = int(os.environ.get("TEMPLECAL_UPCOMING_DAYS", "30"))
MAX_RANGE_DAYS = 366

# Tamil Nadu public holidays (holidays package subdivision code)
HOLIDAY_SUBDIV = os.environ.get("TEMPLECAL_HOLIDAY_SUBDIV", "TN")

# ── Logging ──
LOG_LEVEL = os.environ.get("TEMPLECAL_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

# ── Server ──
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
