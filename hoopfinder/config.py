"""
Fixed settings shared by the parsers, the exporter and the CLI.

All values are read-only after start-up. Functions that depend on "today"
or on the season year take them as parameters and only fall back to the
constants below, so tests can inject their own values.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path


# ---------------------------------------------------------------------------
# Season
# ---------------------------------------------------------------------------

# Curated schedules only carry "M/D-M/D" ranges, the year comes from here
SEASON_YEAR = 2026
SEASON_LABEL = "Spring 2026"

# Captured once so every filter in one run agrees on the date
TODAY = date.today()


# ---------------------------------------------------------------------------
# Calendar output
# ---------------------------------------------------------------------------

TIMEZONE = "America/Los_Angeles"
CITY_SUFFIX = "Seattle, WA"
PRODID = "-//HoopFinder//Seattle Basketball//EN"
DEFAULT_CAL_NAME = "HoopFinder Seattle Basketball"


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = PACKAGE_DIR / "data"
SOURCES_DIR = DATA_DIR / "sources"
CURATED_DIR = DATA_DIR / "curated"
DATASET_PATH = DATA_DIR / "hoop-finder.json"
CAL_DIR = PACKAGE_DIR / "cal"
