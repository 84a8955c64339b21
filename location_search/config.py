"""Project configuration.

Loads user-defined search parameters from search_config.json when available,
falling back to sensible defaults. Keep API request shapes centralized here.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

_REPO_ROOT = Path(__file__).resolve().parent.parent

# --- API endpoints ---

PLACES_BASE_URL = "https://maps.googleapis.com/maps/api/place"
PLACES_NEARBY_SEARCH_URL = f"{PLACES_BASE_URL}/nearbysearch/json"
PLACES_DETAILS_URL = f"{PLACES_BASE_URL}/details/json"

# --- Field lists ---

PLACES_DETAILS_FIELDS = (
    "place_id,name,formatted_address,geometry,rating,price_level,types,"
    "formatted_phone_number,website,opening_hours"
)

# --- Upstream statuses ---

STATUS_OK = "OK"
STATUS_ZERO_RESULTS = "ZERO_RESULTS"

# --- Units ---

METERS_PER_MILE = 1609.34
EARTH_RADIUS_MILES = 3959.0

# --- Search defaults (used when no search_config.json) ---

_DEFAULT_MAX_RESULTS = 10
_DEFAULT_MIN_RATING = 0.0
_DEFAULT_MIN_RESULTS = 3
_DEFAULT_MAX_RADIUS_MILES = 25.0
_DEFAULT_RADIUS_MILES = 2.0

DEFAULT_MAX_RESULTS = _DEFAULT_MAX_RESULTS
DEFAULT_MIN_RATING = _DEFAULT_MIN_RATING
DEFAULT_MIN_RESULTS = _DEFAULT_MIN_RESULTS
DEFAULT_MAX_RADIUS_MILES = _DEFAULT_MAX_RADIUS_MILES
DEFAULT_RADIUS_MILES = _DEFAULT_RADIUS_MILES
RADIUS_GROWTH_FACTOR = 1.5
MAX_RATING = 5.0

# --- Mutable config (populated by load_search_config or directly) ---

ORIGIN: Optional[Dict[str, Any]] = None
CATEGORIES: List[str] = []

# --- HTTP ---

HTTP_TIMEOUT_SECONDS = 30
HTTP_RETRY_MAX = 3
HTTP_BACKOFF_BASE = 0.5
HTTP_BACKOFF_MAX = 8.0

# --- Outputs ---

OUTPUT_DIR = "out"


def load_search_config(path: Optional[str] = None) -> bool:
    """Load search configuration from a JSON file.

    Updates module-level globals with values from the config file.
    Returns True if config was loaded, False if file not found.
    """
    if path is None:
        path = str(_REPO_ROOT / "search_config.json")

    config_path = Path(path)
    if not config_path.exists():
        return False

    with open(config_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    globals_ref = globals()

    origin = data.get("origin", {})
    lat = origin.get("lat")
    lon = origin.get("lon")
    if lat is not None and lon is not None:
        globals_ref["ORIGIN"] = {
            "lat": float(lat),
            "lon": float(lon),
            "label": origin.get("label"),
        }

    categories = data.get("categories", [])
    if categories:
        globals_ref["CATEGORIES"] = list(categories)

    radius = data.get("radius_miles")
    if radius is not None:
        globals_ref["DEFAULT_RADIUS_MILES"] = float(radius)

    max_results = data.get("max_results")
    if max_results is not None:
        globals_ref["DEFAULT_MAX_RESULTS"] = int(max_results)

    min_rating = data.get("min_rating")
    if min_rating is not None:
        globals_ref["DEFAULT_MIN_RATING"] = float(min_rating)

    expansion = data.get("expansion", {})
    if "min_results" in expansion:
        globals_ref["DEFAULT_MIN_RESULTS"] = int(expansion["min_results"])
    if "max_radius_miles" in expansion:
        globals_ref["DEFAULT_MAX_RADIUS_MILES"] = float(expansion["max_radius_miles"])

    http = data.get("http", {})
    if "timeout_seconds" in http:
        globals_ref["HTTP_TIMEOUT_SECONDS"] = int(http["timeout_seconds"])
    if "retry_max" in http:
        globals_ref["HTTP_RETRY_MAX"] = int(http["retry_max"])

    return True
