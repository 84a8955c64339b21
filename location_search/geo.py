"""Geospatial helpers."""
from __future__ import annotations

import math

from . import config
from .models import Coordinate


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    r = config.EARTH_RADIUS_MILES
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rounding can push antipodal inputs slightly outside [0, 1].
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return r * c


def distance_miles(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates, rounded to 2 decimals."""
    return round(haversine_miles(a.latitude, a.longitude, b.latitude, b.longitude), 2)


def miles_to_meters(miles: float) -> int:
    return int(round(miles * config.METERS_PER_MILE))
