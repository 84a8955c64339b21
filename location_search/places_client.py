"""Places API client and response normalization."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from . import config
from .errors import ProviderStatusError
from .geo import miles_to_meters
from .http import HttpClient
from .models import Coordinate, OpeningHours, PlaceRecord, SearchOrigin

logger = logging.getLogger(__name__)


class PlacesClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http = http_client

    def fetch_by_type(
        self,
        origin: SearchOrigin,
        radius_miles: float,
        provider_type_code: str,
        limit: int,
    ) -> List[PlaceRecord]:
        params = build_nearby_search_params(origin, miles_to_meters(radius_miles), provider_type_code)
        response = self.http.get_json(config.PLACES_NEARBY_SEARCH_URL, params, kind="nearby")
        status = response.get("status")
        if status == config.STATUS_ZERO_RESULTS:
            return []
        if status != config.STATUS_OK:
            raise ProviderStatusError(str(status), response.get("error_message"))
        places = parse_nearby_response(response, limit=limit)
        logger.debug(
            "type=%s radius_miles=%s rows=%s limit=%s",
            provider_type_code,
            radius_miles,
            len(places),
            limit,
        )
        return places

    def fetch_details(self, place_id: str) -> Optional[PlaceRecord]:
        params = {"place_id": place_id, "fields": config.PLACES_DETAILS_FIELDS}
        response = self.http.get_json(config.PLACES_DETAILS_URL, params, kind="details")
        status = response.get("status")
        if status != config.STATUS_OK:
            logger.warning(
                "Place details error for %s: %s %s",
                place_id,
                status,
                response.get("error_message") or "",
            )
            return None
        result = response.get("result") or {}
        return parse_place(result, address_keys=("formatted_address",))


def build_nearby_search_params(
    origin: SearchOrigin, radius_m: int, provider_type_code: str
) -> Dict[str, Any]:
    point = origin.coordinate
    return {
        "location": f"{point.latitude},{point.longitude}",
        "radius": str(int(radius_m)),
        "type": provider_type_code,
    }


# Adapter/mapper for Places response fields

def parse_nearby_response(
    response: Dict[str, Any], limit: Optional[int] = None
) -> List[PlaceRecord]:
    rows = response.get("results") or []
    # Upstream order is relevance order; the cut applies to raw rows.
    if limit is not None:
        rows = rows[:limit]
    parsed: List[PlaceRecord] = []
    for row in rows:
        place = parse_place(row)
        if place is not None:
            parsed.append(place)
    return parsed


def parse_place(
    row: Dict[str, Any],
    address_keys: tuple = ("vicinity", "formatted_address"),
) -> Optional[PlaceRecord]:
    if not isinstance(row, dict):
        logger.warning("Skipping malformed place row: %r", row)
        return None
    place_id = row.get("place_id")
    if not place_id:
        logger.warning("Skipping place row without place_id: %s", row.get("name"))
        return None
    location = parse_location(row)
    if location is None:
        logger.warning("Skipping place %s without a usable location", place_id)
        return None

    address = ""
    for key in address_keys:
        if row.get(key):
            address = str(row[key])
            break

    return PlaceRecord(
        id=str(place_id),
        name=str(row.get("name") or ""),
        address=address,
        location=location,
        rating=_optional_float(row.get("rating")),
        price_level=_optional_int(row.get("price_level")),
        category_tags=frozenset(row.get("types") or []),
        phone=row.get("formatted_phone_number") or None,
        website=row.get("website") or None,
        opening_hours=parse_opening_hours(row.get("opening_hours")),
    )


def parse_location(row: Dict[str, Any]) -> Optional[Coordinate]:
    geometry = row.get("geometry") or {}
    location = geometry.get("location") or {}
    lat = location.get("lat")
    lng = location.get("lng")
    if lat is None or lng is None:
        return None
    try:
        return Coordinate(latitude=float(lat), longitude=float(lng))
    except (TypeError, ValueError):
        return None


def parse_opening_hours(raw: Any) -> Optional[OpeningHours]:
    if not isinstance(raw, dict):
        return None
    open_now = raw.get("open_now")
    periods = raw.get("periods") or []
    return OpeningHours(
        open_now=bool(open_now) if open_now is not None else None,
        periods=tuple(periods),
    )


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
