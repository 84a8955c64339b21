"""Request-scoped value objects for place discovery."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, FrozenSet, Optional, Tuple

from . import config
from .errors import InvalidRequestError


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def is_finite(self) -> bool:
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)


@dataclass(frozen=True)
class SearchOrigin:
    coordinate: Coordinate
    label: Optional[str] = None  # e.g. "home", "work"


@dataclass(frozen=True)
class CategoryDescriptor:
    provider_type_code: str
    # Used for natural-language matching elsewhere, never for ranking.
    synonyms: Tuple[str, ...] = ()


@dataclass(frozen=True)
class OpeningHours:
    open_now: Optional[bool] = None
    # Raw upstream period dicts; left out of the hash.
    periods: Tuple[Any, ...] = field(default=(), hash=False)


@dataclass(frozen=True)
class PlaceRecord:
    id: str
    name: str
    address: str
    location: Coordinate
    rating: Optional[float] = None
    price_level: Optional[int] = None
    category_tags: FrozenSet[str] = field(default_factory=frozenset)
    distance_miles: Optional[float] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    opening_hours: Optional[OpeningHours] = None

    def with_distance(self, miles: float) -> "PlaceRecord":
        return replace(self, distance_miles=miles)

    def to_dict(self) -> Dict[str, Any]:
        hours = None
        if self.opening_hours is not None:
            hours = {
                "open_now": self.opening_hours.open_now,
                "periods": list(self.opening_hours.periods),
            }
        return {
            "place_id": self.id,
            "name": self.name,
            "address": self.address,
            "lat": self.location.latitude,
            "lon": self.location.longitude,
            "rating": self.rating,
            "price_level": self.price_level,
            "types": sorted(self.category_tags),
            "distance_miles": self.distance_miles,
            "phone": self.phone,
            "website": self.website,
            "opening_hours": hours,
        }


@dataclass(frozen=True)
class SearchRequest:
    origin: SearchOrigin
    radius_miles: float
    categories: Tuple[CategoryDescriptor, ...]
    # None resolves to the config defaults in effect at construction time.
    max_results: Optional[int] = None
    min_rating: Optional[float] = None

    def __post_init__(self) -> None:
        if self.max_results is None:
            object.__setattr__(self, "max_results", config.DEFAULT_MAX_RESULTS)
        if self.min_rating is None:
            object.__setattr__(self, "min_rating", config.DEFAULT_MIN_RATING)

    def with_radius(self, radius_miles: float) -> "SearchRequest":
        return replace(self, radius_miles=radius_miles)

    def validate(self) -> None:
        if not self.origin.coordinate.is_finite():
            raise InvalidRequestError("Origin coordinates must be finite numbers")
        if not math.isfinite(self.radius_miles) or self.radius_miles <= 0:
            raise InvalidRequestError(f"radius_miles must be > 0, got {self.radius_miles}")
        if not self.categories:
            raise InvalidRequestError("At least one category is required")
        if self.max_results < 1:
            raise InvalidRequestError(f"max_results must be >= 1, got {self.max_results}")
        if not 0.0 <= self.min_rating <= config.MAX_RATING:
            raise InvalidRequestError(
                f"min_rating must be between 0 and {config.MAX_RATING:g}, got {self.min_rating}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "origin": {
                "lat": self.origin.coordinate.latitude,
                "lon": self.origin.coordinate.longitude,
                "label": self.origin.label,
            },
            "radius_miles": self.radius_miles,
            "categories": [asdict(c) for c in self.categories],
            "max_results": self.max_results,
            "min_rating": self.min_rating,
        }


@dataclass(frozen=True)
class SearchOutcome:
    ranked_places: Tuple[PlaceRecord, ...]
    total_unique_found: int
    request: SearchRequest

    def to_dict(self) -> Dict[str, Any]:
        return {
            "places": [p.to_dict() for p in self.ranked_places],
            "total_unique_found": self.total_unique_found,
            "request": self.request.to_dict(),
        }
