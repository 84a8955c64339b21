"""Multi-category search: merge, dedup, filter, rank."""
from __future__ import annotations

import logging
from typing import Iterable, List, Protocol, Set, Tuple

from .categories import expand_categories
from .geo import distance_miles
from .models import Coordinate, PlaceRecord, SearchOrigin, SearchOutcome, SearchRequest

logger = logging.getLogger(__name__)


class PlaceProvider(Protocol):
    def fetch_by_type(
        self,
        origin: SearchOrigin,
        radius_miles: float,
        provider_type_code: str,
        limit: int,
    ) -> List[PlaceRecord]:
        ...


class LocationSearcher:
    def __init__(self, provider: PlaceProvider) -> None:
        self.provider = provider

    def search(self, request: SearchRequest) -> SearchOutcome:
        request.validate()
        type_codes = expand_categories(request.categories)

        # Fetched in caller order so dedup and tie-breaks are reproducible.
        collected: List[PlaceRecord] = []
        for type_code in type_codes:
            collected.extend(
                self.provider.fetch_by_type(
                    request.origin, request.radius_miles, type_code, request.max_results
                )
            )

        unique = dedupe_places(collected)
        kept = filter_by_min_rating(unique, request.min_rating)
        ranked = rank_places(annotate_distances(kept, request.origin.coordinate))
        logger.info(
            "Search radius=%.2fmi types=%s fetched=%s unique=%s kept=%s",
            request.radius_miles,
            ",".join(type_codes),
            len(collected),
            len(unique),
            len(kept),
        )
        return SearchOutcome(
            ranked_places=tuple(ranked[: request.max_results]),
            total_unique_found=len(kept),
            request=request,
        )


def dedupe_places(places: Iterable[PlaceRecord]) -> List[PlaceRecord]:
    seen: Set[str] = set()
    out: List[PlaceRecord] = []
    for place in places:
        if place.id in seen:
            continue
        seen.add(place.id)
        out.append(place)
    return out


def filter_by_min_rating(places: Iterable[PlaceRecord], min_rating: float) -> List[PlaceRecord]:
    # A missing rating is not a failing rating.
    return [p for p in places if p.rating is None or p.rating >= min_rating]


def annotate_distances(places: Iterable[PlaceRecord], origin: Coordinate) -> List[PlaceRecord]:
    return [p.with_distance(distance_miles(origin, p.location)) for p in places]


def ranking_sort_key(place: PlaceRecord) -> Tuple[float, float]:
    distance = place.distance_miles if place.distance_miles is not None else 0.0
    rating = place.rating if place.rating is not None else 0.0
    return (distance, -rating)


def rank_places(places: Iterable[PlaceRecord]) -> List[PlaceRecord]:
    return sorted(places, key=ranking_sort_key)
