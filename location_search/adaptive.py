"""Radius-expanding search for sparse areas."""
from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from typing import Optional

from . import config
from .errors import InvalidRequestError, SearchCancelledError
from .models import SearchOutcome, SearchRequest
from .searcher import LocationSearcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RadiusExpansionState:
    radius_miles: float
    iteration: int = 0

    def advance(self, max_radius_miles: float) -> "RadiusExpansionState":
        return RadiusExpansionState(
            radius_miles=next_radius(self.radius_miles, max_radius_miles),
            iteration=self.iteration + 1,
        )


def next_radius(radius_miles: float, max_radius_miles: float) -> float:
    return min(radius_miles * config.RADIUS_GROWTH_FACTOR, max_radius_miles)


def max_expansion_iterations(initial_radius_miles: float, max_radius_miles: float) -> int:
    """Upper bound on searches performed by search_with_expanding_radius."""
    if initial_radius_miles >= max_radius_miles:
        return 1
    ratio = max_radius_miles / initial_radius_miles
    return int(math.ceil(math.log(ratio, config.RADIUS_GROWTH_FACTOR))) + 1


def search_with_expanding_radius(
    searcher: LocationSearcher,
    initial_request: SearchRequest,
    min_results: Optional[int] = None,
    max_radius_miles: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
) -> SearchOutcome:
    """Search, widening the radius by 50% until enough places are found.

    The first search always runs at the requested radius, even when it already
    exceeds ``max_radius_miles``. Each widening re-queries from scratch; the
    returned outcome is the last search, not a merge across radii.
    """
    if min_results is None:
        min_results = config.DEFAULT_MIN_RESULTS
    if max_radius_miles is None:
        max_radius_miles = config.DEFAULT_MAX_RADIUS_MILES
    if not math.isfinite(max_radius_miles) or max_radius_miles <= 0:
        raise InvalidRequestError(f"max_radius_miles must be > 0, got {max_radius_miles}")

    state = RadiusExpansionState(radius_miles=initial_request.radius_miles)
    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise SearchCancelledError(
                f"Search cancelled before iteration {state.iteration + 1} "
                f"(radius {state.radius_miles:.2f} mi)"
            )
        outcome = searcher.search(initial_request.with_radius(state.radius_miles))
        found = len(outcome.ranked_places)
        logger.info(
            "Expansion iteration=%s radius=%.2fmi found=%s (need %s)",
            state.iteration + 1,
            state.radius_miles,
            found,
            min_results,
        )
        if found >= min_results:
            return outcome
        if state.radius_miles >= max_radius_miles:
            return outcome
        state = state.advance(max_radius_miles)
