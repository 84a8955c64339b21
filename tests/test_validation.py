import math

import pytest

from location_search import config
from location_search.categories import PLACE_TYPES
from location_search.errors import InvalidRequestError
from location_search.models import Coordinate, OpeningHours, PlaceRecord, SearchOrigin, SearchRequest


def test_validate_rejects_non_finite_origin():
    request = SearchRequest(
        origin=SearchOrigin(Coordinate(math.nan, 21.0)),
        radius_miles=1,
        categories=PLACE_TYPES["BANK"],
    )
    with pytest.raises(InvalidRequestError):
        request.validate()


def test_invalid_request_is_a_value_error():
    request = SearchRequest(
        origin=SearchOrigin(Coordinate(52.2, 21.0)),
        radius_miles=math.inf,
        categories=PLACE_TYPES["BANK"],
    )
    with pytest.raises(ValueError):
        request.validate()


def test_with_radius_returns_new_request():
    request = SearchRequest(
        origin=SearchOrigin(Coordinate(52.2, 21.0)),
        radius_miles=1,
        categories=PLACE_TYPES["BANK"],
    )
    wider = request.with_radius(1.5)
    assert wider.radius_miles == 1.5
    assert request.radius_miles == 1
    assert wider.categories == request.categories
    assert request.max_results == 10
    assert request.min_rating == 0.0


def test_request_defaults_follow_loaded_config(monkeypatch):
    monkeypatch.setattr(config, "DEFAULT_MAX_RESULTS", 4)
    monkeypatch.setattr(config, "DEFAULT_MIN_RATING", 3.5)

    request = SearchRequest(
        origin=SearchOrigin(Coordinate(52.2, 21.0)),
        radius_miles=1,
        categories=PLACE_TYPES["BANK"],
    )

    assert request.max_results == 4
    assert request.min_rating == 3.5
    assert request.with_radius(2).max_results == 4


def test_place_with_opening_hours_is_hashable():
    place = PlaceRecord(
        id="p1",
        name="Clinic",
        address="1 Main St",
        location=Coordinate(52.2, 21.0),
        opening_hours=OpeningHours(open_now=True, periods=({"open": {"day": 1, "time": "0900"}},)),
    )
    assert hash(place) == hash(place.with_distance(0.5).with_distance(None))
    assert len({place, place.with_distance(None)}) == 1
