import pytest

from location_search.models import Coordinate, PlaceRecord, SearchOrigin

SF = Coordinate(37.7749, -122.4194)


class FakeProvider:
    """Serves canned PlaceRecords per provider type code and records every call."""

    def __init__(self, rows_by_type=None, errors_by_type=None):
        self.rows_by_type = rows_by_type or {}
        self.errors_by_type = errors_by_type or {}
        self.calls = []

    def fetch_by_type(self, origin, radius_miles, provider_type_code, limit):
        self.calls.append((provider_type_code, radius_miles, limit))
        if provider_type_code in self.errors_by_type:
            raise self.errors_by_type[provider_type_code]
        return list(self.rows_by_type.get(provider_type_code, []))[:limit]


def make_place(place_id, lat_offset=0.0, rating=None, name=None):
    return PlaceRecord(
        id=place_id,
        name=name or place_id,
        address=f"{place_id} street",
        location=Coordinate(SF.latitude + lat_offset, SF.longitude),
        rating=rating,
    )


@pytest.fixture
def sf_origin():
    return SearchOrigin(SF, label="home")
