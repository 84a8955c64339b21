import pytest
import requests

from location_search import config
from location_search.errors import ProviderError, ProviderStatusError, ProviderTransportError
from location_search.http import HttpClient, RequestMetrics
from location_search.models import Coordinate, SearchOrigin
from location_search.places_client import PlacesClient


class FakeResponse:
    def __init__(self, payload, status_code=200, headers=None):
        self._payload = payload
        self.status_code = status_code
        self.headers = headers or {}

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, responses_by_url):
        self.responses_by_url = responses_by_url
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, dict(params or {})))
        payload = self.responses_by_url.get(url, {"status": "ZERO_RESULTS"})
        if isinstance(payload, Exception):
            raise payload
        return FakeResponse(payload)


def make_places_client(responses_by_url, metrics=None):
    client = HttpClient(
        api_key="dummy",
        timeout=1,
        retry_max=1,
        backoff_base=0.0,
        backoff_max=0.0,
        metrics=metrics,
    )
    client.session = FakeSession(responses_by_url)
    return PlacesClient(client), client.session


def _row(place_id, lat=37.77, lng=-122.41, **extra):
    row = {"place_id": place_id, "name": place_id, "geometry": {"location": {"lat": lat, "lng": lng}}}
    row.update(extra)
    return row


ORIGIN = SearchOrigin(Coordinate(37.7749, -122.4194), label="home")


def test_fetch_by_type_sends_meters_and_type():
    places_client, session = make_places_client(
        {config.PLACES_NEARBY_SEARCH_URL: {"status": "OK", "results": [_row("p1")]}}
    )

    places = places_client.fetch_by_type(ORIGIN, 2, "pharmacy", limit=5)

    assert [p.id for p in places] == ["p1"]
    url, params = session.calls[0]
    assert url == config.PLACES_NEARBY_SEARCH_URL
    assert params["location"] == "37.7749,-122.4194"
    assert params["radius"] == "3219"
    assert params["type"] == "pharmacy"
    assert params["key"] == "dummy"


def test_fetch_by_type_truncates_to_limit_in_provider_order():
    rows = [_row(f"p{i}") for i in range(6)]
    places_client, _ = make_places_client(
        {config.PLACES_NEARBY_SEARCH_URL: {"status": "OK", "results": rows}}
    )

    places = places_client.fetch_by_type(ORIGIN, 1, "gym", limit=3)

    assert [p.id for p in places] == ["p0", "p1", "p2"]


def test_zero_results_is_empty_not_error():
    places_client, _ = make_places_client(
        {config.PLACES_NEARBY_SEARCH_URL: {"status": "ZERO_RESULTS", "results": []}}
    )
    assert places_client.fetch_by_type(ORIGIN, 1, "bank", limit=10) == []


def test_error_status_raises_with_upstream_details():
    places_client, _ = make_places_client(
        {
            config.PLACES_NEARBY_SEARCH_URL: {
                "status": "REQUEST_DENIED",
                "error_message": "The provided API key is invalid.",
            }
        }
    )

    with pytest.raises(ProviderStatusError) as excinfo:
        places_client.fetch_by_type(ORIGIN, 1, "bank", limit=10)

    assert excinfo.value.status == "REQUEST_DENIED"
    assert excinfo.value.message == "The provided API key is invalid."


def test_timeout_surfaces_as_transport_error():
    places_client, _ = make_places_client(
        {config.PLACES_NEARBY_SEARCH_URL: requests.Timeout("read timed out")}
    )
    with pytest.raises(ProviderTransportError):
        places_client.fetch_by_type(ORIGIN, 1, "bank", limit=10)


def test_fetch_details_normalizes_result():
    metrics = RequestMetrics()
    detail = _row(
        "p9",
        formatted_address="9 Elm St",
        vicinity="ignored for details",
        rating=4.6,
        opening_hours={"open_now": False, "periods": [{"open": {"day": 1, "time": "0900"}}]},
    )
    places_client, session = make_places_client(
        {config.PLACES_DETAILS_URL: {"status": "OK", "result": detail}}, metrics=metrics
    )

    place = places_client.fetch_details("p9")

    assert place.id == "p9"
    assert place.address == "9 Elm St"
    assert place.rating == 4.6
    assert place.opening_hours.open_now is False
    assert len(place.opening_hours.periods) == 1
    _, params = session.calls[0]
    assert params["place_id"] == "p9"
    assert params["fields"] == config.PLACES_DETAILS_FIELDS
    assert metrics.network_details == 1


def test_fetch_details_non_ok_returns_none_and_logs(caplog):
    places_client, _ = make_places_client(
        {config.PLACES_DETAILS_URL: {"status": "NOT_FOUND"}}
    )

    with caplog.at_level("WARNING"):
        assert places_client.fetch_details("missing") is None

    assert "NOT_FOUND" in caplog.text


def test_limit_cuts_raw_rows_before_skipping_malformed_ones():
    rows = [{"name": "no-id", "geometry": {"location": {"lat": 1.0, "lng": 2.0}}}]
    rows += [_row(f"p{i}") for i in range(4)]
    places_client, _ = make_places_client(
        {config.PLACES_NEARBY_SEARCH_URL: {"status": "OK", "results": rows}}
    )

    places = places_client.fetch_by_type(ORIGIN, 1, "gym", limit=3)

    assert [p.id for p in places] == ["p0", "p1"]


def test_non_object_body_is_provider_error():
    places_client, _ = make_places_client({config.PLACES_NEARBY_SEARCH_URL: ["unexpected"]})

    with pytest.raises(ProviderError):
        places_client.fetch_by_type(ORIGIN, 1, "gym", limit=3)
