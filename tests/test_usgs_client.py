"""
Tests for quakewatch/usgs_client.py against an httpx.MockTransport.
"""
import asyncio
from datetime import date

import httpx
import pytest

from quakewatch.config import USGS_API_URL
from quakewatch.usgs_client import USGSClient, USGSFetchError


class TestRequests:
    def test_count_request_shape(self, client, handler):
        asyncio.run(client.fetch_count(date(2024, 1, 1)))

        request = handler.requests[0]
        assert request.method == "GET"
        assert str(request.url).startswith(f"{USGS_API_URL}/count?")
        assert request.url.params["format"] == "geojson"
        assert request.url.params["starttime"] == "2024-01-01"
        assert request.url.params["endtime"] == "2024-01-02"

    def test_query_request_shape(self, client, handler):
        asyncio.run(client.fetch_events(date(2024, 1, 1)))

        assert handler.windows("query") == [("2024-01-01", "2024-01-02")]

    def test_custom_base_url(self, handler):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = USGSClient(http_client=http_client, base_url="https://example.test/fdsn/")
        asyncio.run(client.fetch_count(date(2024, 1, 1)))

        assert str(handler.requests[0].url).startswith("https://example.test/fdsn/count?")

    def test_default_client_has_no_timeout(self):
        client = USGSClient()
        try:
            assert client.http_client.timeout.read is None
            assert client.http_client.timeout.connect is None
        finally:
            asyncio.run(client.aclose())


class TestDecoding:
    def test_fetch_count(self, client):
        count = asyncio.run(client.fetch_count(date(2024, 1, 1)))
        assert count.count == 2
        assert count.max_allowed == 20000

    def test_fetch_events_returns_properties_in_order(self, client, collection_payload):
        events = asyncio.run(client.fetch_events(date(2024, 1, 1)))

        expected = [f["properties"] for f in collection_payload["features"]]
        assert [e.title for e in events] == [p["title"] for p in expected]
        assert [e.timestamp_millis for e in events] == [p["time"] for p in expected]
        assert [e.magnitude for e in events] == [p["mag"] for p in expected]


class TestFailures:
    def test_http_error_status(self, make_client, handler):
        handler.fail.add("query")
        client = make_client(handler)

        with pytest.raises(USGSFetchError) as excinfo:
            asyncio.run(client.fetch_events(date(2024, 1, 1)))
        assert isinstance(excinfo.value.__cause__, httpx.HTTPStatusError)

    def test_transport_error(self, make_client):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(refuse)
        with pytest.raises(USGSFetchError) as excinfo:
            asyncio.run(client.fetch_count(date(2024, 1, 1)))
        assert isinstance(excinfo.value.__cause__, httpx.RequestError)

    def test_malformed_json(self, make_client):
        client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(USGSFetchError):
            asyncio.run(client.fetch_events(date(2024, 1, 1)))

    def test_unexpected_count_shape(self, make_client):
        client = make_client(lambda request: httpx.Response(200, json={"total": 3}))

        with pytest.raises(USGSFetchError):
            asyncio.run(client.fetch_count(date(2024, 1, 1)))

    def test_unexpected_event_shape(self, make_client):
        payload = {"type": "FeatureCollection",
                   "features": [{"type": "Feature", "properties": {"mag": 1.0}}]}
        client = make_client(lambda request: httpx.Response(200, json=payload))

        with pytest.raises(USGSFetchError):
            asyncio.run(client.fetch_events(date(2024, 1, 1)))


def test_aclose_closes_http_client(client):
    asyncio.run(client.aclose())
    assert client.http_client.is_closed
