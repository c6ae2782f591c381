"""
Pytest fixtures for QuakeWatch tests.

Provides canned USGS payloads and a USGSClient wired to an
httpx.MockTransport, so nothing here touches the live API.
"""

import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from quakewatch.usgs_client import USGSClient  # noqa: E402


def _feature(mag, place, time, title, event_type="earthquake"):
    return {
        "type": "Feature",
        "id": f"us{time}",
        "geometry": {"type": "Point", "coordinates": [-117.5, 35.7, 8.2]},
        "properties": {
            "mag": mag,
            "place": place,
            "time": time,
            "updated": time + 60000,
            "type": event_type,
            "title": title,
            "status": "reviewed",
            "url": "https://earthquake.usgs.gov/earthquakes/eventpage/x",
        },
    }


@pytest.fixture
def collection_payload():
    """A /query response with two events and the usual extra USGS fields."""
    return {
        "type": "FeatureCollection",
        "metadata": {"generated": 1704153600000, "count": 2, "status": 200},
        "features": [
            _feature(4.5, "10km N of X", 1704067200000, "M 4.5 - 10km N of X"),
            _feature(1.2, None, 1704070861123, "M 1.2 - Unknown", "quarry blast"),
        ],
        "bbox": [-117.5, 35.7, 8.2, -117.5, 35.7, 8.2],
    }


@pytest.fixture
def count_payload():
    return {"count": 2, "maxAllowed": 20000}


class RecordingHandler:
    """MockTransport handler serving canned JSON per endpoint and recording requests."""

    def __init__(self, count=None, query=None, fail=()):
        self.responses = {"count": count, "query": query}
        self.fail = set(fail)
        self.requests = []

    def endpoint(self, request):
        return request.url.path.rsplit("/", 1)[-1]

    def __call__(self, request):
        self.requests.append(request)
        endpoint = self.endpoint(request)
        if endpoint in self.fail:
            return httpx.Response(503, text="Service Unavailable")
        return httpx.Response(200, json=self.responses[endpoint])

    def windows(self, endpoint):
        return [
            (r.url.params["starttime"], r.url.params["endtime"])
            for r in self.requests if self.endpoint(r) == endpoint
        ]


@pytest.fixture
def handler(count_payload, collection_payload):
    return RecordingHandler(count=count_payload, query=collection_payload)


@pytest.fixture
def make_client():
    def _make(handler):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return USGSClient(http_client=http_client)
    return _make


@pytest.fixture
def client(make_client, handler):
    return make_client(handler)
