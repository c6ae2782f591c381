import httpx
from pydantic import ValidationError

from quakewatch.config import (
    USGS_API_URL, COUNT_ENDPOINT, QUERY_ENDPOINT, RESPONSE_FORMAT, REQUEST_TIMEOUT,
)
from quakewatch.models import EarthquakeCount, EventCollection
from quakewatch.utils import event_window


class USGSFetchError(Exception):
    """Any failure to fetch or decode a USGS response."""


class USGSClient:
    def __init__(self, http_client=None, base_url=USGS_API_URL):
        # The HTTP client is injectable so tests can swap in a mock transport
        self.http_client = http_client or httpx.AsyncClient(timeout=REQUEST_TIMEOUT)
        self.base_url = base_url.rstrip("/")

    def build_params(self, day):
        starttime, endtime = event_window(day)
        return {"format": RESPONSE_FORMAT, "starttime": starttime, "endtime": endtime}

    async def _get_json(self, endpoint, day):
        """GET one endpoint for the day window and return the decoded JSON body."""
        url = f"{self.base_url}/{endpoint}"
        try:
            response = await self.http_client.get(url, params=self.build_params(day))
            response.raise_for_status()
            return response.json()
        except httpx.RequestError as e:
            raise USGSFetchError(f"Error fetching {endpoint}: {e}") from e
        except httpx.HTTPStatusError as e:
            raise USGSFetchError(f"HTTP Error: {e}") from e
        except ValueError as e:
            raise USGSFetchError(f"Malformed JSON from {endpoint}: {e}") from e

    async def fetch_count(self, day):
        """Number of events in the [day, day+1) window."""
        data = await self._get_json(COUNT_ENDPOINT, day)
        try:
            return EarthquakeCount.model_validate(data)
        except ValidationError as e:
            raise USGSFetchError(f"Unexpected count payload: {e}") from e

    async def fetch_events(self, day):
        """Event properties in the [day, day+1) window, in the order returned."""
        data = await self._get_json(QUERY_ENDPOINT, day)
        try:
            collection = EventCollection.model_validate(data)
        except ValidationError as e:
            raise USGSFetchError(f"Unexpected event payload: {e}") from e
        return collection.events()

    async def aclose(self):
        await self.http_client.aclose()
