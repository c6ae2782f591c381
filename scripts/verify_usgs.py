import asyncio
from datetime import date

from quakewatch.usgs_client import USGSClient, USGSFetchError
from quakewatch.utils import event_window, format_timestamp


async def verify_feed():
    client = USGSClient()
    today = date.today()
    starttime, endtime = event_window(today)
    print(f"Querying USGS for events between {starttime} and {endtime}...")
    try:
        count = await client.fetch_count(today)
        print(f"Count endpoint: {count.count} events (max allowed {count.max_allowed})")

        events = await client.fetch_events(today)
        print(f"Query endpoint: {len(events)} events. Latest 5:")
        for event in events[:5]:
            print(f"  M{event.magnitude}  {format_timestamp(event.timestamp_millis)}  {event.place}")
            print("-" * 20)
    except USGSFetchError as e:
        print(f"Error fetching feed (is the network up?): {e}")
    finally:
        await client.aclose()


if __name__ == "__main__":
    asyncio.run(verify_feed())
