import asyncio
import concurrent.futures
import threading
from datetime import date

from quakewatch.config import (
    FETCH_INTERVAL, STATUS_LOADING, STATUS_API_FAILED, STATUS_SELECT_DATE, STATUS_INVALID_DATE,
)
from quakewatch.observable import ObservableList, ObservableValue
from quakewatch.usgs_client import USGSClient, USGSFetchError
from quakewatch.utils import format_date, parse_date


def call_now(callback):
    callback()


class TableController:
    """
    Holds the table state and keeps it fresh.

    Network calls run on a background asyncio loop; every state change they
    cause is handed to `dispatch`, which must run the callback on the UI thread.
    """

    def __init__(self, client=None, dispatch=None, interval=FETCH_INTERVAL, today=date.today):
        self.client = client or USGSClient()
        self._dispatch = dispatch or call_now
        self.interval = interval
        self._today = today

        self.earthquake_data = ObservableList()
        self.earthquake_count = ObservableValue(0)
        self.table_status = ObservableValue("")
        self.current_date = today()

        self._loop = None
        self._thread = None
        self._update_future = None
        self._cycles = set()

    def _publish(self, fn, *args):
        self._dispatch(lambda: fn(*args))

    # --- Poll cycle ---

    async def update_count(self, day):
        try:
            count = await self.client.fetch_count(day)
        except USGSFetchError as e:
            print(f"[Poll] Count request failed: {e}")
            self._publish(self.table_status.set, STATUS_API_FAILED)
            return None
        self._publish(self.earthquake_count.set, count.count)
        return count

    async def update_table(self, day, clear_on_failure=False):
        print(f"[Poll] Updating table for {format_date(day)}...")
        try:
            events = await self.client.fetch_events(day)
        except USGSFetchError as e:
            print(f"[Poll] Event request failed: {e}")
            self._publish(self._show_failure, clear_on_failure)
            return None
        self._publish(self._show_events, events)
        return events

    def _show_events(self, events):
        self.earthquake_data.set_all(events)
        self.table_status.set("")

    def _show_failure(self, clear_list):
        if clear_list:
            self.earthquake_data.clear()
        self.table_status.set(STATUS_API_FAILED)

    async def refresh(self, clear_on_failure=False):
        """One poll cycle: count and event list for the current date window."""
        day = self.current_date
        await asyncio.gather(
            self.update_count(day),
            self.update_table(day, clear_on_failure),
        )

    def run_task(self, clear_on_failure=False):
        """Schedule a poll cycle on the background loop and return its future."""
        if self._loop is None:
            raise RuntimeError("TableController.start() must be called before run_task()")
        return asyncio.run_coroutine_threadsafe(self._tracked_refresh(clear_on_failure), self._loop)

    async def _tracked_refresh(self, clear_on_failure=False):
        # Registered in _cycles so stop() cancels it along with loop cycles
        task = asyncio.current_task()
        self._cycles.add(task)
        try:
            await self.refresh(clear_on_failure)
        finally:
            self._cycles.discard(task)

    # --- User actions (UI thread) ---

    def search(self, value):
        """Handle the Search button. Returns True when a request was issued."""
        if value is None or (isinstance(value, str) and not value.strip()):
            self.table_status.set(STATUS_SELECT_DATE)
            return False
        try:
            day = parse_date(value)
        except ValueError as e:
            print(f"[Poll] Invalid date {value!r}: {e}")
            self.earthquake_data.clear()
            self.table_status.set(STATUS_INVALID_DATE)
            return False
        self.search_by_date(day)
        return True

    def search_by_date(self, day):
        self.current_date = day
        self.table_status.set(STATUS_LOADING)
        return self.run_task(clear_on_failure=True)

    def search_today(self):
        return self.search_by_date(self._today())

    # --- Background loop ---

    async def continuous_update(self):
        """Start a poll cycle every `interval` seconds until cancelled."""
        try:
            while True:
                self._spawn_cycle()
                await asyncio.sleep(self.interval)
        except asyncio.CancelledError:
            print("[Poll] Cancelled")
            self._publish(self.table_status.set, "")
            raise

    def _spawn_cycle(self):
        # Cycles are not awaited here, a slow one may overlap the next
        asyncio.get_running_loop().create_task(self._tracked_refresh())

    def start(self):
        if self._loop is not None:
            return
        print(f"[Poll] Polling USGS every {self.interval} seconds")
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run_loop, name="usgs-poller", daemon=True)
        self._thread.start()
        self._update_future = asyncio.run_coroutine_threadsafe(self.continuous_update(), self._loop)

    def _run_loop(self):
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    async def _shutdown(self):
        in_flight = list(self._cycles)
        for task in in_flight:
            task.cancel()
        await asyncio.gather(*in_flight, return_exceptions=True)
        await self.client.aclose()

    def stop(self, timeout=5):
        if self._loop is None:
            return
        loop, thread = self._loop, self._thread
        self._update_future.cancel()
        try:
            asyncio.run_coroutine_threadsafe(self._shutdown(), loop).result(timeout)
        except concurrent.futures.TimeoutError:
            print("[Poll] Timed out waiting for in-flight requests")
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout)
        if not thread.is_alive():
            loop.close()
        self._loop = self._thread = self._update_future = None
