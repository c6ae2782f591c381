# USGS FDSN Event API
USGS_API_URL = "https://earthquake.usgs.gov/fdsnws/event/1"
COUNT_ENDPOINT = "count"
QUERY_ENDPOINT = "query"
RESPONSE_FORMAT = "geojson"

# Poller Settings
FETCH_INTERVAL = 5  # seconds
REQUEST_TIMEOUT = None  # no timeout, requests wait for the server

# Window
WINDOW_TITLE = "EarthquakeApp"
WINDOW_WIDTH = 1000
WINDOW_HEIGHT = 600
UI_POLL_MS = 100  # how often the Tk loop drains published updates

# Status Messages
STATUS_LOADING = "loading"
STATUS_API_FAILED = "Calling API failed"
STATUS_SELECT_DATE = "Please select a date."
STATUS_INVALID_DATE = "Invalid date format. Please enter a valid date."
