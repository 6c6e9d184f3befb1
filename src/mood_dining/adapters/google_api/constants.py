"""Constants for the Google Maps Platform adapters.

Places API (legacy web service): https://developers.google.com/maps/documentation/places/web-service
Directions API: https://developers.google.com/maps/documentation/directions
"""

GOOGLE_PLACES_BASE_URL = "https://maps.googleapis.com/maps/api/place"
PLACES_NEARBY_SEARCH_URL = f"{GOOGLE_PLACES_BASE_URL}/nearbysearch/json"
PLACES_TEXT_SEARCH_URL = f"{GOOGLE_PLACES_BASE_URL}/textsearch/json"
PLACES_PHOTO_URL = f"{GOOGLE_PLACES_BASE_URL}/photo"
DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"

GOOGLE_MAPS_SEARCH_URL = "https://www.google.com/maps/search/"

RESTAURANT_TYPE = "restaurant"

MAX_RESULTS_PER_SEARCH = 20
MAX_PHOTOS_PER_PLACE = 3
PHOTO_MAX_WIDTH = 400

# API "status" values that still carry a usable (possibly empty) body
OK_STATUSES = frozenset({"OK", "ZERO_RESULTS"})
# Worth retrying: quota/rate limit and server-side hiccups
TRANSIENT_STATUSES = frozenset({"OVER_QUERY_LIMIT", "UNKNOWN_ERROR"})
DENIED_STATUSES = frozenset({"REQUEST_DENIED", "OVER_DAILY_LIMIT"})
