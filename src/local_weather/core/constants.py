"""
Application-wide constants for local weather resolution.

Provider endpoints here are defaults only; every one of them can be overridden
through the configuration file or the environment.
"""

# HTTP client
DEFAULT_USER_AGENT = "LocalWeather/0.1"
DEFAULT_TIMEOUT = 15  # seconds, connect and read
DEFAULT_MAX_RETRIES = 2
RESPONSE_CHUNK_SIZE = 8192  # bytes fed to the XML parser at a time

# Reverse geocoding (OpenStreetMap Nominatim, no key required)
DEFAULT_GEOCODING_URL = "https://nominatim.openstreetmap.org/reverse"

# Place search (GeoPlanet-style places.q endpoint, requires an appid)
DEFAULT_PLACES_URL = "http://where.yahooapis.com/v1"
DEFAULT_PLACES_COUNT = 5

# Weather feed (RSS feed keyed by location identifier)
DEFAULT_WEATHER_URL = "http://weather.yahooapis.com/forecastrss"

# Units accepted by the weather feed
UNITS_FAHRENHEIT = "f"
UNITS_CELSIUS = "c"
SUPPORTED_UNITS = (UNITS_FAHRENHEIT, UNITS_CELSIUS)
DEFAULT_UNITS = UNITS_FAHRENHEIT

# Preference store keys
PREF_WEATHER_UNITS = "pref_weather_units"
PREF_WEATHER_SHORTCUT = "pref_weather_shortcut"
DEFAULT_CLICK_TARGET = "https://www.google.com/search?q=weather"

# Tag of the primary identifier in place search results
PRIMARY_IDENTIFIER_TAG = "woeid"

# Placeholder used when the weather feed omits the city
MISSING_LABEL_PART = "--"
