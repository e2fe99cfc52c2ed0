"""
Weather feed client.

Fetches current conditions and today's forecast for one location identifier.
"""

import logging
from typing import Dict, Optional

from .client import APIClient
from .xml_stream import XmlEventReducer, iter_xml_events
from ..core import constants
from ..models import LocationIdentifier, WeatherRecord


def build_location_label(
    city: Optional[str],
    region: Optional[str],
    country: Optional[str],
    town: Optional[str] = None
) -> str:
    """
    Build the display label of a weather location.

    Args:
        city: City or village name; "--" when the feed has none
        region: Region name; the country is shown instead when empty
        country: Country name
        town: Town from the place search, appended when it differs from city

    Returns:
        "{city[, town]}, {region-or-country}"

    Example:
        build_location_label("Paris", "", "FR", "Le Marais") -> "Paris, Le Marais, FR"
    """
    city_or_village = city if city is not None else constants.MISSING_LABEL_PART
    if not region:
        region = country if country is not None else constants.MISSING_LABEL_PART

    if town and town != city_or_village:
        city_or_village = f"{city_or_village}, {town}"

    return f"{city_or_village}, {region}"


class WeatherFeedExtractor(XmlEventReducer):
    """Reads the condition, first forecast and location elements of a feed."""

    def __init__(self, town: Optional[str] = None, logger: Optional[logging.Logger] = None):
        self.town = town
        self.logger = logger or logging.getLogger(__name__)
        self.record = WeatherRecord()
        self.location_label: Optional[str] = None
        self._has_today_forecast = False

    def start_tag(self, name, attributes):
        if name == "condition":
            self.record.temperature = self._parse_int(attributes, "temp")
            self.record.condition_code = self._parse_int(attributes, "code")
            if "text" in attributes:
                self.record.condition_text = attributes["text"]

        elif name == "forecast" and not self._has_today_forecast:
            # TODO: compare the forecast date with the feed's local date; the
            # first forecast entry is assumed to be today's.
            self._has_today_forecast = True
            self.record.forecast_condition_code_today = self._parse_int(attributes, "code")
            if "text" in attributes:
                self.record.forecast_text_today = attributes["text"]

        elif name == "location":
            self.location_label = build_location_label(
                attributes.get("city"),
                attributes.get("region"),
                attributes.get("country"),
                self.town,
            )

    def _parse_int(self, attributes: Dict[str, str], key: str) -> Optional[int]:
        value = attributes.get(key)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            self.logger.warning(f"Ignoring non-integer {key}={value!r} in weather feed")
            return None


class WeatherFetcher:
    """Weather feed over HTTP."""

    def __init__(
        self,
        api_client: APIClient,
        base_url: str = constants.DEFAULT_WEATHER_URL,
        units: str = constants.DEFAULT_UNITS,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize weather fetcher.

        Args:
            api_client: Shared HTTP client
            base_url: Weather feed endpoint
            units: Default units ("f" or "c") when a call does not pass any
            logger: Logger instance
        """
        self.api_client = api_client
        self.base_url = base_url
        self.units = units
        self.logger = logger or logging.getLogger(__name__)

    def build_params(self, identifier: LocationIdentifier, units: str) -> Dict[str, str]:
        return {"w": identifier.value, "u": units}

    def fetch_weather(
        self,
        identifier: LocationIdentifier,
        fallback_label: str = "",
        town: Optional[str] = None,
        units: Optional[str] = None
    ) -> WeatherRecord:
        """
        Fetch weather for one identifier.

        A record without temperature or condition code is still returned;
        whether it is usable is up to the caller.

        Args:
            identifier: Location identifier to query
            fallback_label: Label used when the feed has no location element
            town: Town name appended to the feed's city when different
            units: "f" or "c"; defaults to the fetcher's units

        Returns:
            WeatherRecord

        Raises:
            NetworkError: On transport failure
            ParseError: On malformed XML
        """
        units = units or self.units
        params = self.build_params(identifier, units)

        with self.api_client.open_stream(self.base_url, params=params) as response:
            extractor = WeatherFeedExtractor(town=town, logger=self.logger)
            extractor.consume(iter_xml_events(self.api_client.iter_chunks(response)))

        record = extractor.record
        record.location_label = (
            extractor.location_label if extractor.location_label is not None else fallback_label
        )
        return record
