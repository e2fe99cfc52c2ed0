"""
Reverse geocoding client.

Turns a coordinate into a city, county and ISO country code using an
OpenStreetMap Nominatim style XML endpoint.
"""

import logging
from typing import Dict, Optional, Set

from .client import APIClient
from .xml_stream import XmlEventReducer, iter_xml_events
from ..core import constants
from ..models import Coordinate, PlaceTuple


class AddressPartsExtractor(XmlEventReducer):
    """
    Collects the city, county and country_code elements of a reverse geocode.

    Text is captured only while directly inside one of the tracked elements;
    every end tag clears all flags.
    """

    TRACKED = {
        "city": "city",
        "county": "county",
        "country_code": "country_iso",
    }

    def __init__(self):
        self.values: Dict[str, str] = {field: "" for field in self.TRACKED.values()}
        self._inside: Set[str] = set()

    def start_tag(self, name, attributes):
        if name in self.TRACKED:
            self._inside.add(self.TRACKED[name])

    def text(self, text):
        for field in self._inside:
            self.values[field] = text.strip()

    def end_tag(self, name):
        self._inside.clear()

    def to_place(self) -> PlaceTuple:
        city = self.values["city"] or self.values["county"]
        return PlaceTuple(
            city=city,
            county=self.values["county"],
            country_iso=self.values["country_iso"],
        )


class GeoReverseClient:
    """Reverse geocoding over HTTP."""

    def __init__(
        self,
        api_client: APIClient,
        base_url: str = constants.DEFAULT_GEOCODING_URL,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reverse geocoding client.

        Args:
            api_client: Shared HTTP client
            base_url: Reverse geocoding endpoint
            logger: Logger instance
        """
        self.api_client = api_client
        self.base_url = base_url
        self.logger = logger or logging.getLogger(__name__)

    def build_params(self, coordinate: Coordinate) -> Dict[str, str]:
        return {
            "format": "xml",
            "lat": str(coordinate.latitude),
            "lon": str(coordinate.longitude),
        }

    def reverse_geocode(self, coordinate: Coordinate) -> PlaceTuple:
        """
        Resolve a coordinate into a place.

        The returned place may be invalid (no city/county or no country);
        judging that is left to the caller.

        Args:
            coordinate: Coordinate to resolve

        Returns:
            PlaceTuple with city falling back to county

        Raises:
            NetworkError: On transport failure
            ParseError: On malformed XML
        """
        self.logger.debug(f"Reverse geocoding {coordinate.latitude},{coordinate.longitude}")

        with self.api_client.open_stream(self.base_url, params=self.build_params(coordinate)) as response:
            extractor = AddressPartsExtractor()
            extractor.consume(iter_xml_events(self.api_client.iter_chunks(response)))

        place = extractor.to_place()
        self.logger.info(
            f"Reverse geocoded to city={place.city!r} county={place.county!r} "
            f"country={place.country_iso!r}"
        )
        return place
