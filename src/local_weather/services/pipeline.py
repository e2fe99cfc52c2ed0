"""
Weather resolution pipeline.

Coordinate -> place -> ordered location identifiers -> first valid weather record.
"""

import logging
from typing import Iterator, Optional, TYPE_CHECKING

from ..api import APIClient, GeoReverseClient, PlaceIdentifierResolver, WeatherFetcher
from ..core import WeatherPreferences
from ..core.exceptions import InvalidPlace
from ..models import Coordinate, PlaceTuple, ResolvedPlace, WeatherRecord

if TYPE_CHECKING:
    from ..core.config import Config


class WeatherResolutionPipeline:
    """
    Resolve a coordinate into current weather.

    Stages run strictly one after the other. Identifiers are tried in order,
    one request at a time, and the first valid record wins. Transport and
    parse failures abort the whole resolution; an incomplete record only
    moves on to the next identifier.
    """

    def __init__(
        self,
        geocoder: GeoReverseClient,
        resolver: PlaceIdentifierResolver,
        fetcher: WeatherFetcher,
        preferences: Optional[WeatherPreferences] = None,
        api_client: Optional[APIClient] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize pipeline.

        Args:
            geocoder: Reverse geocoding stage
            resolver: Place search stage
            fetcher: Weather feed stage
            preferences: Default preferences when resolve() gets none
            api_client: Shared HTTP client released by close()
            logger: Logger instance
        """
        self.geocoder = geocoder
        self.resolver = resolver
        self.fetcher = fetcher
        self.preferences = preferences or WeatherPreferences()
        self.api_client = api_client
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(
        cls,
        config: "Config",
        preferences: Optional[WeatherPreferences] = None,
        logger: Optional[logging.Logger] = None
    ) -> "WeatherResolutionPipeline":
        """
        Build all stages around one shared HTTP client.

        Args:
            config: Application configuration
            preferences: Default preferences
            logger: Logger instance

        Returns:
            Configured pipeline
        """
        api_client = APIClient(
            timeout=config.api_timeout,
            max_retries=config.api_max_retries,
            user_agent=config.user_agent,
            logger=logger
        )
        preferences = preferences or WeatherPreferences.from_store(config.preferences, logger)

        return cls(
            geocoder=GeoReverseClient(api_client, base_url=config.geocoding_base_url, logger=logger),
            resolver=PlaceIdentifierResolver(
                api_client,
                app_id=config.places_app_id,
                base_url=config.places_base_url,
                count=config.places_count,
                logger=logger
            ),
            fetcher=WeatherFetcher(
                api_client,
                base_url=config.weather_base_url,
                units=preferences.units,
                logger=logger
            ),
            preferences=preferences,
            api_client=api_client,
            logger=logger
        )

    def resolve(
        self,
        coordinate: Coordinate,
        preferences: Optional[WeatherPreferences] = None
    ) -> Optional[WeatherRecord]:
        """
        Resolve current weather for a coordinate.

        Args:
            coordinate: Location to resolve
            preferences: Preferences for this call; defaults to the pipeline's

        Returns:
            First valid WeatherRecord, or None if no identifier had usable data

        Raises:
            InvalidPlace: If reverse geocoding yields no city/county or country
            NoLocationFound: If the place search yields no usable identifier
            NetworkError: On any transport failure
            ParseError: On any malformed response
        """
        preferences = preferences or self.preferences
        self.logger.debug(f"Using location: {coordinate.latitude},{coordinate.longitude}")

        place = self.geocoder.reverse_geocode(coordinate)
        if not place.is_valid:
            raise InvalidPlace(
                f"Could not determine a valid place for "
                f"{coordinate.latitude},{coordinate.longitude}: {place}",
                place=place,
            )

        resolved = self.resolver.resolve_identifiers(place)

        for record in self._attempts(place, resolved, preferences.units):
            if record.is_valid:
                return record

        self.logger.info(f"No weather data found for {place.city!r} at any precision")
        return None

    def _attempts(
        self,
        place: PlaceTuple,
        resolved: ResolvedPlace,
        units: str
    ) -> Iterator[WeatherRecord]:
        """Fetch one identifier at a time, most precise first."""
        fallback_label = resolved.town or place.city
        for identifier in resolved.identifiers:
            self.logger.debug(f"Trying {identifier.precision_tag} identifier {identifier.value}")
            record = self.fetcher.fetch_weather(
                identifier,
                fallback_label=fallback_label,
                town=resolved.town,
                units=units
            )
            if not record.is_valid:
                self.logger.debug(f"Incomplete weather data for {identifier.value}, trying next")
            yield record

    def close(self) -> None:
        """Release the shared HTTP client."""
        if self.api_client:
            self.api_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
