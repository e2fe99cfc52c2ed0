"""
Place search client.

Turns a reverse-geocoded place into location identifiers ordered by
decreasing geographic precision.

Ordering rule: the primary identifier (text of the woeid element) comes
first, then the alternates found on locality*/admin* elements sorted by their
raw tag name in ascending, case-sensitive order:

    admin1 < admin2 < admin3 < locality1 < locality2 < locality3

The comparison is purely lexical and depends on this provider's exact tag
spellings; the digits are not interpreted.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote

from .client import APIClient
from .xml_stream import XmlEventReducer, iter_xml_events
from ..core import constants
from ..core.exceptions import NoLocationFound
from ..models import LocationIdentifier, PlaceLookup, PlaceTuple, ResolvedPlace

ALTERNATE_TAG_PREFIXES = ("locality", "admin")


@dataclass
class _PlaceCandidate:
    """Everything collected for one place element."""

    primary: Optional[str] = None
    country_code: str = ""
    town: Optional[str] = None
    alternates: List[Tuple[str, str]] = field(default_factory=list)  # (tag, woeid)

    @property
    def is_empty(self) -> bool:
        return not self.primary and not self.alternates and self.town is None


class PlaceSearchExtractor(XmlEventReducer):
    """
    Collects identifiers from a place search response.

    A response can list several candidate places. Each one is validated when
    its place element closes: if its country code does not match the
    reverse-geocoded country (case-insensitively) everything collected for it
    is dropped, so a wrong-country homonym never reaches the final ordering.
    """

    def __init__(self, country_iso: str, logger: Optional[logging.Logger] = None):
        self.country_iso = country_iso
        self.logger = logger or logging.getLogger(__name__)

        self.primary: Optional[str] = None
        self.town: Optional[str] = None
        self.alternates: List[Tuple[str, str]] = []

        self._current = _PlaceCandidate()
        self._in_woeid = False
        self._in_town = False

    def start_tag(self, name, attributes):
        if name == constants.PRIMARY_IDENTIFIER_TAG:
            self._in_woeid = True

        if name.startswith("country"):
            code = attributes.get("code")
            if code is not None:
                self._current.country_code = code

        if name.startswith(ALTERNATE_TAG_PREFIXES):
            if attributes.get("type") == "Town":
                self._in_town = True
            woeid = attributes.get("woeid")
            if woeid:
                self._current.alternates.append((name, woeid))

    def text(self, text):
        if self._in_woeid:
            self._current.primary = text.strip()
        if self._in_town:
            self._current.town = text.strip()

    def end_tag(self, name):
        if name == "place":
            if self._current.country_code.lower() == self.country_iso.lower():
                self._commit(self._current)
            else:
                self.logger.debug(
                    f"Discarding place with country {self._current.country_code!r}, "
                    f"expected {self.country_iso!r}"
                )
            self._current = _PlaceCandidate()

        self._in_woeid = False
        self._in_town = False

    def finish(self):
        # Identifiers outside any place element are never cross-validated
        if not self._current.is_empty:
            self._commit(self._current)
            self._current = _PlaceCandidate()

    def _commit(self, candidate: _PlaceCandidate) -> None:
        # Later matching places override the primary identifier and town
        if candidate.primary:
            self.primary = candidate.primary
        if candidate.town:
            self.town = candidate.town
        self.alternates.extend(candidate.alternates)

    def ordered_identifiers(self) -> List[LocationIdentifier]:
        return order_identifiers(self.primary, self.alternates)


def order_identifiers(
    primary: Optional[str],
    alternates: List[Tuple[str, str]]
) -> List[LocationIdentifier]:
    """
    Order identifiers most precise first.

    Args:
        primary: Primary identifier, placed first when non-empty
        alternates: (tag, identifier) pairs, sorted by raw tag string

    Returns:
        Identifiers without duplicate values, first occurrence kept
    """
    candidates: List[LocationIdentifier] = []
    if primary:
        candidates.append(LocationIdentifier(primary, constants.PRIMARY_IDENTIFIER_TAG))

    for tag, value in sorted(alternates, key=lambda pair: pair[0]):
        candidates.append(LocationIdentifier(value, tag))

    seen = set()
    ordered = []
    for identifier in candidates:
        if identifier.value in seen:
            continue
        seen.add(identifier.value)
        ordered.append(identifier)
    return ordered


class PlaceIdentifierResolver:
    """Resolves places into ordered location identifiers."""

    def __init__(
        self,
        api_client: APIClient,
        app_id: str,
        base_url: str = constants.DEFAULT_PLACES_URL,
        count: int = constants.DEFAULT_PLACES_COUNT,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize place resolver.

        Args:
            api_client: Shared HTTP client
            app_id: Place search credential
            base_url: Place search endpoint
            count: Maximum number of candidate places requested
            logger: Logger instance
        """
        self.api_client = api_client
        self.app_id = app_id
        self.base_url = base_url.rstrip("/")
        self.count = count
        self.logger = logger or logging.getLogger(__name__)

    def build_url(self, place: PlaceTuple) -> str:
        query = quote(f"'{place.city}','{place.country_iso}'", safe="")
        return f"{self.base_url}/places.q({query});count={self.count}"

    def build_params(self) -> Dict[str, str]:
        return {"appid": self.app_id}

    def lookup(self, place: PlaceTuple) -> PlaceLookup:
        """
        Search identifiers for a place.

        Args:
            place: A valid reverse-geocoded place

        Returns:
            PlaceLookup, found with a ResolvedPlace or not found

        Raises:
            NetworkError: On transport failure
            ParseError: On malformed XML
        """
        self.logger.debug(f"Searching identifiers for {place.city!r}, {place.country_iso!r}")

        with self.api_client.open_stream(self.build_url(place), params=self.build_params()) as response:
            extractor = PlaceSearchExtractor(place.country_iso, logger=self.logger)
            extractor.consume(iter_xml_events(self.api_client.iter_chunks(response)))

        identifiers = extractor.ordered_identifiers()
        if not identifiers:
            self.logger.info(f"No identifiers found for {place.city!r}, {place.country_iso!r}")
            return PlaceLookup.not_found()

        self.logger.info(
            f"Resolved {len(identifiers)} identifiers for {place.city!r}: "
            f"{', '.join(f'{i.precision_tag}={i.value}' for i in identifiers)}"
        )
        return PlaceLookup.found(ResolvedPlace(identifiers=identifiers, town=extractor.town))

    def resolve_identifiers(self, place: PlaceTuple) -> ResolvedPlace:
        """
        Search identifiers for a place, failing when none are usable.

        Raises:
            NoLocationFound: If no identifier survives cross-validation
            NetworkError: On transport failure
            ParseError: On malformed XML
        """
        result = self.lookup(place)
        if not result.is_found:
            raise NoLocationFound(
                f"No location identifiers for {place.city!r}, {place.country_iso!r}",
                place=place,
            )
        return result.resolved
