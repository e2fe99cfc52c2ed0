"""
Location data models.

Contains DTOs for coordinates, reverse-geocoded places and location identifiers.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Coordinate:
    """Geographic coordinate in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")


@dataclass(frozen=True)
class PlaceTuple:
    """Administrative place returned by reverse geocoding."""

    city: str  # Already falls back to county when the provider has no city
    county: str
    country_iso: str

    @property
    def is_valid(self) -> bool:
        """A place can only be searched with both a name and a country."""
        return bool(self.city) and bool(self.country_iso)


@dataclass(frozen=True)
class LocationIdentifier:
    """Opaque provider identifier and the tag it was found under."""

    value: str
    precision_tag: str  # e.g. "woeid", "locality3", "admin1"; ordering only


@dataclass
class ResolvedPlace:
    """Identifiers for a place, most precise first."""

    identifiers: List[LocationIdentifier]
    town: Optional[str] = None


@dataclass(frozen=True)
class PlaceLookup:
    """
    Outcome of an identifier lookup.

    Not finding a place is an expected branch, so it is a value here rather
    than an exception; callers that want the exception use
    PlaceIdentifierResolver.resolve_identifiers.
    """

    resolved: Optional[ResolvedPlace] = field(default=None)

    @classmethod
    def found(cls, resolved: ResolvedPlace) -> "PlaceLookup":
        return cls(resolved=resolved)

    @classmethod
    def not_found(cls) -> "PlaceLookup":
        return cls(resolved=None)

    @property
    def is_found(self) -> bool:
        return self.resolved is not None
