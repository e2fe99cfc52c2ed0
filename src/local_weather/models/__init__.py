"""
Data models for local weather resolution.

Contains DTOs for coordinates, places, location identifiers and weather records.
"""

from .location import (
    Coordinate,
    PlaceTuple,
    LocationIdentifier,
    ResolvedPlace,
    PlaceLookup,
)
from .weather import WeatherRecord

__all__ = [
    "Coordinate",
    "PlaceTuple",
    "LocationIdentifier",
    "ResolvedPlace",
    "PlaceLookup",
    "WeatherRecord",
]
