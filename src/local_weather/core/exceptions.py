"""
Error taxonomy for the weather resolution pipeline.

Each stage wraps its own low-level failures into one of these exceptions.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import PlaceTuple


class WeatherResolutionError(Exception):
    """Base class for all resolution failures."""


class NetworkError(WeatherResolutionError):
    """Connection or transport failure, including non-2xx responses."""


class ParseError(WeatherResolutionError):
    """Malformed XML in any of the provider responses."""


class InvalidPlace(WeatherResolutionError):
    """Reverse geocoding succeeded but yielded an unusable city or country."""

    def __init__(self, message: str, place: Optional["PlaceTuple"] = None):
        super().__init__(message)
        self.place = place


class NoLocationFound(WeatherResolutionError):
    """Identifier resolution produced no usable location identifiers."""

    def __init__(self, message: str, place: Optional["PlaceTuple"] = None):
        super().__init__(message)
        self.place = place
