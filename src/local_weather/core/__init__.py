"""
Core utilities for local weather resolution.

Provides configuration, logging, preferences and the error taxonomy.
"""

from .config import Config
from .logger import setup_logger, LoggerContext
from .preferences import WeatherPreferences
from .exceptions import (
    WeatherResolutionError,
    NetworkError,
    ParseError,
    InvalidPlace,
    NoLocationFound,
)
from . import constants

__all__ = [
    "Config",
    "setup_logger",
    "LoggerContext",
    "WeatherPreferences",
    "WeatherResolutionError",
    "NetworkError",
    "ParseError",
    "InvalidPlace",
    "NoLocationFound",
    "constants",
]
