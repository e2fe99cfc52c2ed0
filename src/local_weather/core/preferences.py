"""
User preferences consumed by the resolution pipeline.

Preferences live in an external key-value store and are read once at the
start of every invocation, then passed explicitly to the pipeline.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from . import constants


@dataclass(frozen=True)
class WeatherPreferences:
    """Units and click destination for one resolution."""

    units: str = constants.DEFAULT_UNITS
    click_target: str = constants.DEFAULT_CLICK_TARGET

    def __post_init__(self):
        if self.units not in constants.SUPPORTED_UNITS:
            raise ValueError(
                f"Unsupported units {self.units!r}, expected one of {constants.SUPPORTED_UNITS}"
            )

    @classmethod
    def from_store(
        cls,
        store: Optional[Mapping[str, Any]],
        logger: Optional[logging.Logger] = None
    ) -> "WeatherPreferences":
        """
        Read preferences from a key-value store.

        Missing keys fall back to defaults. An unsupported units value is
        logged and replaced by the default instead of failing the refresh.

        Args:
            store: Mapping-like preference store (anything with .get)
            logger: Logger instance

        Returns:
            WeatherPreferences instance
        """
        logger = logger or logging.getLogger(__name__)
        store = store or {}

        units = str(store.get(constants.PREF_WEATHER_UNITS) or constants.DEFAULT_UNITS).lower()
        if units not in constants.SUPPORTED_UNITS:
            logger.warning(
                f"Ignoring unsupported units preference {units!r}, "
                f"using {constants.DEFAULT_UNITS!r}"
            )
            units = constants.DEFAULT_UNITS

        click_target = store.get(constants.PREF_WEATHER_SHORTCUT) or constants.DEFAULT_CLICK_TARGET

        return cls(units=units, click_target=click_target)
