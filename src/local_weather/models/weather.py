"""
Weather data models.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class WeatherRecord:
    """Current conditions and today's forecast for one location identifier."""

    temperature: Optional[int] = None  # In the requested units
    condition_code: Optional[int] = None
    condition_text: Optional[str] = None
    forecast_condition_code_today: Optional[int] = None
    forecast_text_today: Optional[str] = None
    location_label: str = ""

    @property
    def has_valid_temperature(self) -> bool:
        return self.temperature is not None

    @property
    def is_valid(self) -> bool:
        """Only records with both a temperature and a condition are usable."""
        return self.temperature is not None and self.condition_code is not None
