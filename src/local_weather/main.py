"""
Main entry point for local weather resolution.

Runs a single refresh cycle for a coordinate and prints the result.
"""

import sys
from typing import Optional

from .core import (
    Config,
    setup_logger,
    LoggerContext,
    WeatherPreferences,
    WeatherResolutionError,
    constants,
)
from .models import Coordinate, WeatherRecord
from .services import WeatherResolutionPipeline


class LocalWeatherApp:
    """Command-line application for one weather refresh."""

    def __init__(self, config_file: Optional[str] = None, log_level: str = "INFO"):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
            log_level: Console logging level
        """
        self.config = Config(config_file)
        self.logger = setup_logger(log_level=log_level)
        self.logger.debug(f"Configuration: {self.config}")

    def run(self, coordinate: Coordinate, units: Optional[str] = None) -> Optional[WeatherRecord]:
        """
        Resolve and print the weather for a coordinate.

        Args:
            coordinate: Location to resolve
            units: Units override ("f" or "c"); stored preference otherwise

        Returns:
            WeatherRecord, or None when no data was found

        Raises:
            WeatherResolutionError: If any resolution stage fails
        """
        # Preferences are re-read for every refresh
        preferences = WeatherPreferences.from_store(self.config.preferences, self.logger)
        if units:
            preferences = WeatherPreferences(units=units, click_target=preferences.click_target)

        with WeatherResolutionPipeline.from_config(self.config, preferences, self.logger) as pipeline:
            with LoggerContext(self.logger, "weather resolution"):
                record = pipeline.resolve(coordinate, preferences)

        print(format_summary(record, preferences))
        return record


def format_summary(record: Optional[WeatherRecord], preferences: WeatherPreferences) -> str:
    """One-line textual summary of a resolution result."""
    if record is None:
        return "No weather data available"

    temperature = record.temperature if record.has_valid_temperature else constants.MISSING_LABEL_PART
    condition = f" {record.condition_text}" if record.condition_text else ""
    lines = [
        f"{temperature}°{preferences.units.upper()}{condition} - {record.location_label}"
    ]
    if record.forecast_text_today:
        lines.append(f"Later: {record.forecast_text_today}")
    lines.append(f"More: {preferences.click_target}")
    return "\n".join(lines)


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Resolve current weather for a coordinate"
    )
    parser.add_argument("--lat", type=float, required=True, help="Latitude in decimal degrees")
    parser.add_argument("--lon", type=float, required=True, help="Longitude in decimal degrees")
    parser.add_argument(
        "--units",
        choices=["f", "c"],
        default=None,
        help="Temperature units. Default: stored preference"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Console log level"
    )

    args = parser.parse_args()

    try:
        coordinate = Coordinate(latitude=args.lat, longitude=args.lon)
    except ValueError as e:
        print(f"Invalid coordinate: {e}")
        sys.exit(1)

    try:
        app = LocalWeatherApp(config_file=args.config, log_level=args.log_level)
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    try:
        app.run(coordinate, units=args.units)
    except WeatherResolutionError as e:
        # The previous weather state stays as it was; nothing is printed
        app.logger.error(f"Weather refresh skipped: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
