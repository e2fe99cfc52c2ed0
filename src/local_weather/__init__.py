"""
Local Weather Resolution

This package resolves a coordinate into current weather conditions by chaining
reverse geocoding, place identifier search and a weather feed.
"""

__version__ = "0.1.0"
__description__ = "Coordinate to current weather resolution pipeline"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "LocalWeatherApp":
        from .main import LocalWeatherApp
        return LocalWeatherApp
    if name == "WeatherResolutionPipeline":
        from .services import WeatherResolutionPipeline
        return WeatherResolutionPipeline
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "LocalWeatherApp",
    "WeatherResolutionPipeline",
]
