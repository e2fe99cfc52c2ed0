"""
Business logic services for local weather resolution.

Services orchestrate the provider clients into higher-level operations.
"""

from .pipeline import WeatherResolutionPipeline

__all__ = [
    "WeatherResolutionPipeline",
]
