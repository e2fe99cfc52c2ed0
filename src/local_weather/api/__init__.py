"""
Provider clients for local weather resolution.

Provides the shared HTTP client, the XML event stream and the reverse
geocoding, place search and weather feed clients.
"""

from .client import APIClient
from .xml_stream import XmlEvent, XmlEventReducer, iter_xml_events
from .geocoding import GeoReverseClient
from .places import PlaceIdentifierResolver, order_identifiers
from .weather import WeatherFetcher, build_location_label

__all__ = [
    "APIClient",
    "XmlEvent",
    "XmlEventReducer",
    "iter_xml_events",
    "GeoReverseClient",
    "PlaceIdentifierResolver",
    "order_identifiers",
    "WeatherFetcher",
    "build_location_label",
]
