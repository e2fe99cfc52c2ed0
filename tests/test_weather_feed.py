"""
Tests for the weather feed client and location label building.
"""

from unittest.mock import Mock

import pytest
import requests

from src.local_weather.api.client import APIClient
from src.local_weather.api.weather import (
    WeatherFeedExtractor,
    WeatherFetcher,
    build_location_label,
)
from src.local_weather.api.xml_stream import XmlEvent
from src.local_weather.core.exceptions import NetworkError, ParseError
from src.local_weather.models import LocationIdentifier

WEATHER_URL = "https://weather.test/forecastrss"
PARIS = LocationIdentifier("615702", "woeid")


class TestBuildLocationLabel:
    """Test cases for build_location_label."""

    def test_region_falls_back_to_country_and_town_appended(self):
        """Test the town suffix and the country fallback together."""
        assert build_location_label("Paris", "", "FR", "Le Marais") == "Paris, Le Marais, FR"

    def test_town_equal_to_city_is_omitted(self):
        """Test that a redundant town suffix is dropped."""
        assert build_location_label("Springfield", "IL", "United States", "Springfield") == "Springfield, IL"

    def test_region_shown_instead_of_country(self):
        """Test that a non-empty region hides the country."""
        assert build_location_label("Austin", "TX", "United States") == "Austin, TX"

    def test_missing_city_and_country(self):
        """Test placeholders for absent attributes."""
        assert build_location_label(None, None, None) == "--, --"

    def test_empty_town_ignored(self):
        """Test that an empty town adds nothing."""
        assert build_location_label("Lyon", "Rhône-Alpes", "France", "") == "Lyon, Rhône-Alpes"


class TestWeatherFeedExtractor:
    """Test cases for feed extraction over synthetic events."""

    def test_condition_and_first_forecast_only(self):
        """Test that later forecast entries are ignored."""
        extractor = WeatherFeedExtractor(logger=Mock()).consume([
            XmlEvent.start("condition", {"text": "Cloudy", "code": "26", "temp": "55"}),
            XmlEvent.end("condition"),
            XmlEvent.start("forecast", {"text": "Rain", "code": "12"}),
            XmlEvent.end("forecast"),
            XmlEvent.start("forecast", {"text": "Sunny", "code": "32"}),
            XmlEvent.end("forecast"),
        ])

        record = extractor.record
        assert record.temperature == 55
        assert record.condition_code == 26
        assert record.condition_text == "Cloudy"
        assert record.forecast_condition_code_today == 12
        assert record.forecast_text_today == "Rain"
        assert record.is_valid

    def test_missing_temperature_is_invalid_not_an_error(self):
        """Test that an incomplete condition still yields a record."""
        extractor = WeatherFeedExtractor(logger=Mock()).consume([
            XmlEvent.start("condition", {"text": "Cloudy", "code": "26"}),
            XmlEvent.end("condition"),
        ])

        assert extractor.record.temperature is None
        assert not extractor.record.has_valid_temperature
        assert not extractor.record.is_valid

    def test_non_integer_values_treated_as_missing(self):
        """Test that a bad numeric attribute invalidates the record."""
        logger = Mock()
        extractor = WeatherFeedExtractor(logger=logger).consume([
            XmlEvent.start("condition", {"text": "Unknown", "code": "3200", "temp": "N/A"}),
            XmlEvent.end("condition"),
        ])

        assert extractor.record.temperature is None
        assert extractor.record.condition_code == 3200
        assert not extractor.record.is_valid
        logger.warning.assert_called_once()

    def test_location_label_uses_town(self):
        """Test label building from the location element."""
        extractor = WeatherFeedExtractor(town="Le Marais", logger=Mock()).consume([
            XmlEvent.start("location", {"city": "Paris", "region": "", "country": "FR"}),
            XmlEvent.end("location"),
        ])

        assert extractor.location_label == "Paris, Le Marais, FR"


class TestWeatherFetcher:
    """Test cases for WeatherFetcher over HTTP."""

    @pytest.fixture
    def fetcher(self):
        return WeatherFetcher(APIClient(timeout=5, max_retries=0), base_url=WEATHER_URL, units="f")

    def test_fetch_weather(self, fetcher, requests_mock, load_fixture):
        """Test a complete feed."""
        requests_mock.get(WEATHER_URL, content=load_fixture("forecast_paris.xml"))

        record = fetcher.fetch_weather(PARIS, fallback_label="Paris", town="Paris")

        assert record.temperature == 61
        assert record.condition_code == 30
        assert record.condition_text == "Partly Cloudy"
        assert record.forecast_condition_code_today == 11
        assert record.forecast_text_today == "Showers"
        assert record.location_label == "Paris, France"
        assert record.is_valid

    def test_identifier_and_units_parameters(self, fetcher, requests_mock, load_fixture):
        """Test the w and u query parameters."""
        requests_mock.get(WEATHER_URL, content=load_fixture("forecast_paris.xml"))

        fetcher.fetch_weather(PARIS)
        assert requests_mock.last_request.qs == {"w": ["615702"], "u": ["f"]}

        fetcher.fetch_weather(PARIS, units="c")
        assert requests_mock.last_request.qs["u"] == ["c"]
        assert requests_mock.last_request.headers["Cache-Control"] == "no-cache"

    def test_no_location_uses_fallback_label(self, fetcher, requests_mock, load_fixture):
        """Test an error feed without location or condition."""
        requests_mock.get(WEATHER_URL, content=load_fixture("forecast_empty.xml"))

        record = fetcher.fetch_weather(PARIS, fallback_label="Paris")

        assert record.location_label == "Paris"
        assert not record.is_valid

    def test_connection_error_raises_network_error(self, fetcher, requests_mock):
        """Test connectivity loss."""
        requests_mock.get(WEATHER_URL, exc=requests.exceptions.ConnectionError("offline"))

        with pytest.raises(NetworkError):
            fetcher.fetch_weather(PARIS)

    def test_malformed_feed_raises_parse_error(self, fetcher, requests_mock):
        """Test a truncated feed."""
        requests_mock.get(WEATHER_URL, text="<rss><channel><item>")

        with pytest.raises(ParseError):
            fetcher.fetch_weather(PARIS)
