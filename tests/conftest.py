"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pytest
import requests
import requests_mock as requests_mock_lib
from requests.structures import CaseInsensitiveDict

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session")
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def load_fixture(fixtures_dir):
    """Read a fixture file as bytes."""
    def _load(name: str) -> bytes:
        return (fixtures_dir / name).read_bytes()
    return _load


@pytest.fixture()
def requests_mock():
    with requests_mock_lib.Mocker() as mocker:
        yield mocker


class FakeStreamResponse:
    """Streamed response whose body may fail part-way through."""

    def __init__(self, chunks: Iterable[Union[bytes, Exception]], status_code: int = 200):
        self.chunks = list(chunks)
        self.status_code = status_code
        self.close_calls = 0

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"HTTP {self.status_code}", response=self)

    def iter_content(self, chunk_size=1):
        for chunk in self.chunks:
            if isinstance(chunk, Exception):
                raise chunk
            yield chunk

    def close(self):
        self.close_calls += 1


class CountingSession:
    """Session stand-in that counts opened and released connections."""

    def __init__(self, responses: List[FakeStreamResponse], error: Optional[Exception] = None):
        self.headers = CaseInsensitiveDict()
        self.responses = list(responses)
        self.error = error
        self.calls = []
        self.opened: List[FakeStreamResponse] = []
        self.closed = False

    @property
    def open_calls(self) -> int:
        return len(self.calls)

    @property
    def close_calls(self) -> int:
        return sum(response.close_calls for response in self.opened)

    def get(self, url, params=None, timeout=None, stream=False):
        self.calls.append({"url": url, "params": params, "timeout": timeout, "stream": stream})
        if self.error is not None:
            raise self.error
        response = self.responses.pop(0)
        self.opened.append(response)
        return response

    def close(self):
        self.closed = True


@pytest.fixture
def counting_session():
    """Factory for sessions that count open/close calls."""
    return CountingSession


@pytest.fixture
def stream_response():
    """Factory for streamed responses."""
    return FakeStreamResponse
