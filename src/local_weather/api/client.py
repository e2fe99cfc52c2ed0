"""
Base HTTP client shared by the geocoding, place search and weather providers.

Handles session management, client headers, retries and error wrapping.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Any, Iterator, Optional

import requests  # type: ignore
from requests.adapters import HTTPAdapter  # type: ignore
from urllib3.util.retry import Retry  # type: ignore

from ..core import constants
from ..core.exceptions import NetworkError


class APIClient:
    """Streaming XML-over-HTTP client."""

    def __init__(
        self,
        timeout: float = constants.DEFAULT_TIMEOUT,
        max_retries: int = constants.DEFAULT_MAX_RETRIES,
        user_agent: str = constants.DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize API client.

        Args:
            timeout: Connect and read timeout in seconds
            max_retries: Maximum number of retry attempts per request
            user_agent: Client identification header value
            session: Pre-built session (mainly for tests); a retrying one is built otherwise
            logger: Logger instance
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.logger = logger or logging.getLogger(__name__)

        if session is None:
            session = requests.Session()
            retry_strategy = Retry(
                total=max_retries,
                backoff_factor=0.5,
                status_forcelist=[429, 500, 502, 503, 504],
                allowed_methods=["GET"]
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        self.session = session

        self._update_headers()

    def _update_headers(self) -> None:
        """Set client identification and disable caching on every request."""
        self.session.headers.update({
            "User-Agent": self.user_agent,
            "Accept": "application/xml, text/xml;q=0.9, */*;q=0.8",
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        })

    @contextmanager
    def open_stream(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Iterator[requests.Response]:
        """
        Open a streamed GET request and release it on exit.

        The response is closed exactly once, whether the caller finishes
        parsing, fails to parse or the transport fails mid-body.

        Args:
            url: Absolute request URL
            params: Query parameters

        Yields:
            Response with an unread body

        Raises:
            NetworkError: On connection failure, timeout, non-2xx status or
                a transport error while the body is read
        """
        self.logger.debug(f"GET {url} params={params}")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout, stream=True)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request failed: GET {url} - {e}")
            raise NetworkError(f"Request to {url} failed: {e}") from e

        try:
            response.raise_for_status()
            yield response
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request failed: GET {url} - {e}")
            raise NetworkError(f"Request to {url} failed: {e}") from e
        finally:
            response.close()

    def iter_chunks(self, response: requests.Response) -> Iterator[bytes]:
        """Iterate over the raw body of a streamed response."""
        return response.iter_content(chunk_size=constants.RESPONSE_CHUNK_SIZE)

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
