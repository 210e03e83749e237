"""
HTTP transport for catalogue requests.
Executes one GET per request descriptor and turns every failure into FetchFailed.
No retries: a new request only follows a new filter change.
"""

# HTTP client used for all catalogue calls
import requests  # make web requests to the catalogue API
# Typing to make function signatures clearer
from typing import Any, Optional  # indicates values can be None

# Console logging
from loguru import logger  # console logger

from .errors import FetchFailed  # single failure type surfaced to callers
from .models import RequestDescriptor  # what to fetch

DEFAULT_TIMEOUT_S = 10.0  # seconds per request
USER_AGENT = "weekend-cinema/1.0"  # identify ourselves to the catalogue


class CatalogueTransport:
	"""Thin requests-based shim: descriptor in, parsed JSON out."""

	def __init__(self, timeout: float = DEFAULT_TIMEOUT_S, session: Optional[requests.Session] = None):
		self.timeout = timeout  # per-request timeout
		self.session = session or requests.Session()  # connection reuse across requests
		self.session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})  # identify ourselves, ask for JSON

	def fetch(self, descriptor: RequestDescriptor) -> Any:
		"""Perform the GET and return the decoded JSON body."""
		logger.debug(f"[Transport] GET {descriptor.redacted_url}")  # never log the key
		try:
			resp = self.session.get(descriptor.url, timeout=self.timeout)  # one request, no retry
			resp.raise_for_status()  # non-2xx -> HTTPError
		except requests.HTTPError as e:
			status = e.response.status_code if e.response is not None else "?"
			logger.warning(f"[Transport] {descriptor.endpoint} answered HTTP {status}")
			raise FetchFailed(f"catalogue returned HTTP {status}") from e
		except requests.RequestException as e:  # DNS, connection reset, timeout...
			logger.warning(f"[Transport] {descriptor.endpoint} request failed: {e.__class__.__name__}")
			raise FetchFailed(f"network error: {e.__class__.__name__}") from e

		try:
			return resp.json()  # parse JSON returned by the catalogue
		except ValueError as e:  # includes requests' JSONDecodeError
			logger.warning(f"[Transport] {descriptor.endpoint} returned a non-JSON body")
			raise FetchFailed("response body is not valid JSON") from e

	def close(self) -> None:
		self.session.close()
