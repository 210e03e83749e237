"""
Result normalization module.
Maps raw catalogue items (movie and TV shapes differ) into uniform
CatalogueResult records, preserving the upstream order.
"""

# Finite-number check for vote averages
import math  # rejects NaN and infinities
# Typing helpers for the loosely-shaped upstream JSON
from typing import Any, Dict, List, Mapping, Optional  # type hints

# Structured records and the failure type for malformed bodies
from .errors import FetchFailed  # raised when the envelope is not what we expect
from .models import CatalogueResult, ContentType  # output record

# Console logging
from loguru import logger  # console logger

MIN_VOTE = 0.0  # lowest catalogue vote average
MAX_VOTE = 10.0  # highest catalogue vote average


class ResultNormalizer:
	"""
	Converts catalogue responses into CatalogueResult lists.
	No sorting, filtering or de-duplication: the upstream order is authoritative.
	"""

	# Date fields carrying the release year; movies use the first, TV the second
	DATE_FIELDS = ("release_date", "first_air_date")

	def extract_results(self, payload: Any) -> List[Mapping[str, Any]]:
		"""
		Pull the "results" array out of a response body.
		A missing key means an empty page; any other shape is malformed.
		"""
		if not isinstance(payload, Mapping):  # body must be a JSON object
			raise FetchFailed("malformed payload: expected a JSON object")
		items = payload.get("results", [])  # absent list -> nothing on this page
		if items is None:
			return []
		if not isinstance(items, list):  # e.g. an error object under "results"
			raise FetchFailed("malformed payload: 'results' is not a list")
		for item in items:
			if not isinstance(item, Mapping):
				raise FetchFailed("malformed payload: result entry is not an object")
		return items

	def normalize(self, items: List[Mapping[str, Any]], content_type: ContentType = ContentType.MOVIE) -> List[CatalogueResult]:
		"""Normalize every item in order; an empty input yields an empty list."""
		results = [self._parse_item(item, content_type) for item in items]  # one record per item
		logger.debug(f"[Normalizer] Normalized {len(results)} {ContentType(content_type).value} results")
		return results

	def normalize_payload(self, payload: Any, content_type: ContentType = ContentType.MOVIE) -> List[CatalogueResult]:
		"""Envelope validation followed by normalization."""
		return self.normalize(self.extract_results(payload), content_type)

	def _parse_item(self, data: Mapping[str, Any], content_type: ContentType) -> CatalogueResult:
		"""Convert one raw dictionary into a CatalogueResult with safe defaults."""
		# Movies carry "title", TV carries "name"
		title = data.get("title") or data.get("name") or ""

		return CatalogueResult(
			id=data.get("id"),  # upstream id as-is
			display_title=str(title),  # movie/TV title
			poster_path=data.get("poster_path"),  # passed through, may be None
			backdrop_path=data.get("backdrop_path"),  # passed through, may be None
			vote_average=self._parse_vote(data.get("vote_average")),  # optional 0..10
			release_year=self._parse_year(data),  # optional year
			overview_text=str(data.get("overview") or ""),  # never None
			content_type=ContentType(content_type),  # what the request asked for
		)

	def _parse_year(self, data: Dict[str, Any]) -> Optional[int]:
		"""First four characters of whichever release date is present."""
		for field_name in self.DATE_FIELDS:
			value = data.get(field_name)
			if value and isinstance(value, str) and len(value) >= 4:
				prefix = value[:4]
				if prefix.isdigit():
					return int(prefix)
		return None  # both absent, empty or unparseable

	def _parse_vote(self, value: Any) -> Optional[float]:
		"""Vote average on the 0..10 scale; anything else (NaN, inf, 42) counts as absent."""
		if value is None or value == "":
			return None
		try:
			vote = float(value)
		except (TypeError, ValueError):
			return None
		if not math.isfinite(vote) or not (MIN_VOTE <= vote <= MAX_VOTE):
			return None
		return vote
