"""
Query compilation module.
Turns a FilterState snapshot into exactly one catalogue request descriptor.
Search, discover and standard-category requests are mutually exclusive.
No I/O happens here, so every rule can be checked without a network.
"""

from datetime import date  # freshness window anchor
from typing import Callable, Dict, Optional, Union  # type annotations

from loguru import logger  # console logging

from .errors import MissingCredential  # raised before any request is built
from .models import Category, ContentType, FilterState, RequestDescriptor, RequestMode, SortOrder

DEFAULT_API_BASE = "https://api.themoviedb.org/3"
DEFAULT_LANGUAGE = "en-US"
DEFAULT_MIN_VOTE_COUNT = 10


class QueryCompiler:
	"""
	Compiles a FilterState into a RequestDescriptor.
	- Search: free text against search/{type}, page 1, adult titles excluded
	- Discover: compound filters against discover/{type} with a vote-count floor
	- Standard: fixed category listing {type}/{category}, page 1
	"""

	# Sort order -> upstream sort_by value, per content type (TV has no primary_release_date)
	SORT_KEYS = {
		ContentType.MOVIE: {
			SortOrder.POPULARITY_DESC: "popularity.desc",
			SortOrder.RATING_DESC: "vote_average.desc",
			SortOrder.RELEASE_DATE_DESC: "primary_release_date.desc",
		},
		ContentType.TV: {
			SortOrder.POPULARITY_DESC: "popularity.desc",
			SortOrder.RATING_DESC: "vote_average.desc",
			SortOrder.RELEASE_DATE_DESC: "first_air_date.desc",
		},
	}

	# Year filter and date-floor parameter names, per content type
	YEAR_PARAMS = {
		ContentType.MOVIE: ("primary_release_year", "primary_release_date.gte"),
		ContentType.TV: ("first_air_date_year", "first_air_date.gte"),
	}

	# TV lists have their own names for "in cinemas now" and "coming up"
	CATEGORY_ENDPOINTS = {
		ContentType.MOVIE: {
			Category.NOW_PLAYING: "now_playing",
			Category.POPULAR: "popular",
			Category.TOP_RATED: "top_rated",
			Category.UPCOMING: "upcoming",
		},
		ContentType.TV: {
			Category.NOW_PLAYING: "on_the_air",
			Category.POPULAR: "popular",
			Category.TOP_RATED: "top_rated",
			Category.UPCOMING: "airing_today",
		},
	}

	def __init__(
		self,
		base_url: str = DEFAULT_API_BASE,  # API root
		language: str = DEFAULT_LANGUAGE,  # display language for titles/overviews
		min_vote_count: int = DEFAULT_MIN_VOTE_COUNT,  # discover-mode noise floor
		freshness_years: Optional[int] = None,  # discover-mode date floor, off by default
		today: Callable[[], date] = date.today,  # injectable clock for the freshness window
	):
		self.base_url = base_url
		self.language = language
		self.min_vote_count = min_vote_count
		self.freshness_years = freshness_years
		self._today = today

	def compile(self, state: FilterState, credential: Optional[str]) -> RequestDescriptor:
		"""Build the one request for this state. Raises MissingCredential on an empty key."""
		if not credential or not credential.strip():
			logger.debug("[Compiler] No credential configured; refusing to build a request")
			raise MissingCredential()

		content_type = ContentType(state.content_type)
		mode = state.classify()
		params: Dict[str, Union[str, int]] = {"api_key": credential.strip(), "language": self.language}

		if mode is RequestMode.SEARCH:
			endpoint = f"search/{content_type.value}"
			params["query"] = state.free_text_query.strip()
			params["page"] = 1
			params["include_adult"] = "false"
		elif mode is RequestMode.DISCOVER:
			endpoint = f"discover/{content_type.value}"
			params.update(self._discover_params(state, content_type))
		else:
			category = Category(state.category)
			endpoint = f"{content_type.value}/{self.CATEGORY_ENDPOINTS[content_type][category]}"
			params["page"] = 1

		descriptor = RequestDescriptor(mode=mode, endpoint=endpoint, params=params, base_url=self.base_url)
		logger.debug(f"[Compiler] {mode.value} -> {descriptor.redacted_url}")
		return descriptor

	def _discover_params(self, state: FilterState, content_type: ContentType) -> Dict[str, Union[str, int]]:
		params: Dict[str, Union[str, int]] = {
			"sort_by": self.SORT_KEYS[content_type][SortOrder(state.sort_order)],
			"vote_count.gte": self.min_vote_count,
		}
		year_param, date_floor_param = self.YEAR_PARAMS[content_type]

		# Only the filters the user actually set are attached
		language = (state.language or "").strip()
		if language:
			params["with_original_language"] = language
		year = str(state.year or "").strip()
		if year:
			params[year_param] = year
		elif self.freshness_years:
			params[date_floor_param] = self._date_floor().isoformat()
		genre = str(state.genre_id or "").strip()
		if genre:
			params["with_genres"] = genre

		params["page"] = max(1, int(state.page or 1))
		return params

	def _date_floor(self) -> date:
		today = self._today()
		try:
			return today.replace(year=today.year - self.freshness_years)
		except ValueError:
			# Feb 29 has no counterpart in a non-leap year
			return today.replace(year=today.year - self.freshness_years, day=28)
