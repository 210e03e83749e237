"""
Data models for The Weekend Cinema catalogue engine.
Defines the core data structures passed between the filter state, compiler,
normalizer, import bridge, and the outer surfaces (API/UI).
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Enum gives us closed sets of values with readable names
from enum import Enum  # string-valued enums serialize cleanly to JSON
# Import typing helpers for precise and self-documenting types
from typing import Dict, Optional, Union  # optional values and param maps
# URL helpers to assemble the final GET URL
from urllib.parse import quote, urlencode  # percent-escaping of query params


class ContentType(str, Enum):
	MOVIE = "movie"
	TV = "tv"


class SortOrder(str, Enum):
	POPULARITY_DESC = "popularity-desc"
	RATING_DESC = "rating-desc"
	RELEASE_DATE_DESC = "release-date-desc"


class Category(str, Enum):
	NOW_PLAYING = "now_playing"
	POPULAR = "popular"
	TOP_RATED = "top_rated"
	UPCOMING = "upcoming"


class RequestMode(str, Enum):
	"""The three mutually exclusive ways a catalogue request can be built."""
	SEARCH = "search"
	DISCOVER = "discover"
	STANDARD = "standard"


class ViewStatus(str, Enum):
	"""Status tag handed to the rendering layer together with the result list."""
	SETUP_REQUIRED = "setup_required"
	LOADING = "loading"
	READY = "ready"
	ERROR = "error"


@dataclass
class FilterState:
	"""
	Everything the user currently wants to browse.
	Empty strings / None on language, year and genre mean "no constraint".
	"""
	content_type: ContentType = ContentType.MOVIE  # movie or tv listing
	free_text_query: str = ""  # non-empty forces search mode
	language: str = ""  # ISO-639-1 original language, e.g. "hi"
	year: str = ""  # 4-digit release year as typed by the user
	genre_id: str = ""  # upstream genre identifier (TMDB numeric id as text)
	sort_order: SortOrder = SortOrder.POPULARITY_DESC  # used by discover mode only
	category: Category = Category.NOW_PLAYING  # used by standard mode only
	page: int = 1  # 1-based page number

	def has_query(self) -> bool:
		return bool(self.free_text_query and self.free_text_query.strip())

	def has_filters(self) -> bool:
		return any(str(v).strip() for v in (self.language, self.year, self.genre_id) if v is not None)

	def classify(self) -> RequestMode:
		"""Search wins over filters, filters win over the category listing."""
		if self.has_query():
			return RequestMode.SEARCH
		if self.has_filters():
			return RequestMode.DISCOVER
		return RequestMode.STANDARD


@dataclass
class RequestDescriptor:
	"""
	A single outbound catalogue GET, described but not executed.
	The transport turns this into the actual HTTP call.
	"""
	mode: RequestMode  # which of the three request modes produced it
	endpoint: str  # path below the API base, e.g. "discover/movie"
	params: Dict[str, Union[str, int]] = field(default_factory=dict)  # ordered query parameters
	base_url: str = "https://api.themoviedb.org/3"  # API root without trailing slash

	@property
	def url(self) -> str:
		"""Full GET URL with every parameter percent-escaped."""
		query = urlencode({k: str(v) for k, v in self.params.items()}, quote_via=quote)  # spaces -> %20
		return f"{self.base_url.rstrip('/')}/{self.endpoint}?{query}"

	@property
	def redacted_url(self) -> str:
		"""Same as url but with the credential masked, safe for logs."""
		params = {k: ("***" if k == "api_key" else str(v)) for k, v in self.params.items()}
		query = urlencode(params, quote_via=quote, safe="*")
		return f"{self.base_url.rstrip('/')}/{self.endpoint}?{query}"


@dataclass
class CatalogueResult:
	"""
	Uniform display record for one upstream movie or TV entry.
	Recreated on every response, never mutated by the engine.
	"""
	id: Union[int, str]  # upstream identifier (unique within one response)
	display_title: str  # "title" for movies, "name" for TV
	poster_path: Optional[str] = None  # relative fragment like "/abc.jpg"
	backdrop_path: Optional[str] = None  # relative fragment, may be absent
	vote_average: Optional[float] = None  # 0..10 scale
	release_year: Optional[int] = None  # year from release_date / first_air_date
	overview_text: str = ""  # synopsis; seeds content and excerpt on import
	content_type: ContentType = ContentType.MOVIE  # type the request was compiled for


@dataclass
class DraftPost:
	"""
	Handoff record for the review editor, created from a CatalogueResult.
	"""
	title: str  # review headline, seeded with the catalogue title
	content: str  # body seed (the overview)
	excerpt: str  # short teaser
	image_url: str  # backdrop, poster, or placeholder URL
	rating: int  # 1..5 stars
	source_id: Union[int, str]  # originating catalogue id, for traceability only
	category: str = "Review"  # editor's default article category

	def to_post_dict(self) -> Dict[str, Union[str, int]]:
		"""Shape consumed by the editor form (camelCase keys, like the stored posts)."""
		return {
			"title": self.title,
			"content": self.content,
			"excerpt": self.excerpt,
			"imageUrl": self.image_url,
			"rating": self.rating,
			"category": self.category,
			"sourceId": self.source_id,
		}
