"""
FastAPI server exposing the catalogue browser.
Endpoints:
- GET /health: basic health check
- GET /catalogue?content_type=movie&q=...&language=...&year=...&genre_id=...: one page of results
- GET /genres?content_type=movie: genre ids for the filter dropdown
- POST /drafts: convert a catalogue result into a draft review post

Settings are read from the environment at startup (see weekend_cinema.config).
The API key may also be supplied per request in the X-TMDB-Key header.
"""

# Import standard libraries for timing
import time  # measure startup and request latencies
from typing import List, Optional, Union  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, Header, HTTPException, Query  # FastAPI primitives
from pydantic import BaseModel, Field  # response schema definitions

# Import our internal modules for configuration and browsing
from weekend_cinema.catalogue import CatalogueBrowser  # one browse cycle per request
from weekend_cinema.config import Settings, StaticCredentialSource, configure_logging, load_settings
from weekend_cinema.filter_state import FilterStateManager  # request params -> state
from weekend_cinema.genres import genre_choices  # dropdown data
from weekend_cinema.images import backdrop_url, poster_url  # absolute image URLs
from weekend_cinema.import_bridge import ImportBridge  # result -> draft
from weekend_cinema.models import Category, CatalogueResult, ContentType, SortOrder, ViewStatus
from weekend_cinema.query_compiler import QueryCompiler  # shared compiler
from weekend_cinema.transport import CatalogueTransport  # shared HTTP session

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="The Weekend Cinema Catalogue API", version="1.0.0")  # web app

# Globals shared by all requests; created at startup or lazily on first use
SETTINGS: Optional[Settings] = None  # environment settings
TRANSPORT: Optional[CatalogueTransport] = None  # pooled HTTP session
COMPILER: Optional[QueryCompiler] = None  # request builder
STARTUP_TIME_S: float = 0.0  # measures how long startup took


# Pydantic model that describes one catalogue entry in responses
class ResultOut(BaseModel):
	id: Union[int, str]  # upstream id
	title: str  # display title (movie title or TV name)
	content_type: ContentType  # movie or tv
	year: Optional[int] = None  # release year if known
	vote_average: Optional[float] = None  # 0..10
	poster_path: Optional[str] = None  # relative fragment
	backdrop_path: Optional[str] = None  # relative fragment
	poster_url: Optional[str] = None  # absolute w500 URL
	backdrop_url: Optional[str] = None  # absolute w1280 URL
	overview: str = ""  # synopsis


# Pydantic model for the complete catalogue response payload
class CatalogueResponse(BaseModel):
	status: ViewStatus  # ready / error / setup_required
	mode: Optional[str] = None  # search, discover or standard
	endpoint: Optional[str] = None  # upstream path that was queried
	elapsed_ms: float  # server-side time in ms
	results: List[ResultOut]  # ordered results


# Request body for draft conversion; mirrors ResultOut's source fields
class DraftIn(BaseModel):
	id: Union[int, str]
	title: str
	vote_average: Optional[float] = Field(None, ge=0, le=10, allow_inf_nan=False)  # 0..10, finite
	poster_path: Optional[str] = None
	backdrop_path: Optional[str] = None
	overview: str = ""
	year: Optional[int] = None
	content_type: ContentType = ContentType.MOVIE


# Draft post shape expected by the review editor
class DraftOut(BaseModel):
	title: str
	content: str
	excerpt: str
	imageUrl: str
	rating: int
	category: str
	sourceId: Union[int, str]


class GenreOut(BaseModel):
	id: int
	name: str


def _runtime():
	"""Return shared settings/transport/compiler, creating them on first use."""
	global SETTINGS, TRANSPORT, COMPILER
	if SETTINGS is None:
		SETTINGS = load_settings()
	if TRANSPORT is None:
		TRANSPORT = CatalogueTransport(timeout=SETTINGS.timeout)
	if COMPILER is None:
		COMPILER = QueryCompiler(
			base_url=SETTINGS.api_base,
			language=SETTINGS.language,
			min_vote_count=SETTINGS.min_vote_count,
			freshness_years=SETTINGS.freshness_years,
		)
	return SETTINGS, TRANSPORT, COMPILER


def _to_out(r: CatalogueResult) -> ResultOut:
	return ResultOut(
		id=r.id,
		title=r.display_title,
		content_type=r.content_type,
		year=r.release_year,
		vote_average=r.vote_average,
		poster_path=r.poster_path,
		backdrop_path=r.backdrop_path,
		poster_url=poster_url(r.poster_path),
		backdrop_url=backdrop_url(r.backdrop_path),
		overview=r.overview_text,
	)


# FastAPI startup hook to load settings once
@app.on_event("startup")
async def startup_event():
	"""Load settings, configure logging and open the shared HTTP session."""
	global STARTUP_TIME_S  # refer to module-level global
	start = time.time()  # start timer for startup latency
	settings, _, _ = _runtime()  # settings + shared components
	configure_logging(settings.log_level)  # apply configured level
	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	key_state = "configured" if settings.api_key else "missing (clients must send X-TMDB-Key)"
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s. API key {key_state}.")  # summary log


@app.on_event("shutdown")
async def shutdown_event():
	if TRANSPORT is not None:
		TRANSPORT.close()


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	settings, _, _ = _runtime()
	return {
		"status": "ok",  # constant indicator
		"api_key_configured": bool(settings.api_key),  # setup state
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


@app.get("/genres", response_model=List[GenreOut])
def genres(content_type: ContentType = ContentType.MOVIE):
	"""Genre ids for one content type, sorted by name."""
	return [GenreOut(id=gid, name=name) for gid, name in genre_choices(content_type)]


# Main browse endpoint; query params map one-to-one onto the filter state
@app.get("/catalogue", response_model=CatalogueResponse)
def catalogue(
	content_type: ContentType = ContentType.MOVIE,
	q: str = Query("", description="Free-text search; overrides every filter"),
	language: str = Query("", description="ISO-639-1 original language"),
	year: str = Query("", description="Release year"),
	genre_id: str = Query("", description="Catalogue genre id"),
	sort: SortOrder = SortOrder.POPULARITY_DESC,
	category: Category = Category.NOW_PLAYING,
	page: int = Query(1, ge=1),
	x_tmdb_key: Optional[str] = Header(None),
):
	"""Compile the filters into one catalogue request and return the normalized page."""
	settings, transport, compiler = _runtime()
	filters = FilterStateManager()
	filters.update(
		content_type=content_type,
		free_text_query=q,
		language=language,
		year=year,
		genre_id=genre_id,
		sort_order=sort,
		category=category,
		page=page,
	)
	browser = CatalogueBrowser(
		credentials=StaticCredentialSource(x_tmdb_key or settings.api_key),
		transport=transport,
		compiler=compiler,
		filters=filters,
	)

	# Time the browse cycle for latency insight
	start = time.time()  # start timer
	logger.debug(f"[API] /catalogue mode={filters.classify().value} type={content_type.value}")  # debug log of input
	status = browser.refresh()  # compile + fetch + normalize
	elapsed_ms = (time.time() - start) * 1000  # compute ms

	if status is ViewStatus.SETUP_REQUIRED:
		raise HTTPException(status_code=503, detail="setup required: no TMDB API key configured")
	if status is ViewStatus.ERROR:
		raise HTTPException(status_code=502, detail=browser.error_message)

	view = browser.view()
	logger.info(f"[API] /catalogue served {len(view.results)} results in {elapsed_ms:.2f} ms")  # summary
	request = browser.last_request
	return CatalogueResponse(
		status=view.status,
		mode=view.mode.value if view.mode else None,
		endpoint=request.endpoint if request else None,
		elapsed_ms=round(elapsed_ms, 2),
		results=[_to_out(r) for r in view.results],
	)


@app.post("/drafts", response_model=DraftOut)
def drafts(body: DraftIn):
	"""Convert one catalogue entry into the editor's draft post shape."""
	result = CatalogueResult(
		id=body.id,
		display_title=body.title,
		poster_path=body.poster_path,
		backdrop_path=body.backdrop_path,
		vote_average=body.vote_average,
		release_year=body.year,
		overview_text=body.overview,
		content_type=body.content_type,
	)
	draft = ImportBridge().to_draft(result)
	logger.info(f"[API] /drafts imported '{draft.title}'")
	return DraftOut(**draft.to_post_dict())
