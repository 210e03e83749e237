"""
Catalogue browser module.
Ties the filter state, query compiler, transport and normalizer into one
browsing session, and keeps the displayed list consistent when responses
arrive late or fail.
"""

import threading  # guards the request sequence and display list
from dataclasses import dataclass, field  # lightweight view snapshot
from typing import Any, List, Optional, Tuple  # type annotations

# Import project modules for data structures and components
from .config import CredentialSource, Settings, StaticCredentialSource  # where the API key comes from
from .errors import FetchFailed, MissingCredential, StaleResponse  # failure taxonomy
from .filter_state import FilterStateManager  # discovery intent
from .import_bridge import ImportBridge  # result -> draft post
from .models import CatalogueResult, ContentType, DraftPost, RequestDescriptor, RequestMode, ViewStatus
from .normalizer import ResultNormalizer  # raw JSON -> CatalogueResult
from .query_compiler import QueryCompiler  # state -> request descriptor
from .transport import CatalogueTransport  # HTTP GET

# Import loguru for console logging
from loguru import logger  # simple structured logger


@dataclass
class CatalogueView:
	"""What the rendering layer needs: status tag, ordered results, optional message."""
	status: ViewStatus
	results: List[CatalogueResult] = field(default_factory=list)
	error_message: Optional[str] = None
	mode: Optional[RequestMode] = None
	content_type: ContentType = ContentType.MOVIE


class CatalogueBrowser:
	"""
	One browsing session over the catalogue.
	Every filter mutation triggers exactly one request; each request gets a
	sequence number and only the most recently issued one may update the list.
	Failures leave the previous list on screen.
	"""
	def __init__(
		self,
		credentials: Optional[CredentialSource] = None,  # API key provider
		transport: Optional[CatalogueTransport] = None,  # HTTP shim
		compiler: Optional[QueryCompiler] = None,  # request builder
		normalizer: Optional[ResultNormalizer] = None,  # response mapper
		bridge: Optional[ImportBridge] = None,  # draft converter
		filters: Optional[FilterStateManager] = None,  # initial state
	):
		self.credentials = credentials or StaticCredentialSource("")
		self.transport = transport or CatalogueTransport()
		self.compiler = compiler or QueryCompiler()
		self.normalizer = normalizer or ResultNormalizer()
		self.bridge = bridge or ImportBridge()
		self.filters = filters or FilterStateManager()

		self._lock = threading.Lock()  # sequence counter + display list
		self._seq = 0  # last issued request number
		self._results: List[CatalogueResult] = []  # currently displayed list
		self._status = ViewStatus.LOADING  # nothing fetched yet
		self._error_message: Optional[str] = None  # short message for the error banner
		self._last_request: Optional[RequestDescriptor] = None  # most recently issued descriptor
		self._last_content_type = ContentType.MOVIE  # content type of that request

	@classmethod
	def from_settings(cls, settings: Settings, credentials: Optional[CredentialSource] = None) -> "CatalogueBrowser":
		"""Wire a browser from loaded settings; the key defaults to the one in settings."""
		logger.info(f"[Catalogue] Using API base {settings.api_base} (language={settings.language})")
		return cls(
			credentials=credentials or StaticCredentialSource(settings.api_key),
			transport=CatalogueTransport(timeout=settings.timeout),
			compiler=QueryCompiler(
				base_url=settings.api_base,
				language=settings.language,
				min_vote_count=settings.min_vote_count,
				freshness_years=settings.freshness_years,
			),
		)

	# ------------------------------------------------------------------
	# Read side
	# ------------------------------------------------------------------
	@property
	def results(self) -> List[CatalogueResult]:
		with self._lock:
			return list(self._results)

	@property
	def status(self) -> ViewStatus:
		return self._status

	@property
	def error_message(self) -> Optional[str]:
		return self._error_message

	@property
	def last_request(self) -> Optional[RequestDescriptor]:
		return self._last_request

	def view(self) -> CatalogueView:
		with self._lock:
			return CatalogueView(
				status=self._status,
				results=list(self._results),
				error_message=self._error_message,
				mode=self._last_request.mode if self._last_request else None,
				content_type=self._last_content_type,
			)

	# ------------------------------------------------------------------
	# Mutations
	# ------------------------------------------------------------------
	def set_field(self, name: str, value: Any) -> ViewStatus:
		"""Change one filter field and fetch the matching listing."""
		self.filters.set_field(name, value)
		return self.refresh()

	def update(self, **changes: Any) -> ViewStatus:
		"""Change several filter fields, then fetch once."""
		self.filters.update(**changes)
		return self.refresh()

	def refresh(self) -> ViewStatus:
		"""Run one compile -> fetch -> normalize cycle for the current state."""
		try:
			seq, descriptor = self.begin_request()
		except MissingCredential:
			return self._status  # setup required, no network call

		try:
			payload = self.transport.fetch(descriptor)
		except FetchFailed as e:
			self.fail_request(seq, e)
			return self._status

		self.complete_request(seq, payload)
		return self._status

	# ------------------------------------------------------------------
	# Request cycle, usable from worker threads
	# ------------------------------------------------------------------
	def begin_request(self) -> Tuple[int, RequestDescriptor]:
		"""
		Compile the current state and register a new request number.
		Raises MissingCredential (after switching to setup_required) when no key is set.
		"""
		credential = self.credentials.get_credential()
		missing: Optional[MissingCredential] = None
		with self._lock:  # snapshot and numbering are atomic
			state = self.filters.snapshot()
			self._seq += 1  # anything still in flight is now stale
			seq = self._seq
			try:
				descriptor = self.compiler.compile(state, credential)
			except MissingCredential as e:
				self._status = ViewStatus.SETUP_REQUIRED
				self._error_message = None
				missing = e
			else:
				self._last_request = descriptor
				self._last_content_type = ContentType(state.content_type)
				self._status = ViewStatus.LOADING
		if missing is not None:
			logger.info("[Catalogue] No API key configured; showing setup placeholder")
			raise missing
		logger.debug(f"[Catalogue] Request #{seq} issued ({descriptor.mode.value} {descriptor.endpoint})")
		return seq, descriptor

	def complete_request(self, seq: int, payload: Any) -> bool:
		"""Apply a response body. Returns False when it was stale or malformed."""
		try:
			with self._lock:
				self._ensure_current(seq)
				try:
					results = self.normalizer.normalize_payload(payload, self._last_content_type)
				except FetchFailed as e:
					self._record_failure(seq, e)
					return False
				self._results = results
				self._status = ViewStatus.READY
				self._error_message = None
		except StaleResponse as e:
			logger.debug(f"[Catalogue] Discarding stale response: {e}")
			return False
		logger.info(f"[Catalogue] Request #{seq} ready with {len(results)} results")
		return True

	def fail_request(self, seq: int, error: FetchFailed) -> bool:
		"""Record a transport failure. Returns False when the request was already superseded."""
		try:
			with self._lock:
				self._ensure_current(seq)
				self._record_failure(seq, error)
		except StaleResponse as e:
			logger.debug(f"[Catalogue] Discarding stale failure: {e}")
			return False
		return True

	def _ensure_current(self, seq: int) -> None:
		if seq != self._seq:
			raise StaleResponse(seq, self._seq)

	def _record_failure(self, seq: int, error: FetchFailed) -> None:
		# Previous results stay visible
		self._status = ViewStatus.ERROR
		self._error_message = f"Could not load catalogue: {error.reason}"
		logger.warning(f"[Catalogue] Request #{seq} failed: {error.reason}")

	# ------------------------------------------------------------------
	# Import
	# ------------------------------------------------------------------
	def find_result(self, result_id: Any) -> Optional[CatalogueResult]:
		"""Look up a displayed result by id (ids compared as text)."""
		wanted = str(result_id)
		with self._lock:
			for result in self._results:
				if str(result.id) == wanted:
					return result
		return None

	def import_result(self, result_id: Any) -> DraftPost:
		"""Turn a displayed result into a draft post. Raises KeyError if it is not on screen."""
		result = self.find_result(result_id)
		if result is None:
			raise KeyError(f"No displayed result with id {result_id}")
		draft = self.bridge.to_draft(result)
		logger.info(f"[Catalogue] Imported '{draft.title}' (source id {draft.source_id})")
		return draft
