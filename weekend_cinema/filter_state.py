"""
Filter-state management.
Holds the single source of truth for what the user wants to browse and
classifies it into a request mode. No I/O happens here.
"""

from dataclasses import fields, replace  # field introspection and copies
from typing import Any

from loguru import logger  # console logging

from .models import Category, ContentType, FilterState, RequestMode, SortOrder


class FilterStateManager:
	"""
	Wraps a FilterState and applies field updates with light coercion.
	Modes are computed fresh on every classify() call, never tracked as toggles,
	so clearing the search box brings back whatever filters were set before.
	"""

	# Fields holding closed value sets, coerced from their string values
	ENUM_FIELDS = {
		"content_type": ContentType,
		"sort_order": SortOrder,
		"category": Category,
	}
	# Free-form text fields; None is stored as "" (no constraint)
	TEXT_FIELDS = ("free_text_query", "language", "year", "genre_id")

	def __init__(self, state: FilterState = None):
		self._state = state if state is not None else FilterState()
		self._field_names = {f.name for f in fields(FilterState)}

	@property
	def state(self) -> FilterState:
		return self._state

	def set_field(self, name: str, value: Any) -> None:
		"""Replace one field of the state. Raises KeyError for unknown names."""
		if name not in self._field_names:
			raise KeyError(f"Unknown filter field: {name}")
		coerced = self._coerce(name, value)
		setattr(self._state, name, coerced)
		logger.debug(f"[Filters] {name} -> {coerced!r}")

	def update(self, **changes: Any) -> None:
		"""Apply several field changes at once."""
		for name, value in changes.items():
			self.set_field(name, value)

	def reset_filters(self) -> None:
		"""Clear the discover filters (language/year/genre) and restore the default sort."""
		self._state.language = ""
		self._state.year = ""
		self._state.genre_id = ""
		self._state.sort_order = SortOrder.POPULARITY_DESC
		logger.debug("[Filters] Discover filters cleared")

	def classify(self) -> RequestMode:
		return self._state.classify()

	def snapshot(self) -> FilterState:
		"""Independent copy, safe to hand to the compiler while the UI keeps editing."""
		return replace(self._state)

	def _coerce(self, name: str, value: Any) -> Any:
		if name in self.ENUM_FIELDS:
			return self.ENUM_FIELDS[name](value)  # ValueError for values outside the set
		if name in self.TEXT_FIELDS:
			return "" if value is None else str(value).strip()
		if name == "page":
			page = int(value) if value not in (None, "") else 1
			return max(1, page)
		return value
