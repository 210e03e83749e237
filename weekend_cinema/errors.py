"""
Error types raised by the catalogue engine.
All of them are recoverable at the boundary of the view that issued the request.
"""


class CatalogueError(Exception):
	"""Base class for catalogue engine failures."""


class MissingCredential(CatalogueError):
	"""No API key configured; the view must show a setup-required state instead of fetching."""

	def __init__(self, message: str = "TMDB API key is not configured"):
		super().__init__(message)


class FetchFailed(CatalogueError):
	"""Network error, non-2xx status or unparseable body from the catalogue."""

	def __init__(self, reason: str):
		super().__init__(reason)
		self.reason = reason


class StaleResponse(CatalogueError):
	"""A response arrived for a request that has since been superseded."""

	def __init__(self, seq: int, latest: int):
		super().__init__(f"response for request #{seq} superseded by #{latest}")
		self.seq = seq
		self.latest = latest
