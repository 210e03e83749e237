"""
Image URL helpers.
Catalogue image paths are relative fragments; they need the image host plus a
size token, and posters and backdrops are rendered at different widths.
"""

from typing import Optional
from urllib.parse import quote

IMAGE_BASE_URL = "https://image.tmdb.org/t/p"

POSTER_SIZE = "w500"
BACKDROP_SIZE = "w1280"

PLACEHOLDER_TEMPLATE = "https://placehold.co/{width}x{height}/222222/FFFFFF?text={text}"


def image_url(path: Optional[str], size: str = POSTER_SIZE) -> Optional[str]:
	"""Absolute URL for a relative image path, or None when there is no path."""
	if not path:
		return None
	if not path.startswith("/"):
		path = "/" + path
	return f"{IMAGE_BASE_URL}/{size}{path}"


def poster_url(path: Optional[str]) -> Optional[str]:
	return image_url(path, POSTER_SIZE)


def backdrop_url(path: Optional[str]) -> Optional[str]:
	return image_url(path, BACKDROP_SIZE)


def placeholder_url(text: str, width: int = 1200, height: int = 800) -> str:
	"""URL template for a generated placeholder image; no request is made here."""
	return PLACEHOLDER_TEMPLATE.format(width=width, height=height, text=quote(text or "Poster", safe=""))
