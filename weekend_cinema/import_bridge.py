"""
Import bridge.
Converts a selected catalogue result into the draft post handed to the review editor.
"""

import math

from .images import backdrop_url, placeholder_url, poster_url
from .models import CatalogueResult, DraftPost

DEFAULT_RATING = 4
EXCERPT_LENGTH = 100


class ImportBridge:
	"""
	Pure conversion CatalogueResult -> DraftPost:
	- image: backdrop first, then poster, then a generated placeholder
	- rating: 0..10 vote average rescaled to 1..5 stars
	"""

	def __init__(self, default_rating: int = DEFAULT_RATING, excerpt_length: int = EXCERPT_LENGTH):
		self.default_rating = default_rating
		self.excerpt_length = excerpt_length

	def to_draft(self, result: CatalogueResult) -> DraftPost:
		overview = result.overview_text or ""
		return DraftPost(
			title=result.display_title,
			content=overview,
			excerpt=overview[:self.excerpt_length],
			image_url=self.select_image(result),
			rating=self.rescale_rating(result.vote_average),
			source_id=result.id,
		)

	def select_image(self, result: CatalogueResult) -> str:
		return (
			backdrop_url(result.backdrop_path)
			or poster_url(result.poster_path)
			or placeholder_url(result.display_title)
		)

	def rescale_rating(self, vote_average) -> int:
		if vote_average is None or not math.isfinite(vote_average):
			return self.default_rating
		# Clamp
		return max(1, min(5, math.ceil(vote_average / 2)))
