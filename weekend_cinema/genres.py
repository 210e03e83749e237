"""
Genre and language vocabularies for the discover filters.
The catalogue uses different genre ids for movies and TV, so each content type
has its own table. Human-typed genre names are resolved with a synonym map
plus fuzzy matching.
"""

from typing import Dict, List, Optional, Tuple

from rapidfuzz import fuzz, process  # fuzzy matching utilities
from loguru import logger  # console logging

from .models import ContentType

MOVIE_GENRES: Dict[int, str] = {
	28: "Action",
	12: "Adventure",
	16: "Animation",
	35: "Comedy",
	80: "Crime",
	99: "Documentary",
	18: "Drama",
	10751: "Family",
	14: "Fantasy",
	36: "History",
	27: "Horror",
	10402: "Music",
	9648: "Mystery",
	10749: "Romance",
	878: "Science Fiction",
	10770: "TV Movie",
	53: "Thriller",
	10752: "War",
	37: "Western",
}

TV_GENRES: Dict[int, str] = {
	10759: "Action & Adventure",
	16: "Animation",
	35: "Comedy",
	80: "Crime",
	99: "Documentary",
	18: "Drama",
	10751: "Family",
	10762: "Kids",
	9648: "Mystery",
	10763: "News",
	10764: "Reality",
	10765: "Sci-Fi & Fantasy",
	10766: "Soap",
	10767: "Talk",
	10768: "War & Politics",
	37: "Western",
}

# Original-language choices offered by the filter bar (ISO-639-1 -> label)
LANGUAGES: Dict[str, str] = {
	"en": "English",
	"hi": "Hindi",
	"ml": "Malayalam",
	"ta": "Tamil",
	"te": "Telugu",
	"kn": "Kannada",
	"ko": "Korean",
	"ja": "Japanese",
	"es": "Spanish",
	"fr": "French",
}

# Common user phrasings -> canonical movie genre name
GENRE_SYNONYMS: Dict[str, str] = {
	"sci-fi": "Science Fiction",
	"sci fi": "Science Fiction",
	"scifi": "Science Fiction",
	"science-fiction": "Science Fiction",
	"funny": "Comedy",
	"romantic": "Romance",
	"romcom": "Romance",
	"animated": "Animation",
	"anime": "Animation",
	"cartoon": "Animation",
	"docu": "Documentary",
	"historical": "History",
	"musical": "Music",
	"scary": "Horror",
	"suspense": "Thriller",
	"kids": "Family",
}

# Movie genre names that live under a combined label on the TV side
TV_EQUIVALENTS: Dict[str, str] = {
	"Action": "Action & Adventure",
	"Adventure": "Action & Adventure",
	"Science Fiction": "Sci-Fi & Fantasy",
	"Fantasy": "Sci-Fi & Fantasy",
	"War": "War & Politics",
}

FUZZY_MIN_SCORE = 85


def genre_table(content_type: ContentType) -> Dict[int, str]:
	return TV_GENRES if ContentType(content_type) == ContentType.TV else MOVIE_GENRES


def genre_choices(content_type: ContentType) -> List[Tuple[int, str]]:
	"""(id, name) pairs sorted by name, for dropdowns."""
	return sorted(genre_table(content_type).items(), key=lambda item: item[1])


def genre_name(genre_id, content_type: ContentType) -> Optional[str]:
	try:
		return genre_table(content_type).get(int(genre_id))
	except (TypeError, ValueError):
		return None


def resolve_genre(name: str, content_type: ContentType = ContentType.MOVIE) -> Optional[int]:
	"""
	Map a human genre name ("sci fi", "comedy", "thriler") to the catalogue id
	for the given content type. Returns None when nothing is close enough.
	"""
	if not name or not name.strip():
		return None
	table = genre_table(content_type)
	by_name = {label.lower(): gid for gid, label in table.items()}
	key = name.strip().lower()
	if key in by_name:
		return by_name[key]

	canonical = GENRE_SYNONYMS.get(key, name.strip())
	if ContentType(content_type) == ContentType.TV:
		canonical = TV_EQUIVALENTS.get(canonical.title(), canonical)
	if canonical.lower() in by_name:
		logger.debug(f"[Genres] '{name}' -> '{canonical}' (exact)")
		return by_name[canonical.lower()]

	match = process.extractOne(key, list(by_name.keys()), scorer=fuzz.WRatio)
	if match and match[1] >= FUZZY_MIN_SCORE:
		logger.debug(f"[Genres] '{name}' -> '{match[0]}' (fuzzy, score={match[1]:.0f})")
		return by_name[match[0]]
	logger.debug(f"[Genres] No genre match for '{name}'")
	return None
