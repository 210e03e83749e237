"""
Unit tests for genre vocabularies and name resolution.
Run: python tests/test_genres.py
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from weekend_cinema.genres import genre_choices, genre_name, resolve_genre
from weekend_cinema.models import ContentType


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def test_exact_and_synonyms():
	assert_equal(resolve_genre("Comedy"), 35, "exact name")
	assert_equal(resolve_genre("  horror "), 27, "trimmed, case-insensitive")
	assert_equal(resolve_genre("sci-fi"), 878, "synonym")
	assert_equal(resolve_genre("funny"), 35, "synonym to comedy")


def test_tv_equivalents():
	assert_equal(resolve_genre("sci fi", ContentType.TV), 10765, "sci-fi maps to Sci-Fi & Fantasy on TV")
	assert_equal(resolve_genre("war", ContentType.TV), 10768, "war maps to War & Politics")
	assert_equal(resolve_genre("kids", ContentType.TV), 10762, "TV has its own Kids genre")
	assert_equal(resolve_genre("drama", ContentType.TV), 18, "shared id")


def test_fuzzy():
	assert_equal(resolve_genre("thriler"), 53, "typo resolved")
	assert_equal(resolve_genre("documentry"), 99, "typo resolved")
	assert_equal(resolve_genre("zzzz"), None, "nothing close")
	assert_equal(resolve_genre(""), None, "empty name")


def test_choices_and_names():
	choices = genre_choices(ContentType.MOVIE)
	names = [name for _, name in choices]
	assert_equal(names, sorted(names), "sorted by name")
	assert_equal(genre_name("878", ContentType.MOVIE), "Science Fiction", "id as text")
	assert_equal(genre_name(878, ContentType.TV), None, "movie-only id on TV")
	assert_equal(genre_name("abc", ContentType.MOVIE), None, "non-numeric id")


def main():
	print("Running genre tests...")
	test_exact_and_synonyms()
	test_tv_equivalents()
	test_fuzzy()
	test_choices_and_names()
	print("All genre tests passed!")


if __name__ == '__main__':
	main()
