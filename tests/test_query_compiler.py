"""
Unit tests for QueryCompiler: endpoints and parameters for each request mode.
Run: python tests/test_query_compiler.py
"""

import sys
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from weekend_cinema.errors import MissingCredential
from weekend_cinema.models import Category, ContentType, FilterState, RequestMode, SortOrder
from weekend_cinema.query_compiler import QueryCompiler

KEY = "test-key"


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def assert_true(cond, msg):
	if not cond:
		raise AssertionError(msg)


def test_discover_scenario():
	state = FilterState(
		content_type=ContentType.MOVIE,
		free_text_query="",
		language="hi",
		year="2023",
		genre_id="",
		sort_order=SortOrder.RATING_DESC,
	)
	req = QueryCompiler().compile(state, KEY)
	assert_equal(req.mode, RequestMode.DISCOVER, "discover mode")
	assert_equal(req.endpoint, "discover/movie", "discover endpoint")
	assert_equal(req.params["with_original_language"], "hi", "language param")
	assert_equal(req.params["primary_release_year"], "2023", "year param")
	assert_equal(req.params["sort_by"], "vote_average.desc", "sort param")
	assert_equal(req.params["vote_count.gte"], 10, "vote floor")
	assert_true("with_genres" not in req.params, "unset genre omitted")
	assert_true("query" not in req.params, "no query in discover")


def test_search_scenario_ignores_filters():
	state = FilterState(
		content_type=ContentType.TV,
		free_text_query="dragon",
		language="en",
		year="2022",
		genre_id="10765",
		sort_order=SortOrder.RATING_DESC,
		category=Category.TOP_RATED,
		page=4,
	)
	req = QueryCompiler().compile(state, KEY)
	assert_equal(req.mode, RequestMode.SEARCH, "search mode")
	assert_equal(req.endpoint, "search/tv", "tv search endpoint")
	assert_equal(req.params["query"], "dragon", "query param")
	assert_equal(req.params["page"], 1, "search page fixed at 1")
	assert_equal(req.params["include_adult"], "false", "adult excluded")
	for dropped in ("with_original_language", "first_air_date_year", "with_genres", "sort_by", "vote_count.gte"):
		assert_true(dropped not in req.params, f"{dropped} must not be sent in search mode")
	# Filters stay in the state for when the query is cleared
	assert_equal(state.language, "en", "state untouched")


def test_search_query_is_escaped():
	req = QueryCompiler().compile(FilterState(free_text_query="fast & furious"), KEY)
	assert_true("query=fast%20%26%20furious" in req.url, f"escaped query in url: {req.url}")


def test_standard_categories():
	compiler = QueryCompiler()
	for category in Category:
		req = compiler.compile(FilterState(category=category, sort_order=SortOrder.RATING_DESC), KEY)
		assert_equal(req.mode, RequestMode.STANDARD, "standard mode")
		assert_equal(req.endpoint, f"movie/{category.value}", "movie category endpoint")
		assert_equal(req.params["page"], 1, "standard page fixed at 1")
		assert_true("sort_by" not in req.params, "sort ignored in standard mode")


def test_tv_category_mapping():
	compiler = QueryCompiler()
	expected = {
		Category.NOW_PLAYING: "tv/on_the_air",
		Category.POPULAR: "tv/popular",
		Category.TOP_RATED: "tv/top_rated",
		Category.UPCOMING: "tv/airing_today",
	}
	for category, endpoint in expected.items():
		req = compiler.compile(FilterState(content_type=ContentType.TV, category=category), KEY)
		assert_equal(req.endpoint, endpoint, f"tv mapping for {category.value}")


def test_tv_discover_params():
	state = FilterState(content_type=ContentType.TV, year="2019", genre_id="18", sort_order=SortOrder.RELEASE_DATE_DESC, page=2)
	req = QueryCompiler(min_vote_count=25).compile(state, KEY)
	assert_equal(req.endpoint, "discover/tv", "tv discover endpoint")
	assert_equal(req.params["first_air_date_year"], "2019", "tv year param")
	assert_equal(req.params["with_genres"], "18", "genre param")
	assert_equal(req.params["sort_by"], "first_air_date.desc", "tv release sort")
	assert_equal(req.params["vote_count.gte"], 25, "configured vote floor")
	assert_equal(req.params["page"], 2, "discover uses state page")
	assert_true("with_original_language" not in req.params, "unset language omitted")


def test_freshness_window():
	compiler = QueryCompiler(freshness_years=2, today=lambda: date(2024, 6, 15))
	req = compiler.compile(FilterState(language="ml"), KEY)
	assert_equal(req.params["primary_release_date.gte"], "2022-06-15", "date floor two years back")

	req = compiler.compile(FilterState(language="ml", year="2010"), KEY)
	assert_true("primary_release_date.gte" not in req.params, "explicit year wins over window")

	req = QueryCompiler().compile(FilterState(language="ml"), KEY)
	assert_true("primary_release_date.gte" not in req.params, "window off by default")

	leap = QueryCompiler(freshness_years=1, today=lambda: date(2024, 2, 29))
	req = leap.compile(FilterState(content_type=ContentType.TV, genre_id="16"), KEY)
	assert_equal(req.params["first_air_date.gte"], "2023-02-28", "leap day falls back to the 28th")


def test_missing_credential_emits_nothing():
	compiler = QueryCompiler()
	states = [FilterState(), FilterState(free_text_query="x"), FilterState(year="2000")]
	for credential in ("", "   ", None):
		for state in states:
			try:
				compiler.compile(state, credential)
			except MissingCredential:
				continue
			raise AssertionError(f"credential {credential!r} must not compile")


def test_common_params_and_redaction():
	req = QueryCompiler(language="fr-FR", base_url="https://example.test/3/").compile(FilterState(), KEY)
	assert_equal(req.params["api_key"], KEY, "credential attached")
	assert_equal(req.params["language"], "fr-FR", "display language")
	assert_true(req.url.startswith("https://example.test/3/movie/now_playing?"), f"url built from base: {req.url}")
	assert_true(KEY not in req.redacted_url and "api_key=***" in req.redacted_url, "key masked in logs")


def main():
	print("Running QueryCompiler tests...")
	test_discover_scenario()
	test_search_scenario_ignores_filters()
	test_search_query_is_escaped()
	print(" - scenarios ok")
	test_standard_categories()
	test_tv_category_mapping()
	test_tv_discover_params()
	test_freshness_window()
	print(" - modes ok")
	test_missing_credential_emits_nothing()
	test_common_params_and_redaction()
	print(" - credentials ok")
	print("All QueryCompiler tests passed!")


if __name__ == '__main__':
	main()
