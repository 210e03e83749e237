"""
Browse the catalogue from the command line.

This script:
1) Loads settings from the environment (TMDB_API_KEY etc.)
2) Applies the given filters to a fresh browser session
3) Fetches one page and prints it
4) Optionally prints the draft post for one of the results

Usage:
    python -m scripts.browse --type movie --language hi --year 2023 --sort rating-desc
    python -m scripts.browse --type tv --query dragon --import-id 94997
"""

import argparse  # command-line flags
import json  # draft output
import sys  # exit codes

from loguru import logger  # console logging

from weekend_cinema.catalogue import CatalogueBrowser  # browse session
from weekend_cinema.config import configure_logging, load_settings  # environment settings
from weekend_cinema.genres import resolve_genre  # "sci fi" -> genre id
from weekend_cinema.models import Category, ContentType, SortOrder, ViewStatus  # enums


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(description="Browse the movie/TV catalogue")
	parser.add_argument("--type", dest="content_type", choices=[c.value for c in ContentType], default="movie")
	parser.add_argument("--query", default="", help="free-text search (overrides filters)")
	parser.add_argument("--language", default="", help="ISO-639-1 original language")
	parser.add_argument("--year", default="", help="release year")
	parser.add_argument("--genre", default="", help="genre name, e.g. 'sci fi' or 'comedy'")
	parser.add_argument("--sort", choices=[s.value for s in SortOrder], default=SortOrder.POPULARITY_DESC.value)
	parser.add_argument("--category", choices=[c.value for c in Category], default=Category.NOW_PLAYING.value)
	parser.add_argument("--page", type=int, default=1)
	parser.add_argument("--import-id", default=None, help="print the draft post for this result id")
	return parser


def main(argv=None) -> int:
	args = build_parser().parse_args(argv)
	settings = load_settings()
	configure_logging(settings.log_level)

	# Resolve the genre name to the catalogue id for this content type
	genre_id = ""
	if args.genre:
		resolved = resolve_genre(args.genre, ContentType(args.content_type))
		if resolved is None:
			logger.error(f"Unknown genre '{args.genre}'")
			return 2
		genre_id = str(resolved)

	browser = CatalogueBrowser.from_settings(settings)
	status = browser.update(
		content_type=args.content_type,
		free_text_query=args.query,
		language=args.language,
		year=args.year,
		genre_id=genre_id,
		sort_order=args.sort,
		category=args.category,
		page=args.page,
	)

	if status is ViewStatus.SETUP_REQUIRED:
		logger.error("Setup required: export TMDB_API_KEY first")
		return 2
	if status is ViewStatus.ERROR:
		logger.error(browser.error_message)
		return 1

	view = browser.view()
	logger.info(f"[OK] {len(view.results)} results ({view.mode.value} mode)")
	for i, r in enumerate(view.results, 1):
		year = r.release_year or "----"
		rating = f"{r.vote_average:.1f}" if r.vote_average is not None else "n/a"
		print(f"{i:>2}. [{r.id}] {r.display_title} ({year}) - {rating}")

	if args.import_id:
		try:
			draft = browser.import_result(args.import_id)
		except KeyError as e:
			logger.error(str(e))
			return 1
		print(json.dumps(draft.to_post_dict(), indent=2, ensure_ascii=False))
	return 0


if __name__ == '__main__':
	sys.exit(main())  # invoke browser
