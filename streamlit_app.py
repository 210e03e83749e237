"""
Streamlit UI for The Weekend Cinema OTT guide.
Browses the catalogue with the same engine the API uses: search box,
discover filters, category listing, and one-click import into a draft review.

Run UI:                streamlit run streamlit_app.py
"""

# JSON for the downloadable draft
import json  # serialize draft posts
# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives

# Engine imports
from weekend_cinema.catalogue import CatalogueBrowser  # browse session
from weekend_cinema.config import StaticCredentialSource, configure_logging, load_settings  # settings
from weekend_cinema.genres import LANGUAGES, genre_choices  # dropdown vocabularies
from weekend_cinema.images import placeholder_url, poster_url  # image URLs
from weekend_cinema.models import Category, ContentType, SortOrder, ViewStatus  # enums

SORT_LABELS = {
	SortOrder.POPULARITY_DESC: "Most popular",
	SortOrder.RATING_DESC: "Highest rated",
	SortOrder.RELEASE_DATE_DESC: "Newest first",
}
CATEGORY_LABELS = {
	Category.NOW_PLAYING: "Now playing",
	Category.POPULAR: "Popular",
	Category.TOP_RATED: "Top rated",
	Category.UPCOMING: "Upcoming",
}
GRID_COLUMNS = 6

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="The Weekend Cinema", layout="wide")  # wide layout

# Main page title
st.title("🎬 The Weekend Cinema – OTT Guide")  # friendly header


# Cache settings so the environment is read once per process
@st.cache_resource(show_spinner=False)
def init_settings():
	settings = load_settings()
	configure_logging(settings.log_level)
	return settings


settings = init_settings()

# One browser per user session; the credential source is updated from the sidebar
if "browser" not in st.session_state:
	st.session_state.credentials = StaticCredentialSource(settings.api_key)
	st.session_state.browser = CatalogueBrowser.from_settings(settings, credentials=st.session_state.credentials)
browser: CatalogueBrowser = st.session_state.browser

# Sidebar contains configuration controls
with st.sidebar:
	st.header("Settings")  # section label
	api_key = st.text_input("TMDB API Key (v3)", value=st.session_state.credentials.get_credential(), type="password")
	st.session_state.credentials.set_credential(api_key)
	content_type = st.radio(
		"Content",
		list(ContentType),
		format_func=lambda c: "Movies" if c is ContentType.MOVIE else "TV Shows",
		horizontal=True,
	)
	category = st.selectbox("Category", list(Category), format_func=CATEGORY_LABELS.get)
	st.caption("Category applies when no filters and no search are active.")

# Free-text search always wins over filters
query = st.text_input("Search the catalogue", placeholder="e.g., dragon")

# Discover filters in one row
c1, c2, c3, c4 = st.columns(4)
with c1:
	language = st.selectbox("Language", [""] + list(LANGUAGES), format_func=lambda code: LANGUAGES.get(code, "Any language"))
with c2:
	year = st.text_input("Year", max_chars=4, placeholder="Any year")
with c3:
	genres = [("", "Any genre")] + [(str(gid), name) for gid, name in genre_choices(content_type)]
	genre_id = st.selectbox("Genre", [gid for gid, _ in genres], format_func=dict(genres).get)
with c4:
	sort_order = st.selectbox("Sort", list(SortOrder), format_func=SORT_LABELS.get)

# Every rerun mirrors the widgets into the filter state and fetches once
with st.spinner("Loading catalogue..."):
	status = browser.update(
		content_type=content_type,
		free_text_query=query,
		language=language,
		year=year,
		genre_id=genre_id,
		sort_order=sort_order,
		category=category,
	)

view = browser.view()
if status is ViewStatus.SETUP_REQUIRED:
	st.info("Please enter a TMDB API key in the sidebar settings to browse the catalogue.")
	st.stop()
if status is ViewStatus.ERROR:
	st.error(view.error_message)  # previous results stay below

mode_label = view.mode.value if view.mode else "-"
st.caption(f"{len(view.results)} results · mode: {mode_label}")
st.divider()  # visual separator

# Render results as a poster grid with an import button each
for row_start in range(0, len(view.results), GRID_COLUMNS):
	cols = st.columns(GRID_COLUMNS)
	for col, result in zip(cols, view.results[row_start:row_start + GRID_COLUMNS]):
		with col:
			st.image(poster_url(result.poster_path) or placeholder_url(result.display_title, 500, 750), width='stretch')
			year_label = f" ({result.release_year})" if result.release_year else ""
			st.markdown(f"**{result.display_title}**{year_label}")
			if result.vote_average is not None:
				st.caption(f"⭐ {result.vote_average:.1f}")
			if st.button("Import", key=f"import-{result.content_type.value}-{result.id}"):
				st.session_state.draft = browser.import_result(result.id).to_post_dict()

# Draft handoff for the editor
draft = st.session_state.get("draft")
if draft:
	st.sidebar.markdown("---")  # separator
	st.sidebar.subheader("Draft review")
	st.sidebar.json(draft)
	st.sidebar.download_button(
		"Download draft",
		data=json.dumps(draft, indent=2),
		file_name="draft.json",
		mime="application/json",
	)
