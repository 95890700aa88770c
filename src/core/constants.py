"""Core constants used across FilmSync modules.

This module centralizes endpoints, selectors, and column names.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

SETTINGS_URL = "https://letterboxd.com/settings/data"
EXPORT_URL = "https://letterboxd.com/data/export"

DEFAULT_BROWSER_PATH = "/usr/bin/chromium"
BROWSER_LAUNCH_ARGS = ("--no-sandbox", "--disable-setuid-sandbox")
DEFAULT_SETTLE_SECONDS = 2.0

SIGNIN_FORM_SELECTOR = "#signin-form"
SIGNIN_USERNAME_SELECTOR = "#signin-username"
SIGNIN_PASSWORD_SELECTOR = "#signin-password"
SIGNED_IN_TITLE_MARKER = "Update your settings"
SIGNED_OUT_TITLE_MARKER = "Sign In"
SIGNED_IN_COOKIE_NAME = "letterboxd.signed.in.as"
DEFAULT_AUTH_PROBE = "title"
SUPPORTED_AUTH_PROBES = ("title", "dom", "cookie")

DIARY_ENTRY_NAME = "diary.csv"
WATCHLIST_ENTRY_NAME = "watchlist.csv"
ARCHIVE_TEXT_ENCODING = "utf-8"

NAME_COLUMN = "Name"
YEAR_COLUMN = "Year"
LINK_COLUMN = "Letterboxd URI"
WATCHED_DATE_COLUMN = "Watched Date"
DATE_COLUMN = "Date"
RATING_COLUMN = "Rating"

FILMS_TABLE_NAME = "films"
FILM_INSERT_COLUMNS = ("name", "year", "link", "status", "date_updated", "rating")
DEFAULT_INSERT_BATCH_SIZE = 1000
MAX_INSERT_BATCH_SIZE = 32767 // len(FILM_INSERT_COLUMNS)
