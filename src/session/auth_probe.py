"""Sign-in state detection strategies.

This module decides whether a browser page belongs to a signed-in
session. Strategies share one protocol so detection can change freely.
"""

from __future__ import annotations

from typing import Any, Protocol

from core.constants import (
    SIGNED_IN_COOKIE_NAME,
    SIGNED_IN_TITLE_MARKER,
    SIGNED_OUT_TITLE_MARKER,
    SIGNIN_FORM_SELECTOR,
    SUPPORTED_AUTH_PROBES,
)
from core.errors import FilmSyncConfigError


class AuthProbe(Protocol):
    """Capability that inspects a page for an authenticated session."""

    name: str

    async def is_authenticated(self, page: Any) -> bool:
        """Return whether the page shows a signed-in session."""
        ...


class TitleAuthProbe:
    """Detect sign-in state from the document title."""

    name = "title"

    def __init__(
        self,
        signed_in_marker: str = SIGNED_IN_TITLE_MARKER,
        signed_out_marker: str = SIGNED_OUT_TITLE_MARKER,
    ) -> None:
        self._signed_in_marker = signed_in_marker
        self._signed_out_marker = signed_out_marker

    async def is_authenticated(self, page: Any) -> bool:
        title = await page.title()
        if self._signed_out_marker in title:
            return False
        return self._signed_in_marker in title


class DomMarkerAuthProbe:
    """Detect sign-in state from the absence of the sign-in form."""

    name = "dom"

    def __init__(self, signin_selector: str = SIGNIN_FORM_SELECTOR) -> None:
        self._signin_selector = signin_selector

    async def is_authenticated(self, page: Any) -> bool:
        return await page.query_selector(self._signin_selector) is None


class CookieAuthProbe:
    """Detect sign-in state from the session cookie in the browser context."""

    name = "cookie"

    def __init__(self, cookie_name: str = SIGNED_IN_COOKIE_NAME) -> None:
        self._cookie_name = cookie_name

    async def is_authenticated(self, page: Any) -> bool:
        cookies = await page.context.cookies()
        return any(
            cookie.get("name") == self._cookie_name and bool(cookie.get("value"))
            for cookie in cookies
        )


def build_auth_probe(name: str) -> AuthProbe:
    """Create an auth probe by strategy name.

    Args:
        name: One of ``title``, ``dom``, or ``cookie``.

    Returns:
        Probe instance with default markers.

    Raises:
        FilmSyncConfigError: If the name is unknown.
    """
    if name == "title":
        return TitleAuthProbe()
    if name == "dom":
        return DomMarkerAuthProbe()
    if name == "cookie":
        return CookieAuthProbe()
    raise FilmSyncConfigError(
        f"Unsupported auth probe '{name}'. "
        f"Choose one of: {', '.join(SUPPORTED_AUTH_PROBES)}."
    )
