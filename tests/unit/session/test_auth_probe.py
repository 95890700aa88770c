"""Unit tests for sign-in detection strategies."""

from __future__ import annotations

import pytest

from core.errors import FilmSyncConfigError
from session.auth_probe import (
    CookieAuthProbe,
    DomMarkerAuthProbe,
    TitleAuthProbe,
    build_auth_probe,
)
from tests.fakes import SETTINGS_TITLE, SIGN_IN_TITLE, FakePage


@pytest.mark.asyncio
async def test_title_probe_reads_page_title() -> None:
    """Title probe should accept the settings title and reject sign-in."""
    probe = TitleAuthProbe()

    signed_out = await probe.is_authenticated(FakePage(title=SIGN_IN_TITLE))
    signed_in = await probe.is_authenticated(FakePage(title=SETTINGS_TITLE))

    assert (signed_out, signed_in) == (False, True)


@pytest.mark.asyncio
async def test_title_probe_rejects_unrelated_title() -> None:
    """Titles without the signed-in marker should count as signed out."""
    probe = TitleAuthProbe()

    assert await probe.is_authenticated(FakePage(title="Letterboxd")) is False


@pytest.mark.asyncio
async def test_dom_probe_checks_for_sign_in_form() -> None:
    """DOM probe should treat a missing sign-in form as signed in."""
    probe = DomMarkerAuthProbe()

    with_form = await probe.is_authenticated(FakePage(with_form=True))
    without_form = await probe.is_authenticated(FakePage(with_form=False))

    assert (with_form, without_form) == (False, True)


@pytest.mark.asyncio
async def test_cookie_probe_checks_session_cookie() -> None:
    """Cookie probe should require a non-empty signed-in cookie."""
    probe = CookieAuthProbe()
    page = FakePage()
    page.context.cookie_jar.append({"name": "letterboxd.signed.in.as", "value": ""})

    empty_cookie = await probe.is_authenticated(page)
    page.context.cookie_jar.append({"name": "letterboxd.signed.in.as", "value": "cinephile"})
    set_cookie = await probe.is_authenticated(page)

    assert (empty_cookie, set_cookie) == (False, True)


def test_build_auth_probe_selects_by_name() -> None:
    """Factory should map names onto probe strategies."""
    probes = [build_auth_probe(name) for name in ("title", "dom", "cookie")]

    assert [type(probe) for probe in probes] == [
        TitleAuthProbe,
        DomMarkerAuthProbe,
        CookieAuthProbe,
    ]


def test_build_auth_probe_raises_for_unknown_name() -> None:
    """Unknown strategy names should be a config error."""
    with pytest.raises(FilmSyncConfigError):
        build_auth_probe("captcha")
