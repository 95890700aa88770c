"""Browser session automation for the data export.

This module drives a Playwright Chromium session through sign-in and
export retrieval. The browser is scoped to one call and always closed.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, AsyncIterator, Callable

from playwright.async_api import async_playwright

from core.config import FilmSyncConfig
from core.constants import (
    BROWSER_LAUNCH_ARGS,
    EXPORT_URL,
    SETTINGS_URL,
    SIGNIN_FORM_SELECTOR,
    SIGNIN_PASSWORD_SELECTOR,
    SIGNIN_USERNAME_SELECTOR,
)
from core.errors import SessionError
from core.logging_config import get_logger
from core.types import ExportBlob, SessionCredential, SyncStage
from session.auth_probe import AuthProbe, build_auth_probe
from session.blob_transfer import decode_blob, fetch_encoded_blob

_LOGGER = get_logger(__name__)

BrowserLauncher = Callable[[], AsyncContextManager[Any]]
StageReporter = Callable[[SyncStage], None]


@asynccontextmanager
async def launch_chromium(browser_path: str, headless: bool = True) -> AsyncIterator[Any]:
    """Launch Chromium for the duration of the context.

    Args:
        browser_path: Chromium executable path.
        headless: Whether to run without a window.

    Yields:
        Playwright browser instance, closed on exit.
    """
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(
            executable_path=browser_path,
            headless=headless,
            args=list(BROWSER_LAUNCH_ARGS),
        )
        try:
            yield browser
        finally:
            await browser.close()


class SessionAutomator:
    """Signs in to Letterboxd and downloads the data export archive."""

    def __init__(
        self,
        probe: AuthProbe,
        launcher: BrowserLauncher,
        settle_seconds: float,
    ) -> None:
        """Create an automator.

        Args:
            probe: Strategy deciding whether a page is signed in.
            launcher: Factory returning a scoped browser context manager.
            settle_seconds: Delay after download before the browser closes.
        """
        self._probe = probe
        self._launcher = launcher
        self._settle_seconds = settle_seconds

    @classmethod
    def from_config(cls, config: FilmSyncConfig) -> "SessionAutomator":
        """Build an automator that launches the configured Chromium."""
        return cls(
            probe=build_auth_probe(config.auth_probe),
            launcher=lambda: launch_chromium(config.browser_path, config.headless),
            settle_seconds=config.settle_seconds,
        )

    async def run_export_session(
        self,
        credential: SessionCredential,
        report_stage: StageReporter | None = None,
    ) -> ExportBlob:
        """Sign in and download the export archive.

        Args:
            credential: Account to sign in with.
            report_stage: Optional callback notified on stage changes.

        Returns:
            Archive bytes with the declared content type.

        Raises:
            SessionError: If launch, sign-in, navigation, or export fails.
        """
        report = report_stage or _ignore_stage
        try:
            async with self._launcher() as browser:
                page = await browser.new_page()
                report(SyncStage.AUTHENTICATING)
                await self._sign_in(page, credential)
                report(SyncStage.EXPORT_TRIGGERED)
                _LOGGER.info("archive_download_started", url=EXPORT_URL)
                encoded = await fetch_encoded_blob(page, EXPORT_URL)
                # let in-flight requests finish before the browser goes away
                await asyncio.sleep(self._settle_seconds)
        except SessionError:
            raise
        except Exception as error:
            raise SessionError(f"Export session failed: {error}") from error
        blob = decode_blob(encoded)
        _LOGGER.info("archive_downloaded", size_bytes=len(blob.buffer), mime_type=blob.mime_type)
        return blob

    async def _sign_in(self, page: Any, credential: SessionCredential) -> None:
        """Submit the sign-in form unless the session is already signed in."""
        await page.goto(SETTINGS_URL)
        if await self._probe.is_authenticated(page):
            _LOGGER.info("sign_in_skipped", reason="already_authenticated")
            return
        _LOGGER.info("sign_in_started", probe=self._probe.name)
        form = await page.query_selector(SIGNIN_FORM_SELECTOR)
        if form is None:
            raise SessionError(
                f"Sign-in form '{SIGNIN_FORM_SELECTOR}' not found on {SETTINGS_URL}. "
                "The sign-in page layout may have changed."
            )
        username_box = await _require_field(form, SIGNIN_USERNAME_SELECTOR)
        password_box = await _require_field(form, SIGNIN_PASSWORD_SELECTOR)
        await username_box.fill(credential.username)
        await password_box.fill(credential.password)
        async with page.expect_navigation():
            await password_box.press("Enter")
        if not await self._probe.is_authenticated(page):
            raise SessionError(
                "Sign-in was rejected. "
                "Check LETTERBOXD_USERNAME and LETTERBOXD_KEY."
            )
        _LOGGER.info("signed_in", probe=self._probe.name)


async def _require_field(form: Any, selector: str) -> Any:
    """Return a form field or fail with a session error."""
    field = await form.query_selector(selector)
    if field is None:
        raise SessionError(
            f"Sign-in field '{selector}' not found. "
            "The sign-in page layout may have changed."
        )
    return field


def _ignore_stage(stage: SyncStage) -> None:
    """Default stage reporter."""
