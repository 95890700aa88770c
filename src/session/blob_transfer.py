"""Out-of-process blob retrieval.

This module fetches a session-gated resource from inside the browser,
encodes the body as a data URL there, and decodes it back to bytes here.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any

from playwright.async_api import Error as PlaywrightError

from core.errors import SessionError
from core.types import EncodedBlob, ExportBlob

# Raw bytes cannot cross the page boundary, so the body travels as a data URL.
_FETCH_AS_DATA_URL_JS = """
async (url) => {
    const response = await window.fetch(url);
    if (!response.ok) {
        throw new Error(response.statusText || `HTTP ${response.status}`);
    }
    const blob = await response.blob();
    const dataUrl = await new Promise((resolve, reject) => {
        const reader = new FileReader();
        reader.addEventListener('loadend', () => resolve(reader.result));
        reader.addEventListener('error', () => reject(reader.error));
        reader.readAsDataURL(blob);
    });
    return {dataUrl, mime: response.headers.get('Content-Type')};
}
"""


async def fetch_encoded_blob(page: Any, url: str) -> EncodedBlob:
    """Fetch a URL with the page's cookies and return it as a data URL.

    Args:
        page: Playwright page holding the authenticated session.
        url: Resource to fetch from inside the page.

    Returns:
        Encoded transport string with the declared content type.

    Raises:
        SessionError: If the in-page fetch fails or returns a non-OK status.
    """
    try:
        payload = await page.evaluate(_FETCH_AS_DATA_URL_JS, url)
    except PlaywrightError as error:
        raise SessionError(f"Export fetch from {url} failed: {error.message}") from error
    if not isinstance(payload, dict) or not isinstance(payload.get("dataUrl"), str):
        raise SessionError(f"Export fetch from {url} returned no data URL.")
    return EncodedBlob(data_url=payload["dataUrl"], mime_type=payload.get("mime"))


def decode_blob(encoded: EncodedBlob) -> ExportBlob:
    """Decode a base64 data URL into bytes.

    Args:
        encoded: Transport string produced inside the browser.

    Returns:
        Raw bytes with the declared content type.

    Raises:
        SessionError: If the data URL is malformed.
    """
    _, separator, payload = encoded.data_url.partition(",")
    if not separator:
        raise SessionError("Malformed data URL from export fetch: missing payload separator.")
    try:
        buffer = base64.b64decode(payload, validate=True)
    except binascii.Error as error:
        raise SessionError(f"Malformed base64 payload from export fetch: {error}") from error
    return ExportBlob(buffer=buffer, mime_type=encoded.mime_type)
