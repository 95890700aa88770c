"""Unit tests for in-browser blob retrieval."""

from __future__ import annotations

import pytest
from playwright.async_api import Error as PlaywrightError

from core.errors import SessionError
from core.types import EncodedBlob
from session.blob_transfer import decode_blob, fetch_encoded_blob
from tests.fakes import FakePage, data_url_payload


@pytest.mark.asyncio
async def test_fetch_encoded_blob_returns_data_url_and_mime() -> None:
    """Fetch should evaluate in the page and keep the content type."""
    page = FakePage(evaluate_result=data_url_payload(b"PK\x03\x04"))

    encoded = await fetch_encoded_blob(page, "https://letterboxd.com/data/export")

    assert encoded.mime_type == "application/zip"
    assert encoded.data_url.startswith("data:application/zip;base64,")
    assert page.evaluated_args == ["https://letterboxd.com/data/export"]


@pytest.mark.asyncio
async def test_fetch_encoded_blob_wraps_non_ok_status() -> None:
    """A non-OK response thrown in the page should carry its status text."""
    page = FakePage(evaluate_error=PlaywrightError("Error: Forbidden"))

    with pytest.raises(SessionError, match="Forbidden"):
        await fetch_encoded_blob(page, "https://letterboxd.com/data/export")


@pytest.mark.asyncio
async def test_fetch_encoded_blob_rejects_missing_payload() -> None:
    """A script result without a data URL should fail."""
    page = FakePage(evaluate_result={"mime": "text/html"})

    with pytest.raises(SessionError):
        await fetch_encoded_blob(page, "https://letterboxd.com/data/export")


def test_decode_blob_restores_bytes() -> None:
    """Decoding should return the original bytes."""
    payload = data_url_payload(b"\x00\x01binary\xff")

    blob = decode_blob(EncodedBlob(data_url=payload["dataUrl"], mime_type="application/zip"))

    assert (blob.buffer, blob.mime_type) == (b"\x00\x01binary\xff", "application/zip")


@pytest.mark.parametrize("data_url", ["data:application/zip;base64", "data:;base64,@@@"])
def test_decode_blob_raises_for_malformed_data_url(data_url: str) -> None:
    """Missing separators and invalid base64 should fail."""
    with pytest.raises(SessionError):
        decode_blob(EncodedBlob(data_url=data_url, mime_type=None))
