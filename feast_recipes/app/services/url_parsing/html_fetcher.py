"""HTML fetching and URL validation utilities."""

import asyncio
import logging
import re
from typing import List
from urllib.parse import urlparse

import httpx

from feast_recipes.app.core.config import get_settings
from feast_recipes.app.services.url_parsing.errors import (
    ConnectionFailedError,
    FetchTimeoutError,
    HttpStatusError,
    InvalidContentTypeError,
    InvalidUrlError,
    InvalidUrlSchemeError,
    ResponseReadError,
    ResponseTooLargeError,
    TooManyRedirectsError,
)

logger = logging.getLogger(__name__)

USER_AGENT = "feast"

HTML_MIME_TYPES = {"text/html", "application/xhtml+xml"}

STATUS_MESSAGES = {
    401: "authentication required",
    403: "access denied",
    404: "page not found",
    429: "rate limited - try again later",
}

_HEADER_CHARSET_RE = re.compile(r"charset=[\"']?([^;\"'\s]+)", re.I)
_META_CHARSET_RE = re.compile(rb"<meta[^>]+charset=[\"']?([A-Za-z0-9_\-:.]+)", re.I)


def validate_url(url: str) -> str:
    """Check that ``url`` is an absolute http(s) URL with a host; return it trimmed."""
    candidate = (url or "").strip()
    if not candidate:
        raise InvalidUrlError("empty URL")
    try:
        parsed = urlparse(candidate)
    except ValueError as exc:
        raise InvalidUrlError(str(exc)) from exc
    if not parsed.scheme:
        raise InvalidUrlError("relative URL without a base")
    if parsed.scheme not in {"http", "https"}:
        raise InvalidUrlSchemeError(parsed.scheme)
    if not parsed.hostname:
        raise InvalidUrlError("empty host")
    return candidate


def mime_type(content_type: str) -> str:
    """``"text/html; charset=utf-8"`` -> ``"text/html"``."""
    return content_type.split(";")[0].strip().lower()


def is_html_content_type(content_type: str) -> bool:
    return mime_type(content_type) in HTML_MIME_TYPES


def status_to_message(status: int, reason_phrase: str = "") -> str:
    """Short phrase describing a non-success HTTP status."""
    if status in STATUS_MESSAGES:
        return STATUS_MESSAGES[status]
    if 500 <= status <= 599:
        return "server error"
    return reason_phrase or httpx.codes.get_reason_phrase(status) or "unknown error"


def decode_body(content: bytes, content_type: str = "") -> str:
    """Decode HTML bytes using the header charset, a ``<meta charset>``, or UTF-8."""
    encoding = None
    match = _HEADER_CHARSET_RE.search(content_type or "")
    if match:
        encoding = match.group(1)
    else:
        meta_match = _META_CHARSET_RE.search(content[:4096])
        if meta_match:
            encoding = meta_match.group(1).decode("ascii")

    try:
        return content.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        logger.debug("Unknown charset %s, decoding as utf-8", encoding)
        return content.decode("utf-8", errors="replace")


def _check_response(response: httpx.Response, max_bytes: int) -> None:
    if not response.is_success:
        raise HttpStatusError(
            response.status_code,
            status_to_message(response.status_code, response.reason_phrase),
        )

    content_type = response.headers.get("content-type", "")
    if content_type.strip() and not is_html_content_type(content_type):
        raise InvalidContentTypeError(mime_type(content_type))

    content_length = response.headers.get("content-length", "").strip()
    if content_length.isdigit() and int(content_length) > max_bytes:
        raise ResponseTooLargeError(max_bytes)


async def _read_body(response: httpx.Response, max_bytes: int, timeout_seconds: float) -> bytes:
    chunks: List[bytes] = []
    received = 0
    try:
        async for chunk in response.aiter_bytes():
            received += len(chunk)
            if received > max_bytes:
                raise ResponseTooLargeError(max_bytes)
            chunks.append(chunk)
    except httpx.TimeoutException as exc:
        raise FetchTimeoutError(timeout_seconds) from exc
    except httpx.HTTPError as exc:
        raise ResponseReadError(str(exc) or type(exc).__name__) from exc
    return b"".join(chunks)


async def _get_html(url: str, timeout_seconds: float, max_redirects: int, max_bytes: int) -> str:
    timeout = httpx.Timeout(timeout_seconds)
    headers = {"User-Agent": USER_AGENT}
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            max_redirects=max_redirects,
            headers=headers,
        ) as client:
            async with client.stream("GET", url) as response:
                _check_response(response, max_bytes)
                content = await _read_body(response, max_bytes, timeout_seconds)
                content_type = response.headers.get("content-type", "")
    except httpx.TimeoutException as exc:
        raise FetchTimeoutError(timeout_seconds) from exc
    except httpx.TooManyRedirects as exc:
        raise TooManyRedirectsError(max_redirects) from exc
    except httpx.InvalidURL as exc:
        raise InvalidUrlError(str(exc)) from exc
    except httpx.HTTPError as exc:
        raise ConnectionFailedError(str(exc) or type(exc).__name__) from exc

    logger.debug("Fetched %s (%d bytes, content-type=%s)", url, len(content), content_type or "none")
    return decode_body(content, content_type)


async def fetch_url(url: str) -> str:
    """Fetch a page's HTML with a single GET.

    Raises a ``FetchError`` subclass for an invalid URL (before any network
    activity), network failures, non-2xx statuses, non-HTML content and
    bodies over the size cap. Never retries.
    """
    target = validate_url(url)
    settings = get_settings()
    timeout_seconds = settings.fetch_timeout_seconds
    try:
        return await asyncio.wait_for(
            _get_html(
                target,
                timeout_seconds,
                settings.fetch_max_redirects,
                settings.fetch_max_response_bytes,
            ),
            timeout=timeout_seconds,
        )
    except asyncio.TimeoutError as exc:
        raise FetchTimeoutError(timeout_seconds) from exc
