"""
Recipe source loading.

Fetches program text from a file path, from stdin ('-'), or from an
http(s) URL, enforcing a size limit on every source.
"""
from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from urllib.parse import urlparse

import requests

from .config import RunnerSettings
from .const import DEFAULT_MAX_RETRIES
from .exceptions import ChefSourceError

_LOGGER = logging.getLogger(__name__)

_TEXT_TYPES = ("text/", "application/octet-stream")
_RETRY_STATUSES = (403, 429, 500, 502, 503, 504)


def is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def _fetch_url(session: requests.Session, url: str, settings: RunnerSettings,
               max_retries: int = DEFAULT_MAX_RETRIES) -> str:
    """Fetch recipe text from a URL, retrying with exponential backoff.

    Timeouts, connection errors and 403/429/5xx responses are retried;
    other HTTP errors, non-text responses and oversize bodies are not.

    Args:
        session: Requests session to use
        url: URL to fetch
        settings: Supplies the timeout and size limit
        max_retries: Maximum number of attempts

    Returns:
        The response body as text

    Raises:
        ChefSourceError: If every attempt fails, the response is not text,
            or it is larger than the size limit
    """
    for attempt in range(max_retries):
        try:
            _LOGGER.debug("Fetching %s (attempt %d/%d)", url, attempt + 1, max_retries)
            response = session.get(url, timeout=settings.timeout, stream=True)
            response.raise_for_status()

            content_type = response.headers.get("content-type", "text/plain").lower()
            if not content_type.startswith(_TEXT_TYPES):
                raise ChefSourceError(f"Invalid content type for {url}: {content_type}")

            content = b""
            for chunk in response.iter_content(chunk_size=8192):
                content += chunk
                if len(content) > settings.max_source_bytes:
                    raise ChefSourceError(
                        f"Recipe at {url} exceeds {settings.max_source_bytes} bytes")

            return content.decode(response.encoding or "utf-8", errors="replace")
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status in _RETRY_STATUSES and attempt < max_retries - 1:
                wait_time = 2 ** attempt
                _LOGGER.warning("Got %s for %s, retrying after %ds", status, url, wait_time)
                time.sleep(wait_time)
                continue
            raise ChefSourceError(f"Failed to fetch {url}: {e}") from e
        except requests.exceptions.RequestException as e:
            if attempt < max_retries - 1:
                wait_time = 2 ** attempt
                _LOGGER.warning("Error fetching %s: %s, retrying after %ds", url, e, wait_time)
                time.sleep(wait_time)
                continue
            raise ChefSourceError(f"Failed to fetch {url}: {e}") from e

    raise ChefSourceError(f"Failed to fetch {url} after {max_retries} attempts")


def load_source(source: str, settings: RunnerSettings | None = None,
                session: requests.Session | None = None) -> str:
    """Load program text.

    Args:
        source: A file path, '-' for stdin, or an http(s) URL
        settings: Timeout and size limit; defaults apply when omitted
        session: Optional requests session for URL sources

    Returns:
        The program text

    Raises:
        ChefSourceError: If the source cannot be read
    """
    settings = settings or RunnerSettings()

    if source == "-":
        text = sys.stdin.read()
    elif is_url(source):
        if session is not None:
            text = _fetch_url(session, source, settings)
        else:
            with requests.Session() as http:
                text = _fetch_url(http, source, settings)
    else:
        path = Path(source)
        try:
            if path.stat().st_size > settings.max_source_bytes:
                raise ChefSourceError(
                    f"{path} exceeds {settings.max_source_bytes} bytes")
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ChefSourceError(f"Cannot read {path}: {e}") from e

    if len(text.encode("utf-8")) > settings.max_source_bytes:
        raise ChefSourceError(f"Recipe source exceeds {settings.max_source_bytes} bytes")

    _LOGGER.debug("Loaded %d characters from %s", len(text), source)
    return text
