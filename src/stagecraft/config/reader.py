"""Reading raw configuration documents from a file, stdin or URL."""

import logging
import sys

import httpx

from stagecraft.config.errors import DocumentReadError

logger = logging.getLogger(__name__)

STDIN_SOURCE = "-"
REQUEST_TIMEOUT = 30.0


def is_url(source: str) -> bool:
    """Check if a source refers to a remote document."""
    return source.startswith(("http://", "https://"))


def read_configuration(source: str) -> bytes:
    """Read the raw bytes of a configuration document.

    Args:
        source: "-" for standard input, an http(s) URL, or a filesystem path

    Returns:
        bytes: The document content

    Raises:
        DocumentReadError: If the document cannot be read
    """
    if source == STDIN_SOURCE:
        return sys.stdin.buffer.read()

    if is_url(source):
        return _download(source)

    try:
        with open(source, "rb") as f:
            return f.read()
    except OSError as e:
        raise DocumentReadError(source, e.strerror or str(e)) from e


def _download(url: str) -> bytes:
    """Fetch a remote configuration document."""
    logger.debug("Downloading config from %s", url)
    try:
        response = httpx.get(url, timeout=REQUEST_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise DocumentReadError(url, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise DocumentReadError(url, str(e)) from e
    return response.content
