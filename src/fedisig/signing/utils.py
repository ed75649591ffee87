"""
Utility functions for request signing

This module provides the helpers shared by the request builder and the
canonicalizer: URL parsing, Date header rendering, body digest calculation
and header name normalization.
"""

import re
import time
import base64
import hashlib
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Dict, Optional
from urllib.parse import urlsplit, urlunsplit

import idna
from requests.utils import requote_uri

from ..exceptions import InvalidUrlError
from .types import RequestBody

DIGEST_ALGORITHM_PREFIX = "SHA-256="

_WHITESPACE_OR_CONTROL = re.compile(r'[\s\x00-\x1f\x7f]')

_DEFAULT_PORTS = {"http": 80, "https": 443}


def parse_url(url: str) -> Dict[str, str]:
    """
    Parse URL to extract components needed for signing.

    The URL is normalized the way it goes out on the wire: the host is
    lower-cased and IDNA-encoded, a default port is dropped, dot segments
    are removed from the path and characters outside the URI character set
    are percent-encoded. The ``(request-target)`` path a receiver recomputes
    from the request line therefore matches the signed one.

    Args:
        url: Absolute http(s) URL

    Returns:
        dict: Dictionary with parsed URL components:
            - url: normalized URL (empty path rendered as ``/``)
            - scheme: lower-cased scheme
            - host: ASCII host name without port
            - path: normalized path only, no query or fragment

    Raises:
        InvalidUrlError: If URL format is invalid
    """
    if not isinstance(url, str) or not url:
        raise InvalidUrlError("URL must be a non-empty string", details={"url": url})

    if _WHITESPACE_OR_CONTROL.search(url):
        raise InvalidUrlError(f"Invalid URL format: {url}", details={"url": url})

    try:
        parsed = urlsplit(url)
        # Accessing .port validates the port number
        port = parsed.port
    except ValueError as e:
        raise InvalidUrlError(
            f"Failed to parse URL: {e}",
            details={"url": url, "original_error": str(e)}
        ) from e

    if not parsed.scheme or not parsed.hostname:
        raise InvalidUrlError(f"Invalid URL format: {url}", details={"url": url})

    scheme = parsed.scheme.lower()
    if scheme not in _DEFAULT_PORTS:
        raise InvalidUrlError(
            f"Unsupported URL scheme: {parsed.scheme}",
            details={"url": url, "scheme": parsed.scheme}
        )

    host = _encode_host(url, parsed.hostname)

    netloc = host
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        netloc = f"{host}:{port}"
    userinfo, sep, _ = parsed.netloc.rpartition('@')
    if sep:
        netloc = f"{userinfo}@{netloc}"

    path = remove_dot_segments(parsed.path or "/")
    normalized = requote_uri(urlunsplit((scheme, netloc, path, parsed.query, parsed.fragment)))

    return {
        "url": normalized,
        "scheme": scheme,
        "host": host,
        "path": urlsplit(normalized).path,
    }


def _encode_host(url: str, hostname: str) -> str:
    if ':' in hostname:
        return f"[{hostname}]"
    if hostname.isascii():
        return hostname
    try:
        return idna.encode(hostname, uts46=True).decode('ascii')
    except idna.IDNAError as e:
        raise InvalidUrlError(
            f"Invalid host name: {hostname}",
            details={"url": url, "original_error": str(e)}
        ) from e


def remove_dot_segments(path: str) -> str:
    """
    Remove ``.`` and ``..`` segments from an absolute path (RFC 3986 5.2.4).

    Args:
        path: URL path

    Returns:
        str: Path without dot segments; ``..`` never climbs above ``/``
    """
    output = []
    for segment in path.split('/'):
        if segment == '.':
            continue
        if segment != '..':
            output.append(segment)
        elif output:
            output.pop()

    if path.startswith('/') and (not output or output[0]):
        output.insert(0, '')
    if path.endswith(('/.', '/..')):
        output.append('')

    return '/'.join(output)


def request_target_path(url: str) -> str:
    """
    Path used in the ``(request-target)`` line.

    Args:
        url: Request URL

    Returns:
        str: Path component without query string or fragment
    """
    return parse_url(url)["path"]


def format_http_date(moment: Optional[datetime] = None) -> str:
    """
    Render a timestamp in RFC 2822 format for the Date header.

    Args:
        moment: Aware datetime (uses current UTC time if None)

    Returns:
        str: e.g. ``Sat, 17 Oct 2026 10:00:00 +0000``
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    return format_datetime(moment.astimezone(timezone.utc))


def generate_date() -> str:
    """Current time as a Date header value."""
    return format_http_date()


def calculate_digest(body: RequestBody) -> str:
    """
    Calculate the Digest header value for a request body.

    Args:
        body: Raw request body; strings are UTF-8 encoded

    Returns:
        str: ``SHA-256=`` followed by the base64 SHA-256 of the body
    """
    if isinstance(body, str):
        body = body.encode('utf-8')
    elif not isinstance(body, (bytes, bytearray)):
        raise TypeError(f"Body must be str or bytes, got {type(body)}")

    digest_b64 = base64.b64encode(hashlib.sha256(body).digest()).decode('ascii')
    return f"{DIGEST_ALGORITHM_PREFIX}{digest_b64}"


def normalize_header_name(name: str) -> str:
    """
    Normalize header name to lowercase for consistent processing.

    Args:
        name: Header name to normalize

    Returns:
        str: Lowercase header name
    """
    return name.lower()


class PerformanceTimer:
    """Simple performance timer for monitoring signing operations."""

    def __init__(self):
        self.start_time = time.perf_counter()

    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return (time.perf_counter() - self.start_time) * 1000
