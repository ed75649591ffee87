"""
Outbound request construction

Builds the method, URL and headers of an ActivityPub GET or POST before it
is signed. The only side effect is reading the clock for the Date header.
"""

import logging
from typing import Mapping, Optional

from .types import DateProvider, HeaderMap, HttpMethod, Request, RequestBody
from .utils import calculate_digest, generate_date, parse_url
from .signing_config import ACTIVITY_ACCEPT, ACTIVITY_JSON_CONTENT_TYPE

logger = logging.getLogger(__name__)


def build_post_request(
    url: str,
    body: RequestBody,
    additional_headers: Optional[Mapping[str, str]] = None,
    date: Optional[DateProvider] = None
) -> Request:
    """
    Build a POST request carrying an ActivityPub payload.

    Args:
        url: Absolute target URL (typically an inbox)
        body: Exact body that will be sent
        additional_headers: Headers overriding the defaults case-insensitively
        date: Optional Date header provider (defaults to the system clock)

    Returns:
        Request: POST request with Date, Host, Content-Type and Digest headers

    Raises:
        InvalidUrlError: If the URL is not a well-formed absolute URL
    """
    url_parts = parse_url(url)

    headers = HeaderMap()
    headers['Date'] = (date or generate_date)()
    headers['Host'] = url_parts['host']
    headers['Content-Type'] = ACTIVITY_JSON_CONTENT_TYPE
    headers['Digest'] = calculate_digest(body)

    request = Request(
        url=url_parts['url'],
        method=HttpMethod.POST.value,
        headers=headers.merged(additional_headers)
    )
    logger.debug(f"Built {request.method} request to {request.url}")
    return request


def build_get_request(
    url: str,
    additional_headers: Optional[Mapping[str, str]] = None,
    date: Optional[DateProvider] = None
) -> Request:
    """
    Build a GET request for fetching an ActivityPub object.

    Args:
        url: Absolute URL of the object
        additional_headers: Headers overriding the defaults case-insensitively
        date: Optional Date header provider (defaults to the system clock)

    Returns:
        Request: GET request with Accept, Date and Host headers

    Raises:
        InvalidUrlError: If the URL is not a well-formed absolute URL
    """
    url_parts = parse_url(url)

    headers = HeaderMap()
    headers['Accept'] = ACTIVITY_ACCEPT
    headers['Date'] = (date or generate_date)()
    headers['Host'] = url_parts['host']

    request = Request(
        url=url_parts['url'],
        method=HttpMethod.GET.value,
        headers=headers.merged(additional_headers)
    )
    logger.debug(f"Built {request.method} request to {request.url}")
    return request
