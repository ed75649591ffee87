"""
Signing profiles

Each supported HTTP method signs a fixed, ordered list of headers. The
lists are rendered verbatim into the ``headers`` field of the Signature
header, so their order is part of the wire format.
"""

from typing import Dict, Tuple
from dataclasses import dataclass

from .types import HttpMethod

REQUEST_TARGET = "(request-target)"

ACTIVITY_JSON_CONTENT_TYPE = "application/activity+json"
ACTIVITY_ACCEPT = "application/activity+json, application/ld+json"

POST_SIGNATURE_HEADERS: Tuple[str, ...] = (REQUEST_TARGET, "date", "host", "digest")
GET_SIGNATURE_HEADERS: Tuple[str, ...] = (REQUEST_TARGET, "date", "host", "accept")


@dataclass(frozen=True)
class SignatureProfile:
    """
    Signing profile for one HTTP method

    Attributes:
        method: HTTP method the profile applies to
        include_headers: Ordered header names covered by the signature
    """
    method: HttpMethod
    include_headers: Tuple[str, ...]


SIGNATURE_PROFILES: Dict[HttpMethod, SignatureProfile] = {
    HttpMethod.POST: SignatureProfile(HttpMethod.POST, POST_SIGNATURE_HEADERS),
    HttpMethod.GET: SignatureProfile(HttpMethod.GET, GET_SIGNATURE_HEADERS),
}


def get_profile(method: HttpMethod) -> SignatureProfile:
    """
    Look up the signing profile for a method.

    Args:
        method: HTTP method

    Returns:
        SignatureProfile: Profile for the method

    Raises:
        ValueError: If the method has no signing profile
    """
    return SIGNATURE_PROFILES[HttpMethod(method)]
