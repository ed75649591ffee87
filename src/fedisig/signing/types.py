"""
Type definitions for HTTP Signature construction

This module provides the data classes passed through the request builder,
the canonicalizer and the signer, together with the case-insensitive header
mapping used to hold request headers.
"""

from typing import Callable, Dict, Mapping, Optional, Tuple, Union
from dataclasses import dataclass, field
from enum import Enum

from requests.structures import CaseInsensitiveDict


class HttpMethod(str, Enum):
    """HTTP methods that have a signing profile"""
    GET = "GET"
    POST = "POST"


class SignatureAlgorithm(str, Enum):
    """Signature algorithm names as rendered in the Signature header"""
    RSA_SHA256 = "rsa-sha256"


class HeaderMap(CaseInsensitiveDict):
    """
    Header mapping with normalized (lower-cased) keys.

    Keys are lower-cased on insert and on lookup, so ``Host``, ``host`` and
    ``HOST`` all address the same entry. The last write wins, including the
    spelling of the name reported when iterating.
    """

    def merged(self, additional: Optional[Mapping[str, str]]) -> 'HeaderMap':
        """
        Return a copy with ``additional`` written over this map.

        Args:
            additional: Headers that override existing entries case-insensitively

        Returns:
            HeaderMap: New merged map
        """
        result = self.copy()
        if additional:
            for name, value in additional.items():
                result[name] = value
        return result

    def copy(self) -> 'HeaderMap':
        return HeaderMap(self._store.values())

    def normalized(self) -> Dict[str, str]:
        """Return a plain dict keyed by lower-cased header names."""
        return dict(self.lower_items())

    def to_dict(self) -> Dict[str, str]:
        """Return a plain dict keyed by header names as last written."""
        return dict(self.items())


@dataclass(frozen=True)
class PrivateKey:
    """
    Signing credential supplied by the caller

    Attributes:
        private_key_pem: RSA private key in PEM form
        key_id: Identifier (usually the actor URL plus ``#main-key``) that lets
            the receiving server locate the public key
    """
    private_key_pem: str
    key_id: str

    def __repr__(self) -> str:
        return f"PrivateKey(key_id={self.key_id!r})"


@dataclass(frozen=True)
class Request:
    """
    Outbound HTTP request to be signed

    Attributes:
        url: Normalized absolute request URL
        method: HTTP method (``GET`` or ``POST``)
        headers: Request headers with case-insensitive keys
    """
    url: str
    method: str
    headers: HeaderMap = field(default_factory=HeaderMap)

    def __post_init__(self):
        # Always hold a private HeaderMap so later edits to the source mapping
        # cannot change a built request.
        object.__setattr__(self, 'headers', HeaderMap(self.headers))


@dataclass(frozen=True)
class SignedRequest:
    """
    Signed request and the artifacts it was derived from

    Attributes:
        request: Request that was signed
        signing_string: Canonical string the signature covers
        signature: Base64-encoded RSA signature
        signature_header: Value for the ``Signature`` request header
    """
    request: Request
    signing_string: str
    signature: str
    signature_header: str

    def headers_with_signature(self) -> Dict[str, str]:
        """
        Headers to send on the wire.

        Returns:
            dict: Request headers plus the ``Signature`` header
        """
        headers = self.request.headers.copy()
        headers['Signature'] = self.signature_header
        return headers.to_dict()


# Type aliases for convenience
DateProvider = Callable[[], str]
RequestBody = Union[str, bytes]
SignatureResult = Tuple[str, str]
