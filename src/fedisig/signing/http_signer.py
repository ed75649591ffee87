"""
draft-cavage HTTP Signatures with RSA-SHA256

This module provides the signer that turns a built request into a
``SignedRequest``: it derives the signing string, signs it with the
caller's RSA key and renders the ``Signature`` header value.
"""

import base64
import logging
from typing import Iterable, Mapping, Optional, Sequence

from ..crypto.rsa import load_private_key, sign_pkcs1v15_sha256
from .types import (
    DateProvider,
    HttpMethod,
    PrivateKey,
    Request,
    RequestBody,
    SignatureAlgorithm,
    SignatureResult,
    SignedRequest,
)
from .utils import PerformanceTimer
from .canonical_message import build_signing_string
from .request_builder import build_get_request, build_post_request
from .signing_config import get_profile

logger = logging.getLogger(__name__)

# Covers the RSA signature operation only, not PEM decoding
DEFAULT_SLOW_SIGNING_THRESHOLD_MS = 50.0


def build_signature_header(key_id: str, include_headers: Iterable[str], signature_b64: str) -> str:
    """
    Render the ``Signature`` header value.

    Double quotes inside ``key_id`` are not escaped.

    Args:
        key_id: Key identifier
        include_headers: Covered header names, rendered as passed
        signature_b64: Base64-encoded signature

    Returns:
        str: Header value
    """
    return (
        f'keyId="{key_id}",'
        f'algorithm="{SignatureAlgorithm.RSA_SHA256.value}",'
        f'headers="{" ".join(include_headers)}",'
        f'signature="{signature_b64}"'
    )


def sign(signing_string: str, private_key: PrivateKey, include_headers: Sequence[str]) -> SignatureResult:
    """
    Sign a signing string and render the Signature header.

    Args:
        signing_string: Canonical signing string
        private_key: Caller's key
        include_headers: Header names covered by ``signing_string``

    Returns:
        tuple: (base64 signature, Signature header value)

    Raises:
        InvalidKeyError: If the private key PEM cannot be decoded
        SigningError: If the signature operation fails
    """
    key = load_private_key(private_key.private_key_pem)
    return _render(private_key, include_headers, sign_pkcs1v15_sha256(key, signing_string))


def _render(private_key: PrivateKey, include_headers: Sequence[str], raw_signature: bytes) -> SignatureResult:
    signature_b64 = base64.b64encode(raw_signature).decode('ascii')
    return signature_b64, build_signature_header(private_key.key_id, include_headers, signature_b64)


class HttpSignatureSigner:
    """
    Signer for outbound federation requests

    Holds no key material between calls; every request decodes the PEM of the
    key it is given, so a single instance is safe to share between threads.
    """

    def __init__(
        self,
        date: Optional[DateProvider] = None,
        log_signing_strings: bool = False,
        slow_signing_threshold_ms: float = DEFAULT_SLOW_SIGNING_THRESHOLD_MS
    ):
        """
        Initialize the signer.

        Args:
            date: Optional Date header provider (defaults to the system clock)
            log_signing_strings: Log every signing string at debug level
            slow_signing_threshold_ms: Warn when signing takes longer than this
        """
        self.date = date
        self.log_signing_strings = log_signing_strings
        self.slow_signing_threshold_ms = slow_signing_threshold_ms

    def sign_request(
        self,
        request: Request,
        key: PrivateKey,
        include_headers: Optional[Sequence[str]] = None
    ) -> SignedRequest:
        """
        Sign an already built request.

        Args:
            request: Request to sign
            key: Caller's key
            include_headers: Ordered header names to cover (defaults to the
                signing profile of the request method)

        Returns:
            SignedRequest: Request with its signing artifacts

        Raises:
            MissingHeaderError: If a covered header is absent
            InvalidKeyError: If the private key PEM cannot be decoded
            SigningError: If the signature operation fails
            ValueError: If no headers are given and the method has no
                signing profile
        """
        if include_headers is None:
            include_headers = get_profile(request.method).include_headers

        signing_string = build_signing_string(request, include_headers)
        if self.log_signing_strings:
            logger.debug(f"Signing string for {request.method} {request.url}:\n{signing_string}")

        rsa_key = load_private_key(key.private_key_pem)

        timer = PerformanceTimer()
        raw_signature = sign_pkcs1v15_sha256(rsa_key, signing_string)
        elapsed_ms = timer.elapsed_ms()
        if elapsed_ms > self.slow_signing_threshold_ms:
            logger.warning(
                f"Signing operation took {elapsed_ms:.2f}ms "
                f"(target: <{self.slow_signing_threshold_ms:.0f}ms)"
            )

        signature, signature_header = _render(key, include_headers, raw_signature)
        return SignedRequest(
            request=request,
            signing_string=signing_string,
            signature=signature,
            signature_header=signature_header
        )

    def sign_post(
        self,
        key: PrivateKey,
        url: str,
        body: RequestBody,
        additional_headers: Optional[Mapping[str, str]] = None
    ) -> SignedRequest:
        """
        Build and sign a POST request.

        Raises:
            InvalidUrlError: If the URL is not a well-formed absolute URL
            InvalidKeyError: If the private key PEM cannot be decoded
            SigningError: If the signature operation fails
        """
        request = build_post_request(url, body, additional_headers, date=self.date)
        return self.sign_request(request, key, get_profile(HttpMethod.POST).include_headers)

    def sign_get(
        self,
        key: PrivateKey,
        url: str,
        additional_headers: Optional[Mapping[str, str]] = None
    ) -> SignedRequest:
        """
        Build and sign a GET request.

        Raises:
            InvalidUrlError: If the URL is not a well-formed absolute URL
            InvalidKeyError: If the private key PEM cannot be decoded
            SigningError: If the signature operation fails
        """
        request = build_get_request(url, additional_headers, date=self.date)
        return self.sign_request(request, key, get_profile(HttpMethod.GET).include_headers)


def create_signer(**kwargs) -> HttpSignatureSigner:
    """
    Create a new HTTP Signature signer.

    Args:
        **kwargs: Arguments for HttpSignatureSigner

    Returns:
        HttpSignatureSigner: Configured signer instance
    """
    return HttpSignatureSigner(**kwargs)


def create_signed_post(
    key: PrivateKey,
    url: str,
    body: RequestBody,
    additional_headers: Optional[Mapping[str, str]] = None
) -> SignedRequest:
    """
    Build and sign a POST delivering ``body`` to ``url``.

    The signature covers ``(request-target) date host digest``.

    Args:
        key: Caller's key
        url: Absolute target URL
        body: Exact body that will be sent
        additional_headers: Headers overriding the defaults case-insensitively

    Returns:
        SignedRequest: Signed request

    Raises:
        InvalidUrlError: If the URL is not a well-formed absolute URL
        InvalidKeyError: If the private key PEM cannot be decoded
        SigningError: If the signature operation fails
    """
    return HttpSignatureSigner().sign_post(key, url, body, additional_headers)


def create_signed_get(
    key: PrivateKey,
    url: str,
    additional_headers: Optional[Mapping[str, str]] = None
) -> SignedRequest:
    """
    Build and sign a GET fetching ``url``.

    The signature covers ``(request-target) date host accept``.

    Args:
        key: Caller's key
        url: Absolute URL of the object
        additional_headers: Headers overriding the defaults case-insensitively

    Returns:
        SignedRequest: Signed request

    Raises:
        InvalidUrlError: If the URL is not a well-formed absolute URL
        InvalidKeyError: If the private key PEM cannot be decoded
        SigningError: If the signature operation fails
    """
    return HttpSignatureSigner().sign_get(key, url, additional_headers)
