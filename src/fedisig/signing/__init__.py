"""
fedisig - Request Signing Module

draft-cavage HTTP Signatures with RSA-SHA256 for outbound federation
requests. This module builds GET and POST requests, derives their signing
strings and renders the ``Signature`` header.
"""

from .types import (
    HeaderMap,
    HttpMethod,
    PrivateKey,
    Request,
    SignatureAlgorithm,
    SignedRequest,
)

from .request_builder import (
    build_get_request,
    build_post_request,
)

from .canonical_message import (
    SigningStringBuilder,
    build_signing_string,
)

from .http_signer import (
    HttpSignatureSigner,
    build_signature_header,
    create_signed_get,
    create_signed_post,
    create_signer,
    sign,
)

from .signing_config import (
    SignatureProfile,
    SIGNATURE_PROFILES,
    GET_SIGNATURE_HEADERS,
    POST_SIGNATURE_HEADERS,
    REQUEST_TARGET,
    get_profile,
)

from .utils import (
    calculate_digest,
    format_http_date,
    generate_date,
    normalize_header_name,
    parse_url,
)

from .integration import (
    SignedHttpClient,
    create_signed_http_client,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'create_signed_post',
    'create_signed_get',
    'HttpSignatureSigner',
    'create_signer',
    'sign',
    'build_signature_header',
    # Request building and canonicalization
    'build_post_request',
    'build_get_request',
    'SigningStringBuilder',
    'build_signing_string',
    # Types
    'HeaderMap',
    'HttpMethod',
    'PrivateKey',
    'Request',
    'SignatureAlgorithm',
    'SignedRequest',
    # Profiles
    'SignatureProfile',
    'SIGNATURE_PROFILES',
    'GET_SIGNATURE_HEADERS',
    'POST_SIGNATURE_HEADERS',
    'REQUEST_TARGET',
    'get_profile',
    # Utilities
    'calculate_digest',
    'format_http_date',
    'generate_date',
    'normalize_header_name',
    'parse_url',
    # HTTP Integration
    'SignedHttpClient',
    'create_signed_http_client',
]
