"""
fedisig
HTTP Signatures (RSA-SHA256) for outbound ActivityPub federation requests
"""

from .version import __version__
from .crypto.rsa import (
    load_private_key,
    generate_rsa_private_key_pem,
    public_key_pem_from_private,
)
from .exceptions import (
    FediSigError,
    InvalidUrlError,
    MissingHeaderError,
    InvalidKeyError,
    SigningError,
    ConfigurationError,
    DeliveryError,
)
from .config import (
    FederationConfig,
    DebugConfig,
    create_config,
    load_config_from_json,
    load_config_from_file,
    load_config_from_env,
)
from .signing import (
    # Core signing functionality
    create_signed_post,
    create_signed_get,
    HttpSignatureSigner,
    create_signer,
    sign,
    build_signature_header,
    # Request building and canonicalization
    build_post_request,
    build_get_request,
    build_signing_string,
    # Types
    HeaderMap,
    HttpMethod,
    PrivateKey,
    Request,
    SignatureAlgorithm,
    SignedRequest,
    # Profiles
    GET_SIGNATURE_HEADERS,
    POST_SIGNATURE_HEADERS,
    # HTTP Integration
    SignedHttpClient,
    create_signed_http_client,
)


# Public API exports
__all__ = [
    '__version__',
    # Request Signing - Core
    'create_signed_post',
    'create_signed_get',
    'HttpSignatureSigner',
    'create_signer',
    'sign',
    'build_signature_header',
    'build_post_request',
    'build_get_request',
    'build_signing_string',
    # Request Signing - Types
    'HeaderMap',
    'HttpMethod',
    'PrivateKey',
    'Request',
    'SignatureAlgorithm',
    'SignedRequest',
    'GET_SIGNATURE_HEADERS',
    'POST_SIGNATURE_HEADERS',
    # Keys
    'load_private_key',
    'generate_rsa_private_key_pem',
    'public_key_pem_from_private',
    # Exceptions
    'FediSigError',
    'InvalidUrlError',
    'MissingHeaderError',
    'InvalidKeyError',
    'SigningError',
    'ConfigurationError',
    'DeliveryError',
    # Configuration
    'FederationConfig',
    'DebugConfig',
    'create_config',
    'load_config_from_json',
    'load_config_from_file',
    'load_config_from_env',
    # HTTP Integration
    'SignedHttpClient',
    'create_signed_http_client',
]
