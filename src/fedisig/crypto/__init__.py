"""
Cryptographic operations for the fedisig SDK
"""

from .rsa import (
    MIN_RSA_KEY_SIZE,
    DEFAULT_RSA_KEY_SIZE,
    load_private_key,
    sign_pkcs1v15_sha256,
    generate_rsa_private_key_pem,
    public_key_pem_from_private,
)

__all__ = [
    'MIN_RSA_KEY_SIZE',
    'DEFAULT_RSA_KEY_SIZE',
    'load_private_key',
    'sign_pkcs1v15_sha256',
    'generate_rsa_private_key_pem',
    'public_key_pem_from_private',
]
