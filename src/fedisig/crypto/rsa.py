"""
RSA key handling for HTTP Signatures

This module decodes the PEM private keys used to sign outbound requests and
provides the RSASSA-PKCS1-v1_5 / SHA-256 primitive, using the cryptography
package.
"""

from typing import Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..exceptions import InvalidKeyError, SigningError

# Keys below this size are rejected when decoding
MIN_RSA_KEY_SIZE = 1024
DEFAULT_RSA_KEY_SIZE = 2048


def load_private_key(private_key_pem: Union[str, bytes]) -> rsa.RSAPrivateKey:
    """
    Decode an unencrypted RSA private key from PEM.

    Both the PKCS#1 (``BEGIN RSA PRIVATE KEY``) and the PKCS#8
    (``BEGIN PRIVATE KEY``) encodings are accepted, provided the key is RSA.

    Args:
        private_key_pem: PEM text

    Returns:
        RSAPrivateKey: Decoded key

    Raises:
        InvalidKeyError: If the PEM is malformed, encrypted, not RSA, or too small
    """
    if isinstance(private_key_pem, str):
        private_key_pem = private_key_pem.encode('utf-8')
    elif not isinstance(private_key_pem, bytes):
        raise InvalidKeyError(
            "Private key PEM must be str or bytes",
            details={"key_type": str(type(private_key_pem))}
        )

    try:
        key = serialization.load_pem_private_key(private_key_pem, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise InvalidKeyError(
            f"Failed to decode private key PEM: {e}",
            details={"original_error": str(e)}
        ) from e

    if not isinstance(key, rsa.RSAPrivateKey):
        raise InvalidKeyError(
            f"Private key must be RSA, got {type(key).__name__}",
            details={"key_type": type(key).__name__}
        )

    if key.key_size < MIN_RSA_KEY_SIZE:
        raise InvalidKeyError(
            f"RSA key must be at least {MIN_RSA_KEY_SIZE} bits, got {key.key_size}",
            details={"key_size": key.key_size}
        )

    return key


def sign_pkcs1v15_sha256(private_key: rsa.RSAPrivateKey, message: Union[str, bytes]) -> bytes:
    """
    Sign a message with RSASSA-PKCS1-v1_5 and SHA-256.

    Args:
        private_key: Decoded RSA private key
        message: Message to sign; strings are UTF-8 encoded

    Returns:
        bytes: Raw signature

    Raises:
        SigningError: If the signature operation fails
    """
    if isinstance(message, str):
        message = message.encode('utf-8')

    try:
        return private_key.sign(message, padding.PKCS1v15(), hashes.SHA256())
    except Exception as e:
        raise SigningError(
            f"Message signing failed: {e}",
            details={"original_error": str(e)}
        ) from e


def generate_rsa_private_key_pem(key_size: int = DEFAULT_RSA_KEY_SIZE) -> str:
    """
    Generate a new RSA private key.

    Args:
        key_size: Modulus size in bits

    Returns:
        str: Private key as PKCS#1 PEM

    Raises:
        InvalidKeyError: If the key size is below the supported minimum
    """
    if key_size < MIN_RSA_KEY_SIZE:
        raise InvalidKeyError(
            f"RSA key must be at least {MIN_RSA_KEY_SIZE} bits, got {key_size}",
            details={"key_size": key_size}
        )

    key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption()
    ).decode('ascii')


def public_key_pem_from_private(private_key_pem: Union[str, bytes]) -> str:
    """
    Derive the public key PEM published in an actor's ``publicKeyPem``.

    Args:
        private_key_pem: RSA private key PEM

    Returns:
        str: SubjectPublicKeyInfo PEM

    Raises:
        InvalidKeyError: If the private key cannot be decoded
    """
    key = load_private_key(private_key_pem)
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo
    ).decode('ascii')
