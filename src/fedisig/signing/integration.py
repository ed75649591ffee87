"""
HTTP client integration for signed federation requests

This module sends the requests produced by the signer through a
``requests.Session``: activity delivery to remote inboxes (signed POST) and
fetching remote objects (signed GET). It performs no retries; failures are
raised to the caller, which owns queueing and backoff.
"""

import json
import logging
from typing import Any, Optional, Union

import requests

from ..config import FederationConfig
from ..exceptions import DeliveryError
from .types import PrivateKey, SignedRequest
from .http_signer import HttpSignatureSigner

logger = logging.getLogger(__name__)


class SignedHttpClient:
    """
    HTTP client that signs every outbound request.

    Wraps a ``requests.Session``; the session is closed when the client is
    used as a context manager.
    """

    def __init__(
        self,
        config: FederationConfig,
        session: Optional[requests.Session] = None,
        signer: Optional[HttpSignatureSigner] = None
    ):
        """
        Initialize signed HTTP client.

        Args:
            config: Federation configuration
            session: Optional existing requests session to use
            signer: Optional signer (built from ``config.debug`` if omitted)
        """
        self.config = config
        self.session = session or requests.Session()
        if signer is None:
            threshold = config.debug.slow_signing_threshold_ms if config.debug.log_timing else float('inf')
            signer = HttpSignatureSigner(
                log_signing_strings=config.debug.log_signing_strings,
                slow_signing_threshold_ms=threshold
            )
        self.signer = signer
        logger.info(f"Configured signed HTTP client for {config.instance_url}")

    def key_for(self, user_id: str, private_key_pem: str) -> PrivateKey:
        """
        Build the signing key of a local user.

        Args:
            user_id: Local user identifier
            private_key_pem: The user's RSA private key

        Returns:
            PrivateKey: Key whose id is derived from the instance URL
        """
        return PrivateKey(private_key_pem=private_key_pem, key_id=self.config.key_id_for(user_id))

    def deliver(self, key: PrivateKey, url: str, activity: Any) -> requests.Response:
        """
        Deliver an activity to a remote inbox.

        Args:
            key: Signing key of the sending actor
            url: Inbox URL
            activity: JSON-serialisable activity

        Returns:
            requests.Response: Successful response

        Raises:
            InvalidUrlError: If the URL is not a well-formed absolute URL
            InvalidKeyError: If the private key PEM cannot be decoded
            SigningError: If the signature operation fails
            DeliveryError: If sending fails or the server rejects the request
        """
        body = json.dumps(activity, ensure_ascii=False, separators=(',', ':')).encode('utf-8')
        signed = self.signer.sign_post(key, url, body, {'User-Agent': self.config.user_agent})
        return self.send(signed, body)

    def signed_get(self, key: PrivateKey, url: str) -> Any:
        """
        Fetch a remote ActivityPub object with a signed GET.

        Args:
            key: Signing key of the fetching actor
            url: Object URL

        Returns:
            Any: Decoded JSON body

        Raises:
            InvalidUrlError: If the URL is not a well-formed absolute URL
            InvalidKeyError: If the private key PEM cannot be decoded
            SigningError: If the signature operation fails
            DeliveryError: If the request fails or the body is not JSON
        """
        signed = self.signer.sign_get(key, url, {'User-Agent': self.config.user_agent})
        response = self.send(signed)
        try:
            return response.json()
        except ValueError as e:
            raise DeliveryError(
                f"Response from {url} is not valid JSON: {e}",
                "INVALID_RESPONSE",
                http_status=response.status_code,
                details={"url": url, "original_error": str(e)}
            ) from e

    def send(self, signed: SignedRequest, body: Optional[Union[str, bytes]] = None) -> requests.Response:
        """
        Send a signed request.

        Args:
            signed: Signed request; its headers plus ``Signature`` are sent
            body: Exact body the Digest header was computed over

        Returns:
            requests.Response: Successful response

        Raises:
            DeliveryError: If sending fails or the server rejects the request
        """
        request = signed.request
        try:
            response = self.session.request(
                request.method,
                request.url,
                data=body,
                headers=signed.headers_with_signature(),
                timeout=self.config.timeout,
                verify=self.config.verify_ssl
            )
        except requests.RequestException as e:
            logger.error(f"{request.method} {request.url} failed: {e}")
            raise DeliveryError(
                f"Request to {request.url} failed: {e}",
                details={"url": request.url, "method": request.method, "original_error": str(e)}
            ) from e

        logger.debug(f"{request.method} {request.url} -> {response.status_code}")

        if not response.ok:
            logger.error(f"{request.method} {request.url} rejected with HTTP {response.status_code}")
            raise DeliveryError(
                f"Request to {request.url} failed with HTTP {response.status_code}",
                "HTTP_ERROR",
                http_status=response.status_code,
                details={"url": request.url, "method": request.method, "response": response.text[:500]}
            )

        return response

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, *args):
        """Context manager exit."""
        self.close()


def create_signed_http_client(config: FederationConfig, **session_kwargs) -> SignedHttpClient:
    """
    Create a new signed HTTP client.

    Args:
        config: Federation configuration
        **session_kwargs: Attributes to set on the new requests.Session

    Returns:
        SignedHttpClient: Configured client
    """
    session = requests.Session()

    for key, value in session_kwargs.items():
        if hasattr(session, key):
            setattr(session, key, value)

    return SignedHttpClient(config, session=session)
