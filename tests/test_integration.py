"""
Integration tests for signed delivery and fetching

The requests session is mocked; these tests check what would be put on the
wire, not network behaviour.
"""

import hashlib
import base64
from unittest.mock import MagicMock, patch

import pytest
import requests

from fedisig import (
    DeliveryError,
    InvalidUrlError,
    PrivateKey,
    create_config,
    generate_rsa_private_key_pem,
)
from fedisig.signing import (
    HttpSignatureSigner,
    SignedHttpClient,
    build_signing_string,
    create_signed_http_client,
)


@pytest.fixture(scope="module")
def private_key_pem():
    return generate_rsa_private_key_pem()


@pytest.fixture
def config():
    return create_config("https://example.social", user_agent="fedisig-test/1.0", timeout=5)


@pytest.fixture
def mock_session():
    """Mock requests session returning a successful response."""
    session = MagicMock()
    response = MagicMock()
    response.ok = True
    response.status_code = 202
    response.text = ""
    session.request.return_value = response
    return session


@pytest.fixture
def client(config, mock_session):
    return SignedHttpClient(config, session=mock_session)


@pytest.fixture
def key(client, private_key_pem):
    return client.key_for("9abc", private_key_pem)


class TestSignedHttpClient:
    """Test delivery and fetching through SignedHttpClient"""

    def test_key_for(self, key, private_key_pem):
        assert key == PrivateKey(private_key_pem, "https://example.social/users/9abc#main-key")

    def test_deliver(self, client, key, mock_session):
        """Deliveries send the exact signed body with the Signature header"""
        activity = {"type": "Create", "object": {"type": "Note", "content": "héllo"}}

        response = client.deliver(key, "https://remote.example/inbox", activity)

        assert response is mock_session.request.return_value
        args, kwargs = mock_session.request.call_args
        assert args == ("POST", "https://remote.example/inbox")

        body = kwargs["data"]
        headers = kwargs["headers"]
        assert isinstance(body, bytes)
        assert headers["Digest"] == "SHA-256=" + base64.b64encode(hashlib.sha256(body).digest()).decode('ascii')
        assert headers["User-Agent"] == "fedisig-test/1.0"
        assert headers["Content-Type"] == "application/activity+json"
        assert headers["Host"] == "remote.example"
        assert 'keyId="https://example.social/users/9abc#main-key"' in headers["Signature"]
        assert 'headers="(request-target) date host digest"' in headers["Signature"]
        assert kwargs["timeout"] == 5
        assert kwargs["verify"] is True

    def test_signed_get(self, client, key, mock_session):
        mock_session.request.return_value.json.return_value = {"type": "Person", "id": "https://remote.example/users/bob"}

        result = client.signed_get(key, "https://remote.example/users/bob")

        assert result["type"] == "Person"
        args, kwargs = mock_session.request.call_args
        assert args == ("GET", "https://remote.example/users/bob")
        assert kwargs["data"] is None
        assert kwargs["headers"]["Accept"] == "application/activity+json, application/ld+json"
        assert 'headers="(request-target) date host accept"' in kwargs["headers"]["Signature"]

    def test_signed_get_invalid_json(self, client, key, mock_session):
        mock_session.request.return_value.json.side_effect = ValueError("Expecting value")

        with pytest.raises(DeliveryError) as exc_info:
            client.signed_get(key, "https://remote.example/users/bob")

        assert exc_info.value.error_code == "INVALID_RESPONSE"
        assert exc_info.value.http_status == 202

    def test_http_error(self, client, key, mock_session):
        response = mock_session.request.return_value
        response.ok = False
        response.status_code = 401
        response.text = "Request not signed"

        with pytest.raises(DeliveryError) as exc_info:
            client.deliver(key, "https://remote.example/inbox", {"type": "Follow"})

        assert exc_info.value.http_status == 401
        assert exc_info.value.error_code == "HTTP_ERROR"
        assert exc_info.value.details["response"] == "Request not signed"

    def test_transport_error(self, client, key, mock_session):
        mock_session.request.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(DeliveryError) as exc_info:
            client.deliver(key, "https://remote.example/inbox", {"type": "Follow"})

        assert exc_info.value.error_code == "DELIVERY_FAILED"
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)
        # No retries
        assert mock_session.request.call_count == 1

    def test_sends_the_signed_url(self, client, key, mock_session):
        """The URL put on the wire is the one the (request-target) line covers"""
        client.deliver(key, "https://Bücher.example/users/../users/ünï/inbox", {"type": "Follow"})

        args, kwargs = mock_session.request.call_args
        assert args == ("POST", "https://xn--bcher-kva.example/users/%C3%BCn%C3%AF/inbox")
        assert kwargs["headers"]["Host"] == "xn--bcher-kva.example"
        assert requests.Request(*args).prepare().path_url == "/users/%C3%BCn%C3%AF/inbox"

    def test_invalid_url_is_not_sent(self, client, key, mock_session):
        with pytest.raises(InvalidUrlError):
            client.deliver(key, "not a url", {"type": "Follow"})
        mock_session.request.assert_not_called()

    def test_send_prebuilt_request(self, client, key, mock_session):
        signer = HttpSignatureSigner()
        signed = signer.sign_post(key, "https://remote.example/inbox", b"{}")

        client.send(signed, b"{}")

        _, kwargs = mock_session.request.call_args
        assert kwargs["headers"]["Signature"] == signed.signature_header
        assert build_signing_string(signed.request, ["digest"]) == f"digest: {kwargs['headers']['Digest']}"

    def test_signer_follows_debug_config(self, mock_session):
        config = create_config(
            "https://example.social",
            debug={"log_signing_strings": True, "log_timing": False}
        )
        client = SignedHttpClient(config, session=mock_session)

        assert client.signer.log_signing_strings is True
        assert client.signer.slow_signing_threshold_ms == float('inf')

    def test_context_manager_closes_session(self, config, mock_session):
        with SignedHttpClient(config, session=mock_session) as client:
            assert client.session is mock_session
        mock_session.close.assert_called_once()


class TestClientFactory:
    """Test create_signed_http_client"""

    def test_create_signed_http_client(self, config):
        with patch('fedisig.signing.integration.requests.Session') as session_cls:
            session = session_cls.return_value
            client = create_signed_http_client(config, trust_env=False)

        assert isinstance(client, SignedHttpClient)
        assert client.session is session
        assert session.trust_env is False
