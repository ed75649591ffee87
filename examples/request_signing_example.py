#!/usr/bin/env python3
"""
fedisig - Request Signing Example

This example shows how to sign ActivityPub deliveries and object fetches
with draft-cavage HTTP Signatures (RSA-SHA256), and how to hand the result
to an HTTP client.
"""

import json

from fedisig import (
    # Keys
    PrivateKey,
    generate_rsa_private_key_pem,
    public_key_pem_from_private,
    # Request signing
    create_signed_post,
    create_signed_get,
    # Configuration and HTTP integration
    create_config,
    SignedHttpClient,
    # Errors
    InvalidUrlError,
    InvalidKeyError,
)


def basic_signing_example(private_key_pem: str):
    """Sign a delivery and show every artifact"""
    print("=== Signed POST ===")

    key = PrivateKey(private_key_pem=private_key_pem, key_id="https://example.social/users/alice#main-key")
    body = json.dumps({"type": "Follow", "actor": "https://example.social/users/alice"})

    signed = create_signed_post(key, "https://remote.example/inbox", body, {"User-Agent": "fedisig-example/1.0"})

    print(f"   {signed.request.method} {signed.request.url}")
    for name, value in signed.request.headers.items():
        print(f"   {name}: {value}")
    print("\n   Signing string:")
    for line in signed.signing_string.split("\n"):
        print(f"     {line}")
    print(f"\n   Signature: {signed.signature_header[:80]}...")


def signed_get_example(private_key_pem: str):
    """Sign an object fetch"""
    print("\n=== Signed GET ===")

    key = PrivateKey(private_key_pem=private_key_pem, key_id="https://example.social/users/alice#main-key")
    signed = create_signed_get(key, "https://remote.example/users/bob")

    print(f"   Covered headers: {signed.signature_header.split('headers=')[1].split(',')[0]}")


def http_integration_example(private_key_pem: str):
    """Build a delivery client from configuration (no request is sent)"""
    print("\n=== HTTP integration ===")

    config = create_config("https://example.social", user_agent="fedisig-example/1.0 (+https://example.social)")
    with SignedHttpClient(config) as client:
        key = client.key_for("alice", private_key_pem)
        print(f"   Key id: {key.key_id}")
        print("   client.deliver(key, inbox_url, activity) signs and POSTs an activity")
        print("   client.signed_get(key, object_url) signs, GETs and decodes JSON")


def error_handling_example(private_key_pem: str):
    """Show the typed errors"""
    print("\n=== Error handling ===")

    key = PrivateKey(private_key_pem=private_key_pem, key_id="https://example.social/users/alice#main-key")
    try:
        create_signed_get(key, "not a url")
    except InvalidUrlError as e:
        print(f"   {type(e).__name__}: {e}")

    try:
        create_signed_get(PrivateKey("not a pem", key.key_id), "https://remote.example/users/bob")
    except InvalidKeyError as e:
        print(f"   {type(e).__name__}: {e.message}")


def main():
    """Run all examples"""
    print("fedisig - Request Signing Examples")
    print("=" * 50)

    private_key_pem = generate_rsa_private_key_pem()
    print("Public key to publish as publicKeyPem:")
    print(public_key_pem_from_private(private_key_pem))

    basic_signing_example(private_key_pem)
    signed_get_example(private_key_pem)
    http_integration_example(private_key_pem)
    error_handling_example(private_key_pem)


if __name__ == "__main__":
    main()
