#!/usr/bin/env python3
"""
Pusher REST Python SDK - Request Signing Example

This example shows how requests to the Pusher REST API are signed and how
call outcomes are reported as Result values.
"""

import os
import sys

# Add src to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from pusher_rest import (
    ClientConfig,
    ClientError,
    NetworkFailure,
    Pusher,
    RequestSigner,
    calculate_body_md5,
)


def signing_example():
    """Sign the published reference request and show each step"""
    print("=== Request Signing Example ===")

    body = '{"name":"foo","channels":["project-3"],"data":"{\\"some\\":\\"data\\"}"}'
    signer = RequestSigner("278d425bdf160c739803", "7ad3773142a6692b25b8", "http", "api.pusherapp.com")

    print(f"1. Body MD5: {calculate_body_md5(body)}")

    signed = signer.sign("POST", "/apps/3/events", body, timestamp=1353088179)
    print("2. Canonical string:")
    for line in signed.canonical_string.split("\n"):
        print(f"   {line}")

    print(f"3. Signature: {signed.signature}")
    print(f"4. URI: {signed.uri}")


def trigger_example():
    """Publish an event when credentials are available in the environment"""
    print("\n=== Trigger Example ===")

    app_id = os.environ.get("PUSHER_APP_ID")
    key = os.environ.get("PUSHER_KEY")
    secret = os.environ.get("PUSHER_SECRET")
    if not (app_id and key and secret):
        print("Set PUSHER_APP_ID, PUSHER_KEY and PUSHER_SECRET to run this example")
        return

    config = ClientConfig.from_env().with_secure(True)
    with Pusher(app_id, key, secret, config=config) as pusher:
        result = pusher.trigger(["my-channel"], "my-event", {"message": "hello world"})

    if result.is_success:
        print("✓ Event published")
    elif isinstance(result, NetworkFailure):
        print(f"✗ Could not reach the API: {result.message}")
    elif isinstance(result, ClientError):
        print(f"✗ Request rejected (HTTP {result.status_code}): {result.body}")
    else:
        print(f"✗ {result.status.value} (HTTP {result.status_code}): {result.body}")


if __name__ == "__main__":
    signing_example()
    trigger_example()
