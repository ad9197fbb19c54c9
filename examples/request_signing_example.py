#!/usr/bin/env python3
"""
HTTP Signatures SDK - Request Signing Example

Signs a request with a shared HMAC secret, verifies it the way a server
would, and shows how failures map to HTTP status codes.
"""

import base64
import secrets

from httpsig_sdk import (
    HTTPSignatureError,
    SignableRequest,
    Signer,
    format_http_date,
    status_for,
    verify_request,
)

KEYS = {"example-client-001": base64.b64encode(secrets.token_bytes(32)).decode('ascii')}


def lookup_key(key_id: str) -> str:
    try:
        return KEYS[key_id]
    except KeyError:
        raise LookupError(f"Unknown key id: {key_id}")


def signing_example() -> SignableRequest:
    """Sign a request on the client side"""
    print("=== Signing ===")
    request = SignableRequest(
        "POST",
        "https://api.example.com/orders?priority=high",
        {"Host": "api.example.com", "Date": format_http_date(), "Content-Type": "application/json"},
    )

    signer = Signer("hmac-sha256", ["(request-target)", "host", "date", "content-type"])
    signer.sign_request(request, "example-client-001", KEYS["example-client-001"])
    print(f"   Signature: {request.headers['signature']}")
    return request


def verification_example(request: SignableRequest) -> None:
    """Verify the request on the server side"""
    print("\n=== Verification ===")
    valid = verify_request(request, lookup_key, 300, ["hmac-sha256"], "(request-target)", "date")
    print(f"   Valid: {valid}")

    request.headers["content-type"] = "text/plain"
    valid = verify_request(request, lookup_key, 300, ["hmac-sha256"])
    print(f"   Valid after tampering: {valid}")


def error_handling_example(request: SignableRequest) -> None:
    """Map failures to HTTP responses"""
    print("\n=== Error handling ===")
    del request.headers["date"]
    try:
        verify_request(request, lookup_key, 300, ["hmac-sha256"])
    except HTTPSignatureError as e:
        print(f"   {e.error_code}: {e.message} -> HTTP {status_for(e)}")


def main():
    request = signing_example()
    verification_example(request)
    error_handling_example(request)


if __name__ == "__main__":
    main()
