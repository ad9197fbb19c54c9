"""
Shared fixtures for the HTTP Signatures SDK test suite
"""

import base64
import secrets
from datetime import datetime, timedelta, timezone

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from httpsig_sdk import SignableRequest

TEST_DATE = "Thu, 05 Jan 2012 21:31:40 GMT"
TEST_DATE_DT = datetime(2012, 1, 5, 21, 31, 40, tzinfo=timezone.utc)
TEST_URL = "https://www.example.com/foo?param=value&pet=dog"


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode('ascii')


def private_der(key) -> str:
    return b64(key.private_bytes(
        serialization.Encoding.DER,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ))


def public_der(key) -> str:
    return b64(key.public_key().public_bytes(
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ))


def flip_last_byte(signature_b64: str) -> str:
    raw = bytearray(base64.b64decode(signature_b64))
    raw[-1] ^= 0x01
    return b64(bytes(raw))


@pytest.fixture
def hmac_key() -> str:
    return b64(secrets.token_bytes(32))


@pytest.fixture(scope="session")
def rsa_keys():
    """(private, public) base64 DER keys"""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return private_der(key), public_der(key)


@pytest.fixture(scope="session")
def ec_keys():
    """(private, public) base64 DER keys"""
    key = ec.generate_private_key(ec.SECP256R1())
    return private_der(key), public_der(key)


@pytest.fixture
def now_after_date():
    """Ten seconds after TEST_DATE"""
    return TEST_DATE_DT + timedelta(seconds=10)


@pytest.fixture
def make_request():
    def _make(headers=None, method="POST", url=TEST_URL):
        return SignableRequest(method, url, dict(headers or {}))
    return _make
