"""
Test suite for request and signature parameter types
"""

import pytest

from httpsig_sdk.signer import set_request_header
from httpsig_sdk.types import SignableRequest, SignatureParameters

from conftest import TEST_DATE


class TestSignableRequest:
    """Test request normalization"""

    def test_headers_are_lowercased(self):
        request = SignableRequest("GET", "https://example.com/", {"Content-Type": "text/plain", "DATE": TEST_DATE})
        assert request.headers == {"content-type": "text/plain", "date": TEST_DATE}

    def test_add_header(self):
        request = SignableRequest("GET", "https://example.com/")
        request.add_header("X-Date", TEST_DATE)
        assert request.headers == {"x-date": TEST_DATE}

    def test_headers_must_be_mapping(self):
        with pytest.raises(ValueError):
            SignableRequest("GET", "https://example.com/", [("Date", TEST_DATE)])

    def test_set_request_header_on_plain_dict(self):
        request = SignableRequest("GET", "https://example.com/")
        set_request_header(request, "Signature", "value")
        assert request.headers == {"signature": "value"}


class TestSignatureParameters:
    """Test descriptor invariants"""

    def test_headers_must_match_header_list(self):
        with pytest.raises(ValueError):
            SignatureParameters("Test", "hmac-sha256", ("date", "host"), {"date": TEST_DATE})
        with pytest.raises(ValueError):
            SignatureParameters("Test", "hmac-sha256", ("date",), {"date": TEST_DATE, "host": "x"})

    def test_key_id_and_header_list_required(self):
        with pytest.raises(ValueError):
            SignatureParameters("", "hmac-sha256", ("date",), {"date": TEST_DATE})
        with pytest.raises(ValueError):
            SignatureParameters("Test", "hmac-sha256", (), {})

    def test_with_signature_returns_copy(self):
        params = SignatureParameters("Test", "hmac-sha256", ["date"], {"date": TEST_DATE})
        signed = params.with_signature("c2ln")

        assert params.signature is None
        assert signed.signature == "c2ln"
        assert signed.header_list == ("date",)
        assert dict(signed.headers) == {"date": TEST_DATE}
