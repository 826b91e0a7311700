"""
Tests for signature verification
"""

import base64

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from http_signature.signing import SignableRequest, SigningOptions, sign_request
from http_signature.verification import (
    ParsedSignature,
    ParseOptions,
    parse_request,
    verify,
    verify_hmac,
    verify_signature,
)

from conftest import FIXED_DATE, FIXED_NOW


def signed_request(key, algorithm=None, **kwargs):
    request = SignableRequest(method="GET", path="/", headers={"Date": FIXED_DATE})
    sign_request(request, SigningOptions(key=key, key_id="k", algorithm=algorithm, **kwargs))
    return parse_request(request, ParseOptions(clock=lambda: FIXED_NOW))


class TestVerifySignature:
    """Test asymmetric verification"""

    def test_valid(self, rsa_keys):
        assert verify_signature(signed_request(rsa_keys.private_pem), rsa_keys.public_pem) is True

    def test_verify_alias(self):
        assert verify is verify_signature

    def test_wrong_key(self, rsa_keys):
        other = signed_request(rsa_keys.private_pem)
        different = rsa.generate_private_key(public_exponent=65537, key_size=2048).public_key()
        pem = different.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        assert verify_signature(other, pem) is False

    def test_key_type_mismatch_is_false(self, rsa_keys, ecdsa_keys):
        """A signature naming another key type fails instead of raising"""
        parsed = signed_request(rsa_keys.private_pem)
        assert verify_signature(parsed, ecdsa_keys.public_pem) is False

    def test_hs2019_resolves_to_key(self, ed25519_keys, rsa_keys):
        parsed = signed_request(ed25519_keys.private_pem, hide_algorithm=True)
        assert parsed.algorithm == "HS2019"
        assert verify_signature(parsed, ed25519_keys.public_pem) is True
        assert verify_signature(parsed, rsa_keys.public_pem) is False

    def test_hmac_signature_is_false(self, rsa_keys):
        parsed = signed_request("s3cr3t", algorithm="hmac-sha256")
        assert verify_signature(parsed, rsa_keys.public_pem) is False

    def test_corrupted_signature(self, ecdsa_keys):
        parsed = signed_request(ecdsa_keys.private_pem)
        parsed.params["signature"] = base64.b64encode(b"garbage").decode()
        assert verify_signature(parsed, ecdsa_keys.public_pem) is False

    def test_parsed_type(self, rsa_keys):
        with pytest.raises(TypeError):
            verify_signature({"algorithm": "rsa-sha256"}, rsa_keys.public_pem)


class TestVerifyHmac:
    """Test shared-secret verification"""

    def test_valid_and_invalid_secret(self):
        parsed = signed_request("s3cr3t", algorithm="hmac-sha256")
        assert verify_hmac(parsed, "s3cr3t") is True
        assert verify_hmac(parsed, b"s3cr3t") is True
        assert verify_hmac(parsed, "wrong") is False

    def test_non_hmac_algorithm(self, rsa_keys):
        parsed = signed_request(rsa_keys.private_pem)
        assert verify_hmac(parsed, "s3cr3t") is False

    def test_hs2019_is_false(self):
        parsed = ParsedSignature(
            scheme="Signature",
            params={"keyId": "k", "algorithm": "hs2019", "signature": "abc=", "headers": ["date"]},
            signing_string=f"date: {FIXED_DATE}",
            algorithm="HS2019",
            key_id="k",
        )
        assert verify_hmac(parsed, "s3cr3t") is False

    def test_undecodable_signature(self):
        parsed = signed_request("s3cr3t", algorithm="hmac-sha256")
        parsed.params["signature"] = "%%%"
        assert verify_hmac(parsed, "s3cr3t") is False

    def test_secret_type(self):
        parsed = signed_request("s3cr3t", algorithm="hmac-sha256")
        with pytest.raises(TypeError):
            verify_hmac(parsed, None)
