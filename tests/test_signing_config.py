"""
Tests for signing configuration helpers
"""

import pytest

from http_signature.crypto import PrivateKey
from http_signature.exceptions import InvalidAlgorithmError, KeyParseError
from http_signature.signing import (
    FRESHNESS_HEADERS,
    REQUEST_TARGET_HEADERS,
    SigningConfigBuilder,
    SigningOptions,
    create_signing_config,
    signing_options_from_dict,
)


class TestSigningConfigBuilder:
    """Test the fluent options builder"""

    def test_build(self, rsa_keys):
        options = (create_signing_config()
                   .key(rsa_keys.private_pem)
                   .key_id("test-key")
                   .algorithm("rsa-sha256")
                   .headers(REQUEST_TARGET_HEADERS)
                   .add_header("host")
                   .expires_in(30)
                   .build())

        assert isinstance(options, SigningOptions)
        assert isinstance(options.key, PrivateKey)
        assert options.key_id == "test-key"
        assert options.headers == ["(request-target)", "date", "host"]
        assert options.expires_in == 30

    def test_headers_list_is_copied(self, rsa_keys):
        builder = SigningConfigBuilder().key(rsa_keys.private_pem).key_id("k").headers(FRESHNESS_HEADERS)
        builder.add_header("date")
        assert FRESHNESS_HEADERS == ["(request-target)", "(created)", "(expires)"]

    def test_hmac_key_kept_as_secret(self):
        options = create_signing_config().key("s3cr3t").key_id("k").algorithm("hmac-sha256").build()
        assert options.key == "s3cr3t"

    def test_missing_fields(self, rsa_keys):
        with pytest.raises(TypeError):
            create_signing_config().key(rsa_keys.private_pem).build()
        with pytest.raises(TypeError):
            create_signing_config().key_id("k").build()

    def test_mismatch_detected_at_build(self, ecdsa_keys):
        with pytest.raises(InvalidAlgorithmError):
            create_signing_config().key(ecdsa_keys.private_pem).key_id("k").algorithm("rsa-sha256").build()

    def test_bad_key_detected_at_build(self):
        with pytest.raises(KeyParseError):
            create_signing_config().key("not a key").key_id("k").build()


class TestOptionsFromDict:
    """Test mapping conversion"""

    def test_camel_and_snake_case(self):
        options = signing_options_from_dict({
            "key": "s3cr3t",
            "keyId": "k",
            "algorithm": "hmac-sha256",
            "expiresIn": 10,
            "hide_algorithm": True,
            "authorizationHeaderName": "Signature",
        })
        assert options.key_id == "k"
        assert options.expires_in == 10
        assert options.hide_algorithm is True
        assert options.authorization_header_name == "Signature"

    def test_unknown_option(self):
        with pytest.raises(TypeError):
            signing_options_from_dict({"keyId": "k", "colour": "blue"})
