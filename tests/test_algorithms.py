"""
Tests for the algorithm registry
"""

import pytest

from http_signature.algorithms import (
    HASH_ALGOS,
    HS2019,
    PK_ALGOS,
    AlgorithmId,
    HashAlgorithm,
    KeyType,
    validate_algorithm,
)
from http_signature.exceptions import HttpSignatureErrorCodes, InvalidAlgorithmError


class TestValidateAlgorithm:
    """Test algorithm identifier validation"""

    @pytest.mark.parametrize("identifier,key_type,hash_algorithm", [
        ("rsa-sha256", KeyType.RSA, HashAlgorithm.SHA256),
        ("dsa-sha1", KeyType.DSA, HashAlgorithm.SHA1),
        ("ecdsa-sha384", KeyType.ECDSA, HashAlgorithm.SHA384),
        ("ed25519-sha512", KeyType.ED25519, HashAlgorithm.SHA512),
        ("hmac-sha512", KeyType.HMAC, HashAlgorithm.SHA512),
    ])
    def test_valid_identifiers(self, identifier, key_type, hash_algorithm):
        """Supported pairs decompose into their parts"""
        alg = validate_algorithm(identifier)
        assert alg == AlgorithmId(key_type, hash_algorithm)
        assert str(alg) == identifier

    def test_case_insensitive(self):
        """Identifiers are lower-cased before splitting"""
        assert validate_algorithm("RSA-SHA256") == AlgorithmId(KeyType.RSA, HashAlgorithm.SHA256)

    def test_hs2019_is_returned_unexpanded(self):
        """hs2019 yields the hidden sentinel"""
        alg = validate_algorithm("hs2019")
        assert alg is HS2019
        assert alg.is_hidden
        assert not alg.is_hmac
        assert str(alg) == "hs2019"
        assert validate_algorithm("HS2019") is HS2019

    def test_unsupported_key_type(self):
        with pytest.raises(InvalidAlgorithmError) as exc_info:
            validate_algorithm("foo-sha256")
        assert "FOO type keys are not supported" in str(exc_info.value)
        assert exc_info.value.code == HttpSignatureErrorCodes.INVALID_ALGORITHM

    def test_unsupported_hash(self):
        with pytest.raises(InvalidAlgorithmError) as exc_info:
            validate_algorithm("rsa-md5")
        assert "MD5 is not a supported hash algorithm" in str(exc_info.value)

    def test_malformed_identifiers(self):
        """Identifiers without exactly one dash are rejected"""
        for bad in ("rsa", "rsa-sha256-extra", ""):
            with pytest.raises(InvalidAlgorithmError):
                validate_algorithm(bad)

    def test_expected_key_type(self):
        """A mismatching expected key type is rejected"""
        assert validate_algorithm("rsa-sha256", KeyType.RSA).key_type is KeyType.RSA
        assert validate_algorithm("ecdsa-sha256", "ecdsa").key_type is KeyType.ECDSA

        with pytest.raises(InvalidAlgorithmError):
            validate_algorithm("rsa-sha256", KeyType.ECDSA)

    def test_non_string(self):
        with pytest.raises(TypeError):
            validate_algorithm(None)


class TestRegistry:
    """Test registry constants"""

    def test_pk_algos_exclude_hmac(self):
        assert KeyType.HMAC not in PK_ALGOS
        assert PK_ALGOS == {KeyType.RSA, KeyType.DSA, KeyType.ECDSA, KeyType.ED25519}

    def test_hash_algos(self):
        assert {h.value for h in HASH_ALGOS} == {"sha1", "sha256", "sha384", "sha512"}

    def test_key_type_is_string_enum(self):
        assert KeyType("rsa") is KeyType.RSA
        assert KeyType.RSA == "rsa"
