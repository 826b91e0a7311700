"""
Shared fixtures for the HTTP Signature SDK test suite

Keys are generated once per session so no key material is checked in.
"""

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed25519, rsa

from http_signature.signing import SignableRequest

# 2014-06-07T20:51:35Z
FIXED_NOW = 1402174295
FIXED_DATE = "Tue, 07 Jun 2014 20:51:35 GMT"


class KeyPair:
    """PEM encoded private/public key pair"""

    def __init__(self, private_key):
        self.private_pem = private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode("ascii")
        self.public_pem = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode("ascii")
        self.key = private_key


@pytest.fixture(scope="session")
def rsa_keys():
    return KeyPair(rsa.generate_private_key(public_exponent=65537, key_size=2048))


@pytest.fixture(scope="session")
def dsa_keys():
    return KeyPair(dsa.generate_private_key(key_size=2048))


@pytest.fixture(scope="session")
def ecdsa_keys():
    return KeyPair(ec.generate_private_key(ec.SECP256R1()))


@pytest.fixture(scope="session")
def ecdsa384_keys():
    return KeyPair(ec.generate_private_key(ec.SECP384R1()))


@pytest.fixture(scope="session")
def ed25519_keys():
    return KeyPair(ed25519.Ed25519PrivateKey.generate())


@pytest.fixture
def fixed_clock():
    """Clock pinned to FIXED_NOW"""
    return lambda: FIXED_NOW


@pytest.fixture
def request_with_date():
    return SignableRequest(
        method="GET",
        path="/foo?param=value&pet=dog",
        headers={"Date": FIXED_DATE, "Host": "example.com"},
    )
