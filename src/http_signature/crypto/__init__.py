"""
Key Provider for the HTTP Signature SDK

Private/public key parsing and signing primitives backed by the
cryptography package, plus HMAC helpers for shared secrets.
"""

from .keys import (
    PrivateKey,
    PublicKey,
    SignatureValue,
    default_hash_for,
    parse_private_key,
    parse_public_key,
)
from .shared_secret import (
    HmacSigner,
    create_hmac_signer,
    hmac_digest,
)

__all__ = [
    'PrivateKey',
    'PublicKey',
    'SignatureValue',
    'default_hash_for',
    'parse_private_key',
    'parse_public_key',
    'HmacSigner',
    'create_hmac_signer',
    'hmac_digest',
]
