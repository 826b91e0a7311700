"""
Signature verification

Checks a parsed signature against a public key or an HMAC shared secret.
Both entry points answer True or False; a caller cannot tell an algorithm
mismatch from a bad signature.
"""

import base64
import binascii
import hmac
import logging
from typing import Union

from ..algorithms import AlgorithmId, validate_algorithm
from ..crypto.keys import KeyData, PrivateKey, PublicKey, parse_public_key
from ..crypto.shared_secret import Secret, hmac_digest
from .types import ParsedSignature

logger = logging.getLogger(__name__)


def verify_signature(
    parsed: ParsedSignature,
    public_key: Union[KeyData, PublicKey, PrivateKey]
) -> bool:
    """
    Verify an asymmetric signature against a public key.

    ``hs2019`` resolves to the key's own type and default hash.

    Args:
        parsed: Result of parse_request
        public_key: PEM/DER/OpenSSH public key or a parsed key

    Returns:
        bool: True if the signature is valid for this key

    Raises:
        TypeError: If ``parsed`` is not a ParsedSignature
        KeyParseError: If the public key cannot be parsed
        InvalidAlgorithmError: If the algorithm identifier is unsupported
    """
    if not isinstance(parsed, ParsedSignature):
        raise TypeError("parsed must be a ParsedSignature")
    key = parse_public_key(public_key)

    alg = validate_algorithm(parsed.algorithm)
    if alg.is_hidden:
        alg = AlgorithmId(key.type, key.default_hash_algorithm())
    if alg.is_hmac or alg.key_type is not key.type:
        logger.debug(f"Algorithm {parsed.algorithm} does not match {key.type.value} key")
        return False

    signature = parsed.params.get("signature")
    if not isinstance(signature, str):
        return False

    verifier = key.create_verify(alg.hash_algorithm)
    verifier.update(parsed.signing_string)
    result = verifier.verify(signature)
    logger.debug(f"Verified keyId={parsed.key_id} algorithm={alg}: {result}")
    return result


def verify_hmac(parsed: ParsedSignature, secret: Secret) -> bool:
    """
    Verify an HMAC signature against a shared secret.

    The expected and provided MACs are each put through a second HMAC and
    compared with hmac.compare_digest, so the comparison time does not
    depend on the provided signature.

    Args:
        parsed: Result of parse_request
        secret: Shared secret

    Returns:
        bool: True if the signature is valid for this secret

    Raises:
        TypeError: If ``parsed`` or ``secret`` have the wrong type
        InvalidAlgorithmError: If the algorithm identifier is unsupported
    """
    if not isinstance(parsed, ParsedSignature):
        raise TypeError("parsed must be a ParsedSignature")
    if not isinstance(secret, (str, bytes, bytearray)):
        raise TypeError("secret must be a string or bytes")

    alg = validate_algorithm(parsed.algorithm)
    if not alg.is_hmac:
        return False

    signature = parsed.params.get("signature")
    if not isinstance(signature, str):
        return False
    try:
        provided = base64.b64decode(signature)
    except (binascii.Error, ValueError):
        return False

    expected = hmac_digest(alg.hash_algorithm, secret, parsed.signing_string)
    h1 = hmac_digest(alg.hash_algorithm, secret, expected)
    h2 = hmac_digest(alg.hash_algorithm, secret, provided)
    return hmac.compare_digest(h1, h2)


verify = verify_signature
