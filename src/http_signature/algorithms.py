"""
Algorithm registry for HTTP signatures

Holds the supported key types and hash algorithms and turns algorithm
identifiers such as ``rsa-sha256`` or ``hs2019`` into :class:`AlgorithmId`
values. Signing and verification both go through :func:`validate_algorithm`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .exceptions import InvalidAlgorithmError


class KeyType(str, Enum):
    """Key families that can produce HTTP signatures"""
    RSA = "rsa"
    DSA = "dsa"
    ECDSA = "ecdsa"
    ED25519 = "ed25519"
    HMAC = "hmac"


class HashAlgorithm(str, Enum):
    """Digest algorithms accepted in algorithm identifiers"""
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"


# Asymmetric key types; HMAC is handled as a shared secret
PK_ALGOS = frozenset({KeyType.RSA, KeyType.DSA, KeyType.ECDSA, KeyType.ED25519})
HASH_ALGOS = frozenset(HashAlgorithm)

HS2019_NAME = "hs2019"


@dataclass(frozen=True)
class AlgorithmId:
    """
    A (key type, hash algorithm) pair.

    The ``hs2019`` sentinel carries neither part; it hides the concrete
    pair in the emitted header and is resolved against a key when verifying.
    """
    key_type: Optional[KeyType] = None
    hash_algorithm: Optional[HashAlgorithm] = None

    @property
    def is_hidden(self) -> bool:
        return self.key_type is None

    @property
    def is_hmac(self) -> bool:
        return self.key_type is KeyType.HMAC

    def __str__(self) -> str:
        if self.is_hidden:
            return HS2019_NAME
        return f"{self.key_type.value}-{self.hash_algorithm.value}"


HS2019 = AlgorithmId()


def validate_algorithm(
    algorithm: str,
    expected_key_type: Optional[Union[KeyType, str]] = None
) -> AlgorithmId:
    """
    Validate and decompose an algorithm identifier.

    Args:
        algorithm: Identifier such as ``rsa-sha256`` (case-insensitive) or ``hs2019``
        expected_key_type: Key type the algorithm must belong to, if known

    Returns:
        AlgorithmId: The decomposed algorithm, or :data:`HS2019`

    Raises:
        TypeError: If ``algorithm`` is not a string
        InvalidAlgorithmError: If the key type or hash is unsupported, or the
            key type disagrees with ``expected_key_type``
    """
    if not isinstance(algorithm, str):
        raise TypeError("algorithm must be a string")

    parts = algorithm.lower().split("-")
    if len(parts) == 1 and parts[0] == HS2019_NAME:
        return HS2019

    if len(parts) != 2:
        raise InvalidAlgorithmError(
            f"{parts[0].upper()} is not a valid algorithm",
            details={"algorithm": algorithm}
        )

    key_name, hash_name = parts
    try:
        key_type = KeyType(key_name)
    except ValueError:
        raise InvalidAlgorithmError(
            f"{key_name.upper()} type keys are not supported",
            details={"algorithm": algorithm}
        )

    try:
        hash_algorithm = HashAlgorithm(hash_name)
    except ValueError:
        raise InvalidAlgorithmError(
            f"{hash_name.upper()} is not a supported hash algorithm",
            details={"algorithm": algorithm}
        )

    if expected_key_type is not None:
        expected = KeyType(expected_key_type)
        if expected is not key_type:
            raise InvalidAlgorithmError(
                f"algorithm {algorithm.lower()} requires a {key_type.value.upper()} key, "
                f"was given a {expected.value.upper()} key instead",
                details={"algorithm": algorithm, "key_type": expected.value}
            )

    return AlgorithmId(key_type, hash_algorithm)
