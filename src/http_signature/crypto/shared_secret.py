"""
HMAC primitives for shared-secret signatures
"""

import hashlib
import hmac
from typing import Union

from ..algorithms import HashAlgorithm
from ..exceptions import HttpSignatureError, HttpSignatureErrorCodes
from .keys import SignatureValue

Secret = Union[str, bytes]


def _secret_bytes(secret: Secret) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    if isinstance(secret, (bytes, bytearray)):
        return bytes(secret)
    raise TypeError("HMAC key must be a string or bytes")


def _digestmod(hash_algorithm: Union[HashAlgorithm, str]):
    return getattr(hashlib, HashAlgorithm(hash_algorithm).value)


class HmacSigner:
    """Streaming HMAC with the same update/sign shape as the key signers"""

    def __init__(self, hash_algorithm: Union[HashAlgorithm, str], secret: Secret):
        self.hash_algorithm = HashAlgorithm(hash_algorithm)
        self._mac = hmac.new(_secret_bytes(secret), digestmod=_digestmod(self.hash_algorithm))
        self._finalized = False

    def update(self, data: Union[str, bytes]) -> None:
        if self._finalized:
            raise HttpSignatureError(
                "signer has already produced a signature",
                HttpSignatureErrorCodes.INTERNAL_ERROR
            )
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._mac.update(data)

    def sign(self) -> SignatureValue:
        if self._finalized:
            raise HttpSignatureError(
                "signer has already produced a signature",
                HttpSignatureErrorCodes.INTERNAL_ERROR
            )
        self._finalized = True
        return SignatureValue(self.hash_algorithm, self._mac.digest())


def create_hmac_signer(hash_algorithm: Union[HashAlgorithm, str], secret: Secret) -> HmacSigner:
    return HmacSigner(hash_algorithm, secret)


def hmac_digest(hash_algorithm: Union[HashAlgorithm, str], secret: Secret, data: Union[str, bytes]) -> bytes:
    """Compute HMAC(secret, data) with the given hash."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hmac.new(_secret_bytes(secret), data, _digestmod(hash_algorithm)).digest()
