"""
Incremental request signing

A RequestSigner accepts headers one at a time and produces the signature
header at the end. Two backends exist: a streaming one that feeds each line
into a live digest bound to a key or shared secret, and a callback one that
buffers the lines and hands the finished signing string to a user-supplied
(possibly asynchronous) sign function.
"""

import inspect
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Union

from ..algorithms import HS2019_NAME, KeyType, validate_algorithm
from ..crypto.keys import parse_private_key
from ..crypto.shared_secret import create_hmac_signer
from ..exceptions import InvalidAlgorithmError, SignerStateError
from .authz import format_authz
from .canonical_message import REQUEST_TARGET
from .types import (
    SIGNATURE_SCHEME,
    Clock,
    ExternalSignature,
    KeyMaterial,
    SigningParameters,
    SignResult,
)
from .utils import format_http_date

logger = logging.getLogger(__name__)

SignFunction = Callable[
    [str],
    Union[ExternalSignature, Mapping[str, Any], Awaitable[Union[ExternalSignature, Mapping[str, Any]]]]
]


class RequestSigner(ABC):
    """
    Base class for incremental signers

    Headers are signed in exactly the order they are written. Once sign()
    has been awaited the signer is spent.
    """

    def __init__(self, clock: Clock = time.time):
        self._headers: List[str] = []
        self._signed = False
        self._clock = clock

    @property
    def headers(self) -> List[str]:
        """Header names written so far, lower-cased, in write order"""
        return list(self._headers)

    @property
    def signed(self) -> bool:
        return self._signed

    def write_header(self, header: str, value: str) -> str:
        """
        Add a header to be signed.

        Args:
            header: Header name (lower-cased before signing)
            value: Header value

        Returns:
            str: The value written

        Raises:
            SignerStateError: If sign() has already been called
        """
        if not isinstance(header, str):
            raise TypeError("header must be a string")
        if not isinstance(value, str):
            raise TypeError("value must be a string")
        if self._signed:
            raise SignerStateError(
                "cannot write headers after sign()",
                details={"header": header}
            )

        header = header.lower()
        self._headers.append(header)
        self._write_line(header, value)
        return value

    def write_date_header(self) -> str:
        """Add a Date header for the current time and return its value."""
        return self.write_header("date", format_http_date(self._clock()))

    def write_target(self, method: str, path: str) -> None:
        """Add the (request-target) pseudo-header."""
        if not isinstance(method, str):
            raise TypeError("method must be a string")
        if not isinstance(path, str):
            raise TypeError("path must be a string")
        self.write_header(REQUEST_TARGET, f"{method.lower()} {path}")

    async def sign(self) -> SignResult:
        """
        Produce the signature header value.

        Failures are returned in the result, never raised.

        Returns:
            SignResult: The header value, or the error that prevented it
        """
        if self._signed:
            return SignResult.failure(SignerStateError("signer has already been used to sign"))
        if len(self._headers) < 1:
            return SignResult.failure(SignerStateError("At least one header must be signed"))

        self._signed = True
        try:
            authz = await self._sign()
        except Exception as e:
            logger.debug(f"Incremental signing failed: {e}")
            return SignResult.failure(e)

        logger.debug(f"Incrementally signed headers: {' '.join(self._headers)}")
        return SignResult.success(authz)

    @abstractmethod
    def _write_line(self, header: str, value: str) -> None:
        ...

    @abstractmethod
    async def _sign(self) -> str:
        ...


class StreamingRequestSigner(RequestSigner):
    """Signer that feeds each line into a digest bound to a key or secret"""

    def __init__(
        self,
        key: KeyMaterial,
        key_id: str,
        algorithm: Optional[str] = None,
        key_passphrase: Optional[Union[str, bytes]] = None,
        hide_algorithm: bool = False,
        clock: Clock = time.time
    ):
        super().__init__(clock)

        alg = validate_algorithm(algorithm) if algorithm is not None else None
        if not isinstance(key_id, str):
            raise TypeError("options.key_id must be a string")
        self._key_id = key_id

        if alg is not None and alg.is_hmac:
            if not isinstance(key, (str, bytes, bytearray)):
                raise TypeError("options.key for HMAC must be a string or bytes")
            self._key_type = KeyType.HMAC
            self._signer = create_hmac_signer(alg.hash_algorithm, key)
            # HMAC signatures always name their algorithm
            self._hide_algorithm = False
            return

        private_key = parse_private_key(key, key_passphrase)
        if alg is not None and not alg.is_hidden and alg.key_type is not private_key.type:
            raise InvalidAlgorithmError(
                f"options.key must be a {alg.key_type.value.upper()} key, "
                f"was given a {private_key.type.value.upper()} key instead",
                details={"algorithm": algorithm, "key_type": private_key.type.value}
            )

        hash_algorithm = alg.hash_algorithm if alg is not None else None
        self._key_type = private_key.type
        self._signer = private_key.create_sign(hash_algorithm)
        self._hide_algorithm = hide_algorithm or (alg is not None and alg.is_hidden)

    def _write_line(self, header: str, value: str) -> None:
        line = f"{header}: {value}"
        if len(self._headers) > 1:
            line = "\n" + line
        self._signer.update(line)

    async def _sign(self) -> str:
        sig_obj = self._signer.sign()
        if self._hide_algorithm:
            algorithm = HS2019_NAME
        else:
            algorithm = f"{self._key_type.value}-{sig_obj.hash_algorithm.value}"

        return format_authz(f"{SIGNATURE_SCHEME} ", SigningParameters(
            key_id=self._key_id,
            algorithm=algorithm,
            headers=" ".join(self._headers),
            signature=sig_obj.to_base64(),
        ))


class CallbackRequestSigner(RequestSigner):
    """Signer that buffers lines for a user-supplied sign function"""

    def __init__(self, sign: SignFunction, clock: Clock = time.time):
        super().__init__(clock)
        if not callable(sign):
            raise TypeError("options.sign must be callable")
        self._sign_func = sign
        self._lines: List[str] = []

    def _write_line(self, header: str, value: str) -> None:
        self._lines.append(f"{header}: {value}")

    async def _sign(self) -> str:
        data = "\n".join(self._lines)
        result = self._sign_func(data)
        if inspect.isawaitable(result):
            result = await result

        sig = ExternalSignature.from_value(result)
        validate_algorithm(sig.algorithm)

        return format_authz(f"{SIGNATURE_SCHEME} ", SigningParameters(
            key_id=sig.key_id,
            algorithm=sig.algorithm,
            headers=" ".join(self._headers),
            signature=sig.signature,
        ))


def create_signer(
    key: Optional[KeyMaterial] = None,
    key_id: Optional[str] = None,
    algorithm: Optional[str] = None,
    sign: Optional[SignFunction] = None,
    key_passphrase: Optional[Union[str, bytes]] = None,
    hide_algorithm: bool = False,
    clock: Clock = time.time
) -> RequestSigner:
    """
    Create an incremental request signer.

    Either ``sign`` or ``key`` (with ``key_id``) must be given. With
    ``sign`` the signing string is passed to that function, which returns
    (or resolves to) keyId, algorithm and signature. With ``key`` the
    signature is computed locally; ``algorithm`` is required for HMAC keys.

    Args:
        key: Private key material, parsed PrivateKey, or HMAC secret
        key_id: Key identifier
        algorithm: Algorithm identifier (optional except for HMAC)
        sign: External sign function
        key_passphrase: Passphrase for an encrypted private key
        hide_algorithm: Emit "hs2019" instead of the concrete algorithm
        clock: Time source for write_date_header

    Returns:
        RequestSigner: Configured signer

    Raises:
        TypeError: If neither sign nor key is given, or on malformed options
        InvalidAlgorithmError: If the algorithm is unsupported or does not match the key
    """
    if algorithm is not None:
        if not isinstance(algorithm, str):
            raise TypeError("options.algorithm must be a string")
        validate_algorithm(algorithm)

    if sign is not None:
        return CallbackRequestSigner(sign, clock=clock)
    if key is not None:
        return StreamingRequestSigner(
            key,
            key_id,
            algorithm=algorithm,
            key_passphrase=key_passphrase,
            hide_algorithm=hide_algorithm,
            clock=clock,
        )
    raise TypeError("options.sign (callable) or options.key is required")


def is_signer(obj: Any) -> bool:
    """Whether ``obj`` is a request signer."""
    return isinstance(obj, RequestSigner)
