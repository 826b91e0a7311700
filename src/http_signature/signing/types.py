"""
Type definitions for request signing

This module provides the data classes shared by the one-shot signer, the
incremental signer and the signing-string builder.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Union

from requests.structures import CaseInsensitiveDict

from ..crypto.keys import PrivateKey

# Bare-signature header name; anything else gets the "Signature " scheme prefix
SIGNATURE_HEADER = "signature"
AUTHORIZATION_HEADER = "Authorization"
SIGNATURE_SCHEME = "Signature"

DEFAULT_HEADERS = ("date",)
DEFAULT_HTTP_VERSION = "1.1"
DEFAULT_EXPIRES_IN = 60

Clock = Callable[[], float]
KeyMaterial = Union[str, bytes, PrivateKey]


@dataclass
class SignableRequest:
    """
    Request to be signed

    Attributes:
        method: HTTP method (GET, POST, etc.)
        path: Request target path, including any query string
        headers: Request headers; lookups are case-insensitive
        signing_string: Signing string built by the last sign_request call
    """
    method: str
    path: str
    headers: Mapping[str, Any] = field(default_factory=dict)
    signing_string: Optional[str] = field(default=None, init=False)

    def __post_init__(self):
        if not isinstance(self.method, str) or not self.method:
            raise TypeError("request.method must be a non-empty string")
        if not isinstance(self.path, str):
            raise TypeError("request.path must be a string")
        self.headers = CaseInsensitiveDict(self.headers or {})

    def get_header(self, name: str) -> Optional[str]:
        value = self.headers.get(name)
        return None if value is None else str(value)

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value


@dataclass
class SigningOptions:
    """
    Options for signing a single request

    Attributes:
        key: PEM/OpenSSH private key, parsed PrivateKey, or HMAC shared secret
        key_id: Key identifier emitted as keyId
        algorithm: Algorithm identifier (required for HMAC), e.g. "rsa-sha256"
        headers: Ordered header names to sign (defaults to ["date"])
        http_version: HTTP version used by the request-line pseudo-header
        strict: Reject the legacy request-line pseudo-header
        expires_in: Seconds added to the current time for (expires)
        key_passphrase: Passphrase for an encrypted private key
        hide_algorithm: Emit "hs2019" instead of the concrete algorithm
        opaque: Value for the opaque parameter and (opaque) pseudo-header
        authorization_header_name: Header the signature is written to
        clock: Time source returning Unix seconds
    """
    key: Optional[KeyMaterial] = None
    key_id: Optional[str] = None
    algorithm: Optional[str] = None
    headers: Optional[List[str]] = None
    http_version: str = DEFAULT_HTTP_VERSION
    strict: bool = False
    expires_in: Optional[int] = None
    key_passphrase: Optional[Union[str, bytes]] = None
    hide_algorithm: bool = False
    opaque: Optional[str] = None
    authorization_header_name: str = AUTHORIZATION_HEADER
    clock: Clock = field(default=time.time)

    def __post_init__(self):
        """Check option shapes"""
        if self.key_id is not None and not isinstance(self.key_id, str):
            raise TypeError("options.key_id must be a string")
        if self.algorithm is not None and not isinstance(self.algorithm, str):
            raise TypeError("options.algorithm must be a string")
        if self.headers is not None:
            if isinstance(self.headers, str) or not all(isinstance(h, str) for h in self.headers):
                raise TypeError("options.headers must be a list of strings")
            self.headers = list(self.headers)
        if not self.http_version:
            self.http_version = DEFAULT_HTTP_VERSION
        if not isinstance(self.http_version, str):
            raise TypeError("options.http_version must be a string")
        if self.expires_in is not None and (
            isinstance(self.expires_in, bool) or not isinstance(self.expires_in, int)
        ):
            raise TypeError("options.expires_in must be an integer")
        if self.key_passphrase is not None and not isinstance(self.key_passphrase, (str, bytes)):
            raise TypeError("options.key_passphrase must be a string")
        if not isinstance(self.strict, bool):
            raise TypeError("options.strict must be a boolean")
        if not isinstance(self.hide_algorithm, bool):
            raise TypeError("options.hide_algorithm must be a boolean")
        if self.opaque is not None and not isinstance(self.opaque, str):
            raise TypeError("options.opaque must be a string")
        if not isinstance(self.authorization_header_name, str) or not self.authorization_header_name:
            raise TypeError("options.authorization_header_name must be a non-empty string")
        if not callable(self.clock):
            raise TypeError("options.clock must be callable")


@dataclass
class SigningParameters:
    """
    Parameters rendered into the signature header

    Only fields that are not None are emitted. created/expires render
    unquoted, everything else quoted.
    """
    key_id: Optional[str] = None
    algorithm: Optional[str] = None
    created: Optional[int] = None
    expires: Optional[int] = None
    opaque: Optional[str] = None
    headers: Optional[str] = None
    signature: Optional[str] = None


@dataclass(frozen=True)
class ExternalSignature:
    """
    Signature produced by a user-supplied sign callable

    Attributes:
        key_id: Key identifier
        algorithm: Algorithm identifier the signature was made with
        signature: Base64 signature
    """
    key_id: str
    algorithm: str
    signature: str

    @classmethod
    def from_value(cls, value: Union["ExternalSignature", Mapping[str, Any]]) -> "ExternalSignature":
        """Accept an ExternalSignature or a keyId/algorithm/signature mapping."""
        if isinstance(value, ExternalSignature):
            result = value
        elif isinstance(value, Mapping):
            result = cls(
                key_id=value.get("keyId", value.get("key_id")),
                algorithm=value.get("algorithm"),
                signature=value.get("signature"),
            )
        else:
            raise TypeError("signature must be an ExternalSignature or a mapping")

        for name in ("key_id", "algorithm", "signature"):
            if not isinstance(getattr(result, name), str):
                raise TypeError(f"signature.{name} must be a string")
        return result


@dataclass(frozen=True)
class SignResult:
    """
    Outcome of an incremental signer's sign()

    Attributes:
        authorization: Formatted signature header value on success
        error: Failure raised while signing, if any
    """
    authorization: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        """Return the header value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.authorization

    @classmethod
    def success(cls, authorization: str) -> "SignResult":
        return cls(authorization=authorization)

    @classmethod
    def failure(cls, error: BaseException) -> "SignResult":
        return cls(error=error)
