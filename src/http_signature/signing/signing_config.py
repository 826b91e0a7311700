"""
Configuration management for request signing

Provides a fluent builder for SigningOptions that validates the algorithm
and key material up front, so a bad configuration fails when it is built
rather than on the first request.
"""

import time
from typing import Any, Dict, List, Mapping, Optional, Union

from ..algorithms import validate_algorithm
from ..crypto.keys import parse_private_key
from .types import (
    AUTHORIZATION_HEADER,
    DEFAULT_HTTP_VERSION,
    Clock,
    KeyMaterial,
    SigningOptions,
)

# Header lists commonly used with this signature scheme
DEFAULT_SIGNED_HEADERS = ["date"]
REQUEST_TARGET_HEADERS = ["(request-target)", "date"]
FRESHNESS_HEADERS = ["(request-target)", "(created)", "(expires)"]


class SigningConfigBuilder:
    """
    Builder for creating signing options with fluent API
    """

    def __init__(self):
        self._key: Optional[KeyMaterial] = None
        self._key_id: Optional[str] = None
        self._algorithm: Optional[str] = None
        self._headers: Optional[List[str]] = None
        self._http_version: str = DEFAULT_HTTP_VERSION
        self._strict: bool = False
        self._expires_in: Optional[int] = None
        self._key_passphrase: Optional[Union[str, bytes]] = None
        self._hide_algorithm: bool = False
        self._opaque: Optional[str] = None
        self._authorization_header_name: str = AUTHORIZATION_HEADER
        self._clock: Clock = time.time

    def key(self, key: KeyMaterial, passphrase: Optional[Union[str, bytes]] = None) -> 'SigningConfigBuilder':
        """
        Set the signing key.

        Args:
            key: Private key material, parsed PrivateKey, or HMAC secret
            passphrase: Passphrase for an encrypted private key

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._key = key
        self._key_passphrase = passphrase
        return self

    def key_id(self, key_id: str) -> 'SigningConfigBuilder':
        self._key_id = key_id
        return self

    def algorithm(self, algorithm: str) -> 'SigningConfigBuilder':
        self._algorithm = algorithm
        return self

    def headers(self, headers: List[str]) -> 'SigningConfigBuilder':
        """
        Set the ordered list of headers to sign.

        Order is preserved and duplicates are kept.
        """
        self._headers = list(headers)
        return self

    def add_header(self, header: str) -> 'SigningConfigBuilder':
        if self._headers is None:
            self._headers = []
        self._headers.append(header)
        return self

    def http_version(self, version: str) -> 'SigningConfigBuilder':
        self._http_version = version
        return self

    def strict(self, strict: bool = True) -> 'SigningConfigBuilder':
        self._strict = strict
        return self

    def expires_in(self, seconds: int) -> 'SigningConfigBuilder':
        self._expires_in = seconds
        return self

    def hide_algorithm(self, hide: bool = True) -> 'SigningConfigBuilder':
        self._hide_algorithm = hide
        return self

    def opaque(self, opaque: str) -> 'SigningConfigBuilder':
        self._opaque = opaque
        return self

    def authorization_header_name(self, name: str) -> 'SigningConfigBuilder':
        self._authorization_header_name = name
        return self

    def clock(self, clock: Clock) -> 'SigningConfigBuilder':
        self._clock = clock
        return self

    def build(self) -> SigningOptions:
        """
        Build the signing options.

        Returns:
            SigningOptions: Complete signing options

        Raises:
            TypeError: If key or key ID is missing or malformed
            InvalidAlgorithmError: If the algorithm is unsupported or does not match the key
            KeyParseError: If an asymmetric key cannot be parsed
        """
        if self._key_id is None:
            raise TypeError("Key ID is required")
        if self._key is None:
            raise TypeError("Key is required")

        key = self._key
        alg = validate_algorithm(self._algorithm) if self._algorithm is not None else None
        if alg is None or not alg.is_hmac:
            key = parse_private_key(key, self._key_passphrase)
            if alg is not None and not alg.is_hidden:
                validate_algorithm(self._algorithm, key.type)

        return SigningOptions(
            key=key,
            key_id=self._key_id,
            algorithm=self._algorithm,
            headers=self._headers,
            http_version=self._http_version,
            strict=self._strict,
            expires_in=self._expires_in,
            key_passphrase=self._key_passphrase,
            hide_algorithm=self._hide_algorithm,
            opaque=self._opaque,
            authorization_header_name=self._authorization_header_name,
            clock=self._clock,
        )


def create_signing_config() -> SigningConfigBuilder:
    """
    Create a new signing configuration builder.

    Returns:
        SigningConfigBuilder: New configuration builder
    """
    return SigningConfigBuilder()


_OPTION_NAMES = {
    "key": "key",
    "keyId": "key_id",
    "key_id": "key_id",
    "algorithm": "algorithm",
    "headers": "headers",
    "httpVersion": "http_version",
    "http_version": "http_version",
    "strict": "strict",
    "expiresIn": "expires_in",
    "expires_in": "expires_in",
    "keyPassphrase": "key_passphrase",
    "key_passphrase": "key_passphrase",
    "hideAlgorithm": "hide_algorithm",
    "hide_algorithm": "hide_algorithm",
    "opaque": "opaque",
    "authorizationHeaderName": "authorization_header_name",
    "authorization_header_name": "authorization_header_name",
}


def signing_options_from_dict(data: Mapping[str, Any]) -> SigningOptions:
    """
    Build SigningOptions from a mapping.

    Accepts both the wire-style camelCase names (keyId, expiresIn, ...) and
    the snake_case attribute names.

    Raises:
        TypeError: On unknown option names or malformed values
    """
    kwargs: Dict[str, Any] = {}
    for name, value in data.items():
        attr = _OPTION_NAMES.get(name)
        if attr is None:
            raise TypeError(f"unknown signing option: {name}")
        kwargs[attr] = value
    return SigningOptions(**kwargs)
