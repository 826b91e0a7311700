"""
HTTP Signature SDK - Verification Module

Parsing of incoming signature headers and verification against public keys
or HMAC shared secrets.
"""

from .types import (
    ParsedSignature,
    ParseOptions,
    DEFAULT_CLOCK_SKEW,
)

from .parser import (
    parse_request,
    parse,
)

from .verifier import (
    verify_signature,
    verify_hmac,
    verify,
)

__all__ = [
    'ParsedSignature',
    'ParseOptions',
    'DEFAULT_CLOCK_SKEW',
    'parse_request',
    'parse',
    'verify_signature',
    'verify_hmac',
    'verify',
]
