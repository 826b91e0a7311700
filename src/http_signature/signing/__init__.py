"""
HTTP Signature SDK - Request Signing Module

Signing-string canonicalization, signature header formatting, and the
one-shot and incremental request signers.
"""

from .types import (
    SignableRequest,
    SigningOptions,
    SigningParameters,
    ExternalSignature,
    SignResult,
    AUTHORIZATION_HEADER,
    SIGNATURE_HEADER,
)

from .authz import (
    AUTHZ_PARAMS,
    format_authz,
)

from .canonical_message import (
    HeaderSource,
    SigningStringContext,
    SigningStringBuilder,
    build_signing_string,
)

from .signer import (
    RequestAdapter,
    adapt_request,
    sign_request,
    sign,
)

from .request_signer import (
    RequestSigner,
    StreamingRequestSigner,
    CallbackRequestSigner,
    create_signer,
    is_signer,
)

from .signing_config import (
    SigningConfigBuilder,
    DEFAULT_SIGNED_HEADERS,
    REQUEST_TARGET_HEADERS,
    FRESHNESS_HEADERS,
    create_signing_config,
    signing_options_from_dict,
)

from .utils import (
    format_http_date,
    normalize_header_name,
    unix_seconds,
)

from .integration import (
    HTTPSignatureAuth,
    create_signing_session,
    request_target,
)

# Public API exports
__all__ = [
    # Types
    'SignableRequest',
    'SigningOptions',
    'SigningParameters',
    'ExternalSignature',
    'SignResult',
    'AUTHORIZATION_HEADER',
    'SIGNATURE_HEADER',
    # Formatting and canonicalization
    'AUTHZ_PARAMS',
    'format_authz',
    'HeaderSource',
    'SigningStringContext',
    'SigningStringBuilder',
    'build_signing_string',
    # One-shot signing
    'RequestAdapter',
    'adapt_request',
    'sign_request',
    'sign',
    # Incremental signing
    'RequestSigner',
    'StreamingRequestSigner',
    'CallbackRequestSigner',
    'create_signer',
    'is_signer',
    # Configuration
    'SigningConfigBuilder',
    'DEFAULT_SIGNED_HEADERS',
    'REQUEST_TARGET_HEADERS',
    'FRESHNESS_HEADERS',
    'create_signing_config',
    'signing_options_from_dict',
    # Utilities
    'format_http_date',
    'normalize_header_name',
    'unix_seconds',
    # HTTP Integration
    'HTTPSignatureAuth',
    'create_signing_session',
    'request_target',
]
