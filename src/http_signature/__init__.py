"""
HTTP Signature SDK
Message-level authentication for HTTP requests with signed headers
"""

from .version import __version__
from .algorithms import (
    KeyType,
    HashAlgorithm,
    AlgorithmId,
    HS2019,
    PK_ALGOS,
    HASH_ALGOS,
    validate_algorithm,
)
from .crypto import (
    PrivateKey,
    PublicKey,
    parse_private_key,
    parse_public_key,
)
from .exceptions import (
    HttpSignatureError,
    HttpSignatureErrorCodes,
    InvalidAlgorithmError,
    MissingHeaderError,
    StrictParsingError,
    KeyParseError,
    SignerStateError,
    ExpiredRequestError,
    InvalidHeaderError,
    InvalidParamsError,
)
from .signing import (
    SignableRequest,
    SigningOptions,
    SignResult,
    ExternalSignature,
    format_authz,
    build_signing_string,
    sign_request,
    sign,
    create_signer,
    is_signer,
    create_signing_config,
    HTTPSignatureAuth,
)
from .verification import (
    ParsedSignature,
    ParseOptions,
    parse_request,
    parse,
    verify_signature,
    verify_hmac,
    verify,
)

__all__ = [
    '__version__',
    # Algorithms
    'KeyType',
    'HashAlgorithm',
    'AlgorithmId',
    'HS2019',
    'PK_ALGOS',
    'HASH_ALGOS',
    'validate_algorithm',
    # Keys
    'PrivateKey',
    'PublicKey',
    'parse_private_key',
    'parse_public_key',
    # Errors
    'HttpSignatureError',
    'HttpSignatureErrorCodes',
    'InvalidAlgorithmError',
    'MissingHeaderError',
    'StrictParsingError',
    'KeyParseError',
    'SignerStateError',
    'ExpiredRequestError',
    'InvalidHeaderError',
    'InvalidParamsError',
    # Signing
    'SignableRequest',
    'SigningOptions',
    'SignResult',
    'ExternalSignature',
    'format_authz',
    'build_signing_string',
    'sign_request',
    'sign',
    'create_signer',
    'is_signer',
    'create_signing_config',
    'HTTPSignatureAuth',
    # Verification
    'ParsedSignature',
    'ParseOptions',
    'parse_request',
    'parse',
    'verify_signature',
    'verify_hmac',
    'verify',
]
