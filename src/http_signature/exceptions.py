"""
Exception classes for the HTTP Signature SDK
"""

from typing import Optional, Dict, Any


class HttpSignatureErrorCodes:
    """Standard error codes for signing, parsing and verification"""

    INVALID_ALGORITHM = "INVALID_ALGORITHM"
    MISSING_HEADER = "MISSING_HEADER"
    STRICT_PARSING = "STRICT_PARSING"
    KEY_PARSE_FAILED = "KEY_PARSE_FAILED"
    SIGNER_STATE = "SIGNER_STATE"
    EXPIRED_REQUEST = "EXPIRED_REQUEST"
    INVALID_HEADER = "INVALID_HEADER"
    INVALID_PARAMS = "INVALID_PARAMS"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class HttpSignatureError(Exception):
    """Base exception for all HTTP signature errors"""

    default_code = HttpSignatureErrorCodes.UNKNOWN_ERROR

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message='{self.message}', code='{self.code}', details={self.details})"


class InvalidAlgorithmError(HttpSignatureError):
    """Raised for unsupported algorithms or algorithm/key type mismatches"""
    default_code = HttpSignatureErrorCodes.INVALID_ALGORITHM


class MissingHeaderError(HttpSignatureError):
    """Raised when a header or pseudo-header required for signing is absent"""
    default_code = HttpSignatureErrorCodes.MISSING_HEADER


class StrictParsingError(HttpSignatureError):
    """Raised when the legacy request-line pseudo-header is used in strict mode"""
    default_code = HttpSignatureErrorCodes.STRICT_PARSING


class KeyParseError(HttpSignatureError):
    """Raised when key material cannot be parsed"""
    default_code = HttpSignatureErrorCodes.KEY_PARSE_FAILED


class SignerStateError(HttpSignatureError):
    """Raised when an incremental signer is used after it has signed"""
    default_code = HttpSignatureErrorCodes.SIGNER_STATE


class ExpiredRequestError(HttpSignatureError):
    """Raised when a signed request falls outside its validity window"""
    default_code = HttpSignatureErrorCodes.EXPIRED_REQUEST


class InvalidHeaderError(HttpSignatureError):
    """Raised when a signature header cannot be parsed"""
    default_code = HttpSignatureErrorCodes.INVALID_HEADER


class InvalidParamsError(HttpSignatureError):
    """Raised when signature parameters are not acceptable"""
    default_code = HttpSignatureErrorCodes.INVALID_PARAMS
