"""
One-shot request signing

Adds a signature header (Authorization by default) to a request in a single
call: resolves the algorithm against the key, builds the signing string,
signs it and writes the formatted header.
"""

import base64
import logging
from typing import Any, Mapping, Optional

from requests.structures import CaseInsensitiveDict

from ..algorithms import (
    HASH_ALGOS,
    HS2019_NAME,
    PK_ALGOS,
    AlgorithmId,
    validate_algorithm,
)
from ..crypto.keys import parse_private_key
from ..crypto.shared_secret import hmac_digest
from ..exceptions import HttpSignatureError, HttpSignatureErrorCodes, InvalidAlgorithmError
from .authz import format_authz
from .canonical_message import SigningStringContext, build_signing_string
from .types import (
    DEFAULT_HEADERS,
    SIGNATURE_HEADER,
    SIGNATURE_SCHEME,
    SigningOptions,
    SigningParameters,
)
from .utils import format_http_date

logger = logging.getLogger(__name__)


class RequestAdapter:
    """
    Header source view over an arbitrary request object

    Reads and writes go straight to the wrapped headers mapping, matching
    names case-insensitively.
    """

    def __init__(self, method: str, path: str, headers: Mapping[str, Any]):
        if not isinstance(method, str) or not method:
            raise TypeError("request.method must be a non-empty string")
        if not isinstance(path, str):
            raise TypeError("request.path must be a string")
        self.method = method
        self.path = path
        self.headers = headers

    def _find(self, name: str) -> Optional[str]:
        if isinstance(self.headers, CaseInsensitiveDict):
            return name if name in self.headers else None
        lowered = name.lower()
        for existing in self.headers:
            if existing.lower() == lowered:
                return existing
        return None

    def get_header(self, name: str) -> Optional[str]:
        existing = self._find(name)
        if existing is None:
            return None
        value = self.headers[existing]
        return None if value is None else str(value)

    def set_header(self, name: str, value: str) -> None:
        existing = self._find(name)
        if existing is not None and not isinstance(self.headers, CaseInsensitiveDict):
            del self.headers[existing]
        self.headers[name] = value


def adapt_request(request: Any):
    """
    Return a header source for ``request``.

    Objects that already provide get_header/set_header are used as they are;
    anything with ``method``, ``path`` and a ``headers`` mapping is wrapped.
    """
    if hasattr(request, "get_header") and hasattr(request, "set_header"):
        return request
    if hasattr(request, "headers") and hasattr(request, "method") and hasattr(request, "path"):
        return RequestAdapter(request.method, request.path, request.headers)
    raise TypeError("request must provide method, path and headers")


def sign_request(request: Any, options: SigningOptions) -> bool:
    """
    Add a signature header to a request.

    A Date header is added if the request has none. Every other header
    named in ``options.headers`` must be present.

    Args:
        request: SignableRequest, or any object with method, path and headers
        options: Signing options

    Returns:
        bool: True once the header has been written

    Raises:
        TypeError: On malformed options or key types
        InvalidAlgorithmError: If the algorithm is unsupported or does not match the key
        KeyParseError: If the private key cannot be parsed
        MissingHeaderError: If a header to be signed is not present
        StrictParsingError: If request-line is signed in strict mode
    """
    if not isinstance(options, SigningOptions):
        raise TypeError("options must be SigningOptions")
    if not isinstance(options.key_id, str):
        raise TypeError("options.key_id must be a string")

    source = adapt_request(request)
    if not source.get_header("Date"):
        source.set_header("Date", format_http_date(options.clock()))

    headers = options.headers if options.headers is not None else list(DEFAULT_HEADERS)

    alg: Optional[AlgorithmId] = None
    algorithm_name: Optional[str] = None
    if options.algorithm:
        algorithm_name = options.algorithm.lower()
        alg = validate_algorithm(algorithm_name)

    key = options.key
    private_key = None
    if alg is not None and alg.is_hmac:
        if not isinstance(key, (str, bytes, bytearray)):
            raise TypeError("options.key must be a string or bytes")
        resolved = alg
        emitted = algorithm_name
    else:
        if key is None:
            raise TypeError("options.key is required")
        private_key = parse_private_key(key, options.key_passphrase)

        if private_key.type not in PK_ALGOS:
            raise InvalidAlgorithmError(f"{private_key.type.value.upper()} type keys are not supported")

        hide = options.hide_algorithm
        if alg is None or alg.is_hidden:
            if alg is not None:
                hide = True
            hash_algorithm = private_key.default_hash_algorithm()
        elif alg.key_type is not private_key.type:
            raise InvalidAlgorithmError(
                f"options.key must be a {alg.key_type.value.upper()} key, "
                f"was given a {private_key.type.value.upper()} key instead",
                details={"algorithm": algorithm_name, "key_type": private_key.type.value}
            )
        else:
            hash_algorithm = alg.hash_algorithm

        resolved = AlgorithmId(private_key.type, hash_algorithm)
        emitted = HS2019_NAME if hide else str(resolved)

    context = SigningStringContext(
        method=source.method,
        path=source.path,
        http_version=options.http_version,
        key_id=options.key_id,
        algorithm=emitted,
        opaque=options.opaque,
        expires_in=options.expires_in,
        strict=options.strict,
        clock=options.clock,
    )
    signing_string, fragment = build_signing_string(headers, source, context)

    if hasattr(request, "signing_string"):
        request.signing_string = signing_string

    if resolved.is_hmac:
        digest = hmac_digest(resolved.hash_algorithm, key, signing_string)
        signature = base64.b64encode(digest).decode("ascii")
    else:
        signer = private_key.create_sign(resolved.hash_algorithm)
        signer.update(signing_string)
        sig_obj = signer.sign()
        if sig_obj.hash_algorithm not in HASH_ALGOS:
            raise InvalidAlgorithmError(
                f"{str(sig_obj.hash_algorithm).upper()} is not a supported hash algorithm"
            )
        if sig_obj.hash_algorithm is not resolved.hash_algorithm:
            raise HttpSignatureError(
                "hash algorithm mismatch",
                HttpSignatureErrorCodes.INTERNAL_ERROR,
                {"expected": resolved.hash_algorithm.value, "actual": sig_obj.hash_algorithm.value}
            )
        signature = sig_obj.to_base64()
        if not signature:
            raise HttpSignatureError("empty signature produced", HttpSignatureErrorCodes.INTERNAL_ERROR)

    params = SigningParameters(
        key_id=options.key_id,
        algorithm=emitted,
        created=fragment.created,
        expires=fragment.expires,
        opaque=options.opaque or None,
        headers=" ".join(options.headers) if options.headers is not None else None,
        signature=signature,
    )

    header_name = options.authorization_header_name
    prefix = "" if header_name.lower() == SIGNATURE_HEADER else f"{SIGNATURE_SCHEME} "
    source.set_header(header_name, format_authz(prefix, params))

    logger.debug(f"Signed {source.method} {source.path} with keyId={options.key_id} "
                 f"algorithm={emitted} headers={headers}")
    return True


sign = sign_request
