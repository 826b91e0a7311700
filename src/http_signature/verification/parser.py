"""
Signature header parsing

Reads the signature from an incoming request's Authorization (or bare
Signature) header, rebuilds the signing string with the same rules the
signer uses, and checks freshness and header coverage.
"""

import logging
import re
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Optional

from ..algorithms import validate_algorithm
from ..exceptions import (
    ExpiredRequestError,
    InvalidHeaderError,
    InvalidParamsError,
    MissingHeaderError,
)
from ..signing.canonical_message import CREATED, EXPIRES, SigningStringContext, build_signing_string
from ..signing.signer import adapt_request
from ..signing.types import AUTHORIZATION_HEADER, DEFAULT_HEADERS, SIGNATURE_HEADER, SIGNATURE_SCHEME
from .types import ParsedSignature, ParseOptions

logger = logging.getLogger(__name__)

_PARAM_PATTERN = re.compile(r'\s*([A-Za-z]+)\s*=\s*(?:"([^"]*)"|(\d+))\s*(,|$)')
# x-date takes precedence over date when both are present
_DATE_HEADERS = ("x-date", "date")


def _parse_params(value: str) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    value = value.strip()
    pos = 0
    while pos < len(value):
        match = _PARAM_PATTERN.match(value, pos)
        if not match:
            raise InvalidHeaderError(
                f"bad param format at offset {pos}",
                details={"offset": pos}
            )
        name, quoted, number, separator = match.groups()
        if name in params:
            raise InvalidHeaderError(f"duplicate parameter: {name}", details={"param": name})
        params[name] = quoted if quoted is not None else int(number)
        pos = match.end()
        if separator == "," and pos >= len(value):
            raise InvalidHeaderError("trailing comma in signature parameters")
    return params


def _integer_param(params: Dict[str, Any], name: str) -> Optional[int]:
    value = params.get(name)
    if value is None or isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    raise InvalidHeaderError(f"{name} must be an integer", details={"param": name})


def _read_header(source, options: ParseOptions):
    if options.authorization_header_name:
        name = options.authorization_header_name
        return name, source.get_header(name)
    value = source.get_header(AUTHORIZATION_HEADER)
    if value:
        return AUTHORIZATION_HEADER, value
    return SIGNATURE_HEADER, source.get_header(SIGNATURE_HEADER)


def _check_date(source, now: float, clock_skew: float) -> None:
    """Check the request date (x-date, else date) against the clock, signed or not."""
    for name in _DATE_HEADERS:
        raw = source.get_header(name)
        if not raw:
            continue
        try:
            date = parsedate_to_datetime(raw)
        except (TypeError, ValueError):
            raise InvalidHeaderError(f"{name} header is not a valid HTTP date", details={"header": name})
        skew = abs(now - date.timestamp())
        if skew > clock_skew:
            raise ExpiredRequestError(
                f"clock skew of {skew:.0f}s was greater than {clock_skew}s",
                details={"skew": skew, "clock_skew": clock_skew}
            )
        return


def parse_request(request: Any, options: Optional[ParseOptions] = None) -> ParsedSignature:
    """
    Parse the signature of an incoming request.

    Args:
        request: SignableRequest, or any object with method, path and headers
        options: Parse options

    Returns:
        ParsedSignature: Parameters plus the rebuilt signing string

    Raises:
        MissingHeaderError: If there is no signature header, a signed header is
            absent, or a required header is not signed
        InvalidHeaderError: If the header is malformed
        InvalidParamsError: If the algorithm is not allowed
        InvalidAlgorithmError: If the algorithm is unsupported
        ExpiredRequestError: If the request is outside the allowed time window
        StrictParsingError: If request-line is signed in strict mode
    """
    options = options or ParseOptions()
    source = adapt_request(request)

    header_name, value = _read_header(source, options)
    if not value:
        raise MissingHeaderError("no authorization or signature header present in the request")

    if header_name.lower() == SIGNATURE_HEADER:
        scheme, raw_params = "", value
    else:
        scheme, _, raw_params = value.strip().partition(" ")
        if scheme.lower() != SIGNATURE_SCHEME.lower():
            raise InvalidHeaderError(f"scheme was not \"{SIGNATURE_SCHEME}\"", details={"scheme": scheme})

    params = _parse_params(raw_params)

    for name in ("keyId", "algorithm", "signature"):
        if not isinstance(params.get(name), str) or not params[name]:
            raise InvalidHeaderError(f"{name} was not specified", details={"param": name})

    headers_param = params.get("headers")
    if headers_param is None:
        signed_headers = list(DEFAULT_HEADERS)
    elif isinstance(headers_param, str):
        signed_headers = [h for h in headers_param.lower().split(" ") if h]
    else:
        raise InvalidHeaderError("headers must be a string", details={"param": "headers"})
    params["headers"] = signed_headers

    algorithm = params["algorithm"]
    validate_algorithm(algorithm)
    if options.algorithms is not None:
        allowed = {a.lower() for a in options.algorithms}
        if algorithm.lower() not in allowed:
            raise InvalidParamsError(
                f"{algorithm} is not a supported algorithm",
                details={"algorithm": algorithm, "allowed": sorted(allowed)}
            )

    created = _integer_param(params, "created")
    expires = _integer_param(params, "expires")
    for pseudo, param, found in ((CREATED, "created", created), (EXPIRES, "expires", expires)):
        if pseudo in signed_headers and found is None:
            raise InvalidHeaderError(f"{pseudo} was signed but {param} was not specified")
    if created is not None:
        params["created"] = created
    if expires is not None:
        params["expires"] = expires

    context = SigningStringContext(
        method=source.method,
        path=source.path,
        http_version=options.http_version,
        key_id=params["keyId"],
        algorithm=algorithm,
        opaque=params.get("opaque"),
        strict=options.strict,
        created=created,
        expires=expires,
        clock=options.clock,
    )
    signing_string, _ = build_signing_string(signed_headers, source, context)

    now = options.clock()
    _check_date(source, now, options.clock_skew)
    if created is not None and created - options.clock_skew > now:
        raise ExpiredRequestError("created lies in the future", details={"created": created})
    if expires is not None and now - expires > options.clock_skew:
        raise ExpiredRequestError("request has expired", details={"expires": expires})

    for required in options.headers if options.headers is not None else DEFAULT_HEADERS:
        if required.lower() not in signed_headers:
            raise MissingHeaderError(
                f"{required.lower()} was not a signed header",
                details={"header": required.lower()}
            )

    logger.debug(f"Parsed signature keyId={params['keyId']} algorithm={algorithm} "
                 f"headers={' '.join(signed_headers)}")

    return ParsedSignature(
        scheme=scheme,
        params=params,
        signing_string=signing_string,
        algorithm=algorithm.upper(),
        key_id=params["keyId"],
        opaque=params.get("opaque"),
    )


parse = parse_request
