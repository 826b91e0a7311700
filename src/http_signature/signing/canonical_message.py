"""
Signing string construction

Turns an ordered list of header names, including the (request-target),
(keyid), (algorithm), (opaque), (created) and (expires) pseudo-headers and
the legacy request-line, into the exact string that gets signed. The same
rules are used when signing and when a parser rebuilds the string from an
incoming request.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Protocol, Tuple

from ..exceptions import MissingHeaderError, StrictParsingError
from .types import DEFAULT_EXPIRES_IN, DEFAULT_HTTP_VERSION, Clock, SigningParameters
from .utils import normalize_header_name, unix_seconds

logger = logging.getLogger(__name__)

REQUEST_LINE = "request-line"
REQUEST_TARGET = "(request-target)"
KEY_ID = "(keyid)"
ALGORITHM = "(algorithm)"
OPAQUE = "(opaque)"
CREATED = "(created)"
EXPIRES = "(expires)"


class HeaderSource(Protocol):
    """Anything that can look up request header values by name"""

    def get_header(self, name: str) -> Optional[str]:
        ...


@dataclass
class SigningStringContext:
    """
    Request metadata the pseudo-headers are rendered from

    Attributes:
        method: HTTP method
        path: Request target path
        http_version: Version used by request-line
        key_id: Value for (keyid)
        algorithm: Emitted algorithm string, used for (algorithm)
        opaque: Value for (opaque)
        expires_in: Seconds from now for (expires)
        strict: Reject request-line
        created: Fixed (created) value; computed from the clock if None
        expires: Fixed (expires) value; computed from the clock if None
        clock: Time source returning Unix seconds
    """
    method: str
    path: str
    http_version: str = DEFAULT_HTTP_VERSION
    key_id: Optional[str] = None
    algorithm: Optional[str] = None
    opaque: Optional[str] = None
    expires_in: Optional[int] = None
    strict: bool = False
    created: Optional[int] = None
    expires: Optional[int] = None
    clock: Clock = field(default=time.time)


class SigningStringBuilder:
    """
    Signing string builder for one signing operation
    """

    def __init__(self, source: HeaderSource, context: SigningStringContext):
        """
        Initialize the builder.

        Args:
            source: Header values of the request
            context: Pseudo-header values and rendering options
        """
        self.source = source
        self.context = context
        self.params = SigningParameters()

    def build(self, header_names: Iterable[str]) -> str:
        """
        Build the signing string.

        Lines are emitted in the given order, joined by a single newline,
        with no trailing newline. (created) and (expires) record their
        values in ``self.params``.

        Args:
            header_names: Ordered header names to sign

        Returns:
            str: The signing string

        Raises:
            StrictParsingError: If request-line is used in strict mode
            MissingHeaderError: If a header or opaque value is absent or empty
        """
        lines: List[str] = []
        for header_name in header_names:
            lines.append(self._build_line(normalize_header_name(header_name)))
        return "\n".join(lines)

    def _build_line(self, name: str) -> str:
        ctx = self.context

        if name == REQUEST_LINE:
            if ctx.strict:
                raise StrictParsingError(
                    "request-line is not a valid header with strict parsing enabled.",
                    details={"header": name}
                )
            logger.warning("Signing deprecated request-line pseudo-header")
            return f"{ctx.method.upper()} {ctx.path} HTTP/{ctx.http_version}"

        if name == REQUEST_TARGET:
            return f"{REQUEST_TARGET}: {ctx.method.lower()} {ctx.path}"

        if name == KEY_ID:
            return f"{KEY_ID}: {ctx.key_id}"

        if name == ALGORITHM:
            return f"{ALGORITHM}: {ctx.algorithm}"

        if name == OPAQUE:
            if not ctx.opaque:
                raise MissingHeaderError(
                    "options.opaque was not in the request",
                    details={"header": name}
                )
            return f"{OPAQUE}: {ctx.opaque}"

        if name == CREATED:
            created = ctx.created
            if created is None:
                created = unix_seconds(ctx.clock)
            self.params.created = created
            return f"{CREATED}: {created}"

        if name == EXPIRES:
            expires = ctx.expires
            if expires is None:
                expires_in = DEFAULT_EXPIRES_IN if ctx.expires_in is None else ctx.expires_in
                expires = unix_seconds(ctx.clock) + expires_in
            self.params.expires = expires
            return f"{EXPIRES}: {expires}"

        value = self.source.get_header(name)
        if value is None or value == "":
            raise MissingHeaderError(
                f"{name} was not in the request",
                details={"header": name}
            )
        return f"{name}: {value}"


def build_signing_string(
    header_names: Iterable[str],
    source: HeaderSource,
    context: SigningStringContext
) -> Tuple[str, SigningParameters]:
    """
    Build the signing string for a request.

    Args:
        header_names: Ordered header names (and pseudo-headers) to sign
        source: Header values of the request
        context: Pseudo-header values and rendering options

    Returns:
        tuple: (signing string, SigningParameters holding created/expires if signed)
    """
    builder = SigningStringBuilder(source, context)
    signing_string = builder.build(header_names)
    return signing_string, builder.params
