"""
Type definitions for signature parsing and verification
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..signing.types import DEFAULT_HTTP_VERSION, Clock

DEFAULT_CLOCK_SKEW = 300


@dataclass
class ParsedSignature:
    """
    A signature header parsed from an incoming request

    Attributes:
        scheme: Authorization scheme ("Signature"), empty for a bare signature header
        params: Header parameters by wire name; ``headers`` is a list of names
        signing_string: Signing string rebuilt from the request
        algorithm: Algorithm identifier, upper-cased
        key_id: Key identifier
        opaque: Opaque parameter, if present
    """
    scheme: str
    params: Dict[str, Any]
    signing_string: str
    algorithm: str
    key_id: str
    opaque: Optional[str] = None


@dataclass
class ParseOptions:
    """
    Options for parsing a signed request

    Attributes:
        clock_skew: Allowed difference in seconds between the signer's clock and ours
        headers: Header names that must be covered by the signature
        algorithms: Allowed algorithm identifiers (any supported if None)
        strict: Reject the legacy request-line pseudo-header
        authorization_header_name: Header to read the signature from
        http_version: HTTP version used by request-line
        clock: Time source returning Unix seconds
    """
    clock_skew: int = DEFAULT_CLOCK_SKEW
    headers: Optional[List[str]] = None
    algorithms: Optional[List[str]] = None
    strict: bool = False
    authorization_header_name: Optional[str] = None
    http_version: str = DEFAULT_HTTP_VERSION
    clock: Clock = field(default=time.time)

    def __post_init__(self):
        if isinstance(self.clock_skew, bool) or not isinstance(self.clock_skew, (int, float)):
            raise TypeError("options.clock_skew must be a number")
        if self.headers is not None:
            if isinstance(self.headers, str) or not all(isinstance(h, str) for h in self.headers):
                raise TypeError("options.headers must be a list of strings")
        if self.algorithms is not None:
            if isinstance(self.algorithms, str) or not all(isinstance(a, str) for a in self.algorithms):
                raise TypeError("options.algorithms must be a list of strings")
        if not callable(self.clock):
            raise TypeError("options.clock must be callable")
