"""
Signature header formatting
"""

from dataclasses import is_dataclass
from typing import Any, Mapping, Union

from .types import SigningParameters

# Wire order of the signature parameters, with their SigningParameters fields
AUTHZ_PARAMS = (
    ("keyId", "key_id"),
    ("algorithm", "algorithm"),
    ("created", "created"),
    ("expires", "expires"),
    ("opaque", "opaque"),
    ("headers", "headers"),
    ("signature", "signature"),
)


def _lookup(params: Union[SigningParameters, Mapping[str, Any]], wire_name: str, attr: str) -> Any:
    if is_dataclass(params):
        return getattr(params, attr)
    if wire_name in params:
        return params[wire_name]
    return params.get(attr)


def format_authz(prefix: str, params: Union[SigningParameters, Mapping[str, Any]]) -> str:
    """
    Render signature parameters into a header value.

    Parameters are always written in the order keyId, algorithm, created,
    expires, opaque, headers, signature; absent ones are skipped. Integers
    are written bare, strings double-quoted. ``prefix`` goes in front of the
    first parameter only.

    Args:
        prefix: Scheme prefix such as "Signature ", or ""
        params: SigningParameters or a mapping keyed by wire (or field) names

    Returns:
        str: Header value

    Raises:
        TypeError: If a value is neither a string nor an integer
    """
    if not isinstance(prefix, str):
        raise TypeError("prefix must be a string")
    if not (is_dataclass(params) or isinstance(params, Mapping)):
        raise TypeError("params must be SigningParameters or a mapping")

    authz = ""
    for wire_name, attr in AUTHZ_PARAMS:
        value = _lookup(params, wire_name, attr)
        if value is None:
            continue
        if isinstance(value, int) and not isinstance(value, bool):
            authz += f"{prefix}{wire_name}={value}"
        elif isinstance(value, str):
            authz += f'{prefix}{wire_name}="{value}"'
        else:
            raise TypeError(f"params.{wire_name} must be a string or an integer")
        prefix = ","

    return authz
