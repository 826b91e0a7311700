"""
Utility functions for request signing
"""

import time
from email.utils import formatdate
from typing import Callable, Optional


def format_http_date(timestamp: Optional[float] = None) -> str:
    """
    Format a timestamp as an RFC 1123 HTTP date.

    Args:
        timestamp: Unix timestamp (uses current time if None)

    Returns:
        str: e.g. "Tue, 07 Jun 2014 20:51:35 GMT"
    """
    if timestamp is None:
        timestamp = time.time()
    return formatdate(timestamp, usegmt=True)


def unix_seconds(clock: Callable[[], float] = time.time) -> int:
    """Current time from ``clock`` in whole Unix seconds."""
    return int(clock())


def normalize_header_name(name: str) -> str:
    """Lower-case a header name for signing."""
    if not isinstance(name, str):
        raise TypeError("header names must be strings")
    return name.lower()
