"""
HTTP client integration for request signing

This module plugs the one-shot signer into the requests library as an
authentication hook, so every request sent through a session carries a
signature header.
"""

import logging
from typing import Optional
from urllib.parse import urlsplit

import requests
from requests.auth import AuthBase
from requests.models import PreparedRequest

from .signer import RequestAdapter, sign_request
from .types import SigningOptions

logger = logging.getLogger(__name__)


def request_target(url: str) -> str:
    """Path plus query string of ``url``, as signed by (request-target)."""
    parts = urlsplit(url)
    path = parts.path or "/"
    if parts.query:
        path = f"{path}?{parts.query}"
    return path


class HTTPSignatureAuth(AuthBase):
    """
    requests authentication hook that signs outgoing requests.

    Signing errors propagate to the caller; a request is never sent
    unsigned because signing failed.
    """

    def __init__(self, options: SigningOptions):
        """
        Initialize the auth hook.

        Args:
            options: Signing options applied to every request
        """
        if not isinstance(options, SigningOptions):
            raise TypeError("options must be SigningOptions")
        self.options = options

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        adapter = RequestAdapter(request.method, request_target(request.url), request.headers)
        sign_request(adapter, self.options)
        logger.debug(f"Signed {request.method} request to {request.url}")
        return request


def create_signing_session(
    options: SigningOptions,
    session: Optional[requests.Session] = None
) -> requests.Session:
    """
    Create (or configure) a requests session that signs every request.

    Args:
        options: Signing options
        session: Optional existing session to configure

    Returns:
        requests.Session: Session with HTTPSignatureAuth installed
    """
    session = session or requests.Session()
    session.auth = HTTPSignatureAuth(options)
    logger.info(f"Configured request signing for key ID: {options.key_id}")
    return session
