"""
Tests for the requests integration
"""

from unittest.mock import Mock, patch

import pytest
import requests

from http_signature.signing import (
    HTTPSignatureAuth,
    SignableRequest,
    SigningOptions,
    create_signing_session,
    format_http_date,
    request_target,
)
from http_signature.verification import ParseOptions, parse_request, verify_signature

from conftest import FIXED_DATE, FIXED_NOW


@pytest.fixture
def options(rsa_keys):
    return SigningOptions(
        key=rsa_keys.private_pem,
        key_id="client-1",
        headers=["(request-target)", "host", "date"],
        clock=lambda: FIXED_NOW,
    )


class TestRequestTarget:
    def test_path_and_query(self):
        assert request_target("https://api.example.com/v1/items?page=2") == "/v1/items?page=2"

    def test_empty_path(self):
        assert request_target("https://api.example.com") == "/"


class TestHTTPSignatureAuth:
    """Test the requests auth hook"""

    def test_signs_prepared_request(self, options, rsa_keys):
        prepared = requests.Request(
            "POST",
            "https://api.example.com/v1/items?page=2",
            headers={"Host": "api.example.com"},
            data="{}",
        ).prepare()

        HTTPSignatureAuth(options)(prepared)

        assert prepared.headers["Date"] == format_http_date(FIXED_NOW)
        assert prepared.headers["Authorization"].startswith('Signature keyId="client-1",algorithm="rsa-sha256"')

        incoming = SignableRequest(
            method=prepared.method,
            path=request_target(prepared.url),
            headers=dict(prepared.headers),
        )
        parsed = parse_request(incoming, ParseOptions(clock=lambda: FIXED_NOW))
        assert parsed.signing_string.startswith("(request-target): post /v1/items?page=2\n")
        assert verify_signature(parsed, rsa_keys.public_pem)

    def test_requires_options(self):
        with pytest.raises(TypeError):
            HTTPSignatureAuth({"keyId": "k"})

    def test_session(self, options):
        session = create_signing_session(options)
        assert isinstance(session.auth, HTTPSignatureAuth)

        prepared = session.prepare_request(requests.Request(
            "GET", "https://api.example.com/", headers={"Host": "api.example.com", "Date": FIXED_DATE}
        ))
        assert "Authorization" in prepared.headers

    def test_session_sends_signed_request(self, options):
        """Requests sent through the session carry the signature header"""
        session = create_signing_session(options)

        with patch.object(session, "send", return_value=Mock(status_code=200)) as mock_send:
            session.get("https://api.example.com/items", headers={"Host": "api.example.com"})

        prepared = mock_send.call_args[0][0]
        assert prepared.headers["Date"] == format_http_date(FIXED_NOW)
        assert prepared.headers["Authorization"].startswith('Signature keyId="client-1"')

    def test_existing_session(self, options):
        session = requests.Session()
        assert create_signing_session(options, session) is session
