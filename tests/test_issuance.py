"""
Tests for CSRF token issuance and its shared-secret gate
"""

import os

import pytest
from fastapi.testclient import TestClient

from csrfguard.auth.issuer import extract_credential
from csrfguard.errors import Unauthenticated

ISSUER_SECRET = os.environ["CSRF_ISSUER_SECRET"]


def set_cookie_header(response) -> str:
    cookies = [c for c in response.headers.get_list("set-cookie") if c.startswith("csrf_token=")]
    assert len(cookies) == 1
    return cookies[0]


class TestTokenIssuance:
    """Successful issuance"""

    def test_issue_returns_token_and_cookie(self, client, auth_headers):
        response = client.get("/csrf/token", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"csrfToken", "cookie"}
        assert data["csrfToken"]
        assert data["cookie"]

    def test_issued_pair_verifies(self, client, app, auth_headers):
        data = client.get("/csrf/token", headers=auth_headers).json()
        assert app.state.codec.verify(data["csrfToken"], data["cookie"]) is True

    def test_set_cookie_attributes(self, client, auth_headers):
        response = client.get("/csrf/token", headers=auth_headers)
        cookie = set_cookie_header(response)
        attributes = [part.strip().lower() for part in cookie.split(";")]

        assert cookie.startswith(f"csrf_token={response.json()['cookie']}")
        assert "httponly" in attributes
        assert "samesite=strict" in attributes
        assert "path=/" in attributes
        assert "secure" not in attributes

    def test_secure_cookie_in_production(self, make_app, auth_headers):
        client = TestClient(make_app(ENV="production"))
        response = client.get("/csrf/token", headers=auth_headers)
        attributes = [part.strip().lower() for part in set_cookie_header(response).split(";")]

        assert "secure" in attributes

    def test_each_issuance_is_fresh(self, client, auth_headers):
        first = client.get("/csrf/token", headers=auth_headers).json()
        second = client.get("/csrf/token", headers=auth_headers).json()

        assert first["cookie"] != second["cookie"]
        assert first["csrfToken"] != second["csrfToken"]

    def test_any_scheme_accepted(self, client):
        response = client.get("/csrf/token", headers={"Authorization": f"Token {ISSUER_SECRET}"})
        assert response.status_code == 200

    def test_issued_pair_passes_gate(self, client, auth_headers):
        data = client.get("/csrf/token", headers=auth_headers).json()
        response = client.post(
            "/v1/orders",
            headers={"x-csrf-token": data["csrfToken"], "x-csrf-raw": data["cookie"]},
        )

        assert response.status_code == 200


class TestIssuanceRejection:
    """Rejected issuance requests"""

    def test_wrong_secret_forbidden(self, client):
        response = client.get("/csrf/token", headers={"Authorization": "Bearer wrong-secret"})

        assert response.status_code == 403
        assert response.json() == {
            "status": 403,
            "message": "Invalid CSRF token",
            "code": "INVALID_CSRF_TOKEN",
        }
        assert "set-cookie" not in response.headers

    def test_missing_header_unauthenticated(self, client):
        response = client.get("/csrf/token")

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHENTICATED"
        assert response.headers["www-authenticate"] == "Bearer"
        assert "set-cookie" not in response.headers

    @pytest.mark.parametrize("header", ["Bearer", "Bearer ", ISSUER_SECRET])
    def test_malformed_header_unauthenticated(self, client, header):
        response = client.get("/csrf/token", headers={"Authorization": header})

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHENTICATED"

    def test_secret_is_case_sensitive(self, client):
        response = client.get(
            "/csrf/token",
            headers={"Authorization": f"Bearer {ISSUER_SECRET.upper()}"},
        )
        assert response.status_code == 403


class TestExtractCredential:
    """Unit tests for Authorization header parsing"""

    def test_extracts_value(self):
        assert extract_credential("Bearer abc123") == "abc123"

    def test_takes_second_part_only(self):
        assert extract_credential("Bearer abc 123") == "abc"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "  "])
    def test_unusable_header_raises(self, header):
        with pytest.raises(Unauthenticated):
            extract_credential(header)
