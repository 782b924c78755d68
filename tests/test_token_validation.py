from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from starlette.requests import Request

from portfolio_api.api.deps import (
    Authenticated,
    Rejected,
    authenticate_request,
    extract_credential,
    validate_credential,
    Credential,
)
from portfolio_api.core.config import settings
from portfolio_api.core.revocation import MemoryRevocationStore
from portfolio_api.core.security import issue_token

API_KEY = "test-admin-api-key-0123456789abcdefghijkl"


def _build_request(headers: dict[str, str] | None = None) -> Request:
    raw_headers = []
    for key, value in (headers or {}).items():
        raw_headers.append((key.lower().encode("latin-1"), value.encode("latin-1")))
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": "/api/v1/auth/status",
        "raw_path": b"/api/v1/auth/status",
        "query_string": b"",
        "headers": raw_headers,
        "client": ("127.0.0.1", 12345),
        "server": ("testserver", 80),
    }
    return Request(scope)


def test_issued_token_carries_admin_claims():
    issued = issue_token()
    payload = jwt.decode(issued.token, settings.JWT_SECRET, algorithms=["HS256"])

    assert payload["sub"] == settings.ADMIN_USERNAME
    assert payload["role"] == "admin"
    assert payload["exp"] - payload["iat"] == 24 * 3600
    assert payload["jti"]
    assert int(issued.expires_at.timestamp()) == payload["exp"]


def test_bearer_header_wins_over_cookie_and_api_key():
    request = _build_request({
        "Authorization": "Bearer header-token",
        "Cookie": "auth_token=cookie-token",
        "X-API-Key": API_KEY,
    })
    assert extract_credential(request) == Credential("bearer", "header-token")


def test_cookie_wins_over_api_key():
    request = _build_request({"Cookie": "auth_token=cookie-token", "X-API-Key": API_KEY})
    assert extract_credential(request) == Credential("cookie", "cookie-token")


def test_non_bearer_authorization_is_ignored():
    request = _build_request({"Authorization": "Basic abc", "X-API-Key": API_KEY})
    assert extract_credential(request) == Credential("api_key", API_KEY)


def test_no_credential_is_rejected():
    outcome = authenticate_request(_build_request())
    assert isinstance(outcome, Rejected)
    assert outcome.code == "unauthorized"


def test_valid_token_is_authenticated():
    issued = issue_token()
    outcome = validate_credential(Credential("bearer", issued.token), MemoryRevocationStore())

    assert isinstance(outcome, Authenticated)
    assert outcome.identity.role == "admin"
    assert outcome.identity.via == "bearer"
    assert outcome.identity.expires_at == issued.expires_at.replace(microsecond=0)


def test_revocation_is_checked_before_signature():
    store = MemoryRevocationStore()
    store.revoke("not-even-a-jwt")

    outcome = validate_credential(Credential("bearer", "not-even-a-jwt"), store)
    assert outcome == Rejected("Token has been revoked", "token_revoked")


@pytest.mark.parametrize(
    "token",
    [
        "garbage",
        jwt.encode({"sub": "admin", "role": "admin"}, "some-other-secret-of-sufficient-length", algorithm="HS256"),
    ],
)
def test_malformed_or_foreign_tokens_are_invalid(token: str):
    outcome = validate_credential(Credential("bearer", token), MemoryRevocationStore())
    assert isinstance(outcome, Rejected)
    assert outcome.code == "token_invalid"
    assert outcome.message == "Invalid or expired token"


def test_token_without_admin_role_is_invalid():
    token = jwt.encode({"sub": "admin", "role": "viewer"}, settings.JWT_SECRET, algorithm="HS256")
    outcome = validate_credential(Credential("bearer", token), MemoryRevocationStore())
    assert isinstance(outcome, Rejected)
    assert outcome.code == "token_invalid"


def test_expired_token_is_rejected(client: TestClient):
    expired = issue_token(expires_delta=timedelta(seconds=-5))

    response = client.get("/api/v1/auth/status", headers={"Authorization": f"Bearer {expired.token}"})
    assert response.status_code == 401
    body = response.json()
    assert body["message"] == "Invalid or expired token"
    assert body["code"] == "token_expired"


def test_api_key_grants_admin_access(client: TestClient):
    response = client.get("/api/v1/auth/status", headers={"X-API-Key": API_KEY})
    assert response.status_code == 200
    assert response.json()["via"] == "api_key"


def test_wrong_api_key_is_rejected(client: TestClient):
    response = client.get("/api/v1/auth/status", headers={"X-API-Key": "x" * 40})
    assert response.status_code == 401
    assert response.json()["message"] == "Unauthorized. Please provide a valid token or API key."
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_invalid_bearer_does_not_fall_back_to_api_key(client: TestClient):
    response = client.get(
        "/api/v1/auth/status",
        headers={"Authorization": "Bearer garbage", "X-API-Key": API_KEY},
    )
    assert response.status_code == 401
    assert response.json()["code"] == "token_invalid"


def test_protected_route_without_credentials(client: TestClient):
    response = client.post("/api/v1/projects", json={"title": "x"})
    assert response.status_code == 401
    assert response.json()["success"] is False
