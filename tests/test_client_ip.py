from starlette.requests import Request

from portfolio_api.api.deps import client_key, get_real_client_ip
from portfolio_api.core.config import settings


def _build_request(client_ip: str, headers: dict[str, str] | None = None) -> Request:
    raw_headers = []
    for key, value in (headers or {}).items():
        raw_headers.append((key.lower().encode("latin-1"), value.encode("latin-1")))
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": "GET",
        "scheme": "https",
        "path": "/api/v1/projects",
        "raw_path": b"/api/v1/projects",
        "query_string": b"",
        "headers": raw_headers,
        "client": (client_ip, 12345),
        "server": ("testserver", 443),
    }
    return Request(scope)


def test_x_forwarded_for_from_trusted_proxy():
    old_trusted_proxy_ips = settings.TRUSTED_PROXY_IPS
    settings.TRUSTED_PROXY_IPS = "10.0.0.5"
    try:
        request = _build_request(
            "10.0.0.5",
            headers={"X-Forwarded-For": "203.0.113.10, 10.0.0.5"},
        )
        client_ip, chain = get_real_client_ip(request)
        assert client_ip == "203.0.113.10"
        assert chain == ["203.0.113.10", "10.0.0.5"]
    finally:
        settings.TRUSTED_PROXY_IPS = old_trusted_proxy_ips


def test_x_forwarded_for_from_untrusted_source_is_ignored():
    request = _build_request(
        "198.51.100.20",
        headers={"X-Forwarded-For": "203.0.113.20"},
    )
    client_ip, chain = get_real_client_ip(request)
    assert client_ip == "198.51.100.20"
    assert chain == []


def test_invalid_forwarded_entries_are_skipped():
    request = _build_request(
        "127.0.0.1",
        headers={"X-Forwarded-For": "unknown, 203.0.113.30"},
    )
    assert get_real_client_ip(request)[0] == "203.0.113.30"


def test_rfc7239_forwarded_header():
    request = _build_request(
        "::1",
        headers={"Forwarded": 'for="[2001:db8::17]:4711";proto=https, for=10.0.0.9'},
    )
    client_ip, chain = get_real_client_ip(request)
    assert client_ip == "2001:db8::17"
    assert chain == ["2001:db8::17", "10.0.0.9"]


def test_proxy_headers_disabled():
    old_trust_proxy_headers = settings.TRUST_PROXY_HEADERS
    settings.TRUST_PROXY_HEADERS = False
    try:
        request = _build_request("127.0.0.1", headers={"X-Forwarded-For": "203.0.113.40"})
        assert get_real_client_ip(request) == ("127.0.0.1", [])
        assert client_key(request) == "127.0.0.1"
    finally:
        settings.TRUST_PROXY_HEADERS = old_trust_proxy_headers
