from starlette.requests import Request

from storefront.core.config import settings
from storefront.core.i18n import resolve_locale, translate
from storefront.core.rate_limit import get_client_ip


def test_health_and_root(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert "version" in client.get("/").json()


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    generated = client.get("/health")
    assert generated.headers["X-Request-ID"]


def test_error_envelope_carries_request_id(client):
    response = client.get("/api/v1/discount-types/999", headers={"X-Request-ID": "req-404"})
    assert response.status_code == 404
    assert response.json()["request_id"] == "req-404"


def test_translate_falls_back_to_default_locale():
    assert translate("passwords.code_is_expire", "en") == "The password reset code has expired"
    assert translate("passwords.code_is_expire", "fr") == "El código de restablecimiento expiró"
    assert translate("passwords.unknown_key", "en") == "passwords.unknown_key"
    assert resolve_locale() == "es"


def _request_from(host: str, headers: dict) -> Request:
    return Request({
        "type": "http",
        "method": "POST",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": (host, 50000),
    })


def test_client_ip_ignores_forwarded_headers_from_untrusted_peer(monkeypatch):
    monkeypatch.setattr(settings, "trusted_proxies", [])
    request = _request_from("198.51.100.9", {"X-Forwarded-For": "10.0.0.1", "X-Real-IP": "10.0.0.2"})
    assert get_client_ip(request) == "198.51.100.9"


def test_client_ip_uses_forwarded_headers_behind_trusted_proxy(monkeypatch):
    monkeypatch.setattr(settings, "trusted_proxies", ["10.0.0.254"])
    forwarded = _request_from("10.0.0.254", {"X-Forwarded-For": "203.0.113.7, 10.0.0.254"})
    assert get_client_ip(forwarded) == "203.0.113.7"

    real_ip = _request_from("10.0.0.254", {"X-Real-IP": "203.0.113.8"})
    assert get_client_ip(real_ip) == "203.0.113.8"

    bare = _request_from("10.0.0.254", {})
    assert get_client_ip(bare) == "10.0.0.254"
