from __future__ import annotations

import pytest
import requests

import ppf_workshop.auth.identity as identity_module
from ppf_workshop.auth.identity import SupabaseIdentityProvider, identity_from_user_payload
from ppf_workshop.core.exceptions import AuthenticationError, ServiceUnavailable


class _Response:
    def __init__(self, status_code: int, payload: dict | None = None) -> None:
        self.status_code = status_code
        self._payload = payload

    def json(self) -> dict:
        if self._payload is None:
            raise ValueError("no body")
        return self._payload


USER_PAYLOAD = {
    "id": "9f1c",
    "email": "priya@shop.test",
    "user_metadata": {"name": "Priya", "role": "Technician", "username": "priya"},
}


def _provider(**overrides) -> SupabaseIdentityProvider:
    options = {"base_url": "https://auth.shop.test/", "api_key": "anon-key", "timeout_seconds": 3.0}
    options.update(overrides)
    return SupabaseIdentityProvider(**options)


def test_verify_calls_user_endpoint_and_normalizes_identity(monkeypatch):
    seen = {}

    def _fake_get(url, headers, timeout):
        seen.update(url=url, headers=headers, timeout=timeout)
        return _Response(200, USER_PAYLOAD)

    monkeypatch.setattr(identity_module.requests, "get", _fake_get)

    identity = _provider().verify("tok-123")

    assert seen["url"] == "https://auth.shop.test/auth/v1/user"
    assert seen["headers"] == {"apikey": "anon-key", "Authorization": "Bearer tok-123"}
    assert seen["timeout"] == 3.0
    assert identity.id == "9f1c"
    assert identity.name == "Priya"
    assert identity.role == "Technician"
    assert identity.username == "priya"


def test_identity_falls_back_to_email_when_metadata_missing():
    identity = identity_from_user_payload({"id": "1", "email": "ravi@shop.test"})
    assert identity.name == "ravi@shop.test"
    assert identity.role == "user"
    assert identity.username == "ravi"


@pytest.mark.parametrize("status_code", [401, 403])
def test_rejected_token_is_unauthorized(monkeypatch, status_code):
    monkeypatch.setattr(identity_module.requests, "get", lambda *a, **k: _Response(status_code))
    with pytest.raises(AuthenticationError):
        _provider().verify("expired")


def test_provider_5xx_is_service_unavailable(monkeypatch):
    monkeypatch.setattr(identity_module.requests, "get", lambda *a, **k: _Response(502))
    with pytest.raises(ServiceUnavailable):
        _provider().verify("tok")


def test_provider_timeout_is_service_unavailable(monkeypatch):
    def _timeout(*args, **kwargs):
        raise requests.exceptions.Timeout("slow")

    monkeypatch.setattr(identity_module.requests, "get", _timeout)
    with pytest.raises(ServiceUnavailable):
        _provider().verify("tok")


def test_unconfigured_provider_is_service_unavailable(monkeypatch):
    def _unexpected(*args, **kwargs):
        raise AssertionError("no network call expected")

    monkeypatch.setattr(identity_module.requests, "get", _unexpected)
    with pytest.raises(ServiceUnavailable):
        _provider(base_url=None).verify("tok")


def test_cache_skips_second_call_within_ttl(monkeypatch):
    calls = []

    def _fake_get(*args, **kwargs):
        calls.append(1)
        return _Response(200, USER_PAYLOAD)

    monkeypatch.setattr(identity_module.requests, "get", _fake_get)
    provider = _provider(cache_ttl_seconds=60)

    assert provider.verify("tok").id == provider.verify("tok").id
    assert len(calls) == 1


def test_cache_disabled_by_default(monkeypatch):
    calls = []

    def _fake_get(*args, **kwargs):
        calls.append(1)
        return _Response(200, USER_PAYLOAD)

    monkeypatch.setattr(identity_module.requests, "get", _fake_get)
    provider = _provider()
    provider.verify("tok")
    provider.verify("tok")
    assert len(calls) == 2


def _clock(monkeypatch, start: float = 1000.0) -> list[float]:
    now = [start]
    monkeypatch.setattr(identity_module.time, "monotonic", lambda: now[0])
    return now


def test_cache_drops_expired_entries_on_put(monkeypatch):
    now = _clock(monkeypatch)
    cache = identity_module._TokenCache(ttl_seconds=30, max_entries=10_000)
    identity = identity_from_user_payload(USER_PAYLOAD)
    for index in range(5000):
        cache.put(f"token-{index}", identity)
    assert len(cache) == 5000

    now[0] += 3600
    cache.put("fresh-token", identity)

    assert len(cache) == 1
    assert cache.get("fresh-token") == identity
    assert cache.get("token-0") is None


def test_cache_evicts_oldest_when_full(monkeypatch):
    _clock(monkeypatch)
    cache = identity_module._TokenCache(ttl_seconds=300, max_entries=3)
    identity = identity_from_user_payload(USER_PAYLOAD)
    for token in ("a", "b", "c", "d"):
        cache.put(token, identity)

    assert len(cache) == 3
    assert cache.get("a") is None
    assert cache.get("d") == identity
