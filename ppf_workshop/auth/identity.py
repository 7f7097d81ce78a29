"""Bearer-token verification against the external identity provider."""

from __future__ import annotations

import hashlib
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Protocol

import requests

from ppf_workshop.core.config import Config, get_config
from ppf_workshop.core.exceptions import AuthenticationError, ServiceUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    id: str
    email: str
    name: str
    role: str
    username: str

    def display_name(self) -> str:
        return self.name or self.username or self.email


class IdentityProvider(Protocol):
    def verify(self, token: str) -> Identity: ...


def identity_from_user_payload(payload: dict[str, Any]) -> Identity:
    """Normalize a provider user object into an :class:`Identity`."""
    try:
        user_id = str(payload["id"])
    except (KeyError, TypeError) as exc:
        raise AuthenticationError("Identity provider returned no user id.") from exc

    email = str(payload.get("email") or "")
    metadata = payload.get("user_metadata") or {}
    local_part = email.split("@", 1)[0] if email else ""
    return Identity(
        id=user_id,
        email=email,
        name=str(metadata.get("name") or email or user_id),
        role=str(metadata.get("role") or "user"),
        username=str(metadata.get("username") or local_part or user_id),
    )


class _TokenCache:
    """Verified-token cache keyed by a SHA-256 digest of the token."""

    def __init__(self, ttl_seconds: int, max_entries: int = 1024) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._entries: OrderedDict[str, tuple[float, Identity]] = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def _key(token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def get(self, token: str) -> Identity | None:
        key = self._key(token)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, identity = entry
            if expires_at <= time.monotonic():
                del self._entries[key]
                return None
            return identity

    def _evict(self, now: float) -> None:
        # Insertion order matches expiry order since the TTL is fixed.
        while self._entries:
            key, (expires_at, _) = next(iter(self._entries.items()))
            if expires_at > now and len(self._entries) < self.max_entries:
                break
            del self._entries[key]

    def put(self, token: str, identity: Identity) -> None:
        key = self._key(token)
        now = time.monotonic()
        with self._lock:
            self._entries.pop(key, None)
            self._evict(now)
            self._entries[key] = (now + self.ttl_seconds, identity)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class SupabaseIdentityProvider:
    """Resolve bearer tokens through ``GET {SUPABASE_URL}/auth/v1/user``.

    A 401/403 from the provider means the token is bad. Anything else that
    keeps us from getting an answer (no configuration, network failure,
    timeout, 5xx) is reported as the provider being unavailable. There are no
    retries.
    """

    def __init__(
        self,
        base_url: str | None,
        api_key: str | None,
        timeout_seconds: float = 5.0,
        cache_ttl_seconds: int = 0,
    ) -> None:
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key or ""
        self.timeout_seconds = timeout_seconds
        self.cache = _TokenCache(cache_ttl_seconds) if cache_ttl_seconds > 0 else None

    @classmethod
    def from_config(cls, config: Config | None = None) -> "SupabaseIdentityProvider":
        cfg = config or get_config()
        return cls(
            base_url=cfg.SUPABASE_URL,
            api_key=cfg.SUPABASE_ANON_KEY,
            timeout_seconds=cfg.AUTH_TIMEOUT_SECONDS,
            cache_ttl_seconds=cfg.AUTH_CACHE_TTL_SECONDS,
        )

    @property
    def configured(self) -> bool:
        return bool(self.base_url and self.api_key)

    def verify(self, token: str) -> Identity:
        if not token:
            raise AuthenticationError("Bearer token is empty.")
        if not self.configured:
            logger.error("auth.provider.unconfigured", extra={"event": "auth.provider.unconfigured"})
            raise ServiceUnavailable("Identity provider is not configured.")

        if self.cache is not None:
            cached = self.cache.get(token)
            if cached is not None:
                return cached

        try:
            response = requests.get(
                f"{self.base_url}/auth/v1/user",
                headers={"apikey": self.api_key, "Authorization": f"Bearer {token}"},
                timeout=self.timeout_seconds,
            )
        except requests.exceptions.RequestException as exc:
            logger.error(
                "auth.provider.unreachable",
                extra={"event": "auth.provider.unreachable", "error": str(exc)},
            )
            raise ServiceUnavailable("Identity provider is unreachable.") from exc

        if response.status_code in {401, 403}:
            logger.info(
                "auth.token.rejected",
                extra={"event": "auth.token.rejected", "status_code": response.status_code},
            )
            raise AuthenticationError("Invalid or expired token.")
        if response.status_code >= 500:
            logger.error(
                "auth.provider.failed",
                extra={"event": "auth.provider.failed", "status_code": response.status_code},
            )
            raise ServiceUnavailable("Identity provider failed to verify the token.")
        if response.status_code != 200:
            raise AuthenticationError("Token verification was refused.")

        try:
            payload = response.json()
        except ValueError as exc:
            raise ServiceUnavailable("Identity provider returned an unreadable response.") from exc

        identity = identity_from_user_payload(payload)
        if self.cache is not None:
            self.cache.put(token, identity)
        return identity
