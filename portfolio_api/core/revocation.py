"""Revoked session tokens.

Two backends share one interface: a process-local store for single-instance
deployments and tests, and a Redis store whose keys expire together with the
tokens they block, so revocations survive restarts and are shared between
workers.
"""

import hashlib
import math
import threading
import time
from datetime import datetime
from typing import Dict, Optional

import redis
import structlog

from portfolio_api.core.config import settings

logger = structlog.get_logger()


# The signature check compares whole seconds and still accepts a token
# during the second named by its `exp` claim.
EXPIRY_GRACE_SECONDS = 1


def _expiry_timestamp(expires_at: Optional[datetime]) -> float:
    if expires_at is None:
        return time.time() + settings.ACCESS_TOKEN_EXPIRE_HOURS * 3600
    return expires_at.timestamp() + EXPIRY_GRACE_SECONDS


class MemoryRevocationStore:
    def __init__(self):
        self._revoked: Dict[str, float] = {}  # token -> expiry timestamp
        self._lock = threading.Lock()

    def revoke(self, token: str, expires_at: Optional[datetime] = None) -> None:
        with self._lock:
            self._revoked[token] = _expiry_timestamp(expires_at)
            self._cleanup()

    def is_revoked(self, token: str) -> bool:
        with self._lock:
            return token in self._revoked

    def clear(self) -> None:
        with self._lock:
            self._revoked.clear()

    def __len__(self) -> int:
        return len(self._revoked)

    def _cleanup(self) -> None:
        """Drop entries for tokens that would already fail on expiry."""
        now = time.time()
        expired = [token for token, exp in self._revoked.items() if exp < now]
        for token in expired:
            del self._revoked[token]


class RedisRevocationStore:
    key_prefix = "revoked_token:"

    def __init__(self, client: "redis.Redis"):
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisRevocationStore":
        return cls(redis.Redis.from_url(url))

    def _key(self, token: str) -> str:
        return self.key_prefix + hashlib.sha256(token.encode("utf-8")).hexdigest()

    def revoke(self, token: str, expires_at: Optional[datetime] = None) -> None:
        ttl = math.ceil(_expiry_timestamp(expires_at) - time.time())
        if ttl <= 0:
            # Already expired: the signature check rejects it on its own.
            return
        self._client.set(self._key(token), 1, ex=ttl)

    def is_revoked(self, token: str) -> bool:
        return bool(self._client.exists(self._key(token)))

    def clear(self) -> None:
        for key in self._client.scan_iter(match=f"{self.key_prefix}*"):
            self._client.delete(key)


def build_revocation_store(url: str):
    if url.startswith(("redis://", "rediss://", "unix://")):
        logger.info("revocation_store_configured", backend="redis")
        return RedisRevocationStore.from_url(url)
    if url != "memory://":
        raise ValueError(f"Unsupported REVOCATION_STORE_URL: {url}")
    return MemoryRevocationStore()


revocation_store = build_revocation_store(settings.REVOCATION_STORE_URL)
