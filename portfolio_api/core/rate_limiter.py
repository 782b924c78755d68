import math
import time
from dataclasses import dataclass
from typing import Dict

from limits import parse
from limits.storage import storage_from_string
from limits.strategies import FixedWindowRateLimiter

from portfolio_api.core.config import settings


@dataclass(frozen=True)
class RateLimitState:
    allowed: bool
    limit: int
    remaining: int
    reset_after: int

    def headers(self) -> Dict[str, str]:
        headers = {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.reset_after),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.reset_after)
        return headers


class FixedWindowLimiter:
    """Counts requests per client key in fixed windows.

    `hit` consumes one unit and reports the resulting state, `peek` reports
    whether a hit would still be accepted without consuming anything and
    `refund` hands a unit back. The login endpoint hits before checking the
    password and refunds on success, so only failed attempts stay counted
    and concurrent attempts cannot all slip past the limit.
    """

    def __init__(self, name: str, rate: str, message: str, storage_uri: str = "memory://"):
        self.name = name
        self.message = message
        self.item = parse(rate)
        self.storage = storage_from_string(storage_uri)
        self._strategy = FixedWindowRateLimiter(self.storage)

    def _state(self, key: str, allowed: bool) -> RateLimitState:
        reset_time, remaining = self._strategy.get_window_stats(self.item, self.name, key)
        return RateLimitState(
            allowed=allowed,
            limit=self.item.amount,
            remaining=max(0, remaining),
            reset_after=max(0, math.ceil(reset_time - time.time())),
        )

    def hit(self, key: str) -> RateLimitState:
        allowed = self._strategy.hit(self.item, self.name, key)
        return self._state(key, allowed)

    def peek(self, key: str) -> RateLimitState:
        allowed = self._strategy.test(self.item, self.name, key)
        return self._state(key, allowed)

    def refund(self, key: str) -> None:
        """Give back one unit taken by `hit` in the current window."""
        window_key = self.item.key_for(self.name, key)
        if self.storage.get(window_key) > 0:
            self.storage.incr(window_key, self.item.get_expiry(), amount=-1)

    def reset(self) -> None:
        self.storage.reset()


api_limiter = FixedWindowLimiter(
    "api",
    settings.API_RATE_LIMIT,
    "Too many requests from this IP, please try again later",
    settings.RATE_LIMIT_STORAGE_URI,
)

login_limiter = FixedWindowLimiter(
    "login",
    settings.LOGIN_RATE_LIMIT,
    "Too many login attempts, please try again later",
    settings.RATE_LIMIT_STORAGE_URI,
)

contact_limiter = FixedWindowLimiter(
    "contact",
    settings.CONTACT_RATE_LIMIT,
    "Too many messages sent from this IP, please try again after 15 minutes",
    settings.RATE_LIMIT_STORAGE_URI,
)
