### Description ###
# Warehouse API - Clean J Shipping Backend
# - Rate Limiting Middleware -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Rate Limiting Middleware

Fixed-window request quotas, one named tier per class of endpoint:

    general          100 requests / 15 min per IP
    auth              10 requests / 15 min per IP (successful logins refunded)
    api-key         1000 requests / 1 min per API key (IP when no key)
    upload            50 requests / 1 hour per IP
    password-reset     3 requests / 1 hour per IP
    strict             5 requests / 15 min per IP

Windows and limits can be overridden in the `rate_limits` section of
config.yaml. Counters live in-process by default; set
WAREHOUSE_RATE_LIMIT_STORAGE_URI to a limits storage URI (redis://...) to
share them between instances.
"""

import math
import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, Mapping, Optional, Protocol

from fastapi import Depends, Request, Response
from fastapi.responses import JSONResponse
from limits.storage import storage_from_string
from slowapi.util import get_remote_address

from warehouse_api.config import get_api_settings
from warehouse_api.config_schema import RateLimitTierConfig
from warehouse_api.models import digest_key
from warehouse_api.schemas.responses import ErrorResponse
from warehouse_api.utils.custom_logger import setup_logger

logger = setup_logger(__name__)


def get_ip_identifier(request: Request) -> str:
    """Rate limit identifier from the client address"""
    return f"ip:{get_remote_address(request)}"


def get_api_key_identifier(request: Request) -> str:
    """
    Rate limit identifier from the presented API key.
    Falls back to IP address if no key present.

    Only a digest of the key is used so raw keys never reach the counter store.
    """
    settings = get_api_settings()
    api_key = (
        request.headers.get(settings.courier_key_header)
        or request.headers.get(settings.api_key_header)
        or ""
    ).strip()

    if not api_key:
        scheme, _, token = request.headers.get("Authorization", "").partition(" ")
        if scheme.lower() == "bearer":
            api_key = token.strip()

    if api_key:
        return f"key:{digest_key(api_key)[:16]}"
    return get_ip_identifier(request)


@dataclass(frozen=True)
class RateLimitTier:
    """Quota for one class of endpoint"""

    name: str
    window_seconds: int
    limit: int
    key_func: Callable[[Request], str] = get_ip_identifier
    message: str = "Too many requests from this IP, please try again later."


DEFAULT_TIERS: Dict[str, RateLimitTier] = {
    tier.name: tier
    for tier in (
        RateLimitTier("general", 15 * 60, 100),
        RateLimitTier(
            "auth",
            15 * 60,
            10,
            message="Too many login attempts from this IP, please try again after 15 minutes.",
        ),
        RateLimitTier(
            "api-key",
            60,
            1000,
            key_func=get_api_key_identifier,
            message="API rate limit exceeded. Please slow down your requests.",
        ),
        RateLimitTier("upload", 60 * 60, 50, message="Too many file uploads, please try again later."),
        RateLimitTier(
            "password-reset",
            60 * 60,
            3,
            message="Too many password reset attempts, please try again after 1 hour.",
        ),
        RateLimitTier("strict", 15 * 60, 5, message="Too many requests, please try again later."),
    )
}


class RateLimitExceededError(Exception):
    """Request is over its tier quota"""

    def __init__(self, tier: RateLimitTier, retry_after: int):
        self.tier = tier
        self.retry_after = retry_after
        super().__init__(tier.message)


@dataclass(frozen=True)
class RateLimitStatus:
    """Counter state after a counted request"""

    tier: str
    identity: str
    count: int
    limit: int
    reset_in: int


class RateLimiterStore(Protocol):
    """Counter storage shared by every tier"""

    def increment(self, key: str, window_seconds: int) -> tuple[int, float]:
        """Count a hit; return (count in current window, seconds until reset)"""
        ...

    def decrement(self, key: str) -> None:
        ...

    def reset(self) -> None:
        ...


@dataclass
class _Window:
    count: int
    resets_at: float


class MemoryRateLimiterStore:
    """
    In-process fixed-window counters.

    The clock is injectable so tests can move across window boundaries.
    Expired windows are swept once the table grows past max_keys.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, max_keys: int = 10_000):
        self._clock = clock
        self._max_keys = max_keys
        self._windows: Dict[str, _Window] = {}

    def increment(self, key: str, window_seconds: int) -> tuple[int, float]:
        now = self._clock()
        window = self._windows.get(key)
        if window is None or now >= window.resets_at:
            if len(self._windows) >= self._max_keys:
                self._sweep(now)
            window = _Window(count=0, resets_at=now + window_seconds)
            self._windows[key] = window
        window.count += 1
        return window.count, window.resets_at - now

    def decrement(self, key: str) -> None:
        window = self._windows.get(key)
        if window is not None and window.count > 0 and self._clock() < window.resets_at:
            window.count -= 1

    def reset(self) -> None:
        self._windows.clear()

    def _sweep(self, now: float) -> None:
        for key in [k for k, w in self._windows.items() if now >= w.resets_at]:
            del self._windows[key]


class LimitsRateLimiterStore:
    """Counters in any `limits` storage backend (memory://, redis://, memcached://)"""

    def __init__(self, uri: str):
        self.uri = uri
        self._storage = storage_from_string(uri)

    def increment(self, key: str, window_seconds: int) -> tuple[int, float]:
        count = self._storage.incr(key, window_seconds, amount=1)
        return count, self._storage.get_expiry(key) - time.time()

    def decrement(self, key: str) -> None:
        remaining = self._storage.get_expiry(key) - time.time()
        if remaining <= 0 or self._storage.get(key) <= 0:
            return
        # If the window lapsed meanwhile, limits recreates the key at -1 with this expiry
        if self._storage.incr(key, math.ceil(remaining), amount=-1) < 0:
            self._storage.incr(key, math.ceil(remaining), amount=1)

    def reset(self) -> None:
        self._storage.reset()


class RateLimiter:
    """Applies named tiers against a counter store"""

    def __init__(self, store: RateLimiterStore, tiers: Optional[Mapping[str, RateLimitTier]] = None):
        self.store = store
        self.tiers = dict(tiers or DEFAULT_TIERS)

    def tier(self, name: str) -> RateLimitTier:
        try:
            return self.tiers[name]
        except KeyError:
            raise KeyError(f"Unknown rate limit tier '{name}'") from None

    def identity_for(self, tier_name: str, request: Request) -> str:
        return self.tier(tier_name).key_func(request)

    def hit(self, tier_name: str, identity: str) -> RateLimitStatus:
        """
        Count one request against a tier.

        Raises:
            RateLimitExceededError: Count went over the tier limit
        """
        tier = self.tier(tier_name)
        count, reset_in = self.store.increment(f"{tier.name}:{identity}", tier.window_seconds)
        retry_after = max(1, math.ceil(reset_in))

        if count > tier.limit:
            logger.warning(f"Rate limit '{tier.name}' exceeded for {identity} ({count}/{tier.limit})")
            raise RateLimitExceededError(tier, retry_after)

        return RateLimitStatus(
            tier=tier.name, identity=identity, count=count, limit=tier.limit, reset_in=retry_after
        )

    def check(self, tier_name: str, request: Request) -> RateLimitStatus:
        return self.hit(tier_name, self.identity_for(tier_name, request))

    def check_rejected(self, tier_name: str, request: Request) -> RateLimitStatus:
        """Count a request refused before admission, keyed by client IP"""
        return self.hit(tier_name, get_ip_identifier(request))

    def refund(self, tier_name: str, identity: str) -> None:
        """Give back one request, e.g. after a successful login"""
        self.store.decrement(f"{self.tier(tier_name).name}:{identity}")

    def reset(self) -> None:
        self.store.reset()


def apply_overrides(
    tiers: Mapping[str, RateLimitTier], overrides: Mapping[str, RateLimitTierConfig]
) -> Dict[str, RateLimitTier]:
    """Merge config.yaml window/limit overrides into the tier table"""
    merged = dict(tiers)
    for name, override in overrides.items():
        if name not in merged:
            logger.warning(f"Ignoring rate limit override for unknown tier '{name}'")
            continue
        changes = {k: v for k, v in override.model_dump().items() if v is not None}
        if changes:
            merged[name] = replace(merged[name], **changes)
    return merged


def build_rate_limiter(
    storage_uri: str = "memory://",
    overrides: Optional[Mapping[str, RateLimitTierConfig]] = None,
) -> RateLimiter:
    """Build the limiter used by the application"""
    if storage_uri == "memory://":
        store: RateLimiterStore = MemoryRateLimiterStore()
    else:
        store = LimitsRateLimiterStore(storage_uri)
    return RateLimiter(store, apply_overrides(DEFAULT_TIERS, overrides or {}))


def get_rate_limiter(request: Request) -> RateLimiter:
    """Dependency: the limiter built at startup"""
    return request.app.state.rate_limiter


def rate_limit(tier_name: str):
    """
    Dependency factory for routes that are limited without authentication.

    Usage:
        @router.post("/login")
        async def login(limit: RateLimitStatus = Depends(rate_limit("auth"))):
            ...
    """

    async def check_rate_limit(
        request: Request, limiter: RateLimiter = Depends(get_rate_limiter)
    ) -> RateLimitStatus:
        return limiter.check(tier_name, request)

    return check_rate_limit


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceededError) -> Response:
    """Custom handler for rate limit exceeded errors"""
    return JSONResponse(
        status_code=429,
        content=ErrorResponse(
            error=exc.tier.message,
            code="rate_limited",
            request_id=getattr(request.state, "request_id", None),
            retry_after=exc.retry_after,
        ).model_dump(by_alias=True, exclude_none=True),
        headers={"Retry-After": str(exc.retry_after)},
    )
