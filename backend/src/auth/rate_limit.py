"""Rate limiting for the login endpoint.

Sliding window rate limiting per client plus a lockout after repeated
failures on one account. State lives in Redis so that every API instance
shares it. With REDIS_URL empty the limiter is a no-op; when a Redis call
fails the request is let through and the next call reconnects.
"""

import hashlib
import logging
import os
import time
from typing import Optional

from fastapi import HTTPException, Request, status
from redis import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW", "900"))  # 15 minutes
RATE_LIMIT_MAX_ATTEMPTS = int(os.getenv("RATE_LIMIT_MAX_ATTEMPTS", "5"))
LOCKOUT_DURATION_SECONDS = int(os.getenv("LOCKOUT_DURATION", "1800"))  # 30 minutes
LOCKOUT_THRESHOLD = int(os.getenv("LOCKOUT_THRESHOLD", "10"))

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")


def get_redis_client() -> Optional[Redis]:
    """Redis client for rate limiting, or None when REDIS_URL is empty.

    The client connects lazily, so an unreachable server at startup does not
    switch rate limiting off for the life of the process.
    """
    if not REDIS_URL:
        logger.warning("Login rate limiting disabled, REDIS_URL is empty")
        return None
    return Redis.from_url(
        REDIS_URL,
        decode_responses=True,
        socket_connect_timeout=1,
        socket_timeout=1,
    )


def _get_client_identifier(request: Request) -> str:
    """Hash of client IP (proxy aware) and User-Agent."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        ip = forwarded.split(",")[0].strip()
    elif request.client:
        ip = request.client.host
    else:
        ip = "unknown"

    fingerprint = f"{ip}:{request.headers.get('User-Agent', '')}"
    return hashlib.sha256(fingerprint.encode()).hexdigest()[:32]


def _get_rate_limit_key(identifier: str, endpoint: str) -> str:
    return f"rate_limit:{endpoint}:{identifier}"


def _get_lockout_key(identifier: str) -> str:
    return f"lockout:{identifier}"


def _get_failed_attempts_key(email: str) -> str:
    return f"failed_attempts:{hashlib.sha256(email.lower().encode()).hexdigest()[:32]}"


def _redis_unavailable(operation: str, error: RedisError) -> None:
    logger.warning(f"Login rate limiting skipped {operation}, Redis unavailable: {error}")


class RateLimiter:
    """Rate limiter using Redis sliding window algorithm.

    Every Redis call fails open: on RedisError the request counts as not
    limited and not locked out.
    """

    def __init__(self, redis: Optional[Redis] = None):
        self.redis = redis if redis is not None else get_redis_client()

    def is_rate_limited(self, request: Request, endpoint: str = "auth") -> bool:
        if not self.redis:
            return False

        key = _get_rate_limit_key(_get_client_identifier(request), endpoint)
        window_start = int(time.time()) - RATE_LIMIT_WINDOW_SECONDS

        try:
            self.redis.zremrangebyscore(key, 0, window_start)
            return self.redis.zcard(key) >= RATE_LIMIT_MAX_ATTEMPTS
        except RedisError as e:
            _redis_unavailable("rate limit check", e)
            return False

    def record_attempt(self, request: Request, endpoint: str = "auth") -> int:
        """Record an attempt and return the count in the current window."""
        if not self.redis:
            return 0

        key = _get_rate_limit_key(_get_client_identifier(request), endpoint)
        now = time.time()

        try:
            self.redis.zadd(key, {str(now): now})
            self.redis.expire(key, RATE_LIMIT_WINDOW_SECONDS)
            return self.redis.zcard(key)
        except RedisError as e:
            _redis_unavailable("attempt recording", e)
            return 0

    def is_locked_out(self, request: Request) -> bool:
        if not self.redis:
            return False
        try:
            return self.redis.exists(_get_lockout_key(_get_client_identifier(request))) > 0
        except RedisError as e:
            _redis_unavailable("lockout check", e)
            return False

    def get_lockout_remaining(self, request: Request) -> int:
        if not self.redis:
            return 0
        try:
            ttl = self.redis.ttl(_get_lockout_key(_get_client_identifier(request)))
        except RedisError as e:
            _redis_unavailable("lockout lookup", e)
            return 0
        return max(0, ttl)

    def record_failed_login(self, email: str, request: Request) -> bool:
        """Record a failed login for an account.

        Returns:
            True if the client is now locked out
        """
        if not self.redis:
            return False

        account_key = _get_failed_attempts_key(email)
        try:
            attempts = self.redis.incr(account_key)
            self.redis.expire(account_key, RATE_LIMIT_WINDOW_SECONDS)

            if attempts >= LOCKOUT_THRESHOLD:
                lockout_key = _get_lockout_key(_get_client_identifier(request))
                self.redis.setex(lockout_key, LOCKOUT_DURATION_SECONDS, "1")
                logger.warning("Login lockout triggered after repeated failures")
                return True
        except RedisError as e:
            _redis_unavailable("failed login recording", e)

        return False

    def clear_failed_attempts(self, email: str) -> None:
        if not self.redis:
            return
        try:
            self.redis.delete(_get_failed_attempts_key(email))
        except RedisError as e:
            _redis_unavailable("failed attempt reset", e)


# Global rate limiter instance
rate_limiter = RateLimiter()


def check_rate_limit(request: Request) -> None:
    """Check rate limit and raise exception if exceeded.

    Use as a dependency in FastAPI endpoints:

        @router.post("/login")
        async def login(request: Request, _: None = Depends(check_rate_limit)):
            ...
    """
    if rate_limiter.is_locked_out(request):
        remaining = rate_limiter.get_lockout_remaining(request)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Too many failed attempts. Account locked for {remaining} seconds.",
            headers={"Retry-After": str(remaining)}
        )

    if rate_limiter.is_rate_limited(request, "auth"):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts. Please wait before trying again.",
            headers={"Retry-After": str(RATE_LIMIT_WINDOW_SECONDS)}
        )

    rate_limiter.record_attempt(request, "auth")
