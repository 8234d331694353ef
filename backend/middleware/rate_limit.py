"""
In-memory per-IP rate limiting for the /api routes.

A single process keeps its own counts. Behind several workers each one
enforces the limit separately.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import UTC, datetime, timedelta

from fastapi import HTTPException, Request, status

from backend.config import settings

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


class RateLimiter:
    """
    Simple in-memory rate limiter.

    Tracks request counts per key (client IP) within time windows.
    """

    def __init__(self):
        # key -> list of (timestamp, count) tuples
        self._requests: dict[str, list[tuple[datetime, int]]] = defaultdict(list)

    def check_rate_limit(self, key: str, max_requests: int, window_minutes: int = 15) -> bool:
        """
        Check if a key has exceeded the rate limit.

        Args:
            key: Identifier to rate limit (IP address)
            max_requests: Maximum requests allowed in the window
            window_minutes: Time window in minutes (default 15)

        Returns:
            True if under the limit, False if limit exceeded
        """
        now = datetime.now(UTC)
        cutoff = now - timedelta(minutes=window_minutes)

        # Clean up old entries
        self._requests[key] = [(ts, count) for ts, count in self._requests[key] if ts > cutoff]

        total = sum(count for _, count in self._requests[key])
        if total >= max_requests:
            return False

        self._requests[key].append((now, 1))
        return True

    def cleanup_old_entries(self, max_age_minutes: int = 30):
        """Drop entries older than max_age_minutes and forget idle keys."""
        cutoff = datetime.now(UTC) - timedelta(minutes=max_age_minutes)
        for key in list(self._requests.keys()):
            self._requests[key] = [(ts, count) for ts, count in self._requests[key] if ts > cutoff]
            if not self._requests[key]:
                del self._requests[key]

    def reset(self) -> None:
        self._requests.clear()


# Global rate limiter instance
rate_limiter = RateLimiter()


async def enforce_api_rate_limit(request: Request) -> None:
    """Router dependency: 429 once an IP exceeds the /api window."""
    client_ip = request.client.host if request.client else "unknown"
    if not rate_limiter.check_rate_limit(
        f"ip:{client_ip}",
        max_requests=settings.API_RATE_LIMIT_PER_WINDOW,
        window_minutes=settings.API_RATE_LIMIT_WINDOW_MINUTES,
    ):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=RATE_LIMIT_MESSAGE,
            headers={"Retry-After": str(settings.API_RATE_LIMIT_WINDOW_MINUTES * 60)},
        )
