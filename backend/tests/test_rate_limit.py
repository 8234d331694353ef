"""Tests for the in-memory /api rate limiter."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from backend.config import settings
from backend.middleware.rate_limit import RATE_LIMIT_MESSAGE, RateLimiter


class TestRateLimiter:
    def test_allows_up_to_max(self):
        limiter = RateLimiter()
        assert all(limiter.check_rate_limit("ip:1", max_requests=3) for _ in range(3))
        assert limiter.check_rate_limit("ip:1", max_requests=3) is False

    def test_keys_are_independent(self):
        limiter = RateLimiter()
        assert limiter.check_rate_limit("ip:1", max_requests=1)
        assert limiter.check_rate_limit("ip:2", max_requests=1)

    def test_window_expiry(self):
        limiter = RateLimiter()
        limiter.check_rate_limit("ip:1", max_requests=1)
        old = datetime.now(UTC) - timedelta(minutes=20)
        limiter._requests["ip:1"] = [(old, 1)]
        assert limiter.check_rate_limit("ip:1", max_requests=1, window_minutes=15)

    def test_cleanup_and_reset(self):
        limiter = RateLimiter()
        limiter._requests["ip:old"] = [(datetime.now(UTC) - timedelta(hours=1), 1)]
        limiter.check_rate_limit("ip:new", max_requests=5)

        limiter.cleanup_old_entries(max_age_minutes=30)
        assert "ip:old" not in limiter._requests
        assert "ip:new" in limiter._requests

        limiter.reset()
        assert not limiter._requests


@pytest.mark.asyncio
class TestApiRateLimit:
    async def test_429_after_limit(self, async_client, monkeypatch):
        monkeypatch.setattr(settings, "API_RATE_LIMIT_PER_WINDOW", 2)

        for _ in range(2):
            assert (await async_client.get("/api/components")).status_code == 200

        res = await async_client.get("/api/components")
        assert res.status_code == 429
        assert res.json()["error"] == RATE_LIMIT_MESSAGE
        assert res.headers["retry-after"] == str(settings.API_RATE_LIMIT_WINDOW_MINUTES * 60)

    async def test_non_api_routes_not_limited(self, async_client, monkeypatch):
        monkeypatch.setattr(settings, "API_RATE_LIMIT_PER_WINDOW", 1)
        for _ in range(3):
            assert (await async_client.get("/health")).status_code == 200
