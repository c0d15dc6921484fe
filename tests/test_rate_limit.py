"""Tests for the rate limiting pure function and middleware integration."""

from liteblog.core.config import settings
from liteblog.middleware import request_context
from liteblog.middleware.request_context import check_rate_limit


class TestCheckRateLimit:
    """Unit tests for the pure function: no middleware, no HTTP."""

    def test_allows_within_limit(self):
        bucket: dict = {}
        allowed, retry = check_rate_limit(bucket, "client-a", max_per_minute=60, now=0.0)
        assert allowed is True
        assert retry == 0.0

    def test_denies_after_exhaustion(self):
        bucket: dict = {}
        now = 0.0
        # Exhaust all tokens
        for _ in range(60):
            check_rate_limit(bucket, "client-a", max_per_minute=60, now=now)

        allowed, retry = check_rate_limit(bucket, "client-a", max_per_minute=60, now=now)
        assert allowed is False
        assert retry > 0

    def test_refills_over_time(self):
        bucket: dict = {}
        for _ in range(60):
            check_rate_limit(bucket, "client-a", max_per_minute=60, now=0.0)

        # 2 seconds later: should have refilled ~2 tokens
        allowed, _ = check_rate_limit(bucket, "client-a", max_per_minute=60, now=2.0)
        assert allowed is True

    def test_separate_keys_independent(self):
        bucket: dict = {}
        for _ in range(60):
            check_rate_limit(bucket, "client-a", max_per_minute=60, now=0.0)

        allowed, _ = check_rate_limit(bucket, "client-b", max_per_minute=60, now=0.0)
        assert allowed is True

    def test_zero_limit_always_allows(self):
        bucket: dict = {}
        allowed, _ = check_rate_limit(bucket, "any", max_per_minute=0, now=0.0)
        assert allowed is True
        assert bucket == {}

    def test_stale_entries_are_swept(self, monkeypatch):
        monkeypatch.setattr(request_context, "_calls_since_sweep", request_context.SWEEP_INTERVAL - 1)
        bucket = {"old-client": (0.0, 0.0)}
        check_rate_limit(bucket, "new-client", max_per_minute=60, now=1000.0)
        assert "old-client" not in bucket
        assert "new-client" in bucket


class TestRateLimitMiddleware:

    def test_returns_429_when_exhausted(self, client, monkeypatch):
        monkeypatch.setattr(settings, "rate_limit_per_minute", 2)
        assert client.get("/api/articles").status_code == 200
        assert client.get("/api/articles").status_code == 200

        resp = client.get("/api/articles")
        assert resp.status_code == 429
        assert resp.json()["error"] == "RATE_LIMITED"
        assert "retry-after" in resp.headers

    def test_probes_are_exempt(self, client, monkeypatch):
        monkeypatch.setattr(settings, "rate_limit_per_minute", 1)
        for _ in range(3):
            assert client.get("/health").status_code == 200
