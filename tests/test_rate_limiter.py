import redis
from fastapi.testclient import TestClient

from main import create_app
from Login_module.Utils.rate_limiter import FixedWindowRateLimiter, MemoryRateLimitStore
from conftest import make_settings


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class BrokenStore:
    def hit(self, key, window_seconds):
        raise redis.ConnectionError("connection refused")


def make_limiter(store, max_requests=3, auth_max_requests=1):
    return FixedWindowRateLimiter(store, window_seconds=900, max_requests=max_requests,
                                  auth_max_requests=auth_max_requests)


def test_requests_beyond_limit_are_refused_until_window_resets():
    clock = FakeClock()
    limiter = make_limiter(MemoryRateLimitStore(clock=clock))

    results = [limiter.check("203.0.113.5", "/api/v1/states")[0] for _ in range(4)]
    assert results == [True, True, True, False]

    clock.now += 900
    allowed, limit, remaining, bucket = limiter.check("203.0.113.5", "/api/v1/states")
    assert (allowed, limit, remaining, bucket) == (True, 3, 2, "api")


def test_expired_windows_are_dropped_from_memory_store():
    clock = FakeClock()
    store = MemoryRateLimitStore(clock=clock)
    limiter = make_limiter(store)

    for i in range(1000):
        limiter.check(f"10.0.{i // 256}.{i % 256}", "/api/v1/states")
    assert store.size == 1000

    clock.now += 900
    limiter.check("203.0.113.5", "/api/v1/states")
    assert store.size == 1


def test_live_windows_survive_pruning():
    clock = FakeClock()
    store = MemoryRateLimitStore(clock=clock)
    limiter = make_limiter(store)

    limiter.check("198.51.100.7", "/api/v1/states")
    clock.now += 600
    for _ in range(3):
        limiter.check("203.0.113.5", "/api/v1/states")
    clock.now += 300

    # 198.51.100.7 has expired; 203.0.113.5 is still over its limit
    assert limiter.check("203.0.113.5", "/api/v1/states")[0] is False
    assert store.size == 1


def test_counters_are_per_ip_and_auth_bucket_is_stricter():
    limiter = make_limiter(MemoryRateLimitStore())

    assert limiter.check("203.0.113.5", "/api/v1/auth/profile")[0] is True
    assert limiter.check("203.0.113.5", "/api/v1/auth/profile")[0] is False
    assert limiter.check("198.51.100.7", "/api/v1/auth/profile")[0] is True
    # The general bucket is counted separately
    assert limiter.check("203.0.113.5", "/api/v1/states")[0] is True


def test_store_failure_admits_request():
    limiter = make_limiter(BrokenStore())

    assert limiter.check("203.0.113.5", "/api/v1/states") == (True, 3, 3, "api")


def test_middleware_returns_429_envelope(engine):
    settings = make_settings(RATE_LIMIT_MAX_REQUESTS=2)
    client = TestClient(create_app(settings, engine=engine, rate_limit_store=MemoryRateLimitStore()))

    for _ in range(2):
        assert client.get("/api/v1/validation-rules").status_code == 200
    response = client.get("/api/v1/validation-rules")

    assert response.status_code == 429
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Too many requests from this IP, please try again later."
    assert body["retry_after"] == 900
    assert response.headers["Retry-After"] == "900"
    assert response.headers["X-RateLimit-Remaining"] == "0"


def test_health_and_non_api_paths_are_not_limited(engine):
    settings = make_settings(RATE_LIMIT_MAX_REQUESTS=1)
    client = TestClient(create_app(settings, engine=engine, rate_limit_store=MemoryRateLimitStore()))

    for _ in range(5):
        assert client.get("/health").status_code == 200
        assert client.get("/").status_code == 200


def test_forwarded_ip_is_used_for_counting(engine):
    settings = make_settings(RATE_LIMIT_MAX_REQUESTS=1)
    client = TestClient(create_app(settings, engine=engine, rate_limit_store=MemoryRateLimitStore()))

    first = client.get("/api/v1/validation-rules", headers={"X-Forwarded-For": "203.0.113.5, 10.0.0.1"})
    second = client.get("/api/v1/validation-rules", headers={"X-Forwarded-For": "198.51.100.7"})
    third = client.get("/api/v1/validation-rules", headers={"X-Forwarded-For": "203.0.113.5"})

    assert [first.status_code, second.status_code, third.status_code] == [200, 200, 429]
