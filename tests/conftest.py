"""Shared fixtures: env-driven settings, a fake clock and a scripted upstream."""

import httpx
import pytest

from config import Settings

SETTINGS_ENV = [
    "PORT",
    "CORS_ORIGINS",
    "GIT_SHA",
    "ENVIRONMENT",
    "CRICKET_API_BASE_URL",
    "CRICKET_API_TOKEN",
    "CRICKET_V5_TOKEN",
    "CRICKET_TOKEN_PLACEMENT",
    "CRICKET_TOKEN_PARAM",
    "CRICKET_UPSTREAM_PATHS",
    "UPSTREAM_TIMEOUT_SECONDS",
    "CACHE_TTL_SECONDS",
]

BASE_URL = "https://cricket.test/api"
TOKEN = "secret-token"


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class ScriptedUpstream:
    """MockTransport handler that records requests and answers per upstream path."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, object] = {}

    def on(self, path: str, result) -> None:
        """result is an httpx.Response, an exception to raise, or a callable(request)."""
        self.routes[path] = result

    def calls_to(self, path: str) -> int:
        return sum(1 for r in self.requests if r.url.path.startswith(f"/api/{path}"))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        name = request.url.path.removeprefix("/api/").split("/")[0]
        result = self.routes.get(name)
        if result is None:
            return httpx.Response(404, json={"status": False, "msg": "no route"})
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(request)
        # fresh response per request; the client binds and closes each one
        return httpx.Response(result.status_code, headers=result.headers, content=result.content)


@pytest.fixture
def make_settings(monkeypatch):
    def factory(**env) -> Settings:
        for var in SETTINGS_ENV:
            monkeypatch.delenv(var, raising=False)
        values = {"CRICKET_API_BASE_URL": BASE_URL, "CRICKET_API_TOKEN": TOKEN, **env}
        for key, value in values.items():
            if value is not None:
                monkeypatch.setenv(key, value)
        return Settings()

    return factory


@pytest.fixture
def settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def upstream() -> ScriptedUpstream:
    return ScriptedUpstream()
