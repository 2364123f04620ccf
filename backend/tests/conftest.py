import pytest
from fastapi.testclient import TestClient

from coinproxy.cache import FreshnessCache
from coinproxy.deps import get_top_coins_cache, get_upstream_client
from coinproxy.main import app


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeUpstream:
    """Replays queued bodies or exceptions, recording every request it sees."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    def queue(self, *outcomes) -> None:
        self.outcomes.extend(outcomes)

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def fetch(self, request):
        self.requests.append(request)
        if not self.outcomes:
            raise AssertionError(f"Unexpected upstream call to {request.provider}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def api_keys(monkeypatch):
    monkeypatch.setenv("COVALENT_API_KEY", "cov-secret")
    monkeypatch.setenv("BSC_API_KEY", "bsc-secret")
    monkeypatch.setenv("LIVECOINWATCH_API_KEY", "lcw-secret")
    monkeypatch.delenv("LCW_API_KEY", raising=False)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def top_coins_cache(clock):
    return FreshnessCache(300, clock=clock)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def client(top_coins_cache, upstream):
    app.dependency_overrides[get_top_coins_cache] = lambda: top_coins_cache
    app.dependency_overrides[get_upstream_client] = lambda: upstream
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
