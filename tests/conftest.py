"""
Shared Test Configuration and Fixtures

Fixtures used by every package's tests:
- fake_http: scripted stand-in for requests.Session (no network)
- clock: controllable time source whose sleep() advances time
- shared_state: fresh SharedState per test
- wait_until: poll a condition from another thread with a deadline
"""

import json
import time
from collections import deque
from typing import Any, Callable, Deque, List, Tuple

import pytest

from core.shared_state import SharedState

_NO_JSON = object()


# =============================================================================
# FAKE HTTP
# =============================================================================


class FakeResponse:
    """Minimal requests.Response look-alike."""

    def __init__(self, status_code: int = 200, json_body: Any = _NO_JSON, text=None):
        self.status_code = status_code
        self._json = json_body
        if text is None:
            text = "" if json_body is _NO_JSON else json.dumps(json_body)
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        if self._json is _NO_JSON:
            raise ValueError("No JSON object could be decoded")
        return self._json


class FakeHTTPSession:
    """
    Scripted HTTP session.

    Responses (or exceptions) are returned in the order queued; every call
    is recorded as (method, url, kwargs).
    """

    def __init__(self):
        self.responses: Deque[Any] = deque()
        self.calls: List[Tuple[str, str, dict]] = []

    def reply(self, status_code: int = 200, json_body: Any = _NO_JSON, text=None):
        self.responses.append(FakeResponse(status_code, json_body, text))
        return self

    def fail_with(self, error: Exception):
        self.responses.append(error)
        return self

    def post(self, url: str, **kwargs) -> FakeResponse:
        return self._dispatch("POST", url, kwargs)

    def put(self, url: str, **kwargs) -> FakeResponse:
        return self._dispatch("PUT", url, kwargs)

    def _dispatch(self, method: str, url: str, kwargs: dict) -> FakeResponse:
        self.calls.append((method, url, kwargs))
        if not self.responses:
            raise AssertionError(f"Unexpected HTTP call: {method} {url}")
        item = self.responses.popleft()
        if isinstance(item, Exception):
            raise item
        return item

    def calls_to(self, url_fragment: str) -> List[Tuple[str, str, dict]]:
        return [call for call in self.calls if url_fragment in call[1]]


@pytest.fixture
def fake_http():
    """
    Provide a scripted HTTP session.

    Usage:
        def test_x(fake_http):
            fake_http.reply(200, {"ok": True})
            client = DeviceFlowClient(http=fake_http)
    """
    return FakeHTTPSession()


# =============================================================================
# TIME
# =============================================================================


class FakeClock:
    """Time source for tests; sleep() records and advances time."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Provide a FakeClock starting at a fixed instant."""
    return FakeClock()


# =============================================================================
# SHARED STATE / THREADS
# =============================================================================


@pytest.fixture
def shared_state():
    """Provide a fresh SharedState."""
    return SharedState()


@pytest.fixture
def wait_until():
    """
    Poll a condition until it holds or the deadline passes.

    Usage:
        assert wait_until(lambda: state.notice.get() == "")
    """

    def _wait(condition: Callable[[], bool], timeout: float = 3.0) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if condition():
                return True
            time.sleep(0.01)
        return condition()

    return _wait


def pytest_configure(config):
    """
    Configure pytest with custom markers.

    Markers let you categorize and selectively run tests:
        pytest -m unit               # Only unit tests
        pytest -m unit_integration   # Only wiring tests
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line(
        "markers",
        "unit_integration: Several real components with mocks at the edges",
    )
    config.addinivalue_line("markers", "slow: Slow tests (use sparingly)")
