"""
Shared fixtures: a scripted backend behind httpx.MockTransport.
"""
import inspect
import logging
import httpx
import pytest
import pytest_asyncio

from jobboard.storage.models import JobPost
from jobboard.utils.config import Config

BASE_URL = "http://testserver"

class FakeBackend:
    """Routes requests to per-path handlers and records every call."""
    def __init__(self):
        self.routes = {}
        self.requests = []

    def route(self, method, path, handler):
        self.routes[(method, path)] = handler

    async def __call__(self, request):
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"error": "Not found"})
        response = handler(request)
        if inspect.isawaitable(response):
            response = await response
        return response

    def calls(self, path):
        return [r for r in self.requests if r.url.path == path]

@pytest.fixture
def backend():
    """Create an empty fake backend."""
    return FakeBackend()

@pytest.fixture
def config():
    """Configuration pointing at the fake backend."""
    return Config(api_url=BASE_URL, timeout=5)

@pytest_asyncio.fixture
async def http(backend):
    """Async client whose transport is the fake backend."""
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(backend))
    yield client
    await client.aclose()

@pytest.fixture
def logger():
    """Logger injected into the components under test."""
    return logging.getLogger("tests.jobboard")

@pytest.fixture
def sample_job():
    """Create a sample job posting for testing."""
    return JobPost(
        id="64b7f0c2a1e4d93f8c0a1b2c",
        title="Test Engineer",
        company="Test Corp",
        location="Test City",
        description="Test job description",
        postedDate="2 days ago"
    )

@pytest.fixture
def log_events(caplog):
    """Event names of the captured log records, in order."""
    caplog.set_level(logging.DEBUG, logger="tests.jobboard")
    return lambda: [record.event for record in caplog.records if hasattr(record, "event")]
