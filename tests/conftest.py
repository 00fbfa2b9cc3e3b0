"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from quicklink.allocation import AllocationTable
from quicklink.service import URLShortenerService
from quicklink.shortcode import ShortCodeGenerator
from quicklink.common.logging_config import setup_logging
from web_app import create_app


class FixedBytes:
    """Random source that always returns the same bytes and counts calls."""

    def __init__(self, value: bytes):
        self.value = value
        self.calls = 0

    def __call__(self, n: int) -> bytes:
        self.calls += 1
        return self.value[:n]


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def table(short_code_generator):
    """Fresh, empty allocation table per test."""
    return AllocationTable(generator=short_code_generator)


@pytest.fixture
def service(table, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(table=table, logger=logger)


@pytest.fixture
def config():
    """Test configuration."""
    return Config(base_url="http://testserver")


@pytest.fixture
def app(service, config, logger):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config, logger=logger)


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]


@pytest.fixture
def fixed_bytes():
    """Factory for deterministic random sources."""
    return FixedBytes
