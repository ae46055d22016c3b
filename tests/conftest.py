"""
Pytest configuration and fixtures for paramfilter tests
"""
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from paramfilter.config import get_settings


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests with no external dependencies"
    )
    config.addinivalue_line(
        "markers", "property: Property-based tests driven by hypothesis"
    )


# =======================
# SETTINGS FIXTURES
# =======================

@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Keep environment overrides from leaking between tests."""
    for key in ("TIME_ZONE", "DATE_LAYOUT", "DATETIME_LAYOUT", "LOG_LEVEL", "LOG_JSON"):
        monkeypatch.delenv(f"PARAMFILTER_{key}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def shanghai() -> ZoneInfo:
    return ZoneInfo("Asia/Shanghai")


@pytest.fixture
def at_shanghai(shanghai):
    """Build an aware datetime in Asia/Shanghai."""

    def make(*args) -> datetime:
        return datetime(*args, tzinfo=shanghai)

    return make
