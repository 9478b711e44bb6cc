"""
Pytest configuration and fixtures
"""
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from src.index import create_app  # noqa: E402
from src.services.cache import Cache  # noqa: E402
from tests.constants import TEST_PORT  # noqa: E402


@pytest.fixture
def cache():
    """A fresh, isolated cache per test"""
    return Cache()


@pytest.fixture
def app(cache):
    return create_app(cache, TEST_PORT)


@pytest.fixture
def client(app):
    """Create a test client"""
    return TestClient(app)
