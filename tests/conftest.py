"""Pytest configuration for tests.

Sets up Python path and fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path so imports work correctly
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from gitkvdb.services.github.github_provider import GitHubProvider  # noqa: E402
from tests.fixtures.github_fixtures import FakeGitHost, create_test_config  # noqa: E402


@pytest.fixture
def config():
    return create_test_config()


@pytest.fixture
def fake_host():
    return FakeGitHost()


@pytest.fixture
def provider(config, fake_host):
    """GitHubProvider whose git database calls hit the in-memory fake."""
    provider = GitHubProvider(config)
    fake_host.bind(provider)
    return provider
