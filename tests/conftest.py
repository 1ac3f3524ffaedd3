"""Shared fixtures for smart_increment tests."""

import os
import sys

import pytest

# Ensure tests/ is on sys.path so test files can import fake_host
# unambiguously (avoids conftest module name collisions).
sys.path.insert(0, os.path.dirname(__file__))

from fake_host import FakeHost  # noqa: E402

from smart_increment.session import Session  # noqa: E402
from smart_increment.settings import Settings  # noqa: E402


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def fresh_session():
    return Session()


@pytest.fixture
def make_host():
    def _make_host(lines=None, content="item_001", **kwargs):
        return FakeHost(lines, content=content, **kwargs)

    return _make_host
