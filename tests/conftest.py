"""
Shared fixtures.

The completion provider is always a test double: an AsyncMock whose
`complete` call count and arguments the tests assert on.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from sldc_tools.app.config import Settings
from sldc_tools.app.main import create_app
from sldc_tools.app.profiles import TASK_PROFILES
from sldc_tools.app.schemas import TaskKind


ALL_TASKS = list(TaskKind)


def _make_provider(result="Adds two numbers.", error=None):
    provider = MagicMock()
    if error is not None:
        provider.complete = AsyncMock(side_effect=error)
    else:
        provider.complete = AsyncMock(return_value=result)
    return provider


@pytest.fixture
def make_provider():
    return _make_provider


@pytest.fixture
def settings(tmp_path):
    return Settings(
        gemini_api_key="test-key",
        static_dir=str(tmp_path / "no-front-end"),
        request_timeout=5.0,
    )


@pytest.fixture
def provider():
    return _make_provider()


@pytest.fixture
def app(settings, provider):
    return create_app(settings, provider)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture(params=ALL_TASKS, ids=lambda t: t.value)
def profile(request):
    return TASK_PROFILES[request.param]
