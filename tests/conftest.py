"""Shared test fixtures for Mind Mate backend tests."""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

from common.database import JsonFileDocumentStore
from mindmate.services.ai.llm_service import LLMService
from mindmate.services.alerts.broadcaster import AlertBroadcaster


FIXED_NOW = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)


def make_entries(pairs, start=FIXED_NOW - timedelta(days=30)):
    """Mood entries from (mood, stress) pairs, one per hour, oldest first."""
    return [
        {
            "mood": mood,
            "stress": stress,
            "feeling": "neutral",
            "context": "manual",
            "dayCompleted": None,
            "timestamp": (start + timedelta(hours=i)).isoformat(),
        }
        for i, (mood, stress) in enumerate(pairs)
    ]


def make_provider(name, reply=None, error=None, model="test-model"):
    provider = MagicMock()
    provider.name = name
    provider.model = model
    if error is not None:
        provider.chat = AsyncMock(side_effect=error)
    else:
        provider.chat = AsyncMock(return_value=reply)
    return provider


@pytest.fixture
def sample_user_id():
    return "alice"


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def data_path(tmp_path):
    return str(tmp_path / "data.json")


@pytest.fixture
def store(data_path):
    return JsonFileDocumentStore(data_path)


@pytest.fixture
def offline_llm():
    """LLM service with no providers, so every AI path falls back."""
    return LLMService({})


@pytest.fixture
def broadcaster():
    return AlertBroadcaster()


@pytest.fixture
def mock_store():
    store = MagicMock()
    store.read = AsyncMock(return_value={})
    return store
