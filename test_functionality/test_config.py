"""
Tests for Settings and the factory wiring that depends on it.
"""

import pytest

from factory import ServiceFactory
from infrastructure.config import DEFAULT_BASE_URL, DEFAULT_MODEL, Settings
from infrastructure.llm.completion_client import OpenAICompletionClient


@pytest.mark.parametrize("key, configured", [
    ("", False),
    ("   ", False),
    ("//", False),
    ("your-api-key", False),
    ("sk-proj-abc123", True),
])
def test_is_api_configured(key, configured):
    assert Settings(openai_api_key=key).is_api_configured is configured


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_TIMEOUT", "12.5")
    monkeypatch.setenv("DB_PATH", str(tmp_path / "bar.db"))
    monkeypatch.delenv("OPENAI_MODEL", raising=False)
    monkeypatch.delenv("OPENAI_BASE_URL", raising=False)

    settings = Settings.from_env()

    assert settings.openai_api_key == "sk-env"
    assert settings.openai_timeout == 12.5
    assert settings.openai_model == DEFAULT_MODEL
    assert settings.openai_base_url == DEFAULT_BASE_URL
    assert settings.db_path.endswith("bar.db")


@pytest.mark.asyncio
async def test_factory_without_key_builds_offline_engine(tmp_path):
    async with ServiceFactory(Settings(db_path=str(tmp_path / "f.db"))) as factory:
        assert not factory.create_suggestion_engine().is_configured
        session = factory.create_chat_session()
        await session.start()
        assert len(session.messages) == 1


def test_factory_with_key_builds_completion_client(tmp_path):
    factory = ServiceFactory(Settings(openai_api_key="sk-real", db_path=str(tmp_path / "f.db")))
    client = factory._build_completion_client()
    assert isinstance(client, OpenAICompletionClient)
    assert client.model == DEFAULT_MODEL


def test_factory_requires_initialize(tmp_path):
    factory = ServiceFactory(Settings(db_path=str(tmp_path / "f.db")))
    with pytest.raises(RuntimeError, match="not initialized"):
        factory.create_inventory_service()
