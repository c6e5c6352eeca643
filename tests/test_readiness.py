"""Tests for the Gemini readiness probe."""

import os

import dotenv
import pytest

from code_context.ai import readiness
from code_context.ai.readiness import GeminiReadinessProbe
from code_context.utils.config import AIConfig


class FakeClient:
    calls = []

    def __init__(self, **kwargs):
        FakeClient.calls.append(kwargs)


class FailingClient:
    def __init__(self, **kwargs):
        raise ValueError("bad credentials")


@pytest.fixture
def dotenv_loads(monkeypatch):
    """Records load_dotenv calls instead of reading a real .env file."""
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "GOOGLE_GENAI_USE_VERTEXAI",
                 "GOOGLE_CLOUD_PROJECT", "GOOGLE_CLOUD_LOCATION"):
        monkeypatch.delenv(name, raising=False)
    loads = []
    monkeypatch.setattr(readiness, "load_dotenv", lambda: loads.append(1) or False)
    FakeClient.calls = []
    monkeypatch.setattr(readiness.genai, "Client", FakeClient)
    return loads


def test_not_ready_without_credentials(dotenv_loads):
    probe = GeminiReadinessProbe()

    assert probe.client_options() is None
    assert probe() is False
    assert FakeClient.calls == []


def test_ready_with_configured_key(dotenv_loads):
    probe = GeminiReadinessProbe(AIConfig(api_key="secret"))

    assert probe.is_ai_ready() is True
    assert FakeClient.calls == [{"api_key": "secret"}]


def test_key_from_environment(dotenv_loads, monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "from-env")

    assert GeminiReadinessProbe().options == {"api_key": "from-env"}


def test_vertexai_requires_project(dotenv_loads, monkeypatch):
    monkeypatch.setenv("GOOGLE_GENAI_USE_VERTEXAI", "true")
    assert GeminiReadinessProbe(AIConfig(vertexai_location=None))() is False

    monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "my-project")
    probe = GeminiReadinessProbe(AIConfig(vertexai_location=None))

    assert probe.options == {"vertexai": True, "project": "my-project", "location": "us-central1"}
    assert probe() is True


def test_client_failure_is_not_ready(dotenv_loads, monkeypatch):
    monkeypatch.setattr(readiness.genai, "Client", FailingClient)

    assert GeminiReadinessProbe(AIConfig(api_key="secret"))() is False


def test_repeated_calls_leave_environment_alone(dotenv_loads):
    probe = GeminiReadinessProbe(AIConfig(api_key="secret"))
    assert dotenv_loads == [1]
    environ_before = dict(os.environ)

    assert probe() is True
    assert probe() is True

    assert dict(os.environ) == environ_before
    assert dotenv_loads == [1]
    assert FakeClient.calls == [{"api_key": "secret"}]


def test_dotenv_loaded_once_at_construction(dotenv_loads, tmp_path, monkeypatch):
    monkeypatch.delenv("CODE_CONTEXT_READINESS_SENTINEL", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("CODE_CONTEXT_READINESS_SENTINEL=loaded\n")
    monkeypatch.setattr(readiness, "load_dotenv", lambda: dotenv.load_dotenv(env_file))

    probe = GeminiReadinessProbe(AIConfig())
    assert os.environ["CODE_CONTEXT_READINESS_SENTINEL"] == "loaded"

    os.environ.pop("CODE_CONTEXT_READINESS_SENTINEL")
    probe()
    probe()

    assert "CODE_CONTEXT_READINESS_SENTINEL" not in os.environ
