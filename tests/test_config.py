"""Tests for configuration loading."""

import pytest

from code_context.utils.config import DEFAULT_EXCLUDED_DIRS, Config, ConfigManager, create_sample_env

ENV_VARS = [
    "GEMINI_API_KEY", "GOOGLE_API_KEY", "CODE_CONTEXT_MODEL", "CODE_CONTEXT_MAX_DEPTH",
    "CODE_CONTEXT_CACHE_SIZE", "CODE_CONTEXT_CACHE_MAX_AGE", "CODE_CONTEXT_HISTORY_LIMIT",
    "CODE_CONTEXT_DEBUG", "CODE_CONTEXT_LOG_LEVEL", "NO_COLOR", "GOOGLE_GENAI_USE_VERTEXAI",
    "GOOGLE_CLOUD_PROJECT", "GOOGLE_CLOUD_LOCATION", "CONTEXT__MAX_DEPTH",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = Config(_env_file=None)

    assert config.context.max_depth == 5
    assert config.context.excluded_dirs == DEFAULT_EXCLUDED_DIRS
    assert config.context.max_cache_size == 100
    assert config.context.cache_max_age == 300.0
    assert config.context.history_limit == 50
    assert config.context.completion_window_lines == 10
    assert config.context.fallback_tail_lines == 50
    assert config.context.max_related_files == 5
    assert config.ai.api_key is None
    assert config.ui.log_level == "WARNING"


def test_environment_overrides(clean_env):
    clean_env.setenv("GOOGLE_API_KEY", "google-key")
    clean_env.setenv("CODE_CONTEXT_MAX_DEPTH", "3")
    clean_env.setenv("CODE_CONTEXT_CACHE_SIZE", "10")
    clean_env.setenv("CODE_CONTEXT_CACHE_MAX_AGE", "60")
    clean_env.setenv("CODE_CONTEXT_HISTORY_LIMIT", "20")
    clean_env.setenv("CODE_CONTEXT_LOG_LEVEL", "debug")
    clean_env.setenv("NO_COLOR", "1")

    config = Config(_env_file=None)

    assert config.ai.api_key == "google-key"
    assert config.context.max_depth == 3
    assert config.context.max_cache_size == 10
    assert config.context.cache_max_age == 60.0
    assert config.context.history_limit == 20
    assert config.ui.log_level == "DEBUG"
    assert config.ui.use_colors is False


def test_gemini_key_wins(clean_env):
    clean_env.setenv("GEMINI_API_KEY", "gemini-key")
    clean_env.setenv("GOOGLE_API_KEY", "google-key")

    assert Config(_env_file=None).ai.api_key == "gemini-key"


def test_vertexai_settings(clean_env):
    clean_env.setenv("GOOGLE_GENAI_USE_VERTEXAI", "true")
    clean_env.setenv("GOOGLE_CLOUD_PROJECT", "my-project")

    config = Config(_env_file=None)

    assert config.ai.use_vertexai is True
    assert config.ai.vertexai_project == "my-project"
    assert config.ai.vertexai_location == "us-central1"


def test_nested_format(clean_env):
    clean_env.setenv("CONTEXT__MAX_DEPTH", "2")
    assert Config(_env_file=None).context.max_depth == 2


def test_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("CODE_CONTEXT_HISTORY_LIMIT=7\nCODE_CONTEXT_DEBUG=true\n")

    config = Config(_env_file=str(env_file))

    assert config.context.history_limit == 7
    assert config.ui.show_debug_info is True


def test_create_sample_env(tmp_path):
    target = create_sample_env(config_dir=tmp_path / "conf")

    assert target == tmp_path / "conf" / ".env"
    content = target.read_text()
    assert "GEMINI_API_KEY=" in content
    assert "CODE_CONTEXT_MAX_DEPTH=5" in content


def test_create_project_sample_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    target = ConfigManager(config_dir=tmp_path / "unused").create_sample_env(project_specific=True)

    assert target == tmp_path / ".env"
    assert target.exists()
    assert not (tmp_path / "unused").exists()
