"""Tests for environment configuration."""

import pytest

from assistant_runner.config import Settings, load_settings
from assistant_runner.errors import ConfigurationError

ENV_VARS = [
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_ASSISTANT_ID",
    "OPENAI_THREAD_ID",
    "OPENAI_MAX_RETRIES",
    "ASSISTANT_POLL_INTERVAL",
    "ASSISTANT_MAX_WAIT",
    "ASSISTANT_OUTPUT_DIR",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings(dotenv=False)

        assert settings == Settings(api_key=None)
        assert settings.poll_interval == 5.0
        assert settings.max_retries == 2
        assert settings.output_dir == "output"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("OPENAI_ASSISTANT_ID", "asst_123")
        monkeypatch.setenv("OPENAI_THREAD_ID", "thread_abc")
        monkeypatch.setenv("ASSISTANT_POLL_INTERVAL", "0.5")
        monkeypatch.setenv("ASSISTANT_MAX_WAIT", "30")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = load_settings(dotenv=False)

        assert settings.api_key == "sk-test"
        assert settings.assistant_id == "asst_123"
        assert settings.thread_id == "thread_abc"
        assert settings.poll_interval == 0.5
        assert settings.max_wait == 30.0
        assert settings.log_level == "DEBUG"

    def test_empty_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("OPENAI_ASSISTANT_ID", "")
        monkeypatch.setenv("ASSISTANT_POLL_INTERVAL", " ")

        settings = load_settings(dotenv=False)

        assert settings.assistant_id is None
        assert settings.poll_interval == 5.0

    @pytest.mark.parametrize(
        "name,value",
        [
            ("ASSISTANT_POLL_INTERVAL", "soon"),
            ("ASSISTANT_MAX_WAIT", "-1"),
            ("OPENAI_MAX_RETRIES", "2.5"),
            ("ASSISTANT_POLL_INTERVAL", "nan"),
        ],
    )
    def test_invalid_numbers(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(ConfigurationError):
            load_settings(dotenv=False)
