"""Tests for Settings."""

import pytest
from pydantic import ValidationError

from chatwidgets.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("SUMMARIZATION_THRESHOLD", "RECENT_TURNS_TO_KEEP", "THREAD_STORE_MODE"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.auto_summarization_enabled is True
        assert settings.summarization_threshold == 15
        assert settings.recent_turns_to_keep == 10
        assert settings.max_context_turns == 10
        assert settings.max_uncovered_turns == 24
        assert settings.summary_max_output_tokens == 200
        assert settings.thread_store_mode == "memory"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SUMMARIZATION_THRESHOLD", "5")
        monkeypatch.setenv("AUTO_SUMMARIZATION_ENABLED", "false")
        monkeypatch.setenv("THREAD_STORE_MODE", "redis")

        settings = Settings(_env_file=None)

        assert settings.summarization_threshold == 5
        assert settings.auto_summarization_enabled is False
        assert settings.thread_store_mode == "redis"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"summarization_threshold": 0},
            {"recent_turns_to_keep": 0},
            {"max_context_turns": 0},
            {"max_persona_length": 0},
            {"thread_store_mode": "sqlite"},
        ],
    )
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **kwargs)

    def test_uncovered_limit_must_cover_kept_turns(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, recent_turns_to_keep=10, max_uncovered_turns=11)

        settings = Settings(_env_file=None, recent_turns_to_keep=10, max_uncovered_turns=12)
        assert settings.max_uncovered_turns == 12
