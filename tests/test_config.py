"""Tests for application settings."""

import logging

import pytest

from synapse_duel.config import Settings, configure_logging, get_settings
from synapse_duel.engine import DEFAULT_RULES, DuelEngine, DuelState, Initialize, ProcessStartOfTurn
from synapse_duel.models import Side, StatusEffectType


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset the cached settings around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        """Test default settings reproduce the standard rules."""
        monkeypatch.delenv("SYNAPSE_DUEL_DEBUG", raising=False)
        settings = Settings(_env_file=None)

        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.catalog_path is None
        assert settings.rules == DEFAULT_RULES

    def test_env_overrides(self, monkeypatch):
        """Test values are read from prefixed environment variables."""
        monkeypatch.setenv("SYNAPSE_DUEL_DEBUG", "true")
        monkeypatch.setenv("SYNAPSE_DUEL_CATALOG_PATH", "/data/cards.json")

        settings = get_settings()

        assert settings.debug is True
        assert settings.catalog_path == "/data/cards.json"

    def test_nested_rule_override(self, monkeypatch):
        """Test rule constants can be tuned with the nested delimiter."""
        monkeypatch.setenv("SYNAPSE_DUEL_RULES__INFLAMED_DAMAGE", "15")

        rules = get_settings().rules

        assert rules.inflamed_damage == 15
        assert rules.starting_hp == DEFAULT_RULES.starting_hp

    def test_rules_drive_engine(self, monkeypatch, add_effects):
        """Test configured rules reach the engine."""
        monkeypatch.setenv("SYNAPSE_DUEL_RULES__INFLAMED_DAMAGE", "15")
        engine = DuelEngine(rules=get_settings().rules)

        state = engine.apply(DuelState(), Initialize(hand=()))
        state = add_effects(state, Side.PLAYER, StatusEffectType.INFLAMED)
        state = engine.apply(state, ProcessStartOfTurn(is_player=True))

        assert state.player_hp == 85

    def test_settings_cached(self):
        """Test get_settings returns the same instance."""
        assert get_settings() is get_settings()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_debug_level(self, monkeypatch):
        """Test debug mode configures DEBUG logging."""
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        configure_logging(Settings(_env_file=None, debug=True))

        assert calls[0]["level"] == logging.DEBUG

    def test_log_level_from_settings(self, monkeypatch):
        """Test the configured level name is used."""
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        configure_logging(Settings(_env_file=None, log_level="warning"))

        assert calls[0]["level"] == "WARNING"
