"""Tests for configuration classes."""

import os
from unittest.mock import patch

from config import (
    AppConfig,
    GameConfig,
    LoggingConfig,
    PersistenceConfig,
    RedisConfig,
    TimingConfig,
    configure_logging,
)


class TestGameConfig:
    """Tests for GameConfig class."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = GameConfig()
        assert config.default_balance == 10000
        assert config.num_decks == 6
        assert config.min_bet == 10
        assert config.max_hands == 4

    def test_default_balance_from_env(self):
        with patch.dict(os.environ, {"DEFAULT_BALANCE": "2500"}):
            assert GameConfig().default_balance == 2500


class TestTimingConfig:
    """Tests for TimingConfig class."""

    def test_delays_from_env(self):
        with patch.dict(os.environ, {"CARD_DEAL_DELAY": "0", "DEALER_TURN_DELAY": "1.25"}):
            timing = TimingConfig()
        assert timing.card_deal_delay == 0.0
        assert timing.dealer_turn_delay == 1.25


class TestRedisConfig:
    """Tests for RedisConfig class."""

    def test_url_without_password(self):
        with patch.dict(os.environ, {}, clear=True):
            config = RedisConfig()
        assert config.url == "redis://localhost:6379/0"

    def test_url_with_password(self):
        env = {"REDIS_HOST": "cache", "REDIS_PORT": "6380", "REDIS_DB": "2", "REDIS_PASSWORD": "hunter2"}
        with patch.dict(os.environ, env, clear=True):
            config = RedisConfig()
        assert config.url == "redis://:hunter2@cache:6380/2"


class TestPersistenceConfig:
    """Tests for PersistenceConfig class."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = PersistenceConfig()
        assert config.backend == "memory"
        assert config.expiration_seconds == 7 * 24 * 60 * 60
        assert config.key_prefix == "blackjack_"

    def test_backend_from_env(self):
        with patch.dict(os.environ, {"PERSISTENCE_BACKEND": "redis"}):
            assert PersistenceConfig().backend == "redis"


class TestLogging:
    """Tests for logging configuration."""

    def test_level_from_env(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            assert LoggingConfig().level == "DEBUG"

    def test_configure_logging(self):
        with patch("config.logging.basicConfig") as basic_config:
            configure_logging("WARNING")
        basic_config.assert_called_once()
        assert basic_config.call_args.kwargs["level"] == "WARNING"

    def test_app_config_debug(self):
        with patch.dict(os.environ, {"DEBUG": "true"}):
            assert AppConfig().debug
        with patch.dict(os.environ, {"DEBUG": "false"}):
            assert not AppConfig().debug
