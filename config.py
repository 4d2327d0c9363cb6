"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True)
class GameConfig:
    """Default table and bankroll configuration."""

    default_balance: int = field(
        default_factory=lambda: int(os.getenv("DEFAULT_BALANCE", "10000"))
    )
    num_decks: int = 6
    penetration: float = 0.75
    min_bet: int = 10
    max_bet: int = 999_000_000_000
    blackjack_payout: float = 1.5
    insurance_payout: int = 2
    max_hands: int = 4  # Concurrent player hands, splits included
    max_funds_per_deposit: int = 1_000_000


@dataclass(frozen=True)
class TimingConfig:
    """Presentation pacing handed to the engine's pacer, in seconds."""

    card_deal_delay: float = field(
        default_factory=lambda: float(os.getenv("CARD_DEAL_DELAY", "0.18"))
    )
    dealer_turn_delay: float = field(
        default_factory=lambda: float(os.getenv("DEALER_TURN_DELAY", "0.5"))
    )


@dataclass(frozen=True)
class RedisConfig:
    """Redis connection configuration."""

    host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    db: int = field(default_factory=lambda: int(os.getenv("REDIS_DB", "0")))
    password: str | None = field(default_factory=lambda: os.getenv("REDIS_PASSWORD"))

    @property
    def url(self) -> str:
        """Build Redis connection URL."""
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


@dataclass(frozen=True)
class PersistenceConfig:
    """Where and for how long balance, settings and statistics are kept."""

    backend: Literal["memory", "redis"] = field(
        default_factory=lambda: os.getenv("PERSISTENCE_BACKEND", "memory")  # type: ignore[return-value]
    )
    # Saved data older than this is discarded on load (7 days)
    expiration_seconds: int = field(
        default_factory=lambda: int(os.getenv("PERSISTENCE_EXPIRATION", str(7 * 24 * 60 * 60)))
    )
    # Signs the stored blobs; must stay stable across runs for data to load
    secret_key: str = field(
        default_factory=lambda: os.getenv("PERSISTENCE_SECRET", "blackjack-practice-local")
    )
    key_prefix: str = "blackjack_"


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")

    game: GameConfig = field(default_factory=GameConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    redis: RedisConfig = field(default_factory=RedisConfig)
    persistence: PersistenceConfig = field(default_factory=PersistenceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from LOG_LEVEL (DEBUG when DEBUG=true)."""
    if level is None:
        level = "DEBUG" if config.debug else config.logging.level
    logging.basicConfig(level=level, format=config.logging.format)


# Global configuration instance
config = AppConfig()
