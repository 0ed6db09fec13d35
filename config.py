"""Configuration management with environment variable support."""

import logging
import os
import secrets
from dataclasses import dataclass, field


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


def _parse_face_pool() -> tuple[str, ...]:
    """Parse SHUFFLE_FACE_POOL environment variable."""
    pool = os.getenv("SHUFFLE_FACE_POOL", "A,K,Q,J,10")
    return tuple(p.strip() for p in pool.split(",") if p.strip())


def _parse_seed() -> int | None:
    """Parse SHUFFLE_SEED environment variable (unset means unseeded)."""
    seed = os.getenv("SHUFFLE_SEED")
    if seed is None or not seed.strip():
        return None
    return int(seed)


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(
        default_factory=lambda: os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    )
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    format: str = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
    datefmt: str = "%H:%M:%S"


@dataclass(frozen=True)
class PhaseTimings:
    """
    Nominal duration of each shuffle phase, in seconds.

    Defaults follow the original page: the flip settles for 1.1s, the gather
    takes 1s plus a 0.5s pause, and the redistribution takes 1s.
    """

    deal_duration: float = 1.0
    flip_duration: float = 1.1
    gather_duration: float = 1.5
    redistribute_duration: float = 1.0
    restart_duration: float = 1.0


@dataclass(frozen=True)
class ShuffleConfig:
    """Default table configuration."""

    min_cards: int = field(default_factory=lambda: int(os.getenv("SHUFFLE_MIN_CARDS", "3")))
    max_cards: int = field(default_factory=lambda: int(os.getenv("SHUFFLE_MAX_CARDS", "5")))
    default_card_count: int = field(
        default_factory=lambda: int(os.getenv("SHUFFLE_DEFAULT_CARDS", "3"))
    )
    face_pool: tuple[str, ...] = field(default_factory=_parse_face_pool)
    seed: int | None = field(default_factory=_parse_seed)
    timings: PhaseTimings = field(default_factory=PhaseTimings)


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    session_ttl: int = 3600  # Session timeout in seconds

    shuffle: ShuffleConfig = field(default_factory=ShuffleConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Global configuration instance
config = AppConfig()


def configure_logging(logging_config: LoggingConfig | None = None) -> None:
    """Call once at program start (api/main.py and pygame_ui/main.py)."""
    logging_config = logging_config or config.logging
    logging.basicConfig(
        level=getattr(logging, logging_config.level, logging.INFO),
        format=logging_config.format,
        datefmt=logging_config.datefmt,
    )
