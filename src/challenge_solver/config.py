import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()

MIB = 1024 * 1024


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Challenge service
    challenge_base_url: str = os.getenv("CHALLENGE_BASE_URL", "https://recruiting.adere.so")
    auth_token: str | None = os.getenv("API_AUTH_TOKEN")
    reject_zero_answers: bool = os.getenv("REJECT_ZERO_ANSWERS", "true").lower() == "true"

    # Completion endpoint (the relay by default)
    completion_base_url: str = os.getenv("COMPLETION_BASE_URL", "http://localhost:3000/api")
    completion_model: str = os.getenv("COMPLETION_MODEL", "gpt-4o-mini")
    upstream_completion_url: str = os.getenv(
        "UPSTREAM_COMPLETION_URL", "https://recruiting.adere.so/chat_completion"
    )

    # Catalog APIs
    swapi_url: str = os.getenv("SWAPI_URL", "https://swapi.py4e.com/api")
    pokeapi_url: str = os.getenv("POKEAPI_URL", "https://pokeapi.co/api/v2")
    page_delay: float = float(os.getenv("PAGE_DELAY", "0.5"))
    detail_batch_size: int = int(os.getenv("DETAIL_BATCH_SIZE", "5"))
    pokemon_page_size: int = int(os.getenv("POKEMON_PAGE_SIZE", "100"))
    queue_min_interval: float = float(os.getenv("QUEUE_MIN_INTERVAL", "0"))
    validation_mode: str = os.getenv("VALIDATION_MODE", "coerce")

    # HTTP / retry
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "30"))
    max_retries: int = int(os.getenv("MAX_RETRIES", "3"))
    retry_backoff: str = os.getenv("RETRY_BACKOFF", "linear")
    retry_delay: float = float(os.getenv("RETRY_DELAY", "1.0"))
    retry_max_delay: float = float(os.getenv("RETRY_MAX_DELAY", "20.0"))

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "memory")
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    cache_ttl: int = int(os.getenv("CACHE_TTL", "86400"))  # 24 hours
    cache_version: int = int(os.getenv("CACHE_VERSION", "1"))
    cache_max_size_planets: int = int(os.getenv("CACHE_MAX_SIZE_PLANETS", str(MIB)))
    cache_max_size_people: int = int(os.getenv("CACHE_MAX_SIZE_PEOPLE", str(MIB)))
    cache_max_size_pokemon: int = int(os.getenv("CACHE_MAX_SIZE_POKEMON", str(2 * MIB)))

    # Interpretation
    filter_by_mentions: bool = os.getenv("FILTER_BY_MENTIONS", "true").lower() == "true"
    resolve_homeworlds: bool = os.getenv("RESOLVE_HOMEWORLDS", "true").lower() == "true"

    # Relay API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("PORT", "3000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def uses_redis(self) -> bool:
        """Check if the result cache should persist to Redis.

        Returns:
            True if CACHE_BACKEND is "redis", False otherwise
        """
        return self.cache_backend.lower() == "redis"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.retry_backoff not in ("fixed", "linear", "exponential"):
            raise ValueError(
                f"RETRY_BACKOFF must be one of fixed, linear, exponential, got {self.retry_backoff}"
            )

        if self.validation_mode not in ("coerce", "strict"):
            raise ValueError(f"VALIDATION_MODE must be coerce or strict, got {self.validation_mode}")

        if self.cache_backend.lower() not in ("memory", "redis"):
            raise ValueError(f"CACHE_BACKEND must be memory or redis, got {self.cache_backend}")

        if self.max_retries < 1:
            raise ValueError("MAX_RETRIES must be at least 1")

        if not 1 <= self.detail_batch_size <= 10:
            raise ValueError("DETAIL_BATCH_SIZE must be between 1 and 10")

        if self.page_delay < 0 or self.queue_min_interval < 0:
            raise ValueError("PAGE_DELAY and QUEUE_MIN_INTERVAL must not be negative")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=False,
    )
