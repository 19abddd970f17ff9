import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache

import redis
from dotenv import load_dotenv

from site_analysis.constants import CACHE_DURATION

load_dotenv()


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _env_float(name: str) -> float | None:
    raw = os.getenv(name)
    return float(raw) if raw else None


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "redis")  # "redis" or "memory"
    cache_prefix: str = os.getenv("CACHE_PREFIX", "site_analysis")
    coalesce_requests: bool = os.getenv("COALESCE_REQUESTS", "true").lower() == "true"

    # Per-check TTLs in seconds
    dns_cache_ttl: int = int(os.getenv("DNS_CACHE_TTL", CACHE_DURATION["dns"]))
    whois_cache_ttl: int = int(os.getenv("WHOIS_CACHE_TTL", CACHE_DURATION["whois"]))
    ssl_cache_ttl: int = int(os.getenv("SSL_CACHE_TTL", CACHE_DURATION["ssl"]))
    security_cache_ttl: int = int(os.getenv("SECURITY_CACHE_TTL", CACHE_DURATION["security"]))
    performance_cache_ttl: int = int(os.getenv("PERFORMANCE_CACHE_TTL", CACHE_DURATION["performance"]))
    headers_cache_ttl: int = int(os.getenv("HEADERS_CACHE_TTL", CACHE_DURATION["headers"]))

    # Upstream sources
    doh_url: str = os.getenv("DOH_URL", "https://cloudflare-dns.com/dns-query")
    rdap_servers: tuple[str, ...] = field(
        default_factory=lambda: _env_list(
            "RDAP_SERVERS",
            "https://rdap.org/domain/{domain},https://rdap.verisign.com/com/v1/domain/{domain}",
        )
    )
    ssl_labs_url: str = os.getenv("SSL_LABS_URL", "https://api.ssllabs.com/api/v3/analyze")

    # Outbound HTTP; None keeps the httpx default timeout
    http_timeout: float | None = _env_float("HTTP_TIMEOUT")
    http_user_agent: str = os.getenv("HTTP_USER_AGENT", "site-analysis/1.0")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    # Client side (CLI)
    api_base_url: str = os.getenv("API_BASE_URL", "http://localhost:8000/api")

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_backend not in ("redis", "memory"):
            raise ValueError(f"CACHE_BACKEND must be 'redis' or 'memory', got {self.cache_backend!r}")

        if not self.rdap_servers:
            raise ValueError("RDAP_SERVERS must list at least one server")

        for server in self.rdap_servers:
            if "{domain}" not in server:
                raise ValueError(f"RDAP server template must contain '{{domain}}': {server}")

        ttls = (
            self.dns_cache_ttl,
            self.whois_cache_ttl,
            self.ssl_cache_ttl,
            self.security_cache_ttl,
            self.performance_cache_ttl,
            self.headers_cache_ttl,
        )
        if any(ttl <= 0 for ttl in ttls):
            raise ValueError("Cache TTLs must be positive")


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


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
