"""Environment configuration loader with Pydantic validation.

Builds one TrackerConfig at startup from environment variables. The config
is passed explicitly to every component that needs it; nothing reads
os.environ after load_config() returns.

Required variables fail fast at boot via validate_config(), called from
the FastAPI lifespan in src/api/main.py.
"""

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

_MIN_SECRET_LENGTH = 32

_TRUTHY = {"1", "true", "yes", "on"}


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""


class TrackerConfig(BaseModel):
    """Process-wide, read-only service configuration."""

    secret_key: str = ""
    admin_api_key: str = ""
    base_url: str = ""

    shopify_domain: str = ""
    shopify_access_token: str = ""
    shopify_api_version: str = "2024-01"

    notion_api_key: str = ""
    notion_database_id: str = ""
    notion_version: str = "2022-06-28"

    token_ttl_days: int = Field(default=90, gt=0)
    upstream_timeout_seconds: float = Field(default=10.0, gt=0)
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])
    static_dir: str = "public"
    trust_proxy: bool = False

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("shopify_domain")
    @classmethod
    def _normalize_domain(cls, value: str) -> str:
        # Normalize store URL (strip scheme and trailing slashes)
        value = value.replace("https://", "").replace("http://", "")
        return value.rstrip("/")


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse comma-separated CORS allowlist; unset means allow all."""
    if raw is None or not raw.strip():
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def load_config(environ: Mapping[str, str] | None = None) -> TrackerConfig:
    """Build a TrackerConfig from environment variables.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        Populated TrackerConfig (not yet validated for required fields).
    """
    env = os.environ if environ is None else environ

    overrides: dict = {
        "secret_key": env.get("SECRET_KEY", ""),
        "admin_api_key": env.get("ADMIN_API_KEY", ""),
        "base_url": env.get("BASE_URL", ""),
        "shopify_domain": env.get("SHOPIFY_DOMAIN", ""),
        "shopify_access_token": env.get("SHOPIFY_ACCESS_TOKEN", ""),
        "notion_api_key": env.get("NOTION_API_KEY", ""),
        "notion_database_id": env.get("NOTION_DATABASE_ID", ""),
        "allowed_origins": parse_allowed_origins(env.get("ALLOWED_ORIGINS")),
        "trust_proxy": env.get("TRACKER_TRUST_PROXY", "").strip().lower() in _TRUTHY,
    }
    optional = {
        "SHOPIFY_API_VERSION": "shopify_api_version",
        "NOTION_VERSION": "notion_version",
        "TOKEN_TTL_DAYS": "token_ttl_days",
        "UPSTREAM_TIMEOUT_SECONDS": "upstream_timeout_seconds",
        "STATIC_DIR": "static_dir",
    }
    for env_key, field_name in optional.items():
        value = env.get(env_key)
        if value:
            overrides[field_name] = value

    return TrackerConfig(**overrides)


def validate_config(config: TrackerConfig) -> None:
    """Validate required configuration at startup.

    Raises:
        ConfigError: If a required value is missing or the signing secret
            is too short.
    """
    required = {
        "SECRET_KEY": config.secret_key,
        "ADMIN_API_KEY": config.admin_api_key,
        "BASE_URL": config.base_url,
        "SHOPIFY_DOMAIN": config.shopify_domain,
        "SHOPIFY_ACCESS_TOKEN": config.shopify_access_token,
        "NOTION_API_KEY": config.notion_api_key,
        "NOTION_DATABASE_ID": config.notion_database_id,
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise ConfigError(
            f"Missing required environment variables: {', '.join(missing)}"
        )
    if len(config.secret_key) < _MIN_SECRET_LENGTH:
        raise ConfigError(
            f"SECRET_KEY must be at least {_MIN_SECRET_LENGTH} characters. "
            f"Current length: {len(config.secret_key)}. "
            "Use a cryptographically random value."
        )
    if "*" in config.allowed_origins:
        logger.info("CORS allows all origins (ALLOWED_ORIGINS unset).")
