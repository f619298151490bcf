"""Configuration settings using Pydantic for validation."""

import os
import re
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://exchange-api.lcx.com/"
DEFAULT_KLINE_URL = "https://api-kline.lcx.com/"


class PublicRestClientConfig(BaseModel):
    """Public REST client configuration."""
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Api base URL")
    kline_url: str = Field(default=DEFAULT_KLINE_URL, description="Kline Api base URL")
    request_timeout_seconds: Optional[float] = Field(
        default=None, description="Total timeout for owned sessions, transport default when unset"
    )
    parse_responses: bool = Field(default=True, description="Parse envelopes into typed models")

    @field_validator('base_url', 'kline_url')
    @classmethod
    def validate_url(cls, v):
        if not v.startswith(('http://', 'https://')):
            raise ValueError("URL must start with 'http://' or 'https://'")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")
    output: str = Field(default="stderr", description="Log output destination")

    @field_validator('format')
    @classmethod
    def validate_format(cls, v):
        if v.lower() not in ['json', 'text']:
            raise ValueError("Format must be 'json' or 'text'")
        return v.lower()


class MarketDataSettings(BaseSettings):
    """Top-level settings for the market-data client."""

    service_name: str = Field(default="lcx-market-data", description="Service name used in log context")
    client: PublicRestClientConfig = Field(default_factory=PublicRestClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="LCX_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )


# ${NAME} or ${NAME:-default}
_ENV_REFERENCE = re.compile(r'\$\{\s*(?P<name>[^}:\s]+)\s*(?::-(?P<default>[^}]*))?\}')


def _expand_reference(match: re.Match) -> str:
    name, default = match.group('name'), match.group('default')
    value = os.environ.get(name, default)
    if value is None:
        raise ValueError(f"Required environment variable '{name}' is not set")
    return value


def substitute_env_vars(obj: Any) -> Any:
    """
    Expand ``${VAR}`` and ``${VAR:-default}`` references in a parsed YAML tree.

    Raises:
        ValueError: If a variable without a default is not set
    """
    if isinstance(obj, str):
        return _ENV_REFERENCE.sub(_expand_reference, obj)
    if isinstance(obj, dict):
        return {key: substitute_env_vars(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return list(map(substitute_env_vars, obj))
    return obj


def load_settings(config_file: Optional[str] = None) -> MarketDataSettings:
    """
    Load settings from a YAML config file and environment variables.

    Values given in the file are passed to the settings constructor, so they
    take precedence over ``LCX_*`` environment variables for the same keys.

    Raises:
        ValueError: If required environment variables are missing
        FileNotFoundError: If config file doesn't exist
    """
    if config_file and os.path.exists(config_file):
        with open(config_file, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        config_data = substitute_env_vars(raw_config)
        return MarketDataSettings(**config_data)

    elif config_file:
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    return MarketDataSettings()
