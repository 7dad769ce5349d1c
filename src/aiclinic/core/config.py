"""
Configuration management for the AI Clinic proxy.

This module provides centralized configuration using Pydantic Settings
for environment-based configuration management.
"""

from typing import Annotated, List, Optional

import json
import os
from pathlib import Path

from pydantic import Field, validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class GatewaySettings(BaseSettings):
    """AI gateway (OpenAI-compatible chat completions) settings."""

    model_config = SettingsConfigDict(env_prefix="AI_GATEWAY_")

    api_key: str = Field(default="", description="Bearer credential for the AI gateway")
    base_url: str = Field(
        default="https://ai.gateway.lovable.dev/v1",
        description="Base URL of the OpenAI-compatible gateway",
    )
    model: str = Field(
        default="google/gemini-3-flash-preview", description="Model identifier sent upstream"
    )
    temperature: Optional[float] = Field(
        default=None, description="Sampling temperature (gateway default when unset)"
    )
    rate_limit_retries: int = Field(
        default=0, description="Retries for upstream 429 responses (0 disables retrying)"
    )
    retry_base_delay: float = Field(default=1.0, description="Base backoff delay in seconds")
    retry_jitter: float = Field(default=0.5, description="Maximum random jitter added to each backoff")
    validate_structured_output: bool = Field(
        default=True, description="Reject structured replies that fall outside the declared schema"
    )

    @validator("base_url")
    def validate_base_url(cls, v: str) -> str:
        """Validate gateway URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("AI gateway base URL must start with 'http://' or 'https://'")
        return v.rstrip("/")

    @validator("temperature")
    def validate_temperature(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not 0.0 <= v <= 2.0:
            raise ValueError("Temperature must be between 0.0 and 2.0")
        return v

    @validator("rate_limit_retries")
    def validate_rate_limit_retries(cls, v: int) -> int:
        if not 0 <= v <= 5:
            raise ValueError("rate_limit_retries must be between 0 and 5")
        return v

    @validator("retry_base_delay", "retry_jitter")
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Retry delays must not be negative")
        return v

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


class CORSSettings(BaseSettings):
    """CORS configuration settings."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    allowed_origins: Annotated[List[str], NoDecode] = Field(default=["*"], description="Allowed CORS origins")
    allowed_headers: Annotated[List[str], NoDecode] = Field(
        default=[
            "authorization", "x-client-info", "apikey", "content-type", "x-request-id",
            "x-supabase-client-platform", "x-supabase-client-platform-version",
            "x-supabase-client-runtime", "x-supabase-client-runtime-version",
        ],
        description="Allowed HTTP headers",
    )

    @validator("allowed_origins", "allowed_headers", pre=True)
    def parse_list(cls, v):
        """Parse a list from a JSON array or a comma separated string."""
        if isinstance(v, str):
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    return [v.strip()]
            return [item.strip() for item in v.split(",") if item.strip()]
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(default="json", description="Log format (json or text)")

    @validator("level")
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @validator("format")
    def validate_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    app_name: str = Field(default="AI-Clinic", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    app_env: str = Field(default="development", description="Application environment")
    debug: bool = Field(default=False, description="Debug mode")
    port: int = Field(default=8000, description="Application port")
    host: str = Field(default="0.0.0.0", description="Application host")

    # Sub-settings
    gateway: GatewaySettings = Field(default_factory=GatewaySettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @validator("app_env")
    def validate_app_env(cls, v: str) -> str:
        """Validate application environment."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"App environment must be one of: {valid_envs}")
        return v.lower()

    @validator("port")
    def validate_port(cls, v: int) -> int:
        """Validate port number."""
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v


_settings: Optional[Settings] = None


def _load_env_file_if_available() -> None:
    """Best-effort load of .env by searching current and parent directories.

    Already-set environment variables are never overridden.
    """
    from dotenv import load_dotenv

    cwd = Path(os.getcwd()).resolve()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / ".env"
        if candidate.exists():
            load_dotenv(dotenv_path=str(candidate), override=False)
            break


def get_settings() -> Settings:
    """Get application settings instance (lazy-init with .env discovery)."""
    global _settings
    if _settings is None:
        _load_env_file_if_available()
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
