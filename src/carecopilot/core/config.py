"""
Configuration management for Caregiver Co-Pilot.

This module provides centralized configuration using Pydantic Settings
for environment-based configuration management.
"""

from typing import List, Optional

import json
import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenAISettings(BaseSettings):
    """OpenAI API configuration settings."""

    model_config = SettingsConfigDict(env_prefix="OPENAI_")

    api_key: str = Field(default="", description="OpenAI API key")
    model: str = Field(default="gpt-4o-mini", description="Chat model used by every pipeline stage")
    transcription_model: str = Field(default="whisper-1", description="Speech-to-text model")
    timeout_seconds: float = Field(default=60.0, description="Transport timeout per request")
    max_retries: int = Field(default=2, description="SDK-level retries for transient failures")

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate request timeout."""
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    @field_validator("max_retries")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        if not 0 <= v <= 10:
            raise ValueError("max_retries must be between 0 and 10")
        return v

    @property
    def is_configured(self) -> bool:
        """True when an API key is present."""
        return bool(self.api_key and self.api_key.strip())


class PipelineSettings(BaseSettings):
    """Visit pipeline generation settings."""

    model_config = SettingsConfigDict(env_prefix="PIPELINE_")

    temperature: float = Field(default=0.2, description="Sampling temperature for all stages")
    clean_max_tokens: int = Field(default=1000, description="Token budget for transcript cleaning")
    structure_max_tokens: int = Field(default=1000, description="Token budget for clinical structuring")
    analyze_max_tokens: int = Field(default=1024, description="Token budget for risk analysis")

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        """Validate temperature range."""
        if not 0.0 <= v <= 2.0:
            raise ValueError("Temperature must be between 0.0 and 2.0")
        return v

    @field_validator("clean_max_tokens", "structure_max_tokens", "analyze_max_tokens")
    @classmethod
    def validate_max_tokens(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Token budgets must be positive")
        return v


class AudioSettings(BaseSettings):
    """Audio upload configuration settings."""

    model_config = SettingsConfigDict(env_prefix="AUDIO_")

    max_size_mb: int = Field(default=25, description="Maximum audio file size in MB")
    allowed_mime_types: List[str] = Field(
        default=[
            "audio/webm",
            "audio/mp4",
            "audio/mpeg",
            "audio/mpga",
            "audio/wav",
            "audio/m4a",
        ],
        description="Accepted audio MIME types",
    )

    @field_validator("max_size_mb")
    @classmethod
    def validate_max_size(cls, v: int) -> int:
        """Validate maximum file size."""
        if not 1 <= v <= 25:
            raise ValueError("Max file size must be between 1 and 25 MB")
        return v

    @property
    def max_size_bytes(self) -> int:
        return self.max_size_mb * 1024 * 1024


class CORSSettings(BaseSettings):
    """CORS configuration settings."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    allowed_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )
    allowed_methods: List[str] = Field(
        default=["GET", "POST", "PUT", "OPTIONS"],
        description="Allowed HTTP methods",
    )
    allowed_headers: List[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v):
        """Parse allowed origins from string or list."""
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

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


class SessionSettings(BaseSettings):
    """Per-browser-session store settings."""

    model_config = SettingsConfigDict(env_prefix="SESSION_")

    header_name: str = Field(default="X-Session-ID", description="Header carrying the session key")
    idle_ttl_seconds: float = Field(default=3600.0, description="Drop a session store after this long without requests")
    max_sessions: int = Field(default=1000, description="Most session stores kept at once; least recently used go first")

    @field_validator("idle_ttl_seconds", "max_sessions")
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("Session limits must be positive")
        return v


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="Caregiver Co-Pilot", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    app_env: str = Field(default="development", description="Application environment")
    debug: bool = Field(default=False, description="Debug mode")
    port: int = Field(default=8000, description="Application port")
    host: str = Field(default="0.0.0.0", description="Application host")

    # Sub-settings
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate application environment."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"App environment must be one of: {valid_envs}")
        return v.lower()

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port number."""
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


# Global settings instance (loaded after attempting to read .env files)
_settings: Optional[Settings] = None

ENV_FILE_NAMES = (".env.local", ".env")


def _load_env_file_if_available(start: Optional[Path] = None) -> List[Path]:
    """Load .env.local and .env from the nearest directory that has them.

    .env.local is loaded first so its values win; neither file overrides
    variables already present in the process environment.
    """
    from dotenv import load_dotenv

    cwd = (start or Path(os.getcwd())).resolve()
    for parent in [cwd, *cwd.parents]:
        candidates = [parent / name for name in ENV_FILE_NAMES if (parent / name).exists()]
        if candidates:
            for candidate in candidates:
                load_dotenv(dotenv_path=str(candidate), override=False)
            return candidates
    return []


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
