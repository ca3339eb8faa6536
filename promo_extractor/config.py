"""
Configuration for the promo extractor.

Settings are read from the environment (and a local .env file) once, validated
and frozen. Components receive the resulting value through their constructors
instead of reading os.environ themselves.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from extraction.retry import RETRY_PRESETS, RetryPolicy, RetryPreset
from promo_extractor.utils.errors import ConfigurationError


class LLMProvider(str, Enum):
    """Supported remote model providers (all speak the OpenAI chat API)."""

    NONE = "none"
    OPENAI = "openai"
    ABACUS = "abacus"


DEFAULT_MODELS = {
    LLMProvider.OPENAI: "gpt-4o-mini",
    LLMProvider.ABACUS: "claude-3-5-sonnet",
}

DEFAULT_BASE_URLS = {
    LLMProvider.ABACUS: "https://routellm.abacus.ai/v1",
}

# Provider-specific key variables, checked when LLM_API_KEY is not set.
PROVIDER_KEY_VARS = {
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.ABACUS: "ABACUS_API_KEY",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}


class AIProviderConfig(BaseModel):
    """Everything the AI extractor needs to reach its endpoint."""

    model_config = ConfigDict(frozen=True)

    provider: LLMProvider = LLMProvider.NONE
    api_key: Optional[str] = None
    model: Optional[str] = None
    base_url: Optional[str] = None
    timeout_seconds: float = Field(30.0, gt=0)
    temperature: Optional[float] = Field(None, ge=0, le=2)
    max_tokens: Optional[int] = Field(None, gt=0)

    @property
    def is_complete(self) -> bool:
        """Provider selected and credentials present."""
        return self.provider is not LLMProvider.NONE and bool(self.api_key and self.model)


class Settings(BaseModel):
    """Application settings."""

    model_config = ConfigDict(frozen=True)

    # Runtime
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = Field(3001, gt=0, lt=65536)

    # Logging
    log_level: str = "INFO"
    log_file_path: Optional[Path] = None
    structured_logging: bool = True

    # Remote model
    llm_provider: LLMProvider = LLMProvider.NONE
    llm_api_key: Optional[str] = None
    llm_model: Optional[str] = None
    llm_base_url: Optional[str] = None
    llm_timeout_seconds: float = Field(30.0, gt=0)
    llm_temperature: Optional[float] = Field(None, ge=0, le=2)
    llm_max_tokens: Optional[int] = Field(None, gt=0)
    retry_preset: RetryPreset = RetryPreset.STANDARD

    # Strategy selection
    fallback_enabled: bool = True

    @property
    def dev_mode(self) -> bool:
        return self.environment == "development"

    @property
    def retry_policy(self) -> RetryPolicy:
        return RETRY_PRESETS[self.retry_preset]

    def ai_provider_config(self) -> AIProviderConfig:
        """Settings for the AI extractor."""
        return AIProviderConfig(
            provider=self.llm_provider,
            api_key=self.llm_api_key,
            model=self.llm_model,
            base_url=self.llm_base_url,
            timeout_seconds=self.llm_timeout_seconds,
            temperature=self.llm_temperature,
            max_tokens=self.llm_max_tokens,
        )

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env: Variables to read; defaults to os.environ after loading .env

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        if env is None:
            load_dotenv()
            env = os.environ

        try:
            provider = LLMProvider(env.get("LLM_PROVIDER", "none").strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown LLM_PROVIDER '{env.get('LLM_PROVIDER')}'",
                {"supported": [p.value for p in LLMProvider]},
            )

        api_key = env.get("LLM_API_KEY")
        if not api_key and provider in PROVIDER_KEY_VARS:
            api_key = env.get(PROVIDER_KEY_VARS[provider])

        values = {
            "environment": env.get("ENVIRONMENT", "development"),
            "host": env.get("HOST", "0.0.0.0"),
            "port": env.get("PORT", "3001"),
            "log_level": env.get("LOG_LEVEL", "INFO").upper(),
            "log_file_path": env.get("LOG_FILE") or None,
            "structured_logging": env.get("LOG_STRUCTURED", "true").lower() in _TRUE_VALUES,
            "llm_provider": provider,
            "llm_api_key": api_key or None,
            "llm_model": env.get("LLM_MODEL") or DEFAULT_MODELS.get(provider),
            "llm_base_url": env.get("LLM_BASE_URL") or DEFAULT_BASE_URLS.get(provider),
            "retry_preset": env.get("LLM_RETRY_PRESET", "standard").strip().lower(),
            "fallback_enabled": env.get("EXTRACTOR_FALLBACK_ENABLED", "true").lower() in _TRUE_VALUES,
        }

        try:
            if env.get("LLM_TIMEOUT_MS"):
                values["llm_timeout_seconds"] = int(env["LLM_TIMEOUT_MS"]) / 1000
            if env.get("LLM_TEMPERATURE"):
                values["llm_temperature"] = float(env["LLM_TEMPERATURE"])
            if env.get("LLM_MAX_TOKENS"):
                values["llm_max_tokens"] = int(env["LLM_MAX_TOKENS"])
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}")

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid configuration",
                {"errors": [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]},
            ) from e


# Singleton instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings (used by tests)."""
    global _settings
    _settings = None
