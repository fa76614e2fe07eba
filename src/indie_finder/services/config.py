"""Configuration service for managing application settings."""

import json
import os
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any

import structlog

from ..models import AppConfig
from .errors import ConfigurationError
from .logging import ENVIRONMENTS

log = structlog.stdlib.get_logger()

# Environment variables that take precedence over the configuration file
ENV_OVERRIDES = {
    "RAWG_API_KEY": "api_key",
    "RAWG_BASE_URL": "api_base_url",
    "INDIE_FINDER_LOG_LEVEL": "log_level",
    "INDIE_FINDER_ENVIRONMENT": "environment",
}

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for managing application configuration."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "indie-game-finder" / "config.json"
        log.info("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> AppConfig:
        """Load configuration from file (or defaults) and apply environment overrides."""
        config = self._apply_env_overrides(self._load_file_config())

        if not config.api_key:
            log.warning("No RAWG API key configured, upstream calls will be rejected")

        return config

    def _load_file_config(self) -> AppConfig:
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults")
            return self._get_default_config()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data: dict[str, Any] = json.load(f)

            config = self._dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return self._get_default_config()

            log.info("Configuration loaded successfully")
            return config

        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return self._get_default_config()

    def save_config(self, config: AppConfig) -> None:
        """Write the configuration to ``config_path`` as JSON.

        Raises:
            ConfigurationError: If the configuration does not validate
        """
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ConfigurationError("Refusing to save an invalid configuration", problems=validation_result.errors)

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            data = asdict(config)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            log.info("Configuration saved successfully")

        except OSError as e:
            log.error("Failed to save configuration", error=str(e))
            raise

    def validate_config(self, config: AppConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        if not config.api_base_url.startswith(("http://", "https://")):
            errors.append("api_base_url must be an http(s) URL")

        if not config.mandatory_genre.strip():
            errors.append("mandatory_genre cannot be empty")

        if not isinstance(config.cache_ttl_seconds, (int, float)) or config.cache_ttl_seconds <= 0:
            errors.append("cache_ttl_seconds must be a positive number")

        if config.cache_max_entries is not None:
            if not isinstance(config.cache_max_entries, int) or config.cache_max_entries < 1:
                errors.append("cache_max_entries must be a positive integer or null")

        if config.request_timeout is not None:
            if not isinstance(config.request_timeout, (int, float)) or config.request_timeout <= 0:
                errors.append("request_timeout must be a positive number or null")

        if not isinstance(config.port, int) or not 1 <= config.port <= 65535:
            errors.append("port must be between 1 and 65535")

        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}")

        if config.environment not in ENVIRONMENTS:
            errors.append(f"environment must be one of: {', '.join(ENVIRONMENTS)}")

        return ValidationResult(len(errors) == 0, errors)

    def _get_default_config(self) -> AppConfig:
        """Get default configuration."""
        return AppConfig()

    def _apply_env_overrides(self, config: AppConfig) -> AppConfig:
        overrides = {}
        for env_name, setting in ENV_OVERRIDES.items():
            value = os.getenv(env_name, "").strip()
            if value:
                overrides[setting] = _normalize(setting, value)

        if not overrides:
            return config

        log.debug("Applying environment overrides", settings=sorted(overrides))
        overridden = replace(config, **overrides)
        if not self.validate_config(overridden).is_valid:
            log.warning("Ignoring invalid environment overrides", settings=sorted(overrides))
            return config
        return overridden

    def _dict_to_config(self, data: dict[str, Any]) -> AppConfig:
        """Convert dictionary to AppConfig, keeping defaults for missing keys."""
        defaults = AppConfig()

        cache_max_raw = data.get("cache_max_entries", defaults.cache_max_entries)
        timeout_raw = data.get("request_timeout", defaults.request_timeout)

        return AppConfig(
            api_base_url=str(data.get("api_base_url", defaults.api_base_url)).rstrip("/"),
            api_key=str(data.get("api_key", defaults.api_key)),
            mandatory_genre=str(data.get("mandatory_genre", defaults.mandatory_genre)),
            cache_ttl_seconds=float(data.get("cache_ttl_seconds", defaults.cache_ttl_seconds)),
            cache_max_entries=int(cache_max_raw) if cache_max_raw is not None else None,
            request_timeout=float(timeout_raw) if timeout_raw is not None else None,
            host=str(data.get("host", defaults.host)),
            port=int(data.get("port", defaults.port)),
            log_level=str(data.get("log_level", defaults.log_level)).upper(),
            environment=str(data.get("environment", defaults.environment)).lower(),
            validation_errors_as_client_errors=bool(
                data.get("validation_errors_as_client_errors", defaults.validation_errors_as_client_errors)
            ),
        )


def _normalize(setting: str, value: str) -> str:
    if setting == "log_level":
        return value.upper()
    if setting == "environment":
        return value.lower()
    return value
