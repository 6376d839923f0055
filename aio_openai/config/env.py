"""
Environment configuration module.

This module provides an immutable snapshot of every environment-driven
setting, loaded and validated through the schema-driven ConfigLoader.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .loader import ConfigLoader
from .schema import ConfigSchema

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass(frozen=True)
class Env:
    """
    Immutable configuration container for environment variables.

    Safe to share by reference across tasks.
    """

    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = ConfigSchema.model_fields["api_base"].default
    OPENAI_ORG_ID: Optional[str] = None
    OPENAI_PROJECT_ID: Optional[str] = None
    OPENAI_BETA: Optional[str] = None
    OPENAI_TIMEOUT: float = ConfigSchema.model_fields["timeout"].default

    # Streaming backoff configuration
    OPENAI_STREAM_INITIAL_INTERVAL: float = ConfigSchema.model_fields["stream_initial_interval"].default
    OPENAI_STREAM_MULTIPLIER: float = ConfigSchema.model_fields["stream_multiplier"].default
    OPENAI_STREAM_MAX_ELAPSED_TIME: Optional[float] = ConfigSchema.model_fields["stream_max_elapsed_time"].default
    OPENAI_STREAM_MAX_RETRIES: Optional[int] = None

    @staticmethod
    def load(overrides: Optional[Mapping[str, Any]] = None) -> "Env":
        """
        Load configuration from .env.local, the OS environment and overrides.

        Args:
            overrides: Optional mapping of environment variable names to values

        Returns:
            Configured Env instance

        Raises:
            ConfigError: If a value is invalid
        """
        try:
            config = ConfigLoader.load(schema=ConfigSchema, overrides=overrides)
        except ValueError as e:
            raise ConfigError(str(e)) from e

        env = Env._from_schema(config)
        logger.debug(f"Environment configuration loaded: {env.mask()}")
        return env

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "Env":
        """
        Create Env instance from mapping, ignoring the process environment.

        Args:
            mapping: Dictionary of environment variable names to values

        Returns:
            Env instance

        Raises:
            ConfigError: If a value is invalid
        """
        try:
            config = ConfigLoader.load(schema=ConfigSchema, environ=mapping)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        return cls._from_schema(config)

    @classmethod
    def _from_schema(cls, config: ConfigSchema) -> "Env":
        return cls(
            OPENAI_API_KEY=config.api_key,
            OPENAI_BASE_URL=config.api_base,
            OPENAI_ORG_ID=config.org_id,
            OPENAI_PROJECT_ID=config.project_id,
            OPENAI_BETA=config.beta,
            OPENAI_TIMEOUT=config.timeout,
            OPENAI_STREAM_INITIAL_INTERVAL=config.stream_initial_interval,
            OPENAI_STREAM_MULTIPLIER=config.stream_multiplier,
            OPENAI_STREAM_MAX_ELAPSED_TIME=config.stream_max_elapsed_time,
            OPENAI_STREAM_MAX_RETRIES=config.stream_max_retries,
        )

    def mask(self) -> dict:
        """
        Return masked version for safe logging (hides sensitive values).

        Returns:
            Dictionary with sensitive values masked
        """
        return {
            "OPENAI_API_KEY": "***" if self.OPENAI_API_KEY else None,
            "OPENAI_BASE_URL": self.OPENAI_BASE_URL,
            "OPENAI_ORG_ID": self.OPENAI_ORG_ID,
            "OPENAI_PROJECT_ID": self.OPENAI_PROJECT_ID,
            "OPENAI_BETA": self.OPENAI_BETA,
        }
