"""
Schema-driven configuration loader.

This module provides a ConfigLoader that uses the configuration schema
to automatically load, validate, and merge configuration from multiple sources.
"""

import logging
import os
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .schema import ConfigSchema

logger = logging.getLogger(__name__)

DOTENV_FILE = ".env.local"


class ConfigLoader:
    """Loads and validates configuration using a schema-driven approach."""

    @staticmethod
    def load(
        schema: type[ConfigSchema] = ConfigSchema,
        overrides: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> ConfigSchema:
        """
        Load configuration from all sources with precedence handling.

        Loading order (lowest to highest priority):
        1. Schema defaults
        2. .env.local file (if it exists; skipped when ``environ`` is given)
        3. OS environment variables (or ``environ``)
        4. Explicit overrides, keyed by environment variable name

        Args:
            schema: The configuration schema class to use
            overrides: Mapping of environment variable names to values
            environ: Mapping used instead of ``os.environ`` (useful for testing)

        Returns:
            Validated configuration instance

        Raises:
            ValueError: If configuration validation fails
        """
        config_dict: Dict[str, Any] = {}

        # Step 1: Load from .env.local file if available
        if environ is None:
            _load_from_dotenv_file()
            environ = os.environ

        # Step 2: Load from environment variables based on schema
        for field_name, env_var in _env_vars(schema).items():
            env_value = environ.get(env_var)
            if env_value is not None:
                # Empty strings fall back to the schema default
                stripped = env_value.strip()
                if stripped:
                    config_dict[field_name] = stripped

        # Step 3: Apply explicit overrides (highest priority)
        if overrides:
            for field_name, env_var in _env_vars(schema).items():
                if env_var in overrides and overrides[env_var] is not None:
                    value = overrides[env_var]
                    if isinstance(value, str):
                        stripped = value.strip()
                        if stripped:
                            config_dict[field_name] = stripped
                        else:
                            # Treat explicit empty string as an override to clear the value
                            config_dict.pop(field_name, None)
                    else:
                        config_dict[field_name] = value

        # Step 4: Create and validate the configuration
        try:
            config = schema(**config_dict)
            logger.debug("Configuration loaded and validated successfully")
            return config
        except ValidationError as e:
            env_vars = _env_vars(schema)
            errors = []
            for error in e.errors():
                field = error["loc"][0] if error["loc"] else ""
                env_var = env_vars.get(field, str(field).upper())
                errors.append(f"{env_var}: {error['msg']}")

            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {err}" for err in errors)
            raise ValueError(error_msg) from e


def _env_vars(schema: type[ConfigSchema]) -> Dict[str, str]:
    """Map schema field names to their environment variable names."""
    mapping = {}
    for field_name, field_info in schema.model_fields.items():
        extra = field_info.json_schema_extra
        if isinstance(extra, dict) and extra.get("env_var"):
            mapping[field_name] = extra["env_var"]
    return mapping


def _load_from_dotenv_file() -> None:
    """Load values from the .env.local file without overriding the environment."""
    if os.path.exists(DOTENV_FILE):
        load_dotenv(DOTENV_FILE, override=False)
        logger.debug(f"Loaded configuration from {DOTENV_FILE} file")
    else:
        logger.debug(f"{DOTENV_FILE} file not found, skipping")
