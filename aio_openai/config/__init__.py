"""
Configuration management for the aio_openai client.

This module provides centralized configuration handling with support for
environment variables, .env.local files and explicit overrides, plus the
provider configurations the client uses to address and authenticate requests.

Uses a schema-driven approach with Pydantic for validation.
"""

from .env import Env, ConfigError
from .schema import ConfigSchema
from .loader import ConfigLoader
from .providers import Config, OpenAIConfig, AzureConfig

__all__ = [
    "Env",
    "ConfigError",
    "ConfigSchema",
    "ConfigLoader",
    "Config",
    "OpenAIConfig",
    "AzureConfig",
]
