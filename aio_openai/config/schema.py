"""
Configuration schema definition using Pydantic.

This module defines the declarative configuration schema that serves as
the single source of truth for all environment-driven configuration.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ..constants import (
    DEFAULT_INITIAL_INTERVAL,
    DEFAULT_MAX_ELAPSED_TIME,
    DEFAULT_MULTIPLIER,
    DEFAULT_TIMEOUT,
    OPENAI_API_BASE,
)


class ConfigSchema(BaseModel):
    """
    Declarative configuration schema.

    Each field can be set via an environment variable (named in
    ``json_schema_extra``) or an explicit override.
    """

    # Core API configuration
    api_key: str = Field(
        "",
        description="API key sent as a bearer token",
        json_schema_extra={
            "env_var": "OPENAI_API_KEY",
            "sensitive": True,
        }
    )

    api_base: str = Field(
        OPENAI_API_BASE,
        description="Base url every request path is appended to",
        json_schema_extra={
            "env_var": "OPENAI_BASE_URL",
        }
    )

    org_id: Optional[str] = Field(
        None,
        description="Organization id sent in the OpenAI-Organization header",
        json_schema_extra={
            "env_var": "OPENAI_ORG_ID",
        }
    )

    project_id: Optional[str] = Field(
        None,
        description="Project id sent in the OpenAI-Project header",
        json_schema_extra={
            "env_var": "OPENAI_PROJECT_ID",
        }
    )

    beta: Optional[str] = Field(
        None,
        description="Beta feature opt-in flags, e.g. assistants=v2",
        json_schema_extra={
            "env_var": "OPENAI_BETA",
        }
    )

    timeout: float = Field(
        DEFAULT_TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
        json_schema_extra={
            "env_var": "OPENAI_TIMEOUT",
        }
    )

    # Streaming backoff configuration
    stream_initial_interval: float = Field(
        DEFAULT_INITIAL_INTERVAL,
        gt=0,
        description="Seconds to wait before the first stream reconnection",
        json_schema_extra={
            "env_var": "OPENAI_STREAM_INITIAL_INTERVAL",
        }
    )

    stream_multiplier: float = Field(
        DEFAULT_MULTIPLIER,
        ge=1.0,
        description="Factor applied to the previous wait on each reconnection",
        json_schema_extra={
            "env_var": "OPENAI_STREAM_MULTIPLIER",
        }
    )

    stream_max_elapsed_time: Optional[float] = Field(
        DEFAULT_MAX_ELAPSED_TIME,
        gt=0,
        description="Upper bound for a single reconnection wait in seconds",
        json_schema_extra={
            "env_var": "OPENAI_STREAM_MAX_ELAPSED_TIME",
        }
    )

    stream_max_retries: Optional[int] = Field(
        None,
        ge=0,
        description="Maximum consecutive reconnections (unlimited when unset)",
        json_schema_extra={
            "env_var": "OPENAI_STREAM_MAX_RETRIES",
        }
    )

    @field_validator("api_base", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: Any) -> Any:
        """Normalize the base url so paths can be appended directly."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    model_config = {
        "validate_assignment": True,
        "extra": "forbid"
    }
