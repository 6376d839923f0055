"""
Client configurations: OpenAIConfig for OpenAI, AzureConfig for Azure OpenAI Service.

The low-level client relies on a Config for every API call: it supplies the
authentication headers, the full url of a request path and any query
parameters the service requires.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional, Tuple

from ..constants import (
    AZURE_API_KEY_HEADER,
    OPENAI_API_BASE,
    OPENAI_BETA_HEADER,
    OPENAI_ORGANIZATION_HEADER,
    OPENAI_PROJECT_HEADER,
)
from .env import Env


class Config(ABC):
    """Interface the low-level client uses to address and authenticate requests."""

    @abstractmethod
    def headers(self) -> Dict[str, str]:
        """Headers attached to every request."""

    @abstractmethod
    def url(self, path: str) -> str:
        """Full url for an API path such as ``/chat/completions``."""

    @abstractmethod
    def query(self) -> List[Tuple[str, str]]:
        """Query parameters attached to every request."""

    api_base: str
    api_key: str


@dataclass(frozen=True)
class OpenAIConfig(Config):
    """
    Configuration for the OpenAI API.

    Instances are immutable; the ``with_*`` methods return updated copies.

    Attributes:
        api_base: Base url, defaults to https://api.openai.com/v1
        api_key: Secret sent as a bearer token
        org_id: Optional organization id (OpenAI-Organization header)
        project_id: Optional project id (OpenAI-Project header)
        beta: Optional beta feature opt-in, e.g. ``assistants=v2`` (OpenAI-Beta header)
        custom_headers: Extra headers attached to every request
    """

    api_base: str = OPENAI_API_BASE
    api_key: str = ""
    org_id: str = ""
    project_id: str = ""
    beta: str = ""
    custom_headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "api_base", self.api_base.rstrip("/"))

    @classmethod
    def from_env(cls, env: Optional[Env] = None) -> "OpenAIConfig":
        """Build a configuration from OPENAI_* environment variables."""
        env = env if env is not None else Env.load()
        return cls(
            api_base=env.OPENAI_BASE_URL,
            api_key=env.OPENAI_API_KEY,
            org_id=env.OPENAI_ORG_ID or "",
            project_id=env.OPENAI_PROJECT_ID or "",
            beta=env.OPENAI_BETA or "",
        )

    def with_api_key(self, api_key: str) -> "OpenAIConfig":
        return replace(self, api_key=api_key)

    def with_api_base(self, api_base: str) -> "OpenAIConfig":
        return replace(self, api_base=api_base)

    def with_org_id(self, org_id: str) -> "OpenAIConfig":
        return replace(self, org_id=org_id)

    def with_project_id(self, project_id: str) -> "OpenAIConfig":
        return replace(self, project_id=project_id)

    def with_beta(self, beta: str) -> "OpenAIConfig":
        return replace(self, beta=beta)

    def with_header(self, key: str, value: str) -> "OpenAIConfig":
        headers = dict(self.custom_headers)
        headers[key] = value
        return replace(self, custom_headers=headers)

    def headers(self) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if self.org_id:
            headers[OPENAI_ORGANIZATION_HEADER] = self.org_id
        if self.project_id:
            headers[OPENAI_PROJECT_HEADER] = self.project_id
        if self.beta:
            headers[OPENAI_BETA_HEADER] = self.beta
        headers.update(self.custom_headers)
        return headers

    def url(self, path: str) -> str:
        return f"{self.api_base}{path}"

    def query(self) -> List[Tuple[str, str]]:
        return []

    def __repr__(self) -> str:
        # Never leak the key through reprs in logs or tracebacks
        return (
            f"OpenAIConfig(api_base={self.api_base!r}, api_key={'***' if self.api_key else ''!r}, "
            f"org_id={self.org_id!r}, project_id={self.project_id!r}, beta={self.beta!r})"
        )


@dataclass(frozen=True)
class AzureConfig(Config):
    """
    Configuration for Azure OpenAI Service.

    Attributes:
        api_base: Resource url in the form https://your-resource-name.openai.azure.com
        api_key: Secret sent in the ``api-key`` header
        deployment_id: Deployment every request is routed to
        api_version: Value of the ``api-version`` query parameter, omitted when empty
    """

    api_base: str = ""
    api_key: str = ""
    deployment_id: str = ""
    api_version: str = ""
    custom_headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "api_base", self.api_base.rstrip("/"))

    @classmethod
    def from_env(cls, env: Optional[Env] = None, deployment_id: str = "", api_version: str = "") -> "AzureConfig":
        """Build a configuration taking the key and base url from the environment."""
        env = env if env is not None else Env.load()
        return cls(
            api_base=env.OPENAI_BASE_URL,
            api_key=env.OPENAI_API_KEY,
            deployment_id=deployment_id,
            api_version=api_version,
        )

    def with_api_key(self, api_key: str) -> "AzureConfig":
        return replace(self, api_key=api_key)

    def with_api_base(self, api_base: str) -> "AzureConfig":
        return replace(self, api_base=api_base)

    def with_deployment_id(self, deployment_id: str) -> "AzureConfig":
        return replace(self, deployment_id=deployment_id)

    def with_api_version(self, api_version: str) -> "AzureConfig":
        return replace(self, api_version=api_version)

    def headers(self) -> Dict[str, str]:
        headers = {AZURE_API_KEY_HEADER: self.api_key}
        headers.update(self.custom_headers)
        return headers

    def url(self, path: str) -> str:
        return f"{self.api_base}/openai/deployments/{self.deployment_id}{path}"

    def query(self) -> List[Tuple[str, str]]:
        if not self.api_version:
            return []
        return [("api-version", self.api_version)]

    def __repr__(self) -> str:
        return (
            f"AzureConfig(api_base={self.api_base!r}, api_key={'***' if self.api_key else ''!r}, "
            f"deployment_id={self.deployment_id!r}, api_version={self.api_version!r})"
        )
