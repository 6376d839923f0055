#!/usr/bin/env python3
"""
aio_openai Package

An asynchronous, typed Python client for the OpenAI API with streaming
Server-Sent Events, automatic stream reconnection with exponential backoff,
and bring-your-own-type variants of every resource method.

Example:
    import asyncio
    from aio_openai import Client, OpenAIConfig

    async def main():
        async with Client(OpenAIConfig(api_key="sk-...")) as client:
            response = await client.chat.create({
                "model": "gpt-4o-mini",
                "messages": [{"role": "user", "content": "Hello!"}],
            })
            print(response.choices[0].message.content)

    asyncio.run(main())
"""

__version__ = "0.1.0"
__author__ = "aio-openai contributors"
__description__ = "Async typed client for the OpenAI API with streaming SSE and retry/backoff"
__license__ = "MIT"
__url__ = "https://github.com/example/aio-openai"
__status__ = "Beta"

# Import client for public API
from .api.client import Client

# Import configuration for public API
from .config import (
    AzureConfig,
    Config,
    ConfigError,
    Env,
    OpenAIConfig,
)

# Import errors for public API
from .errors import (
    ApiError,
    ApiErrorBody,
    FileReadError,
    FileSaveError,
    HttpError,
    InvalidArgumentError,
    JSONDeserializeError,
    OpenAIError,
    StreamError,
)

# Import transport and options for public API
from .api import (
    HttpTransport,
    HttpxTransport,
    RequestOptions,
    byot,
)

# Import streaming for public API
from .streaming import (
    ExponentialBackoff,
    Stream,
    StreamingBackoff,
)

# Import utilities for public API
from .utils import setup_logging

# Public API exports
__all__ = [
    # Package metadata
    "__version__",
    "__author__",
    "__description__",
    # Client
    "Client",
    # Configuration
    "AzureConfig",
    "Config",
    "ConfigError",
    "Env",
    "OpenAIConfig",
    # Errors
    "ApiError",
    "ApiErrorBody",
    "FileReadError",
    "FileSaveError",
    "HttpError",
    "InvalidArgumentError",
    "JSONDeserializeError",
    "OpenAIError",
    "StreamError",
    # Transport and options
    "HttpTransport",
    "HttpxTransport",
    "RequestOptions",
    "byot",
    # Streaming
    "ExponentialBackoff",
    "Stream",
    "StreamingBackoff",
    # Utilities
    "setup_logging",
]
