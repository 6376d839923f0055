#!/usr/bin/env python3
"""
Helper functions for tests that talk to a mocked API.

Requests are answered by an ``httpx.MockTransport`` handler, so the real
HttpxTransport code path is exercised without network access.
"""

import json
from typing import Any, Callable, Iterable, List, Optional

import httpx

from aio_openai import Client, ExponentialBackoff, OpenAIConfig
from aio_openai.api import HttpxTransport

API_BASE = "https://api.test/v1"
SSE_HEADERS = {"content-type": "text/event-stream"}


def make_transport(handler: Callable) -> HttpxTransport:
    """Wrap a MockTransport handler in the library's transport."""
    return HttpxTransport(httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def make_client(handler: Callable, config=None, backoff: Optional[ExponentialBackoff] = None) -> Client:
    """
    Create a client whose requests are answered by ``handler``.

    Args:
        handler: Function taking an httpx.Request and returning an httpx.Response
        config: Client configuration (a test OpenAIConfig by default)
        backoff: Streaming backoff (fast, deterministic values by default)
    """
    if config is None:
        config = OpenAIConfig(api_base=API_BASE, api_key="sk-test")
    if backoff is None:
        backoff = ExponentialBackoff(initial_interval=0.1, multiplier=2.0, max_elapsed_time=1.0)
    return Client(config, transport=make_transport(handler), backoff=backoff)


def json_response(payload: Any, status: int = 200, headers: Optional[dict] = None) -> httpx.Response:
    return httpx.Response(status, json=payload, headers=headers)


def error_response(status: int, message: str, error_type: Optional[str] = None,
                   code: Optional[str] = None, headers: Optional[dict] = None) -> httpx.Response:
    """Response carrying the API error envelope."""
    error = {"message": message, "type": error_type, "param": None, "code": code}
    return httpx.Response(status, json={"error": error}, headers=headers)


def sse_body(*data: str) -> bytes:
    """Encode one ``data:`` event per argument."""
    return "".join(f"data: {item}\n\n" for item in data).encode("utf-8")


async def _iterate(chunks: Iterable[bytes]):
    for chunk in chunks:
        yield chunk


def sse_response(body: bytes = b"", chunks: Optional[List[bytes]] = None, status: int = 200) -> httpx.Response:
    """
    Event stream response.

    Args:
        body: Whole body sent as a single chunk
        chunks: Body split into chunks exactly as given (overrides ``body``)
    """
    content = _iterate(chunks) if chunks is not None else body
    return httpx.Response(status, headers=SSE_HEADERS, content=content)


def chat_chunk(content: Optional[str] = None, chunk_id: str = "chatcmpl-1") -> str:
    """JSON text of a chat completion chunk with one delta."""
    return json.dumps({
        "id": chunk_id,
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": "gpt-4o-mini",
        "choices": [{"index": 0, "delta": {"content": content}, "finish_reason": None}],
    })


def chat_completion(content: str = "Hello!") -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o-mini",
        "choices": [{
            "index": 0,
            "message": {"role": "assistant", "content": content},
            "finish_reason": "stop",
        }],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }
