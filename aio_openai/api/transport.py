"""
HTTP transport abstraction.

The low-level client performs every call through an HttpTransport, so any
HTTP stack (a preconfigured httpx client, a client with middleware, a test
double) can be plugged in. HttpxTransport is the default implementation.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncContextManager, AsyncIterator, Dict, Mapping, Optional

import httpx

from ..constants import DEFAULT_TIMEOUT
from ..errors import HttpError
from .forms import MultipartForm

logger = logging.getLogger(__name__)


@dataclass
class HttpRequest:
    """A fully prepared request: url, headers and at most one body."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    content: Optional[bytes] = None
    form: Optional[MultipartForm] = None


@dataclass
class HttpResponse:
    """A buffered response."""

    status: int
    headers: Mapping[str, str]
    body: bytes

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class StreamingResponse:
    """A response whose body is consumed incrementally."""

    def __init__(self, status: int, headers: Mapping[str, str], chunks: AsyncIterator[bytes]):
        self.status = status
        self.headers = headers
        self.chunks = chunks

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    async def aread(self) -> bytes:
        """Read the remainder of the body."""
        return b"".join([chunk async for chunk in self.chunks])


class HttpTransport(ABC):
    """Interface for the HTTP stack used by the client."""

    @abstractmethod
    async def send(self, request: HttpRequest) -> HttpResponse:
        """
        Send a request and buffer the whole response.

        Raises:
            HttpError: If the request could not be completed
        """

    @abstractmethod
    def stream(self, request: HttpRequest) -> AsyncContextManager[StreamingResponse]:
        """
        Send a request and expose the response body as it arrives.

        Leaving the context closes the connection.

        Raises:
            HttpError: If the request could not be completed or the body read fails
        """

    async def aclose(self) -> None:
        """Release pooled connections."""


class HttpxTransport(HttpTransport):
    """HttpTransport backed by an ``httpx.AsyncClient``."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = DEFAULT_TIMEOUT):
        """
        Args:
            client: Preconfigured client (proxies, middleware hooks, mock transport).
                A private client is created when omitted.
            timeout: Timeout in seconds for the private client
        """
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    async def send(self, request: HttpRequest) -> HttpResponse:
        try:
            response = await self._client.request(request.method, request.url, **_body_kwargs(request))
        except httpx.HTTPError as e:
            raise HttpError(str(e) or type(e).__name__) from e

        return HttpResponse(status=response.status_code, headers=response.headers, body=response.content)

    @asynccontextmanager
    async def stream(self, request: HttpRequest) -> AsyncIterator[StreamingResponse]:
        try:
            async with self._client.stream(request.method, request.url, **_body_kwargs(request)) as response:
                yield StreamingResponse(
                    status=response.status_code,
                    headers=response.headers,
                    chunks=_iter_chunks(response),
                )
        except httpx.HTTPError as e:
            raise HttpError(str(e) or type(e).__name__) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _body_kwargs(request: HttpRequest) -> dict:
    kwargs: dict = {"headers": request.headers}
    if request.form is not None:
        kwargs["data"] = request.form.fields
        kwargs["files"] = request.form.files
    elif request.content is not None:
        kwargs["content"] = request.content
    return kwargs


async def _iter_chunks(response: httpx.Response) -> AsyncIterator[bytes]:
    try:
        async for chunk in response.aiter_bytes():
            yield chunk
    except httpx.HTTPError as e:
        raise HttpError(str(e) or type(e).__name__) from e
