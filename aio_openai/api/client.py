"""
Low-level API client.

The Client owns the configuration, the HTTP transport and the streaming
backoff configuration. Resource clients (``client.chat``, ``client.files``,
...) are thin wrappers over its low-level operations, which can also be
called directly for endpoints the library does not model:

    async with Client(OpenAIConfig(api_key="sk-...")) as client:
        models = await client.get("/models", response_model=dict)
"""

import copy
import json
import logging
import time
from typing import Any, Mapping, Optional, Tuple

import httpx

from ..config import Config, Env, OpenAIConfig
from ..errors import ApiError, HttpError, OpenAIError, parse_error_envelope
from ..streaming import EventSource, ExponentialBackoff, Stream, StreamingBackoff
from ..resources import Audio, Chat, Completions, Embeddings, Files, Images, Models, Moderations
from ..utils.logging import log_api_error, log_request_event
from .byot import deserialize, to_jsonable
from .forms import to_multipart
from .options import RequestOptions, merge_headers
from .transport import HttpRequest, HttpResponse, HttpTransport, HttpxTransport

logger = logging.getLogger(__name__)

_NO_OPTIONS = RequestOptions()


class Client:
    """
    Async client for the OpenAI API.

    Args:
        config: OpenAIConfig or AzureConfig; read from the environment when omitted
        transport: HTTP stack used for every call, an httpx client by default
        backoff: Reconnection backoff for streaming calls

    Non-streaming calls are not retried.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        transport: Optional[HttpTransport] = None,
        backoff: Optional[ExponentialBackoff] = None,
    ):
        self._config = config if config is not None else OpenAIConfig.from_env()
        self._transport = transport if transport is not None else HttpxTransport()
        self._backoff = backoff if backoff is not None else ExponentialBackoff()
        logger.debug(f"Client created for {self._config!r}")

    @classmethod
    def from_env(cls, env: Optional[Env] = None) -> "Client":
        """
        Create a client from OPENAI_* environment variables.

        Raises:
            ConfigError: If a value is invalid
        """
        env = env if env is not None else Env.load()
        return cls(
            config=OpenAIConfig.from_env(env),
            transport=HttpxTransport(timeout=env.OPENAI_TIMEOUT),
            backoff=ExponentialBackoff.from_env(env),
        )

    @property
    def config(self) -> Config:
        return self._config

    @property
    def transport(self) -> HttpTransport:
        return self._transport

    @property
    def backoff(self) -> ExponentialBackoff:
        return self._backoff

    def with_config(self, config: Config) -> "Client":
        """Copy of this client using another configuration (the transport is shared)."""
        client = copy.copy(self)
        client._config = config
        return client

    def with_transport(self, transport: HttpTransport) -> "Client":
        client = copy.copy(self)
        client._transport = transport
        return client

    def with_backoff(self, backoff: ExponentialBackoff) -> "Client":
        client = copy.copy(self)
        client._backoff = backoff
        return client

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    # Resource groups

    @property
    def models(self) -> Models:
        return Models(self)

    @property
    def chat(self) -> Chat:
        return Chat(self)

    @property
    def completions(self) -> Completions:
        return Completions(self)

    @property
    def embeddings(self) -> Embeddings:
        return Embeddings(self)

    @property
    def moderations(self) -> Moderations:
        return Moderations(self)

    @property
    def files(self) -> Files:
        return Files(self)

    @property
    def images(self) -> Images:
        return Images(self)

    @property
    def audio(self) -> Audio:
        return Audio(self)

    # Low-level operations

    async def get(self, path: str, options: RequestOptions = _NO_OPTIONS, *, response_model: Any) -> Any:
        """Make a GET request and deserialize the response."""
        response = await self._execute(self._build_request("GET", path, options))
        return self._deserialize(response, response_model)

    async def get_raw(self, path: str, options: RequestOptions = _NO_OPTIONS) -> Tuple[bytes, Mapping[str, str]]:
        """Make a GET request and return the raw body with the response headers."""
        response = await self._execute(self._build_request("GET", path, options))
        return response.body, response.headers

    async def delete(self, path: str, options: RequestOptions = _NO_OPTIONS, *, response_model: Any) -> Any:
        """Make a DELETE request and deserialize the response."""
        response = await self._execute(self._build_request("DELETE", path, options))
        return self._deserialize(response, response_model)

    async def post(self, path: str, body: Any, options: RequestOptions = _NO_OPTIONS, *,
                   response_model: Any) -> Any:
        """Make a POST request with a JSON body and deserialize the response."""
        response = await self._execute(self._build_request("POST", path, options, json_body=body))
        return self._deserialize(response, response_model)

    async def post_raw(self, path: str, body: Any,
                       options: RequestOptions = _NO_OPTIONS) -> Tuple[bytes, Mapping[str, str]]:
        """Make a POST request with a JSON body and return the raw body with the response headers."""
        response = await self._execute(self._build_request("POST", path, options, json_body=body))
        return response.body, response.headers

    async def post_form(self, path: str, form_source: Any, options: RequestOptions = _NO_OPTIONS, *,
                        response_model: Any) -> Any:
        """
        Make a multipart POST request and deserialize the response.

        Args:
            form_source: Object exposing ``to_form()`` or a mapping of fields
        """
        request = self._build_request("POST", path, options, form_source=form_source)
        response = await self._execute(request)
        return self._deserialize(response, response_model)

    async def post_form_raw(self, path: str, form_source: Any,
                            options: RequestOptions = _NO_OPTIONS) -> Tuple[bytes, Mapping[str, str]]:
        """Make a multipart POST request and return the raw body with the response headers."""
        response = await self._execute(self._build_request("POST", path, options, form_source=form_source))
        return response.body, response.headers

    async def post_stream(self, path: str, body: Any, options: RequestOptions = _NO_OPTIONS, *,
                          response_model: Any, ends_on_close: bool = False) -> Stream:
        """
        Open a streaming POST request.

        Args:
            ends_on_close: End the stream when the server closes it instead of reconnecting

        Returns:
            Stream of ``response_model`` chunks, reconnecting with the client's backoff
        """
        request = self._build_request("POST", path, options, json_body=body)
        return self._stream(request, response_model, ends_on_close)

    async def post_form_stream(self, path: str, form_source: Any, options: RequestOptions = _NO_OPTIONS, *,
                               response_model: Any, ends_on_close: bool = False) -> Stream:
        """Open a streaming multipart POST request."""
        request = self._build_request("POST", path, options, form_source=form_source)
        return self._stream(request, response_model, ends_on_close)

    def _stream(self, request: HttpRequest, response_model: Any, ends_on_close: bool = False) -> Stream:
        source = EventSource(self._transport, request, StreamingBackoff(self._backoff), ends_on_close=ends_on_close)
        return Stream(source, response_model)

    def _build_request(
        self,
        method: str,
        path: str,
        options: RequestOptions,
        json_body: Any = None,
        form_source: Any = None,
    ) -> HttpRequest:
        params = list(self._config.query()) + list(options.query)
        url = httpx.URL(self._config.url(path), params=params) if params else httpx.URL(self._config.url(path))

        headers = merge_headers(self._config.headers(), options.headers)
        request = HttpRequest(method=method, url=str(url), headers=headers)

        if json_body is not None:
            request.content = json.dumps(to_jsonable(json_body), ensure_ascii=False).encode("utf-8")
            request.headers["Content-Type"] = "application/json"
        elif form_source is not None:
            request.form = to_multipart(form_source)

        return request

    async def _execute(self, request: HttpRequest) -> HttpResponse:
        started = time.monotonic()
        try:
            response = await self._transport.send(request)
        except HttpError:
            log_request_event(request.method, request.url, None, time.monotonic() - started, logger=logger)
            raise

        log_request_event(request.method, request.url, response.status, time.monotonic() - started, logger=logger)

        if not response.is_success:
            raise self._error_for(request, response)
        return response

    def _error_for(self, request: HttpRequest, response: HttpResponse) -> OpenAIError:
        error = parse_error_envelope(response.body)
        if error is None:
            return HttpError(response.text, response.status)

        log_api_error(request.url, response.status, error.type, error.code, error.message, logger=logger)
        return ApiError(error, response.status)

    def _deserialize(self, response: HttpResponse, response_model: Any) -> Any:
        return deserialize(response.body, response_model)
