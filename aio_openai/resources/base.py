"""
Base class for resource clients.
"""

import copy
from typing import TYPE_CHECKING, Any, Mapping, Optional

from ..api.options import QueryParams, RequestOptions

if TYPE_CHECKING:
    from ..api.client import Client


class Resource:
    """
    A group of API operations bound to a client.

    Resources are cheap to create; the ``with_*`` methods return a copy
    carrying extra query parameters or headers for every call it makes.
    """

    def __init__(self, client: "Client", options: Optional[RequestOptions] = None):
        self._client = client
        self._options = options if options is not None else RequestOptions()

    @property
    def request_options(self) -> RequestOptions:
        return self._options

    def with_query(self, query: QueryParams):
        return self._with_options(self._options.with_query(query))

    def with_header(self, key: str, value: str):
        return self._with_options(self._options.with_header(key, value))

    def with_headers(self, headers: Mapping[str, str]):
        return self._with_options(self._options.with_headers(headers))

    def _with_options(self, options: RequestOptions) -> Any:
        resource = copy.copy(self)
        resource._options = options
        return resource


def stream_flag(request: Any) -> Any:
    """The ``stream`` field of a request model or mapping, None if unset."""
    if isinstance(request, Mapping):
        return request.get("stream")
    return getattr(request, "stream", None)


def with_stream_enabled(request: Any) -> Any:
    """Copy of the request with ``stream`` set to true; other objects pass through."""
    if isinstance(request, Mapping):
        return {**request, "stream": True}
    if hasattr(request, "model_copy"):
        return request.model_copy(update={"stream": True})
    return request
