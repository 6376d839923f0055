"""
Legacy text completions: given a prompt, the model will return one or more
predicted completions.
"""

from typing import Any

from ..api.byot import Serializable, byot
from ..errors import InvalidArgumentError
from ..models.completions import CreateCompletionRequest, CreateCompletionResponse
from ..streaming.stream import Stream
from .base import Resource, stream_flag, with_stream_enabled


class Completions(Resource):
    """Operations on ``/completions``."""

    @byot(T0=Serializable)
    async def create(self, request: CreateCompletionRequest, *,
                     response_model: Any = None) -> CreateCompletionResponse:
        """
        Creates a completion for the provided prompt and parameters.

        Raises:
            InvalidArgumentError: If the request asks for streaming
        """
        if stream_flag(request) is True:
            raise InvalidArgumentError("When stream is true, use create_stream()")

        return await self._client.post("/completions", request, self._options, response_model=response_model)

    @byot(T0=Serializable)
    async def create_stream(self, request: CreateCompletionRequest, *,
                            response_model: Any = None) -> Stream[CreateCompletionResponse]:
        """
        Creates a completion and streams partial progress.

        Raises:
            InvalidArgumentError: If the request sets stream to false
        """
        if stream_flag(request) is False:
            raise InvalidArgumentError("When stream is false, use create()")

        return await self._client.post_stream("/completions", with_stream_enabled(request), self._options,
                                              response_model=response_model)
