"""
Chat completions: given a list of messages comprising a conversation, the
model will return a response.
"""

from typing import Any

from ..api.byot import Serializable, byot
from ..errors import InvalidArgumentError
from ..models.chat import ChatCompletionChunk, CreateChatCompletionRequest, CreateChatCompletionResponse
from ..streaming.stream import Stream
from .base import Resource, stream_flag, with_stream_enabled


class Chat(Resource):
    """Operations on ``/chat/completions``."""

    @byot(T0=Serializable)
    async def create(self, request: CreateChatCompletionRequest, *,
                     response_model: Any = None) -> CreateChatCompletionResponse:
        """
        Creates a model response for the given chat conversation.

        Raises:
            InvalidArgumentError: If the request asks for streaming
        """
        if stream_flag(request) is True:
            raise InvalidArgumentError("When stream is true, use create_stream()")

        return await self._client.post("/chat/completions", request, self._options, response_model=response_model)

    @byot(T0=Serializable)
    async def create_stream(self, request: CreateChatCompletionRequest, *,
                            response_model: Any = None) -> Stream[ChatCompletionChunk]:
        """
        Creates a completion for the chat message and streams partial deltas.

        The stream ends at ``data: [DONE]``; ``stream`` is always sent as true.

        Raises:
            InvalidArgumentError: If the request sets stream to false
        """
        if stream_flag(request) is False:
            raise InvalidArgumentError("When stream is false, use create()")

        return await self._client.post_stream("/chat/completions", with_stream_enabled(request), self._options,
                                              response_model=response_model)

