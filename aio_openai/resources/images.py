"""
Given a prompt and/or an input image, the model will generate a new image.
"""

from typing import Any

from ..api.byot import FormConvertible, Serializable, byot
from ..errors import InvalidArgumentError
from ..models.images import (
    CreateImageEditRequest,
    CreateImageRequest,
    CreateImageVariationRequest,
    ImageEditStreamEvent,
    ImageGenStreamEvent,
    ImagesResponse,
)
from ..streaming.stream import Stream
from .base import Resource, stream_flag, with_stream_enabled


class Images(Resource):
    """Operations on ``/images``."""

    @byot(T0=Serializable)
    async def generate(self, request: CreateImageRequest, *, response_model: Any = None) -> ImagesResponse:
        """
        Creates an image given a prompt.

        Raises:
            InvalidArgumentError: If the request asks for streaming
        """
        if stream_flag(request) is True:
            raise InvalidArgumentError("When stream is true, use generate_stream()")

        return await self._client.post("/images/generations", request, self._options,
                                       response_model=response_model)

    @byot(T0=Serializable)
    async def generate_stream(self, request: CreateImageRequest, *,
                              response_model: Any = None) -> Stream[ImageGenStreamEvent]:
        """
        Creates an image given a prompt and streams partial images (gpt-image-1).

        The stream ends when the server closes it after the completed events.

        Raises:
            InvalidArgumentError: If the request sets stream to false
        """
        if stream_flag(request) is False:
            raise InvalidArgumentError("When stream is false, use generate()")

        return await self._client.post_stream("/images/generations", with_stream_enabled(request), self._options,
                                              response_model=response_model, ends_on_close=True)

    @byot(T0=FormConvertible)
    async def edit(self, request: CreateImageEditRequest, *, response_model: Any = None) -> ImagesResponse:
        """
        Creates an edited or extended image given one or more source images and a prompt.

        Raises:
            InvalidArgumentError: If the request asks for streaming
        """
        if stream_flag(request) is True:
            raise InvalidArgumentError("When stream is true, use edit_stream()")

        return await self._client.post_form("/images/edits", request, self._options,
                                            response_model=response_model)

    @byot(T0=FormConvertible)
    async def edit_stream(self, request: CreateImageEditRequest, *,
                          response_model: Any = None) -> Stream[ImageEditStreamEvent]:
        """
        Edits an image and streams partial images (gpt-image-1).

        Raises:
            InvalidArgumentError: If the request sets stream to false
        """
        if stream_flag(request) is False:
            raise InvalidArgumentError("When stream is false, use edit()")

        return await self._client.post_form_stream("/images/edits", with_stream_enabled(request), self._options,
                                                   response_model=response_model, ends_on_close=True)

    @byot(T0=FormConvertible)
    async def create_variation(self, request: CreateImageVariationRequest, *,
                               response_model: Any = None) -> ImagesResponse:
        """Creates a variation of a given image (dall-e-2 only)."""
        return await self._client.post_form("/images/variations", request, self._options,
                                            response_model=response_model)
