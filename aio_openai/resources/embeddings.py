"""
Get a vector representation of a given input that can be easily consumed
by machine learning models and algorithms.
"""

from typing import Any

from ..api.byot import Serializable, byot
from ..models.embeddings import (
    CreateBase64EmbeddingResponse,
    CreateEmbeddingRequest,
    CreateEmbeddingResponse,
    EncodingFormat,
)
from .base import Resource


class Embeddings(Resource):
    """Operations on ``/embeddings``."""

    @byot(T0=Serializable)
    async def create(self, request: CreateEmbeddingRequest, *,
                     response_model: Any = None) -> CreateEmbeddingResponse:
        """
        Creates an embedding vector representing the input text.

        With ``encoding_format="base64"`` the vectors are transferred as base64
        and decoded back to floats; generic callers receive the raw response.
        """
        if response_model is CreateEmbeddingResponse and _wants_base64(request):
            response = await self.create_base64(request)
            return response.to_float_response()

        return await self._client.post("/embeddings", request, self._options, response_model=response_model)

    @byot(T0=Serializable)
    async def create_base64(self, request: CreateEmbeddingRequest, *,
                            response_model: Any = None) -> CreateBase64EmbeddingResponse:
        """Creates embedding vectors and returns them base64 encoded as sent by the API."""
        if isinstance(request, CreateEmbeddingRequest) and request.encoding_format != EncodingFormat.BASE64:
            request = request.model_copy(update={"encoding_format": EncodingFormat.BASE64})

        return await self._client.post("/embeddings", request, self._options, response_model=response_model)


def _wants_base64(request: Any) -> bool:
    return isinstance(request, CreateEmbeddingRequest) and request.encoding_format == EncodingFormat.BASE64
