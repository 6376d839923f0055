"""
List and describe the various models available in the API.
"""

from typing import Any

from ..api.byot import Display, byot
from ..models.model import DeleteModelResponse, ListModelResponse, Model
from .base import Resource


class Models(Resource):
    """Operations on ``/models``."""

    @byot
    async def list(self, *, response_model: Any = None) -> ListModelResponse:
        """Lists the currently available models."""
        return await self._client.get("/models", self._options, response_model=response_model)

    @byot(T0=Display)
    async def retrieve(self, model: str, *, response_model: Any = None) -> Model:
        """Retrieves a model instance, providing basic information such as the owner."""
        return await self._client.get(f"/models/{model}", self._options, response_model=response_model)

    @byot(T0=Display)
    async def delete(self, model: str, *, response_model: Any = None) -> DeleteModelResponse:
        """Delete a fine-tuned model. You must have the Owner role in your organization."""
        return await self._client.delete(f"/models/{model}", self._options, response_model=response_model)
