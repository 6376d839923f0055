"""
Classify whether text and images are potentially harmful.
"""

from typing import Any

from ..api.byot import Serializable, byot
from ..models.moderations import CreateModerationRequest, CreateModerationResponse
from .base import Resource


class Moderations(Resource):

    @byot(T0=Serializable)
    async def create(self, request: CreateModerationRequest, *,
                     response_model: Any = None) -> CreateModerationResponse:
        """Classifies if text and/or image inputs are potentially harmful."""
        return await self._client.post("/moderations", request, self._options, response_model=response_model)
