"""
Files are used to upload documents that can be used with features like
Assistants, Fine-tuning and the Batch API.
"""

import logging
from typing import Any

from ..api.byot import Display, FormConvertible, byot
from ..models.files import CreateFileRequest, DeleteFileResponse, ListFilesResponse, OpenAIFile
from .base import Resource

logger = logging.getLogger(__name__)


class Files(Resource):
    """
    Operations on ``/files``.

    Filter listings with query parameters, e.g.
    ``await client.files.with_query({"purpose": "batch", "limit": 10}).list()``.
    """

    @byot(T0=FormConvertible)
    async def create(self, request: CreateFileRequest, *, response_model: Any = None) -> OpenAIFile:
        """
        Upload a file that can be used across various endpoints.

        Individual files can be up to 512 MB.
        """
        return await self._client.post_form("/files", request, self._options, response_model=response_model)

    @byot
    async def list(self, *, response_model: Any = None) -> ListFilesResponse:
        """Returns a list of files."""
        return await self._client.get("/files", self._options, response_model=response_model)

    @byot(T0=Display)
    async def retrieve(self, file_id: str, *, response_model: Any = None) -> OpenAIFile:
        """Returns information about a specific file."""
        return await self._client.get(f"/files/{file_id}", self._options, response_model=response_model)

    @byot(T0=Display)
    async def delete(self, file_id: str, *, response_model: Any = None) -> DeleteFileResponse:
        """Delete a file."""
        return await self._client.delete(f"/files/{file_id}", self._options, response_model=response_model)

    async def content(self, file_id: str) -> bytes:
        """Returns the contents of the specified file."""
        body, _ = await self._client.get_raw(f"/files/{file_id}/content", self._options)
        logger.debug(f"Downloaded {len(body)} bytes of file {file_id}")
        return body
