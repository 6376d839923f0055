#!/usr/bin/env python3
"""
File Models

This module contains the upload request and the file objects returned by
the files endpoints.
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import Field

from ..api.forms import MultipartForm
from .common import InputSource, RequestModel, ResponseModel


class FilePurpose(str, Enum):
    ASSISTANTS = "assistants"
    BATCH = "batch"
    FINE_TUNE = "fine-tune"
    VISION = "vision"
    USER_DATA = "user_data"
    EVALS = "evals"


class FileExpirationAfter(RequestModel):
    """
    Expiration policy for an uploaded file.

    Attributes:
        anchor: Timestamp the policy is relative to, only "created_at" is supported
        seconds: Seconds after the anchor, between 3600 (1 hour) and 2592000 (30 days)
    """

    anchor: Literal["created_at"] = "created_at"
    seconds: int = Field(..., ge=3600, le=2592000)


class CreateFileRequest(RequestModel):
    """
    Request for ``POST /files`` (multipart).

    Attributes:
        file: File to upload, a path or an InputSource
        purpose: Intended purpose of the file
        expires_after: Optional expiration policy; batch files expire after 30 days by default
    """

    file: InputSource
    purpose: FilePurpose = FilePurpose.FINE_TUNE
    expires_after: Optional[FileExpirationAfter] = None

    def to_form(self) -> MultipartForm:
        form = MultipartForm().file("file", self.file).text("purpose", self.purpose)
        if self.expires_after is not None:
            form.text("expires_after[anchor]", self.expires_after.anchor)
            form.text("expires_after[seconds]", self.expires_after.seconds)
        return form


class OpenAIFile(ResponseModel):
    """
    A document uploaded to OpenAI.

    Attributes:
        id: File identifier, usable in API endpoints
        bytes: Size of the file in bytes
        created_at: Unix timestamp (seconds) of the upload
        expires_at: Unix timestamp (seconds) of expiration, if any
        filename: Name of the file
        purpose: Intended purpose, e.g. "fine-tune" or "batch_output"
    """

    id: str
    object: str = "file"
    bytes: int
    created_at: int
    expires_at: Optional[int] = None
    filename: str
    purpose: str
    status: Optional[str] = None
    status_details: Optional[str] = None


class ListFilesResponse(ResponseModel):
    object: str = "list"
    data: List[OpenAIFile]
    first_id: Optional[str] = None
    last_id: Optional[str] = None
    has_more: bool = False


class DeleteFileResponse(ResponseModel):
    id: str
    object: str = "file"
    deleted: bool
