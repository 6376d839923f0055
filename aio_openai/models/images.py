#!/usr/bin/env python3
"""
Image Models

This module contains the image generation, edit and variation requests and
the images response, which can save its images to disk.
"""

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, List, Literal, Optional, Union

import httpx
from pydantic import Field

from ..api.forms import MultipartForm
from ..errors import FileSaveError, OpenAIError
from ..utils.download import download_url, save_b64
from .common import InputSource, RequestModel, ResponseModel

logger = logging.getLogger(__name__)


class ImageResponseFormat(str, Enum):
    URL = "url"
    B64_JSON = "b64_json"


class ImageSize(str, Enum):
    S256x256 = "256x256"
    S512x512 = "512x512"
    S1024x1024 = "1024x1024"
    S1792x1024 = "1792x1024"
    S1024x1792 = "1024x1792"
    S1536x1024 = "1536x1024"
    S1024x1536 = "1024x1536"
    AUTO = "auto"


class CreateImageRequest(RequestModel):
    """
    Request body for ``POST /images/generations``.

    Attributes:
        prompt: Text description of the desired image(s)
        model: Image model, e.g. "dall-e-3" or "gpt-image-1"
        n: Number of images, 1 to 10
        response_format: "url" or "b64_json" (dall-e models only)
    """

    prompt: str
    model: Optional[str] = None
    n: Optional[int] = Field(None, ge=1, le=10)
    quality: Optional[str] = None
    response_format: Optional[ImageResponseFormat] = None
    size: Optional[ImageSize] = None
    style: Optional[str] = None
    background: Optional[str] = None
    output_format: Optional[str] = None
    output_compression: Optional[int] = None
    partial_images: Optional[int] = Field(None, ge=0, le=3)
    stream: Optional[bool] = None
    user: Optional[str] = None


class CreateImageEditRequest(RequestModel):
    """
    Request for ``POST /images/edits`` (multipart).

    Several input images are sent as repeated ``image[]`` parts.
    """

    image: Union[InputSource, List[InputSource]]
    prompt: str
    mask: Optional[InputSource] = None
    model: Optional[str] = None
    n: Optional[int] = Field(None, ge=1, le=10)
    size: Optional[ImageSize] = None
    response_format: Optional[ImageResponseFormat] = None
    background: Optional[str] = None
    quality: Optional[str] = None
    output_format: Optional[str] = None
    output_compression: Optional[int] = None
    input_fidelity: Optional[str] = None
    partial_images: Optional[int] = Field(None, ge=0, le=3)
    stream: Optional[bool] = None
    user: Optional[str] = None

    def to_form(self) -> MultipartForm:
        form = MultipartForm().text("prompt", self.prompt)

        if isinstance(self.image, list):
            for image in self.image:
                form.file("image[]", image)
        else:
            form.file("image", self.image)

        if self.mask is not None:
            form.file("mask", self.mask)

        for name in ("background", "model", "n", "size", "response_format", "output_format",
                     "output_compression", "user", "input_fidelity", "quality", "partial_images", "stream"):
            form.text(name, getattr(self, name))
        return form


class CreateImageVariationRequest(RequestModel):
    """Request for ``POST /images/variations`` (multipart, dall-e-2 only)."""

    image: InputSource
    model: Optional[str] = None
    n: Optional[int] = Field(None, ge=1, le=10)
    size: Optional[ImageSize] = None
    response_format: Optional[ImageResponseFormat] = None
    user: Optional[str] = None

    def to_form(self) -> MultipartForm:
        form = MultipartForm().file("image", self.image)
        for name in ("model", "n", "size", "response_format", "user"):
            form.text(name, getattr(self, name))
        return form


class Image(ResponseModel):
    """A generated image, either a url or base64 encoded data."""

    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None

    async def save(self, directory: Union[str, Path], client: Optional[httpx.AsyncClient] = None) -> Path:
        """
        Save the image into ``directory``.

        Raises:
            FileSaveError: If the image carries no data or cannot be written
        """
        if self.url:
            return await download_url(self.url, directory, client)
        if self.b64_json:
            return save_b64(self.b64_json, directory)
        raise FileSaveError("image has neither url nor b64_json")


class ImageUsage(ResponseModel):
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class ImagesResponse(ResponseModel):
    created: int
    data: List[Image] = Field(default_factory=list)
    usage: Optional[ImageUsage] = None

    async def save(self, directory: Union[str, Path], client: Optional[httpx.AsyncClient] = None) -> List[Path]:
        """
        Save every image into ``directory`` concurrently, creating it when missing.

        Args:
            directory: Target directory
            client: Optional httpx client used to download url images

        Returns:
            Paths of the saved files

        Raises:
            FileSaveError: If any image fails; messages of all failures joined with "; "
        """
        try:
            Path(directory).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSaveError(f"{directory}: {e}") from e

        results = await asyncio.gather(
            *(image.save(directory, client) for image in self.data),
            return_exceptions=True,
        )

        paths = []
        errors = []
        for result in results:
            if isinstance(result, OpenAIError):
                errors.append(str(result))
            elif isinstance(result, BaseException):
                raise result
            else:
                paths.append(result)

        if errors:
            logger.warning(f"Failed to save {len(errors)} of {len(results)} images")
            raise FileSaveError("; ".join(errors))
        return paths


# Stream events


class ImageStreamEvent(ResponseModel):
    """Fields shared by partial and final image events; ``b64_json`` holds the image."""

    b64_json: str
    created_at: int
    size: Optional[str] = None
    quality: Optional[str] = None
    background: Optional[str] = None
    output_format: Optional[str] = None

    def save(self, directory: Union[str, Path]) -> Path:
        """Decode the image into a randomly named file in ``directory``."""
        return save_b64(self.b64_json, directory)


class ImageGenPartialImageEvent(ImageStreamEvent):
    type: Literal["image_generation.partial_image"] = "image_generation.partial_image"
    partial_image_index: int


class ImageGenCompletedEvent(ImageStreamEvent):
    type: Literal["image_generation.completed"] = "image_generation.completed"
    usage: Optional[ImageUsage] = None


class ImageEditPartialImageEvent(ImageStreamEvent):
    type: Literal["image_edit.partial_image"] = "image_edit.partial_image"
    partial_image_index: int


class ImageEditCompletedEvent(ImageStreamEvent):
    type: Literal["image_edit.completed"] = "image_edit.completed"
    usage: Optional[ImageUsage] = None


ImageGenStreamEvent = Annotated[
    Union[ImageGenPartialImageEvent, ImageGenCompletedEvent],
    Field(discriminator="type"),
]

ImageEditStreamEvent = Annotated[
    Union[ImageEditPartialImageEvent, ImageEditCompletedEvent],
    Field(discriminator="type"),
]
