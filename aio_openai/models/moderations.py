#!/usr/bin/env python3
"""
Moderation Models

This module contains the request and response structures of the
moderations endpoint.
"""

from typing import Dict, List, Literal, Optional, Union

from pydantic import Field

from .common import RequestModel, ResponseModel


class ModerationImageUrl(RequestModel):
    url: str


class ModerationTextInput(RequestModel):
    type: Literal["text"] = "text"
    text: str


class ModerationImageInput(RequestModel):
    type: Literal["image_url"] = "image_url"
    image_url: ModerationImageUrl


class CreateModerationRequest(RequestModel):
    """
    Request body for ``POST /moderations``.

    Attributes:
        input: Text, list of texts, or a list of text / image inputs
        model: Moderation model, the API default is used when omitted
    """

    input: Union[str, List[str], List[Union[ModerationTextInput, ModerationImageInput]]]
    model: Optional[str] = None


class ContentModerationResult(ResponseModel):
    """
    Moderation verdict for one input.

    ``categories`` and ``category_scores`` are keyed by vendor category names
    such as ``hate``, ``self-harm/intent`` or ``violence/graphic``.
    """

    flagged: bool
    categories: Dict[str, Optional[bool]] = Field(default_factory=dict)
    category_scores: Dict[str, float] = Field(default_factory=dict)
    category_applied_input_types: Optional[Dict[str, List[str]]] = None


class CreateModerationResponse(ResponseModel):
    id: str
    model: str
    results: List[ContentModerationResult]
