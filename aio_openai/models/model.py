#!/usr/bin/env python3
"""
Model Models

This module contains the data structures returned by the models endpoints.
"""

from typing import List

from .common import ResponseModel


class Model(ResponseModel):
    """
    Describes an OpenAI model offering that can be used with the API.

    Attributes:
        id: Model identifier, usable in API endpoints
        object: Always "model"
        created: Unix timestamp (seconds) when the model was created
        owned_by: Organization that owns the model
    """

    id: str
    object: str = "model"
    created: int = 0
    owned_by: str = ""


class ListModelResponse(ResponseModel):
    object: str = "list"
    data: List[Model]


class DeleteModelResponse(ResponseModel):
    id: str
    object: str = "model"
    deleted: bool
