#!/usr/bin/env python3
"""
Shared Models

This module contains the base classes every request and response model
derives from, and the file input source used by upload endpoints.
"""

import base64
import binascii
import os
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator, model_validator


class RequestModel(BaseModel):
    """
    Base class for request bodies.

    Unset optional fields are dropped when serialized so they never reach
    the wire; fields the library does not model yet may be passed as extras.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, use_enum_values=False)


class ResponseModel(BaseModel):
    """
    Base class for response bodies.

    Unknown fields are kept so new API fields never break deserialization.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class InputSource(BaseModel):
    """
    File content for multipart uploads: either a path on disk or in-memory bytes.

    A plain string or ``os.PathLike`` validates as a path, so request models
    accept ``file="data.jsonl"``. In JSON form ``data`` is base64 encoded, and
    a string given for ``data`` is decoded as base64.

    Attributes:
        path: File to read at request time
        filename: File name sent to the API (defaults to the path's name)
        data: In-memory content, requires ``filename``
    """

    model_config = ConfigDict(frozen=True)

    path: Optional[Path] = None
    filename: Optional[str] = None
    data: Optional[bytes] = None

    @model_validator(mode="before")
    @classmethod
    def coerce_path(cls, value: Any) -> Any:
        if isinstance(value, (str, os.PathLike)):
            return {"path": Path(value)}
        return value

    @field_validator("data", mode="before")
    @classmethod
    def decode_data(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except (binascii.Error, ValueError) as e:
                raise ValueError(f"data must be bytes or base64 text: {e}") from e
        return value

    @field_serializer("data", when_used="json")
    def encode_data(self, value: Optional[bytes]) -> Optional[str]:
        if value is None:
            return None
        return base64.b64encode(value).decode("ascii")

    @model_validator(mode="after")
    def check_source(self) -> "InputSource":
        if self.path is None and self.data is None:
            raise ValueError("either path or data must be provided")
        if self.path is None and not self.filename:
            raise ValueError("filename is required for in-memory data")
        return self

    @classmethod
    def from_path(cls, path: Union[str, os.PathLike]) -> "InputSource":
        return cls(path=Path(path))

    @classmethod
    def from_bytes(cls, filename: str, data: bytes) -> "InputSource":
        return cls(filename=filename, data=data)
