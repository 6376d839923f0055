#!/usr/bin/env python3
"""
Embedding Models

This module contains the request and response structures of the embeddings
endpoint, including decoding of base64 encoded embedding vectors.
"""

import base64
import binascii
import struct
from enum import Enum
from typing import List, Optional, Union

from ..errors import JSONDeserializeError
from .common import RequestModel, ResponseModel


class EncodingFormat(str, Enum):
    FLOAT = "float"
    BASE64 = "base64"


class CreateEmbeddingRequest(RequestModel):
    """
    Request body for ``POST /embeddings``.

    Attributes:
        model: ID of the embedding model
        input: Text, list of texts, token list or list of token lists
        encoding_format: "float" (default) or "base64"; base64 vectors are
            decoded back to floats by the resource client
        dimensions: Number of output dimensions (text-embedding-3 and later)
    """

    model: str
    input: Union[str, List[str], List[int], List[List[int]]]
    encoding_format: Optional[EncodingFormat] = None
    dimensions: Optional[int] = None
    user: Optional[str] = None


class Embedding(ResponseModel):
    index: int
    object: str = "embedding"
    embedding: List[float]


class Base64Embedding(ResponseModel):
    """An embedding vector sent as base64 encoded little-endian float32 values."""

    index: int
    object: str = "embedding"
    embedding: str

    def to_embedding(self) -> Embedding:
        """
        Decode into a float vector.

        Raises:
            JSONDeserializeError: If the data is not base64 or not a whole number of floats
        """
        try:
            raw = base64.b64decode(self.embedding, validate=True)
        except (binascii.Error, ValueError) as e:
            raise JSONDeserializeError(e, self.embedding) from e

        if len(raw) % 4:
            raise JSONDeserializeError(ValueError(f"{len(raw)} bytes is not a whole number of float32 values"),
                                       self.embedding)

        floats = list(struct.unpack(f"<{len(raw) // 4}f", raw))
        return Embedding(index=self.index, object=self.object, embedding=floats)


class EmbeddingUsage(ResponseModel):
    prompt_tokens: int
    total_tokens: int


class CreateEmbeddingResponse(ResponseModel):
    object: str = "list"
    model: str
    data: List[Embedding]
    usage: EmbeddingUsage


class CreateBase64EmbeddingResponse(ResponseModel):
    object: str = "list"
    model: str
    data: List[Base64Embedding]
    usage: EmbeddingUsage

    def to_float_response(self) -> CreateEmbeddingResponse:
        return CreateEmbeddingResponse(
            object=self.object,
            model=self.model,
            data=[embedding.to_embedding() for embedding in self.data],
            usage=self.usage,
        )
