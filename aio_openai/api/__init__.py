"""
API module for the aio_openai client.

This module provides the HTTP transport abstraction, per-request options,
multipart form builders and the bring-your-own-type decorator. The
low-level Client lives in ``aio_openai.api.client``.
"""

from .transport import HttpRequest, HttpResponse, HttpTransport, HttpxTransport, StreamingResponse
from .forms import MultipartForm, create_file_part, to_multipart
from .options import RequestOptions
from .byot import (
    Capability,
    Deserializable,
    Display,
    FormConvertible,
    Serializable,
    byot,
    deserialize,
    to_jsonable,
)

__all__ = [
    "HttpRequest",
    "HttpResponse",
    "HttpTransport",
    "HttpxTransport",
    "StreamingResponse",
    "MultipartForm",
    "create_file_part",
    "to_multipart",
    "RequestOptions",
    "Capability",
    "Deserializable",
    "Display",
    "FormConvertible",
    "Serializable",
    "byot",
    "deserialize",
    "to_jsonable",
]
