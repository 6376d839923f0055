"""
Errors originating from API calls, parsing responses, streaming, and
reading-or-writing to the file system.

Every public operation of the library raises a subclass of ``OpenAIError``.
"""

import json
import logging
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)


class ApiErrorBody(BaseModel):
    """
    Error object returned by the API on failure.

    ``param`` and ``code`` are not guaranteed to be strings, so they are kept
    as plain JSON values.
    """

    model_config = ConfigDict(extra="allow")

    message: str = ""
    type: Optional[str] = None
    param: Any = None
    code: Any = None

    def __str__(self) -> str:
        """Format as ``{type}: {message} (param: {param}) (code: {code})``, skipping missing parts."""
        parts = []
        if self.type is not None:
            parts.append(f"{self.type}:")
        parts.append(self.message)
        if self.param is not None:
            parts.append(f"(param: {self.param})")
        if self.code is not None:
            parts.append(f"(code: {self.code})")
        return " ".join(parts)


class WrappedError(BaseModel):
    """Envelope nesting the error object under the ``error`` key."""

    error: ApiErrorBody


class OpenAIError(Exception):
    """Base class for all errors raised by the library."""
    pass


class HttpError(OpenAIError):
    """Underlying transport failure, or a failed response whose body is not an error envelope."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        if self.status is not None:
            return f"http error: HTTP {self.status}: {self.message}"
        return f"http error: {self.message}"


class ApiError(OpenAIError):
    """The API returned an error envelope."""

    def __init__(self, error: ApiErrorBody, status: Optional[int] = None):
        super().__init__(str(error))
        self.error = error
        self.status = status

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def type(self) -> Optional[str]:
        return self.error.type

    @property
    def code(self) -> Any:
        return self.error.code

    @property
    def param(self) -> Any:
        return self.error.param


class JSONDeserializeError(OpenAIError):
    """A response body could not be deserialized into the expected type."""

    def __init__(self, error: Exception, content: str):
        super().__init__(
            f"failed to deserialize api response: error:{error} content:{content}"
        )
        self.error = error
        self.content = content


class FileSaveError(OpenAIError):
    """Saving a file to the file system failed."""

    def __init__(self, message: str):
        super().__init__(f"failed to save file: {message}")
        self.message = message


class FileReadError(OpenAIError):
    """Reading a file from the file system failed."""

    def __init__(self, message: str):
        super().__init__(f"failed to read file: {message}")
        self.message = message


class StreamError(OpenAIError):
    """An SSE stream failed with an error that will not be retried."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"stream failed: {message}")
        self.message = message
        self.cause = cause


class InvalidArgumentError(OpenAIError, ValueError):
    """Client side validation failed before the request was sent."""

    def __init__(self, message: str):
        super().__init__(f"invalid args: {message}")
        self.message = message


def parse_error_envelope(content: Union[bytes, str, None]) -> Optional[ApiErrorBody]:
    """
    Parse the API error envelope ``{"error": {...}}``.

    Args:
        content: Raw response body

    Returns:
        The parsed error object, or None if the body is not an error envelope
    """
    if not content:
        return None

    try:
        data = json.loads(content)
    except (TypeError, ValueError):
        return None

    if not isinstance(data, dict) or not isinstance(data.get("error"), dict):
        return None

    try:
        return WrappedError.model_validate(data).error
    except ValidationError:
        return None


def map_deserialization_error(error: Exception, content: Union[bytes, str]) -> JSONDeserializeError:
    """Log the offending payload and wrap the error."""
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    logger.error(f"failed deserialization of: {content}")
    return JSONDeserializeError(error, content)
