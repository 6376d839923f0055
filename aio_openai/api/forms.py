"""
Multipart form builders.

Request models for upload endpoints (files, image edits, audio transcriptions)
convert themselves into a MultipartForm through ``to_form()``; the transport
encodes the form as ``multipart/form-data``.
"""

import json
import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Tuple, Union

from ..errors import FileReadError

if TYPE_CHECKING:
    from ..models.common import InputSource

FilePart = Tuple[str, Tuple[str, bytes, str]]


@dataclass
class MultipartForm:
    """Text fields and file parts of a multipart/form-data body."""

    fields: Dict[str, Union[str, List[str]]] = field(default_factory=dict)
    files: List[FilePart] = field(default_factory=list)

    def text(self, name: str, value: Any) -> "MultipartForm":
        """Add a text field; None is skipped and lists become repeated fields."""
        if value is None:
            return self
        if isinstance(value, (list, tuple)):
            self.fields[name] = [_form_value(item) for item in value]
        else:
            self.fields[name] = _form_value(value)
        return self

    def file(self, name: str, source: "InputSource") -> "MultipartForm":
        """Add a file part read from the given source."""
        self.files.append(create_file_part(name, source))
        return self


def create_file_part(name: str, source: "InputSource") -> FilePart:
    """
    Create the part for the given file for multipart upload.

    Args:
        name: Form field name
        source: Path on disk or in-memory bytes

    Returns:
        Tuple of (field name, (file name, content, content type))

    Raises:
        FileReadError: If the file cannot be read or has no file name
    """
    if source.path is not None:
        file_name = source.filename or source.path.name
        if not file_name:
            raise FileReadError(f"cannot extract file name from {source.path}")
        try:
            content = source.path.read_bytes()
        except OSError as e:
            raise FileReadError(f"{source.path}: {e}") from e
    elif source.data is not None:
        if not source.filename:
            raise FileReadError("in-memory file sources need a file name")
        file_name = source.filename
        content = source.data
    else:
        raise FileReadError("file source has neither a path nor data")

    content_type = mimetypes.guess_type(file_name)[0] or "application/octet-stream"
    return name, (file_name, content, content_type)


def _form_value(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    if hasattr(value, "model_dump"):
        return json.dumps(value.model_dump(mode="json", exclude_none=True))
    return str(value)


def to_multipart(source: Any) -> MultipartForm:
    """
    Build a form from an object exposing ``to_form()`` or a mapping of fields.

    In a mapping, InputSource values (or anything with a ``path`` or ``data``
    attribute) become file parts and everything else a text field.
    """
    if isinstance(source, MultipartForm):
        return source
    if callable(getattr(source, "to_form", None)):
        return source.to_form()

    form = MultipartForm()
    for name, value in source.items():
        if hasattr(value, "path") and hasattr(value, "data"):
            form.file(name, value)
        else:
            form.text(name, value)
    return form
