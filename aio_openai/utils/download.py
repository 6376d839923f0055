"""
Save helpers for generated images and audio.

Images come back either as urls (downloaded with httpx) or base64 data;
both are written under a target directory.
"""

import base64
import binascii
import logging
import random
import string
from pathlib import Path
from typing import Optional, Union
from urllib.parse import unquote, urlparse

import httpx

from ..errors import FileSaveError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def random_file_name(suffix: str = ".png", length: int = 10) -> str:
    """Random alphanumeric file name, e.g. ``aZ3k9QwE1x.png``."""
    alphabet = string.ascii_letters + string.digits
    return "".join(random.choices(alphabet, k=length)) + suffix


def create_paths(url: str, base_dir: PathLike):
    """
    Mirror the url path segments under ``base_dir``.

    Returns:
        Tuple of (directory to create, file path)

    Raises:
        FileSaveError: If a decoded segment is a dot segment or contains a
            separator, or the file path resolves outside ``base_dir``
    """
    segments = [unquote(s) for s in urlparse(url).path.split("/") if s]
    for segment in segments:
        if segment in (".", "..") or any(c in segment for c in ("/", "\\", "\x00")):
            raise FileSaveError(f"unsafe path segment {segment!r} in url: {url}")

    base = Path(base_dir)
    file_path = base.joinpath(*segments)
    try:
        file_path.resolve().relative_to(base.resolve())
    except ValueError:
        raise FileSaveError(f"url path escapes {base}: {url}") from None

    return base.joinpath(*segments[:-1]), file_path


def write_file(path: Path, content: bytes) -> Path:
    """Write content, creating parent directories first."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    except OSError as e:
        raise FileSaveError(f"{path}: {e}") from e
    return path


async def download_url(url: str, directory: PathLike, client: Optional[httpx.AsyncClient] = None) -> Path:
    """
    Download a file into ``directory``.

    Args:
        url: File url
        directory: Target directory
        client: Client to download with; a short-lived one is used when omitted

    Returns:
        Path of the saved file

    Raises:
        FileSaveError: If the url is invalid, the download fails or writing fails
    """
    if urlparse(url).scheme not in ("http", "https"):
        raise FileSaveError(f"invalid url: {url}")

    _, file_path = create_paths(url, directory)
    if file_path == Path(directory):
        file_path = file_path / random_file_name()

    try:
        if client is None:
            async with httpx.AsyncClient() as owned:
                response = await owned.get(url)
        else:
            response = await client.get(url)
    except httpx.HTTPError as e:
        raise FileSaveError(str(e) or type(e).__name__) from e

    if not response.is_success:
        raise FileSaveError(f"couldn't download file (status: {response.status_code})")

    logger.debug(f"Saving {url} to {file_path}")
    return write_file(file_path, response.content)


def save_b64(b64_json: str, directory: PathLike) -> Path:
    """
    Decode base64 image data into a randomly named ``.png`` file.

    Raises:
        FileSaveError: If the data is not valid base64 or writing fails
    """
    try:
        content = base64.b64decode(b64_json, validate=True)
    except (binascii.Error, ValueError) as e:
        raise FileSaveError(f"invalid base64 data: {e}") from e

    return write_file(Path(directory) / random_file_name(), content)
