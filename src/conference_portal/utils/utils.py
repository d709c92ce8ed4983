"""File handling helpers: upload validation and data-URL encoding."""

import base64
import io
import mimetypes
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from PIL import Image

from conference_portal.client.errors import FormValidationError
from conference_portal.config.constants import (
    IMAGE_EXTENSIONS,
    SCREENSHOT_JPEG_QUALITY,
    SCREENSHOT_MAX_SIZE,
)
from conference_portal.utils.logging_config import get_logger

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]


def format_bytes(num_bytes: int) -> str:
    """Human readable file size (e.g. '2.50 MB')."""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.2f} KB"
    return f"{num_bytes / (1024 * 1024):.2f} MB"


def validate_upload(
    path: PathLike,
    allowed_extensions: Iterable[str],
    max_bytes: Optional[int] = None,
    field: str = "file",
) -> Path:
    """Check that a file exists, has an allowed extension and fits the size limit."""
    path = Path(path)
    if not path.is_file():
        raise FormValidationError(field, f"File not found: {path}")

    allowed = {ext.lower() for ext in allowed_extensions}
    if path.suffix.lower() not in allowed:
        raise FormValidationError(
            field, f"Unsupported file type '{path.suffix}'. Allowed: {', '.join(sorted(allowed))}"
        )

    size = path.stat().st_size
    if max_bytes is not None and size > max_bytes:
        raise FormValidationError(
            field, f"File size must be less than {format_bytes(max_bytes)} (got {format_bytes(size)})"
        )
    return path


def guess_mime_type(path: PathLike) -> str:
    mime, _ = mimetypes.guess_type(str(path))
    return mime or "application/octet-stream"


def is_image(path: PathLike) -> bool:
    return Path(path).suffix.lower() in IMAGE_EXTENSIONS


def file_to_data_url(path: PathLike) -> str:
    """Read a file and return it as a base64 data URL."""
    path = Path(path)
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{guess_mime_type(path)};base64,{encoded}"


def compress_image(
    path: PathLike,
    max_size: tuple = SCREENSHOT_MAX_SIZE,
    quality: int = SCREENSHOT_JPEG_QUALITY,
) -> str:
    """Shrink an image to fit max_size (keeping aspect ratio) and return a JPEG data URL."""
    with Image.open(path) as img:
        original_size = img.size
        img = img.convert("RGB")
        img.thumbnail(max_size)

        buffer = io.BytesIO()
        img.save(buffer, format="JPEG", quality=quality)

    logger.debug(
        "Compressed image",
        path=str(path),
        original_size=original_size,
        new_size=img.size,
        bytes=buffer.tell(),
    )
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/jpeg;base64,{encoded}"


def encode_payment_proof(path: PathLike) -> str:
    """Encode a payment screenshot: images are compressed, anything else is sent as-is."""
    if is_image(path):
        return compress_image(path)
    return file_to_data_url(path)


@contextmanager
def temporary_upload(name: Optional[str], data: Optional[bytes]) -> Iterator[Optional[str]]:
    """Write uploaded bytes to a temp file for the duration of the block.

    The original extension is kept so upload validation still applies. The
    file is removed on exit, even when the upload fails.
    """
    if name is None or data is None:
        yield None
        return

    with tempfile.NamedTemporaryFile(delete=False, suffix=Path(name).suffix, prefix="upload_") as f:
        f.write(data)
        path = f.name
    try:
        yield path
    finally:
        Path(path).unlink(missing_ok=True)
