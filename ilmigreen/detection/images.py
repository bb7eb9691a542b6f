"""Image upload helpers.

The detection endpoint takes images as URLs; local files are sent inline as
``data:`` URLs. Only PNG and JPEG files up to 5 MB are accepted, matching the
upload form of the app.
"""
from __future__ import annotations

import base64
import mimetypes
from pathlib import Path
from typing import Optional, Union

from ..config.defaults import DETECT_IMAGE_MIME_TYPES, DETECT_MAX_IMAGE_BYTES


def guess_image_type(path: Union[str, Path]) -> Optional[str]:
    mime, _ = mimetypes.guess_type(str(path))
    return mime


def image_file_to_data_url(path: Union[str, Path], *, max_bytes: int = DETECT_MAX_IMAGE_BYTES) -> str:
    """Read an image file and return it as a base64 ``data:`` URL.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        ValueError: unsupported file type, or file larger than ``max_bytes``.
    """
    p = Path(path)
    mime = guess_image_type(p)
    if mime not in DETECT_IMAGE_MIME_TYPES:
        raise ValueError(f"unsupported image type for {p.name}: {mime or 'unknown'}")
    size = p.stat().st_size
    if size > max_bytes:
        raise ValueError(f"image {p.name} is {size} bytes; the limit is {max_bytes}")
    encoded = base64.b64encode(p.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


__all__ = ["guess_image_type", "image_file_to_data_url"]
