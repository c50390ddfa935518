# src/assignly/media/image_codec.py

"""
Avatar encoding for the signup request.

The picked picture is decoded to a raster, re-encoded as JPEG and shipped
as base64 text inside the JSON body. Any failure degrades to "" so a broken
picture never blocks a signup.
"""

from __future__ import annotations

import base64
import logging
from pathlib import Path
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

import cv2
import numpy as np

from ..config import DEFAULT_JPEG_QUALITY
from ..core.ports import ImageRef, ImageSource

logger = logging.getLogger(__name__)


def resolve_image_path(ref: ImageRef) -> Path:
    """Turn a plain path or a file:// URI into a local Path."""
    parsed = urlparse(ref)
    if parsed.scheme == "file":
        return Path(url2pathname(unquote(parsed.path))).expanduser()
    if parsed.scheme and len(parsed.scheme) > 1:
        # Windows drive letters parse as a one-letter scheme; anything longer is a real URI.
        raise OSError(f"unsupported image reference scheme: {parsed.scheme!r}")
    return Path(ref).expanduser()


class FileImageSource:
    """ImageSource backed by the local filesystem."""

    def open(self, ref: ImageRef) -> bytes:
        return resolve_image_path(ref).read_bytes()


def encode_image(
        ref: ImageRef | None,
        source: ImageSource,
        *,
        quality: int = DEFAULT_JPEG_QUALITY,
) -> str:
    """
    Encode a picked image as base64 JPEG text.

    - ref is None -> ""
    - unreadable or undecodable resource -> "" (logged, never raised)
    - otherwise base64 of the JPEG bytes, wrapped at 76 columns with a trailing newline
    """
    if ref is None:
        return ""

    try:
        raw = source.open(ref)
        buf = np.frombuffer(raw, dtype=np.uint8)
        bitmap = cv2.imdecode(buf, cv2.IMREAD_COLOR) if buf.size else None
        if bitmap is None:
            logger.warning("Image %s could not be decoded; sending without avatar", ref)
            return ""

        ok, jpeg = cv2.imencode(".jpg", bitmap, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
        if not ok:
            logger.warning("JPEG encoding failed for %s", ref)
            return ""

        return base64.encodebytes(jpeg.tobytes()).decode("ascii")
    except Exception:
        logger.exception("Failed to encode image %s", ref)
        return ""
