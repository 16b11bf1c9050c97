"""Frame encoding for transmission to the vision service."""

from __future__ import annotations

import base64
import io
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, ImageOps

from machine_scan.core.constants import JPEG_QUALITY

Frame = Union[np.ndarray, Image.Image]


def _to_surface(frame: Frame) -> Image.Image:
    if isinstance(frame, Image.Image):
        return frame
    # Pixel buffers are rendered onto an image first so both inputs share one
    # encoding path.
    return Image.fromarray(np.asarray(frame, dtype=np.uint8))


def encode_frame(frame: Frame, quality: float = JPEG_QUALITY) -> str:
    """Encode a frame as base64 JPEG text.

    Args:
        frame: Raw pixel buffer (HxW, HxWx3 or HxWx4 uint8) or a PIL image.
        quality: JPEG quality on a 0-1 scale.

    Returns:
        Base64-encoded JPEG bytes as ASCII text.
    """
    image = _to_surface(frame)
    if image.mode != "RGB":
        image = image.convert("RGB")

    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=max(1, min(95, round(quality * 100))))
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def load_image(path: Path) -> Image.Image:
    """Open an image file with EXIF orientation applied, as RGB."""
    with Image.open(path) as opened:
        image = ImageOps.exif_transpose(opened)
        if image.mode != "RGB":
            image = image.convert("RGB")
        image.load()
    return image
