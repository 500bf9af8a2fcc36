from __future__ import annotations

import os
from typing import Optional

from PIL import Image

from mandelrender.errors import SinkUnavailable
from mandelrender.pipeline import PixelBuffer


def to_image(buffer: PixelBuffer) -> Image.Image:
    return Image.fromarray(buffer.pixels)


def write_image(destination, buffer: PixelBuffer, format: Optional[str] = None) -> None:
    """Save through Pillow; the format comes from the suffix unless given."""
    img = to_image(buffer)
    try:
        img.save(destination, format=format)
    except (OSError, ValueError) as e:
        # Pillow raises ValueError for an unknown suffix/format
        raise SinkUnavailable(os.fspath(destination), str(e)) from e
