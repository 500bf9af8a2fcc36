from __future__ import annotations

import os
from pathlib import Path

from mandelrender.errors import SinkUnavailable
from mandelrender.pipeline import PixelBuffer
from mandelrender.sinks.pillow import write_image
from mandelrender.sinks.ppm import write_ppm
from mandelrender.util.logging_setup import get_logger

PPM_SUFFIXES = (".ppm", ".pnm")


def save(buffer: PixelBuffer, destination) -> None:
    """
    Persist a rendered buffer. Streams and .ppm/.pnm paths get the P3 text
    writer, anything else goes through Pillow.
    """
    logger = get_logger()

    if hasattr(destination, "write"):
        write_ppm(destination, buffer)
        logger.info("Mandelbrot image written to stream")
        return

    path = Path(os.fspath(destination))
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SinkUnavailable(str(path), str(e)) from e

    if path.suffix.lower() in PPM_SUFFIXES:
        write_ppm(path, buffer)
    else:
        write_image(path, buffer)
    logger.info("Mandelbrot image saved to %s", path)
