"""Plain-text PPM (P3) image sink."""

from __future__ import annotations

import os
from typing import IO, Union

from mandelrender.errors import SinkUnavailable
from mandelrender.pipeline import PixelBuffer

Destination = Union[str, "os.PathLike[str]", IO[str]]


def _write(f: IO[str], buffer: PixelBuffer) -> None:
    # header: magic, dimensions, max channel value
    f.write(f"P3\n{buffer.width} {buffer.height}\n255\n")
    for r, g, b in buffer:
        f.write(f"{r} {g} {b}\n")


def write_ppm(destination: Destination, buffer: PixelBuffer) -> None:
    """Write buffer as P3 text, one "r g b" line per pixel in row-major order."""
    if hasattr(destination, "write"):
        try:
            _write(destination, buffer)
        except OSError as e:
            raise SinkUnavailable(destination, str(e)) from e
        return

    try:
        with open(destination, "w", encoding="ascii", newline="\n") as f:
            _write(f, buffer)
    except OSError as e:
        raise SinkUnavailable(os.fspath(destination), str(e)) from e
