from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from mandelrender.color import RGB
from mandelrender.errors import InvalidDimension, InvalidIterationCap
from mandelrender.renderers.cpu import render_pixels
from mandelrender.util.logging_setup import get_logger
from mandelrender.viewport import Viewport


@dataclass(frozen=True)
class RenderParameters:
    """Everything one render needs; there is no global configuration."""

    width: int
    height: int
    max_iterations: int
    zoom: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def validate(self) -> None:
        if self.width < 2 or self.height < 2:
            raise InvalidDimension(self.width, self.height)
        if self.max_iterations <= 0:
            raise InvalidIterationCap(self.max_iterations)
        self.viewport()

    def viewport(self) -> Viewport:
        return Viewport.from_zoom(self.zoom, self.offset_x, self.offset_y)


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Row-major grid of colors from one render.

    ``pixels`` has shape (height, width, 3) and is read-only; linear index i
    addresses pixel (i % width, i // width).
    """

    width: int
    height: int
    pixels: np.ndarray

    def __len__(self) -> int:
        return self.width * self.height

    def __getitem__(self, index: int) -> RGB:
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError(f"pixel index {index} out of range")
        y, x = divmod(index, self.width)
        return self.at(x, y)

    def __iter__(self) -> Iterator[RGB]:
        for row in self.pixels:
            for r, g, b in row:
                yield int(r), int(g), int(b)

    def at(self, x: int, y: int) -> RGB:
        r, g, b = self.pixels[y, x]
        return int(r), int(g), int(b)

    def tobytes(self) -> bytes:
        return self.pixels.tobytes()


def render_parameters(
    params: RenderParameters,
    *,
    workers: int = 1,
    band_height: int = 32,
    progress: bool = False,
    log_queue=None,
    log_level: int = logging.INFO,
) -> PixelBuffer:
    logger = get_logger()
    params.validate()
    viewport = params.viewport()

    logger.info("Render start size=%sx%s max_iterations=%s re=[%s, %s] im=[%s, %s] workers=%s",
                params.width, params.height, params.max_iterations,
                viewport.real_start, viewport.real_end, viewport.imag_start, viewport.imag_end, workers)
    start = time.perf_counter()

    buf = render_pixels(
        viewport, params.width, params.height, params.max_iterations,
        workers=workers, band_height=band_height, progress=progress,
        log_queue=log_queue, log_level=log_level,
    )
    buf.setflags(write=False)

    logger.info("Render done in %.2fs", time.perf_counter() - start)
    return PixelBuffer(width=params.width, height=params.height, pixels=buf)


def render(
    width: int,
    height: int,
    max_iterations: int,
    zoom: float = 1.0,
    offset_x: float = 0.0,
    offset_y: float = 0.0,
    **kwargs,
) -> PixelBuffer:
    """Render the Mandelbrot set for the view given by zoom and offset."""
    params = RenderParameters(width, height, max_iterations, zoom, offset_x, offset_y)
    return render_parameters(params, **kwargs)
