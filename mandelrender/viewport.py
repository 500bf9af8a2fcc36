"""View transform between the pixel grid and the complex plane."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from mandelrender.errors import InvalidDimension, InvalidViewport

# Base window before zoom/offset: real -2..1, imag -1.5..1.5
BASE_REAL_START = -2.0
BASE_REAL_END = 1.0
BASE_IMAG_START = -1.5
BASE_IMAG_END = 1.5


def _check_dimensions(width: int, height: int) -> None:
    if width < 2 or height < 2:
        raise InvalidDimension(width, height)


@dataclass(frozen=True)
class Viewport:
    """Rectangle of the complex plane sampled by a render."""

    real_start: float
    real_end: float
    imag_start: float
    imag_end: float

    @classmethod
    def from_zoom(cls, zoom: float, offset_x: float = 0.0, offset_y: float = 0.0) -> "Viewport":
        """
        Scale the base window by zoom (smaller magnifies) and pan it by
        subtracting the offsets.
        """
        if not (math.isfinite(zoom) and math.isfinite(offset_x) and math.isfinite(offset_y)):
            raise InvalidViewport(f"zoom and offsets must be finite (zoom={zoom}, offset=({offset_x}, {offset_y}))")
        if zoom <= 0:
            raise InvalidViewport(f"zoom must be > 0 (got {zoom})")
        return cls(
            real_start=BASE_REAL_START * zoom - offset_x,
            real_end=BASE_REAL_END * zoom - offset_x,
            imag_start=BASE_IMAG_START * zoom - offset_y,
            imag_end=BASE_IMAG_END * zoom - offset_y,
        )

    def real_at(self, x: int, width: int) -> float:
        return self.real_start + (x / (width - 1)) * (self.real_end - self.real_start)

    def imag_at(self, y: int, height: int) -> float:
        return self.imag_start + (y / (height - 1)) * (self.imag_end - self.imag_start)

    def pixel_to_complex(self, x: int, y: int, width: int, height: int) -> complex:
        """Map pixel (x, y) of a width x height grid onto the viewport, endpoints included."""
        _check_dimensions(width, height)
        return complex(self.real_at(x, width), self.imag_at(y, height))

    def axes(self, width: int, height: int) -> Tuple[List[float], List[float]]:
        """Real value of every column and imaginary value of every row."""
        _check_dimensions(width, height)
        reals = [self.real_at(x, width) for x in range(width)]
        imags = [self.imag_at(y, height) for y in range(height)]
        return reals, imags
