# color.py

from typing import Tuple

from mandelrender.errors import InvalidIterationCap

RGB = Tuple[int, int, int]

IN_SET_COLOR: RGB = (0, 0, 0)


def color_of(iterations: int, max_iterations: int) -> RGB:
    """
    Returns an (R, G, B) tuple for an escape time. Points that never escaped
    (iterations == max_iterations) are black. Otherwise the escape time is
    scaled to 0..255 with integer division and each channel cycles through it
    at a different rate (x1, x2, x4), wrapping modulo 255.
    """
    if max_iterations < 1:
        raise InvalidIterationCap(max_iterations)
    if iterations == max_iterations:
        return IN_SET_COLOR

    value = (iterations * 255) // max_iterations
    return (value % 255, (value * 2) % 255, (value * 4) % 255)
