import math

import pytest

from mandelrender.errors import InvalidDimension, InvalidViewport
from mandelrender.viewport import Viewport


def test_default_window():
    vp = Viewport.from_zoom(1.0)
    assert (vp.real_start, vp.real_end) == (-2.0, 1.0)
    assert (vp.imag_start, vp.imag_end) == (-1.5, 1.5)


def test_zoom_and_offset():
    vp = Viewport.from_zoom(0.5, offset_x=1.0, offset_y=-0.25)
    assert vp.real_start == -2.0 * 0.5 - 1.0
    assert vp.real_end == 1.0 * 0.5 - 1.0
    assert vp.imag_start == -1.5 * 0.5 + 0.25
    assert vp.imag_end == 1.5 * 0.5 + 0.25


def test_zoomed_demo_window_is_ordered():
    vp = Viewport.from_zoom(0.001, -0.7436, 0.1318)
    assert vp.real_end > vp.real_start
    assert vp.imag_end > vp.imag_start
    assert vp.real_start == pytest.approx(0.7416)


def test_corners_map_to_bounds():
    vp = Viewport.from_zoom(1.0)
    assert vp.pixel_to_complex(0, 0, 2, 2) == complex(-2.0, -1.5)
    assert vp.pixel_to_complex(1, 1, 2, 2) == complex(1.0, 1.5)
    assert vp.pixel_to_complex(799, 599, 800, 600) == complex(1.0, 1.5)


def test_interior_pixels():
    vp = Viewport.from_zoom(1.0)
    assert vp.pixel_to_complex(1, 2, 4, 4) == complex(-1.0, 0.5)


def test_axes_match_pixel_mapping():
    vp = Viewport.from_zoom(0.3, 0.1, -0.2)
    reals, imags = vp.axes(7, 5)
    assert len(reals) == 7 and len(imags) == 5
    for y in range(5):
        for x in range(7):
            assert vp.pixel_to_complex(x, y, 7, 5) == complex(reals[x], imags[y])


@pytest.mark.parametrize("width,height", [(1, 10), (10, 1), (0, 0), (1, 1)])
def test_degenerate_grid_rejected(width, height):
    vp = Viewport.from_zoom(1.0)
    with pytest.raises(InvalidDimension):
        vp.pixel_to_complex(0, 0, width, height)


@pytest.mark.parametrize("zoom", [0.0, -1.0, math.inf, math.nan])
def test_bad_zoom_rejected(zoom):
    with pytest.raises(InvalidViewport):
        Viewport.from_zoom(zoom)


def test_non_finite_offset_rejected():
    with pytest.raises(InvalidViewport):
        Viewport.from_zoom(1.0, offset_x=math.nan)
