import pytest

from mandelrender.color import IN_SET_COLOR, color_of
from mandelrender.errors import InvalidIterationCap


@pytest.mark.parametrize("n", [1, 2, 100, 500, 10_000])
def test_in_set_is_black(n):
    assert color_of(n, n) == (0, 0, 0) == IN_SET_COLOR


def test_known_colors():
    assert color_of(50, 100) == (127, 254, 253)
    assert color_of(99, 100) == (252, 249, 243)
    assert color_of(3, 4) == (191, 127, 254)
    assert color_of(0, 100) == (0, 0, 0)


def test_modulo_255_wraps_full_scale():
    # 255 % 255 == 0, so a full-scale value would wrap to zero
    assert color_of(1, 2) == (127, 254, 253)


def test_channels_in_range():
    for n in range(0, 200):
        rgb = color_of(n, 200)
        assert all(0 <= ch <= 255 for ch in rgb)
        assert all(isinstance(ch, int) for ch in rgb)


@pytest.mark.parametrize("cap", [0, -5])
def test_invalid_cap(cap):
    with pytest.raises(InvalidIterationCap):
        color_of(0, cap)
