import io

import numpy as np
import pytest
from PIL import Image

from mandelrender.errors import SinkUnavailable
from mandelrender.pipeline import render
from mandelrender.sinks.dispatch import save
from mandelrender.sinks.ppm import write_ppm


@pytest.fixture
def small_buffer():
    return render(3, 2, 5)


def test_ppm_layout(small_buffer):
    out = io.StringIO()
    write_ppm(out, small_buffer)
    lines = out.getvalue().splitlines()
    assert lines[:3] == ["P3", "3 2", "255"]
    assert len(lines) == 3 + 6
    for i, line in enumerate(lines[3:]):
        assert tuple(int(v) for v in line.split(" ")) == small_buffer[i]


def test_ppm_to_path(tmp_path, small_buffer):
    path = tmp_path / "out.ppm"
    save(small_buffer, path)
    text = path.read_text(encoding="ascii")
    assert text.startswith("P3\n3 2\n255\n")
    assert text.endswith("\n")
    assert len(text.splitlines()) == 9


def test_creates_missing_directories(tmp_path, small_buffer):
    path = tmp_path / "nested" / "dir" / "out.ppm"
    save(small_buffer, str(path))
    assert path.exists()


def test_png_through_pillow(tmp_path):
    buf = render(10, 8, 30)
    path = tmp_path / "out.png"
    save(buf, path)
    with Image.open(path) as img:
        assert img.size == (10, 8)
        np.testing.assert_array_equal(np.asarray(img.convert("RGB")), buf.pixels)


def test_unwritable_destination_leaves_buffer_intact(tmp_path, small_buffer):
    before = small_buffer.tobytes()
    blocked = tmp_path / "blocked.ppm"
    blocked.mkdir()
    with pytest.raises(SinkUnavailable) as excinfo:
        save(small_buffer, blocked)
    assert excinfo.value.destination == str(blocked)
    assert isinstance(excinfo.value, OSError)
    assert small_buffer.tobytes() == before

    retry = tmp_path / "retry.ppm"
    save(small_buffer, retry)
    assert retry.exists()


def test_unknown_format_is_a_sink_error(tmp_path, small_buffer):
    with pytest.raises(SinkUnavailable):
        save(small_buffer, tmp_path / "out.notanimageformat")
