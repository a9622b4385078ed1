from app.core.images import read_dimensions
from conftest import make_image


def test_read_dimensions_png():
    assert read_dimensions(make_image(120, 80)) == (120, 80)


def test_read_dimensions_gif():
    assert read_dimensions(make_image(7, 9, fmt="GIF")) == (7, 9)


def test_read_dimensions_garbage_returns_none():
    assert read_dimensions(b"\x00\x01not-an-image", "junk.bin") == (None, None)


def test_read_dimensions_empty_returns_none():
    assert read_dimensions(b"") == (None, None)
