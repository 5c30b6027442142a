import pytest
from PIL import Image

from paintkit.canvas import Canvas, FillStyle


def test_new_canvas_size_and_background():
    canvas = Canvas(10, 6, background=(1, 2, 3))
    assert canvas.size() == (10, 6)
    assert canvas.image.getpixel((9, 5)) == (1, 2, 3)


def test_default_options():
    canvas = Canvas(4, 4)
    assert canvas.line_width == 1
    assert canvas.filled is FillStyle.NONE
    assert canvas.transparent is False


@pytest.mark.parametrize("size", [(0, 5), (5, 0), (-1, 3)])
def test_invalid_size_rejected(size):
    with pytest.raises(ValueError):
        Canvas(*size)


def test_resize_keeps_content_and_pads_with_background():
    canvas = Canvas(4, 4, background=(10, 20, 30))
    canvas.fill_rect((0, 0, 2, 2), (200, 0, 0))
    canvas.resize(8, 3)
    assert canvas.size() == (8, 3)
    assert canvas.image.getpixel((1, 1)) == (200, 0, 0)
    assert canvas.image.getpixel((7, 2)) == (10, 20, 30)


def test_resize_rejects_zero():
    canvas = Canvas(4, 4)
    with pytest.raises(ValueError):
        canvas.resize(0, 4)


def test_set_image_takes_size():
    canvas = Canvas(4, 4)
    canvas.set_image(Image.new("RGBA", (7, 9), (5, 6, 7, 255)))
    assert canvas.size() == (7, 9)
    assert canvas.image.getpixel((3, 3)) == (5, 6, 7)


def test_crop_paste_round_trip():
    canvas = Canvas(6, 6)
    canvas.fill_rect((1, 1, 2, 3), (9, 8, 7))
    piece = canvas.crop((1, 1, 2, 3))
    assert piece.size == (2, 3)
    other = Canvas(6, 6)
    other.paste(piece, 1, 1)
    assert list(other.image.getdata()) == list(canvas.image.getdata())


def test_crop_negative_size_rejected():
    with pytest.raises(ValueError):
        Canvas(4, 4).crop((0, 0, -1, 2))


def test_paste_respects_alpha():
    canvas = Canvas(2, 1, background=(0, 0, 0))
    patch = Image.new("RGBA", (2, 1), (255, 255, 255, 255))
    patch.putpixel((1, 0), (255, 255, 255, 0))
    canvas.paste(patch, 0, 0)
    assert canvas.image.getpixel((0, 0)) == (255, 255, 255)
    assert canvas.image.getpixel((1, 0)) == (0, 0, 0)


def test_fill_rect_defaults_to_background_and_is_bounded():
    canvas = Canvas(5, 5, background=(3, 3, 3))
    canvas.fill_rect((0, 0, 5, 5), (100, 100, 100))
    canvas.fill_rect((1, 1, 2, 2))
    assert canvas.image.getpixel((1, 1)) == (3, 3, 3)
    assert canvas.image.getpixel((2, 2)) == (3, 3, 3)
    assert canvas.image.getpixel((3, 3)) == (100, 100, 100)


def test_fill_rect_empty_does_nothing():
    canvas = Canvas(3, 3)
    before = list(canvas.image.getdata())
    canvas.fill_rect((1, 1, 0, 2), (1, 1, 1))
    assert list(canvas.image.getdata()) == before