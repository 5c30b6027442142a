import pytest
from PIL import Image, ImageDraw

from paintkit.canvas import Canvas
from paintkit.selection import Selection
from paintkit.toolbar import Tool
from paintkit.undo import UndoHistory, create_mask

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)


def test_create_mask_is_empty_one_bit_image():
    mask = create_mask(6, 3)
    assert mask.mode == "1"
    assert mask.size == (6, 3)
    assert mask.getbbox() is None


def test_create_mask_rejects_bad_size():
    with pytest.raises(ValueError):
        create_mask(0, 3)


def test_undo_on_empty_history_returns_false():
    history = UndoHistory(Canvas(4, 4))
    assert history.undo() is False
    assert history.redo() is False


def test_undo_and_redo_plain_area():
    canvas = Canvas(8, 8)
    history = UndoHistory(canvas)
    history.add((0, 0, 8, 8), tool=Tool.PENCIL)
    canvas.fill_rect((2, 2, 2, 2), RED)
    assert history.undo() is True
    assert canvas.image.getpixel((3, 3)) == WHITE
    assert history.redo() is True
    assert canvas.image.getpixel((3, 3)) == RED
    assert history.undo() is True
    assert canvas.image.getpixel((3, 3)) == WHITE


def test_add_clears_redo():
    canvas = Canvas(4, 4)
    history = UndoHistory(canvas)
    history.add((0, 0, 4, 4))
    canvas.fill_rect((0, 0, 1, 1), RED)
    history.undo()
    history.add((0, 0, 4, 4))
    assert history.redo() is False


def test_mask_restores_only_marked_pixels():
    canvas = Canvas(4, 4)
    history = UndoHistory(canvas)
    mask = create_mask(4, 4)
    ImageDraw.Draw(mask).point((1, 1), fill=1)
    history.add((0, 0, 4, 4), mask=mask)
    canvas.fill_rect((1, 1, 2, 2), RED)
    history.undo()
    assert canvas.image.getpixel((1, 1)) == WHITE
    assert canvas.image.getpixel((2, 2)) == RED


def test_mask_size_mismatch_raises():
    history = UndoHistory(Canvas(4, 4))
    with pytest.raises(ValueError):
        history.add((0, 0, 4, 4), mask=create_mask(2, 2))


def test_background_restores_changed_pixels_only():
    canvas = Canvas(10, 10)
    history = UndoHistory(canvas)
    before = canvas.image.copy()
    canvas.fill_rect((2, 2, 3, 3), RED)
    history.add((0, 0, 10, 10), background=before)
    canvas.fill_rect((8, 8, 1, 1), GREEN)
    history.undo()
    assert canvas.image.getpixel((3, 3)) == WHITE
    assert canvas.image.getpixel((8, 8)) == GREEN
    history.redo()
    assert canvas.image.getpixel((3, 3)) == RED


def test_resize_undo_restores_size_and_cut_content():
    canvas = Canvas(10, 10)
    canvas.fill_rect((8, 8, 1, 1), RED)
    canvas.fill_rect((2, 9, 1, 1), BLUE)
    history = UndoHistory(canvas)
    history.add_resize(5, 5)
    canvas.resize(5, 5)
    history.undo()
    assert canvas.size() == (10, 10)
    assert canvas.image.getpixel((8, 8)) == RED
    assert canvas.image.getpixel((2, 9)) == BLUE
    history.redo()
    assert canvas.size() == (5, 5)


def test_rotate_undo_restores_original_size():
    canvas = Canvas(4, 6)
    canvas.fill_rect((0, 5, 1, 1), RED)
    history = UndoHistory(canvas)
    history.add((0, 0, 4, 6), tool=Tool.ROTATE_CANVAS)
    canvas.set_image(canvas.image.transpose(Image.Transpose.ROTATE_90))
    assert canvas.size() == (6, 4)
    history.undo()
    assert canvas.size() == (4, 6)
    assert canvas.image.getpixel((0, 5)) == RED


def test_undo_of_selection_lift_clears_selection():
    canvas = Canvas(8, 8)
    canvas.fill_rect((2, 2, 1, 1), RED)
    history = UndoHistory(canvas)
    selection = Selection(canvas, on_lift=lambda r: history.add(r, tool=Tool.RECT_SELECT))
    history.selection = selection
    selection.create((1, 1), (4, 4))
    assert selection.has_image()
    assert canvas.image.getpixel((2, 2)) == WHITE
    history.undo()
    assert not selection.has_image()
    assert canvas.image.getpixel((2, 2)) == RED


def test_saved_state_follows_saved_entry():
    canvas = Canvas(4, 4)
    history = UndoHistory(canvas)
    history.mark_saved()
    history.add((0, 0, 4, 4))
    history.mark_unsaved()
    canvas.fill_rect((0, 0, 1, 1), RED)
    history.undo()
    assert history.saved is True
    history.redo()
    assert history.saved is False


def test_clear_forgets_everything():
    canvas = Canvas(4, 4)
    history = UndoHistory(canvas)
    history.add((0, 0, 4, 4))
    history.add((0, 0, 2, 2))
    history.undo()
    history.clear()
    assert history.undo() is False
    assert history.redo() is False