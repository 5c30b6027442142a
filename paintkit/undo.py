"""Undo and redo history for canvas edits and canvas resizes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from PIL import Image, ImageChops

from .canvas import Canvas, Rect
from .selection import Selection
from .toolbar import Tool


def create_mask(width: int, height: int) -> Image.Image:
    """Return an empty one-bit mask; draw with fill 1 to mark pixels to restore."""
    if width <= 0 or height <= 0:
        raise ValueError(f"mask size must be positive, got {width}x{height}")
    return Image.new("1", (width, height), 0)


@dataclass
class _ImageEdit:
    image: Image.Image
    x: int
    y: int
    tool: Tool


@dataclass
class _ResizeEdit:
    width: int
    height: int
    right: Optional[Image.Image]
    bottom: Optional[Image.Image]


_Edit = Union[_ImageEdit, _ResizeEdit]


def _opaque_where_set(mask: Image.Image) -> Image.Image:
    return mask.convert("L").point(lambda v: 255 if v else 0)


class UndoHistory:
    """Two stacks of recorded edits, with the saved-state marker of the document."""

    def __init__(self, canvas: Canvas, selection: Optional[Selection] = None) -> None:
        self.canvas = canvas
        self.selection = selection
        self._undo: List[_Edit] = []
        self._redo: List[_Edit] = []
        self.saved = False
        self._saved_entry: Optional[_Edit] = None

    # recording

    def add(
        self,
        rect: Rect,
        mask: Optional[Image.Image] = None,
        background: Optional[Image.Image] = None,
        tool: Tool = Tool.NONE,
    ) -> None:
        """Record the area ``rect`` so that a later undo can restore it.

        With ``mask`` only the pixels set in the mask are restored. With
        ``background`` (a full-size snapshot taken before the edit) the
        pixels that differ between it and the canvas are restored from it.
        """
        x, y, width, height = rect
        if mask is not None:
            if mask.size != (width, height):
                raise ValueError(
                    f"mask size {mask.size} does not match rectangle {width}x{height}"
                )
            image = self.canvas.crop(rect).convert("RGBA")
            image.putalpha(_opaque_where_set(mask))
        elif background is not None:
            box = (x, y, x + width, y + height)
            old = background.convert("RGB").crop(box)
            now = self.canvas.crop(rect)
            channels = ImageChops.difference(old, now).split()
            changed = channels[0]
            for channel in channels[1:]:
                changed = ImageChops.lighter(changed, channel)
            image = old.convert("RGBA")
            image.putalpha(_opaque_where_set(changed))
        else:
            image = self.canvas.crop(rect)
        self._undo.append(self._image_entry(image, x, y, Tool(tool)))
        self._redo.clear()

    def add_resize(self, width: int, height: int) -> None:
        """Record the canvas before it is resized to ``width`` x ``height``."""
        self._undo.append(self._resize_entry(width, height))
        self._redo.clear()

    def clear(self) -> None:
        """Forget every recorded edit."""
        self._redo.clear()
        self._undo.clear()

    # saved state

    def mark_saved(self) -> None:
        self.saved = True

    def mark_unsaved(self) -> None:
        self.saved = False

    # stepping

    def undo(self) -> bool:
        """Revert the latest edit; False when there is nothing to undo."""
        return self._step(self._undo, self._redo)

    def redo(self) -> bool:
        """Reapply the latest undone edit; False when there is nothing to redo."""
        return self._step(self._redo, self._undo)

    def _step(self, source: List[_Edit], target: List[_Edit]) -> bool:
        if not source:
            return False
        entry = source.pop()
        target.append(self._apply(entry))
        return True

    # internals

    def _image_entry(self, image: Image.Image, x: int, y: int, tool: Tool) -> _ImageEdit:
        entry = _ImageEdit(image.copy(), x, y, tool)
        if self.saved:
            self._saved_entry = entry
        return entry

    def _resize_entry(self, width: int, height: int) -> _ResizeEdit:
        old_width, old_height = self.canvas.size()
        right = None
        bottom = None
        if width < old_width:
            right = self.canvas.crop((width, 0, old_width - width, old_height))
        if height < old_height:
            bottom = self.canvas.crop(
                (0, height, min(width, old_width), old_height - height)
            )
        entry = _ResizeEdit(old_width, old_height, right, bottom)
        if self.saved:
            self._saved_entry = entry
        return entry

    def _capture_like(self, image: Image.Image, x: int, y: int) -> Image.Image:
        width, height = image.size
        region = self.canvas.crop((x, y, width, height))
        if image.mode == "RGBA":
            region = region.convert("RGBA")
            region.putalpha(image.getchannel("A"))
        return region

    def _apply(self, entry: _Edit) -> _Edit:
        result: _Edit
        if isinstance(entry, _ImageEdit):
            image = entry.image.copy()
            if entry.tool is Tool.ROTATE_CANVAS:
                self.canvas.set_image(image)
            if (
                entry.tool is Tool.RECT_SELECT
                and self.selection is not None
                and self.selection.has_image()
            ):
                self.selection.draw_and_clear(False)
            redo_image = self._capture_like(image, entry.x, entry.y)
            result = self._image_entry(redo_image, entry.x, entry.y, entry.tool)
            self.canvas.paste(image, entry.x, entry.y)
        else:
            result = self._resize_entry(entry.width, entry.height)
            current_width, current_height = self.canvas.size()
            self.canvas.resize(entry.width, entry.height)
            if entry.right is not None:
                self.canvas.paste(entry.right, current_width, 0)
            if entry.bottom is not None:
                self.canvas.paste(entry.bottom, 0, current_height)
        self.saved = entry is self._saved_entry
        return result