"""Rectangular selection: lifting, moving, resizing and dropping a piece of the canvas."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from PIL import Image, ImageChops, ImageDraw, ImageOps

from .canvas import Canvas, Rect

Point = Tuple[int, int]

HANDLE_SIZE = 4
DASH_LENGTH = 3
# Light blue at 30% opacity, drawn over a selection that is being dragged out.
FLOAT_TINT = (179, 230, 255, 77)

_ROTATIONS = {
    0: None,
    90: Image.Transpose.ROTATE_90,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_270,
}


class Handle(IntEnum):
    """The grab areas of a selection, in the order they are hit-tested."""

    TOP_LEFT = 0
    TOP_MID = 1
    TOP_RIGHT = 2
    MID_RIGHT = 3
    BOTTOM_RIGHT = 4
    BOTTOM_MID = 5
    BOTTOM_LEFT = 6
    MID_LEFT = 7
    CLIPBOX = 8
    NONE = 9


class Cursor(Enum):
    """Pointer shapes shown over the selection."""

    TOP_LEFT_CORNER = "top_left_corner"
    TOP_SIDE = "top_side"
    TOP_RIGHT_CORNER = "top_right_corner"
    LEFT_SIDE = "left_side"
    RIGHT_SIDE = "right_side"
    BOTTOM_LEFT_CORNER = "bottom_left_corner"
    BOTTOM_SIDE = "bottom_side"
    BOTTOM_RIGHT_CORNER = "bottom_right_corner"
    FLEUR = "fleur"
    BLANK = "blank"


_CURSORS = {
    Handle.TOP_LEFT: Cursor.TOP_LEFT_CORNER,
    Handle.TOP_MID: Cursor.TOP_SIDE,
    Handle.TOP_RIGHT: Cursor.TOP_RIGHT_CORNER,
    Handle.MID_LEFT: Cursor.LEFT_SIDE,
    Handle.MID_RIGHT: Cursor.RIGHT_SIDE,
    Handle.BOTTOM_LEFT: Cursor.BOTTOM_LEFT_CORNER,
    Handle.BOTTOM_MID: Cursor.BOTTOM_SIDE,
    Handle.BOTTOM_RIGHT: Cursor.BOTTOM_RIGHT_CORNER,
    Handle.CLIPBOX: Cursor.FLEUR,
}


@dataclass
class Box:
    """An axis-aligned box with inclusive corners ``(x0, y0)`` and ``(x1, y1)``."""

    x0: int = 0
    y0: int = 0
    x1: int = 0
    y1: int = 0

    def contains(self, point: Point) -> bool:
        x, y = point
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1

    def _set(self, x0: int, y0: int, x1: int, y1: int) -> None:
        self.x0, self.y0, self.x1, self.y1 = x0, y0, x1, y1


def _half(value: int) -> int:
    """Halve, rounding toward zero."""
    return int(value / 2)


class Selection:
    """The state of the rectangle selection on a canvas.

    ``on_lift`` is called with the whole canvas rectangle just before a region
    is cut out of the canvas, so that the change can be recorded for undo.
    """

    def __init__(
        self,
        canvas: Canvas,
        on_lift: Optional[Callable[[Rect], None]] = None,
    ) -> None:
        self.canvas = canvas
        self._on_lift = on_lift
        self.action = Handle.NONE
        self._drag: Point = (0, 0)
        self.start: Point = (0, 0)
        self.end: Point = (0, 0)
        self.boxes: Dict[Handle, Box] = {h: Box() for h in Handle if h is not Handle.NONE}
        self.image: Optional[Image.Image] = None
        self.active = False
        self.show_borders = False
        self.floating = False
        self.transparent = False
        self._clipboard: Optional[Image.Image] = None

    @property
    def clipbox(self) -> Box:
        return self.boxes[Handle.CLIPBOX]

    # geometry

    def _update_clipbox(self) -> None:
        (sx, sy), (ex, ey) = self.start, self.end
        self.clipbox._set(min(sx, ex), min(sy, ey), max(sx, ex), max(sy, ey))

    def _update_borders(self) -> None:
        if not self.show_borders:
            return
        box = self.clipbox
        self.start = (box.x0, box.y0)
        self.end = (box.x1, box.y1)
        self._update_clipbox()
        s, hs = HANDLE_SIZE, _half(HANDLE_SIZE)
        xl, yt, xr, yb = box.x0, box.y0, box.x1, box.y1
        xm, ym = _half(xr + xl), _half(yb + yt)
        self.boxes[Handle.TOP_LEFT]._set(xl, yt, xl + s, yt + s)
        self.boxes[Handle.TOP_MID]._set(xm - hs, yt, xm + hs, yt + s)
        self.boxes[Handle.TOP_RIGHT]._set(xr - s, yt, xr, yt + s)
        self.boxes[Handle.MID_LEFT]._set(xl, ym - hs, xl + s, ym + hs)
        self.boxes[Handle.MID_RIGHT]._set(xr - s, ym - hs, xr, ym + hs)
        self.boxes[Handle.BOTTOM_LEFT]._set(xl, yb - s, xl + s, yb)
        self.boxes[Handle.BOTTOM_MID]._set(xm - hs, yb - s, xm + hs, yb)
        self.boxes[Handle.BOTTOM_RIGHT]._set(xr - s, yb - s, xr, yb)

    def _rect(self) -> Rect:
        box = self.clipbox
        return (
            min(box.x0, box.x1),
            min(box.y0, box.y1),
            abs(box.x1 - box.x0) + 1,
            abs(box.y1 - box.y0) + 1,
        )

    def handle_at(self, point: Point) -> Handle:
        """Return the first handle (or the clip box) containing ``point``."""
        for handle, box in self.boxes.items():
            if box.contains(point):
                return handle
        return Handle.NONE

    # state changes

    def set_start_point(self, point: Point) -> None:
        self.start = (point[0], point[1])
        self._update_clipbox()

    def set_end_point(self, point: Point) -> None:
        self.end = (point[0], point[1])
        self._update_clipbox()

    def set_active(self, active: bool) -> None:
        self.active = bool(active)

    def set_borders(self, borders: bool) -> None:
        self.show_borders = bool(borders)
        self._update_borders()

    def _fit(self, width: int, height: int) -> Image.Image:
        assert self.image is not None
        if self.image.size == (width, height):
            return self.image
        return self.image.resize((width, height), Image.Resampling.NEAREST)

    def set_floating(self, floating: bool) -> None:
        """Float (drop the image onto the canvas) or anchor (lift the image off it)."""
        self.floating = bool(floating)
        if not self.active:
            return
        rect = self._rect()
        x, y, width, height = rect
        if self.floating:
            if self.image is not None:
                self.canvas.paste(self._fit(width, height), x, y)
                self.image = None
            return

        self.image = None
        if self._clipboard is not None:
            clip = self._clipboard
            self.image = clip.crop((0, 0, width, height)).convert("RGBA")
            self._clipboard = None
        else:
            canvas_width, canvas_height = self.canvas.size()
            if self._on_lift is not None:
                self._on_lift((0, 0, canvas_width, canvas_height))
            self.image = self.canvas.crop(rect).convert("RGBA")
            self.canvas.fill_rect(rect)
        if self.canvas.transparent:
            self.transparent = True
            self._apply_transparency(0)

    def _apply_transparency(self, alpha: int) -> None:
        """Set the alpha of every background-coloured pixel of the image."""
        if self.image is None:
            return
        red, green, blue, opacity = self.image.convert("RGBA").split()
        masks = [
            channel.point(lambda v, c=c: 255 if v == c else 0)
            for channel, c in zip((red, green, blue), self.canvas.background)
        ]
        match = ImageChops.darker(ImageChops.darker(masks[0], masks[1]), masks[2])
        opacity.paste(alpha, (0, 0) + opacity.size, match)
        self.image = Image.merge("RGBA", (red, green, blue, opacity))

    def create(
        self, start: Point, end: Point, image: Optional[Image.Image] = None
    ) -> None:
        """Make a selection.

        Without ``image`` the area from ``start`` to ``end`` is lifted off the
        canvas. With ``image`` the selection holds a copy of it, placed at
        ``start``.
        """
        sx, sy = start
        ex, ey = end
        if image is not None:
            self._clipboard = image.copy()
            width, height = self._clipboard.size
            if abs(sx - ex) != width:
                ex = sx + width
            if abs(sy - ey) != height:
                ey = sy + height
            ex -= 1
            ey -= 1

        self.set_floating(True)
        self.set_active(False)
        self.set_start_point((sx, sy))
        self.set_end_point((ex, ey))
        self.set_active(True)
        self.start_action((abs(sx - ex), abs(sy - ey)))
        self.set_floating(False)
        self.set_borders(True)

    # pointer interaction

    def cursor_at(self, point: Point) -> Cursor:
        return _CURSORS.get(self.handle_at(point), Cursor.BLANK)

    def start_action(self, point: Point) -> bool:
        """Begin a drag at ``point``; True if it grabbed a handle or the box."""
        if not self.active:
            return False
        self.action = self.handle_at(point)
        self._drag = (point[0], point[1])
        return self.action is not Handle.NONE

    def do_action(self, point: Point) -> None:
        """Continue the current drag to ``point``."""
        box = self.clipbox
        dx = point[0] - self._drag[0]
        dy = point[1] - self._drag[1]
        action = self.action
        if action in (Handle.TOP_LEFT, Handle.MID_LEFT):
            if action is Handle.TOP_LEFT:
                box.y0 += dy
            box.x0 += dx
        elif action in (Handle.TOP_RIGHT, Handle.TOP_MID):
            if action is Handle.TOP_RIGHT:
                box.x1 += dx
            box.y0 += dy
        elif action in (Handle.BOTTOM_LEFT, Handle.BOTTOM_MID):
            if action is Handle.BOTTOM_LEFT:
                box.x0 += dx
            box.y1 += dy
        elif action in (Handle.CLIPBOX, Handle.BOTTOM_RIGHT, Handle.MID_RIGHT):
            if action is Handle.CLIPBOX:
                box.x0 += dx
                box.y0 += dy
            if action is not Handle.MID_RIGHT:
                box.y1 += dy
            box.x1 += dx
        self._drag = (self._drag[0] + dx, self._drag[1] + dy)

    # drawing

    def render(self, target: Optional[Image.Image] = None) -> Image.Image:
        """Return a copy of ``target`` (the canvas by default) with the selection drawn on it."""
        base = self.canvas.image if target is None else target
        out = base.convert("RGB")
        if not self.active:
            return out
        x, y, width, height = self._rect()
        if self.floating:
            layer = Image.new("RGBA", out.size, (0, 0, 0, 0))
            ImageDraw.Draw(layer).rectangle(
                [x, y, x + width - 1, y + height - 1], fill=FLOAT_TINT
            )
            out = Image.alpha_composite(out.convert("RGBA"), layer).convert("RGB")
        else:
            if self.canvas.transparent != self.transparent:
                self.transparent = self.canvas.transparent
                self._apply_transparency(0 if self.transparent else 255)
            if self.image is not None:
                shown = self._fit(width, height).convert("RGBA")
                out.paste(shown.convert("RGB"), (x, y), shown.getchannel("A"))

        if self.show_borders:
            self._draw_borders(out)
        else:
            right, bottom = x + width - 1, y + height - 1
            corners = [(x, y), (right, y), (right, bottom), (x, bottom), (x, y)]
            points: List[Point] = []
            for a, b in zip(corners, corners[1:]):
                points.extend(_line_points(a, b))
            _invert_dashed(out, points)
        return out

    def _draw_borders(self, out: Image.Image) -> None:
        b = self.boxes
        for handle in Handle:
            if handle >= Handle.CLIPBOX:
                break
            box = b[handle]
            for yy in range(box.y0, box.y1 + 1):
                for xx in range(box.x0, box.x1 + 1):
                    _invert(out, xx, yy)
        tl, tm, tr = b[Handle.TOP_LEFT], b[Handle.TOP_MID], b[Handle.TOP_RIGHT]
        ml, mr = b[Handle.MID_LEFT], b[Handle.MID_RIGHT]
        bl, bm, br = b[Handle.BOTTOM_LEFT], b[Handle.BOTTOM_MID], b[Handle.BOTTOM_RIGHT]
        segments = [
            ((tl.x1 + 1, tl.y0), (tm.x0 - 1, tm.y0)),
            ((tm.x1 + 1, tm.y0), (tr.x0 - 1, tr.y0)),
            ((tr.x1, tr.y1 + 1), (mr.x1, mr.y0 - 1)),
            ((mr.x1, mr.y1 + 1), (br.x1, br.y0 - 1)),
            ((br.x0 - 1, br.y1), (bm.x1 + 1, bm.y1)),
            ((bm.x0 - 1, bm.y1), (bl.x1 + 1, bl.y1)),
            ((tl.x0, tl.y1 + 1), (ml.x0, ml.y0 - 1)),
            ((ml.x0, ml.y1 + 1), (bl.x0, bl.y0 - 1)),
        ]
        for a, b_end in segments:
            _invert_dashed(out, list(_line_points(a, b_end)))

    # image operations

    def has_image(self) -> bool:
        return self.image is not None

    def invert(self) -> None:
        if self.image is None:
            return
        alpha = self.image.getchannel("A")
        inverted = ImageOps.invert(self.image.convert("RGB"))
        inverted.putalpha(alpha)
        self.image = inverted

    def flip(self, horizontal: bool) -> None:
        if self.image is None:
            return
        method = (
            Image.Transpose.FLIP_LEFT_RIGHT if horizontal else Image.Transpose.FLIP_TOP_BOTTOM
        )
        self.image = self.image.transpose(method)

    def rotate(self, angle: int) -> None:
        """Rotate the image counter-clockwise by 0, 90, 180 or 270 degrees."""
        if angle not in _ROTATIONS:
            raise ValueError(f"unsupported rotation angle: {angle}")
        if self.image is None:
            return
        method = _ROTATIONS[angle]
        rotated = self.image.copy() if method is None else self.image.transpose(method)
        box = self.clipbox
        x0, y0 = min(box.x0, box.x1), min(box.y0, box.y1)
        width, height = rotated.size
        box._set(x0, y0, x0 + width - 1, y0 + height - 1)
        self._update_borders()
        self.image = rotated

    def get_image(self) -> Optional[Image.Image]:
        """Return a copy of the selection's image, or None."""
        return None if self.image is None else self.image.copy()

    def draw_and_clear(self, draw: bool) -> None:
        """Drop the selection (onto the canvas if ``draw``) and reset the frame."""
        if not self.has_image():
            raise RuntimeError("there is no selection image")
        corner = self.start[0] - 1
        point = (corner, corner)
        if not draw:
            self.image = None
        self.set_floating(True)
        self.set_active(False)
        self.set_start_point(point)
        self.set_end_point(point)
        self.set_active(True)
        self.set_borders(False)


def _line_points(a: Point, b: Point) -> Iterator[Point]:
    """Points from ``a`` toward ``b``, leaving out ``b`` itself."""
    dx, dy = b[0] - a[0], b[1] - a[1]
    steps = max(abs(dx), abs(dy))
    for i in range(steps):
        yield (a[0] + round(dx * i / steps), a[1] + round(dy * i / steps))


def _invert(image: Image.Image, x: int, y: int) -> None:
    width, height = image.size
    if 0 <= x < width and 0 <= y < height:
        image.putpixel((x, y), tuple(255 - c for c in image.getpixel((x, y))))


def _invert_dashed(image: Image.Image, points: List[Point]) -> None:
    for i, (x, y) in enumerate(points):
        if (i // DASH_LENGTH) % 2 == 0:
            _invert(image, x, y)