"""The drawing surface shared by the tools, the selection and the undo history."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Tuple

from PIL import Image, ImageDraw

Color = Tuple[int, int, int]
Rect = Tuple[int, int, int, int]

WHITE: Color = (255, 255, 255)
BLACK: Color = (0, 0, 0)


class FillStyle(Enum):
    """How closed shapes are filled."""

    NONE = "none"
    BACK = "back"
    FORE = "fore"


class Canvas:
    """An RGB raster together with the drawing options chosen in the toolbar."""

    def __init__(
        self,
        width: int,
        height: int,
        background: Color = WHITE,
        foreground: Color = BLACK,
    ) -> None:
        _check_size(width, height)
        self.background: Color = tuple(background)  # type: ignore[assignment]
        self.foreground: Color = tuple(foreground)  # type: ignore[assignment]
        self.image: Image.Image = Image.new("RGB", (width, height), self.background)
        self.line_width = 1
        self.filled = FillStyle.NONE
        self.transparent = False
        self.tool: Optional[Any] = None

    def size(self) -> Tuple[int, int]:
        """Return ``(width, height)`` of the raster."""
        return self.image.size

    def resize(self, width: int, height: int) -> None:
        """Change the raster size, keeping the top-left content and padding with background."""
        _check_size(width, height)
        resized = Image.new("RGB", (width, height), self.background)
        resized.paste(self.image, (0, 0))
        self.image = resized

    def set_image(self, image: Image.Image) -> None:
        """Replace the raster by a copy of ``image``; the canvas takes its size."""
        self.image = image.convert("RGB")

    def crop(self, rect: Rect) -> Image.Image:
        """Return a copy of the area ``(x, y, width, height)``."""
        x, y, width, height = rect
        if width < 0 or height < 0:
            raise ValueError(f"negative rectangle size: {width}x{height}")
        return self.image.crop((x, y, x + width, y + height))

    def paste(self, image: Image.Image, x: int, y: int) -> None:
        """Draw ``image`` with its top-left corner at ``(x, y)``, honouring its alpha."""
        if image.mode in ("RGBA", "LA"):
            self.image.paste(image.convert("RGB"), (x, y), image.getchannel("A"))
        elif image.mode == "RGBa":
            rgba = image.convert("RGBA")
            self.image.paste(rgba.convert("RGB"), (x, y), rgba.getchannel("A"))
        else:
            self.image.paste(image.convert("RGB"), (x, y))

    def fill_rect(self, rect: Rect, color: Optional[Color] = None) -> None:
        """Fill ``(x, y, width, height)`` with ``color``, the background by default."""
        x, y, width, height = rect
        if width <= 0 or height <= 0:
            return
        fill = self.background if color is None else tuple(color)
        ImageDraw.Draw(self.image).rectangle(
            [x, y, x + width - 1, y + height - 1], fill=fill
        )


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"canvas size must be positive, got {width}x{height}")