"""Tool selection and the option tabs that go with each tool."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Callable, Optional

from .canvas import Canvas, FillStyle


class Tool(IntEnum):
    NONE = 0
    FREE_SELECT = 1
    RECT_SELECT = 2
    ERASER = 3
    COLOR_PICKER = 4
    PENCIL = 5
    AIRBRUSH = 6
    BUCKET_FILL = 7
    ZOOM = 8
    PAINTBRUSH = 9
    TEXT = 10
    LINE = 11
    RECTANGLE = 12
    ELLIPSE = 13
    CURVE = 14
    POLYGON = 15
    ROUNDED_RECTANGLE = 16
    CLEAR_CANVAS = 17
    INVERT_CANVAS = 18
    FLIP_CANVAS = 19
    ROTATE_CANVAS = 20


class OptionsTab(IntEnum):
    NONE = 0
    SELECTION = 1
    RECT_LINE = 2
    ERASE = 3
    ZOOM = 4
    BRUSH = 5
    SPRAY = 6


_TABS = {
    Tool.NONE: OptionsTab.SELECTION,
    Tool.FREE_SELECT: OptionsTab.SELECTION,
    Tool.RECT_SELECT: OptionsTab.SELECTION,
    Tool.TEXT: OptionsTab.SELECTION,
    Tool.LINE: OptionsTab.RECT_LINE,
    Tool.CURVE: OptionsTab.RECT_LINE,
    Tool.RECTANGLE: OptionsTab.RECT_LINE,
    Tool.ELLIPSE: OptionsTab.RECT_LINE,
    Tool.POLYGON: OptionsTab.RECT_LINE,
    Tool.ROUNDED_RECTANGLE: OptionsTab.RECT_LINE,
    Tool.ERASER: OptionsTab.ERASE,
    Tool.AIRBRUSH: OptionsTab.SPRAY,
    Tool.ZOOM: OptionsTab.ZOOM,
    Tool.PAINTBRUSH: OptionsTab.BRUSH,
}

_SHAPE_TOOLS = {Tool.RECTANGLE, Tool.ELLIPSE, Tool.POLYGON, Tool.ROUNDED_RECTANGLE}
_LINE_TOOLS = {Tool.LINE, Tool.CURVE}

_UNFINISHED = {
    Tool.FREE_SELECT: "free selection",
    Tool.ZOOM: "zoom",
    Tool.TEXT: "text",
}

_FILL_CHOICES = (FillStyle.NONE, FillStyle.BACK, FillStyle.FORE)
_LINE_WIDTHS = (1, 2, 3, 4, 5)


def tab_for_tool(tool: Tool) -> Optional[OptionsTab]:
    """Return the options tab shown for ``tool``; None means the tab is left as is."""
    if tool is Tool.COLOR_PICKER:
        return None
    return _TABS.get(Tool(tool), OptionsTab.NONE)


def _unfinished_message(feature: str) -> str:
    return f"Sorry, but the {feature} feature has\nnot yet been implemented."


class Toolbar:
    """Keeps the current and previous tool and applies option choices to a canvas."""

    def __init__(
        self,
        canvas: Canvas,
        on_message: Optional[Callable[[str], None]] = None,
        on_pick_color: Optional[Callable[[], None]] = None,
    ) -> None:
        self.canvas = canvas
        self._on_message = on_message
        self._on_pick_color = on_pick_color
        self.tab = OptionsTab.SELECTION
        self.rect_frame_visible = False
        self.current_tool: Optional[Tool] = Tool.PENCIL
        self.previous_tool: Optional[Tool] = None
        self.toggle_tool(Tool.PENCIL, True)

    def _message(self, text: str) -> None:
        if self._on_message is not None:
            self._on_message(text)

    def toggle_tool(self, tool: Tool, active: bool) -> None:
        """React to a tool button changing state; only activation selects a tool."""
        tool = Tool(tool)
        feature = _UNFINISHED.get(tool)
        if active and feature is not None and tool is not Tool.TEXT:
            self._message(_unfinished_message(feature))
        if active:
            self.previous_tool = self.current_tool
            self.current_tool = tool
            if tool in _LINE_TOOLS:
                self.rect_frame_visible = False
            elif tool in _SHAPE_TOOLS:
                self.rect_frame_visible = True
            tab = tab_for_tool(tool)
            if tab is None:
                if self._on_pick_color is not None:
                    self._on_pick_color()
            else:
                self.tab = tab
            self.canvas.tool = tool
        if active and tool is Tool.TEXT:
            self._message(_unfinished_message(feature))

    def go_to_previous_tool(self) -> None:
        """Reactivate the tool used before the current one."""
        if self.previous_tool is None or self.previous_tool == self.current_tool:
            return
        self.toggle_tool(self.previous_tool, True)

    def choose_line_width(self, index: int) -> None:
        """Pick one of the five line widths (index 0 to 4)."""
        if not 0 <= index < len(_LINE_WIDTHS):
            raise ValueError(f"no line width button {index}")
        self.canvas.line_width = _LINE_WIDTHS[index]

    def choose_fill(self, index: int) -> None:
        """Pick the fill style: 0 none, 1 background, 2 foreground."""
        if not 0 <= index < len(_FILL_CHOICES):
            raise ValueError(f"no fill button {index}")
        self.canvas.filled = _FILL_CHOICES[index]

    def choose_transparent(self, transparent: bool) -> None:
        """Choose whether selections treat the background colour as transparent."""
        self.canvas.transparent = bool(transparent)