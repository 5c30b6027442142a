# paintkit

The editing core of a raster paint program, built on Pillow. It keeps the
picture, tracks which tool is active and which options go with it, handles a
movable and resizable rectangular selection, and keeps an undo/redo history.

## Modules

- `paintkit.canvas`
  - `Canvas(width, height, background, foreground)` holds an RGB Pillow image
    (`canvas.image`) and the drawing options: `line_width`, `filled` (a
    `FillStyle`: `NONE`, `BACK` or `FORE`), `transparent` and the current `tool`.
  - `size()` returns `(width, height)`.
  - `resize(width, height)` keeps the top-left content and pads the new area
    with the background colour.
  - `set_image(image)` replaces the raster, and the canvas takes the image's size.
  - `crop(rect)` returns the area `(x, y, width, height)`.
  - `paste(image, x, y)` draws an image and honours its alpha channel.
  - `fill_rect(rect, color)` fills an area, with the background colour by default.
  - A size that is not positive raises `ValueError`.
- `paintkit.toolbar`
  - `Tool` lists the tools. `OptionsTab` lists the option tabs.
  - `tab_for_tool(tool)` gives the tab a tool shows. For `Tool.COLOR_PICKER` it
    returns `None`, which means the tab stays as it is.
  - `Toolbar(canvas, on_message, on_pick_color)` starts with the pencil.
  - `toggle_tool(tool, active)` makes a tool current when `active` is true and
    remembers the tool before it. It shows or hides the fill-style frame
    (`rect_frame_visible`) and sets `canvas.tool`.
  - When the colour picker is chosen, `on_pick_color()` is called.
  - Free selection, zoom and text are not implemented yet. Choosing one of them
    passes a message to `on_message`.
  - `go_to_previous_tool()` switches back to the tool that was active before.
  - `choose_line_width(index)` takes an index from 0 to 4 and sets a width of 1 to 5.
  - `choose_fill(index)` takes 0, 1 or 2 for none, background or foreground.
  - `choose_transparent(transparent)` sets the opaque/transparent choice.
  - An index out of range raises `ValueError`.
- `paintkit.selection`
  - `Selection(canvas, on_lift)` is a rectangular selection with eight resize
    handles and a clip box. Each is a `Box`, and `Handle` names them.
  - `create(start, end, image)` makes a selection. With no image it lifts the
    area off the canvas and fills it with the background colour. With an image
    it places a copy of that image at `start`.
  - `on_lift(rect)` is called with the whole-canvas rectangle just before an
    area is lifted, so you can record it for undo.
  - `cursor_at(point)` returns the `Cursor` shape for a point. `handle_at(point)`
    returns the `Handle` there.
  - `start_action(point)` and `do_action(point)` move the selection, or resize
    it by a handle.
  - `set_floating(True)` drops the image onto the canvas. `set_floating(False)`
    lifts it off again.
  - `render(target)` returns a copy of the canvas (or of `target`) with the
    selection image and its dashed, inverted frame drawn on it. While the
    selection is floating, a tint is drawn instead of the image.
  - If the canvas is set to transparent, pixels in the background colour become
    see-through.
  - `invert()`, `flip(horizontal)` and `rotate(angle)` change the selected image.
    `rotate` turns it counter-clockwise by 0, 90, 180 or 270 degrees; any other
    angle raises `ValueError`.
  - `has_image()` tells whether there is a selected image. `get_image()` returns
    a copy of it.
  - `draw_and_clear(draw)` drops the selection (onto the canvas only if `draw`
    is true) and resets the frame. It raises `RuntimeError` when there is no
    selected image.
- `paintkit.undo`
  - `UndoHistory(canvas, selection)` keeps two stacks of edits.
  - `add(rect, mask, background, tool)` records an area of the canvas.
    - With a mask from `create_mask(width, height)`, only the pixels set to 1
      are restored.
    - With a full-size `background` snapshot, only the pixels that changed are
      restored.
  - `add_resize(width, height)` records the canvas before a resize.
  - Adding an edit clears the redo stack.
  - `undo()` and `redo()` return `False` when there is nothing to step through.
  - Undoing a `Tool.ROTATE_CANVAS` edit also restores the canvas size.
  - Undoing a `Tool.RECT_SELECT` edit drops any pending selection image.
  - `clear()` forgets every edit.
  - `mark_saved()` and `mark_unsaved()` set the `saved` flag. Stepping through
    the history sets `saved` to true only when you reach the edit that was
    recorded while the document was saved.

## Installation

```
pip install paintkit
```

## Example

```python
from paintkit.canvas import Canvas
from paintkit.selection import Selection
from paintkit.toolbar import Tool, Toolbar
from paintkit.undo import UndoHistory

canvas = Canvas(200, 100, (255, 255, 255), (0, 0, 0))
toolbar = Toolbar(canvas, on_message=print, on_pick_color=None)
toolbar.toggle_tool(Tool.RECT_SELECT, True)

selection = Selection(canvas, on_lift=lambda rect: history.add(rect, tool=Tool.RECT_SELECT))
history = UndoHistory(canvas, selection)

selection.create((10, 10), (50, 40))   # lift the area off the canvas
if selection.start_action((20, 20)):   # grab the selection inside its box
    selection.do_action((30, 25))      # move it by (10, 5)
preview = selection.render()           # a picture to show on screen
selection.draw_and_clear(True)         # drop it at its new place

history.undo()                         # the canvas is back as it was before the lift

history.add_resize(300, 150)
canvas.resize(300, 150)
history.undo()                         # 200 x 100 again
history.redo()                         # 300 x 150 again
```

## What it does not do

The package has no window, widgets or event loop. You call the methods from
your own interface and display the images that `Canvas.image` and
`Selection.render` give you.

It does not load or save files, and it has no drawing tools such as pencil,
brush or shapes. `Tool` names them, but nothing in the package draws with them.

## Running the tests

```
pip install -e .[test]
pytest
```