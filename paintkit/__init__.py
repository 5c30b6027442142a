"""Canvas, toolbar state, rectangular selection and undo history for a raster paint editor."""

__version__ = "0.4.0"
__all__ = ["canvas", "toolbar", "selection", "undo"]