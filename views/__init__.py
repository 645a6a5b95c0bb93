"""Views package."""

from .drawing_canvas import DrawingCanvas
from .main_window import MainWindow, EditorToolbar

__all__ = [
    "DrawingCanvas",
    "EditorToolbar",
    "MainWindow",
]
