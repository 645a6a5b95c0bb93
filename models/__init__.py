"""
Models package.

This package contains the GUI-independent data models of the shape editor:

- Geometry primitives and helpers (Point, Rect, point_in_polygon, ...)
- Shape entity (ShapeKind, HandleType, Shape)
- Screen/world coordinate transform (Viewport)
"""

from .geometry import (
    Point,
    Rect,
    rect_contains,
    rect_corners,
    handle_rect,
    polygon_bounds,
    point_in_polygon,
    regular_polygon_vertices,
)
from .shape import (
    ShapeKind,
    HandleType,
    Shape,
    CORNER_HANDLES,
    DEFAULT_STROKE_COLOR,
)
from .viewport import (
    Viewport,
    MIN_SCALE,
    MAX_SCALE,
)

__all__ = [
    # Geometry
    "Point",
    "Rect",
    "rect_contains",
    "rect_corners",
    "handle_rect",
    "polygon_bounds",
    "point_in_polygon",
    "regular_polygon_vertices",
    # Shapes
    "ShapeKind",
    "HandleType",
    "Shape",
    "CORNER_HANDLES",
    "DEFAULT_STROKE_COLOR",
    # Viewport
    "Viewport",
    "MIN_SCALE",
    "MAX_SCALE",
]
