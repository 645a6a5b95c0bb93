"""
Shape Model.

Defines the editable shape entity and the handle identifiers used when
resizing or reshaping it.

Key concepts:
- ShapeKind: Rectangle, Circle, Ellipse or Polygon (fixed at creation)
- Shape: kind + bounds + vertices + stroke color
- HandleType: which corner (or polygon vertex) a drag grabbed

For Rectangle/Circle/Ellipse the bounds are authoritative. For Polygon
the vertices are authoritative and the bounds are a cache that is
recomputed after every vertex change.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from .geometry import Point, Rect, polygon_bounds, rect_corners


# =============================================================================
# Enumerations
# =============================================================================

class ShapeKind(Enum):
    """Kinds of shapes the editor can create."""
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    POLYGON = "polygon"


class HandleType(Enum):
    """Handle grabbed at the start of a resize or reshape gesture."""
    NONE = "none"
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"
    POLYGON_VERTEX = "polygon_vertex"


# Corner handles in hit-test order
CORNER_HANDLES = (
    HandleType.TOP_LEFT,
    HandleType.TOP_RIGHT,
    HandleType.BOTTOM_LEFT,
    HandleType.BOTTOM_RIGHT,
)

DEFAULT_STROKE_COLOR = "#00008B"  # dark blue


def _generate_id() -> str:
    """Generate a short unique ID."""
    return str(uuid.uuid4())[:8]


# =============================================================================
# Shape
# =============================================================================

@dataclass
class Shape:
    """
    A single editable shape.

    Attributes:
        kind: Shape kind, never changes after creation
        bounds: Axis-aligned extent in world coordinates
        vertices: Polygon vertices in edge order (empty for other kinds)
        stroke_color: Outline color, display only
        id: Stable identifier used for selection
    """
    kind: ShapeKind
    bounds: Rect = field(default_factory=Rect)
    vertices: List[Point] = field(default_factory=list)
    stroke_color: str = DEFAULT_STROKE_COLOR
    id: str = field(default_factory=_generate_id)

    def __post_init__(self):
        """Convert string kind to enum and derive polygon bounds."""
        if isinstance(self.kind, str):
            self.kind = ShapeKind(self.kind)
        if not isinstance(self.kind, ShapeKind):
            raise TypeError(f"Unsupported shape kind: {self.kind!r}")
        if self.is_polygon:
            self.vertices = list(self.vertices)
            self.recompute_bounds()
        else:
            self.vertices = []

    @property
    def is_polygon(self) -> bool:
        return self.kind == ShapeKind.POLYGON

    def recompute_bounds(self):
        """Refresh the cached bounds of a polygon from its vertices."""
        if self.is_polygon:
            self.bounds = polygon_bounds(self.vertices)

    def move_by(self, dx: float, dy: float):
        """Translate the shape by a world-space delta."""
        if self.is_polygon:
            self.vertices = [p.translated(dx, dy) for p in self.vertices]
            self.recompute_bounds()
        else:
            self.bounds = self.bounds.translated(dx, dy)

    def move_vertex(self, index: int, dx: float, dy: float) -> bool:
        """
        Offset a single polygon vertex.

        Convexity is not enforced; the polygon may become concave or
        self-intersecting.

        Returns:
            True if a vertex was moved
        """
        if not self.is_polygon or not 0 <= index < len(self.vertices):
            return False
        self.vertices[index] = self.vertices[index].translated(dx, dy)
        self.recompute_bounds()
        return True

    def corner_points(self) -> Dict[HandleType, Point]:
        """Bounds corners keyed by the handle that sits on them."""
        return dict(zip(CORNER_HANDLES, rect_corners(self.bounds)))

    def copy(self) -> 'Shape':
        """Create an independent copy with a new ID."""
        return Shape(
            kind=self.kind,
            bounds=self.bounds,
            vertices=list(self.vertices),
            stroke_color=self.stroke_color,
        )

    def info_text(self) -> str:
        """Position/size label drawn above the shape."""
        b = self.bounds
        return f"(X={b.left:.1f}, Y={b.top:.1f}, W={b.width:.1f}, H={b.height:.1f})"
