"""
Geometry Utilities.

Plain 2D primitives and helper functions shared by the shape model,
the viewport transform and the hit-test engine.

All coordinates are floats. Screen space has y growing downward, so
"clockwise" below refers to what the user sees on screen.
"""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple


# =============================================================================
# Primitives
# =============================================================================

@dataclass(frozen=True)
class Point:
    """2D point (or vector) in either screen or world space."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> 'Point':
        return Point(self.x * factor, self.y * factor)

    def __truediv__(self, divisor: float) -> 'Point':
        return Point(self.x / divisor, self.y / divisor)

    def translated(self, dx: float, dy: float) -> 'Point':
        return Point(self.x + dx, self.y + dy)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle.

    Attributes:
        left: X coordinate of the left edge
        top: Y coordinate of the top edge
        width: Horizontal extent
        height: Vertical extent
    """
    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> 'Rect':
        """Create from edge coordinates."""
        return cls(left, top, right - left, bottom - top)

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def translated(self, dx: float, dy: float) -> 'Rect':
        return Rect(self.left + dx, self.top + dy, self.width, self.height)

    def contains(self, p: Point) -> bool:
        return rect_contains(self, p)

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.left, self.top, self.width, self.height)


# =============================================================================
# Helper Functions
# =============================================================================

def rect_contains(rect: Rect, p: Point) -> bool:
    """Inclusive containment test (points on any edge are inside)."""
    return rect.left <= p.x <= rect.right and rect.top <= p.y <= rect.bottom


def rect_corners(rect: Rect) -> Tuple[Point, Point, Point, Point]:
    """Return the corners as (top_left, top_right, bottom_left, bottom_right)."""
    return (
        Point(rect.left, rect.top),
        Point(rect.right, rect.top),
        Point(rect.left, rect.bottom),
        Point(rect.right, rect.bottom),
    )


def handle_rect(center: Point, size: float) -> Rect:
    """Square of side ``size`` centred on ``center``."""
    half = size / 2
    return Rect(center.x - half, center.y - half, size, size)


def polygon_bounds(vertices: Sequence[Point]) -> Rect:
    """
    Tight axis-aligned bounding box of a vertex list.

    An empty list yields a zero-sized rect at the origin.
    """
    if not vertices:
        return Rect()

    xs = [p.x for p in vertices]
    ys = [p.y for p in vertices]
    return Rect.from_ltrb(min(xs), min(ys), max(xs), max(ys))


def point_in_polygon(p: Point, vertices: Sequence[Point]) -> bool:
    """
    Even-odd point-in-polygon test.

    Casts a horizontal ray from ``p`` and counts the edges it crosses;
    an odd count means the point is inside. Works for non-convex and
    self-intersecting polygons.
    """
    count = len(vertices)
    if count < 3:
        return False

    inside = False
    j = count - 1
    for i in range(count):
        vi, vj = vertices[i], vertices[j]
        if (vi.y > p.y) != (vj.y > p.y):
            # Edge straddles the ray, so vj.y != vi.y here
            x_cross = (vj.x - vi.x) * (p.y - vi.y) / (vj.y - vi.y) + vi.x
            if p.x < x_cross:
                inside = not inside
        j = i
    return inside


def regular_polygon_vertices(n: int, center: Point, radius: float) -> List[Point]:
    """
    Vertices of a regular n-gon.

    The first vertex sits straight above the centre (angle -90 degrees)
    and the rest follow clockwise on screen in steps of 2*pi/n.
    """
    points = []
    for i in range(n):
        angle = 2 * math.pi * i / n - math.pi / 2
        points.append(Point(
            center.x + radius * math.cos(angle),
            center.y + radius * math.sin(angle),
        ))
    return points
