"""
Scene.

Owns the ordered collection of shapes, the current selection and the
viewport, and provides every mutation the editor performs on them.

Shapes are kept in append order, which doubles as z-order: later shapes
are drawn on top and hit-tested first. The selection is stored as a
shape ID, so deleting a shape can never leave a dangling reference.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from models import (
    Point, Rect, Shape, ShapeKind, HandleType, Viewport,
    regular_polygon_vertices,
)
from .settings_manager import EditorSettings

logger = logging.getLogger(__name__)


# Default placement per kind
DEFAULT_BOUNDS: Dict[ShapeKind, Rect] = {
    ShapeKind.RECTANGLE: Rect(100, 100, 120, 80),
    ShapeKind.CIRCLE: Rect(300, 100, 80, 80),
    ShapeKind.ELLIPSE: Rect(450, 100, 120, 80),
}

DEFAULT_TRIANGLE: Tuple[Point, ...] = (
    Point(600, 100),
    Point(650, 180),
    Point(550, 180),
)


# =============================================================================
# Resize algorithm
# =============================================================================

def _ordered(low: float, high: float) -> Tuple[float, float]:
    """Swap a pair of edges that was dragged through each other."""
    if low > high:
        return high, low
    return low, high


def resize_bounds(bounds: Rect, handle: HandleType, dx: float, dy: float,
                  keep_square: bool = False, min_extent: float = 5.0) -> Rect:
    """
    Resize a rectangle by dragging one of its corners.

    Only the two edges that meet at the dragged corner move; the opposite
    corner stays fixed. Each axis keeps at least ``min_extent`` by
    clamping the moving edge. Edges that end up inverted are swapped.

    With ``keep_square`` the result is forced to a square of side
    min(width, height), anchored at the corner opposite the dragged one
    in the original bounds.

    Args:
        bounds: Bounds before the drag step
        handle: Corner being dragged
        dx: World-space X delta
        dy: World-space Y delta
        keep_square: Enforce width == height (circles)
        min_extent: Minimum width and height

    Returns:
        New bounds (the input is returned unchanged for non-corner handles)
    """
    if handle not in (HandleType.TOP_LEFT, HandleType.TOP_RIGHT,
                      HandleType.BOTTOM_LEFT, HandleType.BOTTOM_RIGHT):
        return bounds

    moves_left = handle in (HandleType.TOP_LEFT, HandleType.BOTTOM_LEFT)
    moves_top = handle in (HandleType.TOP_LEFT, HandleType.TOP_RIGHT)

    left, top, right, bottom = bounds.left, bounds.top, bounds.right, bounds.bottom
    if moves_left:
        left += dx
    else:
        right += dx
    if moves_top:
        top += dy
    else:
        bottom += dy

    width = right - left
    if width < min_extent:
        width = min_extent
        if moves_left:
            left = right - width
        else:
            right = left + width

    height = bottom - top
    if height < min_extent:
        height = min_extent
        if moves_top:
            top = bottom - height
        else:
            bottom = top + height

    if left > right or top > bottom:
        left, right = _ordered(left, right)
        top, bottom = _ordered(top, bottom)
        width, height = right - left, bottom - top

    if not keep_square:
        return Rect(left, top, width, height)

    size = min(width, height)
    left = bounds.right - size if moves_left else bounds.left
    top = bounds.bottom - size if moves_top else bounds.top
    left, right = _ordered(left, left + size)
    top, bottom = _ordered(top, top + size)
    return Rect(left, top, size, size)


# =============================================================================
# Scene
# =============================================================================

class Scene:
    """
    Document state of the editor: shapes, selection and viewport.

    The renderer only reads from the scene; all mutations go through the
    methods below, normally called by the interaction state machine.
    """

    def __init__(self, settings: Optional[EditorSettings] = None):
        self.settings = settings or EditorSettings()
        view = self.settings.view
        self.viewport = Viewport(
            scale=view.initial_scale,
            min_scale=view.min_scale,
            max_scale=view.max_scale,
        )
        self._shapes: List[Shape] = []
        self._selected_id: Optional[str] = None

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[Shape]:
        return iter(tuple(self._shapes))

    def __len__(self) -> int:
        return len(self._shapes)

    @property
    def shapes(self) -> Tuple[Shape, ...]:
        """Shapes in z-order, bottom first."""
        return tuple(self._shapes)

    def get_shape(self, shape_id: Optional[str]) -> Optional[Shape]:
        """Get a shape by ID."""
        if shape_id is None:
            return None
        for shape in self._shapes:
            if shape.id == shape_id:
                return shape
        return None

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_shape(self) -> Optional[Shape]:
        return self.get_shape(self._selected_id)

    def select(self, shape_id: Optional[str]) -> bool:
        """Select a shape by ID (None clears the selection)."""
        if shape_id is None:
            self.clear_selection()
            return True
        if self.get_shape(shape_id) is None:
            logger.debug(f"select ignored, unknown shape '{shape_id}'")
            return False
        self._selected_id = shape_id
        return True

    def clear_selection(self):
        self._selected_id = None

    # ------------------------------------------------------------------
    # Creation / deletion
    # ------------------------------------------------------------------

    def _append(self, shape: Shape) -> Shape:
        self._shapes.append(shape)
        logger.debug(f"Added {shape.kind.value} '{shape.id}' at {shape.bounds.to_tuple()}")
        return shape

    def add_shape(self, kind: ShapeKind) -> Shape:
        """
        Add a shape of the given kind at its default position.

        The new shape goes on top of the z-order but is not selected.
        A Polygon is created as the default triangle.
        """
        if not isinstance(kind, ShapeKind):
            kind = ShapeKind(kind)
        color = self.settings.shapes.stroke_color
        if kind == ShapeKind.POLYGON:
            shape = Shape(kind=kind, vertices=list(DEFAULT_TRIANGLE), stroke_color=color)
        else:
            shape = Shape(kind=kind, bounds=DEFAULT_BOUNDS[kind], stroke_color=color)
        return self._append(shape)

    def add_polygon(self, vertices: Sequence[Point],
                    stroke_color: Optional[str] = None) -> Optional[Shape]:
        """
        Add an arbitrary polygon.

        Returns:
            The new shape, or None if fewer than 3 vertices were given
        """
        if len(vertices) < 3:
            logger.debug(f"Polygon with {len(vertices)} vertices ignored")
            return None
        shape = Shape(
            kind=ShapeKind.POLYGON,
            vertices=list(vertices),
            stroke_color=stroke_color or self.settings.shapes.stroke_color,
        )
        return self._append(shape)

    def add_regular_polygon(self, n: int) -> Optional[Shape]:
        """
        Add a regular n-gon at the default polygon position.

        ``n < 3`` creates nothing and returns None.
        """
        if n < 3:
            logger.debug(f"Regular polygon with n={n} ignored")
            return None
        defaults = self.settings.shapes
        vertices = regular_polygon_vertices(
            n, Point(*defaults.polygon_center), defaults.polygon_radius
        )
        return self.add_polygon(vertices)

    def duplicate(self, shape_id: str) -> Optional[Shape]:
        """
        Copy a shape offset by the duplicate offset and put it on top.

        The original is left untouched. The copy is returned so the caller
        can select it; this method does not change the selection.
        """
        original = self.get_shape(shape_id)
        if original is None:
            return None
        offset = self.settings.interaction.duplicate_offset
        copy = original.copy()
        copy.move_by(offset, offset)
        logger.debug(f"Duplicated '{original.id}' as '{copy.id}'")
        return self._append(copy)

    def delete_selected(self) -> Optional[Shape]:
        """Remove the selected shape, if any, and clear the selection."""
        shape = self.selected_shape
        if shape is None:
            return None
        self._shapes.remove(shape)
        self._selected_id = None
        logger.debug(f"Deleted {shape.kind.value} '{shape.id}'")
        return shape

    def clear(self):
        """Remove all shapes and clear the selection."""
        self._shapes.clear()
        self._selected_id = None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _target(self, shape_id: Optional[str], action: str) -> Optional[Shape]:
        shape = self.get_shape(shape_id)
        if shape is None:
            logger.debug(f"{action} ignored, unknown shape '{shape_id}'")
        return shape

    def move_shape(self, shape_id: str, dx: float, dy: float) -> bool:
        shape = self._target(shape_id, "move")
        if shape is None:
            return False
        shape.move_by(dx, dy)
        return True

    def resize_shape(self, shape_id: str, handle: HandleType,
                     dx: float, dy: float) -> bool:
        """
        Drag a corner handle of a Rectangle, Circle or Ellipse.

        Polygons are reshaped through their vertices and ignore this call.
        """
        shape = self._target(shape_id, "resize")
        if shape is None or shape.is_polygon:
            return False
        shape.bounds = resize_bounds(
            shape.bounds, handle, dx, dy,
            keep_square=shape.kind == ShapeKind.CIRCLE,
            min_extent=self.settings.interaction.min_extent,
        )
        return True

    def move_vertex(self, shape_id: str, index: int, dx: float, dy: float) -> bool:
        shape = self._target(shape_id, "move_vertex")
        if shape is None:
            return False
        return shape.move_vertex(index, dx, dy)

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------

    def pan_by(self, dx: float, dy: float):
        self.viewport.pan_by(dx, dy)

    def zoom_at_point(self, screen: Point, factor: float) -> bool:
        return self.viewport.zoom_at_point(screen, factor)

    def zoom_by_step(self, zoom_in: bool, center: Point) -> bool:
        """Zoom one button step about ``center`` (usually the widget centre)."""
        view = self.settings.view
        factor = view.button_zoom_in if zoom_in else view.button_zoom_out
        return self.viewport.zoom_at_point(center, factor)
