"""
Unit tests for the Scene and its mutation algorithms.

Tests:
- Shape creation defaults and z-order
- Regular polygon creation and rejected vertex counts
- Selection, duplication and deletion
- Corner resize with minimum extent and circle constraint
- Polygon vertex editing
- View forwarding (pan / zoom)
"""

import random
import pytest

from models import Point, Rect, ShapeKind, HandleType, polygon_bounds
from services.scene import Scene, resize_bounds, DEFAULT_BOUNDS
from services.settings_manager import EditorSettings
from tests.conftest import assert_rect_equal


CORNERS = [
    HandleType.TOP_LEFT, HandleType.TOP_RIGHT,
    HandleType.BOTTOM_LEFT, HandleType.BOTTOM_RIGHT,
]


class TestShapeCreation:
    """Tests for adding shapes."""

    @pytest.mark.parametrize("kind", [ShapeKind.RECTANGLE, ShapeKind.CIRCLE, ShapeKind.ELLIPSE])
    def test_default_bounds(self, empty_scene, kind):
        shape = empty_scene.add_shape(kind)
        assert shape.kind == kind
        assert shape.bounds == DEFAULT_BOUNDS[kind]

    def test_rectangle_default(self, empty_scene):
        shape = empty_scene.add_shape(ShapeKind.RECTANGLE)
        assert shape.bounds == Rect(100, 100, 120, 80)

    def test_polygon_default_is_triangle(self, empty_scene):
        shape = empty_scene.add_shape(ShapeKind.POLYGON)
        assert shape.vertices == [Point(600, 100), Point(650, 180), Point(550, 180)]
        assert shape.bounds == Rect(550, 100, 100, 80)

    def test_add_does_not_select(self, empty_scene):
        empty_scene.add_shape(ShapeKind.RECTANGLE)
        assert empty_scene.selected_id is None
        assert empty_scene.selected_shape is None

    def test_append_order_is_z_order(self, populated_scene):
        kinds = [shape.kind for shape in populated_scene]
        assert kinds == [ShapeKind.RECTANGLE, ShapeKind.CIRCLE,
                         ShapeKind.ELLIPSE, ShapeKind.POLYGON]
        assert len(populated_scene) == 4

    def test_default_color_from_settings(self):
        settings = EditorSettings()
        settings.shapes.stroke_color = "#00FF00"
        shape = Scene(settings).add_shape(ShapeKind.CIRCLE)
        assert shape.stroke_color == "#00FF00"


class TestRegularPolygon:
    """Tests for regular polygon creation."""

    def test_triangle(self, empty_scene):
        shape = empty_scene.add_regular_polygon(3)
        assert shape is not None
        assert shape.kind == ShapeKind.POLYGON
        assert len(shape.vertices) == 3
        assert shape.vertices[0].x == pytest.approx(800)
        assert shape.vertices[0].y == pytest.approx(100)
        assert shape.bounds == polygon_bounds(shape.vertices)

    @pytest.mark.parametrize("n", [2, 1, 0, -4])
    def test_too_few_sides_is_noop(self, rect_scene, n):
        assert rect_scene.add_regular_polygon(n) is None
        assert len(rect_scene) == 1

    def test_arbitrary_polygon(self, empty_scene):
        shape = empty_scene.add_polygon([Point(0, 0), Point(10, 0), Point(5, 8)])
        assert shape.bounds == Rect(0, 0, 10, 8)

    def test_arbitrary_polygon_needs_three_vertices(self, empty_scene):
        assert empty_scene.add_polygon([Point(0, 0), Point(10, 0)]) is None
        assert len(empty_scene) == 0


class TestSelectionAndDeletion:
    """Tests for selection, duplicate and delete."""

    def test_select(self, rect_scene):
        shape = rect_scene.shapes[0]
        assert rect_scene.select(shape.id)
        assert rect_scene.selected_shape is shape

    def test_select_unknown(self, rect_scene):
        assert not rect_scene.select("missing")
        assert rect_scene.selected_id is None

    def test_select_none_clears(self, rect_scene):
        rect_scene.select(rect_scene.shapes[0].id)
        rect_scene.select(None)
        assert rect_scene.selected_id is None

    def test_duplicate(self, rect_scene):
        original = rect_scene.shapes[0]
        copy = rect_scene.duplicate(original.id)

        assert copy is not None
        assert copy.id != original.id
        assert copy.kind == original.kind
        assert copy.stroke_color == original.stroke_color
        assert copy.bounds == Rect(120, 120, 120, 80)
        assert original.bounds == Rect(100, 100, 120, 80)
        assert rect_scene.shapes[-1] is copy
        assert rect_scene.selected_id is None

    def test_duplicate_polygon(self, empty_scene):
        original = empty_scene.add_shape(ShapeKind.POLYGON)
        copy = empty_scene.duplicate(original.id)
        assert copy.vertices == [Point(620, 120), Point(670, 200), Point(570, 200)]
        assert copy.bounds == Rect(570, 120, 100, 80)

    def test_duplicate_unknown(self, rect_scene):
        assert rect_scene.duplicate("missing") is None
        assert len(rect_scene) == 1

    def test_delete_selected(self, populated_scene):
        circle = populated_scene.shapes[1]
        populated_scene.select(circle.id)

        deleted = populated_scene.delete_selected()

        assert deleted is circle
        assert len(populated_scene) == 3
        assert populated_scene.get_shape(circle.id) is None
        assert populated_scene.selected_id is None

    def test_delete_without_selection(self, populated_scene):
        assert populated_scene.delete_selected() is None
        assert len(populated_scene) == 4

    def test_clear(self, populated_scene):
        populated_scene.select(populated_scene.shapes[0].id)
        populated_scene.clear()
        assert len(populated_scene) == 0
        assert populated_scene.selected_id is None


class TestResize:
    """Tests for corner-handle resizing."""

    def test_bottom_right(self, rect_scene):
        shape = rect_scene.shapes[0]
        assert rect_scene.resize_shape(shape.id, HandleType.BOTTOM_RIGHT, 50, 30)
        assert shape.bounds == Rect(100, 100, 170, 110)

    def test_top_left_keeps_bottom_right(self, rect_scene):
        shape = rect_scene.shapes[0]
        rect_scene.resize_shape(shape.id, HandleType.TOP_LEFT, 10, 20)
        assert shape.bounds == Rect(110, 120, 110, 60)

    def test_top_right(self, rect_scene):
        shape = rect_scene.shapes[0]
        rect_scene.resize_shape(shape.id, HandleType.TOP_RIGHT, 10, -10)
        assert shape.bounds == Rect(100, 90, 130, 90)

    def test_bottom_left(self, rect_scene):
        shape = rect_scene.shapes[0]
        rect_scene.resize_shape(shape.id, HandleType.BOTTOM_LEFT, -10, 10)
        assert shape.bounds == Rect(90, 100, 130, 90)

    def test_minimum_extent_clamps_moving_edge(self, rect_scene):
        """Shrinking past the minimum keeps the fixed corner in place."""
        shape = rect_scene.shapes[0]
        rect_scene.resize_shape(shape.id, HandleType.BOTTOM_RIGHT, -200, -200)
        assert shape.bounds == Rect(100, 100, 5, 5)

    def test_minimum_extent_top_left(self, rect_scene):
        shape = rect_scene.shapes[0]
        rect_scene.resize_shape(shape.id, HandleType.TOP_LEFT, 500, 500)
        assert_rect_equal(shape.bounds, (215, 175, 5, 5))

    def test_ellipse_not_constrained(self, empty_scene):
        shape = empty_scene.add_shape(ShapeKind.ELLIPSE)
        empty_scene.resize_shape(shape.id, HandleType.BOTTOM_RIGHT, 30, -20)
        assert shape.bounds == Rect(450, 100, 150, 60)

    def test_circle_bottom_right(self, empty_scene):
        shape = empty_scene.add_shape(ShapeKind.CIRCLE)
        empty_scene.resize_shape(shape.id, HandleType.BOTTOM_RIGHT, 50, 10)
        assert shape.bounds == Rect(300, 100, 90, 90)

    def test_circle_top_left_keeps_pivot(self, empty_scene):
        """The corner opposite the dragged one stays fixed."""
        shape = empty_scene.add_shape(ShapeKind.CIRCLE)
        empty_scene.resize_shape(shape.id, HandleType.TOP_LEFT, -30, -10)
        assert shape.bounds == Rect(290, 90, 90, 90)
        assert shape.bounds.right == 380
        assert shape.bounds.bottom == 180

    def test_polygon_ignores_resize(self, empty_scene):
        shape = empty_scene.add_shape(ShapeKind.POLYGON)
        assert not empty_scene.resize_shape(shape.id, HandleType.BOTTOM_RIGHT, 10, 10)
        assert shape.bounds == Rect(550, 100, 100, 80)

    def test_unknown_shape(self, rect_scene):
        assert not rect_scene.resize_shape("missing", HandleType.TOP_LEFT, 1, 1)

    def test_non_corner_handle(self):
        bounds = Rect(0, 0, 10, 10)
        assert resize_bounds(bounds, HandleType.NONE, 5, 5) is bounds
        assert resize_bounds(bounds, HandleType.POLYGON_VERTEX, 5, 5) is bounds

    def test_custom_minimum_extent(self):
        settings = EditorSettings()
        settings.interaction.min_extent = 12.0
        scene = Scene(settings)
        shape = scene.add_shape(ShapeKind.RECTANGLE)
        scene.resize_shape(shape.id, HandleType.BOTTOM_RIGHT, -500, -500)
        assert shape.bounds == Rect(100, 100, 12, 12)

    @pytest.mark.parametrize("seed", range(5))
    def test_circle_stays_square(self, empty_scene, seed):
        """Width equals height after any sequence of corner drags."""
        rng = random.Random(seed)
        shape = empty_scene.add_shape(ShapeKind.CIRCLE)
        for _ in range(200):
            handle = rng.choice(CORNERS)
            empty_scene.resize_shape(shape.id, handle,
                                     rng.uniform(-60, 60), rng.uniform(-60, 60))
            assert shape.bounds.width == shape.bounds.height
            assert shape.bounds.width >= 5

    @pytest.mark.parametrize("seed", range(5))
    @pytest.mark.parametrize("kind", [ShapeKind.RECTANGLE, ShapeKind.ELLIPSE])
    def test_never_below_minimum_extent(self, empty_scene, seed, kind):
        rng = random.Random(seed)
        shape = empty_scene.add_shape(kind)
        for _ in range(200):
            handle = rng.choice(CORNERS)
            empty_scene.resize_shape(shape.id, handle,
                                     rng.uniform(-150, 150), rng.uniform(-150, 150))
            assert shape.bounds.width >= 5
            assert shape.bounds.height >= 5


class TestMoveAndVertexEdit:
    """Tests for move and polygon vertex drag."""

    def test_move_shape(self, rect_scene):
        shape = rect_scene.shapes[0]
        assert rect_scene.move_shape(shape.id, 10, 10)
        assert shape.bounds == Rect(110, 110, 120, 80)

    def test_move_unknown(self, rect_scene):
        assert not rect_scene.move_shape("missing", 10, 10)

    def test_move_vertex(self, empty_scene):
        shape = empty_scene.add_shape(ShapeKind.POLYGON)
        assert empty_scene.move_vertex(shape.id, 2, -20, 5)
        assert shape.vertices[2] == Point(530, 185)
        assert shape.bounds == Rect(530, 100, 120, 85)

    @pytest.mark.parametrize("seed", range(3))
    def test_polygon_bounds_track_vertices(self, empty_scene, seed):
        rng = random.Random(seed)
        shape = empty_scene.add_regular_polygon(6)
        for _ in range(100):
            if rng.random() < 0.5:
                empty_scene.move_shape(shape.id, rng.uniform(-30, 30), rng.uniform(-30, 30))
            else:
                empty_scene.move_vertex(shape.id, rng.randrange(6),
                                        rng.uniform(-30, 30), rng.uniform(-30, 30))
            assert shape.bounds == polygon_bounds(shape.vertices)


class TestView:
    """Tests for pan/zoom forwarding."""

    def test_pan(self, empty_scene):
        empty_scene.pan_by(15, -5)
        assert empty_scene.viewport.offset == Point(15, -5)

    def test_zoom_at_point(self, empty_scene):
        anchor = Point(200, 200)
        before = empty_scene.viewport.screen_to_world(anchor)
        empty_scene.zoom_at_point(anchor, 1.1)
        after = empty_scene.viewport.screen_to_world(anchor)
        assert empty_scene.viewport.scale == pytest.approx(1.1)
        assert after.x == pytest.approx(before.x)
        assert after.y == pytest.approx(before.y)

    def test_zoom_by_step(self, empty_scene):
        center = Point(700, 450)
        empty_scene.zoom_by_step(True, center)
        assert empty_scene.viewport.scale == pytest.approx(1.1)
        empty_scene.zoom_by_step(False, center)
        assert empty_scene.viewport.scale == pytest.approx(0.99)

    def test_viewport_limits_from_settings(self):
        settings = EditorSettings()
        settings.view.max_scale = 2.0
        scene = Scene(settings)
        for _ in range(20):
            scene.zoom_at_point(Point(0, 0), 1.5)
        assert scene.viewport.scale == 2.0
