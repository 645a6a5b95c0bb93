"""
Pytest configuration and shared fixtures for Shape Canvas tests.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import Point, ShapeKind
from services.scene import Scene
from services.settings_manager import EditorSettings, reset_settings_manager
from services.interaction import PointerEvent, MouseButton, Modifier


# ============== Temporary Directory Fixtures ==============

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    tmp = tempfile.mkdtemp(prefix="shape_canvas_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture(autouse=True)
def fresh_settings_manager():
    """Make sure no test leaks the global settings manager."""
    reset_settings_manager()
    yield
    reset_settings_manager()


# ============== Settings Fixtures ==============

@pytest.fixture
def default_settings() -> EditorSettings:
    """Editor settings with all defaults."""
    return EditorSettings()


# ============== Scene Fixtures ==============

@pytest.fixture
def empty_scene(default_settings: EditorSettings) -> Scene:
    """Create an empty scene."""
    return Scene(default_settings)


@pytest.fixture
def rect_scene(empty_scene: Scene) -> Scene:
    """Scene holding a single rectangle at (100, 100, 120, 80)."""
    empty_scene.add_shape(ShapeKind.RECTANGLE)
    return empty_scene


@pytest.fixture
def populated_scene(empty_scene: Scene) -> Scene:
    """Scene with one shape of every kind at its default position."""
    for kind in (ShapeKind.RECTANGLE, ShapeKind.CIRCLE,
                 ShapeKind.ELLIPSE, ShapeKind.POLYGON):
        empty_scene.add_shape(kind)
    return empty_scene


# ============== Helper Functions ==============

def press(x: float, y: float, button: MouseButton = MouseButton.PRIMARY,
          modifiers: Modifier = Modifier.NONE) -> PointerEvent:
    """Build a pointer event at a screen position."""
    return PointerEvent(Point(x, y), button, modifiers)


def assert_rect_equal(rect, expected, abs_tol: float = 1e-9):
    """Assert that a Rect matches an (left, top, width, height) tuple."""
    assert rect.to_tuple() == pytest.approx(expected, abs=abs_tol)
