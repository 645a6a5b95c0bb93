"""Services package."""

from .settings_manager import (
    SettingsManager,
    EditorSettings,
    ViewSettings,
    InteractionSettings,
    ShapeDefaults,
    get_settings,
    reset_settings_manager,
)
from .scene import Scene, resize_bounds, DEFAULT_BOUNDS, DEFAULT_TRIANGLE
from .hit_test import HitTester, HitResult, HitKind, HandleRect, body_contains
from .interaction import (
    Gesture,
    MouseButton,
    Modifier,
    PointerEvent,
    WheelEvent,
    InteractionState,
    InteractionController,
    parse_modifier,
    pointer_down,
    pointer_move,
    pointer_up,
    wheel,
)

__all__ = [
    "SettingsManager",
    "EditorSettings",
    "ViewSettings",
    "InteractionSettings",
    "ShapeDefaults",
    "get_settings",
    "reset_settings_manager",
    # Scene
    "Scene",
    "resize_bounds",
    "DEFAULT_BOUNDS",
    "DEFAULT_TRIANGLE",
    # Hit testing
    "HitTester",
    "HitResult",
    "HitKind",
    "HandleRect",
    "body_contains",
    # Interaction
    "Gesture",
    "MouseButton",
    "Modifier",
    "PointerEvent",
    "WheelEvent",
    "InteractionState",
    "InteractionController",
    "parse_modifier",
    "pointer_down",
    "pointer_move",
    "pointer_up",
    "wheel",
]
