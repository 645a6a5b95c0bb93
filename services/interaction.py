"""
Interaction State Machine.

Turns pointer and wheel events into scene mutations.

Every gesture starts from IDLE on pointer-down and returns to IDLE on
pointer-up. The state is an immutable InteractionState value: the
dispatch functions take the current state and return the next one, so a
recorded event stream can be replayed against a scene without any GUI.

Pointer-down resolution (first match wins):
- secondary button, or primary button + pan modifier -> PANNING_CANVAS
- any polygon vertex handle                         -> DRAGGING_VERTEX
- corner handle of the selected shape               -> RESIZING_BOUNDS
- shape body (duplicate modifier drags a copy)      -> DRAGGING_SHAPE
- empty canvas                                      -> clear selection, IDLE
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum, Flag
from typing import Callable, Optional

from models import Point, HandleType
from .hit_test import HitTester, HitKind
from .scene import Scene

logger = logging.getLogger(__name__)


# =============================================================================
# Enumerations
# =============================================================================

class Gesture(Enum):
    """Pointer gesture currently in progress."""
    IDLE = "idle"
    PANNING_CANVAS = "panning_canvas"
    DRAGGING_SHAPE = "dragging_shape"
    RESIZING_BOUNDS = "resizing_bounds"
    DRAGGING_VERTEX = "dragging_vertex"


class MouseButton(Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    MIDDLE = "middle"


class Modifier(Flag):
    """Keyboard modifiers held during a pointer event."""
    NONE = 0
    CONTROL = 1
    SHIFT = 2
    ALT = 4


MODIFIER_NAMES = {
    "none": Modifier.NONE,
    "control": Modifier.CONTROL,
    "ctrl": Modifier.CONTROL,
    "shift": Modifier.SHIFT,
    "alt": Modifier.ALT,
}


def parse_modifier(name: str) -> Modifier:
    """Map a settings string such as "control" to a Modifier."""
    try:
        return MODIFIER_NAMES[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown modifier name: {name!r}") from None


def _held(modifiers: Modifier, name: str) -> bool:
    required = parse_modifier(name)
    return bool(required) and required in modifiers


# =============================================================================
# Events and state
# =============================================================================

@dataclass(frozen=True)
class PointerEvent:
    """Pointer press, move or release in screen coordinates."""
    screen: Point
    button: MouseButton = MouseButton.PRIMARY
    modifiers: Modifier = Modifier.NONE


@dataclass(frozen=True)
class WheelEvent:
    """Mouse wheel step; a positive delta zooms in."""
    screen: Point
    delta: int


@dataclass(frozen=True)
class InteractionState:
    """
    Snapshot of the interaction between two events.

    Attributes:
        gesture: Gesture in progress
        shape_id: Shape the gesture operates on
        handle: Corner handle being dragged (RESIZING_BOUNDS)
        vertex_index: Vertex being dragged (DRAGGING_VERTEX), -1 otherwise
        last_world: Pointer position at the previous event, world space
        last_screen: Pointer position at the previous event, screen space
        cursor_world: Live pointer position for display
    """
    gesture: Gesture = Gesture.IDLE
    shape_id: Optional[str] = None
    handle: HandleType = HandleType.NONE
    vertex_index: int = -1
    last_world: Point = field(default_factory=Point)
    last_screen: Point = field(default_factory=Point)
    cursor_world: Point = field(default_factory=Point)

    @property
    def is_idle(self) -> bool:
        return self.gesture == Gesture.IDLE


IDLE = InteractionState()


def _begin(gesture: Gesture, event: PointerEvent, world: Point, **kwargs) -> InteractionState:
    logger.debug(f"Gesture {gesture.value} started at {world.to_tuple()}")
    return InteractionState(
        gesture=gesture,
        last_world=world,
        last_screen=event.screen,
        cursor_world=world,
        **kwargs,
    )


# =============================================================================
# Dispatch
# =============================================================================

def pointer_down(scene: Scene, state: InteractionState, event: PointerEvent,
                 hit_tester: Optional[HitTester] = None) -> InteractionState:
    """
    Start a gesture. Returns the new interaction state.

    Gestures only start from IDLE; a press while another gesture is in
    progress (e.g. a second button) leaves the state unchanged.
    """
    if not state.is_idle:
        return state

    hit_tester = hit_tester or HitTester(scene)
    options = scene.settings.interaction
    world = scene.viewport.screen_to_world(event.screen)

    if event.button == MouseButton.SECONDARY or (
            event.button == MouseButton.PRIMARY
            and _held(event.modifiers, options.pan_modifier)):
        return _begin(Gesture.PANNING_CANVAS, event, world)

    if event.button != MouseButton.PRIMARY:
        return replace(state, cursor_world=world)

    hit = hit_tester.hit_test(world)
    if not hit.is_hit:
        scene.clear_selection()
        return replace(IDLE, cursor_world=world, last_world=world, last_screen=event.screen)

    if hit.kind == HitKind.VERTEX:
        scene.select(hit.shape_id)
        return _begin(Gesture.DRAGGING_VERTEX, event, world,
                      shape_id=hit.shape_id,
                      handle=HandleType.POLYGON_VERTEX,
                      vertex_index=hit.vertex_index)

    if hit.kind == HitKind.HANDLE:
        return _begin(Gesture.RESIZING_BOUNDS, event, world,
                      shape_id=hit.shape_id, handle=hit.handle)

    target_id = hit.shape_id
    if _held(event.modifiers, options.duplicate_modifier):
        target_id = scene.duplicate(hit.shape_id).id
    scene.select(target_id)
    return _begin(Gesture.DRAGGING_SHAPE, event, world, shape_id=target_id)


def pointer_move(scene: Scene, state: InteractionState,
                 event: PointerEvent) -> InteractionState:
    """Apply the move to the active gesture. Returns the new state."""
    if state.gesture == Gesture.PANNING_CANVAS:
        delta = event.screen - state.last_screen
        scene.pan_by(delta.x, delta.y)
        return replace(state, last_screen=event.screen,
                       cursor_world=scene.viewport.screen_to_world(event.screen))

    world = scene.viewport.screen_to_world(event.screen)
    dx = world.x - state.last_world.x
    dy = world.y - state.last_world.y

    if state.gesture == Gesture.DRAGGING_VERTEX:
        scene.move_vertex(state.shape_id, state.vertex_index, dx, dy)
    elif state.gesture == Gesture.RESIZING_BOUNDS:
        scene.resize_shape(state.shape_id, state.handle, dx, dy)
    elif state.gesture == Gesture.DRAGGING_SHAPE:
        scene.move_shape(state.shape_id, dx, dy)

    return replace(state, last_world=world, last_screen=event.screen, cursor_world=world)


def pointer_up(scene: Scene, state: InteractionState,
               event: Optional[PointerEvent] = None) -> InteractionState:
    """End any gesture unconditionally."""
    if not state.is_idle:
        logger.debug(f"Gesture {state.gesture.value} ended")
    cursor = state.cursor_world
    if event is not None:
        cursor = scene.viewport.screen_to_world(event.screen)
    return replace(IDLE, cursor_world=cursor)


def wheel(scene: Scene, state: InteractionState, event: WheelEvent) -> InteractionState:
    """Zoom about the wheel position."""
    view = scene.settings.view
    factor = view.wheel_zoom_in if event.delta > 0 else view.wheel_zoom_out
    scene.zoom_at_point(event.screen, factor)
    return replace(state, cursor_world=scene.viewport.screen_to_world(event.screen))


# =============================================================================
# Controller
# =============================================================================

class InteractionController:
    """
    Stateful wrapper around the dispatch functions for a live view.

    Holds the current InteractionState and reports the world-space
    cursor position after each event through ``cursor_moved``.
    """

    def __init__(self, scene: Scene,
                 cursor_moved: Optional[Callable[[Point], None]] = None):
        self.scene = scene
        self.hit_tester = HitTester(scene)
        self.state = IDLE
        self.cursor_moved = cursor_moved

    @property
    def gesture(self) -> Gesture:
        return self.state.gesture

    def _update(self, state: InteractionState) -> InteractionState:
        self.state = state
        if self.cursor_moved is not None:
            self.cursor_moved(state.cursor_world)
        return state

    def pointer_down(self, event: PointerEvent) -> InteractionState:
        return self._update(pointer_down(self.scene, self.state, event, self.hit_tester))

    def pointer_move(self, event: PointerEvent) -> InteractionState:
        return self._update(pointer_move(self.scene, self.state, event))

    def pointer_up(self, event: Optional[PointerEvent] = None) -> InteractionState:
        return self._update(pointer_up(self.scene, self.state, event))

    def wheel(self, event: WheelEvent) -> InteractionState:
        return self._update(wheel(self.scene, self.state, event))
