"""
Coordinate Transform.

Maps between screen space (widget pixels) and world space (shape
geometry) through a pan offset and a uniform scale:

    world  = (screen - offset) / scale
    screen = world * scale + offset
"""

import math
from dataclasses import dataclass, field

from .geometry import Point


MIN_SCALE = 0.05
MAX_SCALE = 40.0


def _clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value to a range."""
    return max(min_val, min(max_val, value))


@dataclass
class Viewport:
    """
    Pan/zoom state of the canvas.

    Attributes:
        offset: Screen-space translation applied after scaling
        scale: Zoom factor, always within [min_scale, max_scale]
        min_scale: Lower zoom limit, kept within [MIN_SCALE, MAX_SCALE]
        max_scale: Upper zoom limit, kept within [MIN_SCALE, MAX_SCALE]
    """
    offset: Point = field(default_factory=Point)
    scale: float = 1.0
    min_scale: float = MIN_SCALE
    max_scale: float = MAX_SCALE

    def __post_init__(self):
        if self.min_scale <= 0 or self.min_scale > self.max_scale:
            raise ValueError(
                f"Invalid scale range [{self.min_scale}, {self.max_scale}]"
            )
        # Configured limits may narrow the zoom range but never widen it
        self.min_scale = _clamp(self.min_scale, MIN_SCALE, MAX_SCALE)
        self.max_scale = _clamp(self.max_scale, MIN_SCALE, MAX_SCALE)
        self.scale = _clamp(self.scale, self.min_scale, self.max_scale)

    def screen_to_world(self, screen: Point) -> Point:
        return (screen - self.offset) / self.scale

    def world_to_screen(self, world: Point) -> Point:
        return world * self.scale + self.offset

    def world_length(self, screen_length: float) -> float:
        """Convert a length measured in screen pixels to world units."""
        return screen_length / self.scale

    def pan_by(self, dx: float, dy: float):
        """Shift the view by a raw screen-space delta (not scaled)."""
        self.offset = self.offset.translated(dx, dy)

    def zoom_at_point(self, screen: Point, factor: float) -> bool:
        """
        Multiply the scale by ``factor`` keeping ``screen`` fixed.

        The world point under ``screen`` stays under it after the zoom,
        also when the new scale is clamped.

        Returns:
            False if the factor was rejected (non-positive or not finite)
        """
        if not math.isfinite(factor) or factor <= 0:
            return False

        before = self.screen_to_world(screen)
        self.scale = _clamp(self.scale * factor, self.min_scale, self.max_scale)
        after = self.screen_to_world(screen)
        self.offset = self.offset + (after - before) * self.scale
        return True

    def reset(self):
        """Return to scale 1.0 with no pan."""
        self.offset = Point()
        self.scale = _clamp(1.0, self.min_scale, self.max_scale)
