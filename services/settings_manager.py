"""
Settings Manager.

Handles editor settings with JSON file storage.
"""

import json
import logging
import math
import os
from dataclasses import dataclass, field, asdict
from typing import Optional, Tuple
from pathlib import Path

logger = logging.getLogger(__name__)

# Keys accepted for pan_modifier / duplicate_modifier
MODIFIER_KEYS = ("none", "control", "ctrl", "shift", "alt")


@dataclass
class ViewSettings:
    """Zoom limits, zoom steps and grid display."""
    min_scale: float = 0.05
    max_scale: float = 40.0
    initial_scale: float = 1.0
    button_zoom_in: float = 1.1
    button_zoom_out: float = 0.9
    wheel_zoom_in: float = 1.1
    wheel_zoom_out: float = 0.9
    show_grid: bool = True
    grid_divisions: int = 10  # per widget axis

    def __post_init__(self):
        if (not math.isfinite(self.min_scale) or not math.isfinite(self.max_scale)
                or self.min_scale <= 0 or self.min_scale > self.max_scale):
            raise ValueError(
                f"Invalid scale range [{self.min_scale}, {self.max_scale}]"
            )


@dataclass
class InteractionSettings:
    """Pointer interaction parameters."""
    handle_size: float = 8.0       # screen pixels
    min_extent: float = 5.0        # world units
    duplicate_offset: float = 20.0  # world units
    pan_modifier: str = "alt"
    duplicate_modifier: str = "control"

    def __post_init__(self):
        for name in ("pan_modifier", "duplicate_modifier"):
            value = str(getattr(self, name)).strip().lower()
            if value not in MODIFIER_KEYS:
                raise ValueError(f"Unknown {name}: {getattr(self, name)!r}")
            setattr(self, name, value)
        if self.handle_size <= 0 or self.min_extent <= 0:
            raise ValueError("handle_size and min_extent must be positive")


@dataclass
class ShapeDefaults:
    """Defaults for newly created shapes."""
    stroke_color: str = "#00008B"
    selected_color: str = "#FF0000"
    polygon_center: Tuple[float, float] = (800.0, 150.0)
    polygon_radius: float = 50.0
    default_polygon_sides: int = 5

    def __post_init__(self):
        # JSON round-trips tuples as lists
        self.polygon_center = tuple(self.polygon_center)


@dataclass
class EditorSettings:
    """Complete editor settings."""
    view: ViewSettings = field(default_factory=ViewSettings)
    interaction: InteractionSettings = field(default_factory=InteractionSettings)
    shapes: ShapeDefaults = field(default_factory=ShapeDefaults)
    window_geometry: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        shapes = asdict(self.shapes)
        shapes["polygon_center"] = list(self.shapes.polygon_center)
        return {
            "view": asdict(self.view),
            "interaction": asdict(self.interaction),
            "shapes": shapes,
            "window_geometry": self.window_geometry,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EditorSettings":
        """Create from dictionary."""
        settings = cls()

        if "view" in data:
            settings.view = ViewSettings(**data["view"])
        if "interaction" in data:
            settings.interaction = InteractionSettings(**data["interaction"])
        if "shapes" in data:
            settings.shapes = ShapeDefaults(**data["shapes"])
        if "window_geometry" in data:
            settings.window_geometry = data["window_geometry"]

        return settings


class SettingsManager:
    """
    Manages editor settings with JSON file storage.

    Settings file location:
    - Windows: %APPDATA%/ShapeCanvas/settings.json
    - Linux: ~/.config/ShapeCanvas/settings.json
    - macOS: ~/Library/Application Support/ShapeCanvas/settings.json
    """

    APP_NAME = "ShapeCanvas"
    SETTINGS_FILE = "settings.json"

    def __init__(self, config_override: Optional[str] = None):
        """
        Initialize settings manager.

        Args:
            config_override: Optional path to override config file location.
                            Useful for testing.
        """
        self._settings = EditorSettings()
        self._config_override = config_override
        self._settings_path = self._get_settings_path()
        self._ensure_settings_dir()
        self.load()

    @property
    def settings(self) -> EditorSettings:
        """Get current settings."""
        return self._settings

    @property
    def settings_path(self) -> str:
        """Get the settings file path."""
        return str(self._settings_path)

    # Convenience properties for common settings
    @property
    def view(self) -> ViewSettings:
        return self._settings.view

    @property
    def interaction(self) -> InteractionSettings:
        return self._settings.interaction

    @property
    def shapes(self) -> ShapeDefaults:
        return self._settings.shapes

    def _get_settings_path(self) -> Path:
        """Get platform-specific settings directory."""
        if self._config_override:
            return Path(self._config_override)

        import platform
        system = platform.system()

        if system == "Windows":
            base = os.environ.get("APPDATA", os.path.expanduser("~"))
            config_dir = Path(base) / self.APP_NAME
        elif system == "Darwin":  # macOS
            config_dir = Path.home() / "Library" / "Application Support" / self.APP_NAME
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
            config_dir = Path(xdg_config) / self.APP_NAME

        return config_dir / self.SETTINGS_FILE

    def _ensure_settings_dir(self):
        """Create settings directory if it doesn't exist."""
        self._settings_path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> bool:
        """Load settings from file."""
        if not self._settings_path.exists():
            return False

        try:
            with open(self._settings_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._settings = EditorSettings.from_dict(data)
            return True
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Error loading settings from {self._settings_path}: {e}")
            self._settings = EditorSettings()
            return False

    def save(self) -> bool:
        """Save settings to file."""
        try:
            self._ensure_settings_dir()
            with open(self._settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings.to_dict(), f, indent=2)
            return True
        except OSError as e:
            logger.warning(f"Error saving settings to {self._settings_path}: {e}")
            return False

    def reset(self):
        """Reset settings to defaults."""
        self._settings = EditorSettings()
        self.save()

    def save_window_geometry(self, geometry: bytes, state: bytes):
        """Save window geometry and state."""
        import base64
        self._settings.window_geometry = {
            "geometry": base64.b64encode(geometry).decode("ascii"),
            "state": base64.b64encode(state).decode("ascii"),
        }
        self.save()

    def get_window_geometry(self) -> tuple:
        """Get saved window geometry and state."""
        import base64
        import binascii
        geo = self._settings.window_geometry
        if not geo:
            return None, None

        try:
            geometry = base64.b64decode(geo.get("geometry", ""))
            state = base64.b64decode(geo.get("state", ""))
            return geometry, state
        except (binascii.Error, ValueError):
            return None, None


# Global settings instance
_settings_manager: Optional[SettingsManager] = None


def get_settings(config_override: Optional[str] = None) -> SettingsManager:
    """
    Get the global settings manager instance.

    Args:
        config_override: Optional path to override config location.
                        Only used on first call to initialize.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager(config_override)
    return _settings_manager


def reset_settings_manager():
    """Reset the global settings manager (useful for testing)."""
    global _settings_manager
    _settings_manager = None
