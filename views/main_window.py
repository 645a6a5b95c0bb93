"""
Main application window.

Assembles the toolbar, the drawing canvas and the cursor position
status bar.
"""

from typing import Optional
from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QMainWindow, QToolBar, QPushButton, QLabel,
    QStatusBar, QInputDialog, QMessageBox,
)

from models import ShapeKind
from services import Scene, SettingsManager, get_settings
from .drawing_canvas import DrawingCanvas


class EditorToolbar(QToolBar):
    """Toolbar with shape creation and view controls."""

    # Signals
    addShapeRequested = pyqtSignal(object)  # ShapeKind
    addPolygonRequested = pyqtSignal()
    deleteRequested = pyqtSignal()
    zoomRequested = pyqtSignal(bool)  # True = zoom in
    clearRequested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__("Shapes", parent)
        self.setMovable(False)
        self._setup_ui()

    def _setup_ui(self):
        self.setStyleSheet("""
            QToolBar {
                background: #F9FAFB;
                border-bottom: 1px solid #E5E7EB;
                padding: 8px 16px;
                spacing: 8px;
            }
            QPushButton {
                padding: 6px 12px;
                border-radius: 6px;
                font-size: 13px;
            }
        """)

        for label, kind in (("Add Rectangle", ShapeKind.RECTANGLE),
                            ("Add Circle", ShapeKind.CIRCLE),
                            ("Add Ellipse", ShapeKind.ELLIPSE)):
            btn = QPushButton(label)
            btn.clicked.connect(lambda _checked=False, k=kind: self.addShapeRequested.emit(k))
            self.addWidget(btn)

        self.polygon_btn = QPushButton("Add Polygon(N)")
        self.polygon_btn.clicked.connect(lambda: self.addPolygonRequested.emit())
        self.addWidget(self.polygon_btn)

        self.delete_btn = QPushButton("Delete Selected")
        self.delete_btn.clicked.connect(lambda: self.deleteRequested.emit())
        self.addWidget(self.delete_btn)

        self.clear_btn = QPushButton("Clear All")
        self.clear_btn.clicked.connect(lambda: self.clearRequested.emit())
        self.addWidget(self.clear_btn)

        self.addSeparator()

        self.zoom_in_btn = QPushButton("Zoom In")
        self.zoom_in_btn.clicked.connect(lambda: self.zoomRequested.emit(True))
        self.addWidget(self.zoom_in_btn)

        self.zoom_out_btn = QPushButton("Zoom Out")
        self.zoom_out_btn.clicked.connect(lambda: self.zoomRequested.emit(False))
        self.addWidget(self.zoom_out_btn)


class MainWindow(QMainWindow):
    """
    Main application window.

    Layout:
    ┌─────────────────────────────────────────────┐
    │  Toolbar (add shapes, delete, zoom)         │
    ├─────────────────────────────────────────────┤
    │                                             │
    │  Drawing canvas                             │
    │                                             │
    ├─────────────────────────────────────────────┤
    │  Cursor: (x, y)                             │
    └─────────────────────────────────────────────┘
    """

    def __init__(self, settings_manager: Optional[SettingsManager] = None):
        super().__init__()

        # Settings manager (JSON file based)
        self.settings_manager = settings_manager or get_settings()

        # Model
        self.scene = Scene(self.settings_manager.settings)

        # Setup
        self._setup_window()
        self._setup_menus()
        self._setup_toolbar()
        self._setup_central_widget()
        self._setup_status_bar()
        self._connect_signals()

        # Restore window geometry
        self._load_window_settings()

    def _setup_window(self):
        """Configure window properties."""
        self.setWindowTitle("Shape Canvas")
        self.resize(1400, 900)

    def _setup_menus(self):
        menubar = self.menuBar()

        # View menu
        view_menu = menubar.addMenu("&View")

        zoom_in_action = QAction("Zoom &In", self)
        zoom_in_action.setShortcut("Ctrl+=")
        zoom_in_action.triggered.connect(lambda: self.canvas.zoom_step(True))
        view_menu.addAction(zoom_in_action)

        zoom_out_action = QAction("Zoom &Out", self)
        zoom_out_action.setShortcut("Ctrl+-")
        zoom_out_action.triggered.connect(lambda: self.canvas.zoom_step(False))
        view_menu.addAction(zoom_out_action)

        view_menu.addSeparator()

        reset_view_action = QAction("&Reset View", self)
        reset_view_action.setShortcut("Ctrl+R")
        reset_view_action.triggered.connect(lambda: self.canvas.reset_view())
        view_menu.addAction(reset_view_action)

    def _setup_toolbar(self):
        self.toolbar = EditorToolbar(self)
        self.addToolBar(self.toolbar)

    def _setup_central_widget(self):
        self.canvas = DrawingCanvas(self.scene, self)
        self.setCentralWidget(self.canvas)

    def _setup_status_bar(self):
        """Create status bar."""
        status = QStatusBar()
        self.setStatusBar(status)

        self._cursor_label = QLabel("Cursor: (0,0)")
        status.addWidget(self._cursor_label)

    def _connect_signals(self):
        self.toolbar.addShapeRequested.connect(self.canvas.add_shape)
        self.toolbar.addPolygonRequested.connect(self._on_add_polygon)
        self.toolbar.deleteRequested.connect(self.canvas.delete_selected)
        self.toolbar.zoomRequested.connect(self.canvas.zoom_step)
        self.toolbar.clearRequested.connect(self._on_clear_all)
        self.canvas.cursorMoved.connect(self._on_cursor_moved)

    def _on_cursor_moved(self, x: float, y: float):
        self._cursor_label.setText(f"Cursor: ({x:.1f}, {y:.1f})")

    def _on_add_polygon(self):
        """Ask for the number of sides and add a regular polygon."""
        default = self.settings_manager.settings.shapes.default_polygon_sides
        n, ok = QInputDialog.getInt(
            self, "Polygon Input",
            "Number of sides N for the regular polygon (3 or more):",
            default,
        )
        if not ok:
            return
        if not self.canvas.add_regular_polygon(n):
            self.statusBar().showMessage(f"A polygon needs at least 3 sides (got {n})", 3000)
            return
        self.statusBar().showMessage(f"Added {n}-sided polygon", 2000)

    def _on_clear_all(self):
        """Remove every shape after confirmation."""
        if len(self.scene) == 0:
            return

        reply = QMessageBox.question(
            self,
            "Clear All",
            "Are you sure you want to remove all shapes?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )

        if reply == QMessageBox.StandardButton.Yes:
            self.canvas.clear_scene()
            self.statusBar().showMessage("Cleared all shapes", 2000)

    def _load_window_settings(self):
        """Restore window geometry and state."""
        geometry, state = self.settings_manager.get_window_geometry()
        if geometry:
            self.restoreGeometry(geometry)
        if state:
            self.restoreState(state)

    def _save_window_settings(self):
        """Save window geometry and state."""
        self.settings_manager.save_window_geometry(
            bytes(self.saveGeometry()),
            bytes(self.saveState())
        )

    def closeEvent(self, event):
        """Handle window close - save settings."""
        self._save_window_settings()
        super().closeEvent(event)
