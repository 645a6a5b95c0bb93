"""
Drawing canvas widget.

Paints the scene every frame and forwards Qt mouse/wheel input to the
interaction controller. All geometry lives in the scene; this widget
only converts between Qt types and the editor's own event types.
"""

from typing import Optional
from PyQt6.QtCore import Qt, QPointF, QRectF, pyqtSignal
from PyQt6.QtGui import (
    QPainter, QPen, QBrush, QColor, QPolygonF,
    QMouseEvent, QWheelEvent, QKeyEvent,
)
from PyQt6.QtWidgets import QWidget

from models import Point, Rect, Shape, ShapeKind
from services import (
    Scene, InteractionController, Gesture, MouseButton, Modifier,
    PointerEvent, WheelEvent,
)


# Color scheme
COLORS = {
    "background": QColor("#FFFFFF"),
    "grid": QColor("#D3D3D3"),       # Light gray
    "handle_pen": QColor("#0000FF"),  # Blue
    "handle_fill": QColor("#FFFFFF"),
    "info_text": QColor("#000000"),
}

BUTTON_MAP = {
    Qt.MouseButton.LeftButton: MouseButton.PRIMARY,
    Qt.MouseButton.RightButton: MouseButton.SECONDARY,
    Qt.MouseButton.MiddleButton: MouseButton.MIDDLE,
}


def _qrect(rect: Rect) -> QRectF:
    return QRectF(rect.left, rect.top, rect.width, rect.height)


def _modifiers(event) -> Modifier:
    """Convert Qt keyboard modifiers to editor modifiers."""
    qt_mods = event.modifiers()
    mods = Modifier.NONE
    if qt_mods & Qt.KeyboardModifier.ControlModifier:
        mods |= Modifier.CONTROL
    if qt_mods & Qt.KeyboardModifier.ShiftModifier:
        mods |= Modifier.SHIFT
    if qt_mods & Qt.KeyboardModifier.AltModifier:
        mods |= Modifier.ALT
    return mods


class DrawingCanvas(QWidget):
    """
    Infinite, pannable and zoomable drawing surface.

    Left drag moves shapes, handles and vertices; right drag (or left
    drag with the pan modifier) pans; the wheel zooms about the cursor.
    """

    # Signals
    cursorMoved = pyqtSignal(float, float)  # world x, world y

    def __init__(self, scene: Scene, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.scene = scene
        self.controller = InteractionController(scene, cursor_moved=self._emit_cursor)

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAutoFillBackground(True)

    def _emit_cursor(self, world: Point):
        self.cursorMoved.emit(world.x, world.y)

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), COLORS["background"])

        if self.scene.settings.view.show_grid:
            self._draw_grid(painter)

        viewport = self.scene.viewport
        painter.translate(viewport.offset.x, viewport.offset.y)
        painter.scale(viewport.scale, viewport.scale)

        selected_id = self.scene.selected_id
        for shape in self.scene:
            self._draw_shape(painter, shape, shape.id == selected_id)

        if selected_id is not None:
            self._draw_handles(painter, self.scene.selected_shape)

        painter.end()

    def _draw_grid(self, painter: QPainter):
        """Screen-space grid dividing the widget evenly (visual only)."""
        divisions = max(1, self.scene.settings.view.grid_divisions)
        w, h = self.width(), self.height()
        step_x, step_y = w / divisions, h / divisions

        pen = QPen(COLORS["grid"], 1)
        pen.setStyle(Qt.PenStyle.DotLine)
        painter.setPen(pen)
        for i in range(1, divisions):
            painter.drawLine(QPointF(step_x * i, 0), QPointF(step_x * i, h))
            painter.drawLine(QPointF(0, step_y * i), QPointF(w, step_y * i))

    def _draw_shape(self, painter: QPainter, shape: Shape, selected: bool):
        if selected:
            pen = QPen(QColor(self.scene.settings.shapes.selected_color), 3)
        else:
            pen = QPen(QColor(shape.stroke_color), 2)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)

        if shape.kind == ShapeKind.RECTANGLE:
            painter.drawRect(_qrect(shape.bounds))
        elif shape.kind in (ShapeKind.CIRCLE, ShapeKind.ELLIPSE):
            painter.drawEllipse(_qrect(shape.bounds))
        elif len(shape.vertices) > 2:
            painter.drawPolygon(QPolygonF([QPointF(p.x, p.y) for p in shape.vertices]))

        painter.setPen(QPen(COLORS["info_text"]))
        painter.drawText(QPointF(shape.bounds.left, shape.bounds.top - 15), shape.info_text())

    def _draw_handles(self, painter: QPainter, shape: Shape):
        handle_pen = QPen(COLORS["handle_pen"], 1)
        handle_pen.setCosmetic(True)

        dash_pen = QPen(handle_pen)
        dash_pen.setStyle(Qt.PenStyle.DotLine)
        painter.setPen(dash_pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(_qrect(shape.bounds))

        painter.setPen(handle_pen)
        painter.setBrush(QBrush(COLORS["handle_fill"]))
        for entry in self.controller.hit_tester.handle_rects(shape.id):
            painter.drawRect(_qrect(entry.rect))

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _pointer_event(self, event: QMouseEvent) -> Optional[PointerEvent]:
        button = BUTTON_MAP.get(event.button())
        if button is None:
            return None
        pos = event.position()
        return PointerEvent(Point(pos.x(), pos.y()), button, _modifiers(event))

    def mousePressEvent(self, event: QMouseEvent):
        pointer = self._pointer_event(event)
        if pointer is None:
            super().mousePressEvent(event)
            return
        state = self.controller.pointer_down(pointer)
        if state.gesture == Gesture.PANNING_CANVAS:
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
        self.update()
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent):
        pos = event.position()
        self.controller.pointer_move(
            PointerEvent(Point(pos.x(), pos.y()), modifiers=_modifiers(event))
        )
        if not self.controller.state.is_idle:
            self.update()
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent):
        pos = event.position()
        self.controller.pointer_up(
            PointerEvent(Point(pos.x(), pos.y()), modifiers=_modifiers(event))
        )
        self.unsetCursor()
        self.update()
        event.accept()

    def wheelEvent(self, event: QWheelEvent):
        delta = event.angleDelta().y()
        if delta == 0:
            event.ignore()
            return
        pos = event.position()
        self.controller.wheel(WheelEvent(Point(pos.x(), pos.y()), delta))
        self.update()
        event.accept()

    def keyPressEvent(self, event: QKeyEvent):
        """Handle keyboard shortcuts."""
        if event.key() in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            self.delete_selected()
            event.accept()
        elif event.key() == Qt.Key.Key_Escape:
            self.scene.clear_selection()
            self.update()
            event.accept()
        else:
            super().keyPressEvent(event)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_shape(self, kind: ShapeKind):
        self.scene.add_shape(kind)
        self.update()

    def add_regular_polygon(self, n: int) -> bool:
        if self.scene.add_regular_polygon(n) is None:
            return False
        self.update()
        return True

    def clear_scene(self):
        self.scene.clear()
        self.update()

    def delete_selected(self):
        if self.scene.delete_selected() is not None:
            self.update()

    def zoom_step(self, zoom_in: bool):
        """Zoom about the widget centre."""
        center = Point(self.width() / 2, self.height() / 2)
        self.scene.zoom_by_step(zoom_in, center)
        self.update()

    def reset_view(self):
        """Reset to default zoom and position."""
        self.scene.viewport.reset()
        self.update()
