import logging
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QWidget, QColorDialog
from storage import FigureStorage
from settings import Defaults
from controller import (InteractionController, Button, Key, KindChosen, PointerDown,
                        PointerDrag, PointerUp, PointerMove, Wheel, KeyDown, KeyUp, ColorChosen)
from commands import Redraw, SetCursor, PickColor, Cursor
from figures import ShapeKind

logger = logging.getLogger(__name__)

_BUTTONS = {
    Qt.MouseButton.LeftButton: Button.PRIMARY,
    Qt.MouseButton.RightButton: Button.SECONDARY,
}

_CURSORS = {
    Cursor.DEFAULT: Qt.CursorShape.ArrowCursor,
    Cursor.CROSSHAIR: Qt.CursorShape.CrossCursor,
}


def wheel_notches(pending: int, delta: int) -> tuple[int, int]:
    """
    Складывает угол прокрутки с накопленным остатком и возвращает
    (целые щелчки, новый остаток). Тачпады присылают доли щелчка.
    """
    total = pending + delta
    notches = abs(total) // Defaults.WHEEL_STEP
    if total < 0:
        notches = -notches
    return notches, total - notches * Defaults.WHEEL_STEP


def motion_event(x: int, y: int, buttons) -> PointerDrag | PointerMove:
    # тянет и создаёт фигуры только левая кнопка, остальные лишь обновляют курсор
    if buttons & Qt.MouseButton.LeftButton:
        return PointerDrag(x, y)
    return PointerMove(x, y)


class Canvas(QWidget):
    def __init__(self, storage: FigureStorage, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: white;")
        # обязательно, чтобы stylesheet фон отрисовывался
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.storage = storage
        self.controller = InteractionController(storage)
        self._wheel_pending = 0
        self.storage.canvas_updated.connect(self.update)

    def choose_kind(self, kind: ShapeKind):
        self._dispatch(KindChosen(kind))

    def reset(self):
        self.controller.reset()
        self._wheel_pending = 0
        self.unsetCursor()

    def _dispatch(self, event):
        for cmd in self.controller.dispatch(event):
            self._perform(cmd)

    def _perform(self, cmd):
        if isinstance(cmd, Redraw):
            self.update()
        elif isinstance(cmd, SetCursor):
            self.setCursor(_CURSORS[cmd.cursor])
        elif isinstance(cmd, PickColor):
            color = QColorDialog.getColor(cmd.default, self, "Цвет фигуры")
            # отмена диалога — невалидный цвет
            if not color.isValid():
                logger.debug("color choice for #%d cancelled", cmd.handle)
            self._dispatch(ColorChosen(cmd.handle, color if color.isValid() else None))

    # Клавиатура
    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            if not event.isAutoRepeat():
                self._dispatch(KeyDown(Key.SHIFT))
            event.accept(); return
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            if not event.isAutoRepeat():
                self._dispatch(KeyUp(Key.SHIFT))
            event.accept(); return
        super().keyReleaseEvent(event)

    # Мышь
    def mousePressEvent(self, event):
        pos = event.position().toPoint()
        self.setFocus(Qt.FocusReason.MouseFocusReason)
        button = _BUTTONS.get(event.button(), Button.OTHER)
        self._dispatch(PointerDown(pos.x(), pos.y(), button))

    def mouseMoveEvent(self, event):
        pos = event.position().toPoint()
        self._dispatch(motion_event(pos.x(), pos.y(), event.buttons()))

    def mouseReleaseEvent(self, event):
        pos = event.position().toPoint()
        self._dispatch(PointerUp(pos.x(), pos.y()))

    def wheelEvent(self, event):
        pos = event.position().toPoint()
        # колесо "к себе" = положительное вращение = увеличение
        rotation, self._wheel_pending = wheel_notches(self._wheel_pending, -event.angleDelta().y())
        if rotation:
            self._dispatch(Wheel(pos.x(), pos.y(), rotation))
        event.accept()

    # Отрисовка
    def paintEvent(self, _):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        for fig in self.storage.all():
            fig.draw(painter)
        painter.end()
