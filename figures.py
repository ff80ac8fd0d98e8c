from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from PyQt6.QtCore import QRect, QPoint, Qt
from PyQt6.QtGui import QPainter, QBrush, QColor, QPolygon
from settings import Defaults


class ShapeKind(Enum):
    RECTANGLE = 'rectangle'
    CIRCLE = 'circle'
    TRIANGLE = 'triangle'


# QRect и QPoint хранят 32-битные int
INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1


def _clamp32(value: int) -> int:
    return max(INT32_MIN, min(value, INT32_MAX))


def _fit_rect(x: int, y: int, w: int, h: int) -> tuple[int, int, int, int]:
    """
    Вписывает прямоугольник в диапазон int32: размер урезается до INT32_MAX,
    затем угол сдвигается так, чтобы дальние грани не вышли за границу.
    """
    w, h = min(w, INT32_MAX), min(h, INT32_MAX)
    x = max(INT32_MIN, min(x, INT32_MAX - w))
    y = max(INT32_MIN, min(y, INT32_MAX - h))
    return x, y, w, h


# --- Контуры: производная геометрия, всегда вычисляется из bound ---

@dataclass(frozen=True)
class RectOutline:
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_bound(cls, bound: QRect) -> RectOutline:
        return cls(bound.x(), bound.y(), bound.width(), bound.height())

    def points(self) -> list[tuple[int, int]]:
        return [(self.x, self.y), (self.x + self.width, self.y + self.height)]

    def to_qt(self) -> QRect:
        return QRect(self.x, self.y, self.width, self.height)

    # полуоткрытый прямоугольник: правая и нижняя грани не входят
    def contains(self, x: int, y: int) -> bool:
        return (self.x <= x < self.x + self.width and
                self.y <= y < self.y + self.height)

    def draw(self, painter: QPainter):
        painter.drawRect(self.to_qt())


@dataclass(frozen=True)
class EllipseOutline(RectOutline):
    """Эллипс, вписанный в прямоугольник (x, y, width, height)."""

    @classmethod
    def from_bound(cls, bound: QRect) -> EllipseOutline:
        return cls(bound.x(), bound.y(), bound.width(), bound.height())

    def contains(self, x: int, y: int) -> bool:
        if self.width <= 0 or self.height <= 0:
            return False
        # нормированное уравнение эллипса относительно центра
        nx = (x - self.x) / self.width - 0.5
        ny = (y - self.y) / self.height - 0.5
        return nx * nx + ny * ny < 0.25

    def draw(self, painter: QPainter):
        painter.drawEllipse(self.to_qt())


@dataclass(frozen=True)
class TriangleOutline:
    apex: tuple[int, int]
    base_left: tuple[int, int]
    base_right: tuple[int, int]

    @classmethod
    def from_bound(cls, bound: QRect) -> TriangleOutline:
        x, y = bound.x(), bound.y()
        w, h = bound.width(), bound.height()
        return cls(apex=(x + w // 2, y),
                   base_left=(x, y + h),
                   base_right=(x + w, y + h))

    def points(self) -> list[tuple[int, int]]:
        return [self.apex, self.base_left, self.base_right]

    def to_qt(self) -> QPolygon:
        return QPolygon([QPoint(px, py) for px, py in self.points()])

    # barycentric: вырожденный треугольник ничего не содержит
    def contains(self, x: int, y: int) -> bool:
        (x1, y1), (x2, y2), (x3, y3) = self.points()
        denom = (y2 - y3) * (x1 - x3) + (x3 - x2) * (y1 - y3)
        if denom == 0:
            return False
        a = ((y2 - y3) * (x - x3) + (x3 - x2) * (y - y3)) / denom
        b = ((y3 - y1) * (x - x3) + (x1 - x3) * (y - y3)) / denom
        c = 1 - a - b
        return a >= 0 and b >= 0 and c >= 0

    def draw(self, painter: QPainter):
        painter.drawPolygon(self.to_qt())


Outline = RectOutline | EllipseOutline | TriangleOutline

OUTLINES: dict[ShapeKind, type] = {
    ShapeKind.RECTANGLE: RectOutline,
    ShapeKind.CIRCLE: EllipseOutline,
    ShapeKind.TRIANGLE: TriangleOutline,
}


def outline_for(kind: ShapeKind, bound: QRect) -> Outline:
    """Единственное место, где вид фигуры превращается в геометрию контура."""
    return OUTLINES[kind].from_bound(bound)


# --- Запись для сохранения ---

def _ints(value, size: int, name: str) -> tuple[int, ...]:
    if not isinstance(value, (list, tuple)) or len(value) != size:
        raise ValueError(f"{name} must be a list of {size} integers")
    # bool — подкласс int, но в файле это ошибка
    if any(isinstance(v, bool) or not isinstance(v, int) for v in value):
        raise ValueError(f"{name} must contain only integers")
    return tuple(value)


@dataclass(frozen=True)
class FigureRecord:
    kind: ShapeKind
    bound: tuple[int, int, int, int]
    color: tuple[int, int, int]

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "bound": list(self.bound),
            "color": list(self.color),
        }

    @classmethod
    def from_dict(cls, data: dict) -> FigureRecord:
        if not isinstance(data, dict):
            raise ValueError("record must be a JSON object")
        for key in ("kind", "bound", "color"):
            if key not in data:
                raise ValueError(f"missing key '{key}'")
        try:
            kind = ShapeKind(data["kind"])
        except ValueError:
            raise ValueError(f"unknown figure kind {data['kind']!r}") from None
        bound = _ints(data["bound"], 4, "bound")
        if bound[2] < 0 or bound[3] < 0:
            raise ValueError("bound width and height must be non-negative")
        x, y, w, h = bound
        if (any(not INT32_MIN <= v <= INT32_MAX for v in bound)
                or x + w > INT32_MAX or y + h > INT32_MAX):
            raise ValueError("bound does not fit 32-bit coordinates")
        color = _ints(data["color"], 3, "color")
        if any(not 0 <= c <= 255 for c in color):
            raise ValueError("color components must be in 0..255")
        return cls(kind, bound, color)


class Figure:
    """
    Фигура: прямоугольник bound + вписанный в него контур.
    bound — единственное авторитетное состояние, контур пересчитывается merge().
    """

    def __init__(self, kind: ShapeKind, x: int, y: int):
        x, y = _clamp32(x), _clamp32(y)
        self.__kind = ShapeKind(kind)
        self.__bound = QRect(x, y, 0, 0)
        self.__anchor = QPoint(x, y)
        self.__drag_offset = QPoint(0, 0)
        self._color = QColor(Defaults.FIGURE_COLOR)
        self.__outline = outline_for(self.__kind, self.__bound)

    @property
    def kind(self) -> ShapeKind: return self.__kind

    # копии — чтобы bound нельзя было изменить в обход merge()
    @property
    def bound(self) -> QRect: return QRect(self.__bound)
    @property
    def anchor(self) -> QPoint: return QPoint(self.__anchor)
    @property
    def drag_offset(self) -> QPoint: return QPoint(self.__drag_offset)
    @property
    def outline(self) -> Outline: return self.__outline

    @property
    def color(self) -> QColor: return QColor(self._color)
    @color.setter
    def color(self, value: QColor):
        self._color = QColor(value)

    def resize(self, px: int, py: int, lock_aspect: bool = False):
        """Растягивает фигуру от якоря до курсора. Только во время создания."""
        ax, ay = self.__anchor.x(), self.__anchor.y()
        width = abs(ax - px)
        height = abs(ay - py)
        if lock_aspect:
            side = min(width, height)
            width = height = side

        new_x = ax - width if px < ax else ax
        new_y = ay - height if py < ay else ay
        self.__bound.setRect(*_fit_rect(new_x, new_y, width, height))
        self.merge()

    def scale(self, percent: int):
        # каждая единица percent — 10% от текущего размера, левый верхний угол на месте
        # за пределами int32 результат всё равно упрётся в границу
        percent = _clamp32(percent)
        old_w, old_h = self.__bound.width(), self.__bound.height()
        new_w = max(0, int(old_w + percent * old_w / 10.0))
        new_h = max(0, int(old_h + percent * old_h / 10.0))
        self.__bound.setRect(*_fit_rect(self.__bound.x(), self.__bound.y(), new_w, new_h))
        self.merge()

    def set_drag_offset(self, px: int, py: int):
        self.__drag_offset = QPoint(_clamp32(px - self.__bound.x()), _clamp32(py - self.__bound.y()))

    def move(self, px: int, py: int):
        b = self.__bound
        b.setRect(*_fit_rect(px - self.__drag_offset.x(), py - self.__drag_offset.y(),
                             b.width(), b.height()))
        self.merge()

    def merge(self):
        self.__outline = outline_for(self.__kind, self.__bound)

    def contains(self, x: int, y: int) -> bool:
        return self.__outline.contains(x, y)

    def draw(self, painter: QPainter):
        painter.save()
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(self._color))
        self.__outline.draw(painter)
        painter.restore()

    def to_record(self) -> FigureRecord:
        b = self.__bound
        c = self._color
        return FigureRecord(self.__kind,
                            (b.x(), b.y(), b.width(), b.height()),
                            (c.red(), c.green(), c.blue()))

    @classmethod
    def from_record(cls, record: FigureRecord) -> Figure:
        x, y, w, h = record.bound
        fig = cls(record.kind, x, y)
        fig.__bound.setRect(*_fit_rect(x, y, w, h))
        fig.color = QColor(*record.color)
        fig.merge()
        return fig

    def __repr__(self):
        b = self.__bound
        return f"Figure({self.__kind.value}, {b.x()}, {b.y()}, {b.width()}, {b.height()})"
