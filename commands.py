from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
from PyQt6.QtGui import QColor
from figures import ShapeKind
import factory

logger = logging.getLogger(__name__)


class Command:
    """Базовый интерфейс команды: побочный эффект перехода автомата."""
    # host-команды выполняет виджет (перерисовка, курсор, диалог), а не хранилище
    is_host = False

    def execute(self, storage) -> None:
        raise NotImplementedError


class Cursor(Enum):
    DEFAULT = 'default'
    CROSSHAIR = 'crosshair'


# --- Команды модели ---

@dataclass(frozen=True)
class CreateFigure(Command):
    kind: ShapeKind
    x: int
    y: int

    def execute(self, storage):
        logger.debug("create %s at (%d, %d)", self.kind.value, self.x, self.y)
        storage.append(factory.create(self.kind, self.x, self.y))


@dataclass(frozen=True)
class ResizeFigure(Command):
    handle: int
    x: int
    y: int
    lock_aspect: bool

    def execute(self, storage):
        storage.get(self.handle).resize(self.x, self.y, self.lock_aspect)


@dataclass(frozen=True)
class SetDragOffset(Command):
    handle: int
    x: int
    y: int

    def execute(self, storage):
        storage.get(self.handle).set_drag_offset(self.x, self.y)


@dataclass(frozen=True)
class MoveFigure(Command):
    handle: int
    x: int
    y: int

    def execute(self, storage):
        storage.get(self.handle).move(self.x, self.y)


@dataclass(frozen=True)
class ScaleFigure(Command):
    handle: int
    percent: int

    def execute(self, storage):
        storage.get(self.handle).scale(self.percent)


@dataclass(frozen=True)
class Recolor(Command):
    handle: int
    color: QColor

    def execute(self, storage):
        storage.get(self.handle).color = self.color


# --- Команды для виджета ---

@dataclass(frozen=True)
class Redraw(Command):
    is_host = True

    def execute(self, storage):
        pass


@dataclass(frozen=True)
class SetCursor(Command):
    cursor: Cursor
    is_host = True

    def execute(self, storage):
        pass


@dataclass(frozen=True)
class PickColor(Command):
    handle: int
    default: QColor
    is_host = True

    def execute(self, storage):
        pass
