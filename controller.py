"""
Автомат взаимодействия: события мыши/клавиатуры -> состояние + команды.

transition() — чистая функция: читает хранилище (hit-test), но не меняет его.
InteractionController.dispatch() выполняет команды модели и возвращает
команды для виджета (перерисовка, курсор, выбор цвета).
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
import logging
from PyQt6.QtGui import QColor
from figures import ShapeKind
from settings import Defaults
from commands import (Command, CreateFigure, ResizeFigure, SetDragOffset, MoveFigure,
                      ScaleFigure, Recolor, Redraw, SetCursor, PickColor, Cursor)

logger = logging.getLogger(__name__)


class Button(Enum):
    PRIMARY = 'primary'
    SECONDARY = 'secondary'
    OTHER = 'other'


class Key(Enum):
    SHIFT = 'shift'
    OTHER = 'other'


# --- Режимы ---

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class PendingKind:
    kind: ShapeKind


@dataclass(frozen=True)
class Creating:
    kind: ShapeKind
    handle: int


@dataclass(frozen=True)
class Selected:
    handle: int


Mode = Idle | PendingKind | Creating | Selected


@dataclass(frozen=True)
class EditorState:
    mode: Mode = Idle()
    shift_held: bool = False


# --- События ---

@dataclass(frozen=True)
class KindChosen:
    kind: ShapeKind


@dataclass(frozen=True)
class PointerDown:
    x: int
    y: int
    button: Button = Button.PRIMARY


@dataclass(frozen=True)
class PointerDrag:
    x: int
    y: int


@dataclass(frozen=True)
class PointerUp:
    x: int
    y: int


@dataclass(frozen=True)
class PointerMove:
    x: int
    y: int


@dataclass(frozen=True)
class Wheel:
    x: int
    y: int
    delta: int


@dataclass(frozen=True)
class KeyDown:
    key: Key


@dataclass(frozen=True)
class KeyUp:
    key: Key


@dataclass(frozen=True)
class ColorChosen:
    handle: int
    color: QColor | None


def _inside_selected(storage, mode, x: int, y: int) -> bool:
    return isinstance(mode, Selected) and storage.get(mode.handle).contains(x, y)


def transition(storage, state: EditorState, event) -> tuple[EditorState, list[Command]]:
    mode = state.mode

    if isinstance(event, KindChosen):
        # выбор в меню сбрасывает выделение
        return replace(state, mode=PendingKind(event.kind)), []

    if isinstance(event, KeyDown):
        if event.key is Key.SHIFT:
            return replace(state, shift_held=True), []
        return state, []

    if isinstance(event, KeyUp):
        if event.key is Key.SHIFT:
            return replace(state, shift_held=False), []
        return state, []

    if isinstance(event, PointerDown):
        if event.button is Button.PRIMARY:
            # с выбранным видом фигуры клик ничего не выделяет — ждём drag
            if isinstance(mode, (PendingKind, Creating)):
                return state, []
            handle = storage.hit_test(event.x, event.y)
            if handle is None:
                return replace(state, mode=Idle()), []
            return (replace(state, mode=Selected(handle)),
                    [SetDragOffset(handle, event.x, event.y)])
        if event.button is Button.SECONDARY and _inside_selected(storage, mode, event.x, event.y):
            return state, [PickColor(mode.handle, QColor(Defaults.PICKER_COLOR))]
        return state, []

    if isinstance(event, ColorChosen):
        if event.color is None or not event.color.isValid():
            return state, []
        return state, [Recolor(event.handle, QColor(event.color)), Redraw()]

    if isinstance(event, PointerDrag):
        if isinstance(mode, PendingKind):
            # handle новой фигуры — её будущий индекс в хранилище
            handle = len(storage)
            return (replace(state, mode=Creating(mode.kind, handle)),
                    [CreateFigure(mode.kind, event.x, event.y), Redraw()])
        if isinstance(mode, Creating):
            return state, [ResizeFigure(mode.handle, event.x, event.y, state.shift_held), Redraw()]
        if _inside_selected(storage, mode, event.x, event.y):
            return state, [MoveFigure(mode.handle, event.x, event.y), Redraw()]
        return state, []

    if isinstance(event, PointerUp):
        if isinstance(mode, (PendingKind, Creating)):
            return replace(state, mode=Idle()), []
        return state, []

    if isinstance(event, Wheel):
        if _inside_selected(storage, mode, event.x, event.y):
            return state, [ScaleFigure(mode.handle, event.delta), Redraw()]
        return state, []

    if isinstance(event, PointerMove):
        if isinstance(mode, (PendingKind, Creating)):
            return state, [SetCursor(Cursor.CROSSHAIR)]
        return state, [SetCursor(Cursor.DEFAULT)]

    raise TypeError(f"Unknown event: {event!r}")


class InteractionController:
    def __init__(self, storage):
        self.storage = storage
        self.state = EditorState()

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def selected(self) -> int | None:
        mode = self.state.mode
        return mode.handle if isinstance(mode, Selected) else None

    def dispatch(self, event) -> list[Command]:
        new_state, commands = transition(self.storage, self.state, event)
        if new_state != self.state:
            logger.debug("%s: %s -> %s", type(event).__name__, self.state, new_state)
        self.state = new_state

        host = []
        for cmd in commands:
            if cmd.is_host:
                host.append(cmd)
            else:
                cmd.execute(self.storage)
        return host

    def reset(self):
        # после загрузки файла старые handle недействительны
        self.state = replace(self.state, mode=Idle())
