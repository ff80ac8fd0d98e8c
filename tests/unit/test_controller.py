"""
Unit tests for the interaction state machine.

Tests:
- Pure transition function
- Figure creation by drag, with and without Shift
- Selection, move, scale and recolor of the selected figure
- Cursor feedback
"""

import pytest
from PyQt6.QtGui import QColor

from figures import ShapeKind
from storage import FigureStorage
from commands import (CreateFigure, ResizeFigure, SetDragOffset, MoveFigure, ScaleFigure,
                      Recolor, Redraw, SetCursor, PickColor, Cursor)
from controller import (transition, InteractionController, EditorState, Idle, PendingKind,
                        Creating, Selected, Button, Key, KindChosen, PointerDown, PointerDrag,
                        PointerUp, PointerMove, Wheel, KeyDown, KeyUp, ColorChosen)


def bound_of(storage, handle):
    b = storage.get(handle).bound
    return (b.x(), b.y(), b.width(), b.height())


def draw(controller, kind, start, points, shift=False):
    """Choose a kind and drag from start through points, then release."""
    controller.dispatch(KindChosen(kind))
    if shift:
        controller.dispatch(KeyDown(Key.SHIFT))
    controller.dispatch(PointerDown(*start))
    controller.dispatch(PointerDrag(*start))
    for p in points:
        controller.dispatch(PointerDrag(*p))
    controller.dispatch(PointerUp(*points[-1]))
    if shift:
        controller.dispatch(KeyUp(Key.SHIFT))


class TestTransition:
    """Tests for the pure transition function."""

    def test_kind_chosen_from_idle(self, empty_storage):
        state, cmds = transition(empty_storage, EditorState(), KindChosen(ShapeKind.CIRCLE))

        assert state.mode == PendingKind(ShapeKind.CIRCLE)
        assert cmds == []

    def test_kind_chosen_overrides_selection(self, overlapping_storage):
        state = EditorState(mode=Selected(0))
        state, _ = transition(overlapping_storage, state, KindChosen(ShapeKind.TRIANGLE))

        assert state.mode == PendingKind(ShapeKind.TRIANGLE)

    def test_transition_does_not_mutate_storage(self, overlapping_storage):
        before = overlapping_storage.serialize()
        state = EditorState(mode=Selected(0))
        transition(overlapping_storage, state, PointerDrag(15, 15))
        transition(overlapping_storage, state, Wheel(15, 15, 3))
        transition(overlapping_storage, EditorState(mode=PendingKind(ShapeKind.CIRCLE)),
                   PointerDrag(1, 1))

        assert overlapping_storage.serialize() == before
        assert len(overlapping_storage) == 2

    def test_first_drag_creates_with_next_handle(self, overlapping_storage):
        state = EditorState(mode=PendingKind(ShapeKind.RECTANGLE))
        state, cmds = transition(overlapping_storage, state, PointerDrag(5, 6))

        assert state.mode == Creating(ShapeKind.RECTANGLE, 2)
        assert cmds == [CreateFigure(ShapeKind.RECTANGLE, 5, 6), Redraw()]

    def test_later_drag_resizes_with_shift_flag(self, empty_storage):
        state = EditorState(mode=Creating(ShapeKind.CIRCLE, 0), shift_held=True)
        _, cmds = transition(empty_storage, state, PointerDrag(30, 10))

        assert cmds == [ResizeFigure(0, 30, 10, True), Redraw()]

    def test_primary_down_with_pending_kind_does_not_select(self, overlapping_storage):
        state = EditorState(mode=PendingKind(ShapeKind.CIRCLE))
        state, cmds = transition(overlapping_storage, state, PointerDown(15, 15))

        assert state.mode == PendingKind(ShapeKind.CIRCLE)
        assert cmds == []

    def test_primary_down_hit_selects(self, overlapping_storage):
        state, cmds = transition(overlapping_storage, EditorState(), PointerDown(15, 15))

        assert state.mode == Selected(0)
        assert cmds == [SetDragOffset(0, 15, 15)]

    def test_primary_down_miss_clears_selection(self, overlapping_storage):
        state, cmds = transition(overlapping_storage, EditorState(mode=Selected(1)),
                                 PointerDown(300, 300))

        assert state.mode == Idle()
        assert cmds == []

    def test_release_ends_creation(self, empty_storage):
        state = EditorState(mode=Creating(ShapeKind.CIRCLE, 0))
        state, _ = transition(empty_storage, state, PointerUp(0, 0))

        assert state.mode == Idle()

    def test_release_disarms_pending_kind(self, empty_storage):
        state = EditorState(mode=PendingKind(ShapeKind.CIRCLE))
        state, _ = transition(empty_storage, state, PointerUp(0, 0))

        assert state.mode == Idle()

    def test_release_keeps_selection(self, overlapping_storage):
        state = EditorState(mode=Selected(0))
        state, _ = transition(overlapping_storage, state, PointerUp(0, 0))

        assert state.mode == Selected(0)

    def test_shift_tracking(self, empty_storage):
        state, _ = transition(empty_storage, EditorState(), KeyDown(Key.SHIFT))
        assert state.shift_held

        state, _ = transition(empty_storage, state, KeyDown(Key.OTHER))
        assert state.shift_held

        state, _ = transition(empty_storage, state, KeyUp(Key.SHIFT))
        assert not state.shift_held

    @pytest.mark.parametrize("mode,cursor", [
        (Idle(), Cursor.DEFAULT),
        (PendingKind(ShapeKind.CIRCLE), Cursor.CROSSHAIR),
        (Creating(ShapeKind.CIRCLE, 0), Cursor.CROSSHAIR),
    ])
    def test_pointer_move_sets_cursor(self, empty_storage, mode, cursor):
        state = EditorState(mode=mode)
        new_state, cmds = transition(empty_storage, state, PointerMove(1, 1))

        assert new_state == state
        assert cmds == [SetCursor(cursor)]

    def test_unknown_event(self, empty_storage):
        with pytest.raises(TypeError):
            transition(empty_storage, EditorState(), object())


class TestCreation:
    """Tests for drawing new figures through the controller."""

    def test_rectangle_scenario(self, controller):
        draw(controller, ShapeKind.RECTANGLE, (10, 10), [(30, 30), (50, 40)])

        assert bound_of(controller.storage, 0) == (10, 10, 40, 30)
        assert controller.mode == Idle()

    def test_triangle_scenario(self, controller):
        draw(controller, ShapeKind.TRIANGLE, (10, 10), [(50, 40)])

        outline = controller.storage.get(0).outline
        assert outline.points() == [(30, 10), (10, 40), (50, 40)]

    def test_circle_with_shift(self, controller):
        draw(controller, ShapeKind.CIRCLE, (0, 0), [(30, 10)], shift=True)

        assert bound_of(controller.storage, 0) == (0, 0, 10, 10)

    def test_shift_released_mid_drag(self, controller):
        controller.dispatch(KindChosen(ShapeKind.RECTANGLE))
        controller.dispatch(KeyDown(Key.SHIFT))
        controller.dispatch(PointerDrag(0, 0))
        controller.dispatch(PointerDrag(30, 10))
        assert bound_of(controller.storage, 0) == (0, 0, 10, 10)

        controller.dispatch(KeyUp(Key.SHIFT))
        controller.dispatch(PointerDrag(30, 10))
        assert bound_of(controller.storage, 0) == (0, 0, 30, 10)

    def test_creation_redraws_every_sample(self, controller):
        controller.dispatch(KindChosen(ShapeKind.RECTANGLE))

        assert controller.dispatch(PointerDrag(0, 0)) == [Redraw()]
        assert controller.dispatch(PointerDrag(5, 5)) == [Redraw()]

    def test_second_figure_appended(self, controller):
        draw(controller, ShapeKind.RECTANGLE, (0, 0), [(10, 10)])
        draw(controller, ShapeKind.CIRCLE, (100, 100), [(120, 130)])

        assert len(controller.storage) == 2
        assert bound_of(controller.storage, 1) == (100, 100, 20, 30)
        assert bound_of(controller.storage, 0) == (0, 0, 10, 10)

    def test_click_without_drag_creates_nothing(self, controller):
        controller.dispatch(KindChosen(ShapeKind.RECTANGLE))
        controller.dispatch(PointerDown(5, 5))
        controller.dispatch(PointerUp(5, 5))

        assert len(controller.storage) == 0
        assert controller.mode == Idle()

    def test_drag_when_idle_does_nothing(self, controller):
        assert controller.dispatch(PointerDrag(5, 5)) == []
        assert len(controller.storage) == 0


class TestSelection:
    """Tests for selecting and editing existing figures."""

    @pytest.fixture
    def ctl(self, overlapping_storage):
        return InteractionController(overlapping_storage)

    def test_select_and_move(self, ctl):
        ctl.dispatch(PointerDown(15, 15))
        assert ctl.selected == 0

        assert ctl.dispatch(PointerDrag(20, 20)) == [Redraw()]
        ctl.dispatch(PointerUp(20, 20))

        assert bound_of(ctl.storage, 0) == (15, 15, 40, 30)
        assert ctl.selected == 0

    def test_overlap_selects_first_created(self, ctl):
        ctl.dispatch(PointerDown(40, 30))

        assert ctl.selected == 0

    def test_selecting_other_discards_previous(self, ctl):
        ctl.dispatch(PointerDown(15, 15))
        ctl.dispatch(PointerDown(65, 45))

        assert ctl.selected == 1

    def test_drag_outside_selected_does_not_move(self, ctl):
        ctl.dispatch(PointerDown(15, 15))

        assert ctl.dispatch(PointerDrag(300, 300)) == []
        assert bound_of(ctl.storage, 0) == (10, 10, 40, 30)

    def test_wheel_scales_selected(self, ctl):
        ctl.dispatch(PointerDown(15, 15))
        ctl.dispatch(Wheel(15, 15, 10))

        assert bound_of(ctl.storage, 0) == (10, 10, 80, 60)

    def test_wheel_outside_is_noop(self, ctl):
        ctl.dispatch(PointerDown(15, 15))

        assert ctl.dispatch(Wheel(300, 300, 10)) == []
        assert bound_of(ctl.storage, 0) == (10, 10, 40, 30)

    def test_wheel_without_selection_is_noop(self, ctl):
        assert ctl.dispatch(Wheel(15, 15, 10)) == []
        assert bound_of(ctl.storage, 0) == (10, 10, 40, 30)

    def test_secondary_click_requests_color(self, ctl):
        ctl.dispatch(PointerDown(15, 15))
        host = ctl.dispatch(PointerDown(15, 15, Button.SECONDARY))

        assert host == [PickColor(0, QColor(255, 0, 0))]
        assert ctl.selected == 0

    def test_secondary_click_without_selection(self, ctl):
        assert ctl.dispatch(PointerDown(15, 15, Button.SECONDARY)) == []

    def test_color_chosen_recolors(self, ctl):
        ctl.dispatch(PointerDown(15, 15))
        host = ctl.dispatch(ColorChosen(0, QColor(0, 128, 0)))

        assert host == [Redraw()]
        assert ctl.storage.get(0).color == QColor(0, 128, 0)

    def test_color_cancelled_keeps_color(self, ctl):
        ctl.dispatch(PointerDown(15, 15))
        host = ctl.dispatch(ColorChosen(0, None))

        assert host == []
        assert ctl.storage.get(0).color == QColor(0, 0, 0)

    def test_recolor_command(self):
        cmd = Recolor(0, QColor(1, 2, 3))
        assert not cmd.is_host
        assert Redraw().is_host

    def test_reset_after_load(self, ctl):
        ctl.dispatch(PointerDown(15, 15))
        ctl.storage.replace([])
        ctl.reset()

        assert ctl.mode == Idle()
        assert ctl.dispatch(Wheel(15, 15, 1)) == []


class TestCommands:
    """Tests for executing model commands directly."""

    def test_move_and_scale_commands(self, overlapping_storage):
        SetDragOffset(1, 30, 20).execute(overlapping_storage)
        MoveFigure(1, 0, 0).execute(overlapping_storage)
        ScaleFigure(1, -5).execute(overlapping_storage)

        assert bound_of(overlapping_storage, 1) == (0, 0, 20, 15)

    def test_create_command_appends(self):
        storage = FigureStorage()
        CreateFigure(ShapeKind.TRIANGLE, 3, 4).execute(storage)

        assert len(storage) == 1
        assert storage.get(0).kind is ShapeKind.TRIANGLE
