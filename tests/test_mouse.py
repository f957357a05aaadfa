import pytest

from nvframe.dimensions import Dimensions
from nvframe.mouse import (
    DragCommand,
    MouseButton,
    MouseButtonCommand,
    MouseManager,
    ScrollCommand,
    clamp_position,
    mouse_button_text,
    to_grid_coords,
)
from nvframe.windows import Rect, WindowDrawDetails

FONT = Dimensions(10, 20)
SIZE = (400, 300)
ROOT = WindowDrawDetails(1, Rect(0.0, 0.0, 400.0, 300.0))
FLOATING = WindowDrawDetails(2, Rect(100.0, 100.0, 200.0, 200.0), floating_order=1)


@pytest.mark.parametrize(
    "button, text",
    [
        (MouseButton.LEFT, "left"),
        (MouseButton.RIGHT, "right"),
        (MouseButton.MIDDLE, "middle"),
        (MouseButton.OTHER, None),
    ],
)
def test_mouse_button_text(button, text):
    assert mouse_button_text(button) == text


@pytest.mark.parametrize("cell", [(0, 0), (3, 7), (12, 1)])
def test_to_grid_coords_finds_containing_cell(cell):
    x, y = cell
    assert to_grid_coords((x * 10 + 9.5, y * 20 + 0.5), FONT) == (x, y)


def test_to_grid_coords_saturates_negative():
    assert to_grid_coords((-5.0, -30.0), FONT) == (0, 0)


def test_clamp_keeps_inside_position():
    assert clamp_position((55.0, 45.0), ROOT.region, FONT) == (55.0, 45.0)


def test_clamp_right_and_left_edges():
    right = clamp_position((395.0, 50.0), ROOT.region, FONT)
    assert right[0] == ROOT.region.right - FONT.width
    assert clamp_position((50.0, 150.0), FLOATING.region, FONT) == (
        FLOATING.region.left,
        150.0,
    )


def test_motion_outside_window_is_ignored():
    manager = MouseManager()
    manager.pointer_motion(55, 45, SIZE, [ROOT], FONT)
    before = manager.position
    assert manager.pointer_motion(-1, 5, SIZE, [ROOT], FONT) == []
    assert manager.pointer_motion(400, 5, SIZE, [ROOT], FONT) == []
    assert manager.position == before


def test_motion_over_root_window_uses_global_position():
    manager = MouseManager()
    assert manager.pointer_motion(55, 45, SIZE, [ROOT], FONT) == []
    assert manager.window_details_under_mouse == ROOT
    assert manager.position == to_grid_coords((55.0, 45.0), FONT)
    assert manager.drag_position == manager.position


def test_motion_picks_topmost_floating_window():
    manager = MouseManager()
    manager.pointer_motion(150, 150, SIZE, [ROOT, FLOATING], FONT)
    assert manager.window_details_under_mouse == FLOATING
    assert manager.relative_position == to_grid_coords((50.0, 50.0), FONT)
    assert manager.drag_position == manager.relative_position


def test_press_drag_release():
    sent = []
    manager = MouseManager(sent.append)
    manager.pointer_motion(15, 25, SIZE, [ROOT], FONT)

    press = manager.pointer_transition(MouseButton.LEFT, True, "C-")
    assert press == [MouseButtonCommand("left", "press", 1, manager.relative_position, "C-")]
    assert manager.dragging == "left"

    drag = manager.pointer_motion(55, 65, SIZE, [ROOT], FONT, "C-")
    assert drag == [DragCommand("left", 1, to_grid_coords((55.0, 65.0), FONT), "C-")]
    assert manager.has_moved

    release = manager.pointer_transition(MouseButton.LEFT, False)
    assert release == [MouseButtonCommand("left", "release", 1, manager.drag_position, "")]
    assert manager.dragging is None
    assert not manager.has_moved
    assert sent == press + drag + release


def test_drag_within_same_cell_sends_nothing():
    manager = MouseManager()
    manager.pointer_motion(15, 25, SIZE, [ROOT], FONT)
    manager.pointer_transition(MouseButton.LEFT, True)
    assert manager.pointer_motion(16, 26, SIZE, [ROOT], FONT) == []
    assert not manager.has_moved


def test_dragging_without_window_raises():
    manager = MouseManager()
    assert manager.pointer_transition(MouseButton.LEFT, True) == []
    with pytest.raises(RuntimeError):
        manager.pointer_motion(15, 25, SIZE, [ROOT], FONT)


def test_unknown_button_is_ignored():
    manager = MouseManager()
    manager.pointer_motion(15, 25, SIZE, [ROOT], FONT)
    assert manager.pointer_transition(MouseButton.OTHER, True) == []
    assert manager.dragging is None


def test_disabled_manager_sends_nothing():
    manager = MouseManager()
    manager.pointer_motion(15, 25, SIZE, [ROOT], FONT)
    manager.enabled = False
    assert manager.pointer_transition(MouseButton.LEFT, True) == []
    assert manager.line_scroll(0.0, 3.0) == []
    assert manager.dragging is None


def test_line_scroll_vertical():
    manager = MouseManager()
    up = manager.line_scroll(0.0, 2.0)
    assert len(up) == 2
    assert all(c == ScrollCommand("up", 0, manager.drag_position, "") for c in up)
    down = manager.line_scroll(0.0, -1.0)
    assert [c.direction for c in down] == ["down"]


def test_line_scroll_horizontal():
    manager = MouseManager()
    assert [c.direction for c in manager.line_scroll(1.0, 0.0)] == ["right"]
    assert [c.direction for c in manager.line_scroll(-2.0, 0.0)] == ["left", "left"]


def test_fractional_scroll_accumulates():
    manager = MouseManager()
    assert manager.line_scroll(0.0, 0.5) == []
    assert [c.direction for c in manager.line_scroll(0.0, 0.5)] == ["up"]


def test_scroll_accumulates_in_single_precision():
    manager = MouseManager()
    total = sum(len(manager.line_scroll(0.0, 0.1)) for _ in range(10))
    assert total == 1


def test_pixel_scroll_matches_line_scroll():
    by_pixels = MouseManager().pixel_scroll(FONT, 0.0, 40.0, "S-")
    by_lines = MouseManager().line_scroll(0.0, 2.0, "S-")
    assert by_pixels == by_lines


def test_scroll_targets_window_under_mouse():
    sent = []
    manager = MouseManager(sent.append)
    manager.pointer_motion(150, 150, SIZE, [ROOT, FLOATING], FONT)
    commands = manager.line_scroll(0.0, 1.0, "C-")
    assert commands == [ScrollCommand("up", FLOATING.id, manager.drag_position, "C-")]
    assert sent == commands