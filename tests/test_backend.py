from breakinout.backend import (
    BLUE,
    WHITE,
    Color,
    DrawCommand,
    HeadlessBackend,
    Key,
    MouseButton,
)
from breakinout.geometry import Vector2


def test_with_alpha_changes_only_alpha():
    faded = BLUE.with_alpha(100)
    assert (faded.r, faded.g, faded.b) == (BLUE.r, BLUE.g, BLUE.b)
    assert faded.a == 100
    assert BLUE.a == 255


def test_with_alpha_wraps_to_a_byte():
    assert Color(1, 2, 3).with_alpha(256 + 7).a == 7


def test_key_press_is_an_edge_and_down_is_a_level():
    backend = HeadlessBackend()
    backend.press_key(Key.SPACE)
    assert backend.is_key_pressed(Key.SPACE)
    assert backend.is_key_down(Key.SPACE)
    backend.end_frame()
    assert not backend.is_key_pressed(Key.SPACE)
    assert backend.is_key_down(Key.SPACE)
    backend.release_key(Key.SPACE)
    assert not backend.is_key_down(Key.SPACE)


def test_mouse_press_and_release_edges():
    backend = HeadlessBackend()
    backend.press_mouse(MouseButton.LEFT)
    assert backend.is_mouse_pressed(MouseButton.LEFT)
    assert backend.is_mouse_down(MouseButton.LEFT)
    assert not backend.is_mouse_down(MouseButton.RIGHT)
    backend.end_frame()
    backend.release_mouse(MouseButton.LEFT)
    assert backend.is_mouse_released(MouseButton.LEFT)
    assert not backend.is_mouse_down(MouseButton.LEFT)
    backend.end_frame()
    assert not backend.is_mouse_released(MouseButton.LEFT)


def test_mouse_position_follows_moves():
    backend = HeadlessBackend()
    backend.move_mouse(Vector2(12.0, 34.0))
    assert backend.mouse_position() == Vector2(12.0, 34.0)


def test_pop_chars_returns_and_clears():
    backend = HeadlessBackend()
    backend.type_text("lvl")
    backend.type_text("2")
    assert backend.pop_chars() == "lvl2"
    assert backend.pop_chars() == ""


def test_draw_calls_are_recorded_and_reset_per_frame():
    backend = HeadlessBackend()
    backend.begin_frame()
    backend.clear(WHITE)
    backend.draw_circle(Vector2(1.0, 2.0), 10.0, BLUE)
    backend.draw_text("hi", 3.7, 4.2, 30, WHITE)
    assert [c.kind for c in backend.commands] == ["clear", "circle", "text"]
    assert backend.commands[1] == DrawCommand("circle", BLUE, (Vector2(1.0, 2.0), 10.0))
    assert backend.commands[2].params == ("hi", 3, 4, 30)
    backend.begin_frame()
    assert backend.commands == []


def test_rectangle_commands_carry_geometry():
    backend = HeadlessBackend()
    backend.draw_rectangle(Vector2(5.0, 6.0), Vector2(100.0, 50.0), BLUE)
    backend.draw_rectangle_lines(Vector2(5.0, 6.0), Vector2(100.0, 50.0), 2, WHITE)
    assert backend.commands[0].params == (Vector2(5.0, 6.0), Vector2(100.0, 50.0))
    assert backend.commands[1].params[2] == 2
    assert backend.commands[1].color == WHITE


def test_should_close_follows_request():
    backend = HeadlessBackend()
    assert backend.should_close() is False
    backend.close_requested = True
    assert backend.should_close() is True