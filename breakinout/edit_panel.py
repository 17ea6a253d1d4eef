"""Side panel of the level editor: name, sound, layer and block type pickers."""

from __future__ import annotations

from collections.abc import Callable

from .backend import BLACK, BLANK, BLUE, GRAY, GREEN, LIGHTGRAY, RED, WHITE, Color, Key
from .bits import is_bit_set
from .components import BlockType, Container, Text, Watcher
from .entities import create_button, create_panel, create_text
from .geometry import Vector2
from .sounds import Notes, text_of_note
from .systems import count_breakable

PANE_WIDTH = 400.0
PANE_PADDING = Vector2(50.0, 50.0)
BUTTON_PADDING = Vector2(5.0, 3.0)
FIRST_PRINTABLE = 32
LAST_PRINTABLE = 125


def _highlight_when(button, condition: Callable[[], bool]) -> None:
    """Give ``button`` a green border whenever ``condition`` holds."""

    def refresh() -> None:
        container = button.get_component(Container)
        container.border_color = GREEN if condition() else BLANK

    button.add_component(Watcher(refresh))


def _char_code(char) -> int:
    return ord(char) if isinstance(char, str) else int(char)


def _name_field(scene, position: Vector2, size: Vector2) -> None:
    def start_editing() -> None:
        scene.editor.editing_name = True

    field = create_button(
        scene, position, size, "(empty)", BLACK, 30, BUTTON_PADDING, WHITE, start_editing
    )

    def refresh() -> None:
        editor = scene.editor
        backend = scene.backend
        text = field.get_component(Text)
        name = editor.level_name()
        text.text = name

        if not editor.editing_name:
            return
        container = field.get_component(Container)
        container.border_color = GREEN

        changed = False
        for char in backend.pop_chars():
            code = _char_code(char)
            if FIRST_PRINTABLE <= code <= LAST_PRINTABLE:
                name += chr(code)
                changed = True
        if backend.is_key_pressed(Key.BACKSPACE) and name:
            name = name[:-1]
            changed = True
        if changed:
            editor.update_name(name)
            text.text = name

        enter = backend.is_key_pressed(Key.ENTER)
        if enter or backend.is_key_pressed(Key.ESCAPE):
            editor.editing_name = False
            container.border_color = BLANK
            if enter:
                editor.save_level()

    field.add_component(Watcher(refresh))


def _note_button(scene, position: Vector2, note: Notes) -> None:
    def choose() -> None:
        if scene.editor is not None:
            scene.editor.set_hit_sound(note)
        scene.sounds.play_sound(note)

    button = create_button(
        scene, position, Vector2(45.0, 35.0), text_of_note(note), BLACK, 30,
        BUTTON_PADDING, WHITE, choose,
    )
    _highlight_when(
        button, lambda: scene.editor is not None and scene.editor.hit_sound() == note
    )


def _layer_button(scene, position: Vector2, index: int) -> None:
    button = create_button(
        scene, position, Vector2(37.0, 40.0), str(index), BLACK, 40,
        BUTTON_PADDING, WHITE, lambda: None,
    )

    def refresh() -> None:
        container = button.get_component(Container)
        container.background_color = (
            WHITE if is_bit_set(scene.mask, 1 << index) else LIGHTGRAY
        )

    button.add_component(Watcher(refresh))


def _type_button(
    scene, position: Vector2, size: Vector2, label: str, color: Color, block_type: BlockType
) -> None:
    def choose() -> None:
        if scene.editor is not None:
            scene.editor.set_type(block_type)

    button = create_button(
        scene, position, size, label, BLACK, 30, BUTTON_PADDING, color, choose
    )
    _highlight_when(
        button,
        lambda: scene.editor is not None and scene.editor.block_type() == block_type,
    )


def _breakable_counter(scene, position: Vector2) -> None:
    display = create_text(scene, position, "0", BLACK, 100)

    def refresh() -> None:
        display.get_component(Text).text = str(count_breakable(scene))

    display.add_component(Watcher(refresh))


def edit_panel(scene) -> None:
    """Build the editor's side panel on the right of the screen."""
    width, height = scene.backend.width, scene.backend.height
    pane = Vector2(width - PANE_WIDTH, 0.0)
    x = pane.x + PANE_PADDING.x
    top = pane.y + PANE_PADDING.y
    inner_width = PANE_WIDTH - PANE_PADDING.x * 2
    y = 0.0

    create_text(scene, Vector2(x, top + y), "Editing level:", BLACK, 30)
    y += 30

    y += 5.0
    field_size = Vector2(inner_width, 40.0)
    _name_field(scene, Vector2(x, top + y), field_size)
    y += field_size.y

    y += 20.0
    create_text(scene, Vector2(x, top + y), "Select Sound:", BLACK, 20)
    y += 20
    y += 10.0

    for note in Notes:
        if note > Notes.B3:
            break
        _note_button(scene, Vector2(x + int(note) * 50.0 - 20, top + y), note)
    y += 40.0
    for note in Notes:
        if note < Notes.C4:
            continue
        _note_button(scene, Vector2(x + (int(note) - 7) * 50.0 - 20, top + y), note)
    y += 60.0

    create_text(scene, Vector2(x, top + y), "Layer:", BLACK, 20)
    y += 20
    y += 10.0
    for index in range(8):
        _layer_button(scene, Vector2(x + index * 37, top + y), index)

    y += 70.0
    create_text(scene, Vector2(x, top + y), "Select Block Type:", BLACK, 20)
    y += 20
    y += 10.0
    type_size = Vector2(inner_width, 30.0)
    for label, color, block_type in (
        ("Wall", WHITE, BlockType.WALL),
        ("Normal", BLUE, BlockType.NORMAL),
        ("Balloon", GREEN, BlockType.BALLOON),
        ("Spikes", RED, BlockType.SPIKES),
    ):
        _type_button(scene, Vector2(x, top + y), type_size, label, color, block_type)
        y += 35.0
    y += 15.0

    create_text(scene, Vector2(x, top + y), "Total no. of breakable:", BLACK, 20)
    y += 20
    y += 10.0
    _breakable_counter(scene, Vector2(x, top + y))

    half = inner_width / 2
    size = Vector2(half, 30.0)
    bottom = height - PANE_PADDING.y - size.y

    def save() -> None:
        if scene.editor is not None:
            scene.editor.save_level()

    create_button(
        scene, Vector2(x, bottom), size, "Save", BLACK, 30, BUTTON_PADDING, GREEN, save
    )
    create_button(
        scene, Vector2(x + half, bottom), size, "Exit", BLACK, 30,
        BUTTON_PADDING, RED, scene.goto_customs,
    )

    create_panel(scene, pane, Vector2(PANE_WIDTH, height), GRAY)