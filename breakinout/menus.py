"""Main menu, in-level side panel and the custom level chooser."""

from __future__ import annotations

from pathlib import Path

from .backend import BLACK, DARKGRAY, GRAY, GREEN, LIGHTGRAY, RED, WHITE, Color
from .bits import is_bit_set
from .components import BlockState, BlockType, Container, Text, Watcher
from .entities import create_button, create_panel, create_text
from .geometry import Vector2
from .level import CUSTOM_LEVEL_DIRECTORY, LEVEL_FILE_EXTENSION

PANE_WIDTH = 400.0
PANE_PADDING = Vector2(50.0, 50.0)
BUTTON_PADDING = Vector2(5.0, 3.0)


def _count_breakable(scene) -> int:
    return sum(
        1
        for _, state in scene.registry.view(BlockState)
        if state.block_type in (BlockType.NORMAL, BlockType.BALLOON)
    )


def _layer_button(scene, position: Vector2, index: int) -> None:
    button = create_button(
        scene, position, Vector2(37.0, 40.0), str(index), BLACK, 40,
        BUTTON_PADDING, WHITE, lambda: None,
    )

    def highlight() -> None:
        container = button.get_component(Container)
        container.background_color = (
            WHITE if is_bit_set(scene.mask, 1 << index) else LIGHTGRAY
        )

    button.add_component(Watcher(highlight))


def _breakable_counter(scene, position: Vector2) -> None:
    display = create_text(scene, position, "0", BLACK, 100)

    def refresh() -> None:
        display.get_component(Text).text = str(_count_breakable(scene))

    display.add_component(Watcher(refresh))


def main_menu(scene) -> None:
    """Title, Start, Custom and Exit over a translucent panel."""
    width, height = scene.backend.width, scene.backend.height

    create_text(scene, Vector2(600.0, 200.0), "BreakiN", WHITE, 200)

    size = Vector2(300.0, 100.0)
    create_button(
        scene, Vector2(width * 0.5 - size.x * 0.5, 500), size, "Start", WHITE, 100,
        Vector2(10.0, 5.0), DARKGRAY, lambda: scene.goto_level("1", False),
    )

    size = Vector2(180.0, 50.0)
    create_button(
        scene, Vector2(width * 0.5 - size.x * 0.5, 620), size, "Custom", WHITE, 50,
        BUTTON_PADDING, DARKGRAY, scene.goto_customs,
    )

    def request_exit() -> None:
        scene.should_close = True

    size = Vector2(105.0, 50.0)
    create_button(
        scene, Vector2(width * 0.5 - size.x * 0.5, 780), size, "Exit", WHITE, 50,
        BUTTON_PADDING, DARKGRAY, request_exit,
    )

    margin = 50.0
    create_panel(
        scene,
        Vector2(margin, margin),
        Vector2(width - margin * 2, height - margin * 2),
        Color(50, 50, 50, 220),
    )


def level_panel(scene) -> None:
    """Side panel while playing: name, layers, remaining blocks, Restart, Exit."""
    width, height = scene.backend.width, scene.backend.height
    pane = Vector2(width - PANE_WIDTH, 0.0)
    x = pane.x + PANE_PADDING.x
    top = pane.y + PANE_PADDING.y
    y = 0.0

    create_text(scene, Vector2(x, top + y), "Level:", BLACK, 30)
    y += 30
    y += 5.0
    create_text(scene, Vector2(x, top + y), scene.level.name(), BLACK, 30)
    y += 30

    y += 20.0
    create_text(scene, Vector2(x, top + y), "Layer:", BLACK, 20)
    y += 20
    y += 10.0
    for index in range(8):
        _layer_button(scene, Vector2(x + index * 37, top + y), index)

    y += 50.0
    create_text(scene, Vector2(x, top + y), "Remaining:", BLACK, 20)
    y += 20
    y += 10.0
    _breakable_counter(scene, Vector2(x, top + y))

    half = (PANE_WIDTH - PANE_PADDING.x * 2) / 2
    size = Vector2(half, 30.0)
    bottom = height - PANE_PADDING.y - size.y

    def restart() -> None:
        scene.goto_level(scene.level.name(), scene.level.is_custom)

    create_button(
        scene, Vector2(x, bottom), size, "Restart", BLACK, 30,
        BUTTON_PADDING, GREEN, restart,
    )

    def leave() -> None:
        if scene.level is not None and scene.level.is_custom:
            scene.goto_customs()
        else:
            scene.goto_menu()

    create_button(
        scene, Vector2(x + half, bottom), size, "Exit", BLACK, 30,
        BUTTON_PADDING, RED, leave,
    )

    create_panel(scene, pane, Vector2(PANE_WIDTH, height), GRAY)


def list_custom_levels(directory: Path | str = CUSTOM_LEVEL_DIRECTORY) -> list[str]:
    """Names of the level files in ``directory``, creating it if needed."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    return sorted(
        entry.stem
        for entry in directory.iterdir()
        if entry.is_file() and entry.suffix == LEVEL_FILE_EXTENSION
    )


def _level_row(scene, index: int, name: str) -> None:
    width = scene.backend.width
    position = Vector2(PANE_PADDING.x, PANE_PADDING.y + 60 * index)
    create_text(scene, Vector2(position.x + 10, position.y + 10), name, WHITE, 30)

    size = Vector2(100.0, 30.0)
    create_button(
        scene, Vector2(width - 410 - size.x - PANE_PADDING.x, position.y + 10), size,
        "Edit", BLACK, 30, BUTTON_PADDING, GREEN, lambda: scene.goto_editor(name),
    )
    create_button(
        scene, Vector2(width - 510 - size.x - PANE_PADDING.x, position.y + 10), size,
        "Play", BLACK, 30, BUTTON_PADDING, WHITE, lambda: scene.goto_level(name, True),
    )
    create_panel(
        scene, position, Vector2(width - PANE_WIDTH - PANE_PADDING.x * 2, 50), DARKGRAY
    )


def select_custom_level(scene) -> None:
    """One row per custom level, plus Create New and Return."""
    width, height = scene.backend.width, scene.backend.height
    pane = Vector2(width - PANE_WIDTH, 0.0)

    for index, name in enumerate(list_custom_levels(CUSTOM_LEVEL_DIRECTORY)):
        _level_row(scene, index, name)

    size = Vector2(PANE_WIDTH - PANE_PADDING.x * 2, 30.0)
    x = pane.x + PANE_PADDING.x
    create_button(
        scene, Vector2(x, height - PANE_PADDING.y - size.y - 40.0), size, "Create New",
        BLACK, 30, BUTTON_PADDING, GREEN, lambda: scene.goto_editor(""),
    )
    create_button(
        scene, Vector2(x, height - PANE_PADDING.y - size.y), size, "Return",
        BLACK, 30, BUTTON_PADDING, RED, scene.goto_menu,
    )
    create_panel(scene, pane, Vector2(PANE_WIDTH, height), GRAY)