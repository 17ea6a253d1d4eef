"""The scene: entity store, page switching and the per-frame update."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from . import systems
from .backend import BLACK, LIGHTGRAY, WHITE, Backend
from .components import GhostLayer
from .edit_panel import edit_panel
from .editor import Editor
from .entities import create_ball, create_paddle, create_text
from .geometry import Vector2
from .level import LEVEL_ROOT, Level
from .menus import level_panel, main_menu, select_custom_level
from .registry import Entity, Registry
from .sounds import Sounds

_log = logging.getLogger(__name__)

STORY_LEVELS_ORDERS = ("1", "2", "3", "4", "5", "6", "7", "8")
DEFAULT_MASK = GhostLayer.REAL | GhostLayer.ONE

_TUTORIALS = {
    "1": "Use left/right arrow key to move paddle. And Space bar to shot the ball.",
    "2": "Use X/C to aim the ball",
    "3": "Let's try another one",
    "4": "Use number key 1 - 7 to hit blocks in different dimension.",
    "5": "Hmm.. how do I get there?",
    "6": "You are on your own now.",
}


def tutorial_text(file_name: str) -> str:
    """Hint shown on a story level, or an empty string."""
    return _TUTORIALS.get(file_name, "")


class Scene:
    """Holds the game world and switches between menu, levels and editor."""

    story_levels_orders = STORY_LEVELS_ORDERS

    def __init__(
        self,
        backend: Backend,
        sounds: Sounds | None = None,
        level_root: Path | str = LEVEL_ROOT,
    ) -> None:
        self.backend = backend
        self.sounds = sounds if sounds is not None else Sounds()
        self.level_root = Path(level_root)
        self.registry = Registry()
        self.mask = int(DEFAULT_MASK)
        self.unloading_page = False
        self.loading_page = False
        self.should_close = False
        self.load_page_callback: Callable[[], None] | None = None
        self.editor: Editor | None = None
        self.level: Level | None = None
        self.time_before_next_stage = 0.0
        self.goto_menu()

    def create_entity(self) -> Entity:
        return Entity(self.registry.create(), self.registry)

    def update(self) -> None:
        """Run one frame of game logic."""
        if self.loading_page or self.unloading_page:
            systems.page_transition(self)
        else:
            systems.check_win(self)
            systems.damage_paddle(self)
            systems.launch_ball(self)
            systems.switch_layer(self)
            systems.paddle_movement(self)
            systems.collision(self)
            if self.time_before_next_stage == 0.0:
                systems.integrate(self)
            systems.handle_mouse_click(self)
            if self.editor is not None:
                systems.edit(self)
            systems.watch(self)
        systems.music(self)

    def render(self) -> None:
        """Update the world and draw one frame."""
        self.update()
        self.backend.begin_frame()
        self.backend.clear(BLACK)
        systems.draw_2d(self)
        self.backend.end_frame()

    def _switch_page(self, load: Callable[[], None]) -> None:
        self.unloading_page = True
        self.load_page_callback = load

    def _reset(self) -> None:
        self.registry.clear()
        self.clean()

    def goto_menu(self) -> None:
        def load() -> None:
            self._reset()
            self.level = Level("menu", False, self.level_root)
            self.level.load_file()
            self.level.setup_level(self)
            create_ball(self, Vector2(1200.0, 900.0), Vector2(-6.6, 0.0), 10.0)
            main_menu(self)

        self._switch_page(load)

    def goto_editor(self, file_name: str) -> None:
        def load() -> None:
            self._reset()
            _log.info("editing: %s", file_name)
            self.editor = Editor(file_name, self.level_root)
            self.editor.load_from_file(self)
            self.mask = int(GhostLayer.REAL)
            edit_panel(self)

        self._switch_page(load)

    def goto_level(self, file_name: str, is_custom: bool) -> None:
        def load() -> None:
            width = float(self.backend.width)
            self._reset()
            _log.info("playing level: %s, custom: %s", file_name, is_custom)
            self.level = Level(file_name, is_custom, self.level_root)
            self.level.load_file()
            self.level.setup_level(self)
            size = Vector2(200.0, 20.0)
            position = Vector2((width - 400.0) * 0.5 - size.x * 0.5, 1000.0)
            create_paddle(self, position, size, LIGHTGRAY)
            create_ball(self, Vector2(0.0, 0.0), Vector2(0.0, 0.0), 10.0)
            level_panel(self)
            if not is_custom:
                create_text(self, Vector2(50.0, 50.0), tutorial_text(file_name), WHITE, 30)

        self._switch_page(load)

    def goto_customs(self) -> None:
        def load() -> None:
            self._reset()
            select_custom_level(self)

        self._switch_page(load)

    def clean(self) -> None:
        """Drop the editor and level and reset per-page state."""
        self.editor = None
        self.level = None
        self.time_before_next_stage = 0.0
        self.mask = int(DEFAULT_MASK)

    def close(self) -> None:
        """Release the scene's resources."""
        self.clean()
        self.sounds.close()

    def __enter__(self) -> Scene:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()