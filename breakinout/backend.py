"""Drawing and input backends: a recording headless one and a pygame window."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import NamedTuple

from .geometry import Vector2


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    def with_alpha(self, alpha: int) -> Color:
        """Same colour with a different alpha channel."""
        return replace(self, a=int(alpha) & 0xFF)


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
LIGHTGRAY = Color(200, 200, 200)
GRAY = Color(130, 130, 130)
DARKGRAY = Color(80, 80, 80)
BLUE = Color(0, 121, 241)
GREEN = Color(0, 228, 48)
RED = Color(230, 41, 55)
BLANK = Color(0, 0, 0, 0)


class Key(enum.Enum):
    """Keyboard keys the game reacts to."""

    LEFT = "left"
    RIGHT = "right"
    SPACE = "space"
    X = "x"
    C = "c"
    ZERO = "0"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    BACKSPACE = "backspace"
    ENTER = "enter"
    ESCAPE = "escape"


class MouseButton(enum.Enum):
    """Mouse buttons the game reacts to."""

    LEFT = "left"
    RIGHT = "right"


class DrawCommand(NamedTuple):
    """One recorded drawing operation."""

    kind: str
    color: Color
    params: tuple


class Backend:
    """Input state and a per-frame display list shared by all backends."""

    def __init__(self, width: int = 1920, height: int = 1080, frame_time: float = 1 / 60):
        self.width = width
        self.height = height
        self.frame_time = frame_time
        self.close_requested = False
        self.commands: list[DrawCommand] = []
        self._keys_down: set[Key] = set()
        self._keys_pressed: set[Key] = set()
        self._mouse_down: set[MouseButton] = set()
        self._mouse_pressed: set[MouseButton] = set()
        self._mouse_released: set[MouseButton] = set()
        self._mouse = Vector2()
        self._chars: list[str] = []

    def begin_frame(self) -> None:
        """Start a new frame with an empty display list."""
        self.commands = []

    def end_frame(self) -> None:
        """Finish the frame and forget this frame's press and release edges."""
        self._keys_pressed.clear()
        self._mouse_pressed.clear()
        self._mouse_released.clear()
        self._chars.clear()

    def is_key_down(self, key: Key) -> bool:
        return key in self._keys_down

    def is_key_pressed(self, key: Key) -> bool:
        return key in self._keys_pressed

    def is_mouse_pressed(self, button: MouseButton) -> bool:
        return button in self._mouse_pressed

    def is_mouse_down(self, button: MouseButton) -> bool:
        return button in self._mouse_down

    def is_mouse_released(self, button: MouseButton) -> bool:
        return button in self._mouse_released

    def mouse_position(self) -> Vector2:
        return self._mouse

    def pop_chars(self) -> str:
        """Return the characters typed this frame and forget them."""
        text = "".join(self._chars)
        self._chars.clear()
        return text

    def should_close(self) -> bool:
        return self.close_requested

    def clear(self, color: Color) -> None:
        self.commands.append(DrawCommand("clear", color, ()))

    def draw_circle(self, center: Vector2, radius: float, color: Color) -> None:
        self.commands.append(DrawCommand("circle", color, (center, radius)))

    def draw_rectangle(self, position: Vector2, size: Vector2, color: Color) -> None:
        self.commands.append(DrawCommand("rectangle", color, (position, size)))

    def draw_rectangle_lines(
        self, position: Vector2, size: Vector2, thickness: float, color: Color
    ) -> None:
        self.commands.append(DrawCommand("rectangle_lines", color, (position, size, thickness)))

    def draw_text(self, text: str, x: int, y: int, font_size: int, color: Color) -> None:
        self.commands.append(DrawCommand("text", color, (text, int(x), int(y), font_size)))


class HeadlessBackend(Backend):
    """A backend without a window whose input is driven by method calls."""

    def press_key(self, key: Key) -> None:
        self._keys_down.add(key)
        self._keys_pressed.add(key)

    def release_key(self, key: Key) -> None:
        self._keys_down.discard(key)

    def press_mouse(self, button: MouseButton) -> None:
        self._mouse_down.add(button)
        self._mouse_pressed.add(button)

    def release_mouse(self, button: MouseButton) -> None:
        self._mouse_down.discard(button)
        self._mouse_released.add(button)

    def move_mouse(self, position: Vector2) -> None:
        self._mouse = position

    def type_text(self, text: str) -> None:
        self._chars.extend(text)


def _rgba(color: Color) -> tuple[int, int, int, int]:
    return (color.r, color.g, color.b, color.a)


class PygameBackend(Backend):
    """A window drawn and polled through pygame."""

    def __init__(
        self,
        width: int = 1920,
        height: int = 1080,
        title: str = "Break In & Out",
        fps: int = 60,
    ):
        super().__init__(width, height, 1 / fps)
        import pygame

        self._pg = pygame
        pygame.init()
        self._screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        self._clock = pygame.time.Clock()
        self._fps = fps
        self._fonts: dict[int, object] = {}
        self._key_map = {
            pygame.K_LEFT: Key.LEFT,
            pygame.K_RIGHT: Key.RIGHT,
            pygame.K_SPACE: Key.SPACE,
            pygame.K_x: Key.X,
            pygame.K_c: Key.C,
            pygame.K_0: Key.ZERO,
            pygame.K_1: Key.ONE,
            pygame.K_2: Key.TWO,
            pygame.K_3: Key.THREE,
            pygame.K_4: Key.FOUR,
            pygame.K_5: Key.FIVE,
            pygame.K_6: Key.SIX,
            pygame.K_7: Key.SEVEN,
            pygame.K_BACKSPACE: Key.BACKSPACE,
            pygame.K_RETURN: Key.ENTER,
            pygame.K_ESCAPE: Key.ESCAPE,
        }
        self._button_map = {1: MouseButton.LEFT, 3: MouseButton.RIGHT}

    def begin_frame(self) -> None:
        super().begin_frame()
        pg = self._pg
        for event in pg.event.get():
            if event.type == pg.QUIT:
                self.close_requested = True
            elif event.type == pg.KEYDOWN:
                key = self._key_map.get(event.key)
                if key is not None:
                    self._keys_down.add(key)
                    self._keys_pressed.add(key)
                # Escape also closes the window.
                if key is Key.ESCAPE:
                    self.close_requested = True
            elif event.type == pg.KEYUP:
                key = self._key_map.get(event.key)
                if key is not None:
                    self._keys_down.discard(key)
            elif event.type == pg.TEXTINPUT:
                self._chars.extend(event.text)
            elif event.type == pg.MOUSEBUTTONDOWN:
                button = self._button_map.get(event.button)
                if button is not None:
                    self._mouse_down.add(button)
                    self._mouse_pressed.add(button)
            elif event.type == pg.MOUSEBUTTONUP:
                button = self._button_map.get(event.button)
                if button is not None:
                    self._mouse_down.discard(button)
                    self._mouse_released.add(button)
        x, y = pg.mouse.get_pos()
        self._mouse = Vector2(float(x), float(y))

    def end_frame(self) -> None:
        for command in self.commands:
            self._render(command)
        self._pg.display.flip()
        self.frame_time = self._clock.tick(self._fps) / 1000.0
        super().end_frame()

    def close(self) -> None:
        """Shut the window down."""
        self._pg.quit()

    def __enter__(self) -> PygameBackend:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _font(self, size: int):
        font = self._fonts.get(size)
        if font is None:
            font = self._pg.font.Font(None, size)
            self._fonts[size] = font
        return font

    def _surface(self, width: float, height: float):
        return self._pg.Surface((max(int(width), 1), max(int(height), 1)), self._pg.SRCALPHA)

    def _render(self, command: DrawCommand) -> None:
        pg = self._pg
        color = command.color
        if command.kind == "clear":
            self._screen.fill(_rgba(color)[:3])
            return
        if color.a == 0:
            return
        if command.kind == "circle":
            center, radius = command.params
            r = max(int(radius), 1)
            surface = self._surface(2 * r + 1, 2 * r + 1)
            pg.draw.circle(surface, _rgba(color), (r, r), r)
            self._screen.blit(surface, (int(center.x) - r, int(center.y) - r))
        elif command.kind == "rectangle":
            position, size = command.params
            if size.x <= 0 or size.y <= 0:
                return
            surface = self._surface(size.x, size.y)
            surface.fill(_rgba(color))
            self._screen.blit(surface, (int(position.x), int(position.y)))
        elif command.kind == "rectangle_lines":
            position, size, thickness = command.params
            if size.x <= 0 or size.y <= 0:
                return
            surface = self._surface(size.x, size.y)
            pg.draw.rect(surface, _rgba(color), surface.get_rect(), width=max(int(thickness), 1))
            self._screen.blit(surface, (int(position.x), int(position.y)))
        elif command.kind == "text":
            text, x, y, font_size = command.params
            if not text:
                return
            image = self._font(font_size).render(text, True, _rgba(color)[:3])
            image.set_alpha(color.a)
            self._screen.blit(image, (x, y))