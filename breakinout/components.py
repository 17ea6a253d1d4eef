"""Component data attached to entities: physics, block state and UI pieces."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field

from .backend import BLANK, WHITE, Backend, Color, MouseButton
from .bits import clear_bit, get_bit_index, is_bit_set, linear_interpolation
from .geometry import Vector2
from .sounds import Notes


class BlockType(enum.IntEnum):
    """How a block reacts when the ball hits it."""

    NORMAL = 0
    WALL = 1
    BALLOON = 2
    SPIKES = 3


class GhostLayer(enum.IntEnum):
    """The layer a block lives on, one bit each."""

    REAL = 1 << 0
    ONE = 1 << 1
    TWO = 1 << 2
    THREE = 1 << 3
    FOUR = 1 << 4
    FIVE = 1 << 5
    SIX = 1 << 6
    SEVEN = 1 << 7


@dataclass
class BlockState:
    """Type, layer, sound and fading opacity of a block."""

    block_type: BlockType = BlockType.NORMAL
    layer: GhostLayer = GhostLayer.REAL
    hit_sound: Notes = Notes.C3
    health: int = 1
    target_opacity: int = 255
    start_opacity: int = 255
    t: float = 1.0

    def step(self, delta_time: float) -> None:
        """Advance the opacity transition, stopping at its end."""
        if self.t < 1.0:
            self.t = min(self.t + delta_time, 1.0)

    def set_color_transition(self, mask: int, new_start_opacity: int) -> None:
        """Start fading towards the opacity this block has under ``mask``."""
        self.start_opacity = new_start_opacity
        if not is_bit_set(mask, self.layer):
            layer_index = get_bit_index(self.layer)
            selected_layer = get_bit_index(clear_bit(mask, GhostLayer.REAL))
            diff = abs(layer_index - selected_layer)
            self.target_opacity = max(0, min(70 - diff * 20, 255))
        else:
            self.target_opacity = 255
        self.t = 0.0

    def current_opacity(self) -> int:
        """Opacity at the current point of the transition."""
        return int(linear_interpolation(self.start_opacity, self.target_opacity, self.t))


@dataclass
class CollisionBox:
    size: Vector2


@dataclass
class Displacement:
    """Offset applied while a page slides in or out, and where it slides from."""

    displacement: Vector2 = field(default_factory=Vector2)
    origin: Vector2 = field(default_factory=Vector2)

    @classmethod
    def from_position(
        cls, position: Vector2, screen_width: float, screen_height: float
    ) -> Displacement:
        """Slide from off-screen, away from the centre through ``position``."""
        magnitude = Vector2(screen_width, screen_height).length()
        direction = Vector2(
            position.x - screen_width * 0.5, position.y - screen_height * 0.5
        ).normalized()
        return cls(origin=direction.scale(magnitude))


@dataclass
class PaddleState:
    health: int = 3
    started: bool = False
    aim_direction: Vector2 = field(default_factory=lambda: Vector2(0.0, -1.0))
    angle: float = 0.0


@dataclass
class Position:
    position: Vector2


@dataclass
class Velocity:
    velocity: Vector2


@dataclass
class CircleShape:
    radius: float
    color: Color = WHITE

    def draw(self, backend: Backend, position: Vector2) -> None:
        backend.draw_circle(position, self.radius, self.color)


@dataclass
class RectangleShape:
    size: Vector2
    color: Color = WHITE

    def draw(self, backend: Backend, position: Vector2, color: Color | None = None) -> None:
        """Fill the rectangle, in ``color`` if given, else in its own colour."""
        backend.draw_rectangle(position, self.size, self.color if color is None else color)

    def draw_outline(
        self,
        backend: Backend,
        position: Vector2,
        thickness: float = 2.0,
        color: Color = WHITE,
    ) -> None:
        backend.draw_rectangle_lines(position, self.size, thickness, color)


@dataclass
class Watcher:
    """An action run once per frame."""

    action: Callable[[], None] | None = None


@dataclass
class Container:
    position: Vector2
    size: Vector2
    background_color: Color
    border_color: Color = BLANK

    def draw(self, backend: Backend, displacement: Vector2) -> None:
        position = self.position + displacement
        backend.draw_rectangle(position, self.size, self.background_color)
        backend.draw_rectangle_lines(position, self.size, 2.0, self.border_color)


@dataclass
class MouseHitBox:
    """A clickable, hoverable area."""

    position: Vector2
    size: Vector2
    on_click: Callable[[], None] | None = None
    on_hover_enter: Callable[[], None] | None = None
    on_hover_leave: Callable[[], None] | None = None
    hovering: bool = False

    def is_mouse_over(self, mouse_position: Vector2) -> bool:
        return (
            self.position.x <= mouse_position.x <= self.position.x + self.size.x
            and self.position.y <= mouse_position.y <= self.position.y + self.size.y
        )

    def check_click(self, backend: Backend) -> None:
        if not self.is_mouse_over(backend.mouse_position()):
            return
        if backend.is_mouse_pressed(MouseButton.LEFT) and self.on_click:
            self.on_click()

    def check_on_hover_enter(self, backend: Backend) -> None:
        if self.is_mouse_over(backend.mouse_position()) and not self.hovering:
            self.hovering = True
            if self.on_hover_enter:
                self.on_hover_enter()

    def check_on_hover_leave(self, backend: Backend) -> None:
        if not self.is_mouse_over(backend.mouse_position()) and self.hovering:
            self.hovering = False
            if self.on_hover_leave:
                self.on_hover_leave()


@dataclass
class Text:
    position: Vector2
    text: str
    color: Color
    font_size: int

    def draw(self, backend: Backend, displacement: Vector2) -> None:
        # Both axes follow the horizontal displacement, as the game always has.
        backend.draw_text(
            self.text,
            int(self.position.x + displacement.x),
            int(self.position.y + displacement.x),
            self.font_size,
            self.color,
        )