"""Block configurations and factories that assemble the game's entities."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from .backend import BLANK, BLUE, GREEN, LIGHTGRAY, RED, WHITE, Color
from .components import (
    BlockState,
    BlockType,
    CircleShape,
    CollisionBox,
    Container,
    Displacement,
    GhostLayer,
    MouseHitBox,
    PaddleState,
    Position,
    RectangleShape,
    Text,
    Velocity,
)
from .geometry import Vector2, random_float
from .registry import Entity
from .sounds import Notes

_TYPE_COLORS = {
    BlockType.NORMAL: BLUE,
    BlockType.WALL: LIGHTGRAY,
    BlockType.BALLOON: GREEN,
    BlockType.SPIKES: RED,
}


@dataclass
class BlockConfig:
    """Everything needed to place one block in a level."""

    position: Vector2 = field(default_factory=Vector2)
    size: Vector2 = field(default_factory=Vector2)
    color: Color = WHITE
    block_type: BlockType = BlockType.NORMAL
    layer: GhostLayer = GhostLayer.REAL
    hit_sound: Notes = Notes.C3
    health: int = 1


@dataclass
class BlockConfigFactory:
    """The editor's current brush: settings for the next block placed."""

    default_size: Vector2 = field(default_factory=lambda: Vector2(100.0, 50.0))
    position: Vector2 = field(default_factory=Vector2)
    layer: GhostLayer = GhostLayer.REAL
    block_type: BlockType = BlockType.WALL
    hit_sound: Notes = Notes.C3
    color: Color = LIGHTGRAY

    def create_config(self) -> BlockConfig:
        return BlockConfig(
            self.position,
            self.default_size,
            self.color,
            self.block_type,
            self.layer,
            self.hit_sound,
        )

    def set_position(self, position: Vector2) -> None:
        self.position = position

    def set_type(self, block_type: BlockType) -> None:
        """Select a block type and the colour that goes with it."""
        self.block_type = block_type
        self.color = _TYPE_COLORS.get(block_type, self.color)

    def set_layer(self, layer: GhostLayer) -> None:
        self.layer = layer

    def set_sound(self, hit_sound: Notes) -> None:
        self.hit_sound = hit_sound

    def random_position(self, min_x: float, max_x: float, min_y: float, max_y: float) -> None:
        self.position = Vector2(random_float(min_x, max_x), random_float(min_y, max_y))


def _displacement(scene, position: Vector2) -> Displacement:
    backend = scene.backend
    return Displacement.from_position(position, backend.width, backend.height)


def create_ball(scene, position: Vector2, velocity: Vector2, radius: float) -> Entity:
    ball = scene.create_entity()
    ball.add_component(Position(position))
    ball.add_component(Velocity(velocity))
    ball.add_component(CircleShape(radius))
    ball.add_component(_displacement(scene, position))
    return ball


def create_block(scene, config: BlockConfig) -> Entity:
    """A block fading in from transparent; it always starts with one hit point."""
    block = scene.create_entity()
    block.add_component(Position(config.position))
    block.add_component(RectangleShape(config.size, config.color))
    block.add_component(CollisionBox(config.size))
    state = BlockState(config.block_type, config.layer, config.hit_sound)
    state.set_color_transition(scene.mask, 0)
    block.add_component(state)
    block.add_component(_displacement(scene, config.position))
    return block


def create_paddle(scene, position: Vector2, size: Vector2, color: Color = WHITE) -> Entity:
    paddle = scene.create_entity()
    paddle.add_component(Position(position))
    paddle.add_component(Velocity(Vector2(0.0, 0.0)))
    paddle.add_component(RectangleShape(size, color))
    paddle.add_component(CollisionBox(size))
    paddle.add_component(PaddleState())
    paddle.add_component(BlockState(BlockType.WALL, GhostLayer.REAL, Notes.C3))
    paddle.add_component(_displacement(scene, position))
    return paddle


def create_button(
    scene,
    position: Vector2,
    size: Vector2,
    text: str,
    text_color: Color,
    font_size: int,
    padding: Vector2,
    box_color: Color,
    on_click: Callable[[], None] | None,
) -> Entity:
    """A boxed label that lights up while hovered and calls ``on_click``."""
    button = scene.create_entity()

    def set_alpha(alpha: int) -> None:
        container = button.get_component(Container)
        container.background_color = container.background_color.with_alpha(alpha)

    button.add_component(
        MouseHitBox(position, size, on_click, lambda: set_alpha(255), lambda: set_alpha(100))
    )
    button.add_component(Container(position, size, box_color.with_alpha(100), BLANK))
    text_position = position + padding
    button.add_component(Text(text_position, text, text_color, font_size))
    button.add_component(_displacement(scene, text_position))
    return button


def create_panel(scene, position: Vector2, size: Vector2, color: Color) -> Entity:
    panel = scene.create_entity()
    panel.add_component(Container(position, size, color))
    panel.add_component(_displacement(scene, position))
    return panel


def create_text(scene, position: Vector2, text: str, color: Color, font_size: int) -> Entity:
    entity = scene.create_entity()
    entity.add_component(Position(position))
    entity.add_component(Text(position, text, color, font_size))
    entity.add_component(_displacement(scene, position))
    return entity


def create_text_button(
    scene,
    position: Vector2,
    size: Vector2,
    text: str,
    text_color: Color,
    on_click: Callable[[], None] | None,
) -> Entity:
    button = scene.create_entity()
    button.add_component(MouseHitBox(position, size, on_click))
    button.add_component(Text(position, text, text_color, 20))
    button.add_component(_displacement(scene, position))
    return button