import pytest

from breakinout.backend import BLUE, GREEN, LIGHTGRAY, RED, WHITE, HeadlessBackend, MouseButton
from breakinout.components import (
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
from breakinout.entities import (
    BlockConfig,
    BlockConfigFactory,
    create_ball,
    create_block,
    create_button,
    create_paddle,
    create_panel,
    create_text,
    create_text_button,
)
from breakinout.geometry import Vector2
from breakinout.registry import Entity, Registry
from breakinout.sounds import Notes


class FakeScene:
    def __init__(self, mask=GhostLayer.REAL | GhostLayer.ONE):
        self.registry = Registry()
        self.backend = HeadlessBackend()
        self.mask = mask

    def create_entity(self):
        return Entity(self.registry.create(), self.registry)


@pytest.fixture
def scene():
    return FakeScene()


def test_factory_defaults():
    config = BlockConfigFactory().create_config()
    assert config.size == Vector2(100.0, 50.0)
    assert config.block_type == BlockType.WALL
    assert config.color == LIGHTGRAY
    assert config.layer == GhostLayer.REAL
    assert config.hit_sound == Notes.C3
    assert config.health == 1


@pytest.mark.parametrize(
    "block_type, color",
    [
        (BlockType.NORMAL, BLUE),
        (BlockType.WALL, LIGHTGRAY),
        (BlockType.BALLOON, GREEN),
        (BlockType.SPIKES, RED),
    ],
)
def test_set_type_picks_color(block_type, color):
    factory = BlockConfigFactory()
    factory.set_type(block_type)
    config = factory.create_config()
    assert config.block_type == block_type
    assert config.color == color


def test_factory_setters_reach_config():
    factory = BlockConfigFactory()
    factory.set_position(Vector2(30.0, 40.0))
    factory.set_layer(GhostLayer.THREE)
    factory.set_sound(Notes.A4)
    config = factory.create_config()
    assert config.position == Vector2(30.0, 40.0)
    assert config.layer == GhostLayer.THREE
    assert config.hit_sound == Notes.A4


def test_random_position_within_bounds():
    factory = BlockConfigFactory()
    for _ in range(50):
        factory.random_position(10.0, 20.0, 100.0, 200.0)
        assert 10.0 <= factory.position.x <= 20.0
        assert 100.0 <= factory.position.y <= 200.0


def test_create_ball(scene):
    ball = create_ball(scene, Vector2(1.0, 2.0), Vector2(3.0, 4.0), 10.0)
    assert ball.get_component(Position).position == Vector2(1.0, 2.0)
    assert ball.get_component(Velocity).velocity == Vector2(3.0, 4.0)
    assert ball.get_component(CircleShape).radius == 10.0
    assert ball.get_component(Displacement).displacement == Vector2(0.0, 0.0)


def test_create_block_starts_transparent(scene):
    config = BlockConfig(Vector2(5.0, 5.0), Vector2(100.0, 50.0), BLUE, BlockType.NORMAL, GhostLayer.ONE, Notes.E3)
    config.health = 5
    block = create_block(scene, config)
    state = block.get_component(BlockState)
    assert state.start_opacity == 0
    assert state.target_opacity == 255
    assert state.t == 0.0
    assert state.health == 1
    assert state.hit_sound == Notes.E3
    assert block.get_component(CollisionBox).size == Vector2(100.0, 50.0)
    assert block.get_component(RectangleShape).color == BLUE


def test_create_block_off_layer_is_dim(scene):
    config = BlockConfig(layer=GhostLayer.FOUR)
    state = create_block(scene, config).get_component(BlockState)
    assert state.target_opacity < 255


def test_create_paddle(scene):
    paddle = create_paddle(scene, Vector2(0.0, 1000.0), Vector2(200.0, 20.0), LIGHTGRAY)
    assert paddle.get_component(PaddleState).health == 3
    state = paddle.get_component(BlockState)
    assert state.block_type == BlockType.WALL
    assert state.layer == GhostLayer.REAL
    assert paddle.get_component(Velocity).velocity == Vector2(0.0, 0.0)
    assert paddle.get_component(RectangleShape).color == LIGHTGRAY


def test_create_paddle_default_color(scene):
    paddle = create_paddle(scene, Vector2(0.0, 0.0), Vector2(10.0, 10.0))
    assert paddle.get_component(RectangleShape).color == WHITE


def test_button_hover_and_click(scene):
    clicks = []
    button = create_button(
        scene, Vector2(100.0, 100.0), Vector2(50.0, 20.0), "Go", WHITE, 30,
        Vector2(5.0, 3.0), GREEN, lambda: clicks.append(1),
    )
    container = button.get_component(Container)
    assert container.background_color.a == 100
    assert button.get_component(Text).position == Vector2(105.0, 103.0)

    backend = scene.backend
    hit_box = button.get_component(MouseHitBox)
    backend.move_mouse(Vector2(110.0, 110.0))
    hit_box.check_on_hover_enter(backend)
    assert button.get_component(Container).background_color.a == 255
    backend.press_mouse(MouseButton.LEFT)
    hit_box.check_click(backend)
    assert clicks == [1]
    backend.move_mouse(Vector2(0.0, 0.0))
    hit_box.check_on_hover_leave(backend)
    assert button.get_component(Container).background_color.a == 100


def test_create_panel(scene):
    panel = create_panel(scene, Vector2(0.0, 0.0), Vector2(400.0, 1080.0), RED)
    container = panel.get_component(Container)
    assert container.background_color == RED
    assert container.size == Vector2(400.0, 1080.0)
    assert scene.registry.has(panel, Displacement)


def test_create_text(scene):
    entity = create_text(scene, Vector2(50.0, 50.0), "hello", WHITE, 30)
    text = entity.get_component(Text)
    assert text.text == "hello"
    assert text.font_size == 30
    assert entity.get_component(Position).position == Vector2(50.0, 50.0)


def test_create_text_button(scene):
    clicks = []
    entity = create_text_button(
        scene, Vector2(0.0, 0.0), Vector2(10.0, 10.0), "ok", WHITE, lambda: clicks.append(1)
    )
    assert entity.get_component(Text).font_size == 20
    backend = scene.backend
    backend.move_mouse(Vector2(5.0, 5.0))
    backend.press_mouse(MouseButton.LEFT)
    entity.get_component(MouseHitBox).check_click(backend)
    assert clicks == [1]