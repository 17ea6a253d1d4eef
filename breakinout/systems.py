"""Per-frame game systems: physics, input, transitions, drawing and win/lose rules."""

from __future__ import annotations

import math
from dataclasses import dataclass
from weakref import WeakKeyDictionary

from .backend import WHITE, Key, MouseButton
from .bits import bezier_cubic, is_bit_set, set_bit
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
    Watcher,
)
from .entities import create_ball, create_text
from .geometry import Vector2, check_collision, get_collision_offset
from .registry import Entity

PANE_WIDTH = 400
WIN_DELAY = 5.0
MUSIC_START = 1.70
MUSIC_PERIOD = 6.0
LAUNCH_SPEED = 10.0
PADDLE_SPEED = 10.0
MAX_AIM_ANGLE = 45.0
BALL_OFFSET = Vector2(100.0, -11.0)

_BALL = (Position, CircleShape, Velocity)
_BREAKABLE = (BlockType.NORMAL, BlockType.BALLOON)
_LAYER_KEYS = (
    (Key.ONE, GhostLayer.ONE),
    (Key.TWO, GhostLayer.TWO),
    (Key.THREE, GhostLayer.THREE),
    (Key.FOUR, GhostLayer.FOUR),
    (Key.FIVE, GhostLayer.FIVE),
    (Key.SIX, GhostLayer.SIX),
    (Key.SEVEN, GhostLayer.SEVEN),
)


@dataclass
class _Timers:
    transition: float = 0.0
    music: float = MUSIC_START


_timers: WeakKeyDictionary = WeakKeyDictionary()


def _timers_of(scene) -> _Timers:
    timers = _timers.get(scene)
    if timers is None:
        timers = _timers[scene] = _Timers()
    return timers


def count_breakable(scene) -> int:
    """Number of blocks that still have to be broken to win."""
    return sum(
        1 for _, state in scene.registry.view(BlockState) if state.block_type in _BREAKABLE
    )


def check_win(scene) -> None:
    """Announce a win once no breakable block is left, then move on after a delay."""
    level = scene.level
    if level is None or level.name() == "menu":
        return
    if count_breakable(scene) != 0:
        return

    create_text(scene, Vector2(300.0, 200.0), "YOU WON!!", WHITE, 150)

    scene.time_before_next_stage += scene.backend.frame_time
    if scene.time_before_next_stage < WIN_DELAY:
        return
    if level.is_custom:
        scene.goto_customs()
        return
    orders = list(scene.story_levels_orders)
    name = level.name()
    if name in orders and orders.index(name) + 1 < len(orders):
        scene.goto_level(orders[orders.index(name) + 1], False)
    else:
        scene.goto_menu()


def _bounce_ball(
    position: Position, velocity: Velocity, radius: float, box_pos: Vector2, box_size: Vector2
) -> None:
    offset = get_collision_offset(position.position, radius, box_pos, box_size)
    if abs(offset.x) < abs(offset.y):
        offset = Vector2(offset.x, 0.0)
    else:
        offset = Vector2(0.0, offset.y)
    position.position = position.position + offset
    vx, vy = velocity.velocity.x, velocity.velocity.y
    if offset.x != 0.0:
        vx = -vx
    if offset.y != 0.0:
        vy = -vy
    velocity.velocity = Vector2(vx, vy)


def _damage_block(scene, state: BlockState, block: int) -> None:
    if state.health > 1:
        state.health -= 1
    else:
        scene.registry.destroy(block)


def collision(scene) -> None:
    """Bounce balls off the screen edges and blocks, and apply block effects."""
    registry = scene.registry
    width = scene.backend.width - PANE_WIDTH
    height = scene.backend.height

    for ball, position, shape, velocity in registry.view(*_BALL):
        pos, vel = position.position, velocity.velocity
        if (pos.x < 0 and vel.x < 0) or (pos.x > width and vel.x > 0):
            velocity.velocity = Vector2(-vel.x, vel.y)
        vel = velocity.velocity
        if pos.y < 0 and vel.y < 0:
            velocity.velocity = Vector2(vel.x, -vel.y)
        vel = velocity.velocity
        if pos.y > height and vel.y > 0:
            registry.destroy(ball)
            continue

        for block, block_pos, box, state in registry.view(Position, CollisionBox, BlockState):
            if block == ball:
                continue
            if not state.layer & scene.mask:
                continue
            if not check_collision(position.position, shape.radius, block_pos.position, box.size):
                continue

            if state.block_type is BlockType.WALL:
                _bounce_ball(position, velocity, shape.radius, block_pos.position, box.size)
            elif state.block_type is BlockType.NORMAL:
                _bounce_ball(position, velocity, shape.radius, block_pos.position, box.size)
                _damage_block(scene, state, block)
            elif state.block_type is BlockType.BALLOON:
                _damage_block(scene, state, block)
            elif state.block_type is BlockType.SPIKES:
                registry.destroy(ball)
            scene.sounds.play_sound(state.hit_sound)
            break


def _draw_arrow(scene) -> None:
    backend = scene.backend
    for _, position, _shape, state in scene.registry.view(Position, RectangleShape, PaddleState):
        if state.started:
            continue
        pos = position.position
        for step in range(1, 8):
            distance = step * 15.0
            x = pos.x + BALL_OFFSET.x + state.aim_direction.x * distance
            y = pos.y + BALL_OFFSET.y + state.aim_direction.y * distance
            backend.draw_circle(Vector2(float(int(x)), float(int(y))), 2, WHITE)


def _draw_circles(scene) -> None:
    for _, position, circle, displacement in scene.registry.view(
        Position, CircleShape, Displacement
    ):
        circle.draw(scene.backend, position.position + displacement.displacement)


def _draw_rectangles(scene) -> None:
    backend = scene.backend
    step_time = 10.0 * backend.frame_time
    view = list(scene.registry.view(Position, RectangleShape, BlockState, Displacement))
    # Blocks of hidden layers first, so the active layer is drawn over them.
    for _, position, rectangle, state, displacement in view:
        if is_bit_set(scene.mask, state.layer):
            continue
        color = rectangle.color.with_alpha(state.current_opacity())
        rectangle.draw(backend, position.position + displacement.displacement, color)
        state.step(step_time)
    for _, position, rectangle, state, displacement in view:
        if not is_bit_set(scene.mask, state.layer):
            continue
        where = position.position + displacement.displacement
        rectangle.draw(backend, where, rectangle.color.with_alpha(state.current_opacity()))
        state.step(step_time)
        if state.t >= 1.0:
            rectangle.draw_outline(backend, where, 2, WHITE)


def _draw_containers(scene) -> None:
    for _, container, displacement in scene.registry.view(Container, Displacement):
        container.draw(scene.backend, displacement.displacement)


def _draw_texts(scene) -> None:
    for _, text, displacement in scene.registry.view(Text, Displacement):
        text.draw(scene.backend, displacement.displacement)


def draw_2d(scene) -> None:
    """Draw blocks, balls, panels and texts, plus the aim arrow outside transitions."""
    _draw_rectangles(scene)
    _draw_circles(scene)
    _draw_containers(scene)
    _draw_texts(scene)
    if scene.unloading_page or scene.loading_page:
        return
    _draw_arrow(scene)


def integrate(scene) -> None:
    """Move everything with a velocity, scaled to a 60 fps step."""
    delta = scene.backend.frame_time * 60
    for _, position, velocity in scene.registry.view(Position, Velocity):
        position.position = position.position + velocity.velocity.scale(delta)


def paddle_movement(scene) -> None:
    """Steer the paddle with the arrow keys, keeping it on screen."""
    backend = scene.backend
    for _, position, _state, velocity, shape in scene.registry.view(
        Position, PaddleState, Velocity, RectangleShape
    ):
        pos = position.position
        if backend.is_key_down(Key.LEFT) and pos.x > 0:
            vx = -PADDLE_SPEED
        elif backend.is_key_down(Key.RIGHT) and pos.x + shape.size.x < backend.width:
            vx = PADDLE_SPEED
        else:
            vx = 0.0
        velocity.velocity = Vector2(vx, velocity.velocity.y)


def page_transition(scene) -> None:
    """Slide the page out, swap it through the load callback, then slide it in."""
    timers = _timers_of(scene)
    views = lambda: scene.registry.view(Displacement)  # noqa: E731

    if timers.transition >= 1.0:
        if scene.unloading_page:
            callback = scene.load_page_callback
            if callback:
                callback()
            scene.load_page_callback = None
            scene.loading_page = True
            scene.unloading_page = False
        elif scene.loading_page:
            scene.loading_page = False
            for _, displacement in views():
                displacement.displacement = Vector2()
        timers.transition = 0.0

    if scene.loading_page:
        value = 1.0 - timers.transition
    elif scene.unloading_page:
        value = timers.transition
    else:
        return

    magnitude = bezier_cubic(0.0, 0.0, 0.1, 1.0, value)
    for _, displacement in views():
        displacement.displacement = displacement.origin.scale(magnitude)

    timers.transition += scene.backend.frame_time * 2


def switch_layer(scene) -> None:
    """Change the visible layer with the number keys and start the fades."""
    backend = scene.backend
    selected = None
    if backend.is_key_pressed(Key.ZERO) and scene.editor is not None:
        selected = GhostLayer.REAL
    for key, layer in _LAYER_KEYS:
        if backend.is_key_pressed(key):
            selected = layer
    if selected is None:
        return

    if scene.editor is None:
        scene.mask = set_bit(selected, GhostLayer.REAL)
    else:
        scene.mask = int(selected)
        scene.editor.set_layer(selected)

    for _, state in scene.registry.view(BlockState):
        state.set_color_transition(scene.mask, state.current_opacity())


def handle_mouse_click(scene) -> None:
    """Dispatch clicks and hover changes to every hit box."""
    for _, hit_box in scene.registry.view(MouseHitBox):
        if scene.unloading_page:
            return
        hit_box.check_click(scene.backend)
        hit_box.check_on_hover_enter(scene.backend)
        hit_box.check_on_hover_leave(scene.backend)


def _block_under_mouse(scene, mouse: Vector2) -> tuple[int, BlockState] | None:
    for entity, hit_box, state in scene.registry.view(MouseHitBox, BlockState):
        if hit_box.is_mouse_over(mouse) and is_bit_set(scene.mask, state.layer):
            return entity, state
    return None


def edit(scene) -> None:
    """Editor mouse handling: place, drag and delete blocks."""
    backend = scene.backend
    editor = scene.editor
    play_width = backend.width - PANE_WIDTH

    if backend.is_mouse_pressed(MouseButton.LEFT):
        mouse = backend.mouse_position()
        if mouse.x > play_width:
            return
        hit = _block_under_mouse(scene, mouse)
        if hit is None:
            editor.create_block(scene)
        else:
            entity, state = hit
            editor.select_block(Entity(entity, scene.registry))
            scene.sounds.play_sound(state.hit_sound)
    if backend.is_mouse_down(MouseButton.LEFT):
        mouse = backend.mouse_position()
        clamped = Vector2(
            min(max(mouse.x, 0.0), float(play_width)),
            min(max(mouse.y, 0.0), float(backend.height)),
        )
        editor.set_position(clamped)
    if backend.is_mouse_released(MouseButton.LEFT):
        editor.unselect_block()
    if backend.is_mouse_down(MouseButton.RIGHT):
        hit = _block_under_mouse(scene, backend.mouse_position())
        if hit is not None:
            editor.select_block(Entity(hit[0], scene.registry))
            editor.delete_selected_block(scene)


def watch(scene) -> None:
    """Run every watcher's action."""
    for _, watcher in list(scene.registry.view(Watcher)):
        if watcher.action:
            watcher.action()


def launch_ball(scene) -> None:
    """Hold the ball on the paddle, aim with X/C and shoot with space."""
    backend = scene.backend
    registry = scene.registry
    for _, position, state in registry.view(Position, PaddleState):
        paddle_pos = position.position
        if not state.started:
            for _, ball_pos, _shape, _vel in registry.view(*_BALL):
                ball_pos.position = paddle_pos + BALL_OFFSET
        if backend.is_key_down(Key.SPACE):
            for _, _pos, _shape, velocity in registry.view(*_BALL):
                velocity.velocity = state.aim_direction.scale(LAUNCH_SPEED)
                state.started = True
        for key, step in ((Key.X, -1.0), (Key.C, 1.0)):
            if backend.is_key_down(key):
                state.angle = min(max(state.angle + step, -MAX_AIM_ANGLE), MAX_AIM_ANGLE)
                radians = math.radians(state.angle)
                state.aim_direction = Vector2(math.sin(radians), -math.cos(radians))


def damage_paddle(scene) -> None:
    """Lose a life when no ball is left; serve a new ball or announce the loss."""
    registry = scene.registry
    for _, state in registry.view(PaddleState):
        if state.health == 0:
            return
        if any(True for _ in registry.view(*_BALL)):
            break
        state.health -= 1
        if state.health == 0:
            create_text(scene, Vector2(300.0, 200.0), "YOU LOSE!!", WHITE, 150)
            return
        state.started = False
        create_ball(scene, Vector2(0.0, 0.0), Vector2(0.0, 0.0), 10)


def music(scene) -> None:
    """On the main menu, send a ball through the title at a steady beat."""
    timers = _timers_of(scene)
    level = scene.level
    if level is None or level.is_custom or level.name() != "menu":
        timers.music = MUSIC_START
        return
    timers.music += scene.backend.frame_time
    if timers.music >= MUSIC_PERIOD:
        create_ball(scene, Vector2(770.0, 1000.0), Vector2(-6.73, -6.73), 10.0)
        timers.music = 0.0