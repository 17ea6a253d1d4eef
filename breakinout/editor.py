"""The level editor: a block brush and the custom level being edited."""

from __future__ import annotations

import logging
from pathlib import Path

from .components import BlockState, BlockType, GhostLayer, MouseHitBox, Position, RectangleShape
from .entities import BlockConfigFactory, create_block
from .geometry import Vector2, snap_to_nearest
from .level import LEVEL_ROOT, Level
from .registry import Entity
from .sounds import Notes

_log = logging.getLogger(__name__)

GRID = 10


class Editor:
    """Places, moves and deletes blocks of a custom level."""

    def __init__(self, file_name: str, root: Path | str = LEVEL_ROOT):
        self.factory = BlockConfigFactory()
        self.selected_block: Entity | None = None
        self.blocks: list[Entity] = []
        self.level = Level(file_name, True, root)
        self.editing_name = False

    def load_from_file(self, scene) -> None:
        self.level.load_file()
        self.blocks = self.level.setup_level(scene)

    def set_type(self, block_type: BlockType) -> None:
        self.factory.set_type(block_type)

    def set_layer(self, layer: GhostLayer) -> None:
        self.factory.set_layer(layer)
        if self.selected_block is not None:
            self.selected_block.get_component(BlockState).layer = layer

    def _index_of_selected(self) -> int | None:
        try:
            return self.blocks.index(self.selected_block)
        except ValueError:
            return None

    def set_position(self, position: Vector2) -> None:
        """Centre the selected block on ``position``, snapped to the grid."""
        if self.selected_block is not None:
            size = self.selected_block.get_component(RectangleShape).size
            position = Vector2(position.x - size.x / 2, position.y - size.y / 2)
            position = Vector2(
                float(snap_to_nearest(int(position.x), GRID)),
                float(snap_to_nearest(int(position.y), GRID)),
            )
            self.selected_block.get_component(Position).position = position
            self.selected_block.get_component(MouseHitBox).position = position
            index = self._index_of_selected()
            if index is not None:
                self.level.update_block_config_position(index, position)
        self.factory.set_position(position)

    def set_hit_sound(self, hit_sound: Notes) -> None:
        self.factory.set_sound(hit_sound)

    def create_block(self, scene) -> None:
        """Place a block from the brush and select it."""
        config = self.factory.create_config()
        block = create_block(scene, config)
        block.add_component(
            MouseHitBox(
                block.get_component(Position).position,
                block.get_component(RectangleShape).size,
                lambda: None,
            )
        )
        self.selected_block = block
        self.blocks.append(block)
        self.level.add_block_config(config)
        scene.sounds.play_sound(config.hit_sound)

    def select_block(self, entity: Entity) -> None:
        self.selected_block = entity

    def unselect_block(self) -> None:
        self.selected_block = None

    def delete_selected_block(self, scene) -> None:
        if self.selected_block is None:
            return
        index = self._index_of_selected()
        if index is not None:
            self.level.remove_block_config(index)
            del self.blocks[index]
        scene.registry.destroy(self.selected_block)
        self.unselect_block()

    def save_level(self) -> None:
        self.level.save_file()
        _log.info("level saved: %s", self.level.path())

    def update_name(self, updated_name: str) -> None:
        self.level.update_name(updated_name)

    def level_name(self) -> str:
        return self.level.name()

    def hit_sound(self) -> Notes:
        return self.factory.hit_sound

    def block_type(self) -> BlockType:
        return self.factory.block_type