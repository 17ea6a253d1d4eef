"""Level files: a block count followed by fixed-size block records."""

from __future__ import annotations

import logging
import struct
from collections.abc import Iterable
from pathlib import Path

from .backend import Color
from .components import BlockType, GhostLayer, MouseHitBox, Position, RectangleShape
from .entities import BlockConfig, create_block
from .geometry import Vector2
from .registry import Entity
from .sounds import Notes

LEVEL_FILE_EXTENSION = ".lvl"
LEVEL_ROOT = Path("levels")
STORY_LEVEL_DIRECTORY = LEVEL_ROOT / "story"
CUSTOM_LEVEL_DIRECTORY = LEVEL_ROOT / "custom"

_log = logging.getLogger(__name__)

_COUNT = struct.Struct("<Q")
# position, size, RGBA colour, type, layer, hit sound, health
_BLOCK = struct.Struct("<4f4B4i")


def encode_blocks(blocks: Iterable[BlockConfig]) -> bytes:
    """Serialise block configurations into the level file format."""
    configs = list(blocks)
    parts = [_COUNT.pack(len(configs))]
    for config in configs:
        parts.append(
            _BLOCK.pack(
                config.position.x,
                config.position.y,
                config.size.x,
                config.size.y,
                config.color.r,
                config.color.g,
                config.color.b,
                config.color.a,
                int(config.block_type),
                int(config.layer),
                int(config.hit_sound),
                config.health,
            )
        )
    return b"".join(parts)


def decode_blocks(data: bytes) -> list[BlockConfig]:
    """Parse the level file format; raise ValueError on malformed data."""
    if len(data) < _COUNT.size:
        raise ValueError("level data too short for a block count")
    (count,) = _COUNT.unpack_from(data)
    end = _COUNT.size + count * _BLOCK.size
    if len(data) < end:
        raise ValueError(f"level data truncated: {count} blocks announced")
    blocks = []
    for px, py, sx, sy, r, g, b, a, kind, layer, sound, health in _BLOCK.iter_unpack(
        data[_COUNT.size:end]
    ):
        blocks.append(
            BlockConfig(
                Vector2(px, py),
                Vector2(sx, sy),
                Color(r, g, b, a),
                BlockType(kind),
                GhostLayer(layer),
                Notes(sound),
                health,
            )
        )
    return blocks


def _ensure_directory(directory: Path) -> None:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        _log.warning("cannot create directory %s: %s", directory, error)


class Level:
    """The blocks of one story or custom level and the file they live in."""

    def __init__(self, file_name: str, is_custom: bool, root: Path | str = LEVEL_ROOT):
        self.file_name = file_name
        self.is_custom = is_custom
        self.root = Path(root)
        self.new_name: str | None = None
        self.blocks: list[BlockConfig] = []

    @property
    def directory(self) -> Path:
        return self.root / ("custom" if self.is_custom else "story")

    def path(self) -> Path:
        """File the level is loaded from and saved to."""
        return self.directory / f"{self.file_name}{LEVEL_FILE_EXTENSION}"

    def add_block_config(self, config: BlockConfig) -> None:
        self.blocks.append(config)

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self.blocks)

    def update_block_config(self, index: int, config: BlockConfig) -> None:
        """Replace a block; out-of-range indices are ignored."""
        if self._in_range(index):
            self.blocks[index] = config

    def update_block_config_position(self, index: int, position: Vector2) -> None:
        """Move a block; out-of-range indices are ignored."""
        if self._in_range(index):
            self.blocks[index].position = position

    def remove_block_config(self, index: int) -> None:
        """Drop a block; out-of-range indices are ignored."""
        if self._in_range(index):
            del self.blocks[index]

    def setup_level(self, scene) -> list[Entity]:
        """Create a clickable block entity for every configuration."""
        entities = []
        for config in self.blocks:
            block = create_block(scene, config)
            block.add_component(
                MouseHitBox(
                    block.get_component(Position).position,
                    block.get_component(RectangleShape).size,
                    lambda: None,
                )
            )
            entities.append(block)
        for entity in entities:
            _log.debug("entity created with id %d", entity.handle)
        return entities

    def load_file(self) -> None:
        """Read the level's blocks; a missing file leaves them untouched."""
        if not self.file_name:
            return
        _ensure_directory(self.directory)
        try:
            data = self.path().read_bytes()
        except FileNotFoundError:
            return
        self.blocks = decode_blocks(data)

    def save_file(self) -> None:
        """Write the blocks, applying a pending rename first."""
        _ensure_directory(self.directory)
        if self.new_name is not None:
            old_path = self.path()
            self.file_name, self.new_name = self.new_name, None
            if old_path != self.path():
                old_path.unlink(missing_ok=True)
        self.path().write_bytes(encode_blocks(self.blocks))

    def update_name(self, updated_name: str) -> None:
        """Set the name the level takes on its next save."""
        self.new_name = updated_name

    def name(self) -> str:
        """Pending name if there is one, else the file name."""
        return self.new_name if self.new_name is not None else self.file_name