from breakinout.backend import BLUE, LIGHTGRAY, RED, HeadlessBackend
from breakinout.components import BlockState, BlockType, GhostLayer, MouseHitBox, Position
from breakinout.editor import Editor
from breakinout.geometry import Vector2
from breakinout.registry import Entity, Registry
from breakinout.sounds import Notes, Sounds


class RecordingVoice:
    def __init__(self):
        self.plays = 0

    def is_playing(self):
        return False

    def play(self):
        self.plays += 1


class FakeScene:
    def __init__(self, voices=None):
        self.registry = Registry()
        self.backend = HeadlessBackend()
        self.mask = GhostLayer.REAL | GhostLayer.ONE
        self.sounds = Sounds(voices=voices or {})

    def create_entity(self):
        return Entity(self.registry.create(), self.registry)


def test_defaults():
    editor = Editor("x")
    assert editor.block_type() == BlockType.WALL
    assert editor.hit_sound() == Notes.C3
    assert editor.level_name() == "x"
    assert editor.editing_name is False


def test_create_block_selects_and_records(tmp_path):
    voice = RecordingVoice()
    scene = FakeScene({Notes.C3: [voice]})
    editor = Editor("x", root=tmp_path)
    editor.create_block(scene)
    assert len(editor.blocks) == 1
    assert editor.selected_block == editor.blocks[0]
    assert len(editor.level.blocks) == 1
    assert scene.registry.valid(editor.blocks[0])
    assert voice.plays == 1


def test_set_position_snaps_and_syncs():
    scene = FakeScene()
    editor = Editor("x")
    editor.create_block(scene)
    editor.set_position(Vector2(123.0, 77.0))
    block = editor.selected_block
    position = block.get_component(Position).position
    assert position == Vector2(70.0, 50.0)
    assert block.get_component(MouseHitBox).position == position
    assert editor.level.blocks[0].position == position
    assert editor.factory.position == position


def test_set_position_without_selection_only_moves_brush():
    scene = FakeScene()
    editor = Editor("x")
    editor.create_block(scene)
    before = editor.blocks[0].get_component(Position).position
    editor.unselect_block()
    editor.set_position(Vector2(301.0, 402.0))
    assert editor.blocks[0].get_component(Position).position == before
    assert editor.factory.position == Vector2(301.0, 402.0)


def test_delete_selected_block():
    scene = FakeScene()
    editor = Editor("x")
    editor.create_block(scene)
    editor.create_block(scene)
    first = editor.blocks[0]
    editor.select_block(first)
    editor.delete_selected_block(scene)
    assert not scene.registry.valid(first)
    assert first not in editor.blocks
    assert len(editor.blocks) == 1
    assert len(editor.level.blocks) == 1
    assert editor.selected_block is None


def test_delete_without_selection_keeps_blocks():
    scene = FakeScene()
    editor = Editor("x")
    editor.create_block(scene)
    editor.unselect_block()
    editor.delete_selected_block(scene)
    assert len(editor.blocks) == 1


def test_set_layer_updates_selected_block():
    scene = FakeScene()
    editor = Editor("x")
    editor.create_block(scene)
    editor.set_layer(GhostLayer.FOUR)
    assert editor.selected_block.get_component(BlockState).layer == GhostLayer.FOUR
    assert editor.factory.layer == GhostLayer.FOUR


def test_set_type_and_sound():
    editor = Editor("x")
    editor.set_type(BlockType.SPIKES)
    assert editor.block_type() == BlockType.SPIKES
    assert editor.factory.color == RED
    editor.set_type(BlockType.NORMAL)
    assert editor.factory.color == BLUE
    editor.set_type(BlockType.WALL)
    assert editor.factory.color == LIGHTGRAY
    editor.set_hit_sound(Notes.A4)
    assert editor.hit_sound() == Notes.A4


def test_save_under_new_name_and_reload(tmp_path):
    scene = FakeScene()
    editor = Editor("", root=tmp_path)
    editor.set_type(BlockType.BALLOON)
    editor.create_block(scene)
    editor.update_name("mine")
    assert editor.level_name() == "mine"
    editor.save_level()
    assert (tmp_path / "custom" / "mine.lvl").exists()

    other_scene = FakeScene()
    other = Editor("mine", root=tmp_path)
    other.load_from_file(other_scene)
    assert len(other.blocks) == 1
    assert other.blocks[0].get_component(BlockState).block_type == BlockType.BALLOON
    assert other.level.blocks == editor.level.blocks