from breakinout.backend import LIGHTGRAY, WHITE, Color, HeadlessBackend
from breakinout.components import Container, GhostLayer, MouseHitBox, Text, Watcher
from breakinout.entities import BlockConfig, create_block
from breakinout.components import BlockType
from breakinout.level import Level, encode_blocks
from breakinout.menus import level_panel, list_custom_levels, main_menu, select_custom_level
from breakinout.registry import Entity, Registry
from breakinout.sounds import Sounds


class FakeScene:
    def __init__(self):
        self.registry = Registry()
        self.backend = HeadlessBackend()
        self.mask = GhostLayer.REAL | GhostLayer.ONE
        self.sounds = Sounds(voices={})
        self.level = None
        self.should_close = False
        self.calls = []

    def create_entity(self):
        return Entity(self.registry.create(), self.registry)

    def goto_menu(self):
        self.calls.append(("menu",))

    def goto_customs(self):
        self.calls.append(("customs",))

    def goto_level(self, file_name, is_custom):
        self.calls.append(("level", file_name, is_custom))

    def goto_editor(self, file_name):
        self.calls.append(("editor", file_name))


def buttons(scene):
    return {text.text: hitbox for _, text, hitbox in scene.registry.view(Text, MouseHitBox)}


def texts(scene):
    return [text.text for _, text in scene.registry.view(Text)]


def run_watchers(scene):
    for _, watcher in list(scene.registry.view(Watcher)):
        watcher.action()


def test_list_custom_levels_filters(tmp_path):
    (tmp_path / "a.lvl").write_bytes(encode_blocks([]))
    (tmp_path / "b.lvl").write_bytes(encode_blocks([]))
    (tmp_path / "c.txt").write_text("x")
    (tmp_path / "d.lvl").mkdir()
    assert list_custom_levels(tmp_path) == ["a", "b"]


def test_list_custom_levels_creates_directory(tmp_path):
    directory = tmp_path / "levels" / "custom"
    assert list_custom_levels(directory) == []
    assert directory.is_dir()


def test_main_menu_buttons():
    scene = FakeScene()
    main_menu(scene)
    assert "BreakiN" in texts(scene)
    found = buttons(scene)
    assert set(found) == {"Start", "Custom", "Exit"}
    found["Start"].on_click()
    found["Custom"].on_click()
    assert scene.calls == [("level", "1", False), ("customs",)]
    found["Exit"].on_click()
    assert scene.should_close is True
    backgrounds = [c.background_color for _, c in scene.registry.view(Container)]
    assert Color(50, 50, 50, 220) in backgrounds


def test_level_panel_shows_name_and_layers():
    scene = FakeScene()
    scene.level = Level("3", False)
    level_panel(scene)
    assert "3" in texts(scene)
    run_watchers(scene)
    layer_colors = {
        text.text: container.background_color
        for _, text, container, _ in scene.registry.view(Text, Container, Watcher)
    }
    assert layer_colors["0"] == WHITE
    assert layer_colors["1"] == WHITE
    assert layer_colors["2"] == LIGHTGRAY


def test_level_panel_counts_breakable_blocks():
    scene = FakeScene()
    scene.level = Level("3", False)
    for block_type in (BlockType.NORMAL, BlockType.BALLOON, BlockType.WALL, BlockType.SPIKES):
        create_block(scene, BlockConfig(block_type=block_type))
    level_panel(scene)
    run_watchers(scene)
    counters = [
        text.text
        for entity, text, _ in scene.registry.view(Text, Watcher)
        if not scene.registry.has(entity, MouseHitBox)
    ]
    assert counters == ["2"]


def test_level_panel_restart_and_exit():
    scene = FakeScene()
    scene.level = Level("4", False)
    level_panel(scene)
    found = buttons(scene)
    found["Restart"].on_click()
    found["Exit"].on_click()
    assert scene.calls == [("level", "4", False), ("menu",)]

    custom = FakeScene()
    custom.level = Level("mine", True)
    level_panel(custom)
    buttons(custom)["Exit"].on_click()
    assert custom.calls == [("customs",)]


def test_select_custom_level(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Level("foo", True, root=tmp_path / "levels").save_file()
    scene = FakeScene()
    select_custom_level(scene)
    assert "foo" in texts(scene)
    found = buttons(scene)
    found["Edit"].on_click()
    found["Play"].on_click()
    found["Create New"].on_click()
    found["Return"].on_click()
    assert scene.calls == [
        ("editor", "foo"),
        ("level", "foo", True),
        ("editor", ""),
        ("menu",),
    ]


def test_select_custom_level_without_levels(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    scene = FakeScene()
    select_custom_level(scene)
    assert set(buttons(scene)) == {"Create New", "Return"}
    assert (tmp_path / "levels" / "custom").is_dir()