# breakinout

A brick-breaking arcade game. The blocks sit on eight layers: the real layer
and seven ghost layers. The ball only hits blocks on the layers that are
selected. Each block plays a musical note when the ball strikes it. A built-in
editor lets you build your own levels and save them.

## Installing

```
pip install .
```

## Playing

```
breakinout
```

This opens a 1920×1080 pygame window. The `--frames N` option stops the game
after N frames.

The main menu has three buttons:

- **Start** begins the story levels at level `1`.
- **Custom** lists your own levels. From there you can play them, edit them or create new ones.
- **Exit** closes the game.

### Controls

| Key | Action |
| --- | --- |
| Left / Right arrows | move the paddle |
| Space | launch the ball |
| X / C | aim the ball left / right, up to 45 degrees |
| 1 – 7 | select a ghost layer (the real layer stays active while playing) |
| 0 | select only the real layer (editor only) |
| Escape | close the window |

You have three balls. When a ball falls off the bottom of the screen, a new one
waits on the paddle until you launch it. After the third ball is lost,
"YOU LOSE!!" is shown.

Block types:

- **Normal** (blue) bounces the ball and breaks.
- **Balloon** (green) breaks without bouncing the ball.
- **Wall** (grey) only bounces the ball.
- **Spikes** (red) destroy the ball.

You win a level by clearing every normal and balloon block. Five seconds after
"YOU WON!!" appears, the game moves on:

- After a story level, it goes to the next one, in the order `1` to `8`.
- After the last story level, it goes back to the menu.
- After a custom level, it goes back to the custom level list.

The side panel shows the level name and the selected layers, and counts the
blocks that remain. Its **Restart** button reloads the level. Its **Exit**
button goes back.

## Level editor

From **Custom**, choose **Create New**, or **Edit** next to an existing level.

- A left click on an empty spot in the play area places a block.
- Hold the left button and drag to move the block. Positions snap to a 10-pixel grid.
- A left click on a block on a visible layer selects it, and you can drag it.
- Holding the right button over a block deletes it.
- Use the side panel to pick the hit note (C3 to B4), the layer and the block type.
- New blocks are walls until you pick another type.
- The panel counts the breakable blocks.
- Click the name field to rename the level. Type characters and use Backspace. Enter saves the level.
- **Save** writes the level. **Exit** returns to the custom level list.

When you save under a new name, the file with the old name is deleted.

## Files

All paths are relative to the working directory:

- Story levels: `levels/story/<name>.lvl`
- Custom levels: `levels/custom/<name>.lvl`
- Menu background: the level file `levels/story/menu.lvl`
- Note samples: `assets/sounds/<note>.wav`, for example `C3.wav`

Missing sound files, or a machine without an audio device, leave those notes
silent.

A level file has this layout:

- An 8-byte little-endian block count.
- One 36-byte record per block, which holds:
  - position and size, as four 32-bit floats;
  - RGBA colour, as four bytes;
  - type, layer, note and health, as four 32-bit integers.

## What is not included

The package ships no level files and no sound samples. Without
`levels/story/*.lvl`, a story level is empty. An empty level is won at once.
Without the `.wav` files, the game runs silent.

## Using it as a library

The game logic does not depend on a window. The following pieces let you run
the game from code:

- `breakinout.backend.HeadlessBackend` records draw commands in `backend.commands`. Its `press_key`, `release_key`, `press_mouse`, `release_mouse`, `move_mouse` and `type_text` methods drive the input.
- `breakinout.sounds.Sounds({})` gives silent sounds.
- `breakinout.app.run(scene, backend, max_frames)` renders frames until the scene or the backend asks to close, or the limit is reached. It returns the number of frames rendered.

```python
from breakinout.app import run
from breakinout.backend import HeadlessBackend, Key
from breakinout.scene import Scene
from breakinout.sounds import Sounds

backend = HeadlessBackend()
scene = Scene(backend, sounds=Sounds({}), level_root="levels")
run(scene, backend, max_frames=90)      # the menu slides in
scene.goto_level("1", False)
run(scene, backend, max_frames=90)
backend.press_key(Key.SPACE)
scene.render()
```

You can read and write level files without a window.
`breakinout.level.encode_blocks` turns a list of
`breakinout.entities.BlockConfig` into bytes. `breakinout.level.decode_blocks`
turns the bytes back into a list, and raises `ValueError` on malformed data.

## Running the tests

```
pip install .[test]
pytest
```