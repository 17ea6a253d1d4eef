"""Command-line entry point that opens the game window and runs the loop."""

from __future__ import annotations

import argparse

from .backend import Backend, PygameBackend
from .scene import Scene

SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1080
TITLE = "Break In & Out"


def run(scene: Scene, backend: Backend, max_frames: int | None = None) -> int:
    """Render frames until the window or the scene asks to close; return the count."""
    frames = 0
    while not backend.should_close() and not scene.should_close:
        if max_frames is not None and frames >= max_frames:
            break
        scene.render()
        frames += 1
    return frames


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="breakinout", description=TITLE)
    parser.add_argument(
        "--frames", type=int, default=None, help="stop after this many frames"
    )
    args = parser.parse_args(argv)

    backend = PygameBackend(SCREEN_WIDTH, SCREEN_HEIGHT, TITLE)
    try:
        scene = Scene(backend)
        try:
            run(scene, backend, args.frames)
        finally:
            scene.close()
    finally:
        backend.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())