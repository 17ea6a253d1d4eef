"""Note sounds played when the ball hits blocks, with overlapping voices."""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Protocol

MAX_SOUND = 20
SOUND_DIRECTORY = Path("assets/sounds")


class Notes(enum.IntEnum):
    """The fourteen notes a block can sound."""

    C3 = 0
    D3 = 1
    E3 = 2
    F3 = 3
    G3 = 4
    A3 = 5
    B3 = 6
    C4 = 7
    D4 = 8
    E4 = 9
    F4 = 10
    G4 = 11
    A4 = 12
    B4 = 13


def text_of_note(note: int) -> str:
    """Display name of a note, or an empty string for an unknown one."""
    try:
        return Notes(note).name
    except ValueError:
        return ""


class Voice(Protocol):
    """Something that can play one copy of a sound."""

    def is_playing(self) -> bool: ...

    def play(self) -> None: ...


class _MixerVoice:
    def __init__(self, sound) -> None:
        self._sound = sound
        self._channel = None

    def is_playing(self) -> bool:
        channel = self._channel
        return channel is not None and channel.get_busy() and channel.get_sound() is self._sound

    def play(self) -> None:
        self._channel = self._sound.play()


def _load_mixer_voices(
    directory: Path,
) -> tuple[dict[Notes, list[Voice]], Callable[[], None] | None]:
    import pygame

    try:
        pygame.mixer.init()
    except pygame.error:
        return {}, None
    pygame.mixer.set_num_channels(len(Notes) * (MAX_SOUND + 1))
    voices: dict[Notes, list[Voice]] = {}
    for note in Notes:
        path = directory / f"{note.name}.wav"
        try:
            sound = pygame.mixer.Sound(str(path))
        except (pygame.error, FileNotFoundError):
            continue
        voices[note] = [_MixerVoice(sound) for _ in range(MAX_SOUND + 1)]
    return voices, pygame.mixer.quit


class Sounds:
    """One primary voice plus ``MAX_SOUND`` spare voices per note.

    Without explicit ``voices`` the note files are loaded from ``directory``
    through the pygame mixer; missing files and a missing audio device leave
    the affected notes silent.
    """

    def __init__(
        self,
        voices: Mapping[Notes, Sequence[Voice]] | None = None,
        directory: Path | str = SOUND_DIRECTORY,
    ) -> None:
        self._on_close: Callable[[], None] | None = None
        if voices is None:
            voices, self._on_close = _load_mixer_voices(Path(directory))
        self._voices = {Notes(note): list(group) for note, group in voices.items()}

    def play_sound(self, note: int) -> None:
        """Play ``note`` on a free voice; do nothing if none is free."""
        try:
            group = self._voices.get(Notes(note))
        except ValueError:
            return
        if not group:
            return
        primary, *aliases = group
        if not primary.is_playing():
            primary.play()
            return
        for voice in aliases:
            if not voice.is_playing():
                voice.play()
                return

    def close(self) -> None:
        """Release every voice and the audio device."""
        self._voices = {}
        if self._on_close is not None:
            on_close, self._on_close = self._on_close, None
            on_close()

    def __enter__(self) -> Sounds:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()