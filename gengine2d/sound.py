"""Sound effects and music with a cache of loaded files."""

import os
from typing import Any

import pygame

from .errors import FatalError

MIX_DEFAULT_FREQUENCY = 22050
MIX_DEFAULT_FORMAT = -16
MIX_CHANNELS = 2
MIX_CHUNK_SIZE = 1024

_LOAD_ERRORS = (pygame.error, OSError)


class SoundEffect:
    """A loaded sound that can be played on a free channel."""

    def __init__(self, sound: Any, mixer: Any) -> None:
        self._sound = sound
        self._mixer = mixer

    def play(self, loops: int = 0) -> None:
        """Play the effect; -1 loops forever, otherwise it plays ``loops`` + 1 times.

        If no channel is free, channel 0 is taken over.
        """
        try:
            if self._sound.play(loops=loops) is None:
                self._mixer.Channel(0).play(self._sound, loops=loops)
        except pygame.error as err:
            raise FatalError(f"Mix_PlayChannel error: {err}") from err


class Music:
    """A music file played through the single music stream."""

    def __init__(self, file_path: str, music: Any) -> None:
        self.file_path = file_path
        self._music = music

    def play(self, loops: int = 1) -> None:
        """Play the music; -1 loops forever, otherwise it plays ``loops`` times."""
        repeats = -1 if loops == -1 else max(loops - 1, 0)
        self._music.load(self.file_path)
        self._music.play(loops=repeats)

    def pause(self) -> None:
        self._music.pause()

    def stop(self) -> None:
        self._music.stop()

    def resume(self) -> None:
        self._music.unpause()


class SoundManager:
    """Opens the audio device and caches loaded effects and music by path."""

    def __init__(self, mixer: Any = None) -> None:
        self._mixer = pygame.mixer if mixer is None else mixer
        self._effects: dict[str, Any] = {}
        self._music: set[str] = set()
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def __enter__(self) -> "SoundManager":
        self.init()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.destroy()

    def init(self) -> None:
        if self._initialized:
            raise FatalError("Tried to initialize AudioEngine twice!")
        try:
            self._mixer.init(
                frequency=MIX_DEFAULT_FREQUENCY,
                size=MIX_DEFAULT_FORMAT,
                channels=MIX_CHANNELS,
                buffer=MIX_CHUNK_SIZE,
            )
        except pygame.error as err:
            raise FatalError(f"Mix_OpenAudio error: {err}") from err
        self._initialized = True

    def destroy(self) -> None:
        """Drop the caches and close the audio device; does nothing if not open."""
        if not self._initialized:
            return
        self._initialized = False
        self._effects.clear()
        self._music.clear()
        self._mixer.quit()

    def load_sound_effect(self, file_path: str | os.PathLike[str]) -> SoundEffect:
        key = os.fspath(file_path)
        sound = self._effects.get(key)
        if sound is None:
            try:
                sound = self._mixer.Sound(key)
            except _LOAD_ERRORS as err:
                raise FatalError(f"Mix_LoadWAV error: {err}") from err
            self._effects[key] = sound
        return SoundEffect(sound, self._mixer)

    def load_music(self, file_path: str | os.PathLike[str]) -> Music:
        key = os.fspath(file_path)
        if key not in self._music:
            try:
                self._mixer.music.load(key)
            except _LOAD_ERRORS as err:
                raise FatalError(f"Mix_LoadMUS error: {err}") from err
            self._music.add(key)
        return Music(key, self._mixer.music)