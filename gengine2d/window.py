"""Engine start-up and the game window."""

from contextlib import suppress
from enum import IntFlag
from typing import Any

import pygame

from .errors import FatalError

DEFAULT_CLEAR_COLOR = (128, 128, 128)


def init() -> tuple[int, int]:
    """Start pygame and ask for double buffering; return (modules started, modules failed)."""
    passed, failed = pygame.init()
    with suppress(pygame.error):
        pygame.display.gl_set_attribute(pygame.GL_DOUBLEBUFFER, 1)
    return passed, failed


class WindowFlags(IntFlag):
    NONE = 0
    INVISIBLE = 0x1
    FULLSCREEN = 0x2
    BORDERLESS = 0x4


_FLAG_MAP = (
    (WindowFlags.INVISIBLE, pygame.HIDDEN),
    (WindowFlags.FULLSCREEN, pygame.FULLSCREEN),
    (WindowFlags.BORDERLESS, pygame.NOFRAME),
)


class Window:
    """The game's window and its drawing surface."""

    def __init__(self, display: Any = None) -> None:
        self._display = pygame.display if display is None else display
        self._surface: Any = None
        self.screen_width = 0
        self.screen_height = 0
        self.clear_color = DEFAULT_CLEAR_COLOR

    @property
    def surface(self) -> Any:
        if self._surface is None:
            raise RuntimeError("window has not been created")
        return self._surface

    def create(
        self,
        window_name: str,
        screen_width: int,
        screen_height: int,
        flags: int = WindowFlags.NONE,
    ) -> Any:
        """Open the window and return its surface; raises FatalError on failure."""
        requested = WindowFlags(flags)
        display_flags = 0
        for flag, display_flag in _FLAG_MAP:
            if flag in requested:
                display_flags |= display_flag
        try:
            surface = self._display.set_mode((screen_width, screen_height), display_flags)
        except pygame.error as err:
            raise FatalError("SDL Window could not be created!") from err
        self._display.set_caption(window_name)
        self._surface = surface
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.clear()
        return surface

    def clear(self) -> None:
        """Fill the surface with the clear colour."""
        self.surface.fill(self.clear_color)

    def swap_buffer(self) -> None:
        """Show what has been drawn."""
        self.surface
        self._display.flip()