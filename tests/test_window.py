import pygame
import pytest

from gengine2d.errors import FatalError
from gengine2d.window import Window, WindowFlags, init


class FakeSurface:
    def __init__(self, size):
        self.size = size
        self.fills = []

    def fill(self, color):
        self.fills.append(color)


class FakeDisplay:
    def __init__(self, fail=False):
        self.fail = fail
        self.modes = []
        self.caption = None
        self.flips = 0

    def set_mode(self, size, flags=0):
        if self.fail:
            raise pygame.error("no video device")
        self.modes.append((size, flags))
        return FakeSurface(size)

    def set_caption(self, title):
        self.caption = title

    def flip(self):
        self.flips += 1


def test_create_maps_flags_and_size():
    display = FakeDisplay()
    window = Window(display)
    surface = window.create("game", 320, 200, WindowFlags.INVISIBLE | WindowFlags.BORDERLESS)
    assert display.modes == [((320, 200), pygame.HIDDEN | pygame.NOFRAME)]
    assert display.caption == "game"
    assert surface.size == (320, 200)
    assert (window.screen_width, window.screen_height) == (320, 200)


def test_create_fullscreen_flag():
    display = FakeDisplay()
    Window(display).create("game", 640, 480, WindowFlags.FULLSCREEN)
    assert display.modes[0][1] == pygame.FULLSCREEN


def test_create_without_flags():
    display = FakeDisplay()
    Window(display).create("game", 640, 480, 0)
    assert display.modes[0][1] == 0


def test_create_clears_to_clear_color():
    display = FakeDisplay()
    window = Window(display)
    surface = window.create("game", 10, 10)
    assert surface.fills == [window.clear_color]
    window.clear_color = (1, 2, 3)
    window.clear()
    assert surface.fills[-1] == (1, 2, 3)


def test_create_failure_is_fatal():
    with pytest.raises(FatalError, match="could not be created"):
        Window(FakeDisplay(fail=True)).create("game", 10, 10)


def test_swap_buffer_requires_window():
    display = FakeDisplay()
    window = Window(display)
    with pytest.raises(RuntimeError):
        window.swap_buffer()
    window.create("game", 10, 10)
    window.swap_buffer()
    assert display.flips == 1


def test_real_window_with_dummy_driver(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    try:
        passed, failed = init()
        assert passed >= 1
        assert pygame.display.get_init()
        window = Window()
        surface = window.create("game", 64, 48, WindowFlags.INVISIBLE)
        assert surface.get_size() == (64, 48)
        window.swap_buffer()
        assert surface.get_at((0, 0))[:3] == window.clear_color
    finally:
        pygame.quit()