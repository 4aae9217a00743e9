"""File reading, PNG texture loading and a texture cache."""

import itertools
import os
from collections.abc import Callable
from pathlib import Path

from .errors import DecodeError, FatalError
from .png import decode_png
from .vertex import Texture

PathLike = str | os.PathLike[str]

_texture_ids = itertools.count(1)
_texture_pixels: dict[int, bytes] = {}


def read_file(file_path: PathLike) -> bytes:
    """Return the whole contents of a file; raises OSError if it cannot be read."""
    return Path(file_path).read_bytes()


def load_png(file_path: PathLike) -> Texture:
    """Load a PNG file as an RGBA texture; raises FatalError on failure."""
    try:
        data = read_file(file_path)
    except OSError as err:
        raise FatalError("Failed to load PNG file to buffer!") from err
    try:
        image = decode_png(data)
    except DecodeError as err:
        raise FatalError(f"decodePNG failed with error: {err.code}") from err
    texture = Texture(id=next(_texture_ids), width=image.width, height=image.height)
    _texture_pixels[texture.id] = image.pixels
    return texture


def texture_pixels(texture: Texture) -> bytes:
    """The RGBA pixel data of a texture made by load_png."""
    return _texture_pixels[texture.id]


class TextureCache:
    """Loads each texture path once and hands out the cached texture afterwards."""

    def __init__(self, loader: Callable[[str], Texture] = load_png) -> None:
        self._loader = loader
        self._textures: dict[str, Texture] = {}

    def get_texture(self, texture_path: PathLike) -> Texture:
        key = os.fspath(texture_path)
        texture = self._textures.get(key)
        if texture is None:
            texture = self._loader(key)
            self._textures[key] = texture
        return texture


_texture_cache = TextureCache()


def get_texture(texture_path: PathLike) -> Texture:
    """Fetch a texture through the shared cache."""
    return _texture_cache.get_texture(texture_path)