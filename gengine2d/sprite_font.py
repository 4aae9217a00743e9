"""Bitmap fonts: glyphs of a TrueType font packed into one texture atlas."""

import itertools
import os
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

import pygame

from .errors import FatalError
from .sprite_batch import SpriteBatch
from .vertex import ColorRGBA8, Texture

Vec2 = tuple[float, float]
Rect = tuple[float, float, float, float]
GlyphMetrics = tuple[int, int, int, int, int]

FIRST_PRINTABLE_CHAR = " "
LAST_PRINTABLE_CHAR = "~"
MAX_TEXTURE_RES = 4096

# Font atlases get ids from their own range, apart from textures loaded from image files.
_font_texture_ids = itertools.count(0x10000)


class Justification(Enum):
    """Horizontal alignment of drawn text relative to its position."""

    LEFT = auto()
    MIDDLE = auto()
    RIGHT = auto()


@dataclass(frozen=True)
class CharGlyph:
    """Where one character sits in the atlas and how large it is."""

    character: str
    uv_rect: Rect
    size: Vec2


class FontBackend(Protocol):
    """What a SpriteFont needs from a font: height, glyph metrics and glyph images."""

    @property
    def height(self) -> int: ...

    def glyph_metrics(self, character: str) -> GlyphMetrics:
        """Return (min x, max x, min y, max y, advance)."""
        ...

    def render_glyph(self, character: str) -> tuple[int, int, bytes]:
        """Render the glyph in white; return (width, height, RGBA bytes, top row first)."""
        ...


class PygameFontBackend:
    """A FontBackend over a pygame font; ``path`` None selects pygame's default font."""

    def __init__(self, path: str | os.PathLike[str] | None, size: int) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        try:
            self._font = pygame.font.Font(None if path is None else os.fspath(path), size)
        except (pygame.error, OSError) as err:
            raise FatalError(f"Failed to open TTF font {path}") from err

    @property
    def height(self) -> int:
        return self._font.get_height()

    def glyph_metrics(self, character: str) -> GlyphMetrics:
        metrics = self._font.metrics(character)
        entry = metrics[0] if metrics else None
        if entry is None:
            return (0, 0, 0, 0, 0)
        return tuple(entry)  # type: ignore[return-value]

    def render_glyph(self, character: str) -> tuple[int, int, bytes]:
        surface = self._font.render(character, True, (255, 255, 255))
        width, height = surface.get_size()
        return width, height, pygame.image.tostring(surface, "RGBA")


def closest_pow2(i: int) -> int:
    """The smallest power of two that is at least ``i`` (1 for i <= 1)."""
    i -= 1
    power = 1
    while i > 0:
        i >>= 1
        power <<= 1
    return power


def create_rows(
    widths: Sequence[int], rows: int, padding: int
) -> tuple[list[list[int]], int]:
    """Spread glyph indices over ``rows`` rows, each into the currently narrowest row.

    Returns the rows and the width of the widest one, padding included.
    """
    if rows < 1:
        raise ValueError("rows must be at least 1")
    partition: list[list[int]] = [[] for _ in range(rows)]
    row_widths = [padding] * rows
    for index, width in enumerate(widths):
        target = min(range(rows), key=row_widths.__getitem__)
        row_widths[target] += width + padding
        partition[target].append(index)
    return partition, max(row_widths)


def _premultiply(data: bytes) -> bytearray:
    pixels = bytearray(data)
    for i in range(0, len(pixels) - 3, 4):
        value = int(pixels[i] * (pixels[i + 3] / 255.0))
        pixels[i] = pixels[i + 1] = pixels[i + 2] = value
    return pixels


def _blit(
    atlas: bytearray,
    atlas_width: int,
    atlas_height: int,
    x: int,
    y: int,
    width: int,
    height: int,
    data: bytes,
) -> None:
    """Copy an RGBA image into the atlas, clipped to its bounds."""
    x0, x1 = max(x, 0), min(x + width, atlas_width)
    if x0 >= x1:
        return
    span = (x1 - x0) * 4
    for row in range(height):
        target_y = y + row
        if not 0 <= target_y < atlas_height:
            continue
        src = (row * width + (x0 - x)) * 4
        dst = (target_y * atlas_width + x0) * 4
        atlas[dst:dst + span] = data[src:src + span]


class SpriteFont:
    """A range of characters rendered once into an atlas and drawn through a SpriteBatch.

    ``font`` is a font file path, None for the default font, or a FontBackend.
    """

    def __init__(
        self,
        font: "str | os.PathLike[str] | None | FontBackend",
        size: int,
        first: str = FIRST_PRINTABLE_CHAR,
        last: str = LAST_PRINTABLE_CHAR,
    ) -> None:
        if font is None or isinstance(font, (str, os.PathLike)):
            backend: FontBackend = PygameFontBackend(font, size)
        else:
            backend = font
        self._start = ord(first)
        self._length = ord(last) - self._start + 1
        if self._length < 1:
            raise ValueError("the last character must not come before the first")
        self._font_height = backend.height
        padding = size // 8

        characters = [chr(self._start + i) for i in range(self._length)]
        rects: list[tuple[int, int, int, int]] = []
        for character in characters:
            min_x, max_x, min_y, max_y, _advance = backend.glyph_metrics(character)
            rects.append((0, 0, max_x - min_x, max_y - min_y))
        widths = [rect[2] for rect in rects]

        best: tuple[list[list[int]], int, int] | None = None
        area = MAX_TEXTURE_RES * MAX_TEXTURE_RES
        rows = 1
        while rows <= self._length:
            height = rows * (padding + self._font_height) + padding
            partition, width = create_rows(widths, rows, padding)
            width = closest_pow2(width)
            height = closest_pow2(height)
            if width > MAX_TEXTURE_RES or height > MAX_TEXTURE_RES:
                rows += 1
                continue
            if area >= width * height:
                best = (partition, width, height)
                area = width * height
                rows += 1
            else:
                break

        if best is None:
            raise FatalError(
                f"Failed to Map TTF font {font} to texture. Try lowering resolution."
            )
        partition, atlas_width, atlas_height = best
        atlas = bytearray(4 * atlas_width * atlas_height)

        line_y = padding
        for row in partition:
            line_x = padding
            for index in row:
                glyph_w, glyph_h, data = backend.render_glyph(characters[index])
                _blit(
                    atlas, atlas_width, atlas_height,
                    line_x, atlas_height - line_y - 1 - glyph_h,
                    glyph_w, glyph_h, _premultiply(data),
                )
                rects[index] = (line_x, line_y, glyph_w, glyph_h)
                line_x += glyph_w + padding
            line_y += self._font_height + padding

        # The square used for characters outside the range.
        square = padding - 1
        if square > 0:
            _blit(atlas, atlas_width, atlas_height, 0, 0, square, square,
                  b"\xff" * (4 * square * square))

        glyphs = [
            CharGlyph(
                character,
                (x / atlas_width, y / atlas_height, w / atlas_width, h / atlas_height),
                (float(w), float(h)),
            )
            for character, (x, y, w, h) in zip(characters, rects)
        ]
        glyphs.append(
            CharGlyph(" ", (0.0, 0.0, square / atlas_width, square / atlas_height), glyphs[0].size)
        )
        self._glyphs: tuple[CharGlyph, ...] = tuple(glyphs)
        self._pixels = bytes(atlas)
        self._texture: Texture | None = Texture(
            id=next(_font_texture_ids), width=atlas_width, height=atlas_height
        )

    @property
    def font_height(self) -> int:
        return self._font_height

    @property
    def texture(self) -> Texture:
        return self._live_texture()

    @property
    def pixels(self) -> bytes:
        """The atlas as RGBA bytes, bottom row first."""
        self._live_texture()
        return self._pixels

    @property
    def glyphs(self) -> tuple[CharGlyph, ...]:
        """One glyph per character in the range, then the fallback glyph."""
        return self._glyphs

    def _live_texture(self) -> Texture:
        if self._texture is None:
            raise RuntimeError("font has been disposed")
        return self._texture

    def _glyph_for(self, character: str) -> CharGlyph:
        index = ord(character) - self._start
        if not 0 <= index < self._length:
            index = self._length
        return self._glyphs[index]

    def measure(self, text: str) -> Vec2:
        """The width and height that ``text`` takes up at scale 1."""
        self._live_texture()
        width = 0.0
        height = float(self._font_height)
        line_width = 0.0
        for character in text:
            if character == "\n":
                height += self._font_height
                width = max(width, line_width)
                line_width = 0.0
            else:
                line_width += self._glyph_for(character).size[0]
        return (max(width, line_width), height)

    def draw(
        self,
        batch: SpriteBatch,
        text: str,
        position: Vec2,
        scaling: Vec2,
        depth: float,
        tint: ColorRGBA8,
        justification: Justification = Justification.LEFT,
    ) -> None:
        """Add one glyph per character of ``text`` to ``batch``."""
        texture = self._live_texture()
        scale_x, scale_y = scaling
        x, y = position
        if justification is Justification.MIDDLE:
            x -= self.measure(text)[0] * scale_x / 2
        elif justification is Justification.RIGHT:
            x -= self.measure(text)[0] * scale_x
        for character in text:
            if character == "\n":
                y += self._font_height * scale_y
                x = position[0]
            else:
                glyph = self._glyph_for(character)
                width, height = glyph.size
                dest_rect = (x, y, width * scale_x, height * scale_y)
                batch.draw(dest_rect, glyph.uv_rect, texture.id, depth, tint)
                x += width * scale_x

    def dispose(self) -> None:
        """Release the atlas; the font cannot be used afterwards."""
        self._texture = None
        self._pixels = b""
        self._glyphs = ()