"""Collects textured quads, sorts them and groups them into render batches."""

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum, auto

from .vertex import UV, ColorRGBA8, Position, Vertex

Vec2 = tuple[float, float]
Rect = tuple[float, float, float, float]

VERTICES_PER_GLYPH = 6


class GlyphSortType(Enum):
    NONE = auto()
    FRONT_TO_BACK = auto()
    BACK_TO_FRONT = auto()
    TEXTURE = auto()


@dataclass(frozen=True)
class Glyph:
    """One textured quad."""

    texture: int
    depth: float
    top_left: Vertex
    bottom_left: Vertex
    top_right: Vertex
    bottom_right: Vertex

    @property
    def vertices(self) -> tuple[Vertex, ...]:
        """The quad as two triangles."""
        return (
            self.top_left,
            self.bottom_left,
            self.bottom_right,
            self.bottom_right,
            self.top_right,
            self.top_left,
        )


@dataclass
class RenderBatch:
    offset: int
    num_vertices: int
    texture: int


def rotate_point(pos: Vec2, angle: float) -> Vec2:
    """Rotate a point about the origin by ``angle`` radians."""
    x, y = pos
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return (x * cos_a - y * sin_a, x * sin_a + y * cos_a)


def build_glyph(
    dest_rect: Rect,
    uv_rect: Rect,
    texture: int,
    depth: float,
    color: ColorRGBA8,
    angle: float | None = None,
) -> Glyph:
    """Make a glyph from (x, y, width, height) rectangles, rotated about its centre if ``angle`` is given."""
    x, y, width, height = dest_rect
    u, v, uv_width, uv_height = uv_rect

    if angle is None:
        tl, bl, br, tr = (x, y + height), (x, y), (x + width, y), (x + width, y + height)
    else:
        hx, hy = width / 2.0, height / 2.0
        corners = ((-hx, hy), (-hx, -hy), (hx, -hy), (hx, hy))
        tl, bl, br, tr = (
            (x + rx + hx, y + ry + hy)
            for rx, ry in (rotate_point(corner, angle) for corner in corners)
        )

    def vertex(pos: Vec2, uv: Vec2) -> Vertex:
        return Vertex(Position(*pos), color, UV(*uv))

    return Glyph(
        texture=texture,
        depth=depth,
        top_left=vertex(tl, (u, v + uv_height)),
        bottom_left=vertex(bl, (u, v)),
        top_right=vertex(tr, (u + uv_width, v + uv_height)),
        bottom_right=vertex(br, (u + uv_width, v)),
    )


Renderer = Callable[[int, Sequence[Vertex]], None]


class SpriteBatch:
    """Gathers glyphs between begin() and end() and hands batches to a renderer."""

    def __init__(self) -> None:
        self._sort_type = GlyphSortType.TEXTURE
        self._glyphs: list[Glyph] = []
        self._render_batches: list[RenderBatch] = []
        self._vertices: list[Vertex] = []

    @property
    def glyphs(self) -> tuple[Glyph, ...]:
        return tuple(self._glyphs)

    @property
    def render_batches(self) -> tuple[RenderBatch, ...]:
        return tuple(self._render_batches)

    @property
    def vertices(self) -> tuple[Vertex, ...]:
        return tuple(self._vertices)

    def begin(self, sort_type: GlyphSortType = GlyphSortType.TEXTURE) -> None:
        self._sort_type = sort_type
        self._render_batches.clear()
        self._glyphs.clear()
        self._vertices.clear()

    def end(self) -> None:
        """Sort the glyphs and build the render batches."""
        self._sort_glyphs()
        self._create_render_batches()

    def draw(
        self,
        dest_rect: Rect,
        uv_rect: Rect,
        texture: int,
        depth: float,
        color: ColorRGBA8,
        angle: float | None = None,
    ) -> None:
        self._glyphs.append(build_glyph(dest_rect, uv_rect, texture, depth, color, angle))

    def draw_toward(
        self,
        dest_rect: Rect,
        uv_rect: Rect,
        texture: int,
        depth: float,
        color: ColorRGBA8,
        direction: Vec2,
    ) -> None:
        """Draw rotated so that the quad's x axis points along ``direction`` (a unit vector)."""
        cos_angle = max(-1.0, min(1.0, direction[0]))
        angle = math.acos(cos_angle)
        if direction[1] < 0.0:
            angle = -angle
        self.draw(dest_rect, uv_rect, texture, depth, color, angle)

    def render_batch(self, renderer: Renderer) -> None:
        """Call ``renderer(texture, vertices)`` once per batch."""
        for batch in self._render_batches:
            end = batch.offset + batch.num_vertices
            renderer(batch.texture, tuple(self._vertices[batch.offset:end]))

    def _sort_glyphs(self) -> None:
        if self._sort_type is GlyphSortType.FRONT_TO_BACK:
            self._glyphs.sort(key=lambda glyph: glyph.depth)
        elif self._sort_type is GlyphSortType.BACK_TO_FRONT:
            self._glyphs.sort(key=lambda glyph: glyph.depth, reverse=True)
        elif self._sort_type is GlyphSortType.TEXTURE:
            self._glyphs.sort(key=lambda glyph: glyph.texture)

    def _create_render_batches(self) -> None:
        self._render_batches.clear()
        self._vertices.clear()
        for glyph in self._glyphs:
            if self._render_batches and self._render_batches[-1].texture == glyph.texture:
                self._render_batches[-1].num_vertices += VERTICES_PER_GLYPH
            else:
                self._render_batches.append(
                    RenderBatch(len(self._vertices), VERTICES_PER_GLYPH, glyph.texture)
                )
            self._vertices.extend(glyph.vertices)