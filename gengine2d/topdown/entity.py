"""Entities and tiles of the top-down game, with level, tile and circle collisions."""

import math
from collections.abc import Sequence

from ..sprite_batch import SpriteBatch
from ..vertex import ColorRGBA8

Vec2 = tuple[float, float]

TILE_WIDTH = 64
WHITE = ColorRGBA8(255, 255, 255, 255)

_FULL_UV = (0.0, 0.0, 1.0, 1.0)
# Entities collide as circles of this radius, offset by it from their corner.
_ENTITY_RADIUS = 16.0
# The collision box is the sprite shrunk by this much in each dimension.
_BOX_INSET = 32.0


def normalize(vector: Vec2, fallback: Vec2) -> Vec2:
    """Return ``vector`` scaled to unit length, or ``fallback`` for a zero vector."""
    length = math.hypot(vector[0], vector[1])
    if length == 0.0:
        return fallback
    return (vector[0] / length, vector[1] / length)


class Entity:
    """Something placed in the level with a sprite, a size and a facing direction."""

    def __init__(
        self,
        position: Vec2 = (0.0, 0.0),
        width: float = 0.0,
        height: float = 0.0,
        texture_id: int = 0,
        color: ColorRGBA8 = WHITE,
        speed: Vec2 = (0.0, 0.0),
        direction: Vec2 = (1.0, 0.0),
    ) -> None:
        self.position: Vec2 = (float(position[0]), float(position[1]))
        self.width = float(width)
        self.height = float(height)
        self.texture_id = texture_id
        self.color = color
        self.speed: Vec2 = (float(speed[0]), float(speed[1]))
        self.direction: Vec2 = (float(direction[0]), float(direction[1]))

    def _draw_sprite(self, sprite_batch: SpriteBatch, texture_id: int, depth: float) -> None:
        x, y = self.position
        dest_rect = (x, y, self.width, self.height)
        sprite_batch.draw_toward(dest_rect, _FULL_UV, texture_id, depth, self.color, self.direction)

    def draw(self, sprite_batch: SpriteBatch) -> None:
        """Add the sprite, rotated to face ``direction``, to the batch."""
        self._draw_sprite(sprite_batch, self.texture_id, 0.0)

    def collide_with_entity(self, entity: "Entity") -> bool:
        """Circle collision; on overlap both entities are pushed apart equally."""
        min_distance = _ENTITY_RADIUS * 2.0
        ax, ay = self.position
        bx, by = entity.position
        dist_x = (ax + _ENTITY_RADIUS) - (bx + _ENTITY_RADIUS)
        dist_y = (ay + _ENTITY_RADIUS) - (by + _ENTITY_RADIUS)
        depth = min_distance - math.hypot(dist_x, dist_y)
        if depth <= 0:
            return False
        nx, ny = normalize((dist_x, dist_y), (1.0, 0.0))
        push_x = nx * depth / 2.0
        push_y = ny * depth / 2.0
        self.position = (ax + push_x, ay + push_y)
        entity.position = (bx - push_x, by - push_y)
        return True

    def collide_with_level(self, level_data: Sequence[str]) -> bool:
        """Push the entity out of every solid tile under its corners."""
        x, y = self.position
        corners = (
            (x, y),
            (x + self.width, y),
            (x, y + self.width),
            (x + self.width, y + self.width),
        )
        tile_positions = [
            tile
            for corner_x, corner_y in corners
            if (tile := self.check_tile_position(level_data, corner_x, corner_y)) is not None
        ]
        for tile_pos in tile_positions:
            self.collide_with_tile(tile_pos)
        return bool(tile_positions)

    def check_tile_position(self, level_data: Sequence[str], x: float, y: float) -> Vec2 | None:
        """Return the centre of the solid tile at world point (x, y), or None."""
        grid_x = math.floor(x / TILE_WIDTH)
        grid_y = math.floor(y / TILE_WIDTH)
        if not level_data or grid_x < 0 or grid_y < 0:
            return None
        if grid_y >= len(level_data) or grid_x >= len(level_data[0]):
            return None
        row = level_data[grid_y]
        if grid_x >= len(row) or row[grid_x] == ".":
            return None
        half = TILE_WIDTH / 2.0
        return (grid_x * TILE_WIDTH + half, grid_y * TILE_WIDTH + half)

    def collide_with_tile(self, tile_pos: Vec2) -> None:
        """AABB collision with a tile centred at ``tile_pos``; push out along the shallower axis."""
        tile_radius = TILE_WIDTH / 2.0
        box_w = self.width - _BOX_INSET
        box_h = self.height - _BOX_INSET
        min_distance_x = box_w / 2.0 + tile_radius
        min_distance_y = box_h / 2.0 + tile_radius
        x, y = self.position
        center_x = x + _ENTITY_RADIUS + box_w / 2.0
        center_y = y + _ENTITY_RADIUS + box_h / 2.0
        dist_x = center_x - tile_pos[0]
        dist_y = center_y - tile_pos[1]
        x_depth = min_distance_x - abs(dist_x)
        y_depth = min_distance_y - abs(dist_y)
        if x_depth <= 0 or y_depth <= 0:
            return
        if max(x_depth, 0.0) < max(y_depth, 0.0):
            x = x - x_depth if dist_x < 0 else x + x_depth
        else:
            y = y - y_depth if dist_y < 0 else y + y_depth
        self.position = (x, y)

    def collide_with_enemy(self, width: float, height: float, entity: "Entity") -> bool:
        """AABB test of a ``width`` x ``height`` box here against the enemy's inner box."""
        width = int(width)
        height = int(height)
        enemy_half_w = entity.width / 2.0
        enemy_half_h = entity.height / 2.0
        min_distance_x = width / 2.0 + enemy_half_w / 2.0
        min_distance_y = height / 2.0 + enemy_half_h / 2.0
        x, y = self.position
        ex, ey = entity.position
        dist_x = (x + width // 2) - (ex + _ENTITY_RADIUS + enemy_half_w / 2)
        dist_y = (y + height // 2) - (ey + _ENTITY_RADIUS + enemy_half_h / 2)
        return min_distance_x - abs(dist_x) > 0 and min_distance_y - abs(dist_y) > 0


class Tile(Entity):
    """One square of the level."""

    def __init__(self, texture_id: int, position: Vec2) -> None:
        super().__init__(
            position=position,
            width=float(TILE_WIDTH),
            height=float(TILE_WIDTH),
            texture_id=texture_id,
            color=WHITE,
        )