"""Entities, tiles and the player of the platformer game."""

from collections.abc import Callable, Sequence

import pygame

from ..camera import Camera2D
from ..inputs import InputManager
from ..resources import get_texture as _shared_get_texture
from ..sprite_batch import SpriteBatch
from ..vertex import ColorRGBA8, Texture

Vec2 = tuple[float, float]
TextureLoader = Callable[[str], Texture]

TEXTURE_DIR = "../assets/textures"
PLAYER_TEXTURE = f"{TEXTURE_DIR}/block_dude.png"

TILE_WIDTH = 64
MAX_SPEED = 10.0
JUMP_SPEED = 25.0
GRAVITY_ACCELERATION = 0.8
WHITE = ColorRGBA8(255, 255, 255, 255)

_FULL_UV = (0.0, 0.0, 1.0, 1.0)
_JUMP_KEYS = (pygame.K_w, pygame.K_UP, pygame.K_SPACE)
_LEFT_KEYS = (pygame.K_a, pygame.K_LEFT)
_RIGHT_KEYS = (pygame.K_d, pygame.K_RIGHT)


class Entity:
    """Something in the level with a sprite, a size and a speed."""

    def __init__(
        self,
        position: Vec2 = (0.0, 0.0),
        width: float = 0.0,
        height: float = 0.0,
        texture_id: int = 0,
        color: ColorRGBA8 = WHITE,
        speed: Vec2 = (0.0, 0.0),
    ) -> None:
        self.position: Vec2 = (float(position[0]), float(position[1]))
        self.width = float(width)
        self.height = float(height)
        self.texture_id = texture_id
        self.color = color
        self.speed: Vec2 = (float(speed[0]), float(speed[1]))

    def draw(self, sprite_batch: SpriteBatch) -> None:
        """Add the entity's sprite to the batch."""
        x, y = self.position
        dest_rect = (x, y, self.width, self.height)
        sprite_batch.draw(dest_rect, _FULL_UV, self.texture_id, 0.0, self.color)

    def collide_with_tile(self, width: int, height: int, entity: "Entity") -> bool:
        """AABB test of a ``width`` x ``height`` box at this position against ``entity``."""
        width = int(width)
        height = int(height)
        min_distance_x = width / 2.0 + entity.width / 2.0
        min_distance_y = height / 2.0 + entity.height / 2.0
        x, y = self.position
        ex, ey = entity.position
        dist_x = (x + int(width / 2)) - (ex + entity.width / 2)
        dist_y = (y + int(height / 2)) - (ey + entity.height / 2)
        return min_distance_x - abs(dist_x) > 0 and min_distance_y - abs(dist_y) > 0


class Tile(Entity):
    """One solid square of the level."""

    def __init__(self, texture_id: int, position: Vec2) -> None:
        super().__init__(
            position=position,
            width=float(TILE_WIDTH),
            height=float(TILE_WIDTH),
            texture_id=texture_id,
            color=WHITE,
        )


class Player(Entity):
    """The block that runs left and right, jumps and lands on tiles."""

    def __init__(
        self,
        position: Vec2,
        input_manager: InputManager,
        camera: Camera2D,
        get_texture: TextureLoader = _shared_get_texture,
    ) -> None:
        super().__init__(
            position=position,
            width=64.0,
            height=64.0,
            texture_id=get_texture(PLAYER_TEXTURE).id,
            color=WHITE,
        )
        self.input_manager = input_manager
        self.camera = camera
        self.gravity_acceleration = GRAVITY_ACCELERATION
        self.in_air = True
        self.jumped = False

    def update(self, tiles: Sequence[Entity], delta_time: float) -> None:
        inputs = self.input_manager
        if not self.jumped and any(inputs.is_key_pressed(key) for key in _JUMP_KEYS):
            self.jump()

        speed_x, speed_y = self.speed
        if self.in_air:
            self.jumped = True
            speed_y -= self.gravity_acceleration * delta_time

        if any(inputs.is_key_down(key) for key in _LEFT_KEYS):
            speed_x = -MAX_SPEED
        elif any(inputs.is_key_down(key) for key in _RIGHT_KEYS):
            speed_x = MAX_SPEED
        else:
            speed_x = 0.0
        self.speed = (speed_x, speed_y)

        x, y = self.position
        self.position = (x, y + self.speed[1] * delta_time)
        # Assume falling until a tile below says otherwise, so ledges drop the player.
        self.in_air = True
        self.collide((0.0, self.speed[1]), tiles)

        x, y = self.position
        self.position = (x + self.speed[0] * delta_time, y)
        self.collide((self.speed[0], 0.0), tiles)

    def jump(self) -> None:
        self.speed = (self.speed[0], JUMP_SPEED)
        self.in_air = True
        self.jumped = True

    def collide(self, speed: Vec2, tiles: Sequence[Entity]) -> None:
        """Push the player out of every overlapping tile against the direction of ``speed``."""
        speed_x, speed_y = speed
        for tile in tiles:
            if not self.collide_with_tile(int(self.width), int(self.height), tile):
                continue
            x, y = self.position
            tile_x, tile_y = tile.position
            if speed_x > 0:
                x = tile_x - self.width
            elif speed_x < 0:
                x = tile_x + tile.width
            if speed_y > 0:
                self.speed = (self.speed[0], 0.0)
                y = tile_y - self.height
                self.in_air = True
            elif speed_y < 0:
                self.speed = (self.speed[0], 0.0)
                y = tile_y + tile.height
                self.in_air = False
                self.jumped = False
            self.position = (x, y)