"""Ships and lasers of the space shooter game."""

from collections.abc import Callable, Sequence
from enum import IntEnum

import pygame

from ..camera import Camera2D
from ..inputs import InputManager
from ..resources import get_texture as _shared_get_texture
from ..sprite_batch import SpriteBatch
from ..vertex import ColorRGBA8, Texture

Vec2 = tuple[float, float]
TextureLoader = Callable[[str], Texture]

TEXTURE_DIR = "../assets/textures"
PLAYER_TEXTURE = f"{TEXTURE_DIR}/flea_spaceship.png"
LASER_TEXTURE = f"{TEXTURE_DIR}/lazer.png"

WHITE = ColorRGBA8(255, 255, 255, 255)
SCREEN_HEIGHT = 768
MAX_VELOCITY = 10.0
ENEMY_JUMP_SPEED = 24.0
MAX_PROJECTILES = 3
PROJECTILE_SPEED: Vec2 = (0.0, 10.0)
_MUZZLE_OFFSET: Vec2 = (22.0, 38.0)
_FULL_UV = (0.0, 0.0, 1.0, 1.0)


class Entity:
    """Something on screen with a sprite, a size and a speed."""

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

    def collide_with_entity(self, width: int, height: int, entity: "Entity") -> bool:
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


class EnemyType(IntEnum):
    STILL = 0
    X_MOVING = 1
    JUMPING = 2
    REVERSEJUMPING = 3
    X_MOVINGJUMPING = 4


class Enemy(Entity):
    """An alien ship moving at a constant speed."""

    JUMP_SPEED = ENEMY_JUMP_SPEED

    def __init__(
        self,
        texture_id: int,
        speed: Vec2,
        position: Vec2,
        enemy_type: EnemyType = EnemyType.STILL,
    ) -> None:
        super().__init__(
            position=position,
            width=59.0,
            height=47.0,
            texture_id=texture_id,
            color=WHITE,
            speed=speed,
        )
        self.type = EnemyType(enemy_type)
        self.destroyed = False
        self.in_air = True
        self.jumped = False
        self.normal_gravity = True
        self.gravity_acceleration = 0.8

    def update(self, projectiles: Sequence["Projectile"], delta_time: float) -> None:
        x, y = self.position
        self.position = (x + self.speed[0] * delta_time, y + self.speed[1] * delta_time)

    def apply_jump(self) -> None:
        """Start a jump: upwards, or downwards for reverse-jumping enemies."""
        self.in_air = True
        self.jumped = True
        vertical = -self.JUMP_SPEED if self.type is EnemyType.REVERSEJUMPING else self.JUMP_SPEED
        self.speed = (self.speed[0], vertical)

    def apply_collisions(
        self, speed: Vec2, projectiles: Sequence["Projectile"]
    ) -> list["Projectile"]:
        """Return the projectiles overlapping this enemy; they do not alter it."""
        return [
            projectile
            for projectile in projectiles
            if self.collide_with_entity(int(self.width), int(self.height), projectile)
        ]


class Projectile(Entity):
    """A laser bolt that destroys the first enemies it touches."""

    def __init__(
        self,
        speed: Vec2,
        position: Vec2,
        get_texture: TextureLoader = _shared_get_texture,
    ) -> None:
        super().__init__(
            position=position,
            width=4.0,
            height=32.0,
            texture_id=get_texture(LASER_TEXTURE).id,
            color=WHITE,
            speed=speed,
        )
        self.start_position: Vec2 = self.position
        self.destroyed = False

    def update(self, enemies: Sequence[Enemy], delta_time: float) -> None:
        x, y = self.position
        self.position = (x, y + self.speed[1] * delta_time)
        self.apply_collisions(enemies)

    def apply_collisions(self, enemies: Sequence[Enemy]) -> None:
        """Destroy this projectile and every enemy it overlaps."""
        for enemy in enemies:
            if self.collide_with_entity(int(self.width), int(self.height), enemy):
                self.destroyed = True
                enemy.destroyed = True


class Player(Entity):
    """The player's ship: moves sideways and fires up to three lasers at a time."""

    def __init__(
        self,
        position: Vec2,
        input_manager: InputManager,
        camera: Camera2D,
        get_texture: TextureLoader = _shared_get_texture,
    ) -> None:
        super().__init__(
            position=position,
            width=48.0,
            height=41.0,
            texture_id=get_texture(PLAYER_TEXTURE).id,
            color=WHITE,
        )
        self.input_manager = input_manager
        self.camera = camera
        self.projectiles: list[Projectile] = []
        self._get_texture = get_texture

    def update(self, enemies: Sequence[Enemy], delta_time: float) -> None:
        inputs = self.input_manager
        if inputs.is_key_pressed(pygame.K_LCTRL):
            self.shoot_projectile()

        if inputs.is_key_down(pygame.K_a) or inputs.is_key_down(pygame.K_LEFT):
            speed_x = -MAX_VELOCITY
        elif inputs.is_key_down(pygame.K_d) or inputs.is_key_down(pygame.K_RIGHT):
            speed_x = MAX_VELOCITY
        else:
            speed_x = 0.0
        self.speed = (speed_x, self.speed[1])

        x, y = self.position
        self.position = (x, y + self.speed[1] * delta_time)
        self.collide((0.0, self.speed[1]), enemies)
        x, y = self.position
        self.position = (x + self.speed[0] * delta_time, y)
        self.collide((self.speed[0], 0.0), enemies)

        for projectile in self.projectiles:
            projectile.update(enemies, delta_time)
        top = SCREEN_HEIGHT // 2
        self.projectiles = [
            projectile
            for projectile in self.projectiles
            if not projectile.destroyed and projectile.position[1] <= top
        ]

    def collide(self, speed: Vec2, enemies: Sequence[Enemy]) -> list[Enemy]:
        """Return the enemies the ship overlaps; they do not block its movement."""
        return [
            enemy
            for enemy in enemies
            if self.collide_with_entity(int(self.width), int(self.height), enemy)
        ]

    def shoot_projectile(self) -> None:
        """Fire a laser from the ship's nose unless three are already in flight."""
        if len(self.projectiles) < MAX_PROJECTILES:
            x, y = self.position
            self.projectiles.append(
                Projectile(
                    PROJECTILE_SPEED,
                    (x + _MUZZLE_OFFSET[0], y + _MUZZLE_OFFSET[1]),
                    self._get_texture,
                )
            )