import pygame
import pytest

from gengine2d.camera import Camera2D
from gengine2d.inputs import InputManager
from gengine2d.spaceshooter.entities import (
    ENEMY_JUMP_SPEED,
    LASER_TEXTURE,
    MAX_PROJECTILES,
    MAX_VELOCITY,
    PLAYER_TEXTURE,
    SCREEN_HEIGHT,
    WHITE,
    Enemy,
    EnemyType,
    Entity,
    Player,
    Projectile,
)
from gengine2d.vertex import Texture


class RecordingBatch:
    def __init__(self):
        self.calls = []

    def draw(self, *args):
        self.calls.append(args)


@pytest.fixture
def loaded():
    return []


@pytest.fixture
def loader(loaded):
    def load(path):
        loaded.append(path)
        return Texture(id=len(loaded), width=8, height=8)

    return load


@pytest.fixture
def inputs():
    return InputManager()


def make_player(inputs, loader, position=(0.0, 0.0)):
    return Player(position, inputs, Camera2D(), get_texture=loader)


def test_enemy_type_by_number_reverse_jumps():
    enemy = Enemy(1, (0.0, 0.0), (0.0, 0.0), EnemyType(3))
    assert enemy.type is EnemyType.REVERSEJUMPING
    enemy.apply_jump()
    assert enemy.speed[1] == -ENEMY_JUMP_SPEED


def test_enemy_defaults():
    enemy = Enemy(3, (1.0, 0.0), (10.0, 20.0), EnemyType.X_MOVING)
    assert enemy.position == (10.0, 20.0)
    assert enemy.texture_id == 3
    assert enemy.type is EnemyType.X_MOVING
    assert enemy.destroyed is False
    assert enemy.color == WHITE


def test_enemy_update_moves_by_speed():
    enemy = Enemy(1, (2.0, -3.0), (10.0, 20.0))
    enemy.update([], 2.0)
    assert enemy.position == (14.0, 14.0)


@pytest.mark.parametrize(
    "enemy_type", [EnemyType.STILL, EnemyType.JUMPING, EnemyType.X_MOVINGJUMPING]
)
def test_apply_jump_goes_up(enemy_type):
    enemy = Enemy(1, (0.0, 0.0), (0.0, 0.0), enemy_type)
    enemy.apply_jump()
    assert enemy.speed[1] == ENEMY_JUMP_SPEED
    assert enemy.in_air is True
    assert enemy.jumped is True


def test_apply_jump_reverse_goes_down():
    enemy = Enemy(1, (0.0, 0.0), (0.0, 0.0), EnemyType.REVERSEJUMPING)
    enemy.apply_jump()
    assert enemy.speed[1] == -ENEMY_JUMP_SPEED


def test_enemy_apply_collisions_reports_overlaps(loader):
    enemy = Enemy(1, (0.0, 0.0), (0.0, 0.0))
    near = Projectile((0.0, 10.0), (5.0, 5.0), loader)
    far = Projectile((0.0, 10.0), (500.0, 500.0), loader)
    assert enemy.apply_collisions((0.0, 0.0), [near, far]) == [near]
    assert enemy.destroyed is False
    assert near.destroyed is False


def test_collide_with_entity_overlap_and_miss():
    a = Entity(position=(0.0, 0.0), width=10, height=10)
    b = Entity(position=(5.0, 5.0), width=10, height=10)
    c = Entity(position=(10.0, 0.0), width=10, height=10)
    assert a.collide_with_entity(10, 10, b) is True
    assert a.collide_with_entity(10, 10, c) is False


def test_projectile_construction(loaded, loader):
    projectile = Projectile((0.0, 10.0), (1.0, 2.0), loader)
    assert loaded == [LASER_TEXTURE]
    assert projectile.start_position == (1.0, 2.0)
    assert projectile.destroyed is False


def test_projectile_hit_destroys_both(loader):
    enemy = Enemy(1, (0.0, 0.0), (0.0, 20.0))
    projectile = Projectile((0.0, 10.0), (10.0, 0.0), loader)
    projectile.update([enemy], 1.0)
    assert projectile.position == (10.0, 10.0)
    assert projectile.destroyed is True
    assert enemy.destroyed is True


def test_projectile_miss_leaves_enemy(loader):
    enemy = Enemy(1, (0.0, 0.0), (300.0, 300.0))
    projectile = Projectile((0.0, 10.0), (0.0, 0.0), loader)
    projectile.update([enemy], 1.0)
    assert projectile.destroyed is False
    assert enemy.destroyed is False


def test_player_loads_texture(loaded, loader, inputs):
    player = make_player(inputs, loader)
    assert loaded == [PLAYER_TEXTURE]
    assert player.texture_id == 1


def test_shoot_is_limited(loader, inputs):
    player = make_player(inputs, loader)
    for _ in range(MAX_PROJECTILES + 2):
        player.shoot_projectile()
    assert len(player.projectiles) == MAX_PROJECTILES


def test_shot_starts_at_muzzle(loader, inputs):
    player = make_player(inputs, loader, (100.0, -334.0))
    player.shoot_projectile()
    projectile = player.projectiles[0]
    assert projectile.position[0] > 100.0
    assert projectile.position[1] > -334.0
    assert projectile.speed[1] > 0.0


def test_ctrl_fires(loader, inputs):
    inputs.press_key(pygame.K_LCTRL)
    player = make_player(inputs, loader, (0.0, -300.0))
    player.update([], 1.0)
    assert len(player.projectiles) == 1


def test_player_moves_left(loader, inputs):
    inputs.press_key(pygame.K_a)
    player = make_player(inputs, loader)
    player.update([], 1.0)
    assert player.position == (-MAX_VELOCITY, 0.0)


def test_player_stands_still_without_keys(loader, inputs):
    player = make_player(inputs, loader, (5.0, 6.0))
    player.update([], 1.0)
    assert player.position == (5.0, 6.0)


def test_projectile_leaving_screen_is_removed(loader, inputs):
    player = make_player(inputs, loader, (0.0, -300.0))
    player.shoot_projectile()
    player.projectiles[0].position = (22.0, SCREEN_HEIGHT // 2 - 1.0)
    player.update([], 1.0)
    assert player.projectiles == []


def test_projectile_hitting_enemy_is_removed(loader, inputs):
    player = make_player(inputs, loader, (0.0, -300.0))
    player.shoot_projectile()
    x, y = player.projectiles[0].position
    enemy = Enemy(1, (0.0, 0.0), (x - 10.0, y + 5.0))
    player.update([enemy], 1.0)
    assert player.projectiles == []
    assert enemy.destroyed is True


def test_player_collide_does_not_move(loader, inputs):
    player = make_player(inputs, loader)
    enemy = Enemy(1, (0.0, 0.0), (10.0, 10.0))
    assert player.collide((MAX_VELOCITY, 0.0), [enemy]) == [enemy]
    assert player.position == (0.0, 0.0)


def test_draw_adds_sprite(loader):
    batch = RecordingBatch()
    enemy = Enemy(4, (0.0, 0.0), (1.0, 2.0))
    enemy.draw(batch)
    assert len(batch.calls) == 1
    dest_rect, uv_rect, texture_id, depth, color = batch.calls[0]
    assert dest_rect == (1.0, 2.0, enemy.width, enemy.height)
    assert texture_id == 4
    assert color == WHITE