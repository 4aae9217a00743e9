import pygame
import pytest

from gengine2d.camera import Camera2D
from gengine2d.inputs import InputManager
from gengine2d.platformer.entities import (
    JUMP_SPEED,
    MAX_SPEED,
    PLAYER_TEXTURE,
    TILE_WIDTH,
    WHITE,
    Entity,
    Player,
    Tile,
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
        return Texture(id=7, width=64, height=64)

    return load


@pytest.fixture
def inputs():
    return InputManager()


def make_player(position, inputs, loader):
    return Player(position, inputs, Camera2D(), get_texture=loader)


def test_tile_is_a_square_of_tile_width():
    tile = Tile(5, (64.0, 128.0))
    assert (tile.width, tile.height) == (TILE_WIDTH, TILE_WIDTH)
    assert tile.texture_id == 5
    assert tile.position == (64.0, 128.0)
    assert tile.color == WHITE


def test_player_loads_its_texture(loaded, loader, inputs):
    player = make_player((0.0, 0.0), inputs, loader)
    assert loaded == [PLAYER_TEXTURE]
    assert player.texture_id == 7
    assert player.in_air is True
    assert player.jumped is False


def test_collide_with_tile_detects_overlap():
    entity = Entity(position=(10.0, 10.0), width=64, height=64)
    tile = Tile(1, (0.0, 0.0))
    assert entity.collide_with_tile(64, 64, tile) is True


def test_collide_with_tile_touching_edges_do_not_collide():
    entity = Entity(position=(64.0, 0.0), width=64, height=64)
    tile = Tile(1, (0.0, 0.0))
    assert entity.collide_with_tile(64, 64, tile) is False


def test_collide_with_tile_far_apart():
    entity = Entity(position=(500.0, 500.0), width=64, height=64)
    assert entity.collide_with_tile(64, 64, Tile(1, (0.0, 0.0))) is False


def test_draw_adds_one_sprite(loader, inputs):
    batch = RecordingBatch()
    tile = Tile(3, (64.0, 0.0))
    tile.draw(batch)
    assert len(batch.calls) == 1
    dest_rect, uv_rect, texture_id, depth, color = batch.calls[0]
    assert dest_rect == (64.0, 0.0, 64.0, 64.0)
    assert uv_rect == (0.0, 0.0, 1.0, 1.0)
    assert texture_id == 3
    assert color == WHITE


def test_player_lands_on_tile_below(loader, inputs):
    player = make_player((0.0, float(TILE_WIDTH)), inputs, loader)
    tile = Tile(1, (0.0, 0.0))
    player.update([tile], 1.0)
    assert player.position == (0.0, float(TILE_WIDTH))
    assert player.in_air is False
    assert player.jumped is False
    assert player.speed[1] == 0.0


def test_player_falls_without_tiles(loader, inputs):
    player = make_player((0.0, 100.0), inputs, loader)
    player.update([], 1.0)
    assert player.position[1] < 100.0
    assert player.speed[1] < 0.0
    assert player.jumped is True


def test_player_jump_sets_speed(loader, inputs):
    player = make_player((0.0, 0.0), inputs, loader)
    player.jump()
    assert player.speed[1] == JUMP_SPEED
    assert player.in_air is True
    assert player.jumped is True


def test_space_makes_grounded_player_jump(loader, inputs):
    player = make_player((0.0, float(TILE_WIDTH)), inputs, loader)
    tile = Tile(1, (0.0, 0.0))
    player.update([tile], 1.0)
    assert player.in_air is False

    inputs.update()
    inputs.press_key(pygame.K_SPACE)
    player.update([tile], 1.0)
    assert player.speed[1] > 0.0
    assert player.position[1] > float(TILE_WIDTH)
    assert player.jumped is True


def test_moving_right(loader, inputs):
    inputs.press_key(pygame.K_d)
    player = make_player((0.0, 500.0), inputs, loader)
    player.update([], 1.0)
    assert player.position[0] == MAX_SPEED
    assert player.speed[0] == MAX_SPEED


def test_moving_left(loader, inputs):
    inputs.press_key(pygame.K_LEFT)
    player = make_player((0.0, 500.0), inputs, loader)
    player.update([], 1.0)
    assert player.position[0] == -MAX_SPEED


def test_collide_from_left_stops_before_tile(loader, inputs):
    player = make_player((10.0, 0.0), inputs, loader)
    tile = Tile(1, (64.0, 0.0))
    player.collide((MAX_SPEED, 0.0), [tile])
    assert player.position == (0.0, 0.0)


def test_collide_from_right_stops_after_tile(loader, inputs):
    player = make_player((50.0, 0.0), inputs, loader)
    tile = Tile(1, (0.0, 0.0))
    player.collide((-MAX_SPEED, 0.0), [tile])
    assert player.position == (float(TILE_WIDTH), 0.0)


def test_collide_from_below_keeps_player_in_air(loader, inputs):
    player = make_player((0.0, 10.0), inputs, loader)
    player.speed = (0.0, 5.0)
    tile = Tile(1, (0.0, 64.0))
    player.collide((0.0, 5.0), [tile])
    assert player.position == (0.0, 0.0)
    assert player.speed[1] == 0.0
    assert player.in_air is True