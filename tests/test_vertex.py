import dataclasses

import pytest

from gengine2d.vertex import UV, ColorRGBA8, Position, Texture, Vertex


def test_default_color_is_all_zero():
    assert ColorRGBA8() == ColorRGBA8(0, 0, 0, 0)


def test_color_channels_kept():
    color = ColorRGBA8(255, 128, 0, 255)
    assert (color.r, color.g, color.b, color.a) == (255, 128, 0, 255)


@pytest.mark.parametrize("bad", [-1, 256, 1.5])
def test_color_rejects_out_of_range(bad):
    with pytest.raises(ValueError):
        ColorRGBA8(bad, 0, 0, 0)


def test_vertex_defaults():
    vertex = Vertex()
    assert vertex.position == Position(0.0, 0.0)
    assert vertex.uv == UV(0.0, 0.0)
    assert vertex.color == ColorRGBA8()


def test_vertex_is_immutable():
    vertex = Vertex(Position(1.0, 2.0), ColorRGBA8(1, 2, 3, 4), UV(0.5, 0.25))
    with pytest.raises(dataclasses.FrozenInstanceError):
        vertex.position = Position()
    assert vertex.uv.v == 0.25


def test_texture_fields():
    texture = Texture(id=3, width=64, height=32)
    assert (texture.id, texture.width, texture.height) == (3, 64, 32)
    assert Texture() == Texture(0, 0, 0)