import pytest

from gengine2d.camera import IDENTITY, Camera2D


def _apply(matrix, point):
    vec = (point[0], point[1], 0.0, 1.0)
    return tuple(sum(m * v for m, v in zip(row, vec)) for row in matrix)


@pytest.fixture
def camera():
    cam = Camera2D()
    cam.init(1024, 768)
    return cam


def test_matrix_is_identity_before_update():
    assert Camera2D().camera_matrix == IDENTITY


def test_camera_position_maps_to_clip_origin(camera):
    camera.position = (300.0, -120.0)
    camera.scale = 0.5
    camera.update()
    clip = _apply(camera.camera_matrix, camera.position)
    assert clip[0] == pytest.approx(0.0)
    assert clip[1] == pytest.approx(0.0)


def test_screen_corner_maps_to_clip_corner(camera):
    camera.position = (40.0, 80.0)
    camera.scale = 2.0
    camera.update()
    world = camera.convert_screen_to_world((0.0, 0.0))
    clip = _apply(camera.camera_matrix, world)
    assert clip[0] == pytest.approx(-1.0)
    assert clip[1] == pytest.approx(1.0)


def test_update_only_when_needed(camera):
    camera.position = (10.0, 10.0)
    camera.update()
    first = camera.camera_matrix
    camera.update()
    assert camera.camera_matrix is first
    camera.position = (20.0, 10.0)
    camera.update()
    assert camera.camera_matrix != first


def test_screen_centre_is_camera_position(camera):
    camera.position = (123.0, 456.0)
    assert camera.convert_screen_to_world((512.0, 384.0)) == pytest.approx((123.0, 456.0))


def test_screen_to_world_flips_y_and_scales(camera):
    camera.scale = 2.0
    left_top = camera.convert_screen_to_world((0.0, 0.0))
    assert left_top == pytest.approx((-1024 / 4, 768 / 4))


def test_box_in_view_edges():
    cam = Camera2D()
    assert cam.is_box_in_view((0.0, 0.0), (10.0, 10.0))
    assert cam.is_box_in_view((244.0, 0.0), (10.0, 10.0))
    assert not cam.is_box_in_view((250.0, 0.0), (10.0, 10.0))
    assert not cam.is_box_in_view((0.0, -5000.0), (10.0, 10.0))


def test_box_in_view_respects_scale():
    cam = Camera2D()
    cam.scale = 2.0
    assert not cam.is_box_in_view((200.0, 0.0), (10.0, 10.0))
    cam.scale = 1.0
    assert cam.is_box_in_view((200.0, 0.0), (10.0, 10.0))