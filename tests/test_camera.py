import math

import numpy as np
import pytest

from orbitsim.camera import (
    PITCH_LIMIT,
    TOP_VIEW,
    CameraPreset,
    OrbitCamera,
    look_at,
    perspective,
    translation,
)


def test_defaults_and_position_distance():
    cam = OrbitCamera()
    assert cam.distance == 20.0 and cam.rotation_x == 0.3
    assert np.isclose(np.linalg.norm(cam.position()), cam.distance)


def test_view_matrix_maps_eye_to_origin_and_origin_forward():
    cam = OrbitCamera(distance=12.0, rotation_x=0.4, rotation_y=1.1)
    view = cam.view_matrix()
    eye = np.append(cam.position(), 1.0)
    assert np.allclose(view @ eye, [0, 0, 0, 1], atol=1e-9)
    assert np.allclose(view @ np.array([0, 0, 0, 1.0]), [0, 0, -12.0, 1], atol=1e-9)


def test_view_rotation_is_orthonormal():
    view = look_at((3, 4, 5), (0, 0, 0), (0, 1, 0))
    rot = view[:3, :3]
    assert np.allclose(rot @ rot.T, np.eye(3), atol=1e-9)


def test_look_at_degenerate_raises():
    with pytest.raises(ValueError):
        look_at((1, 1, 1), (1, 1, 1), (0, 1, 0))


def test_perspective_maps_near_and_far_planes():
    proj = perspective(math.radians(45.0), 1.5, 0.1, 100.0)
    near = proj @ np.array([0, 0, -0.1, 1.0])
    far = proj @ np.array([0, 0, -100.0, 1.0])
    assert np.isclose(near[2] / near[3], -1.0)
    assert np.isclose(far[2] / far[3], 1.0)


def test_projection_matrix_aspect_scaling():
    cam = OrbitCamera()
    wide, square = cam.projection_matrix(2.0), cam.projection_matrix(1.0)
    assert np.isclose(wide[0, 0] * 2.0, square[0, 0])
    assert np.isclose(wide[1, 1], square[1, 1])


@pytest.mark.parametrize("aspect", [0.0, -1.0])
def test_perspective_rejects_bad_aspect(aspect):
    with pytest.raises(ValueError):
        perspective(1.0, aspect, 0.1, 100.0)


def test_translation_moves_origin():
    assert np.allclose(translation((1, -2, 3)) @ np.array([0, 0, 0, 1.0]), [1, -2, 3, 1])


def test_scroll_clamps_distance():
    cam = OrbitCamera()
    cam.on_scroll(100.0)
    assert cam.distance == 5.0
    cam.on_scroll(-100.0)
    assert cam.distance == 50.0
    cam.on_scroll(3.0)
    assert cam.distance == 47.0


def test_mouse_move_without_drag_only_tracks():
    cam = OrbitCamera()
    cam.on_mouse_move(30.0, 40.0)
    assert (cam.rotation_x, cam.rotation_y) == (0.3, 0.0)
    assert (cam.last_x, cam.last_y) == (30.0, 40.0)


def test_drag_rotates_and_clamps_pitch():
    cam = OrbitCamera()
    cam.on_mouse_button(True)
    cam.on_mouse_move(10.0, 0.0)
    assert np.isclose(cam.rotation_y, 10.0 * 0.01)
    cam.on_mouse_move(10.0, 10000.0)
    assert cam.rotation_x == PITCH_LIMIT
    cam.on_mouse_button(False)
    cam.on_mouse_move(500.0, -500.0)
    assert cam.rotation_x == PITCH_LIMIT


def test_apply_presets():
    cam = OrbitCamera(distance=30.0)
    cam.apply_preset(TOP_VIEW)
    assert (cam.rotation_x, cam.rotation_y, cam.distance) == (-1.57, 0.0, 30.0)
    cam.apply_preset(CameraPreset(0.1, 0.2, "close", distance=1.0))
    assert cam.distance == 5.0