"""Orbiting camera and the matrices it produces."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

MIN_DISTANCE = 5.0
MAX_DISTANCE = 50.0
ROTATION_SENSITIVITY = 0.01
PITCH_LIMIT = math.pi / 2.0 - 0.1
FIELD_OF_VIEW = math.radians(45.0)
NEAR_PLANE = 0.1
FAR_PLANE = 100.0


def _normalize(v: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(v))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return v / length


def look_at(eye, target, up) -> np.ndarray:
    """Right-handed view matrix, row-major so that ``M @ v`` transforms ``v``."""
    eye = np.asarray(eye, dtype=np.float64)
    target = np.asarray(target, dtype=np.float64)
    up = np.asarray(up, dtype=np.float64)
    f = _normalize(target - eye)
    s = _normalize(np.cross(f, up))
    u = np.cross(s, f)
    return np.array(
        [
            [s[0], s[1], s[2], -np.dot(s, eye)],
            [u[0], u[1], u[2], -np.dot(u, eye)],
            [-f[0], -f[1], -f[2], np.dot(f, eye)],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def perspective(fov_y: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection mapping depth to [-1, 1]."""
    if aspect <= 0:
        raise ValueError("aspect ratio must be positive")
    if far == near:
        raise ValueError("near and far planes must differ")
    t = math.tan(fov_y / 2.0)
    return np.array(
        [
            [1.0 / (aspect * t), 0.0, 0.0, 0.0],
            [0.0, 1.0 / t, 0.0, 0.0],
            [0.0, 0.0, -(far + near) / (far - near), -2.0 * far * near / (far - near)],
            [0.0, 0.0, -1.0, 0.0],
        ]
    )


def translation(offset) -> np.ndarray:
    matrix = np.eye(4)
    matrix[:3, 3] = np.asarray(offset, dtype=np.float64).reshape(3)
    return matrix


@dataclass(frozen=True)
class CameraPreset:
    rotation_x: float
    rotation_y: float
    name: str
    distance: float | None = None


TOP_VIEW = CameraPreset(-1.57, 0.0, "Top View")
SIDE_VIEW = CameraPreset(0.0, 0.0, "Side View")
ANGLED_VIEW = CameraPreset(0.3, 0.0, "Angled View")
PRESETS = (TOP_VIEW, SIDE_VIEW, ANGLED_VIEW)


@dataclass
class OrbitCamera:
    """A camera circling the origin, steered by mouse drag and scroll."""

    distance: float = 20.0
    rotation_x: float = 0.3
    rotation_y: float = 0.0
    dragging: bool = False
    last_x: float = 0.0
    last_y: float = 0.0

    def position(self) -> np.ndarray:
        cos_x = math.cos(self.rotation_x)
        return np.array(
            [
                self.distance * math.sin(self.rotation_y) * cos_x,
                self.distance * math.sin(self.rotation_x),
                self.distance * math.cos(self.rotation_y) * cos_x,
            ]
        )

    def view_matrix(self) -> np.ndarray:
        return look_at(self.position(), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))

    def projection_matrix(self, aspect: float) -> np.ndarray:
        return perspective(FIELD_OF_VIEW, aspect, NEAR_PLANE, FAR_PLANE)

    def on_mouse_move(self, x: float, y: float) -> None:
        if self.dragging:
            self.rotation_y += (x - self.last_x) * ROTATION_SENSITIVITY
            self.rotation_x += (y - self.last_y) * ROTATION_SENSITIVITY
            self.rotation_x = min(max(self.rotation_x, -PITCH_LIMIT), PITCH_LIMIT)
        self.last_x = x
        self.last_y = y

    def on_mouse_button(self, pressed: bool) -> None:
        self.dragging = pressed

    def on_scroll(self, y_offset: float) -> None:
        self.distance = min(max(self.distance - y_offset, MIN_DISTANCE), MAX_DISTANCE)

    def apply_preset(self, preset: CameraPreset) -> None:
        self.rotation_x = preset.rotation_x
        self.rotation_y = preset.rotation_y
        if preset.distance is not None:
            self.distance = min(max(preset.distance, MIN_DISTANCE), MAX_DISTANCE)