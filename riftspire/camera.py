"""Transform helpers and the orthographic and perspective cameras."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

__all__ = [
    "translate",
    "rotate",
    "scale",
    "ortho",
    "perspective",
    "Camera",
    "OrthographicCamera",
    "PerspectiveCamera",
]


def _vec3(values: Sequence[float]) -> np.ndarray:
    arr = np.asarray(values, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"expected three components, got {arr.shape[0]}")
    return arr


def translate(offset: Sequence[float]) -> np.ndarray:
    """Return a 4x4 matrix that moves points by ``offset``."""
    matrix = np.eye(4)
    matrix[:3, 3] = _vec3(offset)
    return matrix


def rotate(angle: float, axis: Sequence[float]) -> np.ndarray:
    """Return a 4x4 matrix rotating ``angle`` radians counterclockwise about ``axis``."""
    direction = _vec3(axis)
    length = float(np.linalg.norm(direction))
    if length == 0.0:
        raise ValueError("rotation axis must not be the zero vector")
    x, y, z = direction / length
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c
    matrix = np.eye(4)
    matrix[:3, :3] = [
        [c + x * x * t, x * y * t - z * s, x * z * t + y * s],
        [y * x * t + z * s, c + y * y * t, y * z * t - x * s],
        [z * x * t - y * s, z * y * t + x * s, c + z * z * t],
    ]
    return matrix


def scale(factors: Sequence[float]) -> np.ndarray:
    """Return a 4x4 matrix scaling each axis by the matching factor."""
    matrix = np.eye(4)
    matrix[:3, :3] = np.diag(_vec3(factors))
    return matrix


def ortho(
    left: float,
    right: float,
    bottom: float,
    top: float,
    near: float = -1.0,
    far: float = 1.0,
) -> np.ndarray:
    """Return a right-handed orthographic projection onto the [-1, 1] clip cube."""
    if left == right or bottom == top or near == far:
        raise ValueError("orthographic bounds must enclose a non-empty volume")
    matrix = np.eye(4)
    matrix[0, 0] = 2.0 / (right - left)
    matrix[1, 1] = 2.0 / (top - bottom)
    matrix[2, 2] = -2.0 / (far - near)
    matrix[0, 3] = -(right + left) / (right - left)
    matrix[1, 3] = -(top + bottom) / (top - bottom)
    matrix[2, 3] = -(far + near) / (far - near)
    return matrix


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Return a right-handed perspective projection; ``fovy`` is in radians."""
    if aspect == 0.0:
        raise ValueError("aspect ratio must not be zero")
    if near == far:
        raise ValueError("near and far clip planes must differ")
    tan_half = math.tan(fovy / 2.0)
    if tan_half == 0.0:
        raise ValueError("field of view must not be zero")
    matrix = np.zeros((4, 4))
    matrix[0, 0] = 1.0 / (aspect * tan_half)
    matrix[1, 1] = 1.0 / tan_half
    matrix[2, 2] = -(far + near) / (far - near)
    matrix[3, 2] = -1.0
    matrix[2, 3] = -(2.0 * far * near) / (far - near)
    return matrix


class Camera:
    """A camera that is nothing more than a projection matrix."""

    def __init__(self, projection: np.ndarray | None = None) -> None:
        if projection is None:
            self._projection = np.eye(4)
        else:
            matrix = np.asarray(projection, dtype=float)
            if matrix.shape != (4, 4):
                raise ValueError("projection must be a 4x4 matrix")
            self._projection = matrix.copy()

    @property
    def projection(self) -> np.ndarray:
        return self._projection.copy()


class OrthographicCamera:
    """Top-down camera for 2D views; rotation is in degrees about the z axis."""

    def __init__(self, left: float, right: float, bottom: float, top: float) -> None:
        self._projection = ortho(left, right, bottom, top, -1.0, 1.0)
        self._view = np.eye(4)
        self._position = np.zeros(3)
        self._rotation = 0.0
        self.zoom = 1.0
        self._view_projection = self._projection @ self._view

    def set_projection(self, left: float, right: float, bottom: float, top: float) -> None:
        self._projection = ortho(left, right, bottom, top, -1.0, 1.0)
        self._view_projection = self._projection @ self._view

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value: Sequence[float]) -> None:
        self._position = _vec3(value)
        self._recalculate_view()

    @property
    def rotation(self) -> float:
        return self._rotation

    @rotation.setter
    def rotation(self, degrees: float) -> None:
        self._rotation = float(degrees)
        self._recalculate_view()

    @property
    def projection_matrix(self) -> np.ndarray:
        return self._projection.copy()

    @property
    def view_matrix(self) -> np.ndarray:
        return self._view.copy()

    @property
    def view_projection_matrix(self) -> np.ndarray:
        return self._view_projection.copy()

    def _recalculate_view(self) -> None:
        transform = translate(self._position) @ rotate(
            math.radians(self._rotation), (0.0, 0.0, 1.0)
        )
        self._view = np.linalg.inv(transform)
        self._view_projection = self._projection @ self._view


class PerspectiveCamera:
    """3D camera; field of view and rotation (pitch, yaw, roll) are in degrees."""

    def __init__(self, fov: float, aspect_ratio: float, near_clip: float, far_clip: float) -> None:
        self._fov = float(fov)
        self._aspect_ratio = float(aspect_ratio)
        self._near_clip = float(near_clip)
        self._far_clip = float(far_clip)
        self._position = np.array([0.0, 0.0, 5.0])
        self._rotation = np.zeros(3)
        self._projection = perspective(math.radians(fov), aspect_ratio, near_clip, far_clip)
        self._view = np.eye(4)
        self._view_projection = self._projection @ self._view
        self._recalculate_view()

    def set_perspective(
        self, fov: float, aspect_ratio: float, near_clip: float, far_clip: float
    ) -> None:
        self._projection = perspective(math.radians(fov), aspect_ratio, near_clip, far_clip)
        self._fov = float(fov)
        self._aspect_ratio = float(aspect_ratio)
        self._near_clip = float(near_clip)
        self._far_clip = float(far_clip)
        self._view_projection = self._projection @ self._view

    @property
    def fov(self) -> float:
        return self._fov

    @property
    def aspect_ratio(self) -> float:
        return self._aspect_ratio

    @property
    def near_clip(self) -> float:
        return self._near_clip

    @property
    def far_clip(self) -> float:
        return self._far_clip

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value: Sequence[float]) -> None:
        self._position = _vec3(value)
        self._recalculate_view()

    @property
    def rotation(self) -> np.ndarray:
        return self._rotation.copy()

    @rotation.setter
    def rotation(self, value: Sequence[float]) -> None:
        self._rotation = _vec3(value)
        self._recalculate_view()

    @property
    def projection_matrix(self) -> np.ndarray:
        return self._projection.copy()

    @property
    def view_matrix(self) -> np.ndarray:
        return self._view.copy()

    @property
    def view_projection_matrix(self) -> np.ndarray:
        return self._view_projection.copy()

    def forward(self) -> np.ndarray:
        """Unit vector the camera looks along, from pitch and yaw only."""
        pitch, yaw, _ = np.radians(self._rotation)
        rotation = rotate(pitch, (1.0, 0.0, 0.0)) @ rotate(yaw, (0.0, 1.0, 0.0))
        direction = (rotation @ np.array([0.0, 0.0, -1.0, 0.0]))[:3]
        return direction / np.linalg.norm(direction)

    def right(self) -> np.ndarray:
        direction = np.cross(self.forward(), np.array([0.0, 1.0, 0.0]))
        return direction / np.linalg.norm(direction)

    def up(self) -> np.ndarray:
        direction = np.cross(self.right(), self.forward())
        return direction / np.linalg.norm(direction)

    def _recalculate_view(self) -> None:
        pitch, yaw, roll = np.radians(self._rotation)
        rotation = (
            rotate(pitch, (1.0, 0.0, 0.0))
            @ rotate(yaw, (0.0, 1.0, 0.0))
            @ rotate(roll, (0.0, 0.0, 1.0))
        )
        transform = translate(self._position) @ rotation
        self._view = np.linalg.inv(transform)
        self._view_projection = self._projection @ self._view