"""First-person camera with yaw/pitch orientation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Collection

from .keybinds import Scancode

Vec3 = tuple[float, float, float]
Mat4 = tuple[tuple[float, float, float, float], ...]

MOVE_SPEED = 2.5
MOUSE_SENSITIVITY = 0.0022
PITCH_LIMIT = 1.5

_UP: Vec3 = (0.0, 1.0, 0.0)


def _normalize(v: Vec3) -> Vec3:
    length = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    return (v[0] / length, v[1] / length, v[2] / length)


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _add(a: Vec3, b: Vec3, scale: float = 1.0) -> Vec3:
    return (a[0] + b[0] * scale, a[1] + b[1] * scale, a[2] + b[2] * scale)


@dataclass
class Camera:
    """Eye position plus yaw and pitch angles in radians."""

    position: Vec3 = (0.0, 0.0, 0.0)
    yaw_radians: float = 0.0
    pitch_radians: float = 0.0

    def forward(self) -> Vec3:
        """Unit view direction."""
        cos_pitch = math.cos(self.pitch_radians)
        return _normalize(
            (
                math.cos(self.yaw_radians) * cos_pitch,
                math.sin(self.pitch_radians),
                math.sin(self.yaw_radians) * cos_pitch,
            )
        )

    def view(self) -> Mat4:
        """Right-handed look-at view matrix, as four rows."""
        eye = self.position
        f = self.forward()
        s = _normalize(_cross(f, _UP))
        u = _cross(s, f)
        return (
            (s[0], s[1], s[2], -_dot(s, eye)),
            (u[0], u[1], u[2], -_dot(u, eye)),
            (-f[0], -f[1], -f[2], _dot(f, eye)),
            (0.0, 0.0, 0.0, 1.0),
        )

    def update_from_keyboard(self, keys: Collection[Scancode], delta_seconds: float) -> None:
        """Fly the camera using the held keys (WASD, space up, left ctrl down)."""
        speed = MOVE_SPEED * delta_seconds
        fx, _, fz = self.forward()
        flat = _normalize((fx, 0.0, fz))
        right = _normalize(_cross(flat, _UP))

        pos = self.position
        if Scancode.W in keys:
            pos = _add(pos, flat, speed)
        if Scancode.S in keys:
            pos = _add(pos, flat, -speed)
        if Scancode.A in keys:
            pos = _add(pos, right, -speed)
        if Scancode.D in keys:
            pos = _add(pos, right, speed)
        if Scancode.SPACE in keys:
            pos = (pos[0], pos[1] + speed, pos[2])
        if Scancode.LCTRL in keys:
            pos = (pos[0], pos[1] - speed, pos[2])
        self.position = pos

    def update_from_mouse_delta(self, delta_x: float, delta_y: float) -> None:
        """Turn the camera by a mouse movement; pitch is clamped to ±1.5 rad."""
        self.yaw_radians += delta_x * MOUSE_SENSITIVITY
        self.pitch_radians -= delta_y * MOUSE_SENSITIVITY
        self.pitch_radians = max(-PITCH_LIMIT, min(PITCH_LIMIT, self.pitch_radians))