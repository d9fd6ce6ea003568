"""4x4 homogeneous matrix helpers (column-vector convention).

Matrices are ``numpy`` float64 arrays indexed ``[row][col]``. The upper-left
3x3 block holds rotation/scale, column 3 holds translation and the bottom row
is conventionally ``[0, 0, 0, 1]``. ``multiply(a, b)`` applies ``b`` first and
then ``a``, matching the renderer's right-to-left composition.

Euler angles are radians in intrinsic X-Y-Z order. ``decompose`` goes through
a unit quaternion before extracting Euler angles, so it returns *a* valid
Euler triple for the rotation, not necessarily the one that produced it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple
import math

import numpy as np


Vec3 = Tuple[float, float, float]
Quat = Tuple[float, float, float, float]

# Above this |r02| the middle (Y) angle is treated as gimbal locked.
GIMBAL_LOCK_THRESHOLD = 0.9999999
_SCALE_EPSILON = 1e-12


class DegenerateMatrixError(ValueError):
    """Raised when a matrix cannot be decomposed into pose + scale."""


@dataclass(frozen=True)
class DecomposedTransform:
    position: Vec3
    rotation: Vec3
    scale: Vec3
    quaternion: Quat


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float64)


def as_matrix(values) -> np.ndarray:
    """Return a fresh (4, 4) float64 array from nested rows or 16 row-major values."""

    m = np.array(values, dtype=np.float64)
    if m.shape == (16,):
        m = m.reshape(4, 4)
    if m.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix or 16 values, got shape {m.shape}")
    return m


def translation(x: float, y: float, z: float) -> np.ndarray:
    m = identity()
    m[0, 3] = float(x)
    m[1, 3] = float(y)
    m[2, 3] = float(z)
    return m


def rotation_x(rad: float) -> np.ndarray:
    m = identity()
    c = math.cos(rad)
    s = math.sin(rad)
    m[1, 1] = c
    m[1, 2] = -s
    m[2, 1] = s
    m[2, 2] = c
    return m


def rotation_y(rad: float) -> np.ndarray:
    m = identity()
    c = math.cos(rad)
    s = math.sin(rad)
    m[0, 0] = c
    m[0, 2] = s
    m[2, 0] = -s
    m[2, 2] = c
    return m


def rotation_z(rad: float) -> np.ndarray:
    m = identity()
    c = math.cos(rad)
    s = math.sin(rad)
    m[0, 0] = c
    m[0, 1] = -s
    m[1, 0] = s
    m[1, 1] = c
    return m


def multiply(a, b) -> np.ndarray:
    """Return ``a @ b``: the transform that applies ``b`` and then ``a``."""

    return as_matrix(a) @ as_matrix(b)


def compose(position: Sequence[float], rotation: Sequence[float]) -> np.ndarray:
    """Build a rigid transform from a position and XYZ Euler angles (scale 1)."""

    rx, ry, rz = (float(v) for v in rotation)
    m = rotation_x(rx) @ rotation_y(ry) @ rotation_z(rz)
    m[0, 3], m[1, 3], m[2, 3] = (float(v) for v in position)
    return m


def quaternion_from_rotation(r: np.ndarray) -> Quat:
    """Unit quaternion ``(x, y, z, w)`` for a pure 3x3 rotation block."""

    m11, m12, m13 = r[0]
    m21, m22, m23 = r[1]
    m31, m32, m33 = r[2]
    trace = m11 + m22 + m33
    if trace > 0.0:
        s = 0.5 / math.sqrt(trace + 1.0)
        w = 0.25 / s
        x = (m32 - m23) * s
        y = (m13 - m31) * s
        z = (m21 - m12) * s
    elif m11 > m22 and m11 > m33:
        s = 2.0 * math.sqrt(1.0 + m11 - m22 - m33)
        w = (m32 - m23) / s
        x = 0.25 * s
        y = (m12 + m21) / s
        z = (m13 + m31) / s
    elif m22 > m33:
        s = 2.0 * math.sqrt(1.0 + m22 - m11 - m33)
        w = (m13 - m31) / s
        x = (m12 + m21) / s
        y = 0.25 * s
        z = (m23 + m32) / s
    else:
        s = 2.0 * math.sqrt(1.0 + m33 - m11 - m22)
        w = (m21 - m12) / s
        x = (m13 + m31) / s
        y = (m23 + m32) / s
        z = 0.25 * s
    norm = math.sqrt(x * x + y * y + z * z + w * w)
    if norm < _SCALE_EPSILON:
        return (0.0, 0.0, 0.0, 1.0)
    return (float(x / norm), float(y / norm), float(z / norm), float(w / norm))


def rotation_from_quaternion(q: Quat) -> np.ndarray:
    x, y, z, w = q
    x2, y2, z2 = x + x, y + y, z + z
    xx, xy, xz = x * x2, x * y2, x * z2
    yy, yz, zz = y * y2, y * z2, z * z2
    wx, wy, wz = w * x2, w * y2, w * z2
    return np.array(
        [
            [1.0 - (yy + zz), xy - wz, xz + wy],
            [xy + wz, 1.0 - (xx + zz), yz - wx],
            [xz - wy, yz + wx, 1.0 - (xx + yy)],
        ],
        dtype=np.float64,
    )


def euler_from_rotation(r: np.ndarray) -> Vec3:
    """Extract intrinsic XYZ Euler angles from a pure 3x3 rotation block."""

    m13 = float(r[0, 2])
    y = math.asin(max(-1.0, min(1.0, m13)))
    if abs(m13) < GIMBAL_LOCK_THRESHOLD:
        x = math.atan2(-float(r[1, 2]), float(r[2, 2]))
        z = math.atan2(-float(r[0, 1]), float(r[0, 0]))
    else:
        x = math.atan2(float(r[2, 1]), float(r[1, 1]))
        z = 0.0
    return (x, y, z)


def decompose(matrix) -> DecomposedTransform:
    """Split a transform into translation, XYZ Euler rotation and scale.

    Raises :class:`DegenerateMatrixError` for non-finite input or a zero-length
    basis column, so callers never see NaN poses.
    """

    m = as_matrix(matrix)
    if not np.all(np.isfinite(m)):
        raise DegenerateMatrixError("matrix contains non-finite values")

    basis = m[:3, :3]
    sx, sy, sz = (float(v) for v in np.linalg.norm(basis, axis=0))
    if min(sx, sy, sz) < _SCALE_EPSILON:
        raise DegenerateMatrixError(
            f"matrix basis has zero length (scale=({sx:.3g}, {sy:.3g}, {sz:.3g}))"
        )
    if np.linalg.det(basis) < 0.0:
        sx = -sx

    rot = basis / np.array([sx, sy, sz])
    quat = quaternion_from_rotation(rot)
    rotation = euler_from_rotation(rotation_from_quaternion(quat))
    position = (float(m[0, 3]), float(m[1, 3]), float(m[2, 3]))
    return DecomposedTransform(
        position=position,
        rotation=rotation,
        scale=(sx, sy, sz),
        quaternion=quat,
    )


def rotation_block(matrix) -> np.ndarray:
    return as_matrix(matrix)[:3, :3].copy()


def equals(a, b, *, atol: float = 0.0) -> bool:
    """Element-wise equality; display only, never used for control decisions."""

    return bool(np.allclose(as_matrix(a), as_matrix(b), rtol=0.0, atol=float(atol)))


def is_identity(matrix, *, atol: float = 0.0) -> bool:
    return equals(matrix, identity(), atol=atol)


def identity_mask(matrix) -> np.ndarray:
    """Boolean mask of cells that differ from the identity matrix."""

    return as_matrix(matrix) != identity()


def format_matrix(matrix, precision: int = 3) -> str:
    rows: Iterable[Sequence[float]] = as_matrix(matrix).tolist()
    width = precision + 4
    return "\n".join(
        "[ " + " ".join(f"{val:>{width}.{precision}f}" for val in row) + " ]"
        for row in rows
    )


def readonly(matrix) -> np.ndarray:
    m = as_matrix(matrix)
    m.setflags(write=False)
    return m


__all__ = [
    "DecomposedTransform",
    "DegenerateMatrixError",
    "GIMBAL_LOCK_THRESHOLD",
    "as_matrix",
    "compose",
    "decompose",
    "equals",
    "euler_from_rotation",
    "format_matrix",
    "identity",
    "identity_mask",
    "is_identity",
    "multiply",
    "quaternion_from_rotation",
    "readonly",
    "rotation_block",
    "rotation_from_quaternion",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "translation",
]
