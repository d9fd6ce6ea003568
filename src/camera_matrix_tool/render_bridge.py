"""Hand-off from the engine to the rendering collaborator.

The engine never drives a renderer directly. Each frame the renderer reads a
:class:`CameraPose` and writes it onto its own camera object; the overview
view additionally draws the boundary box and a camera proxy derived from the
current snapshot. VisPy maps row vectors (``coords @ matrix``), so engine
matrices are transposed on the way into a ``MatrixTransform``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from vispy.visuals.transforms import MatrixTransform  # type: ignore

from camera_matrix_tool import matrix_ops as mops
from camera_matrix_tool.camera_state import Boundaries, CameraPose, CameraSnapshot


IDLE_PROXY_COLOR = "#4a90e2"
ANIMATING_PROXY_COLOR = "#e74c3c"
BOUNDARY_COLOR = "#ffff00"

# Line-segment endpoint pairs for the camera proxy's view frustum (camera space,
# looking down -Z).
FRUSTUM_POINTS = np.array(
    [
        [0, 0, 0], [1, 0.75, -2],
        [0, 0, 0], [-1, 0.75, -2],
        [0, 0, 0], [1, -0.75, -2],
        [0, 0, 0], [-1, -0.75, -2],
        [1, 0.75, -2], [-1, 0.75, -2],
        [-1, 0.75, -2], [-1, -0.75, -2],
        [-1, -0.75, -2], [1, -0.75, -2],
        [1, -0.75, -2], [1, 0.75, -2],
    ],
    dtype=np.float64,
)


@dataclass(frozen=True)
class OverviewDecoration:
    boundary_edges: np.ndarray
    proxy_segments: np.ndarray
    proxy_transform: np.ndarray
    proxy_color: str
    boundary_color: str


def apply_pose(camera: Any, pose: CameraPose) -> None:
    """Write the pose onto a renderer camera exposing ``position``/``rotation``."""

    if camera is None:
        return
    camera.position = tuple(pose.position)  # type: ignore[attr-defined]
    camera.rotation = tuple(pose.rotation)  # type: ignore[attr-defined]


def to_vispy_transform(matrix) -> MatrixTransform:
    return MatrixTransform(mops.as_matrix(matrix).T)


def place_node(node: Any, matrix) -> None:
    """Position a VisPy scene node (e.g. the overview camera proxy)."""

    node.transform = to_vispy_transform(matrix)


def boundary_box_edges(boundaries: Boundaries) -> np.ndarray:
    """The 12 box edges as 24 segment endpoints, bottom face, top face, then pillars."""

    (x0, y0, z0), (x1, y1, z1) = boundaries.min, boundaries.max
    bottom = [
        (x0, y0, z0), (x1, y0, z0),
        (x1, y0, z0), (x1, y0, z1),
        (x1, y0, z1), (x0, y0, z1),
        (x0, y0, z1), (x0, y0, z0),
    ]
    top = [(x, y1, z) for (x, _y, z) in bottom]
    pillars = [
        (x0, y0, z0), (x0, y1, z0),
        (x1, y0, z0), (x1, y1, z0),
        (x1, y0, z1), (x1, y1, z1),
        (x0, y0, z1), (x0, y1, z1),
    ]
    return np.array(bottom + top + pillars, dtype=np.float64)


def camera_proxy_segments(transform) -> np.ndarray:
    m = mops.as_matrix(transform)
    homo = np.hstack([FRUSTUM_POINTS, np.ones((len(FRUSTUM_POINTS), 1))])
    return (homo @ m.T)[:, :3]


def overview_decoration(snapshot: CameraSnapshot) -> OverviewDecoration:
    proxy = mops.compose(snapshot.position, snapshot.rotation)
    return OverviewDecoration(
        boundary_edges=boundary_box_edges(snapshot.boundaries),
        proxy_segments=camera_proxy_segments(proxy),
        proxy_transform=proxy,
        proxy_color=ANIMATING_PROXY_COLOR if snapshot.is_animating else IDLE_PROXY_COLOR,
        boundary_color=BOUNDARY_COLOR,
    )


__all__ = [
    "ANIMATING_PROXY_COLOR",
    "BOUNDARY_COLOR",
    "FRUSTUM_POINTS",
    "IDLE_PROXY_COLOR",
    "OverviewDecoration",
    "apply_pose",
    "boundary_box_edges",
    "camera_proxy_segments",
    "overview_decoration",
    "place_node",
    "to_vispy_transform",
]
