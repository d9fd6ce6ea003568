"""Camera state aggregate and its read-only snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

import numpy as np

from camera_matrix_tool import matrix_ops as mops
from camera_matrix_tool.config import ToolConfig


Vec3 = tuple[float, float, float]
Edge = Literal["min", "max"]


@dataclass(frozen=True)
class Boundaries:
    """Axis-aligned box in world space. ``min <= max`` is not enforced."""

    min: Vec3 = (-8.0, 0.5, -8.0)
    max: Vec3 = (8.0, 6.0, 8.0)

    def contains(self, position) -> bool:
        # NaN compares false on both sides and therefore counts as outside.
        return all(lo <= float(p) <= hi for p, lo, hi in zip(position, self.min, self.max))

    def with_value(self, edge: Edge, axis: int, value: float) -> Boundaries:
        if edge == "min":
            return Boundaries(min=_replace_axis(self.min, axis, value), max=self.max)
        if edge == "max":
            return Boundaries(min=self.min, max=_replace_axis(self.max, axis, value))
        raise ValueError(f"boundary edge must be 'min' or 'max', got {edge!r}")


@dataclass(frozen=True)
class CameraPose:
    """What the renderer needs to place its camera for one frame."""

    position: Vec3
    rotation: Vec3


@dataclass
class CameraState:
    """Mutable camera aggregate. Mutate only through ``CameraStateMachine``."""

    position: Vec3 = (1.0, 2.0, 6.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    transform_matrix: np.ndarray = field(default_factory=lambda: mops.translation(1.0, 2.0, 6.0))
    movement_matrix: np.ndarray = field(default_factory=mops.identity)
    initial_position: Vec3 = (1.0, 2.0, 6.0)
    initial_rotation: Vec3 = (0.0, 0.0, 0.0)
    is_animating: bool = False
    boundaries: Boundaries = field(default_factory=Boundaries)

    def __post_init__(self) -> None:
        self.position = _vec3(self.position)
        self.rotation = _vec3(self.rotation)
        self.initial_position = _vec3(self.initial_position)
        self.initial_rotation = _vec3(self.initial_rotation)
        self.transform_matrix = mops.as_matrix(self.transform_matrix)
        self.movement_matrix = mops.as_matrix(self.movement_matrix)

    @classmethod
    def from_pose(
        cls,
        position,
        rotation=(0.0, 0.0, 0.0),
        *,
        boundaries: Optional[Boundaries] = None,
        movement_matrix=None,
        is_animating: bool = False,
    ) -> CameraState:
        """Build a consistent state whose transform is composed from the pose."""

        pos = _vec3(position)
        rot = _vec3(rotation)
        return cls(
            position=pos,
            rotation=rot,
            transform_matrix=mops.compose(pos, rot),
            movement_matrix=mops.identity() if movement_matrix is None else movement_matrix,
            initial_position=pos,
            initial_rotation=rot,
            is_animating=bool(is_animating),
            boundaries=boundaries if boundaries is not None else Boundaries(),
        )

    def pose(self) -> CameraPose:
        return CameraPose(position=self.position, rotation=self.rotation)


@dataclass(frozen=True)
class CameraSnapshot:
    """Read-only copy of the state handed to the UI after each operation."""

    position: Vec3
    rotation: Vec3
    transform_matrix: np.ndarray = field(compare=False)
    movement_matrix: np.ndarray = field(compare=False)
    initial_position: Vec3
    initial_rotation: Vec3
    is_animating: bool
    boundaries: Boundaries
    selected_presets: tuple[str, ...] = ()

    @classmethod
    def capture(cls, state: CameraState, selected_presets=()) -> CameraSnapshot:
        return cls(
            position=state.position,
            rotation=state.rotation,
            transform_matrix=mops.readonly(state.transform_matrix),
            movement_matrix=mops.readonly(state.movement_matrix),
            initial_position=state.initial_position,
            initial_rotation=state.initial_rotation,
            is_animating=state.is_animating,
            boundaries=state.boundaries,
            selected_presets=tuple(selected_presets),
        )

    def same_as(self, other: CameraSnapshot) -> bool:
        """Full equality, matrices included."""

        return (
            self == other
            and np.array_equal(self.transform_matrix, other.transform_matrix)
            and np.array_equal(self.movement_matrix, other.movement_matrix)
        )


def default_camera_state(config: Optional[ToolConfig] = None) -> CameraState:
    cfg = config if config is not None else ToolConfig()
    return CameraState.from_pose(
        cfg.initial_position,
        cfg.initial_rotation,
        boundaries=Boundaries(min=cfg.boundaries_min, max=cfg.boundaries_max),
    )


def _vec3(values) -> Vec3:
    vals = tuple(float(v) for v in values)
    if len(vals) != 3:
        raise ValueError(f"expected 3 components, got {len(vals)}")
    return (vals[0], vals[1], vals[2])


def _replace_axis(values: Vec3, axis: int, value: float) -> Vec3:
    out = list(values)
    out[axis] = float(value)
    return (out[0], out[1], out[2])


__all__ = [
    "Boundaries",
    "CameraPose",
    "CameraSnapshot",
    "CameraState",
    "default_camera_state",
]
