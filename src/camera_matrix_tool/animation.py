"""Per-frame animation step.

The movement matrix is post-multiplied, i.e. applied in the camera's local
frame. A step whose resulting position leaves the boundary box is not
committed; the camera snaps back to its home pose instead and keeps
animating from there on the next frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional
import logging

from camera_matrix_tool import matrix_ops as mops
from camera_matrix_tool.camera_state import CameraState, Vec3
from camera_matrix_tool.logging_policy import LoggingToggles


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepOutcome:
    kind: Literal["idle", "advanced", "reset"]
    position: Vec3
    rotation: Vec3
    # Position the step would have reached; None when idle or undecomposable.
    attempted_position: Optional[Vec3] = None


def restore_home_pose(state: CameraState) -> None:
    """Move to the home pose and re-derive the transform. Leaves animation alone."""

    state.position = state.initial_position
    state.rotation = state.initial_rotation
    state.transform_matrix = mops.compose(state.position, state.rotation)


def step_animation(
    state: CameraState,
    *,
    toggles: Optional[LoggingToggles] = None,
) -> StepOutcome:
    """Advance *state* by one frame of its movement matrix."""

    if not state.is_animating:
        return StepOutcome("idle", state.position, state.rotation)

    log = toggles or LoggingToggles()
    nxt = state.transform_matrix @ state.movement_matrix
    try:
        parts = mops.decompose(nxt)
    except mops.DegenerateMatrixError as exc:
        logger.warning("animation step produced a degenerate transform (%s); resetting", exc)
        restore_home_pose(state)
        return StepOutcome("reset", state.position, state.rotation)

    if not state.boundaries.contains(parts.position):
        restore_home_pose(state)
        if log.log_boundary_resets and logger.isEnabledFor(logging.INFO):
            logger.info(
                "boundary reset: attempted=(%.3f,%.3f,%.3f) min=%s max=%s",
                *parts.position,
                state.boundaries.min,
                state.boundaries.max,
            )
        return StepOutcome("reset", state.position, state.rotation, parts.position)

    state.transform_matrix = nxt
    state.position = parts.position
    state.rotation = parts.rotation
    if log.log_animation_debug and logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "animation step pos=(%.4f,%.4f,%.4f) rot=(%.4f,%.4f,%.4f)",
            *state.position,
            *state.rotation,
        )
    return StepOutcome("advanced", state.position, state.rotation, parts.position)


__all__ = ["StepOutcome", "restore_home_pose", "step_animation"]
