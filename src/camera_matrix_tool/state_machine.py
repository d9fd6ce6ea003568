"""Camera state machine: the only writer of :class:`CameraState`.

Every public method is one atomic transition: the scalar write and the
re-derivation of the dependent representation happen under the same lock,
so readers never observe a half-applied edit.

Two top-level states exist, idle and animating. While animating, manual
pose and transform edits are ignored; movement, boundary, home-pose and
preset edits stay available.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional
import logging
import math
import operator
import threading

from camera_matrix_tool import matrix_ops as mops
from camera_matrix_tool.animation import StepOutcome, restore_home_pose, step_animation
from camera_matrix_tool.camera_state import (
    CameraPose,
    CameraSnapshot,
    CameraState,
    Edge,
    default_camera_state,
)
from camera_matrix_tool.config import ToolConfig
from camera_matrix_tool.logging_policy import DebugPolicy, load_debug_policy
from camera_matrix_tool.movement_composer import (
    CompositionBreakdown,
    compose_movement,
    composition_steps,
    toggle_preset,
)


logger = logging.getLogger(__name__)


def _check_index(name: str, value: int, size: int) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an int, got {value!r}")
    try:
        idx = operator.index(value)
    except TypeError:
        raise ValueError(f"{name} must be an int, got {value!r}") from None
    if not 0 <= idx < size:
        raise ValueError(f"{name} must be in [0, {size}), got {idx}")
    return idx


def _finite(value: float) -> Optional[float]:
    val = float(value)
    return val if math.isfinite(val) else None


class CameraStateMachine:
    """Owns one :class:`CameraState` plus the current preset selection."""

    def __init__(
        self,
        state: Optional[CameraState] = None,
        *,
        config: Optional[ToolConfig] = None,
        debug_policy: Optional[DebugPolicy] = None,
    ) -> None:
        self._lock = threading.Lock()
        if state is not None:
            # Detached from the caller; every write goes through the lock.
            self._state = replace(
                state,
                transform_matrix=state.transform_matrix.copy(),
                movement_matrix=state.movement_matrix.copy(),
            )
        else:
            self._state = default_camera_state(config)
        self._selection: tuple[str, ...] = ()
        policy = debug_policy if debug_policy is not None else load_debug_policy()
        self._log = policy.logging

    # --- Read side ----------------------------------------------------------------

    @property
    def is_animating(self) -> bool:
        with self._lock:
            return self._state.is_animating

    @property
    def selection(self) -> tuple[str, ...]:
        with self._lock:
            return self._selection

    def snapshot(self) -> CameraSnapshot:
        with self._lock:
            return CameraSnapshot.capture(self._state, self._selection)

    def pose(self) -> CameraPose:
        with self._lock:
            return self._state.pose()

    def composition_steps(self) -> CompositionBreakdown:
        """Step-by-step product of the current selection (not necessarily committed)."""

        with self._lock:
            selection = self._selection
        return composition_steps(selection)

    # --- Pose / transform edits ---------------------------------------------------

    def set_position_component(self, axis: int, value: float) -> bool:
        axis = _check_index("axis", axis, 3)
        val = _finite(value)
        with self._lock:
            if not self._accept_manual_edit("position", val):
                return False
            pos = list(self._state.position)
            pos[axis] = val
            self._apply_pose(tuple(pos), self._state.rotation)
            self._log_edit("position[%d]=%.4f", axis, val)
            return True

    def set_rotation_component(self, axis: int, value: float) -> bool:
        axis = _check_index("axis", axis, 3)
        val = _finite(value)
        with self._lock:
            if not self._accept_manual_edit("rotation", val):
                return False
            rot = list(self._state.rotation)
            rot[axis] = val
            self._apply_pose(self._state.position, tuple(rot))
            self._log_edit("rotation[%d]=%.4f", axis, val)
            return True

    def set_matrix_cell(self, row: int, col: int, value: float) -> bool:
        row = _check_index("row", row, 4)
        col = _check_index("col", col, 4)
        val = _finite(value)
        with self._lock:
            if not self._accept_manual_edit("transform", val):
                return False
            m = self._state.transform_matrix.copy()
            m[row, col] = val
            self._state.transform_matrix = m
            self._state.position = (float(m[0, 3]), float(m[1, 3]), float(m[2, 3]))
            # A basis column may pass through zero while a matrix is typed in
            # cell by cell; the rotation is held until it is decomposable again.
            try:
                self._state.rotation = mops.decompose(m).rotation
            except mops.DegenerateMatrixError as exc:
                logger.warning(
                    "transform[%d][%d]=%r leaves no recoverable rotation (%s); keeping %s",
                    row,
                    col,
                    val,
                    exc,
                    self._state.rotation,
                )
            self._log_edit("transform[%d][%d]=%.4f", row, col, val)
            return True

    # --- Always-permitted edits ---------------------------------------------------

    def set_movement_matrix_cell(self, row: int, col: int, value: float) -> bool:
        row = _check_index("row", row, 4)
        col = _check_index("col", col, 4)
        val = _finite(value)
        if val is None:
            logger.warning("rejecting non-finite movement[%d][%d]=%r", row, col, value)
            return False
        with self._lock:
            self._state.movement_matrix[row, col] = val
            self._log_edit("movement[%d][%d]=%.4f", row, col, val)
            return True

    def set_boundary(self, edge: Edge, axis: int, value: float) -> bool:
        axis = _check_index("axis", axis, 3)
        if edge not in ("min", "max"):
            raise ValueError(f"boundary edge must be 'min' or 'max', got {edge!r}")
        val = _finite(value)
        if val is None:
            logger.warning("rejecting non-finite boundary %s[%d]=%r", edge, axis, value)
            return False
        with self._lock:
            self._state.boundaries = self._state.boundaries.with_value(edge, axis, val)
            self._log_edit("boundary %s[%d]=%.2f", edge, axis, val)
            return True

    def set_initial_pose(self) -> bool:
        with self._lock:
            self._state.initial_position = self._state.position
            self._state.initial_rotation = self._state.rotation
            if self._log.log_camera_info and logger.isEnabledFor(logging.INFO):
                logger.info(
                    "home pose set pos=%s rot=%s",
                    self._state.initial_position,
                    self._state.initial_rotation,
                )
            return True

    def reset_to_initial(self) -> bool:
        """Restore the home pose and stop animating."""

        with self._lock:
            restore_home_pose(self._state)
            self._state.is_animating = False
            if self._log.log_camera_info and logger.isEnabledFor(logging.INFO):
                logger.info("camera reset to home pose pos=%s", self._state.position)
            return True

    def toggle_animation(self) -> bool:
        with self._lock:
            self._state.is_animating = not self._state.is_animating
            if self._log.log_camera_info and logger.isEnabledFor(logging.INFO):
                logger.info("animation %s", "started" if self._state.is_animating else "paused")
            return self._state.is_animating

    # --- Movement presets ---------------------------------------------------------

    def toggle_preset(self, preset_id: str) -> bool:
        with self._lock:
            before = self._selection
            self._selection = toggle_preset(before, preset_id)
            changed = self._selection != before
            if self._log.log_preset_selection and logger.isEnabledFor(logging.INFO):
                logger.info("preset toggle %r -> selection=%s", preset_id, self._selection)
            return changed

    def commit_movement_matrix(self, selected_ids: Optional[Iterable[str]] = None) -> bool:
        """Arm the composition of *selected_ids* (default: current selection)."""

        with self._lock:
            ids = tuple(selected_ids) if selected_ids is not None else self._selection
            self._state.movement_matrix = compose_movement(ids)
            if self._log.log_preset_selection and logger.isEnabledFor(logging.INFO):
                logger.info("movement matrix armed from %s", ids)
            return True

    def clear_movement(self) -> bool:
        with self._lock:
            self._selection = ()
            self._state.movement_matrix = mops.identity()
            return True

    # --- Frame driver -------------------------------------------------------------

    def step(self) -> StepOutcome:
        with self._lock:
            return step_animation(self._state, toggles=self._log)

    # --- Internal -----------------------------------------------------------------

    def _accept_manual_edit(self, what: str, value: Optional[float]) -> bool:
        if self._state.is_animating:
            logger.debug("ignoring %s edit while animating", what)
            return False
        if value is None:
            logger.warning("rejecting non-finite %s edit", what)
            return False
        return True

    def _apply_pose(self, position, rotation) -> None:
        self._state.position = (float(position[0]), float(position[1]), float(position[2]))
        self._state.rotation = (float(rotation[0]), float(rotation[1]), float(rotation[2]))
        self._state.transform_matrix = mops.compose(self._state.position, self._state.rotation)

    def _log_edit(self, fmt: str, *args) -> None:
        if self._log.log_matrix_edits and logger.isEnabledFor(logging.INFO):
            logger.info("edit " + fmt, *args)


__all__ = ["CameraStateMachine"]
