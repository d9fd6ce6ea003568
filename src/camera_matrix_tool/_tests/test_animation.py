from __future__ import annotations

import logging

import numpy as np
import pytest

from camera_matrix_tool import matrix_ops as mops
from camera_matrix_tool.animation import step_animation
from camera_matrix_tool.camera_state import Boundaries, CameraState
from camera_matrix_tool.logging_policy import DebugPolicy
from camera_matrix_tool.presets import resolve_preset
from camera_matrix_tool.state_machine import CameraStateMachine


WIDE = Boundaries(min=(-100.0, -100.0, -100.0), max=(100.0, 100.0, 100.0))


def _state_at_origin(movement, *, boundaries=WIDE, animating=True) -> CameraState:
    return CameraState.from_pose(
        (0.0, 0.0, 0.0),
        boundaries=boundaries,
        movement_matrix=movement,
        is_animating=animating,
    )


def test_step_is_idle_when_not_animating() -> None:
    state = _state_at_origin(resolve_preset("forward").matrix, animating=False)
    outcome = step_animation(state)

    assert outcome.kind == "idle"
    assert state.position == (0.0, 0.0, 0.0)
    assert mops.is_identity(state.transform_matrix)


def test_forward_step_from_identity() -> None:
    state = _state_at_origin(resolve_preset("forward").matrix)
    outcome = step_animation(state)

    assert outcome.kind == "advanced"
    assert state.position == pytest.approx((0.0, 0.0, -0.02))
    assert state.rotation == pytest.approx((0.0, 0.0, 0.0))
    np.testing.assert_allclose(state.transform_matrix, resolve_preset("forward").matrix)
    assert state.is_animating is True


def test_movement_is_applied_in_camera_local_frame() -> None:
    # camera yawed 90 degrees: local -Z points along world -X
    state = CameraState.from_pose(
        (0.0, 0.0, 0.0),
        (0.0, np.pi / 2 * 0.999, 0.0),
        boundaries=WIDE,
        movement_matrix=resolve_preset("forward").matrix,
        is_animating=True,
    )
    step_animation(state)

    assert state.position[0] == pytest.approx(-0.02, abs=1e-4)
    assert state.position[2] == pytest.approx(0.0, abs=1e-4)


def test_rotation_preset_accumulates_yaw() -> None:
    state = _state_at_origin(resolve_preset("yaw-left").matrix)
    for _ in range(10):
        step_animation(state)

    assert state.position == pytest.approx((0.0, 0.0, 0.0))
    assert state.rotation[1] == pytest.approx(10 * np.arcsin(0.02 / np.hypot(0.9998, 0.02)), rel=1e-3)
    np.testing.assert_allclose(
        state.transform_matrix,
        mops.compose(state.position, state.rotation),
        atol=1e-3,
    )


def test_out_of_bounds_step_resets_to_home_pose() -> None:
    # default boundaries: min=(-8, 0.5, -8), max=(8, 6, 8)
    machine = CameraStateMachine(debug_policy=DebugPolicy())
    machine.set_position_component(0, 0.0)
    machine.set_initial_pose()
    machine.set_position_component(0, 8.45)
    machine.set_position_component(2, 0.0)
    machine.set_movement_matrix_cell(0, 3, 0.05)
    machine.toggle_animation()

    outcome = machine.step()

    assert outcome.kind == "reset"
    assert outcome.attempted_position == pytest.approx((8.5, 2.0, 0.0))
    snap = machine.snapshot()
    assert snap.position == (0.0, 2.0, 6.0)
    assert snap.rotation == (0.0, 0.0, 0.0)
    np.testing.assert_array_equal(snap.transform_matrix, mops.compose(snap.position, snap.rotation))
    # reset on escape does not stop the animation
    assert snap.is_animating is True


def test_animation_continues_from_home_pose_after_reset() -> None:
    state = CameraState.from_pose(
        (0.0, 1.0, 0.0),
        boundaries=Boundaries(min=(-1.0, 0.5, -0.05), max=(1.0, 2.0, 1.0)),
        movement_matrix=resolve_preset("forward").matrix,
        is_animating=True,
    )
    kinds = [step_animation(state).kind for _ in range(4)]

    assert kinds == ["advanced", "advanced", "reset", "advanced"]
    assert state.position == pytest.approx((0.0, 1.0, -0.02))


def test_boundary_is_inclusive() -> None:
    state = _state_at_origin(
        resolve_preset("forward").matrix,
        boundaries=Boundaries(min=(0.0, 0.0, -0.02), max=(0.0, 0.0, 0.0)),
    )
    assert step_animation(state).kind == "advanced"


def test_inverted_boundary_box_always_resets() -> None:
    # min > max on x: every step is out of bounds, so the camera never moves
    state = _state_at_origin(
        resolve_preset("forward").matrix,
        boundaries=Boundaries(min=(1.0, -1.0, -1.0), max=(-1.0, 1.0, 1.0)),
    )
    for _ in range(3):
        assert step_animation(state).kind == "reset"
    assert state.position == (0.0, 0.0, 0.0)


def test_degenerate_step_resets_instead_of_committing_nan() -> None:
    state = _state_at_origin(np.zeros((4, 4)))
    outcome = step_animation(state)

    assert outcome.kind == "reset"
    assert outcome.attempted_position is None
    assert state.position == (0.0, 0.0, 0.0)
    assert np.all(np.isfinite(state.transform_matrix))


def test_boundary_reset_is_logged(caplog) -> None:
    state = _state_at_origin(
        resolve_preset("forward").matrix,
        boundaries=Boundaries(min=(-1.0, -1.0, 0.0), max=(1.0, 1.0, 1.0)),
    )
    with caplog.at_level(logging.INFO, logger="camera_matrix_tool.animation"):
        step_animation(state)
    assert any("boundary reset" in rec.getMessage() for rec in caplog.records)
