"""Camera command execution helpers.

The UI emits discrete :class:`CameraCommand` records carrying already-parsed
numbers or preset ids; :func:`apply_camera_commands` runs them in order
against a :class:`CameraStateMachine` and reports what happened together
with a fresh snapshot for re-rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Optional, Sequence
import logging

from camera_matrix_tool.camera_state import CameraSnapshot
from camera_matrix_tool.state_machine import CameraStateMachine


logger = logging.getLogger(__name__)

CommandKind = Literal[
    "set_position",
    "set_rotation",
    "set_matrix_cell",
    "set_movement_cell",
    "set_boundary",
    "set_initial",
    "reset",
    "toggle_animation",
    "toggle_preset",
    "combine",
    "clear",
]


@dataclass(frozen=True)
class CameraCommand:
    """One user-issued command."""

    kind: CommandKind
    axis: Optional[int] = None
    row: Optional[int] = None
    col: Optional[int] = None
    value: Optional[float] = None
    edge: Optional[Literal["min", "max"]] = None
    preset_id: Optional[str] = None


@dataclass(frozen=True)
class CameraCommandOutcome:
    state_changed: bool
    rejected: tuple[CameraCommand, ...]
    snapshot: CameraSnapshot


def _require(command: CameraCommand, *names: str) -> None:
    missing = [name for name in names if getattr(command, name) is None]
    if missing:
        raise ValueError(f"{command.kind} command requires {', '.join(missing)}")


def _run(machine: CameraStateMachine, command: CameraCommand) -> bool:
    kind = command.kind
    if kind == "set_position":
        _require(command, "axis", "value")
        return machine.set_position_component(command.axis, command.value)
    if kind == "set_rotation":
        _require(command, "axis", "value")
        return machine.set_rotation_component(command.axis, command.value)
    if kind == "set_matrix_cell":
        _require(command, "row", "col", "value")
        return machine.set_matrix_cell(command.row, command.col, command.value)
    if kind == "set_movement_cell":
        _require(command, "row", "col", "value")
        return machine.set_movement_matrix_cell(command.row, command.col, command.value)
    if kind == "set_boundary":
        _require(command, "edge", "axis", "value")
        return machine.set_boundary(command.edge, command.axis, command.value)
    if kind == "set_initial":
        return machine.set_initial_pose()
    if kind == "reset":
        return machine.reset_to_initial()
    if kind == "toggle_animation":
        machine.toggle_animation()
        return True
    if kind == "toggle_preset":
        _require(command, "preset_id")
        return machine.toggle_preset(command.preset_id)
    if kind == "combine":
        return machine.commit_movement_matrix()
    if kind == "clear":
        return machine.clear_movement()
    raise ValueError(f"unsupported camera command kind: {kind}")


def apply_camera_commands(
    commands: Sequence[CameraCommand],
    *,
    machine: CameraStateMachine,
    on_state_changed: Optional[Callable[[CameraSnapshot], None]] = None,
) -> CameraCommandOutcome:
    """Apply *commands* in order and return the outcome plus a snapshot.

    Commands the engine declines (e.g. pose edits while animating) are listed
    in ``rejected``; malformed commands raise ``ValueError``.
    """

    changed = False
    rejected: list[CameraCommand] = []
    for command in commands:
        if _run(machine, command):
            changed = True
        else:
            rejected.append(command)
            logger.debug("command %s declined", command.kind)

    snapshot = machine.snapshot()
    if changed and on_state_changed is not None:
        on_state_changed(snapshot)
    return CameraCommandOutcome(
        state_changed=changed,
        rejected=tuple(rejected),
        snapshot=snapshot,
    )


__all__ = [
    "CameraCommand",
    "CameraCommandOutcome",
    "apply_camera_commands",
]
