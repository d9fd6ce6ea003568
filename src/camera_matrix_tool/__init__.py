"""
camera-matrix-tool: camera transform engine for an interactive matrix lab.

Keeps a camera's position/rotation and its 4x4 transform in sync, composes
named movement presets into a per-frame movement matrix, and steps the
camera inside a boundary box once per rendered frame.
"""

from camera_matrix_tool.camera_controller import (
    CameraCommand,
    CameraCommandOutcome,
    apply_camera_commands,
)
from camera_matrix_tool.camera_state import (
    Boundaries,
    CameraPose,
    CameraSnapshot,
    CameraState,
    default_camera_state,
)
from camera_matrix_tool.movement_composer import compose_movement, composition_steps, toggle_preset
from camera_matrix_tool.presets import MovementPreset, available_presets, resolve_preset
from camera_matrix_tool.state_machine import CameraStateMachine

__version__ = "0.1.0"

# The VisPy adapter (render_bridge) is imported on demand by renderer code.
__all__ = [
    "Boundaries",
    "CameraCommand",
    "CameraCommandOutcome",
    "CameraPose",
    "CameraSnapshot",
    "CameraState",
    "CameraStateMachine",
    "MovementPreset",
    "__version__",
    "apply_camera_commands",
    "available_presets",
    "compose_movement",
    "composition_steps",
    "default_camera_state",
    "resolve_preset",
    "toggle_preset",
]
