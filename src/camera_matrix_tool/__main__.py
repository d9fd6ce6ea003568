"""
Headless demo: arm a movement from presets and animate the camera.

    python -m camera_matrix_tool --preset forward --preset yaw-left --frames 120
"""

from __future__ import annotations

import argparse
import logging
from types import SimpleNamespace
from typing import Optional, Sequence

from camera_matrix_tool import matrix_ops as mops
from camera_matrix_tool.camera_controller import CameraCommand, apply_camera_commands
from camera_matrix_tool.config import load_tool_config
from camera_matrix_tool.logging_policy import load_debug_policy
from camera_matrix_tool.movement_composer import describe_breakdown
from camera_matrix_tool.presets import available_presets
from camera_matrix_tool.render_bridge import apply_pose, overview_decoration
from camera_matrix_tool.render_loop import run_render_tick
from camera_matrix_tool.state_machine import CameraStateMachine


logger = logging.getLogger("camera_matrix_tool")


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument(
        "--preset",
        action="append",
        default=[],
        choices=sorted(available_presets()),
        help="movement preset to select (repeatable)",
    )
    parser.add_argument("--frames", type=int, default=60, help="number of frames to animate")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
    )

    cfg = load_tool_config()
    policy = load_debug_policy()
    machine = CameraStateMachine(config=cfg, debug_policy=policy)
    logger.info(
        "session start pos=%s bounds=%s..%s fov main=%.0f overview=%.0f",
        cfg.initial_position,
        cfg.boundaries_min,
        cfg.boundaries_max,
        cfg.main_fov_deg,
        cfg.overview_fov_deg,
    )

    commands = [CameraCommand(kind="toggle_preset", preset_id=pid) for pid in args.preset]
    commands += [CameraCommand(kind="combine"), CameraCommand(kind="toggle_animation")]
    apply_camera_commands(commands, machine=machine)

    text = describe_breakdown(machine.composition_steps())
    if text:
        logger.info("movement composition:\n%s", text)

    render_camera = SimpleNamespace(position=None, rotation=None)
    outcomes = []
    total_ms = 0.0
    for _ in range(max(0, args.frames)):
        total_ms += run_render_tick(
            step=lambda: outcomes.append(machine.step()),
            read_pose=machine.pose,
            apply_pose=lambda pose: apply_pose(render_camera, pose),
            render_main=lambda: None,
        )
    resets = sum(1 for outcome in outcomes if outcome.kind == "reset")

    snapshot = machine.snapshot()
    deco = overview_decoration(snapshot)
    logger.info(
        "after %d frames: pos=(%.3f, %.3f, %.3f) rot=(%.3f, %.3f, %.3f) resets=%d avg=%.3fms proxy=%s",
        args.frames,
        *snapshot.position,
        *snapshot.rotation,
        resets,
        total_ms / max(1, args.frames),
        deco.proxy_color,
    )
    logger.info("transform matrix:\n%s", mops.format_matrix(snapshot.transform_matrix))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
