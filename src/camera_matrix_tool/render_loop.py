"""Render loop driver helpers."""

from __future__ import annotations

from typing import Callable, Optional
import time

from camera_matrix_tool.camera_state import CameraPose


def run_render_tick(
    *,
    step: Callable[[], object],
    read_pose: Callable[[], CameraPose],
    apply_pose: Callable[[CameraPose], None],
    render_main: Callable[[], None],
    render_overview: Optional[Callable[[], None]] = None,
    perf_counter: Callable[[], float] = time.perf_counter,
) -> float:
    """Execute one frame and return its duration in milliseconds.

    The animation step finishes before the pose is read, so the renderer
    always sees a committed state.
    """

    t0 = perf_counter()
    step()
    apply_pose(read_pose())
    render_main()
    if render_overview is not None:
        render_overview()
    return (perf_counter() - t0) * 1000.0


__all__ = ["run_render_tick"]
