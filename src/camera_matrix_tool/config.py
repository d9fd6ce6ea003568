"""Typed configuration for the camera transform engine.

`load_tool_config()` reads an environment mapping once and returns an
immutable :class:`ToolConfig`; the rest of the code receives that object
instead of reading ``os.environ`` itself. Malformed values fall back to the
defaults so a typo never prevents the tool from starting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional
import logging
import math
import os


logger = logging.getLogger(__name__)

Vec3 = tuple[float, float, float]


# ---- Helpers -----------------------------------------------------------------

def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    v = env.get(name)
    if v is None:
        return float(default)
    try:
        val = float(v)
    except ValueError:
        logger.warning("ignoring malformed %s=%r", name, v)
        return float(default)
    if not math.isfinite(val):
        logger.warning("ignoring non-finite %s=%r", name, v)
        return float(default)
    return val


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    v = env.get(name)
    if v is None:
        return int(default)
    try:
        return int(v)
    except ValueError:
        logger.warning("ignoring malformed %s=%r", name, v)
        return int(default)


def _env_vec3(env: Mapping[str, str], name: str, default: Vec3) -> Vec3:
    v = env.get(name)
    if v is None or v.strip() == "":
        return default
    parts = [p for p in v.replace(";", ",").split(",") if p.strip() != ""]
    if len(parts) != 3:
        logger.warning("ignoring %s=%r: expected three comma-separated numbers", name, v)
        return default
    try:
        vals = tuple(float(p) for p in parts)
    except ValueError:
        logger.warning("ignoring malformed %s=%r", name, v)
        return default
    if not all(math.isfinite(x) for x in vals):
        logger.warning("ignoring non-finite %s=%r", name, v)
        return default
    return (vals[0], vals[1], vals[2])


# ---- Config ------------------------------------------------------------------

@dataclass(frozen=True)
class ToolConfig:
    """Session defaults and renderer-facing constants."""

    initial_position: Vec3 = (1.0, 2.0, 6.0)
    initial_rotation: Vec3 = (0.0, 0.0, 0.0)
    boundaries_min: Vec3 = (-8.0, 0.5, -8.0)
    boundaries_max: Vec3 = (8.0, 6.0, 8.0)
    main_fov_deg: float = 75.0
    overview_fov_deg: float = 50.0
    overview_camera_position: Vec3 = (12.0, 10.0, 12.0)
    frame_interval_ms: int = 16


def load_tool_config(env: Optional[Mapping[str, str]] = None) -> ToolConfig:
    if env is None:
        env = os.environ
    base = ToolConfig()
    cfg = ToolConfig(
        initial_position=_env_vec3(env, "CAMERA_MATRIX_INITIAL_POSITION", base.initial_position),
        initial_rotation=_env_vec3(env, "CAMERA_MATRIX_INITIAL_ROTATION", base.initial_rotation),
        boundaries_min=_env_vec3(env, "CAMERA_MATRIX_BOUNDS_MIN", base.boundaries_min),
        boundaries_max=_env_vec3(env, "CAMERA_MATRIX_BOUNDS_MAX", base.boundaries_max),
        main_fov_deg=_env_float(env, "CAMERA_MATRIX_MAIN_FOV", base.main_fov_deg),
        overview_fov_deg=_env_float(env, "CAMERA_MATRIX_OVERVIEW_FOV", base.overview_fov_deg),
        overview_camera_position=_env_vec3(
            env, "CAMERA_MATRIX_OVERVIEW_POSITION", base.overview_camera_position
        ),
        frame_interval_ms=max(1, _env_int(env, "CAMERA_MATRIX_FRAME_MS", base.frame_interval_ms)),
    )
    logger.debug("Resolved ToolConfig: %s", cfg)
    return cfg


__all__ = ["ToolConfig", "load_tool_config"]
