"""Centralised logging policy for the camera transform engine.

All env var parsing for logging toggles happens here so the engine modules
depend on a structured policy rather than scattered ``os.getenv`` calls.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


def _env_bool(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "yes", "on"}:
        return True
    if val in {"0", "false", "no", "off"}:
        return False
    try:
        return bool(int(raw))
    except ValueError:
        return default


@dataclass(frozen=True)
class LoggingToggles:
    """Engine logging flags."""

    log_camera_info: bool = False
    log_matrix_edits: bool = False
    log_preset_selection: bool = False
    log_animation_debug: bool = False
    log_boundary_resets: bool = True


@dataclass(frozen=True)
class DebugPolicy:
    enabled: bool = False
    logging: LoggingToggles = LoggingToggles()


def load_debug_policy(env: Optional[Mapping[str, str]] = None) -> DebugPolicy:
    """Read debug/logging flags from the provided environment mapping."""

    if env is None:
        env = os.environ

    # The master switch turns every toggle on unless individually disabled.
    debug_enabled = _env_bool(env, "CAMERA_MATRIX_DEBUG", False)
    toggles = LoggingToggles(
        log_camera_info=_env_bool(env, "CAMERA_MATRIX_LOG_CAMERA_INFO", debug_enabled),
        log_matrix_edits=_env_bool(env, "CAMERA_MATRIX_LOG_MATRIX_EDITS", debug_enabled),
        log_preset_selection=_env_bool(env, "CAMERA_MATRIX_LOG_PRESETS", debug_enabled),
        log_animation_debug=_env_bool(env, "CAMERA_MATRIX_LOG_ANIMATION", debug_enabled),
        log_boundary_resets=_env_bool(env, "CAMERA_MATRIX_LOG_BOUNDARY_RESETS", True),
    )
    return DebugPolicy(enabled=debug_enabled, logging=toggles)


__all__ = ["DebugPolicy", "LoggingToggles", "load_debug_policy"]
