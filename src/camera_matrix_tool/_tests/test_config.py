from __future__ import annotations

from camera_matrix_tool.config import ToolConfig, load_tool_config


def test_defaults_when_env_empty() -> None:
    cfg = load_tool_config({})
    assert cfg == ToolConfig()
    assert cfg.initial_position == (1.0, 2.0, 6.0)
    assert cfg.boundaries_min == (-8.0, 0.5, -8.0)
    assert cfg.boundaries_max == (8.0, 6.0, 8.0)
    assert cfg.main_fov_deg == 75.0
    assert cfg.overview_fov_deg == 50.0
    assert cfg.overview_camera_position == (12.0, 10.0, 12.0)
    assert cfg.frame_interval_ms == 16


def test_env_overrides() -> None:
    cfg = load_tool_config(
        {
            "CAMERA_MATRIX_INITIAL_POSITION": "0, 1.5, -3",
            "CAMERA_MATRIX_INITIAL_ROTATION": "0;0.5;0",
            "CAMERA_MATRIX_BOUNDS_MIN": "-1,-1,-1",
            "CAMERA_MATRIX_BOUNDS_MAX": "1,1,1",
            "CAMERA_MATRIX_MAIN_FOV": "60",
            "CAMERA_MATRIX_OVERVIEW_FOV": "45.5",
            "CAMERA_MATRIX_OVERVIEW_POSITION": "20,20,20",
            "CAMERA_MATRIX_FRAME_MS": "33",
        }
    )
    assert cfg.initial_position == (0.0, 1.5, -3.0)
    assert cfg.initial_rotation == (0.0, 0.5, 0.0)
    assert cfg.boundaries_min == (-1.0, -1.0, -1.0)
    assert cfg.boundaries_max == (1.0, 1.0, 1.0)
    assert cfg.main_fov_deg == 60.0
    assert cfg.overview_fov_deg == 45.5
    assert cfg.overview_camera_position == (20.0, 20.0, 20.0)
    assert cfg.frame_interval_ms == 33


def test_malformed_values_fall_back(caplog) -> None:
    cfg = load_tool_config(
        {
            "CAMERA_MATRIX_INITIAL_POSITION": "1,2",
            "CAMERA_MATRIX_BOUNDS_MIN": "a,b,c",
            "CAMERA_MATRIX_BOUNDS_MAX": "1,nan,1",
            "CAMERA_MATRIX_MAIN_FOV": "wide",
            "CAMERA_MATRIX_OVERVIEW_FOV": "inf",
            "CAMERA_MATRIX_FRAME_MS": "fast",
        }
    )
    assert cfg == ToolConfig()
    assert "CAMERA_MATRIX_MAIN_FOV" in caplog.text


def test_blank_vector_uses_default() -> None:
    assert load_tool_config({"CAMERA_MATRIX_INITIAL_POSITION": "  "}).initial_position == (1.0, 2.0, 6.0)


def test_frame_interval_is_at_least_one_ms() -> None:
    assert load_tool_config({"CAMERA_MATRIX_FRAME_MS": "0"}).frame_interval_ms == 1
    assert load_tool_config({"CAMERA_MATRIX_FRAME_MS": "-5"}).frame_interval_ms == 1
