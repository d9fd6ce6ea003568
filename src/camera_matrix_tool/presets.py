"""Movement preset registry.

Each preset is one frame's worth of an elementary camera motion expressed as
a 4x4 homogeneous matrix. The registry is built once at import time and never
mutated; lookups hand out the shared frozen entries with read-only matrices.

Composition order is governed by category rank (translation, rotation,
complex), not by registry order. Registry order is only used as a tie-break
inside a category so that composed results do not depend on the order in
which a user ticked the presets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Mapping, Optional, Sequence

import numpy as np

from camera_matrix_tool.matrix_ops import readonly


Category = Literal["translation", "rotation", "complex"]

CATEGORY_RANK: Mapping[str, int] = {"translation": 0, "rotation": 1, "complex": 2}

STEP = 0.02
# cos/sin of roughly 0.02 rad, truncated the way the presets were authored.
_COS = 0.9998
_SIN = 0.02


@dataclass(frozen=True)
class MovementPreset:
    """Immutable catalog entry."""

    id: str
    name: str
    category: Category
    matrix: np.ndarray = field(repr=False, compare=False)
    description: str = ""
    conflicts_with: frozenset[str] = frozenset()

    @property
    def rank(self) -> int:
        return CATEGORY_RANK[self.category]


def _translation_preset(
    preset_id: str,
    name: str,
    description: str,
    *,
    axis: int,
    step: float,
    conflicts_with: str,
) -> MovementPreset:
    m = np.eye(4)
    m[axis, 3] = step
    return MovementPreset(
        id=preset_id,
        name=name,
        category="translation",
        matrix=readonly(m),
        description=description,
        conflicts_with=frozenset({conflicts_with}),
    )


def _rotation_preset(
    preset_id: str,
    name: str,
    description: str,
    *,
    rows: Sequence[Sequence[float]],
    conflicts_with: str,
) -> MovementPreset:
    return MovementPreset(
        id=preset_id,
        name=name,
        category="rotation",
        matrix=readonly(rows),
        description=description,
        conflicts_with=frozenset({conflicts_with}),
    )


_CATALOG: tuple[MovementPreset, ...] = (
    _translation_preset("forward", "Forward", "Move forward (negative Z)", axis=2, step=-STEP, conflicts_with="backward"),
    _translation_preset("backward", "Backward", "Move backward (positive Z)", axis=2, step=STEP, conflicts_with="forward"),
    _translation_preset("left", "Left", "Move left (negative X)", axis=0, step=-STEP, conflicts_with="right"),
    _translation_preset("right", "Right", "Move right (positive X)", axis=0, step=STEP, conflicts_with="left"),
    _translation_preset("up", "Up", "Move up (positive Y)", axis=1, step=STEP, conflicts_with="down"),
    _translation_preset("down", "Down", "Move down (negative Y)", axis=1, step=-STEP, conflicts_with="up"),
    _rotation_preset(
        "yaw-left",
        "Yaw Left",
        "Rotate left around Y-axis",
        rows=[
            [_COS, 0, _SIN, 0],
            [0, 1, 0, 0],
            [-_SIN, 0, _COS, 0],
            [0, 0, 0, 1],
        ],
        conflicts_with="yaw-right",
    ),
    _rotation_preset(
        "yaw-right",
        "Yaw Right",
        "Rotate right around Y-axis",
        rows=[
            [_COS, 0, -_SIN, 0],
            [0, 1, 0, 0],
            [_SIN, 0, _COS, 0],
            [0, 0, 0, 1],
        ],
        conflicts_with="yaw-left",
    ),
    _rotation_preset(
        "pitch-up",
        "Pitch Up",
        "Look up around X-axis",
        rows=[
            [1, 0, 0, 0],
            [0, _COS, -_SIN, 0],
            [0, _SIN, _COS, 0],
            [0, 0, 0, 1],
        ],
        conflicts_with="pitch-down",
    ),
    _rotation_preset(
        "pitch-down",
        "Pitch Down",
        "Look down around X-axis",
        rows=[
            [1, 0, 0, 0],
            [0, _COS, _SIN, 0],
            [0, -_SIN, _COS, 0],
            [0, 0, 0, 1],
        ],
        conflicts_with="pitch-up",
    ),
    MovementPreset(
        id="spiral-up",
        name="Spiral Up",
        category="complex",
        matrix=readonly(
            [
                [0.999, 0, 0.045, 0],
                [0, 1, 0, 0.01],
                [-0.045, 0, 0.999, -0.01],
                [0, 0, 0, 1],
            ]
        ),
        description="Rotate + move up + forward",
    ),
)

_PRESETS: dict[str, MovementPreset] = {preset.id: preset for preset in _CATALOG}
_CATALOG_INDEX: dict[str, int] = {preset.id: idx for idx, preset in enumerate(_CATALOG)}


def resolve_preset(preset_id: Optional[str]) -> Optional[MovementPreset]:
    """Return the preset registered under *preset_id*.

    Matching is case-insensitive; surrounding whitespace is stripped. Unknown
    ids return ``None`` so callers can drop them silently.
    """

    if preset_id is None:
        return None
    slug = preset_id.strip().lower()
    if not slug:
        return None
    return _PRESETS.get(slug)


def catalog_index(preset: MovementPreset) -> int:
    return _CATALOG_INDEX[preset.id]


def category_rank(category: str) -> int:
    try:
        return CATEGORY_RANK[category]
    except KeyError:
        raise ValueError(f"unknown preset category: {category!r}") from None


def presets_in_category(category: str) -> tuple[MovementPreset, ...]:
    category_rank(category)
    return tuple(preset for preset in _CATALOG if preset.category == category)


def available_presets() -> Mapping[str, MovementPreset]:
    """Expose the registry (in catalog order) for UI listing or debugging."""

    return dict(_PRESETS)


__all__ = [
    "CATEGORY_RANK",
    "Category",
    "MovementPreset",
    "available_presets",
    "catalog_index",
    "category_rank",
    "presets_in_category",
    "resolve_preset",
]
