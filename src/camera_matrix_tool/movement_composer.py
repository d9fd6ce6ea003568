"""Compose selected movement presets into a single per-frame matrix.

Both the "combine" command and the step-by-step calculation display go
through :func:`ordered_presets`, so they always agree on factor order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence
import logging

import numpy as np

from camera_matrix_tool import matrix_ops as mops
from camera_matrix_tool.presets import MovementPreset, catalog_index, resolve_preset


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompositionBreakdown:
    """Factors in application order, the running products, and the result."""

    factors: tuple[MovementPreset, ...]
    partials: tuple[np.ndarray, ...]
    result: np.ndarray

    @property
    def is_empty(self) -> bool:
        return not self.factors


def ordered_presets(selected_ids: Iterable[str]) -> tuple[MovementPreset, ...]:
    """Resolve ids, drop unknown ones and sort by (category rank, catalog order)."""

    resolved: dict[str, MovementPreset] = {}
    for preset_id in selected_ids:
        preset = resolve_preset(preset_id)
        if preset is None:
            logger.debug("ignoring unknown preset id %r", preset_id)
            continue
        resolved[preset.id] = preset
    return tuple(sorted(resolved.values(), key=lambda p: (p.rank, catalog_index(p))))


def composition_steps(selected_ids: Iterable[str]) -> CompositionBreakdown:
    factors = ordered_presets(selected_ids)
    acc = mops.identity()
    partials: list[np.ndarray] = []
    for preset in factors:
        acc = acc @ preset.matrix
        partials.append(mops.readonly(acc))
    return CompositionBreakdown(
        factors=factors,
        partials=tuple(partials),
        result=mops.readonly(acc),
    )


def compose_movement(selected_ids: Iterable[str]) -> np.ndarray:
    """Return the composed movement matrix; identity for an empty selection."""

    acc = mops.identity()
    for preset in ordered_presets(selected_ids):
        acc = acc @ preset.matrix
    return acc


def toggle_preset(selection: Sequence[str], preset_id: str) -> tuple[str, ...]:
    """Toggle *preset_id* in *selection*, evicting presets it conflicts with.

    Only direct conflicts are resolved. Unknown ids leave the selection as is.
    """

    preset = resolve_preset(preset_id)
    current = tuple(selection)
    if preset is None:
        return current
    if preset.id in current:
        return tuple(pid for pid in current if pid != preset.id)
    kept = tuple(pid for pid in current if pid not in preset.conflicts_with)
    return kept + (preset.id,)


def describe_breakdown(breakdown: CompositionBreakdown, precision: int = 3) -> Optional[str]:
    """Text version of the calculation panel: factors, then the product."""

    if breakdown.is_empty:
        return None
    blocks = [f"{preset.name}:\n{mops.format_matrix(preset.matrix, precision)}" for preset in breakdown.factors]
    blocks.append(f"Result:\n{mops.format_matrix(breakdown.result, precision)}")
    return "\n x\n".join(blocks[:-1]) + "\n =\n" + blocks[-1]


__all__ = [
    "CompositionBreakdown",
    "compose_movement",
    "composition_steps",
    "describe_breakdown",
    "ordered_presets",
    "toggle_preset",
]
