"""Text-field filtering at the UI boundary.

Scalar fields are edited as text and committed on blur or Enter. Text that
does not parse as a finite number is discarded and the field reverts to its
last committed value, so invalid input never reaches the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Optional
import math


@dataclass(frozen=True)
class FieldFormat:
    step: float
    precision: int


FIELD_FORMATS: Mapping[str, FieldFormat] = {
    "position": FieldFormat(step=0.1, precision=1),
    "rotation": FieldFormat(step=0.1, precision=2),
    "transform": FieldFormat(step=0.01, precision=2),
    "movement": FieldFormat(step=0.001, precision=3),
    "boundary": FieldFormat(step=0.5, precision=1),
}


def parse_scalar(text: Optional[str], previous: float) -> float:
    """Return *text* as a float, or *previous* when it is not a finite number."""

    if text is None:
        return float(previous)
    try:
        val = float(text.strip())
    except ValueError:
        return float(previous)
    return val if math.isfinite(val) else float(previous)


def format_scalar(value: float, precision: int) -> str:
    return f"{float(value):.{int(precision)}f}"


class ScalarField:
    """One editable numeric field: local text, focus tracking, commit/revert."""

    def __init__(
        self,
        value: float,
        on_commit: Callable[[float], Optional[bool]],
        *,
        precision: int = 2,
    ) -> None:
        self._value = float(value)
        self._on_commit = on_commit
        self._precision = int(precision)
        self._focused = False
        self.text = format_scalar(self._value, self._precision)

    @classmethod
    def for_field(cls, kind: str, value: float, on_commit: Callable[[float], Optional[bool]]) -> ScalarField:
        return cls(value, on_commit, precision=FIELD_FORMATS[kind].precision)

    @property
    def value(self) -> float:
        return self._value

    def focus(self) -> None:
        self._focused = True

    def type_text(self, text: str) -> None:
        self.text = text

    def sync(self, value: float) -> None:
        """Engine value changed; refresh the display unless the user is typing."""

        self._value = float(value)
        if not self._focused:
            self.text = format_scalar(self._value, self._precision)

    def commit(self) -> bool:
        """Blur/Enter. Returns True when the engine took the parsed value.

        A callback returning ``False`` means the engine declined the edit
        (e.g. while animating); the field then shows the last committed value.
        """

        self._focused = False
        parsed = parse_scalar(self.text, math.nan)
        accepted = not math.isnan(parsed) and self._on_commit(parsed) is not False
        if accepted:
            self._value = parsed
        self.text = format_scalar(self._value, self._precision)
        return accepted


__all__ = ["FIELD_FORMATS", "FieldFormat", "ScalarField", "format_scalar", "parse_scalar"]
