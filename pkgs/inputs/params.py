"""
Immutable parameter sets for the recurrence explorer.

A ParameterSet holds the raw cell values exactly as typed (text or numbers).
Every edit returns a new ParameterSet; rejected edits return the same object.
``resolve`` produces the numeric arrays the engines consume.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .coercion import RawValue, accept_numeric_text, safe_parse_float

logger = logging.getLogger('RecurrenceCore')

STEPS_MIN, STEPS_MAX = 5, 100

DEFAULT_A0 = (0.5, 2.0)
DEFAULT_X0 = 1.0
DEFAULT_W = ((0.95, 0.1), (0.05, 0.9))
DEFAULT_W_EVOLVE = (
    (0.99, 0.01, 0.00, 0.00),
    (0.00, 0.99, 0.00, 0.00),
    (0.00, 0.00, 0.99, 0.01),
    (0.00, 0.00, 0.00, 0.99),
)
DEFAULT_STEPS = 50


class ParameterShapeError(ValueError):
    """Raised when a parameter record has the wrong number of cells."""


def clamp_steps(steps: int) -> int:
    return max(STEPS_MIN, min(STEPS_MAX, int(steps)))


def _as_row(values: Any, length: int, name: str) -> Tuple[RawValue, ...]:
    if isinstance(values, (str, bytes)) or not hasattr(values, '__len__'):
        raise ParameterShapeError(f"{name} must be a sequence of {length} values, got {values!r}")
    if len(values) != length:
        raise ParameterShapeError(f"{name} must have {length} entries, got {len(values)}")
    return tuple(values)


def _as_grid(values: Any, rows: int, cols: int, name: str) -> Tuple[Tuple[RawValue, ...], ...]:
    grid = _as_row(values, rows, name)
    return tuple(_as_row(r, cols, f"{name}[{i}]") for i, r in enumerate(grid))


def _replace_cell(grid, row: int, col: int, value):
    if not (0 <= row < len(grid) and 0 <= col < len(grid[0])):
        raise IndexError(f"cell ({row}, {col}) outside {len(grid)}x{len(grid[0])} matrix")
    return tuple(
        tuple(value if (i, j) == (row, col) else v for j, v in enumerate(r))
        for i, r in enumerate(grid)
    )


@dataclass(frozen=True)
class ResolvedParameters:
    """Numeric parameters ready for the engines."""
    a0: np.ndarray
    x0: float
    w: np.ndarray
    steps: int
    w_evolve: Optional[np.ndarray] = None


@dataclass(frozen=True)
class ParameterSet:
    """Raw parameter record as held by the presentation layer."""
    a0: Tuple[RawValue, RawValue] = DEFAULT_A0
    x0: RawValue = DEFAULT_X0
    w: Tuple[Tuple[RawValue, RawValue], Tuple[RawValue, RawValue]] = DEFAULT_W
    steps: int = DEFAULT_STEPS
    w_evolve: Optional[Tuple[Tuple[RawValue, ...], ...]] = field(default=None)

    def __post_init__(self):
        object.__setattr__(self, 'a0', _as_row(self.a0, 2, 'a0'))
        object.__setattr__(self, 'w', _as_grid(self.w, 2, 2, 'w'))
        if self.w_evolve is not None:
            object.__setattr__(self, 'w_evolve', _as_grid(self.w_evolve, 4, 4, 'w_evolve'))

    @classmethod
    def defaults(cls, drift: bool = False) -> "ParameterSet":
        """Default parameters of the fixed (or, with drift=True, evolving) variant."""
        return cls(w_evolve=DEFAULT_W_EVOLVE if drift else None)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ParameterSet":
        """Build from a config mapping; accepts w/w0 and w_evolve/W_evolve spellings."""
        data = data or {}
        w = data.get('w', data.get('w0', DEFAULT_W))
        w_evolve = data.get('w_evolve', data.get('W_evolve'))
        return cls(
            a0=data.get('a0', DEFAULT_A0),
            x0=data.get('x0', DEFAULT_X0),
            w=w,
            steps=clamp_steps(data.get('steps', DEFAULT_STEPS)),
            w_evolve=w_evolve,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'a0': list(self.a0),
            'x0': self.x0,
            'w': [list(r) for r in self.w],
            'steps': self.steps,
        }
        if self.w_evolve is not None:
            data['w_evolve'] = [list(r) for r in self.w_evolve]
        return data

    @property
    def has_drift(self) -> bool:
        return self.w_evolve is not None

    # --- edits -----------------------------------------------------------

    def with_a0(self, index: int, value: RawValue) -> "ParameterSet":
        if not 0 <= index < 2:
            raise IndexError(f"a0 index {index} outside 0..1")
        if not accept_numeric_text(value):
            return self
        a0 = list(self.a0)
        a0[index] = value
        return replace(self, a0=tuple(a0))

    def with_x0(self, value: RawValue) -> "ParameterSet":
        if not accept_numeric_text(value):
            return self
        return replace(self, x0=value)

    def with_w(self, row: int, col: int, value: RawValue) -> "ParameterSet":
        if not accept_numeric_text(value):
            return self
        return replace(self, w=_replace_cell(self.w, row, col, value))

    def with_w_evolve(self, row: int, col: int, value: RawValue) -> "ParameterSet":
        if self.w_evolve is None:
            raise ParameterShapeError("parameter set has no evolution matrix")
        if not accept_numeric_text(value):
            return self
        return replace(self, w_evolve=_replace_cell(self.w_evolve, row, col, value))

    def with_steps(self, value: Any) -> "ParameterSet":
        """Set the step count, clamped to [STEPS_MIN, STEPS_MAX]; non-integers are ignored."""
        try:
            steps = int(value)
        except (TypeError, ValueError, OverflowError):
            logger.debug(f"Ignoring non-integer steps value {value!r}")
            return self
        return replace(self, steps=clamp_steps(steps))

    def with_drift(self, w_evolve=DEFAULT_W_EVOLVE) -> "ParameterSet":
        return replace(self, w_evolve=w_evolve)

    def without_drift(self) -> "ParameterSet":
        return replace(self, w_evolve=None)

    # --- coercion --------------------------------------------------------

    def resolve(self) -> ResolvedParameters:
        """Coerce every cell to a finite float."""
        a0 = np.array([safe_parse_float(v) for v in self.a0], dtype=np.float64)
        w = np.array([[safe_parse_float(v) for v in r] for r in self.w], dtype=np.float64)
        w_evolve = None
        if self.w_evolve is not None:
            w_evolve = np.array(
                [[safe_parse_float(v) for v in r] for r in self.w_evolve], dtype=np.float64
            )
        return ResolvedParameters(
            a0=a0,
            x0=safe_parse_float(self.x0),
            w=w,
            steps=int(self.steps),
            w_evolve=w_evolve,
        )
