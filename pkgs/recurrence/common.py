"""
Common data structures used across the recurrence package.

Contains the Variant enum and the Trajectory result returned by both
recurrence engines.
"""
import numpy as np
from enum import Enum
from dataclasses import dataclass
from typing import Optional


class Variant(Enum):
    """Which recurrence engine produced a trajectory."""
    FIXED = "fixed"
    DRIFT = "drift"


@dataclass(frozen=True)
class Trajectory:
    """Full output of one engine run, indices 0..steps."""
    a: np.ndarray
    x: np.ndarray
    w: Optional[np.ndarray] = None

    def __post_init__(self):
        # arrays are written once by the engine and frozen afterwards
        for arr in (self.a, self.x, self.w):
            if arr is not None:
                arr.setflags(write=False)

    @property
    def steps(self) -> int:
        return len(self.x) - 1

    @property
    def variant(self) -> Variant:
        return Variant.FIXED if self.w is None else Variant.DRIFT
