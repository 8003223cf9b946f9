"""Pydantic schemas for the engine service API."""

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel

from pkgs.inputs import DEFAULT_A0, DEFAULT_X0, DEFAULT_W, DEFAULT_STEPS, ParameterSet

Cell = Union[float, str]


class CalculateRequest(BaseModel):
    """Raw parameter record; cells may be numbers or partially typed text."""
    a0: List[Cell] = list(DEFAULT_A0)
    x0: Cell = DEFAULT_X0
    w: List[List[Cell]] = [list(r) for r in DEFAULT_W]
    w_evolve: Optional[List[List[Cell]]] = None
    steps: int = DEFAULT_STEPS
    variant: Literal["fixed", "drift", "auto"] = "auto"

    def to_parameter_set(self) -> ParameterSet:
        params = ParameterSet.from_dict({
            'a0': self.a0,
            'x0': self.x0,
            'w': self.w,
            'w_evolve': self.w_evolve,
            'steps': self.steps,
        })
        if self.variant == "fixed":
            return params.without_drift()
        if self.variant == "drift" and not params.has_drift:
            return params.with_drift()
        return params


class CalculateResult(BaseModel):
    """Result of one recomputation."""
    success: bool
    variant: Optional[str] = None
    steps: Optional[int] = None
    final_x: Optional[float] = None
    equations: List[str] = []
    records: List[Dict[str, Union[int, float]]] = []
    message: Optional[str] = None
