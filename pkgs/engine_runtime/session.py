"""
Recurrence session: the presentation-side state of one explorer instance.

Holds the current ParameterSet and the last computed Trajectory. Edits replace
the whole parameter set; recomputation only happens when ``calculate`` is
called (initial load or an explicit user action).
"""
import logging
from typing import Any, Dict, List, Optional

import numpy as np

from ..inputs import ParameterSet
from ..observability import EventBus, PARAMETERS_UPDATED, INPUT_REJECTED, CALCULATED
from ..recurrence import Trajectory, Variant, evolve, evolve_with_drift, to_records
from .recorder import SimpleRecorder

logger = logging.getLogger('RecurrenceCore')


class RecurrenceSession:
    """Parameter/result pair for a single explorer view."""

    def __init__(self, params: Optional[ParameterSet] = None,
                 bus: Optional[EventBus] = None,
                 recorder: Optional[SimpleRecorder] = None):
        self.params = params if params is not None else ParameterSet.defaults()
        self.bus = bus if bus is not None else EventBus()
        self.recorder = recorder
        self.trajectory: Optional[Trajectory] = None
        self._calc_count = 0

    @property
    def variant(self) -> Variant:
        return Variant.DRIFT if self.params.has_drift else Variant.FIXED

    def _apply(self, updated: ParameterSet, field: str, value: Any) -> bool:
        if updated is self.params:
            self.bus.publish(INPUT_REJECTED, {'field': field, 'value': value})
            return False
        self.params = updated
        self.bus.publish(PARAMETERS_UPDATED, {'field': field, 'value': value})
        return True

    # --- edits; each returns True if the value was accepted ---------------

    def set_a0(self, index: int, value) -> bool:
        return self._apply(self.params.with_a0(index, value), f'a0[{index}]', value)

    def set_x0(self, value) -> bool:
        return self._apply(self.params.with_x0(value), 'x0', value)

    def set_w(self, row: int, col: int, value) -> bool:
        return self._apply(self.params.with_w(row, col, value), f'w[{row}][{col}]', value)

    def set_w_evolve(self, row: int, col: int, value) -> bool:
        return self._apply(self.params.with_w_evolve(row, col, value),
                           f'w_evolve[{row}][{col}]', value)

    def set_steps(self, value) -> bool:
        return self._apply(self.params.with_steps(value), 'steps', value)

    def replace_params(self, params: ParameterSet):
        self.params = params
        self.bus.publish(PARAMETERS_UPDATED, {'field': '*', 'value': params})

    # --- computation ------------------------------------------------------

    def calculate(self) -> Trajectory:
        """Recompute the whole trajectory from the current parameters."""
        p = self.params.resolve()
        if p.w_evolve is not None:
            traj = evolve_with_drift(p.a0, p.x0, p.w, p.w_evolve, p.steps)
        else:
            traj = evolve(p.a0, p.x0, p.w, p.steps)

        self.trajectory = traj
        self._calc_count += 1

        if not np.all(np.isfinite(traj.x)):
            logger.warning(f"Trajectory diverged to non-finite values within {p.steps} steps")
        logger.info(f"Calculated {traj.variant.value} trajectory: "
                    f"steps={p.steps}, x[{p.steps}]={traj.x[-1]:.4f}")

        if self.recorder is not None:
            self.recorder.clear()
            self.recorder.set_metadata(variant=traj.variant.value,
                                       parameters=self.params.to_dict())
            self.recorder.log_records(to_records(traj))

        self.bus.publish(CALCULATED, traj)
        return traj

    def records(self) -> List[Dict[str, float]]:
        """Chart records of the last calculation (empty before the first one)."""
        return to_records(self.trajectory) if self.trajectory is not None else []

    def snapshot(self) -> Dict[str, Any]:
        snap = {
            'variant': self.variant.value,
            'parameters': self.params.to_dict(),
            'calculations': self._calc_count,
        }
        if self.trajectory is not None:
            snap['final_x'] = float(self.trajectory.x[-1])
            snap['steps'] = self.trajectory.steps
        return snap
