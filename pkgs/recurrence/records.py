"""
Per-step chart records and display helpers for recurrence trajectories.
"""
from typing import Dict, List

from .common import Trajectory, Variant

EQUATIONS = {
    Variant.FIXED: [
        "x[i] = a[i-1][0] * x[i-1] + a[i-1][1]",
        "a[i] = W · a[i-1]",
    ],
    Variant.DRIFT: [
        "x[i] = a[i-1][0] * x[i-1] + a[i-1][1]",
        "a[i] = a[i-1] · W[i-1]",
        "W[i] = evolve(W[i-1]) using 4×4 matrix",
    ],
}


def to_records(traj: Trajectory) -> List[Dict[str, float]]:
    """One record per step: step, x, multiplier, constant (and w00..w11 with drift)."""
    records = []
    for i in range(traj.steps + 1):
        row = {
            'step': i,
            'x': float(traj.x[i]),
            'multiplier': float(traj.a[i, 0]),
            'constant': float(traj.a[i, 1]),
        }
        if traj.w is not None:
            row['w00'] = float(traj.w[i, 0, 0])
            row['w01'] = float(traj.w[i, 0, 1])
            row['w10'] = float(traj.w[i, 1, 0])
            row['w11'] = float(traj.w[i, 1, 1])
        records.append(row)
    return records


def final_value(traj: Trajectory) -> float:
    return float(traj.x[-1])


def format_final_value(traj: Trajectory) -> str:
    return f"x[{traj.steps}] = {final_value(traj):.4f}"


def equations(variant: Variant) -> List[str]:
    return list(EQUATIONS[variant])
