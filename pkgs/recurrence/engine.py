"""
Recurrence engines for the 2-coefficient linear system.

Two variants share the scalar update x[i] = a[i-1][0] * x[i-1] + a[i-1][1]:

- ``evolve``: the coefficient vector is stepped by a fixed 2x2 matrix,
  a[i] = W . a[i-1].
- ``evolve_with_drift``: the transition matrix itself evolves each step by
  multiplying its row-major flattening with a fixed 4x4 matrix, and the
  coefficients are stepped as a row vector, a[i] = a[i-1] . W[i-1].

Both updates read only step i-1 values. In the drift variant W[i] is already
computed when a[i] is formed, but a[i] still uses W[i-1].
"""
import logging
import numpy as np

from .common import Trajectory
from .linalg import (
    vector_matrix_multiply, matrix_vector_multiply, flatten_matrix, reshape_to_matrix
)

logger = logging.getLogger('RecurrenceCore')


def _as_finite(values, shape) -> np.ndarray:
    """Copy to a float array of the given shape, replacing NaN/inf with 0."""
    arr = np.array(values, dtype=np.float64).reshape(shape)
    arr[~np.isfinite(arr)] = 0.0
    return arr


def _finite_scalar(value) -> float:
    value = float(value)
    return value if np.isfinite(value) else 0.0


def _check_steps(steps: int) -> int:
    steps = int(steps)
    if steps < 0:
        raise ValueError(f"steps must be >= 0, got {steps}")
    return steps


def evolve(a0, x0: float, W, steps: int) -> Trajectory:
    """Run the fixed-W recurrence for ``steps`` steps."""
    steps = _check_steps(steps)
    W = _as_finite(W, (2, 2))

    a = np.zeros((steps + 1, 2), dtype=np.float64)
    x = np.zeros(steps + 1, dtype=np.float64)
    a[0] = _as_finite(a0, (2,))
    x[0] = _finite_scalar(x0)

    # divergence to inf is an accepted outcome of the model
    with np.errstate(over='ignore', invalid='ignore'):
        for i in range(1, steps + 1):
            a[i] = matrix_vector_multiply(W, a[i - 1])
            x[i] = a[i - 1, 0] * x[i - 1] + a[i - 1, 1]

    logger.debug(f"evolve: steps={steps}, x[{steps}]={x[-1]:.6g}")
    return Trajectory(a=a, x=x)


def evolve_with_drift(a0, x0: float, W0, W_evolve, steps: int) -> Trajectory:
    """Run the evolving-W recurrence for ``steps`` steps."""
    steps = _check_steps(steps)
    W_evolve = _as_finite(W_evolve, (4, 4))

    a = np.zeros((steps + 1, 2), dtype=np.float64)
    x = np.zeros(steps + 1, dtype=np.float64)
    w = np.zeros((steps + 1, 2, 2), dtype=np.float64)
    a[0] = _as_finite(a0, (2,))
    x[0] = _finite_scalar(x0)
    w[0] = _as_finite(W0, (2, 2))

    with np.errstate(over='ignore', invalid='ignore'):
        for i in range(1, steps + 1):
            # order matters: W[i] is built first but a[i] uses W[i-1]
            w_next_flat = vector_matrix_multiply(flatten_matrix(w[i - 1]), W_evolve)
            w[i] = reshape_to_matrix(w_next_flat)
            a[i] = vector_matrix_multiply(a[i - 1], w[i - 1])
            x[i] = a[i - 1, 0] * x[i - 1] + a[i - 1, 1]

    logger.debug(f"evolve_with_drift: steps={steps}, x[{steps}]={x[-1]:.6g}")
    return Trajectory(a=a, x=x, w=w)
