"""Tests for the recurrence engines and their linear algebra helpers."""

import pytest
import numpy as np
from numpy.testing import assert_allclose, assert_array_equal

from pkgs.recurrence import (
    Trajectory, Variant, evolve, evolve_with_drift,
    vector_matrix_multiply, matrix_vector_multiply, flatten_matrix, reshape_to_matrix
)

IDENTITY_2 = [[1.0, 0.0], [0.0, 1.0]]
IDENTITY_4 = np.eye(4).tolist()
# swaps w01 and w10, i.e. transposes W every step
TRANSPOSE_4 = [
    [1.0, 0.0, 0.0, 0.0],
    [0.0, 0.0, 1.0, 0.0],
    [0.0, 1.0, 0.0, 0.0],
    [0.0, 0.0, 0.0, 1.0],
]


class TestLinalg:
    """Vector/matrix products and flatten/reshape."""

    def test_row_vector_times_matrix(self):
        out = vector_matrix_multiply([1.0, 0.0], [[1.0, 2.0], [3.0, 4.0]])
        assert_array_equal(out, [1.0, 2.0])

    def test_matrix_times_column_vector(self):
        out = matrix_vector_multiply([[1.0, 2.0], [3.0, 4.0]], [1.0, 0.0])
        assert_array_equal(out, [1.0, 3.0])

    def test_flatten_is_row_major(self):
        assert_array_equal(flatten_matrix([[1.0, 2.0], [3.0, 4.0]]), [1.0, 2.0, 3.0, 4.0])

    def test_reshape_inverts_flatten(self):
        M = np.array([[0.95, 0.1], [0.05, 0.9]])
        assert_array_equal(reshape_to_matrix(flatten_matrix(M)), M)

    def test_four_vector_times_four_by_four(self):
        out = vector_matrix_multiply([1.0, 2.0, 3.0, 4.0], TRANSPOSE_4)
        assert_array_equal(out, [1.0, 3.0, 2.0, 4.0])


class TestFixedEngine:
    """Fixed transition matrix: a[i] = W . a[i-1]."""

    def test_identity_keeps_everything_constant(self):
        traj = evolve([1.0, 0.0], 1.0, IDENTITY_2, 3)
        assert_array_equal(traj.a, [[1.0, 0.0]] * 4)
        assert_array_equal(traj.x, [1.0, 1.0, 1.0, 1.0])

    def test_zero_matrix_uses_previous_coefficients(self):
        traj = evolve([2.0, 3.0], 0.0, [[0.0, 0.0], [0.0, 0.0]], 2)
        assert_array_equal(traj.a[1], [0.0, 0.0])
        assert_array_equal(traj.a[2], [0.0, 0.0])
        assert traj.x[1] == 3.0   # 2*0 + 3
        assert traj.x[2] == 0.0   # 0*3 + 0

    def test_matrix_acts_on_column_vector(self):
        traj = evolve([1.0, 0.0], 0.0, [[1.0, 2.0], [3.0, 4.0]], 1)
        assert_array_equal(traj.a[1], [1.0, 3.0])

    def test_swap_matrix(self):
        traj = evolve([1.0, 2.0], 2.0, [[0.0, 1.0], [1.0, 0.0]], 2)
        assert_array_equal(traj.a, [[1.0, 2.0], [2.0, 1.0], [1.0, 2.0]])
        assert_array_equal(traj.x, [2.0, 4.0, 9.0])

    @pytest.mark.parametrize("steps", [0, 1, 5, 50, 100])
    def test_lengths(self, steps):
        traj = evolve([0.5, 2.0], 1.0, [[0.95, 0.1], [0.05, 0.9]], steps)
        assert len(traj.a) == len(traj.x) == steps + 1
        assert traj.steps == steps
        assert traj.w is None
        assert traj.variant is Variant.FIXED

    def test_initial_values_preserved(self):
        traj = evolve([0.5, 2.0], -3.25, [[0.0, 0.0], [0.0, 0.0]], 10)
        assert_array_equal(traj.a[0], [0.5, 2.0])
        assert traj.x[0] == -3.25

    def test_non_finite_inputs_read_as_zero(self):
        traj = evolve([np.nan, 1.0], np.inf, [[np.inf, 0.0], [0.0, 1.0]], 1)
        assert_array_equal(traj.a[0], [0.0, 1.0])
        assert traj.x[0] == 0.0
        assert_array_equal(traj.a[1], [0.0, 1.0])
        assert traj.x[1] == 1.0

    def test_negative_steps_rejected(self):
        with pytest.raises(ValueError):
            evolve([1.0, 0.0], 1.0, IDENTITY_2, -1)

    def test_divergence_is_not_an_error(self):
        traj = evolve([10.0, 1.0], 10.0, [[1e10, 0.0], [0.0, 1.0]], 100)
        assert len(traj.x) == 101
        assert not np.all(np.isfinite(traj.x))

    def test_idempotent(self):
        args = ([0.5, 2.0], 1.0, [[0.95, 0.1], [0.05, 0.9]], 50)
        first, second = evolve(*args), evolve(*args)
        assert_array_equal(first.a, second.a)
        assert_array_equal(first.x, second.x)

    def test_inputs_not_mutated(self):
        a0 = np.array([0.5, 2.0])
        W = np.array([[0.95, 0.1], [0.05, 0.9]])
        evolve(a0, 1.0, W, 10)
        assert_array_equal(a0, [0.5, 2.0])
        assert_array_equal(W, [[0.95, 0.1], [0.05, 0.9]])

    def test_result_arrays_are_read_only(self):
        traj = evolve([1.0, 0.0], 1.0, IDENTITY_2, 3)
        with pytest.raises(ValueError):
            traj.x[1] = 5.0


class TestDriftEngine:
    """Evolving transition matrix: W[i] = reshape(flatten(W[i-1]) . W_evolve)."""

    W0 = [[1.0, 2.0], [3.0, 4.0]]

    def test_lengths_and_initial_values(self):
        traj = evolve_with_drift([0.5, 2.0], 1.0, self.W0, IDENTITY_4, 7)
        assert len(traj.a) == len(traj.x) == len(traj.w) == 8
        assert_array_equal(traj.a[0], [0.5, 2.0])
        assert traj.x[0] == 1.0
        assert_array_equal(traj.w[0], self.W0)
        assert traj.variant is Variant.DRIFT

    def test_identity_evolution_keeps_w_constant(self):
        traj = evolve_with_drift([0.5, 2.0], 1.0, self.W0, IDENTITY_4, 10)
        for w in traj.w:
            assert_array_equal(w, self.W0)

    def test_identity_evolution_matches_fixed_with_symmetric_w(self):
        W0 = [[0.9, 0.2], [0.2, 0.7]]
        drift = evolve_with_drift([0.5, 2.0], 1.0, W0, IDENTITY_4, 20)
        fixed = evolve([0.5, 2.0], 1.0, W0, 20)
        assert_allclose(drift.a, fixed.a)
        assert_allclose(drift.x, fixed.x)

    def test_identity_evolution_matches_fixed_with_transposed_w(self):
        W0 = np.array([[0.95, 0.1], [0.05, 0.9]])
        drift = evolve_with_drift([0.5, 2.0], 1.0, W0, IDENTITY_4, 30)
        fixed = evolve([0.5, 2.0], 1.0, W0.T, 30)
        assert_allclose(drift.a, fixed.a)
        assert_allclose(drift.x, fixed.x)

    def test_coefficients_use_pre_evolution_matrix(self):
        W_evolve = (2.0 * np.eye(4)).tolist()
        traj = evolve_with_drift([1.0, 2.0], 1.0, self.W0, W_evolve, 2)
        assert_array_equal(traj.w[1], [[2.0, 4.0], [6.0, 8.0]])
        assert_array_equal(traj.w[2], [[4.0, 8.0], [12.0, 16.0]])
        assert_array_equal(traj.a[1], [7.0, 10.0])     # a0 . W0
        assert_array_equal(traj.a[2], [74.0, 108.0])   # a1 . W1, not a1 . W2
        assert_array_equal(traj.x, [1.0, 3.0, 31.0])

    def test_transpose_evolution_alternates(self):
        traj = evolve_with_drift([1.0, 0.0], 0.0, self.W0, TRANSPOSE_4, 2)
        assert_array_equal(traj.w[1], [[1.0, 3.0], [2.0, 4.0]])
        assert_array_equal(traj.w[2], self.W0)

    def test_default_parameters_decay_smoothly(self):
        W_evolve = [
            [0.99, 0.01, 0.00, 0.00],
            [0.00, 0.99, 0.00, 0.00],
            [0.00, 0.00, 0.99, 0.01],
            [0.00, 0.00, 0.00, 0.99],
        ]
        traj = evolve_with_drift([0.5, 2.0], 1.0, [[0.95, 0.1], [0.05, 0.9]], W_evolve, 50)
        assert np.all(np.isfinite(traj.x))
        assert traj.w[50, 0, 0] < traj.w[0, 0, 0]

    def test_idempotent(self):
        args = ([0.5, 2.0], 1.0, self.W0, TRANSPOSE_4, 12)
        first, second = evolve_with_drift(*args), evolve_with_drift(*args)
        assert_array_equal(first.w, second.w)
        assert_array_equal(first.x, second.x)

    def test_wrong_shape_rejected(self):
        with pytest.raises(ValueError):
            evolve_with_drift([1.0, 0.0], 1.0, self.W0, np.eye(3), 2)


def test_trajectory_reports_steps():
    traj = Trajectory(a=np.zeros((4, 2)), x=np.zeros(4))
    assert traj.steps == 3
