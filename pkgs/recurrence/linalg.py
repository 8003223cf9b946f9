"""
Small linear algebra helpers for the recurrence engine.

Contains the vector-matrix products and the 2x2 <-> 4-vector flatten/reshape
pair used to evolve the transition matrix with a 4x4 map.
"""
import numpy as np


def vector_matrix_multiply(v: np.ndarray, M: np.ndarray) -> np.ndarray:
    """Row vector times matrix: out[j] = sum_k v[k] * M[k, j]."""
    v = np.asarray(v, dtype=np.float64)
    M = np.asarray(M, dtype=np.float64)
    return v @ M


def matrix_vector_multiply(M: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Matrix times column vector: out[i] = sum_k M[i, k] * v[k]."""
    M = np.asarray(M, dtype=np.float64)
    v = np.asarray(v, dtype=np.float64)
    return M @ v


def flatten_matrix(M: np.ndarray) -> np.ndarray:
    """Flatten a 2x2 matrix row-major into [w00, w01, w10, w11]."""
    M = np.asarray(M, dtype=np.float64)
    return np.array([M[0, 0], M[0, 1], M[1, 0], M[1, 1]], dtype=np.float64)


def reshape_to_matrix(v: np.ndarray) -> np.ndarray:
    """Reshape [w00, w01, w10, w11] back into a 2x2 matrix."""
    v = np.asarray(v, dtype=np.float64)
    return np.array([[v[0], v[1]],
                     [v[2], v[3]]], dtype=np.float64)
