"""
Numeric core for the linear recurrence explorer.

This package contains the pure recurrence engines (fixed and evolving
transition matrix), the small linear algebra helpers they share and the
conversion of trajectories into per-step chart records.
"""

# Data structures
from .common import Variant, Trajectory

# Linear algebra
from .linalg import vector_matrix_multiply, matrix_vector_multiply, flatten_matrix, reshape_to_matrix

# Engines
from .engine import evolve, evolve_with_drift

# Records
from .records import to_records, final_value, format_final_value, equations

__all__ = [
    # Data structures
    'Variant', 'Trajectory',
    # Linear algebra
    'vector_matrix_multiply', 'matrix_vector_multiply', 'flatten_matrix', 'reshape_to_matrix',
    # Engines
    'evolve', 'evolve_with_drift',
    # Records
    'to_records', 'final_value', 'format_final_value', 'equations'
]
