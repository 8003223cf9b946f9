"""
Input handling for the recurrence explorer: text coercion and parameter sets.
"""

from .coercion import PLACEHOLDERS, accept_numeric_text, handle_numeric_input, safe_parse_float
from .params import (
    ParameterSet, ResolvedParameters, ParameterShapeError, clamp_steps,
    STEPS_MIN, STEPS_MAX, DEFAULT_A0, DEFAULT_X0, DEFAULT_W, DEFAULT_W_EVOLVE, DEFAULT_STEPS
)

__all__ = [
    'PLACEHOLDERS', 'accept_numeric_text', 'handle_numeric_input', 'safe_parse_float',
    'ParameterSet', 'ResolvedParameters', 'ParameterShapeError', 'clamp_steps',
    'STEPS_MIN', 'STEPS_MAX', 'DEFAULT_A0', 'DEFAULT_X0', 'DEFAULT_W', 'DEFAULT_W_EVOLVE',
    'DEFAULT_STEPS'
]
