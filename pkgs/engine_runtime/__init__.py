"""
Engine runtime components for session state and recording.

This package holds the stateful side of the explorer, separated from the
pure recurrence computations in ``pkgs.recurrence``.
"""

from .recorder import SimpleRecorder
from .session import RecurrenceSession

__all__ = ['SimpleRecorder', 'RecurrenceSession']
