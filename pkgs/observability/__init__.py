"""Observability helpers: logging setup and the session event bus."""

from .logging import setup_logging
from .events import EventBus, PARAMETERS_UPDATED, INPUT_REJECTED, CALCULATED

__all__ = [
    'setup_logging',
    'EventBus', 'PARAMETERS_UPDATED', 'INPUT_REJECTED', 'CALCULATED'
]
