"""
Engine application package.

Contains the high-level service wrapper, its request/result schemas and the
CLI entrypoint for the linear recurrence explorer.
"""

from .schemas import CalculateRequest, CalculateResult
from .engine_service import EngineService

__all__ = ['EngineService', 'CalculateRequest', 'CalculateResult']
