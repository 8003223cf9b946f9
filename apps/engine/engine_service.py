"""
Engine service wrapper providing a clean API for the recurrence explorer.

This service wraps a RecurrenceSession (and optionally a SimpleRecorder) to
provide initialization, field edits, recomputation, chart rendering and
export. Failures are logged and reported in the returned payloads instead of
being raised to the caller.
"""
import logging
from typing import Dict, Any, Optional

from pkgs.engine_runtime import RecurrenceSession, SimpleRecorder
from pkgs.observability import EventBus
from pkgs.recurrence import equations, to_records
from apps.plotting import render_chart

from .schemas import CalculateRequest, CalculateResult

logger = logging.getLogger('EngineService')

EDITABLE_FIELDS = ('a0', 'x0', 'w', 'w_evolve', 'steps')


class EngineService:
    """High-level service wrapper for the recurrence explorer."""

    def __init__(self, cfg: Optional[Dict[str, Any]] = None):
        self.cfg = cfg or {}
        self.bus = EventBus()
        self.session: Optional[RecurrenceSession] = None
        self.recorder: Optional[SimpleRecorder] = None
        self._initialized = False

        logger.info("EngineService created with configuration")

    def init(self, req: CalculateRequest) -> Dict[str, Any]:
        """Build a session from the request and run the initial calculation."""
        try:
            if self.cfg.get('enable_recorder', True):
                self.recorder = SimpleRecorder(enabled=True)

            self.session = RecurrenceSession(
                params=req.to_parameter_set(),
                bus=self.bus,
                recorder=self.recorder
            )
            self._initialized = True
            result = self.calculate()

            if not result.success:
                return {'success': False, 'message': result.message}

            logger.info(f"Engine initialized with {result.variant} variant")
            return {
                'success': True,
                'variant': result.variant,
                'final_x': result.final_x,
                'calculation': result,
                'message': 'Engine initialized successfully'
            }

        except Exception as e:
            logger.error(f"Engine initialization failed: {e}")
            self._initialized = False
            return {
                'success': False,
                'message': f'Initialization failed: {str(e)}'
            }

    def edit(self, field: str, value: Any, row: Optional[int] = None,
             col: Optional[int] = None) -> Dict[str, Any]:
        """Apply one input edit; rejected text leaves the parameters unchanged."""
        if not self._initialized:
            return {'success': False, 'message': 'Engine not initialized'}
        if field not in EDITABLE_FIELDS:
            return {'success': False, 'message': f'Unknown field: {field}'}

        try:
            if field == 'a0':
                accepted = self.session.set_a0(row, value)
            elif field == 'x0':
                accepted = self.session.set_x0(value)
            elif field == 'w':
                accepted = self.session.set_w(row, col, value)
            elif field == 'w_evolve':
                accepted = self.session.set_w_evolve(row, col, value)
            else:
                accepted = self.session.set_steps(value)
        except (IndexError, TypeError, ValueError, OverflowError) as e:
            logger.error(f"Edit of {field} failed: {e}")
            return {'success': False, 'message': f'Edit failed: {str(e)}'}

        return {
            'success': True,
            'accepted': accepted,
            'parameters': self.session.params.to_dict()
        }

    def calculate(self) -> CalculateResult:
        """Recompute the trajectory from the current parameters."""
        if not self._initialized:
            return CalculateResult(success=False, message="Engine not initialized")

        try:
            traj = self.session.calculate()
            return CalculateResult(
                success=True,
                variant=traj.variant.value,
                steps=traj.steps,
                final_x=float(traj.x[-1]),
                equations=equations(traj.variant),
                records=to_records(traj),
                message=f"x[{traj.steps}] = {traj.x[-1]:.4f}"
            )
        except Exception as e:
            logger.error(f"Calculation failed: {e}")
            return CalculateResult(success=False, message=f"Calculation failed: {str(e)}")

    def snapshot(self) -> Dict[str, Any]:
        """Return summary snapshot of current session state."""
        if not self._initialized:
            return {
                'initialized': False,
                'message': 'Engine not initialized'
            }

        snapshot = {'initialized': True, **self.session.snapshot()}
        if self.recorder:
            snapshot['recorder_summary'] = self.recorder.get_summary()
        return snapshot

    def render_chart(self, path: str, show_coefficients: bool = False,
                     show_transition_matrix: bool = False) -> Dict[str, Any]:
        """Render the last trajectory to an image file."""
        if not self._initialized or self.session.trajectory is None:
            return {'success': False, 'message': 'Nothing calculated yet'}

        try:
            render_chart(self.session.records(), path,
                         show_coefficients=show_coefficients,
                         show_transition_matrix=show_transition_matrix)
            return {'success': True, 'message': f'Chart saved to {path}'}
        except Exception as e:
            logger.error(f"Chart rendering failed: {e}")
            return {'success': False, 'message': f'Render failed: {str(e)}'}

    def save_recordings(self, base_path: str) -> Dict[str, Any]:
        """Save recorder data to specified path."""
        if not self.recorder:
            return {
                'success': False,
                'message': 'No recorder available'
            }

        try:
            self.recorder.dump_all_formats(base_path)
            return {
                'success': True,
                'message': f'Recordings saved to {base_path}',
                'summary': self.recorder.get_summary()
            }
        except Exception as e:
            logger.error(f"Recording save failed: {e}")
            return {
                'success': False,
                'message': f'Save failed: {str(e)}'
            }

    def shutdown(self) -> Dict[str, Any]:
        """Drop the session and recorder."""
        self._initialized = False
        self.session = None
        self.recorder = None
        logger.info("Engine service shutdown completed")
        return {
            'success': True,
            'message': 'Engine shutdown completed'
        }
