"""Event bus used by sessions to announce edits and recomputations."""

from typing import Any, Callable, Dict, List
import logging

logger = logging.getLogger(__name__)

PARAMETERS_UPDATED = "parameters_updated"
INPUT_REJECTED = "input_rejected"
CALCULATED = "calculated"


class EventBus:
    """Synchronous publish/subscribe between session and presentation."""

    def __init__(self):
        self.listeners: Dict[str, List[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: str, callback: Callable[[Any], None]):
        self.listeners.setdefault(event_type, []).append(callback)
        logger.debug(f"Subscribed to event: {event_type}")

    def unsubscribe(self, event_type: str, callback: Callable[[Any], None]):
        try:
            self.listeners.get(event_type, []).remove(callback)
            logger.debug(f"Unsubscribed from event: {event_type}")
        except ValueError:
            logger.warning(f"Callback not found for event: {event_type}")

    def publish(self, event_type: str, data: Any = None):
        """Call every subscriber; a failing callback is logged and skipped."""
        for callback in list(self.listeners.get(event_type, [])):
            try:
                callback(data)
            except Exception as e:
                logger.error(f"Error in event callback for {event_type}: {e}")
        logger.debug(f"Published event: {event_type}")

    def get_listener_count(self, event_type: str) -> int:
        return len(self.listeners.get(event_type, []))
