"""
Bot telemetry.

Each event is one INFO record on the "cafe_bot.telemetry" logger, carrying the
event name and a flat property dict under `extra["properties"]`. Turn events
always include the conversation id and channel of the activity.
"""
import logging
from typing import Any, Dict, Optional

from botbuilder.core import TurnContext

logger = logging.getLogger(__name__)

TURN_DISPATCHED = "turn_dispatched"
WELCOME_SENT = "welcome_sent"
TURN_ERROR = "turn_error"

EVENT_NAMES = frozenset({TURN_DISPATCHED, WELCOME_SENT, TURN_ERROR})


def track_event(event_name: str, properties: Optional[Dict[str, Any]] = None):
    """
    Record a bot event.

    Raises:
        ValueError: If event_name is not one of EVENT_NAMES
    """
    if event_name not in EVENT_NAMES:
        raise ValueError(f"Unknown telemetry event: {event_name}")

    logger.info(f"Telemetry Event: {event_name}", extra={"properties": properties or {}})


def track_turn_event(event_name: str, turn_context: TurnContext, properties: Optional[Dict[str, Any]] = None):
    """Record a bot event tagged with the turn's conversation and channel."""
    activity = turn_context.activity
    turn_properties = {
        "conversation_id": activity.conversation.id if activity.conversation else None,
        "channel_id": activity.channel_id,
    }
    turn_properties.update(properties or {})

    track_event(event_name, turn_properties)
