"""Core types and constants for bridge notifications."""

__all__ = [
    "BridgeConstants",
    "CallEndedEvent",
    "SessionStartedEvent",
    "build_url",
]

from bridge_notify.core.constants import BridgeConstants
from bridge_notify.core.events import CallEndedEvent, SessionStartedEvent, build_url
