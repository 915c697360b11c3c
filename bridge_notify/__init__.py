"""Best-effort session lifecycle notifications for the cross-channel bridge."""

__version__ = "0.1.0"

__all__ = [
    "BridgeNotifier",
    "NotifierConfig",
    "notify_call_ended",
    "notify_session_started",
]

from bridge_notify.config import NotifierConfig
from bridge_notify.notifier import BridgeNotifier, notify_call_ended, notify_session_started
