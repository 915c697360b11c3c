"""Session lifecycle events sent to the bridge."""

from dataclasses import asdict, dataclass
from typing import ClassVar, Dict

from bridge_notify.core.constants import BridgeConstants


def build_url(base_url: str, path: str) -> str:
    """Join the bridge base URL with an endpoint path.

    Args:
        base_url: Bridge base URL, with or without trailing slashes
        path: Endpoint path starting with "/"

    Returns:
        Base URL with trailing slashes removed, followed by path
    """
    return f"{base_url.rstrip('/')}{path}"


@dataclass(frozen=True)
class SessionStartedEvent:
    """A voice session started on a transport."""

    path: ClassVar[str] = BridgeConstants.SESSION_STARTED_PATH

    call_sid: str
    sender: str
    transport: str

    def to_payload(self) -> Dict[str, str]:
        """JSON body for the session-started endpoint."""
        return asdict(self)


@dataclass(frozen=True)
class CallEndedEvent:
    """A voice session ended."""

    path: ClassVar[str] = BridgeConstants.CALL_ENDED_PATH

    call_sid: str

    def to_payload(self) -> Dict[str, str]:
        """JSON body for the call-ended endpoint."""
        return asdict(self)
