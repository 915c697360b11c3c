"""Session lifecycle notifications for the cross-channel bridge.

Telephony and chat transport handlers call into this module when a voice
session starts or ends, so the bridge can register or deregister the
session for cross-channel routing.

Delivery is best-effort:
- One POST per event, no retries
- 2xx responses are logged at debug level
- Error statuses and transport failures are logged as warnings
- Nothing is ever raised back to the caller
"""

import asyncio
from typing import TYPE_CHECKING, Any, Coroutine, Optional, Set, Union

import httpx
import structlog

from bridge_notify.core.constants import BridgeConstants
from bridge_notify.core.events import CallEndedEvent, SessionStartedEvent, build_url

if TYPE_CHECKING:
    from bridge_notify.config import NotifierConfig

logger = structlog.get_logger(__name__)

BridgeEvent = Union[SessionStartedEvent, CallEndedEvent]


async def _post_event(
    bridge_url: str,
    event: BridgeEvent,
    description: str,
    client: Optional[httpx.AsyncClient],
    timeout: float,
) -> None:
    """POST a single event to the bridge and log the outcome.

    Args:
        bridge_url: Bridge base URL
        event: Event to send
        description: Human-readable event name for log messages
        client: Shared client, or None to use a fresh client for this call
        timeout: Request timeout in seconds
    """
    url = build_url(bridge_url, event.path)
    endpoint = event.path.lstrip("/")

    if client is not None and client.is_closed:
        logger.warning(
            f"Failed to notify bridge of {description}",
            call_sid=event.call_sid,
            error="HTTP client has been closed",
            error_type="ClientClosed",
        )
        return

    try:
        if client is None:
            async with httpx.AsyncClient() as fresh_client:
                response = await _send(fresh_client, url, event, timeout)
        else:
            response = await _send(client, url, event, timeout)

    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(
            f"Failed to notify bridge of {description}",
            call_sid=event.call_sid,
            error=str(e) or repr(e),
            error_type=type(e).__name__,
        )
        return

    if response.is_success:
        logger.debug(f"Notified bridge of {description}", call_sid=event.call_sid)
    else:
        logger.warning(
            f"Bridge {endpoint} notification returned error",
            call_sid=event.call_sid,
            status=response.status_code,
        )


async def _send(
    client: httpx.AsyncClient,
    url: str,
    event: BridgeEvent,
    timeout: float,
) -> httpx.Response:
    return await client.post(
        url,
        json=event.to_payload(),
        headers={"Content-Type": BridgeConstants.JSON_CONTENT_TYPE},
        timeout=httpx.Timeout(timeout),
    )


async def notify_session_started(
    bridge_url: str,
    call_sid: str,
    sender: str,
    transport: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = BridgeConstants.DEFAULT_TIMEOUT_SECONDS,
) -> None:
    """Notify the bridge that a voice session started.

    Lets the bridge pre-register the session for cross-channel routing
    before any voice utterance flows through.

    Args:
        bridge_url: Bridge base URL (trailing slashes are ignored)
        call_sid: Session identifier
        sender: Originating party identifier
        transport: Name of the originating transport (e.g. "twilio")
        client: Optional shared HTTP client; a fresh one is used if omitted
        timeout: Request timeout in seconds
    """
    event = SessionStartedEvent(call_sid=call_sid, sender=sender, transport=transport)
    await _post_event(bridge_url, event, "session start", client, timeout)


async def notify_call_ended(
    bridge_url: str,
    call_sid: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = BridgeConstants.DEFAULT_TIMEOUT_SECONDS,
) -> None:
    """Notify the bridge that a voice session ended.

    The bridge stops routing cross-channel responses to voice.

    Args:
        bridge_url: Bridge base URL (trailing slashes are ignored)
        call_sid: Session identifier
        client: Optional shared HTTP client; a fresh one is used if omitted
        timeout: Request timeout in seconds
    """
    event = CallEndedEvent(call_sid=call_sid)
    await _post_event(bridge_url, event, "session end", client, timeout)


class BridgeNotifier:
    """Bound notifier for a single bridge.

    Holds the bridge base URL and an optional injected HTTP client. The
    client is owned by the caller and is never closed here.
    """

    def __init__(
        self,
        bridge_url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = BridgeConstants.DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize notifier.

        Args:
            bridge_url: Bridge base URL
            client: Optional shared HTTP client
            timeout: Request timeout in seconds
        """
        self._bridge_url = bridge_url
        self._client = client
        self._timeout = timeout

        # Strong references to fire-and-forget tasks until they finish
        self._tasks: Set[asyncio.Task[None]] = set()

    @classmethod
    def from_config(
        cls,
        config: "NotifierConfig",
        client: Optional[httpx.AsyncClient] = None,
    ) -> "BridgeNotifier":
        """Create notifier from configuration.

        Raises:
            ValueError: If no bridge URL is configured
        """
        if not config.bridge_url:
            raise ValueError("Bridge URL not configured")

        return cls(
            bridge_url=config.bridge_url,
            client=client,
            timeout=config.timeout_seconds,
        )

    @property
    def bridge_url(self) -> str:
        """Bridge base URL."""
        return self._bridge_url

    @property
    def pending(self) -> int:
        """Number of spawned notifications still in flight."""
        return len(self._tasks)

    async def session_started(self, call_sid: str, sender: str, transport: str) -> None:
        """Send a session-started notification and wait for the outcome."""
        await notify_session_started(
            self._bridge_url,
            call_sid,
            sender,
            transport,
            client=self._client,
            timeout=self._timeout,
        )

    async def call_ended(self, call_sid: str) -> None:
        """Send a call-ended notification and wait for the outcome."""
        await notify_call_ended(
            self._bridge_url,
            call_sid,
            client=self._client,
            timeout=self._timeout,
        )

    def spawn_session_started(
        self, call_sid: str, sender: str, transport: str
    ) -> "asyncio.Task[None]":
        """Schedule a session-started notification without waiting.

        Must be called from a running event loop.

        Returns:
            The scheduled task
        """
        return self._spawn(
            self.session_started(call_sid, sender, transport),
            name=f"bridge-session-started-{call_sid}",
        )

    def spawn_call_ended(self, call_sid: str) -> "asyncio.Task[None]":
        """Schedule a call-ended notification without waiting.

        Must be called from a running event loop.

        Returns:
            The scheduled task
        """
        return self._spawn(
            self.call_ended(call_sid),
            name=f"bridge-call-ended-{call_sid}",
        )

    def _spawn(self, coro: Coroutine[Any, Any, None], name: str) -> "asyncio.Task[None]":
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def aclose(self) -> None:
        """Wait for in-flight spawned notifications to finish."""
        # Tasks spawned while waiting are picked up on the next pass
        while self._tasks:
            logger.debug("Waiting for pending bridge notifications", pending=len(self._tasks))
            await asyncio.gather(*self._tasks, return_exceptions=True)
