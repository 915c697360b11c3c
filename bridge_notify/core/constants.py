"""Bridge wire constants."""


class BridgeConstants:
    """Paths and defaults for the bridge notification endpoints."""

    # Endpoint paths (appended to the bridge base URL)
    SESSION_STARTED_PATH = "/session-started"
    CALL_ENDED_PATH = "/call-ended"

    # Request timeout applied to every notification
    DEFAULT_TIMEOUT_SECONDS = 5.0

    JSON_CONTENT_TYPE = "application/json"
