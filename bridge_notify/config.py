"""Notifier configuration from environment variables or YAML files."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml

from bridge_notify.core.constants import BridgeConstants


logger = structlog.get_logger(__name__)

LOG_FORMATS = ("console", "json")


@dataclass
class NotifierConfig:
    """Bridge notifier configuration.

    Fields:
        bridge_url: Bridge base URL (None if not configured)
        timeout_seconds: Request timeout for each notification
        log_level: Standard logging level name
        log_format: "console" or "json"
    """

    bridge_url: Optional[str] = None
    timeout_seconds: float = BridgeConstants.DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"
    log_format: str = "console"

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"log_format must be one of {', '.join(LOG_FORMATS)}, got {self.log_format!r}"
            )

    @classmethod
    def from_env(cls) -> "NotifierConfig":
        """Load configuration from environment variables.

        Reads BRIDGE_URL, BRIDGE_TIMEOUT_SECONDS, LOG_LEVEL and LOG_FORMAT.

        Raises:
            ValueError: If a value is invalid
        """
        timeout_raw = os.getenv("BRIDGE_TIMEOUT_SECONDS")
        return cls(
            bridge_url=os.getenv("BRIDGE_URL") or None,
            timeout_seconds=_parse_timeout(timeout_raw) if timeout_raw else BridgeConstants.DEFAULT_TIMEOUT_SECONDS,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "console"),
        )

    @classmethod
    def from_yaml(cls, file_path: str | Path) -> "NotifierConfig":
        """Load configuration from a YAML file.

        Args:
            file_path: Path to YAML configuration file

        Returns:
            NotifierConfig instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            ValueError: If YAML file is invalid
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Notifier config file not found: {file_path}")

        logger.info("Loading notifier config from YAML", file_path=str(file_path))

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML file: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("YAML file must contain a dictionary")

        bridge_url = data.get("bridge_url")
        if bridge_url is not None and not isinstance(bridge_url, str):
            raise ValueError("'bridge_url' field must be a string")

        timeout = data.get("timeout_seconds", BridgeConstants.DEFAULT_TIMEOUT_SECONDS)

        config = cls(
            bridge_url=bridge_url or None,
            timeout_seconds=_parse_timeout(timeout),
            log_level=str(data.get("log_level", "INFO")),
            log_format=str(data.get("log_format", "console")),
        )

        logger.info("Notifier config loaded successfully", **config.to_dict())
        return config

    @classmethod
    def load(cls, file_path: Optional[str | Path] = None) -> "NotifierConfig":
        """Load from YAML if a path is given, otherwise from the environment.

        FAIL-FAST: if file_path is given and loading fails, the error propagates.
        """
        if file_path:
            return cls.from_yaml(file_path)
        return cls.from_env()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "bridge_url": self.bridge_url,
            "timeout_seconds": self.timeout_seconds,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


def _parse_timeout(value: Any) -> float:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ValueError(f"Invalid timeout: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid timeout: {value!r}") from e
