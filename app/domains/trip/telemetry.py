"""
Tripplan Backend - Completion Usage Telemetry
Side channel reporting token usage of each language-model call.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UsageRecord:
    """Token counts for a single completion request."""

    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class UsageObserver(Protocol):
    """Receives usage records; must not influence generation."""

    def record(self, usage: UsageRecord) -> None: ...


class LoggingUsageObserver:
    """Default observer writing usage to the application log."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def record(self, usage: UsageRecord) -> None:
        self._log.info(
            f"Completion usage: model={usage.model} "
            f"input={usage.input_tokens} output={usage.output_tokens} "
            f"total={usage.total_tokens}"
        )
