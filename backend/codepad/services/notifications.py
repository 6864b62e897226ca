"""Alert-style user notifications (storage failures, recovered state)."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

MAX_NOTICES = 50


@dataclass
class Notice:
    level: str  # info, warning, error
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Notifier:
    """Collects notices until the UI drains and shows them."""

    def __init__(self, max_notices: int = MAX_NOTICES):
        self._notices: deque[Notice] = deque(maxlen=max_notices)

    def alert(self, message: str, level: str = "error") -> Notice:
        notice = Notice(level=level, message=message)
        self._notices.append(notice)
        logger.log(
            logging.ERROR if level == "error" else logging.WARNING,
            "User notice: %s", message,
        )
        return notice

    def pending(self) -> list[Notice]:
        return list(self._notices)

    def drain(self) -> list[Notice]:
        """Return pending notices and forget them (each is shown once)."""
        notices = list(self._notices)
        self._notices.clear()
        return notices
