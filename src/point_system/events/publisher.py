from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from ..common.datetime_utils import now_local

logger = logging.getLogger(__name__)

ATTENDANCE_LOG_CREATED = "attendance_log.created"
WORKDAY_GENERATED = "workday.generated"
RAW_ATTENDANCE_UPDATED = "raw_attendance.updated"


@dataclass(frozen=True)
class AttendanceEvent:
    """Outbound change notification, published after a successful write."""

    name: str
    payload: dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=now_local)


class EventPublisher(Protocol):
    def publish(self, event: AttendanceEvent) -> None:
        raise NotImplementedError


class LoggingEventPublisher(EventPublisher):
    """Default publisher: only logs. Swap in a broadcaster at the app edge."""

    def publish(self, event: AttendanceEvent) -> None:
        logger.info("event %s %s", event.name, event.payload)
