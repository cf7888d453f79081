from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.validators import require_non_empty
from ..core.exceptions import DecodeError
from ..devices.decoder import decode_record
from ..devices.repository import DeviceRepository
from ..events.publisher import ATTENDANCE_LOG_CREATED, AttendanceEvent, EventPublisher, LoggingEventPublisher
from .classifier import ClassificationContext, PunchClassifier
from .model import PunchRecord
from .repository import PunchRepository
from .windows import DailyWindow, load_window

logger = logging.getLogger(__name__)

UNKNOWN_DEVICE_NAME = "Unknown Device"
UNKNOWN_DEVICE_LOCATION = "Unknown Location"


class PunchService:
    def __init__(
        self,
        punches: PunchRepository,
        devices: DeviceRepository,
        *,
        classifier: PunchClassifier | None = None,
        publisher: EventPublisher | None = None,
    ):
        self._punches = punches
        self._devices = devices
        self._classifier = classifier or PunchClassifier(punches)
        self._publisher = publisher or LoggingEventPublisher()

    def decode_and_classify(self, serial_number: str, hex_payload: str) -> PunchRecord:
        serial_number = require_non_empty(serial_number, "serial_number")
        try:
            event = decode_record(serial_number, hex_payload)
        except DecodeError as exc:
            logger.warning("Rejected payload from %s: %s", serial_number, exc)
            raise

        self._ensure_device(serial_number)

        with self._punches.serialized(event.badge_id):
            context = self._load_context(event.badge_id, event.timestamp)
            decision = self._classifier.decide(context, event.timestamp)
            record = self._punches.append(
                employee_no=event.badge_id,
                timestamp=event.timestamp,
                direction=decision.direction,
                serial_number=serial_number,
                uid=event.uid,
                status=event.status,
                punch_hint=event.punch_hint,
            )

        logger.debug(
            "Punch %s for %s at %s classified %s (%s)",
            record.punch_id,
            record.employee_no,
            record.timestamp,
            decision.direction.value,
            decision.reason,
        )
        self._publisher.publish(
            AttendanceEvent(
                ATTENDANCE_LOG_CREATED,
                {"punch_id": record.punch_id, "employee_no": record.employee_no},
            )
        )
        return record

    def reconstruct_daily_window(self, employee_no: int, day: date) -> Optional[DailyWindow]:
        return load_window(self._punches, employee_no, day)

    def _ensure_device(self, serial_number: str) -> None:
        if self._devices.get_by_serial(serial_number) is not None:
            return
        device = self._devices.register(
            serial_number=serial_number,
            name=UNKNOWN_DEVICE_NAME,
            location=UNKNOWN_DEVICE_LOCATION,
        )
        logger.info("Registered unknown device %s as %s", serial_number, device.device_id)

    def _load_context(self, employee_no: int, event_time: datetime) -> ClassificationContext:
        """Context for a punch at `event_time`, built only from punches at or before it.

        Legacy punches stored without a direction up to `event_time` are
        classified first, oldest first.
        """
        pending = self._punches.list_unclassified(employee_no, until=event_time)
        for punch in pending:
            last = self._punches.get_last_classified_until(employee_no, punch.timestamp)
            direction = self._classifier.classify(ClassificationContext(employee_no, last), punch.timestamp)
            self._punches.set_direction(punch.punch_id, direction)
        if pending:
            logger.info("Backfilled direction on %d punches for %s", len(pending), employee_no)

        return ClassificationContext(employee_no, self._punches.get_last_classified_until(employee_no, event_time))
