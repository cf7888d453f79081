from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Device:
    """Domain entity: a biometric terminal, identified by its serial number."""

    device_id: int
    serial_number: str
    name: Optional[str] = None
    location: Optional[str] = None
    company_id: Optional[int] = None


@dataclass(frozen=True)
class RawDeviceEvent:
    """One decoded terminal record. Ephemeral: never stored as-is."""

    serial_number: str
    uid: int
    badge_id: int
    status: int
    punch_hint: int
    timestamp: datetime
