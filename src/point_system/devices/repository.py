from __future__ import annotations

from typing import Optional, Protocol

from .model import Device


class DeviceRepository(Protocol):
    def get_by_serial(self, serial_number: str) -> Optional[Device]:
        raise NotImplementedError

    def register(
        self,
        *,
        serial_number: str,
        name: Optional[str] = None,
        location: Optional[str] = None,
        company_id: Optional[int] = None,
    ) -> Device:
        """Insert the device, or return the existing row for this serial number."""

        raise NotImplementedError
