"""Decoder for the fixed 40-byte attendance record pushed by the terminals.

Layout (little-endian)::

    uint16  uid          terminal-local user tag
    24s     badge        zero-padded ASCII badge number
    uint8   status
    uint32  timestamp    terminal epoch, see decode_timestamp()
    uint8   punch        direction hint from the terminal
    8x      reserved
"""
from __future__ import annotations

import binascii
import struct
from datetime import datetime

from ..core.constants import RECORD_SIZE
from ..core.exceptions import DecodeError
from .model import RawDeviceEvent

_RECORD = struct.Struct("<H24sBIB8s")

# Badge ids are stored as signed 64-bit integers.
_BADGE_MIN = -(2**63)
_BADGE_MAX = 2**63 - 1


def decode_timestamp(value: int) -> datetime:
    """Decode the terminal's packed timestamp.

    This is not Unix time: the value is peeled apart by successive modulo and
    division (seconds, minutes, hours, day, month) and the remainder is the
    year offset from 2000. Stored timestamps depend on this exact order.
    """
    t = int(value)
    second = t % 60
    t //= 60
    minute = t % 60
    t //= 60
    hour = t % 24
    t //= 24
    day = t % 31 + 1
    t //= 31
    month = t % 12 + 1
    t //= 12
    try:
        return datetime(t + 2000, month, day, hour, minute, second)
    except ValueError as exc:
        # e.g. day 31 in a 30-day month
        raise DecodeError(f"Invalid terminal timestamp {value}: {exc}") from exc


def parse_badge(raw: bytes) -> int:
    text = raw.rstrip(b"\x00")
    try:
        badge = int(text.decode("ascii"), 10)
    except (UnicodeDecodeError, ValueError):
        raise DecodeError(f"Failed to parse badge id {raw!r}") from None
    if not _BADGE_MIN <= badge <= _BADGE_MAX:
        raise DecodeError(f"Badge id {badge} is out of range")
    return badge


def decode_record(serial_number: str, hex_payload: str) -> RawDeviceEvent:
    try:
        data = binascii.unhexlify((hex_payload or "").strip())
    except (binascii.Error, ValueError):
        raise DecodeError("Invalid hex data") from None

    if len(data) != RECORD_SIZE:
        raise DecodeError(f"Expected {RECORD_SIZE} bytes, got {len(data)}")

    uid, badge, status, timestamp, punch, _reserved = _RECORD.unpack(data)

    return RawDeviceEvent(
        serial_number=serial_number,
        uid=uid,
        badge_id=parse_badge(badge),
        status=status,
        punch_hint=punch,
        timestamp=decode_timestamp(timestamp),
    )
