"""
Telemetry frame constants.

Frames arrive as hex text, two characters per byte, big-endian:

    FE DC | 01 | 12 4A 7D A9 08 49 | 00 00 00 00 | 03 | 00 30 | payload ...
    header  ver   device id           session id    ord  length

Payload fields are 4-byte unsigned integers laid out per sensor kind.
"""

from __future__ import annotations

from typing import Final


class FrameConstants:
    """Fixed frame layout values."""

    HEADER_MARKER: Final[int] = 0xFEDC
    """Two-byte marker every frame starts with."""

    HEADER_OFFSET: Final[int] = 0
    HEADER_SIZE: Final[int] = 2

    VERSION_OFFSET: Final[int] = 2
    VERSION_SIZE: Final[int] = 1

    DEVICE_ID_OFFSET: Final[int] = 3
    DEVICE_ID_SIZE: Final[int] = 6

    SESSION_ID_OFFSET: Final[int] = 9
    SESSION_ID_SIZE: Final[int] = 4

    ORDER_OFFSET: Final[int] = 13
    ORDER_SIZE: Final[int] = 1

    LENGTH_OFFSET: Final[int] = 14
    LENGTH_SIZE: Final[int] = 2

    PAYLOAD_OFFSET: Final[int] = 16
    """Byte offset where the kind-specific payload begins."""

    MIN_FRAME_BYTES: Final[int] = 16
    """Header, version, device id, session id, order byte and length marker."""

    FIELD_SIZE: Final[int] = 4
    """Every payload field is a 4-byte unsigned integer."""

    SIGNAL_REFERENCE_DBM: Final[int] = 100
    """signal_dbm = -(SIGNAL_REFERENCE_DBM - signal_raw)."""

    LOG_HEX_MARKER: Final[str] = "Bytes in Hex: "
    """Text preceding the frame in gateway log lines."""

