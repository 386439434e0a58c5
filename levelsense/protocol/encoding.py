"""
Hex text normalization for telemetry frames.

Frames are transmitted as ASCII hex, often with spaces between bytes
(e.g. "FE DC 01 12 ..."). All whitespace is stripped once, before any
field is interpreted.
"""

from __future__ import annotations

import re
from typing import Final

from levelsense.exceptions import FrameError

_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"\s+")
_HEX_DIGITS: Final[re.Pattern[str]] = re.compile(r"[0-9A-F]*")


def clean_hex(data: str | bytes | bytearray | memoryview) -> str:
    """
    Normalize a frame to uppercase hex text without whitespace.

    Args:
        data: Hex text (whitespace tolerated) or raw frame bytes.

    Returns:
        Uppercase hex string, 2 characters per byte.

    Raises:
        FrameError: If the text contains non-hex characters or an odd
            number of hex digits.

    Example:
        >>> clean_hex("fe dc 01")
        'FEDC01'
        >>> clean_hex(b"\\xfe\\xdc")
        'FEDC'
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data).hex().upper()

    text = _WHITESPACE.sub("", data).upper()
    if not _HEX_DIGITS.fullmatch(text):
        raise FrameError("Frame contains non-hex characters", raw_data=text)
    if len(text) % 2 != 0:
        raise FrameError(f"Hex string length must be even, got {len(text)}", raw_data=text)
    return text


def bytes_to_hex(data: bytes, separator: str = "") -> str:
    """
    Format bytes as uppercase hex, optionally separated.

    Example:
        >>> bytes_to_hex(b"\\xfe\\xdc", " ")
        'FE DC'
    """
    return data.hex(separator).upper() if separator else data.hex().upper()
