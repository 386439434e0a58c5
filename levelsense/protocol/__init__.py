"""
Protocol layer for telemetry frames.

This module contains the low-level frame handling:
- Frame layout constants
- Hex text normalization
"""

from levelsense.protocol.constants import FrameConstants
from levelsense.protocol.encoding import bytes_to_hex, clean_hex

__all__ = [
    "FrameConstants",
    "clean_hex",
    "bytes_to_hex",
]
