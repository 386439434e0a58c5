"""
Frame decoding entry point.

Turns one hex telemetry frame into a SensorReading:

    hex text -> HexFrameReader -> header check / identify -> layout strategy

Frames from unknown devices are a normal condition during ingestion and
produce no reading. Malformed frames raise FrameError subclasses and the
caller is expected to skip them.

Example:
    >>> from levelsense.parsers import decode_frame
    >>> reading = decode_frame(
    ...     "FE DC 01 12 4A 7D A9 08 49 00 00 00 00 03 00 30 ...",
    ...     captured_at=datetime(2024, 1, 1, 9, 0),
    ... )
    >>> reading.temperature
    23.7
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from levelsense.exceptions import UnknownDeviceError
from levelsense.models.readings import SensorKind
from levelsense.parsers.hex_reader import HexFrameReader
from levelsense.parsers.sensor_registry import (
    SensorLayoutRegistry,
    create_default_registry,
    identify_device,
    parse_frame_header,
)
from levelsense.protocol.constants import FrameConstants

if TYPE_CHECKING:
    from datetime import datetime

    from levelsense.models.readings import SensorReading


class FrameDecoder:
    """
    Decoder for telemetry frames.

    Holds a layout registry; otherwise stateless and safe to share
    between threads.

    Example:
        >>> decoder = FrameDecoder()
        >>> kind = identify(frame)
        >>> if kind is not SensorKind.UNKNOWN:
        ...     reading = decoder.decode(frame, kind, captured_at)
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: SensorLayoutRegistry | None = None) -> None:
        """
        Initialize the decoder.

        Args:
            registry: Layout registry. Defaults to all built-in layouts.
        """
        self._registry = registry if registry is not None else create_default_registry()

    @property
    def registry(self) -> SensorLayoutRegistry:
        """The layout registry in use."""
        return self._registry

    def decode(
        self,
        frame: str | bytes | HexFrameReader,
        kind: SensorKind,
        captured_at: datetime | None = None,
    ) -> SensorReading:
        """
        Decode a frame of a known kind.

        Args:
            frame: Hex text, raw bytes, or an existing reader.
            kind: Sensor kind from identify().
            captured_at: Capture timestamp.

        Returns:
            Fully populated SensorReading.

        Raises:
            BadHeaderError: If the frame does not start with 0xFEDC.
            TruncatedFrameError: If the frame is shorter than the kind's layout.
            UnknownDeviceError: If kind is UNKNOWN or has no registered layout.
        """
        reader = frame if isinstance(frame, HexFrameReader) else HexFrameReader(frame)
        header = parse_frame_header(reader)

        strategy = self._registry.get(kind) if kind is not SensorKind.UNKNOWN else None
        if strategy is None:
            raise UnknownDeviceError(header.device_id, raw_data=reader.data)

        reader.seek_byte(FrameConstants.PAYLOAD_OFFSET)
        return strategy.parse(reader, header, captured_at)

    def decode_frame(
        self,
        hex_or_bytes: str | bytes | bytearray | memoryview,
        captured_at: datetime | None = None,
    ) -> SensorReading | None:
        """
        Identify and decode a frame.

        Args:
            hex_or_bytes: Frame exactly as transmitted (whitespace tolerated).
            captured_at: Capture timestamp.

        Returns:
            SensorReading, or None if the device identifier is unknown.

        Raises:
            FrameError: If the frame is not valid hex.
            BadHeaderError: If the frame does not start with 0xFEDC.
            TruncatedFrameError: If the frame is shorter than required.
        """
        reader = HexFrameReader(hex_or_bytes)
        header = parse_frame_header(reader)
        kind = identify_device(header.device_id)
        if kind is SensorKind.UNKNOWN:
            return None
        return self.decode(reader, kind, captured_at)

    def __repr__(self) -> str:
        return f"FrameDecoder({self._registry!r})"


DEFAULT_DECODER = FrameDecoder()
"""Decoder with all built-in layouts. Never mutated by this package."""


def decode_frame(
    hex_or_bytes: str | bytes | bytearray | memoryview,
    captured_at: datetime | None = None,
) -> SensorReading | None:
    """
    Decode one telemetry frame with the built-in layouts.

    Args:
        hex_or_bytes: Frame exactly as transmitted (whitespace tolerated).
        captured_at: Capture timestamp.

    Returns:
        SensorReading, or None if the device identifier is unknown.

    Raises:
        FrameError: On malformed frames (see FrameDecoder.decode_frame).
    """
    return DEFAULT_DECODER.decode_frame(hex_or_bytes, captured_at)
