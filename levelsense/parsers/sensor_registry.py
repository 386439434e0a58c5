"""
Sensor identification and payload layout strategies.

This module implements the Strategy pattern for kind-specific payload
decoding. Each SensorKind has a layout strategy listing its payload
fields in wire order; the SensorLayoutRegistry maps kinds to strategies.

Architecture:
    SensorLayoutRegistry
        └── SensorLayoutStrategy (interface)
            ├── AirQualityLayoutStrategy
            └── WeatherStationLayoutStrategy

The device identifier table is fixed data: a frame from an identifier
not listed here is SensorKind.UNKNOWN and is not decoded.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from levelsense.exceptions import BadHeaderError, TruncatedFrameError
from levelsense.models.readings import FrameHeader, SensorKind, SensorReading
from levelsense.parsers.hex_reader import HexFrameReader
from levelsense.protocol.constants import FrameConstants

if TYPE_CHECKING:
    from datetime import datetime


KNOWN_DEVICES: Final[dict[str, SensorKind]] = {
    "16098522754E": SensorKind.AIR_QUALITY_ULTRASONIC,
    "124A7DA90849": SensorKind.WEATHER_STATION,
}
"""Device identifier (12 hex digits) to sensor kind."""


@dataclass(frozen=True)
class FieldSpec:
    """
    One payload field.

    Attributes:
        name: SensorReading attribute the value is stored in.
        width: Field width in bytes.
        divisor: Raw value is divided by this (1 keeps the raw integer).
    """

    name: str
    width: int = FrameConstants.FIELD_SIZE
    divisor: int = 1

    def scale(self, raw: int) -> float | int:
        """Apply the field scale to a raw integer."""
        if self.divisor == 1:
            return raw
        return raw / self.divisor


class SensorLayoutStrategy(ABC):
    """
    Abstract base class for payload layout strategies.

    Implementations should:
    1. Define the kind property
    2. Define the ordered payload fields
    3. Optionally derive extra values in derive()
    """

    @property
    @abstractmethod
    def kind(self) -> SensorKind:
        """
        The sensor kind this strategy handles.

        Returns:
            SensorKind enum value.
        """
        ...

    @property
    @abstractmethod
    def fields(self) -> tuple[FieldSpec, ...]:
        """Payload fields in wire order."""
        ...

    @property
    def payload_size(self) -> int:
        """Total payload bytes required by the layout."""
        return sum(spec.width for spec in self.fields)

    def derive(self, values: dict[str, float | int]) -> dict[str, float | int]:
        """
        Compute values derived from decoded fields.

        Args:
            values: Scaled field values by name.

        Returns:
            Additional values to store on the reading.
        """
        return {}

    def parse(
        self,
        reader: HexFrameReader,
        header: FrameHeader,
        captured_at: datetime | None,
    ) -> SensorReading:
        """
        Decode the payload into a SensorReading.

        The whole layout is bounds-checked before any field is read, so a
        short frame never produces a partial reading.

        Args:
            reader: HexFrameReader positioned at the payload.
            header: Already-parsed frame header.
            captured_at: Capture timestamp.

        Returns:
            Decoded SensorReading.

        Raises:
            TruncatedFrameError: If the frame is shorter than the layout.
        """
        if not reader.has_bytes(self.payload_size):
            raise TruncatedFrameError(
                f"{self.kind.value} payload needs {self.payload_size} bytes, "
                f"have {reader.remaining_bytes}",
                offset=reader.position,
                raw_data=reader.data,
            )

        values: dict[str, float | int] = {}
        for spec in self.fields:
            values[spec.name] = spec.scale(reader.read_uint(spec.width))
        values.update(self.derive(values))

        return SensorReading(
            kind=self.kind,
            device_id=header.device_id,
            session_id=header.session_id,
            captured_at=captured_at,
            header=header,
            raw_data=reader.data,
            **values,
        )


def signal_dbm(signal_raw: int) -> int:
    """Convert a raw signal strength to dBm."""
    return -(FrameConstants.SIGNAL_REFERENCE_DBM - signal_raw)


class SensorLayoutRegistry:
    """
    Registry of payload layout strategies by sensor kind.

    If no strategy is registered for a kind, the registry returns None
    and the frame cannot be decoded.

    Example:
        >>> registry = SensorLayoutRegistry()
        >>> registry.register(WeatherStationLayoutStrategy())
        >>> strategy = registry.get(SensorKind.WEATHER_STATION)
        >>> if strategy:
        ...     reading = strategy.parse(reader, header, captured_at)
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._strategies: dict[SensorKind, SensorLayoutStrategy] = {}

    def register(self, strategy: SensorLayoutStrategy) -> None:
        """
        Register a layout strategy.

        Note:
            Replaces any existing strategy for the same kind.
        """
        self._strategies[strategy.kind] = strategy

    def get(self, kind: SensorKind) -> SensorLayoutStrategy | None:
        """Get the strategy for a kind, or None if not registered."""
        return self._strategies.get(kind)

    def has(self, kind: SensorKind) -> bool:
        """Check if a strategy is registered."""
        return kind in self._strategies

    @property
    def registered_kinds(self) -> frozenset[SensorKind]:
        """Get all kinds with registered strategies."""
        return frozenset(self._strategies.keys())

    def unregister(self, kind: SensorKind) -> bool:
        """
        Remove a strategy registration.

        Returns:
            True if a strategy was removed, False if none was registered.
        """
        if kind in self._strategies:
            del self._strategies[kind]
            return True
        return False

    def clear(self) -> None:
        """Remove all registered strategies."""
        self._strategies.clear()

    def __repr__(self) -> str:
        return f"SensorLayoutRegistry(kinds={len(self._strategies)})"


def identify_device(device_id: str) -> SensorKind:
    """Look up a device identifier; unknown identifiers give SensorKind.UNKNOWN."""
    return KNOWN_DEVICES.get(device_id.upper(), SensorKind.UNKNOWN)


def check_header(reader: HexFrameReader) -> None:
    """
    Verify the header marker at offset 0.

    Raises:
        TruncatedFrameError: If the frame is shorter than the marker.
        BadHeaderError: If the marker is not 0xFEDC.
    """
    marker = reader.read_field(FrameConstants.HEADER_OFFSET, FrameConstants.HEADER_SIZE)
    if marker != FrameConstants.HEADER_MARKER:
        raise BadHeaderError(marker, raw_data=reader.data)


def identify(frame: str | bytes | HexFrameReader) -> SensorKind:
    """
    Identify the sensor kind of a frame.

    Args:
        frame: Hex text, raw bytes, or an existing reader.

    Returns:
        The SensorKind; SensorKind.UNKNOWN for unlisted identifiers.

    Raises:
        BadHeaderError: If the frame does not start with 0xFEDC.
        TruncatedFrameError: If the device identifier is cut off.

    Example:
        >>> identify("FEDC01124A7DA90849")
        <SensorKind.WEATHER_STATION: 'weather_station'>
    """
    reader = frame if isinstance(frame, HexFrameReader) else HexFrameReader(frame)
    check_header(reader)
    device_id = reader.hex_at(FrameConstants.DEVICE_ID_OFFSET, FrameConstants.DEVICE_ID_SIZE)
    return identify_device(device_id)


def parse_frame_header(reader: HexFrameReader) -> FrameHeader:
    """
    Parse the fixed frame header.

    After calling this, the reader is positioned at the payload.

    Header structure (16 bytes):
        - marker: uint16 (2 bytes), 0xFEDC
        - protocol_version: byte (1 byte)
        - device_id: 6 bytes
        - session_id: uint32 (4 bytes)
        - order: byte (1 byte)
        - declared_length: uint16 (2 bytes)

    Raises:
        BadHeaderError: If the marker is wrong.
        TruncatedFrameError: If the frame is shorter than 16 bytes.
    """
    check_header(reader)
    if reader.size < FrameConstants.MIN_FRAME_BYTES:
        raise TruncatedFrameError(
            f"Frame has {reader.size} bytes, header needs {FrameConstants.MIN_FRAME_BYTES}",
            offset=0,
            raw_data=reader.data,
        )

    reader.seek_byte(FrameConstants.VERSION_OFFSET)
    protocol_version = reader.read_uint8()
    device_id = reader.slice(FrameConstants.DEVICE_ID_SIZE)
    session_id = reader.read_uint32()
    order = reader.read_uint8()
    declared_length = reader.read_uint16()

    return FrameHeader(
        protocol_version=protocol_version,
        device_id=device_id,
        session_id=session_id,
        order=order,
        declared_length=declared_length,
    )


def create_default_registry() -> SensorLayoutRegistry:
    """
    Create a new registry with all built-in layout strategies registered.

    Returns:
        SensorLayoutRegistry with AirQualityUltrasonic and WeatherStation.
    """
    from levelsense.parsers.sensors import register_all_strategies

    registry = SensorLayoutRegistry()
    register_all_strategies(registry)
    return registry
