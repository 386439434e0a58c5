"""
Parsing engine for telemetry frames.

This package converts raw hex frames into structured readings. The
parsing architecture follows these principles:

1. **HexFrameReader**: Low-level reader for big-endian fields in hex text
2. **Sensor identification**: Header check and device identifier lookup
3. **Layout registry**: Strategy pattern for kind-specific payloads
4. **FrameDecoder**: Ties the above together and fails closed

Example:
    >>> from levelsense.parsers import decode_frame
    >>> reading = decode_frame(hex_line, captured_at)
    >>> if reading is not None:
    ...     print(reading.temperature)
"""

from levelsense.parsers.frame_decoder import DEFAULT_DECODER, FrameDecoder, decode_frame
from levelsense.parsers.hex_reader import HexFrameReader, read_field
from levelsense.parsers.sensor_registry import (
    KNOWN_DEVICES,
    FieldSpec,
    SensorLayoutRegistry,
    SensorLayoutStrategy,
    create_default_registry,
    identify,
    identify_device,
    parse_frame_header,
)
from levelsense.parsers.sensors import (
    AirQualityLayoutStrategy,
    WeatherStationLayoutStrategy,
    register_all_strategies,
)

__all__ = [
    # Hex Reader
    "HexFrameReader",
    "read_field",
    # Identification
    "KNOWN_DEVICES",
    "identify",
    "identify_device",
    "parse_frame_header",
    # Layout Registry
    "FieldSpec",
    "SensorLayoutRegistry",
    "SensorLayoutStrategy",
    "create_default_registry",
    "AirQualityLayoutStrategy",
    "WeatherStationLayoutStrategy",
    "register_all_strategies",
    # Decoding
    "FrameDecoder",
    "DEFAULT_DECODER",
    "decode_frame",
]
