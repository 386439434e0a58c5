"""
Pydantic models for decoded telemetry frames.

Design principles:
- All models are frozen (immutable)
- Fields that do not apply to a sensor kind are None, never zero
- The cleaned hex frame is kept for diagnostics
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SensorKind(str, Enum):
    """
    Sensor kinds known to the decoder.

    The kind is determined solely by the 6-byte device identifier
    embedded in the frame header.
    """

    AIR_QUALITY_ULTRASONIC = "air_quality_ultrasonic"
    """Air quality, noise and ultrasonic distance combo sensor."""

    WEATHER_STATION = "weather_station"
    """Weather station with pressure, wind, rain and solar radiation."""

    UNKNOWN = "unknown"
    """Unrecognized device identifier. Never decoded further."""


class FrameHeader(BaseModel):
    """
    Fixed 16-byte header common to every frame.

    Example:
        >>> header = FrameHeader(
        ...     protocol_version=1,
        ...     device_id="124A7DA90849",
        ...     session_id=0,
        ...     order=3,
        ...     declared_length=48,
        ... )
        >>> header.declared_fields
        12
    """

    model_config = ConfigDict(frozen=True)

    protocol_version: int = Field(ge=0, le=0xFF, description="Protocol version byte")
    device_id: str = Field(pattern=r"^[0-9A-F]{12}$", description="6-byte device identifier as hex")
    session_id: int = Field(ge=0, le=0xFFFFFFFF, description="Session identifier")
    order: int = Field(ge=0, le=0xFF, description="Order/sequence byte")
    declared_length: int = Field(ge=0, le=0xFFFF, description="Declared payload length in bytes")

    @field_validator("device_id", mode="before")
    @classmethod
    def normalize_device_id(cls, v: str) -> str:
        """Device identifiers are compared in uppercase."""
        return v.upper() if isinstance(v, str) else v

    @property
    def declared_fields(self) -> int:
        """Number of 4-byte payload fields announced by the length marker."""
        return self.declared_length // 4


class SensorReading(BaseModel):
    """
    One decoded telemetry record.

    Physical fields are populated according to the sensor kind; fields
    that a kind does not report stay None.

    Example:
        >>> reading.temperature
        23.7
        >>> reading.noise is None  # weather stations have no noise sensor
        True
    """

    model_config = ConfigDict(frozen=True)

    kind: SensorKind = Field(description="Sensor kind")
    device_id: str = Field(description="Device identifier (12 hex digits)")
    session_id: int = Field(ge=0, description="Session identifier")
    captured_at: datetime | None = Field(default=None, description="Capture timestamp")

    # Environment
    temperature: float | None = Field(default=None, description="Temperature in °C")
    humidity: float | None = Field(default=None, description="Relative humidity in %RH")
    pm2_5: float | None = Field(default=None, description="PM2.5 in µg/m³")
    pm10: float | None = Field(default=None, description="PM10 in µg/m³")
    noise: float | None = Field(default=None, description="Noise level in dB")
    atmospheric_pressure: float | None = Field(default=None, description="Pressure in mbar")

    # Level
    ultrasonic_distance: float | None = Field(
        default=None, description="Distance from sensor to liquid surface in m"
    )

    # Weather
    wind_speed: float | None = Field(default=None, description="Wind speed in m/s")
    wind_direction: float | None = Field(default=None, description="Wind direction in degrees")
    rainfall: float | None = Field(default=None, description="Rainfall in mm")
    solar_radiation: float | None = Field(default=None, description="Solar radiation in W/m²")

    # Device status
    signal_raw: int | None = Field(default=None, description="Raw signal strength")
    signal_dbm: int | None = Field(default=None, description="Signal strength in dBm")
    error_code: int | None = Field(default=None, description="Device-reported error code")
    firmware_version: float | None = Field(default=None, description="Firmware version")

    # Original data
    header: FrameHeader | None = Field(default=None, description="Decoded frame header")
    raw_data: str | None = Field(default=None, description="Cleaned hex frame")

    @property
    def has_error(self) -> bool:
        """Check if the device reported a non-zero error code."""
        return bool(self.error_code)

    @property
    def measurements(self) -> dict[str, float | int]:
        """Physical fields present on this reading, by name."""
        return self.model_dump(
            exclude={"kind", "device_id", "session_id", "captured_at", "header", "raw_data"},
            exclude_none=True,
        )

    def __repr__(self) -> str:
        return f"SensorReading({self.kind.value}, device={self.device_id}, fields={len(self.measurements)})"
