"""
Tank reading processing.

Joins the two stages for one monitored tank:

    SensorReading -> principal measurement -> level -> VolumeResult

Example:
    >>> from levelsense import TankConfig, TankGeometry, decode_frame, process_tank_reading
    >>> tank = TankConfig(
    ...     geometry=TankGeometry(shape="cylindrical", diameter=2.0, height=3.0),
    ...     principle="ultrasonic",
    ... )
    >>> reading = decode_frame(frame_hex)
    >>> result = process_tank_reading(tank, reading)
    >>> result.method
    'cylindrical_vertical'
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from levelsense.exceptions import VolumeError
from levelsense.models.readings import SensorKind, SensorReading
from levelsense.models.tank import (
    DEFAULT_SENSOR_CONFIG,
    LevelSensorConfig,
    MeasurementPrinciple,
    TankGeometry,
)
from levelsense.volume.engine import DEFAULT_ENGINE, VolumeEngine

# Module logger
logger = logging.getLogger(__name__)


class TankConfig(BaseModel):
    """
    Configuration of one monitored tank.

    Attributes:
        geometry: Tank shape and dimensions.
        principle: How the attached sensor measures. Sensor type names
            such as "ultrasonic" or "pressure_transmitter" are accepted.
        calibration_offset: Added to every raw sensor value.
        sensor_config: Sensor range and pressure settings.
        density: Liquid density in kg/m³, for mass estimates.
        name: Display name used in log messages.
    """

    model_config = ConfigDict(frozen=True)

    geometry: TankGeometry
    principle: MeasurementPrinciple = Field(default=MeasurementPrinciple.DISTANCE)
    calibration_offset: float = Field(default=0.0, allow_inf_nan=False)
    sensor_config: LevelSensorConfig = Field(default=DEFAULT_SENSOR_CONFIG)
    density: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    name: str | None = None

    @field_validator("principle", mode="before")
    @classmethod
    def parse_principle(cls, v: object) -> object:
        """Accept a principle value or a field sensor type name."""
        if isinstance(v, str) and not isinstance(v, MeasurementPrinciple):
            key = v.strip().lower()
            if key in {p.value for p in MeasurementPrinciple}:
                return MeasurementPrinciple(key)
            return MeasurementPrinciple.from_sensor_type(key)
        return v

    @property
    def label(self) -> str:
        return self.name or self.geometry.tag


class TankVolumeReading(BaseModel):
    """Volume derived from one sensor reading for one tank."""

    model_config = ConfigDict(frozen=True)

    device_id: str
    captured_at: datetime | None = None
    raw_value: float = Field(description="Principal measurement as reported")
    level: float = Field(ge=0, description="Liquid level in m")
    volume: float = Field(ge=0, description="Volume in m³")
    max_volume: float = Field(ge=0, description="Full volume in m³")
    fill_percentage: float = Field(ge=0, le=100)
    method: str
    estimated_mass: float | None = Field(default=None, description="Liquid mass in kg")
    data_quality: Literal["good", "clamped"] = "good"

    @property
    def liters(self) -> float:
        """Volume in liters."""
        return self.volume * 1000.0


def principal_measurement(reading: SensorReading) -> float | None:
    """
    Level-bearing value of a reading.

    Air-quality/ultrasonic sensors report the distance to the liquid
    surface. Weather stations carry no level measurement.

    Returns:
        The value, or None if the reading has none.
    """
    if reading.kind is SensorKind.AIR_QUALITY_ULTRASONIC:
        return reading.ultrasonic_distance
    return None


def process_tank_reading(
    tank: TankConfig,
    reading: SensorReading,
    engine: VolumeEngine | None = None,
) -> TankVolumeReading | None:
    """
    Compute the tank volume for one sensor reading.

    Args:
        tank: Tank configuration.
        reading: Decoded sensor reading.
        engine: Volume engine. Defaults to the built-in shapes.

    Returns:
        TankVolumeReading, or None if the reading has no level measurement.

    Raises:
        VolumeError: If the tank configuration or reading cannot produce a
            volume. Logged before it propagates.
    """
    engine = engine or DEFAULT_ENGINE
    raw_value = principal_measurement(reading)
    if raw_value is None:
        logger.debug("Reading from %s has no level measurement", reading.device_id)
        return None

    if reading.has_error:
        logger.warning("Device %s reported error code %d", reading.device_id, reading.error_code)

    try:
        conversion = engine.convert(
            tank.geometry,
            raw_value,
            tank.principle,
            calibration_offset=tank.calibration_offset,
            config=tank.sensor_config,
        )
        result = engine.volume(tank.geometry, conversion.level)
    except VolumeError as e:
        logger.error("Volume computation failed for tank %s: %s", tank.label, e)
        raise

    if conversion.was_clamped:
        logger.warning(
            "Level %.3f m outside tank %s (0-%.3f m), clamped to %.3f m",
            conversion.unclamped_level,
            tank.label,
            conversion.tank_height,
            conversion.level,
        )

    mass = result.volume * tank.density if tank.density is not None else None
    logger.debug("Tank %s: %s", tank.label, result)

    return TankVolumeReading(
        device_id=reading.device_id,
        captured_at=reading.captured_at,
        raw_value=raw_value,
        level=result.level,
        volume=result.volume,
        max_volume=result.max_volume,
        fill_percentage=result.fill_percentage,
        method=result.method,
        estimated_mass=mass,
        data_quality="clamped" if conversion.was_clamped else "good",
    )
