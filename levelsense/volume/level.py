"""
Sensor value to liquid level conversion.

A level sensor reports one number; what it means depends on how the
sensor measures:

- DISTANCE (ultrasonic, radar, laser): air gap from the sensor face down
  to the liquid surface. The reading is clamped into the sensor's usable
  range before it is subtracted from the tank height.
- PRESSURE (pressure transmitter, submersible): hydrostatic pressure at
  the sensor, converted to a liquid column by a configured factor.
- DIRECT (float, capacitive, vibrating fork): already a level.

Every result is clamped into ``[0, tank_height]``; convert_level()
also returns the unclamped value so callers can flag suspect readings.
"""

from __future__ import annotations

import math
from typing import Final

from levelsense.exceptions import InvalidLevelError
from levelsense.models.tank import (
    DEFAULT_SENSOR_CONFIG,
    LevelConversion,
    LevelSensorConfig,
    MeasurementPrinciple,
)

STANDARD_GRAVITY: Final[float] = 9.81
"""m/s² used for hydrostatic conversion."""

WATER_DENSITY: Final[float] = 1000.0
"""kg/m³."""

PRESSURE_UNITS_PA: Final[dict[str, float]] = {
    "pa": 1.0,
    "mbar": 100.0,
    "kpa": 1000.0,
    "bar": 100000.0,
    "psi": 6894.76,
}
"""Pascals per unit for supported pressure units."""


def pressure_to_height_factor(unit: str = "pa", density: float = WATER_DENSITY) -> float:
    """
    Meters of liquid column per unit of pressure.

    Args:
        unit: Pressure unit reported by the sensor (pa, mbar, kpa, bar, psi).
        density: Liquid density in kg/m³.

    Returns:
        Factor for LevelSensorConfig.pressure_to_height_factor.

    Raises:
        ValueError: If the unit is unknown or density is not positive.

    Example:
        >>> round(pressure_to_height_factor("bar"), 3)
        10.194
    """
    try:
        pascals = PRESSURE_UNITS_PA[unit.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown pressure unit: {unit!r}") from None
    if not math.isfinite(density) or density <= 0:
        raise ValueError(f"Density must be positive, got {density}")
    return pascals / (density * STANDARD_GRAVITY)


def _principle(value: MeasurementPrinciple | str) -> MeasurementPrinciple:
    if isinstance(value, MeasurementPrinciple):
        return value
    key = value.strip().lower()
    if key in {p.value for p in MeasurementPrinciple}:
        return MeasurementPrinciple(key)
    try:
        return MeasurementPrinciple.from_sensor_type(key)
    except ValueError as e:
        raise InvalidLevelError(str(e)) from e


def _check_finite(name: str, value: float) -> None:
    if value is None or not math.isfinite(value):
        raise InvalidLevelError(f"{name} must be a finite number, got {value!r}", value=value)


def convert_level(
    raw_value: float,
    principle: MeasurementPrinciple | str,
    tank_height: float,
    mount_offset: float = 0.0,
    calibration_offset: float = 0.0,
    config: LevelSensorConfig | None = None,
) -> LevelConversion:
    """
    Convert a raw sensor value to a liquid level.

    Args:
        raw_value: Sensor reading (m for distance/direct sensors, pressure
            units for pressure sensors).
        principle: Measurement principle, or a sensor type name such as
            "ultrasonic".
        tank_height: Height of the tank in m.
        mount_offset: Offset between the tank bottom and the sensor's zero
            reference, in m.
        calibration_offset: Added to the raw value before conversion.
        config: Sensor range and pressure settings.

    Returns:
        LevelConversion with the clamped and unclamped level.

    Raises:
        InvalidLevelError: If tank_height is not positive, any input is
            not finite, or principle is an unknown sensor type name.
    """
    _check_finite("raw_value", raw_value)
    _check_finite("tank_height", tank_height)
    _check_finite("mount_offset", mount_offset)
    _check_finite("calibration_offset", calibration_offset)
    if tank_height <= 0:
        raise InvalidLevelError(f"Tank height must be positive, got {tank_height}", value=tank_height)

    config = config or DEFAULT_SENSOR_CONFIG
    compensated = raw_value + calibration_offset
    kind = _principle(principle)

    if kind is MeasurementPrinciple.DISTANCE:
        max_range = config.max_range_for(tank_height)
        effective = min(max(compensated, config.min_sensor_range), max_range)
        level = tank_height - effective - mount_offset
    elif kind is MeasurementPrinciple.PRESSURE:
        level = compensated * config.pressure_to_height_factor + mount_offset
    elif kind is MeasurementPrinciple.DIRECT:
        level = compensated + mount_offset
    else:
        raise ValueError(f"Unsupported measurement principle: {kind!r}")

    return LevelConversion(
        level=min(max(level, 0.0), tank_height),
        unclamped_level=level,
        tank_height=tank_height,
    )


def to_level(
    raw_value: float,
    principle: MeasurementPrinciple | str,
    tank_height: float,
    mount_offset: float = 0.0,
    calibration_offset: float = 0.0,
    config: LevelSensorConfig | None = None,
) -> float:
    """
    Convert a raw sensor value to a liquid level in meters.

    Same as convert_level() but returns only the clamped level.

    Example:
        >>> to_level(0.5, MeasurementPrinciple.DISTANCE, tank_height=2.0)
        1.5
    """
    return convert_level(
        raw_value,
        principle,
        tank_height,
        mount_offset=mount_offset,
        calibration_offset=calibration_offset,
        config=config,
    ).level
