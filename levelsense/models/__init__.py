"""
Data models for telemetry readings and tank geometry.

This module contains Pydantic models and enums:

- Sensor kinds, frame headers and decoded readings
- Tank shapes, orientations and measurement principles
- Tank geometry, level sensor configuration and volume results
"""

from levelsense.models.readings import FrameHeader, SensorKind, SensorReading
from levelsense.models.tank import (
    DEFAULT_SENSOR_CONFIG,
    LINEAR_APPROXIMATION,
    LevelConversion,
    LevelSensorConfig,
    MeasurementPrinciple,
    Orientation,
    TankGeometry,
    TankShape,
    VolumeResult,
)

__all__ = [
    # Enums
    "SensorKind",
    "TankShape",
    "Orientation",
    "MeasurementPrinciple",
    # Readings
    "FrameHeader",
    "SensorReading",
    # Tank
    "TankGeometry",
    "LevelSensorConfig",
    "DEFAULT_SENSOR_CONFIG",
    "LevelConversion",
    "VolumeResult",
    "LINEAR_APPROXIMATION",
]
