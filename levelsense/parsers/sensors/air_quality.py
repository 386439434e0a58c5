"""
Air quality + ultrasonic distance sensor layout.

The combo sensor reports climate, particulates and noise alongside the
distance from its face to the liquid surface, which is the principal
measurement for tank level.

Device identifier: 16098522754E
"""

from __future__ import annotations

from typing import Final

from levelsense.models.readings import SensorKind
from levelsense.parsers.sensor_registry import FieldSpec, SensorLayoutStrategy, signal_dbm

AIR_QUALITY_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec("temperature", divisor=10),
    FieldSpec("humidity", divisor=10),
    FieldSpec("pm2_5"),
    FieldSpec("pm10"),
    FieldSpec("noise", divisor=10),
    FieldSpec("ultrasonic_distance"),
    FieldSpec("signal_raw"),
    FieldSpec("error_code"),
    FieldSpec("firmware_version", divisor=10),
)


class AirQualityLayoutStrategy(SensorLayoutStrategy):
    """
    Payload layout for the air quality / ultrasonic sensor.

    Payload (9 fields, 4 bytes each):
    - temperature (tenths of °C)
    - humidity (tenths of %RH)
    - pm2_5, pm10 (µg/m³)
    - noise (tenths of dB)
    - ultrasonic_distance (m)
    - signal_raw, error_code
    - firmware_version (tenths)
    """

    @property
    def kind(self) -> SensorKind:
        """Returns AIR_QUALITY_ULTRASONIC."""
        return SensorKind.AIR_QUALITY_ULTRASONIC

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        return AIR_QUALITY_FIELDS

    def derive(self, values: dict[str, float | int]) -> dict[str, float | int]:
        """Add signal_dbm."""
        return {"signal_dbm": signal_dbm(int(values["signal_raw"]))}
