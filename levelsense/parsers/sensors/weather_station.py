"""
Weather station layout.

Device identifier: 124A7DA90849
"""

from __future__ import annotations

from typing import Final

from levelsense.models.readings import SensorKind
from levelsense.parsers.sensor_registry import FieldSpec, SensorLayoutStrategy, signal_dbm

WEATHER_STATION_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec("temperature", divisor=10),
    FieldSpec("humidity", divisor=10),
    FieldSpec("atmospheric_pressure", divisor=100),
    FieldSpec("pm2_5"),
    FieldSpec("pm10"),
    FieldSpec("wind_speed", divisor=10),
    FieldSpec("wind_direction"),
    FieldSpec("rainfall"),
    FieldSpec("solar_radiation"),
    FieldSpec("signal_raw"),
    FieldSpec("error_code"),
    FieldSpec("firmware_version", divisor=10),
)


class WeatherStationLayoutStrategy(SensorLayoutStrategy):
    """
    Payload layout for the weather station.

    Payload (12 fields, 4 bytes each):
    - temperature, humidity (tenths)
    - atmospheric_pressure (hundredths of mbar)
    - pm2_5, pm10 (µg/m³)
    - wind_speed (tenths of m/s)
    - wind_direction (degrees)
    - rainfall (mm), solar_radiation (W/m²)
    - signal_raw, error_code
    - firmware_version (tenths)
    """

    @property
    def kind(self) -> SensorKind:
        """Returns WEATHER_STATION."""
        return SensorKind.WEATHER_STATION

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        return WEATHER_STATION_FIELDS

    def derive(self, values: dict[str, float | int]) -> dict[str, float | int]:
        """Add signal_dbm."""
        return {"signal_dbm": signal_dbm(int(values["signal_raw"]))}
