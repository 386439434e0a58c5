"""
Sensor-specific payload layouts.

Supported sensor kinds:
- AirQualityUltrasonic (16098522754E): climate, particulates, noise and
  ultrasonic distance
- WeatherStation (124A7DA90849): climate, pressure, particulates, wind,
  rain and solar radiation

Usage:
    >>> from levelsense.parsers.sensors import register_all_strategies
    >>> from levelsense.parsers import SensorLayoutRegistry
    >>> registry = SensorLayoutRegistry()
    >>> register_all_strategies(registry)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from levelsense.parsers.sensors.air_quality import AIR_QUALITY_FIELDS, AirQualityLayoutStrategy
from levelsense.parsers.sensors.weather_station import (
    WEATHER_STATION_FIELDS,
    WeatherStationLayoutStrategy,
)

if TYPE_CHECKING:
    from levelsense.parsers.sensor_registry import SensorLayoutRegistry


def register_all_strategies(registry: SensorLayoutRegistry) -> None:
    """
    Register all built-in layout strategies with a registry.

    Args:
        registry: The registry to populate.
    """
    registry.register(AirQualityLayoutStrategy())
    registry.register(WeatherStationLayoutStrategy())


__all__ = [
    "AIR_QUALITY_FIELDS",
    "AirQualityLayoutStrategy",
    "WEATHER_STATION_FIELDS",
    "WeatherStationLayoutStrategy",
    "register_all_strategies",
]
