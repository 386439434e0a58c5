"""
Liquid level and volume computation.

Modules:
    level: Sensor value to liquid level conversion
    shapes: Per-shape volume formulas
    engine: Geometry validation, dispatch and VolumeResult
    usage: Consumption and refill totals
"""

from levelsense.volume.engine import (
    DEFAULT_ENGINE,
    SHAPE_RESOLVERS,
    ShapeModel,
    VolumeEngine,
    compute_volume,
    fill_percentage,
    full_height,
    max_volume,
    volume,
)
from levelsense.volume.level import (
    PRESSURE_UNITS_PA,
    STANDARD_GRAVITY,
    WATER_DENSITY,
    convert_level,
    pressure_to_height_factor,
    to_level,
)
from levelsense.volume.shapes import circular_segment_area, spherical_cap_volume
from levelsense.volume.usage import UsageSummary, usage_and_additions

__all__ = [
    # Engine
    "VolumeEngine",
    "ShapeModel",
    "SHAPE_RESOLVERS",
    "DEFAULT_ENGINE",
    "volume",
    "compute_volume",
    "full_height",
    "max_volume",
    "fill_percentage",
    # Level
    "convert_level",
    "to_level",
    "pressure_to_height_factor",
    "PRESSURE_UNITS_PA",
    "STANDARD_GRAVITY",
    "WATER_DENSITY",
    # Shapes
    "circular_segment_area",
    "spherical_cap_volume",
    # Usage
    "UsageSummary",
    "usage_and_additions",
]
