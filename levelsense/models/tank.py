"""
Pydantic models for tank geometry and volume results.

Tank geometry is passed explicitly on every call; nothing here is cached.
Dimensions are stored as given and validated per shape by the volume
engine, so a missing or non-positive dimension is reported against the
shape that needs it.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TankShape(str, Enum):
    """
    Supported tank shapes.

    Unrecognized shape names map to UNKNOWN, which is computed with the
    linear approximation over the rated capacity.
    """

    CYLINDRICAL = "cylindrical"
    RECTANGULAR = "rectangular"
    SPHERICAL = "spherical"
    CONICAL = "conical"
    SILO = "silo"
    OVAL = "oval"
    CAPSULE = "capsule"
    ELLIPTICAL = "elliptical"
    DISH_ENDS = "dish_ends"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> TankShape:
        if isinstance(value, str):
            name = value.strip().lower().replace("-", "_").replace(" ", "_")
            name = _SHAPE_ALIASES.get(name, name)
            for member in cls:
                if member.value == name:
                    return member
        return cls.UNKNOWN


_SHAPE_ALIASES: Final[dict[str, str]] = {
    "cylinder": "cylindrical",
    "rectangle": "rectangular",
    "sphere": "spherical",
    "cone": "conical",
    "ellipse": "elliptical",
    "dish_end": "dish_ends",
}


class Orientation(str, Enum):
    """Tank orientation. Only meaningful for some shapes."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class MeasurementPrinciple(str, Enum):
    """
    How a raw sensor value relates to liquid height.

    DISTANCE sensors are top-mounted and report the air gap to the
    surface; PRESSURE sensors are bottom-mounted; DIRECT sensors report
    a level.
    """

    DISTANCE = "distance"
    """Ultrasonic, radar and laser sensors."""

    PRESSURE = "pressure"
    """Pressure transmitters and submersible sensors."""

    DIRECT = "direct"
    """Float, capacitive, vibrating fork and load cell sensors."""

    @classmethod
    def from_sensor_type(cls, sensor_type: str) -> MeasurementPrinciple:
        """
        Look up the principle for a field sensor type name.

        Args:
            sensor_type: Sensor type such as "ultrasonic" or
                "pressure_transmitter" (case-insensitive).

        Returns:
            The matching MeasurementPrinciple.

        Raises:
            ValueError: If the sensor type is not recognized.

        Example:
            >>> MeasurementPrinciple.from_sensor_type("radar_level_sensor")
            <MeasurementPrinciple.DISTANCE: 'distance'>
        """
        key = sensor_type.strip().lower()
        try:
            return SENSOR_TYPE_PRINCIPLES[key]
        except KeyError:
            raise ValueError(f"Unknown sensor type: {sensor_type!r}") from None


SENSOR_TYPE_PRINCIPLES: Final[dict[str, MeasurementPrinciple]] = {
    "ultrasonic": MeasurementPrinciple.DISTANCE,
    "ultrasonic_level_sensor": MeasurementPrinciple.DISTANCE,
    "radar": MeasurementPrinciple.DISTANCE,
    "radar_level_sensor": MeasurementPrinciple.DISTANCE,
    "guided_wave_radar": MeasurementPrinciple.DISTANCE,
    "laser": MeasurementPrinciple.DISTANCE,
    "laser_level_sensor": MeasurementPrinciple.DISTANCE,
    "pressure": MeasurementPrinciple.PRESSURE,
    "pressure_transmitter": MeasurementPrinciple.PRESSURE,
    "pressure_submersible": MeasurementPrinciple.PRESSURE,
    "submersible": MeasurementPrinciple.PRESSURE,
    "submersible_level_sensor": MeasurementPrinciple.PRESSURE,
    "float": MeasurementPrinciple.DIRECT,
    "float_level": MeasurementPrinciple.DIRECT,
    "float_switch": MeasurementPrinciple.DIRECT,
    "capacitive": MeasurementPrinciple.DIRECT,
    "capacitive_level_sensor": MeasurementPrinciple.DIRECT,
    "vibrating_fork": MeasurementPrinciple.DIRECT,
    "weight": MeasurementPrinciple.DIRECT,
    "load_cell": MeasurementPrinciple.DIRECT,
}
"""Field sensor type names and the principle each one measures by."""


# camelCase keys used by stored tank documents
_DIMENSION_KEYS: Final[dict[str, str]] = {
    "totalHeight": "height",
    "total_height": "height",
    "coneAngle": "cone_angle",
    "outletDiameter": "outlet_diameter",
    "majorAxis": "major_axis",
    "minorAxis": "minor_axis",
    "dishRadius": "dish_radius",
    "capsuleLength": "capsule_length",
}


class TankGeometry(BaseModel):
    """
    Shape, orientation and dimensions of a storage vessel.

    All lengths are in meters and volumes in cubic meters. Which
    dimensions are required depends on the shape and orientation:

    ============ ========== ==============================================
    Shape        Orient.    Required
    ============ ========== ==============================================
    CYLINDRICAL  vertical   diameter or radius, height
    CYLINDRICAL  horizontal diameter or radius, length (or height)
    RECTANGULAR  -          length, width, height
    SPHERICAL    -          diameter or radius
    CONICAL      -          diameter or radius, height
    SILO         -          diameter or radius, height, cone_angle
    OVAL         vertical   major_axis, minor_axis, height
    OVAL         horizontal major_axis, minor_axis, length
    ELLIPTICAL   (as OVAL)
    CAPSULE      -          diameter or radius, capsule_length
    DISH_ENDS    -          diameter or radius, length
    UNKNOWN      -          height, rated_capacity
    ============ ========== ==============================================

    Combined shape names such as "horizontal_oval" set the orientation,
    and a nested ``dimensions`` mapping (camelCase keys accepted) is
    merged into the fields.

    Example:
        >>> tank = TankGeometry(shape="cylindrical", diameter=2.0, height=3.0)
        >>> tank.orientation
        <Orientation.VERTICAL: 'vertical'>
        >>> TankGeometry(shape="horizontal_capsule", diameter=1.0, capsule_length=2.0).shape
        <TankShape.CAPSULE: 'capsule'>
    """

    model_config = ConfigDict(frozen=True)

    shape: TankShape = Field(description="Tank shape")
    orientation: Orientation = Field(default=Orientation.VERTICAL, description="Tank orientation")

    # Dimensions
    radius: float | None = Field(default=None, description="Shell radius")
    diameter: float | None = Field(default=None, description="Shell diameter")
    height: float | None = Field(default=None, description="Total height")
    length: float | None = Field(default=None, description="Length (horizontal axis)")
    width: float | None = Field(default=None, description="Width")
    cone_angle: float | None = Field(default=None, description="Cone wall angle in degrees")
    outlet_diameter: float | None = Field(default=None, description="Silo outlet diameter")
    major_axis: float | None = Field(default=None, description="Ellipse major axis")
    minor_axis: float | None = Field(default=None, description="Ellipse minor axis")
    dish_radius: float | None = Field(default=None, description="Dished end radius")
    capsule_length: float | None = Field(default=None, description="Straight section of a capsule")

    # Capacity and offsets
    rated_capacity: float | None = Field(default=None, description="Rated capacity in m³")
    offset_depth: float = Field(default=0.0, description="Bottom of tank to sensor zero reference")
    dead_space_volume: float = Field(default=0.0, description="Unusable volume in m³")

    @model_validator(mode="before")
    @classmethod
    def expand_legacy_fields(cls, data: Any) -> Any:
        """Split combined shape names and merge a nested dimensions mapping."""
        if not isinstance(data, dict):
            return data
        data = dict(data)

        dimensions = data.pop("dimensions", None) or {}
        for key, value in dimensions.items():
            name = _DIMENSION_KEYS.get(key, key)
            if value is not None and data.get(name) is None:
                data[name] = value

        shape = data.get("shape")
        if isinstance(shape, str):
            name = shape.strip().lower().replace("-", "_").replace(" ", "_")
            prefix, _, rest = name.partition("_")
            if rest and prefix in (Orientation.VERTICAL.value, Orientation.HORIZONTAL.value):
                data["shape"] = rest
                if data.get("orientation") is None:
                    data["orientation"] = prefix
            data["shape"] = TankShape(data["shape"])
        if data.get("orientation") is None:
            data.pop("orientation", None)
        return data

    @property
    def is_horizontal(self) -> bool:
        """Check if the tank lies on its side."""
        return self.orientation == Orientation.HORIZONTAL

    @property
    def tag(self) -> str:
        """Shape and orientation tag, e.g. ``cylindrical_horizontal``."""
        return f"{self.shape.value}_{self.orientation.value}"


DEFAULT_MIN_SENSOR_RANGE: Final[float] = 0.05
"""Closest distance a distance sensor reports, in m."""

MAX_RANGE_FACTOR: Final[float] = 1.5
"""Default maximum sensor range as a multiple of tank height."""


class LevelSensorConfig(BaseModel):
    """
    Level sensor calibration settings.

    Attributes:
        min_sensor_range: Closest distance a distance sensor can report (m).
        max_sensor_range: Farthest distance a distance sensor can report (m).
            None means 1.5 × tank height.
        pressure_to_height_factor: Meters of liquid per unit of pressure.
    """

    model_config = ConfigDict(frozen=True)

    min_sensor_range: float = Field(default=DEFAULT_MIN_SENSOR_RANGE, ge=0, allow_inf_nan=False)
    max_sensor_range: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    pressure_to_height_factor: float = Field(default=1.0, gt=0, allow_inf_nan=False)

    @model_validator(mode="after")
    def check_range(self) -> LevelSensorConfig:
        """Ensure the sensor range is not inverted."""
        if self.max_sensor_range is not None and self.max_sensor_range < self.min_sensor_range:
            raise ValueError(
                f"max_sensor_range {self.max_sensor_range} is below "
                f"min_sensor_range {self.min_sensor_range}"
            )
        return self

    def max_range_for(self, tank_height: float) -> float:
        """Effective maximum range for a tank of the given height."""
        if self.max_sensor_range is not None:
            return self.max_sensor_range
        return tank_height * MAX_RANGE_FACTOR


DEFAULT_SENSOR_CONFIG: Final[LevelSensorConfig] = LevelSensorConfig()


class LevelConversion(BaseModel):
    """
    Result of converting a sensor value to a liquid level.

    ``unclamped_level`` keeps the value before clamping into
    ``[0, tank_height]`` so callers can flag data quality problems.
    """

    model_config = ConfigDict(frozen=True)

    level: float = Field(ge=0, description="Liquid level in m")
    unclamped_level: float = Field(description="Level before clamping")
    tank_height: float = Field(gt=0, description="Tank height used for clamping")

    @property
    def was_clamped(self) -> bool:
        """Check if the computed level fell outside the tank."""
        return not math.isclose(self.level, self.unclamped_level, abs_tol=1e-12)

    @property
    def fraction(self) -> float:
        """Level as a fraction of tank height."""
        return self.level / self.tank_height


LINEAR_APPROXIMATION: Final[str] = "linear_approximation"
"""Method tag for volumes estimated from the rated capacity."""


class VolumeResult(BaseModel):
    """
    Volume of liquid for one level reading.

    Ephemeral: recomputed for every reading and never stored by this package.

    Example:
        >>> result.volume
        4.71238898038469
        >>> result.method
        'cylindrical_vertical'
        >>> result.liters
        4712.38898038469
    """

    model_config = ConfigDict(frozen=True)

    volume: float = Field(ge=0, description="Current volume in m³ after dead space")
    max_volume: float = Field(ge=0, description="Theoretical full volume in m³ after dead space")
    fill_percentage: float = Field(ge=0, le=100, description="Volume as percent of max_volume")
    level: float = Field(ge=0, description="Liquid level used, in m")
    method: str = Field(description="Shape/orientation tag or linear_approximation")

    @property
    def liters(self) -> float:
        """Current volume in liters."""
        return self.volume * 1000.0

    @property
    def is_estimate(self) -> bool:
        """Check if the volume is a linear estimate rather than geometric."""
        return self.method == LINEAR_APPROXIMATION

    def __str__(self) -> str:
        return f"{self.volume:.3f} m³ ({self.fill_percentage:.1f}%, {self.method})"
