"""
Volume engine: tank geometry + liquid level -> VolumeResult.

Each shape has a resolver that validates the dimensions it needs and
returns a ShapeModel: the tank's full height and a function from level to
raw volume. The engine then applies the shared rules:

- Negative or non-finite levels are rejected
- Levels above the full height saturate at the full volume
- dead_space_volume is subtracted from both volume and max_volume, floored at 0
- Unknown shapes use a linear approximation over the rated capacity

Example:
    >>> from levelsense.models import TankGeometry
    >>> from levelsense.volume import volume
    >>> tank = TankGeometry(shape="rectangular", length=2.0, width=1.5, height=2.0)
    >>> volume(tank, 1.0).volume
    3.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Final

from levelsense.exceptions import InvalidDimensionError, InvalidLevelError, UnsupportedShapeError
from levelsense.models.tank import (
    LINEAR_APPROXIMATION,
    LevelSensorConfig,
    MeasurementPrinciple,
    TankGeometry,
    TankShape,
    VolumeResult,
)
from levelsense.volume import shapes
from levelsense.volume.level import convert_level

if TYPE_CHECKING:
    from levelsense.models.tank import LevelConversion


@dataclass(frozen=True)
class ShapeModel:
    """
    Resolved geometry of one tank.

    Attributes:
        method: Tag reported in VolumeResult.method.
        full_height: Level at which the tank is full, in m.
        volume_at: Raw volume in m³ for a level within [0, full_height].
    """

    method: str
    full_height: float
    volume_at: Callable[[float], float]

    @property
    def full_volume(self) -> float:
        return self.volume_at(self.full_height)


ShapeResolver = Callable[[TankGeometry], ShapeModel]


# ===== Dimension validation =====


def _require(geometry: TankGeometry, name: str) -> float:
    """Return a positive, finite dimension or raise InvalidDimensionError."""
    value = getattr(geometry, name)
    if value is None:
        raise InvalidDimensionError(name, shape=geometry.tag)
    if not math.isfinite(value) or value <= 0:
        raise InvalidDimensionError(name, value, shape=geometry.tag)
    return float(value)


def _radius(geometry: TankGeometry) -> float:
    """Shell radius: diameter / 2 when a diameter is given, otherwise radius."""
    if geometry.diameter is not None:
        return _require(geometry, "diameter") / 2
    if geometry.radius is not None:
        return _require(geometry, "radius")
    raise InvalidDimensionError("diameter or radius", shape=geometry.tag)


# ===== Shape resolvers =====


def _cylindrical(geometry: TankGeometry) -> ShapeModel:
    r = _radius(geometry)
    if geometry.is_horizontal:
        # axial length; older tank documents store it as height
        name = "height" if geometry.length is None and geometry.height is not None else "length"
        length = _require(geometry, name)
        return ShapeModel(
            geometry.tag, 2 * r, lambda level: shapes.horizontal_cylinder_volume(r, length, level)
        )
    height = _require(geometry, "height")
    return ShapeModel(geometry.tag, height, lambda level: shapes.vertical_cylinder_volume(r, level))


def _rectangular(geometry: TankGeometry) -> ShapeModel:
    length = _require(geometry, "length")
    width = _require(geometry, "width")
    height = _require(geometry, "height")
    return ShapeModel(geometry.tag, height, lambda level: shapes.rectangular_volume(length, width, level))


def _spherical(geometry: TankGeometry) -> ShapeModel:
    r = _radius(geometry)
    return ShapeModel(geometry.tag, 2 * r, lambda level: shapes.spherical_volume(r, level))


def _conical(geometry: TankGeometry) -> ShapeModel:
    r = _radius(geometry)
    height = _require(geometry, "height")
    return ShapeModel(geometry.tag, height, lambda level: shapes.conical_volume(r, height, level))


def _silo(geometry: TankGeometry) -> ShapeModel:
    r = _radius(geometry)
    height = _require(geometry, "height")
    angle = _require(geometry, "cone_angle")
    if angle >= 90:
        raise InvalidDimensionError("cone_angle", angle, shape=geometry.tag)

    outlet = geometry.outlet_diameter if geometry.outlet_diameter is not None else 0.0
    if not math.isfinite(outlet) or outlet < 0 or outlet >= 2 * r:
        raise InvalidDimensionError("outlet_diameter", outlet, shape=geometry.tag)
    outlet_radius = outlet / 2

    cone_height = shapes.silo_cone_height(r, outlet_radius, angle)
    if cone_height >= height:
        raise InvalidDimensionError("cone_angle", angle, shape=geometry.tag)
    return ShapeModel(
        geometry.tag,
        height,
        lambda level: shapes.silo_volume(r, outlet_radius, cone_height, level),
    )


def _elliptical(geometry: TankGeometry) -> ShapeModel:
    a = _require(geometry, "major_axis") / 2
    b = _require(geometry, "minor_axis") / 2
    if b > a:
        raise InvalidDimensionError("minor_axis", geometry.minor_axis, shape=geometry.tag)
    if geometry.is_horizontal:
        length = _require(geometry, "length")
        return ShapeModel(
            geometry.tag, 2 * b, lambda level: shapes.horizontal_elliptical_volume(a, b, length, level)
        )
    height = _require(geometry, "height")
    return ShapeModel(geometry.tag, height, lambda level: shapes.vertical_elliptical_volume(a, b, level))


def _capsule(geometry: TankGeometry) -> ShapeModel:
    r = _radius(geometry)
    straight = _require(geometry, "capsule_length")
    if geometry.is_horizontal:
        return ShapeModel(
            geometry.tag, 2 * r, lambda level: shapes.horizontal_capsule_volume(r, straight, level)
        )
    return ShapeModel(
        geometry.tag,
        2 * r + straight,
        lambda level: shapes.vertical_capsule_volume(r, straight, level),
    )


def _dish_ends(geometry: TankGeometry) -> ShapeModel:
    r = _radius(geometry)
    length = _require(geometry, "length")
    dish_radius = _require(geometry, "dish_radius") if geometry.dish_radius is not None else r
    return ShapeModel(
        geometry.tag, 2 * r, lambda level: shapes.dish_ends_volume(r, length, dish_radius, level)
    )


def _linear(geometry: TankGeometry) -> ShapeModel:
    if geometry.rated_capacity is None:
        raise UnsupportedShapeError(geometry.shape.value, "no rated_capacity for linear approximation")
    capacity = _require(geometry, "rated_capacity")
    height = _require(geometry, "height")
    return ShapeModel(
        LINEAR_APPROXIMATION, height, lambda level: shapes.linear_volume(level, height, capacity)
    )


SHAPE_RESOLVERS: Final[dict[TankShape, ShapeResolver]] = {
    TankShape.CYLINDRICAL: _cylindrical,
    TankShape.RECTANGULAR: _rectangular,
    TankShape.SPHERICAL: _spherical,
    TankShape.CONICAL: _conical,
    TankShape.SILO: _silo,
    TankShape.OVAL: _elliptical,
    TankShape.ELLIPTICAL: _elliptical,
    TankShape.CAPSULE: _capsule,
    TankShape.DISH_ENDS: _dish_ends,
    TankShape.UNKNOWN: _linear,
}
"""Shape to resolver. Built once at import and never mutated."""


def fill_percentage(volume: float, max_volume: float) -> float:
    """
    Volume as a percentage of max_volume, clamped to [0, 100].

    Returns 0 when max_volume is not positive.
    """
    if max_volume <= 0:
        return 0.0
    return min(max(volume / max_volume * 100.0, 0.0), 100.0)


class VolumeEngine:
    """
    Computes liquid volumes for tank geometries.

    The engine holds only its resolver table; geometry and calibration are
    passed on every call, so one instance can be shared between threads.

    Example:
        >>> engine = VolumeEngine()
        >>> tank = TankGeometry(shape="cylindrical", diameter=2.0, height=3.0)
        >>> engine.volume(tank, 1.5).method
        'cylindrical_vertical'
    """

    __slots__ = ("_resolvers",)

    def __init__(self, resolvers: dict[TankShape, ShapeResolver] | None = None) -> None:
        """
        Initialize the engine.

        Args:
            resolvers: Shape to resolver table. Defaults to SHAPE_RESOLVERS;
                shapes missing from a custom table use the linear approximation.
        """
        self._resolvers = dict(resolvers if resolvers is not None else SHAPE_RESOLVERS)

    def resolve(self, geometry: TankGeometry) -> ShapeModel:
        """
        Validate a geometry and resolve its shape model.

        Raises:
            InvalidDimensionError: If a required dimension is missing or not positive.
            UnsupportedShapeError: If the linear fallback has no rated capacity.
        """
        resolver = self._resolvers.get(geometry.shape, _linear)
        return resolver(geometry)

    def full_height(self, geometry: TankGeometry) -> float:
        """Level in m at which the tank is full."""
        return self.resolve(geometry).full_height

    def max_volume(self, geometry: TankGeometry) -> float:
        """Full volume in m³ after dead space."""
        return self._usable(geometry, self.resolve(geometry).full_volume)

    def volume(self, geometry: TankGeometry, level: float) -> VolumeResult:
        """
        Compute the liquid volume at a level.

        Args:
            geometry: Tank geometry.
            level: Liquid level in m from the lowest point of the tank.

        Returns:
            VolumeResult with volume, max_volume and fill percentage.

        Raises:
            InvalidLevelError: If level is negative or not finite.
            InvalidDimensionError: If a required dimension is missing or not positive.
            UnsupportedShapeError: If the linear fallback has no rated capacity.
        """
        if level is None or not math.isfinite(level):
            raise InvalidLevelError(f"Level must be a finite number, got {level!r}", value=level)
        if level < 0:
            raise InvalidLevelError(f"Level must not be negative, got {level}", value=level)

        model = self.resolve(geometry)
        effective = min(float(level), model.full_height)
        current = self._usable(geometry, model.volume_at(effective))
        maximum = self._usable(geometry, model.full_volume)

        return VolumeResult(
            volume=current,
            max_volume=maximum,
            fill_percentage=fill_percentage(current, maximum),
            level=effective,
            method=model.method,
        )

    def compute_volume(
        self,
        geometry: TankGeometry,
        principal_reading: float,
        sensor_principle: MeasurementPrinciple | str,
        calibration_offset: float = 0.0,
        config: LevelSensorConfig | None = None,
    ) -> VolumeResult:
        """
        Convert a raw sensor value to a level and compute the volume.

        The tank's full height bounds the level and geometry.offset_depth
        is used as the sensor mount offset.

        Raises:
            VolumeError: Any InvalidDimensionError, InvalidLevelError or
                UnsupportedShapeError from conversion or computation.
        """
        return self.volume(
            geometry,
            self.convert(geometry, principal_reading, sensor_principle, calibration_offset, config).level,
        )

    def convert(
        self,
        geometry: TankGeometry,
        principal_reading: float,
        sensor_principle: MeasurementPrinciple | str,
        calibration_offset: float = 0.0,
        config: LevelSensorConfig | None = None,
    ) -> LevelConversion:
        """Convert a raw sensor value to a level bounded by the tank's full height."""
        return convert_level(
            principal_reading,
            sensor_principle,
            self.full_height(geometry),
            mount_offset=geometry.offset_depth,
            calibration_offset=calibration_offset,
            config=config,
        )

    @staticmethod
    def _usable(geometry: TankGeometry, raw_volume: float) -> float:
        dead_space = geometry.dead_space_volume
        if not math.isfinite(dead_space) or dead_space < 0:
            raise InvalidDimensionError("dead_space_volume", dead_space, shape=geometry.tag)
        return max(raw_volume - dead_space, 0.0)

    def __repr__(self) -> str:
        shapes_ = ", ".join(s.value for s in self._resolvers)
        return f"VolumeEngine(shapes=[{shapes_}])"


DEFAULT_ENGINE = VolumeEngine()
"""Engine with all built-in shapes. Never mutated by this package."""


def full_height(geometry: TankGeometry) -> float:
    """Level in m at which the tank is full (see VolumeEngine.full_height)."""
    return DEFAULT_ENGINE.full_height(geometry)


def max_volume(geometry: TankGeometry) -> float:
    """Full volume in m³ after dead space (see VolumeEngine.max_volume)."""
    return DEFAULT_ENGINE.max_volume(geometry)


def volume(geometry: TankGeometry, level: float) -> VolumeResult:
    """Liquid volume at a level (see VolumeEngine.volume)."""
    return DEFAULT_ENGINE.volume(geometry, level)


def compute_volume(
    geometry: TankGeometry,
    principal_reading: float,
    sensor_principle: MeasurementPrinciple | str,
    calibration_offset: float = 0.0,
    config: LevelSensorConfig | None = None,
) -> VolumeResult:
    """
    Raw sensor value to VolumeResult with the built-in shapes.

    Args:
        geometry: Tank geometry.
        principal_reading: The reading's level-bearing value (distance,
            pressure or level).
        sensor_principle: Measurement principle or sensor type name.
        calibration_offset: Added to the raw value before conversion.
        config: Sensor range and pressure settings.

    Returns:
        VolumeResult for the converted level.

    Raises:
        VolumeError: On invalid geometry or input.
    """
    return DEFAULT_ENGINE.compute_volume(
        geometry, principal_reading, sensor_principle, calibration_offset, config
    )
