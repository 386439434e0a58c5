"""Tests for the volume engine and shape formulas."""

import math

import pytest

from levelsense.exceptions import InvalidDimensionError, InvalidLevelError, UnsupportedShapeError, VolumeError
from levelsense.models.tank import LINEAR_APPROXIMATION, LevelSensorConfig, TankGeometry, TankShape
from levelsense.volume import (
    SHAPE_RESOLVERS,
    VolumeEngine,
    circular_segment_area,
    compute_volume,
    fill_percentage,
    full_height,
    max_volume,
    spherical_cap_volume,
    volume,
)

# One valid geometry per shape/orientation
GEOMETRIES = {
    "cylindrical_vertical": TankGeometry(shape="cylindrical", diameter=2.0, height=3.0),
    "cylindrical_horizontal": TankGeometry(
        shape="cylindrical", orientation="horizontal", diameter=2.0, length=4.0
    ),
    "rectangular": TankGeometry(shape="rectangular", length=2.0, width=1.5, height=2.0),
    "spherical": TankGeometry(shape="spherical", diameter=2.0),
    "conical": TankGeometry(shape="conical", radius=1.0, height=2.0),
    "silo": TankGeometry(shape="silo", diameter=2.0, height=5.0, cone_angle=45.0, outlet_diameter=0.2),
    "oval_horizontal": TankGeometry(shape="horizontal_oval", major_axis=2.0, minor_axis=1.0, length=3.0),
    "oval_vertical": TankGeometry(shape="oval", major_axis=2.0, minor_axis=1.0, height=2.0),
    "elliptical_horizontal": TankGeometry(
        shape="elliptical", orientation="horizontal", major_axis=3.0, minor_axis=1.2, length=2.0
    ),
    "capsule_horizontal": TankGeometry(shape="horizontal_capsule", radius=1.0, capsule_length=2.0),
    "capsule_vertical": TankGeometry(shape="capsule", radius=1.0, capsule_length=2.0),
    "dish_ends": TankGeometry(shape="dish_ends", diameter=2.0, length=3.0, dish_radius=1.5),
    "unknown": TankGeometry(shape="hexagonal", height=2.0, rated_capacity=10.0),
}


class TestHelpers:
    """Tests for segment and cap helpers."""

    def test_circular_segment_bounds(self):
        """Test empty, half and full segments."""
        assert circular_segment_area(1.0, 0.0) == 0.0
        assert circular_segment_area(1.0, -1.0) == 0.0
        assert circular_segment_area(1.0, 1.0) == pytest.approx(math.pi / 2)
        assert circular_segment_area(1.0, 2.0) == pytest.approx(math.pi)
        assert circular_segment_area(1.0, 5.0) == pytest.approx(math.pi)

    def test_spherical_cap_bounds(self):
        """Test empty, hemisphere and full caps."""
        assert spherical_cap_volume(1.0, 0.0) == 0.0
        assert spherical_cap_volume(1.0, 1.0) == pytest.approx(2 / 3 * math.pi)
        assert spherical_cap_volume(1.0, 3.0) == pytest.approx(4 / 3 * math.pi)

    def test_fill_percentage(self):
        """Test percentage clamping and zero capacity."""
        assert fill_percentage(1.0, 4.0) == pytest.approx(25.0)
        assert fill_percentage(5.0, 4.0) == 100.0
        assert fill_percentage(1.0, 0.0) == 0.0


class TestCylindrical:
    """Tests for cylindrical tanks."""

    def test_vertical_diameter(self):
        """Test V = π r² h with r from the diameter."""
        result = volume(GEOMETRIES["cylindrical_vertical"], 1.5)
        assert result.volume == pytest.approx(1.5 * math.pi)
        assert result.max_volume == pytest.approx(3.0 * math.pi)
        assert result.fill_percentage == pytest.approx(50.0)
        assert result.method == "cylindrical_vertical"

    def test_vertical_radius(self):
        """Test the radius is used as-is, never doubled."""
        tank = TankGeometry(shape="cylindrical", radius=1.0, height=3.0)
        assert volume(tank, 1.5).volume == pytest.approx(1.5 * math.pi)

    def test_diameter_preferred_over_radius(self):
        """Test diameter wins when both are given."""
        tank = TankGeometry(shape="cylindrical", diameter=2.0, radius=5.0, height=3.0)
        assert volume(tank, 1.0).volume == pytest.approx(math.pi)

    def test_horizontal_half(self):
        """Test a half-full horizontal drum."""
        result = volume(GEOMETRIES["cylindrical_horizontal"], 1.0)
        assert result.volume == pytest.approx(2 * math.pi)
        assert result.method == "cylindrical_horizontal"

    def test_horizontal_saturates(self):
        """Test levels over the diameter give the full volume."""
        result = volume(GEOMETRIES["cylindrical_horizontal"], 5.0)
        assert result.volume == pytest.approx(4 * math.pi)
        assert result.level == pytest.approx(2.0)
        assert result.fill_percentage == pytest.approx(100.0)

    def test_horizontal_empty(self):
        """Test level 0 gives 0."""
        assert volume(GEOMETRIES["cylindrical_horizontal"], 0.0).volume == 0.0

    def test_horizontal_length_falls_back_to_height(self):
        """Test the axial length may be stored as height."""
        tank = TankGeometry(shape="horizontal_cylindrical", diameter=2.0, height=4.0)
        assert volume(tank, 2.0).volume == pytest.approx(4 * math.pi)


class TestOtherShapes:
    """Tests for the remaining shape formulas."""

    def test_rectangular(self):
        """Test V = l × w × level."""
        result = volume(GEOMETRIES["rectangular"], 1.0)
        assert result.volume == pytest.approx(3.0)
        assert result.max_volume == pytest.approx(6.0)

    def test_spherical(self):
        """Test half and full spheres."""
        tank = GEOMETRIES["spherical"]
        assert volume(tank, 1.0).volume == pytest.approx(2 / 3 * math.pi)
        assert volume(tank, 2.0).volume == pytest.approx(4 / 3 * math.pi)

    def test_conical(self):
        """Test the cone fills from the apex."""
        tank = GEOMETRIES["conical"]
        assert volume(tank, 1.0).volume == pytest.approx(math.pi / 12)
        assert volume(tank, 2.0).volume == pytest.approx(2 * math.pi / 3)

    def test_silo(self):
        """Test the cone section and the cylinder above it."""
        tank = GEOMETRIES["silo"]
        cone_height = 0.9  # (1.0 - 0.1) / tan(45°)
        cone = math.pi / 3 * cone_height * (0.1**2 + 0.1 * 1.0 + 1.0**2)
        assert volume(tank, cone_height).volume == pytest.approx(cone)
        assert volume(tank, cone_height + 1.0).volume == pytest.approx(cone + math.pi)
        assert max_volume(tank) == pytest.approx(cone + math.pi * (5.0 - cone_height))

    def test_oval_horizontal(self):
        """Test half and full horizontal ovals."""
        tank = GEOMETRIES["oval_horizontal"]
        assert volume(tank, 0.5).volume == pytest.approx(0.75 * math.pi)
        assert volume(tank, 1.0).volume == pytest.approx(1.5 * math.pi)
        assert volume(tank, 1.0).method == "oval_horizontal"

    def test_oval_matches_cylinder_when_circular(self):
        """Test equal axes give the horizontal cylinder volume."""
        oval = TankGeometry(shape="horizontal_oval", major_axis=2.0, minor_axis=2.0, length=3.0)
        drum = TankGeometry(shape="horizontal_cylindrical", diameter=2.0, length=3.0)
        for level in (0.3, 0.7, 1.0, 1.6):
            assert volume(oval, level).volume == pytest.approx(volume(drum, level).volume)

    def test_oval_vertical(self):
        """Test V = π a b level."""
        assert volume(GEOMETRIES["oval_vertical"], 2.0).volume == pytest.approx(math.pi)

    def test_elliptical_uneven_axes(self):
        """Test a horizontal ellipse with different semi-axes below half full."""
        tank = GEOMETRIES["elliptical_horizontal"]
        a, b, y = 1.5, 0.6, 0.3
        area = a * b * math.acos(y / b) - y * math.sqrt(b * b - y * y)
        assert volume(tank, 0.3).volume == pytest.approx(area * 2.0)
        assert volume(tank, 0.3).volume == pytest.approx(1.5732, abs=1e-4)

    def test_capsule_horizontal_two_end_caps(self):
        """Test each hemispherical end adds a spherical cap at the level."""
        segment = 0.5 * (2 * math.acos(0.5) - math.sin(2 * math.acos(0.5)))
        cap = math.pi / 3 * 0.5**2 * (3 * 1.0 - 0.5)
        result = volume(GEOMETRIES["capsule_horizontal"], 0.5)
        assert result.volume == pytest.approx(segment * 2.0 + 2 * cap)
        assert result.volume == pytest.approx(2.5374, abs=1e-4)

    def test_capsule_full_volumes(self):
        """Test full capsule volumes for both orientations."""
        horizontal = math.pi * 2.0 + 2 * (4 / 3 * math.pi)
        vertical = math.pi * 2.0 + 4 / 3 * math.pi
        assert max_volume(GEOMETRIES["capsule_horizontal"]) == pytest.approx(horizontal)
        assert max_volume(GEOMETRIES["capsule_vertical"]) == pytest.approx(vertical)

    def test_capsule_vertical_zones(self):
        """Test the bottom hemisphere and cylinder zones."""
        tank = GEOMETRIES["capsule_vertical"]
        assert volume(tank, 1.0).volume == pytest.approx(2 / 3 * math.pi)
        assert volume(tank, 3.0).volume == pytest.approx(2 / 3 * math.pi + 2 * math.pi)

    def test_dish_ends_default_radius(self):
        """Test dished ends default to the shell radius."""
        tank = TankGeometry(shape="dish_ends", diameter=2.0, length=3.0)
        assert max_volume(tank) == pytest.approx(3 * math.pi + 2 * (4 / 3 * math.pi))

    def test_dish_ends_two_caps(self):
        """Test each dished end adds a cap of the dish radius at the level."""
        segment = 0.5 * (2 * math.acos(0.5) - math.sin(2 * math.acos(0.5)))
        cap = math.pi / 3 * 0.5**2 * (3 * 1.5 - 0.5)
        result = volume(GEOMETRIES["dish_ends"], 0.5)
        assert result.volume == pytest.approx(segment * 3.0 + 2 * cap)
        assert result.volume == pytest.approx(3.9370, abs=1e-4)


class TestLinearApproximation:
    """Tests for unknown shapes."""

    def test_linear(self):
        """Test V = level / height × rated capacity."""
        result = volume(GEOMETRIES["unknown"], 1.0)
        assert result.volume == pytest.approx(5.0)
        assert result.method == LINEAR_APPROXIMATION
        assert result.is_estimate

    def test_missing_capacity(self):
        """Test the fallback needs a rated capacity."""
        with pytest.raises(UnsupportedShapeError):
            volume(TankGeometry(shape="hexagonal", height=2.0), 1.0)

    def test_engine_without_resolver_uses_linear(self):
        """Test shapes missing from a custom table fall back to linear."""
        engine = VolumeEngine({TankShape.RECTANGULAR: SHAPE_RESOLVERS[TankShape.RECTANGULAR]})
        tank = TankGeometry(shape="conical", radius=1.0, height=2.0, rated_capacity=4.0)
        assert engine.volume(tank, 1.0).method == LINEAR_APPROXIMATION


class TestDeadSpace:
    """Tests for dead space subtraction."""

    def test_subtracted(self):
        """Test dead space reduces volume and max volume."""
        tank = TankGeometry(shape="rectangular", length=2.0, width=1.5, height=2.0, dead_space_volume=0.5)
        result = volume(tank, 1.0)
        assert result.volume == pytest.approx(2.5)
        assert result.max_volume == pytest.approx(5.5)

    def test_floored_at_zero(self):
        """Test volume never goes negative."""
        tank = TankGeometry(shape="rectangular", length=2.0, width=1.5, height=2.0, dead_space_volume=0.5)
        assert volume(tank, 0.1).volume == 0.0

    def test_negative_rejected(self):
        """Test negative dead space is an invalid dimension."""
        tank = TankGeometry(shape="rectangular", length=2.0, width=1.5, height=2.0, dead_space_volume=-1.0)
        with pytest.raises(InvalidDimensionError) as exc_info:
            volume(tank, 1.0)
        assert exc_info.value.dimension == "dead_space_volume"


class TestValidation:
    """Tests for rejected geometry and levels."""

    def test_missing_height(self):
        """Test a vertical cylinder needs a height."""
        with pytest.raises(InvalidDimensionError) as exc_info:
            volume(TankGeometry(shape="cylindrical", diameter=2.0), 1.0)
        assert exc_info.value.dimension == "height"
        assert exc_info.value.value is None

    def test_zero_width(self):
        """Test non-positive dimensions are rejected with their value."""
        with pytest.raises(InvalidDimensionError) as exc_info:
            volume(TankGeometry(shape="rectangular", length=2.0, width=0.0, height=2.0), 1.0)
        assert exc_info.value.dimension == "width"
        assert exc_info.value.value == 0.0

    def test_missing_radius(self):
        """Test shapes with a radius need a diameter or radius."""
        with pytest.raises(InvalidDimensionError) as exc_info:
            volume(TankGeometry(shape="spherical"), 1.0)
        assert "radius" in exc_info.value.dimension

    def test_negative_diameter(self):
        """Test a negative diameter names the diameter."""
        with pytest.raises(InvalidDimensionError) as exc_info:
            volume(TankGeometry(shape="spherical", diameter=-2.0), 1.0)
        assert exc_info.value.dimension == "diameter"

    def test_non_finite_dimension(self):
        """Test infinite dimensions are rejected."""
        with pytest.raises(InvalidDimensionError):
            volume(TankGeometry(shape="cylindrical", diameter=2.0, height=math.inf), 1.0)

    @pytest.mark.parametrize("angle", [0.0, 90.0, 5.0])
    def test_silo_cone_angle(self, angle):
        """Test silo cone angles that give no valid cone are rejected."""
        tank = TankGeometry(shape="silo", diameter=2.0, height=5.0, cone_angle=angle)
        with pytest.raises(InvalidDimensionError) as exc_info:
            volume(tank, 1.0)
        assert exc_info.value.dimension == "cone_angle"

    def test_minor_axis_longer_than_major(self):
        """Test an ellipse whose minor axis exceeds its major axis is rejected."""
        tank = TankGeometry(shape="horizontal_oval", major_axis=1.0, minor_axis=2.0, length=3.0)
        with pytest.raises(InvalidDimensionError) as exc_info:
            volume(tank, 0.5)
        assert exc_info.value.dimension == "minor_axis"

    def test_silo_outlet_too_wide(self):
        """Test the outlet must be narrower than the silo."""
        tank = TankGeometry(shape="silo", diameter=2.0, height=5.0, cone_angle=45.0, outlet_diameter=2.0)
        with pytest.raises(InvalidDimensionError):
            volume(tank, 1.0)

    @pytest.mark.parametrize("level", [-0.1, math.nan, math.inf])
    def test_invalid_level(self, level):
        """Test negative and non-finite levels are rejected."""
        with pytest.raises(InvalidLevelError):
            volume(GEOMETRIES["rectangular"], level)

    def test_errors_are_volume_errors(self):
        """Test volume errors share a base class."""
        assert issubclass(InvalidDimensionError, VolumeError)
        assert issubclass(InvalidLevelError, VolumeError)
        assert issubclass(UnsupportedShapeError, VolumeError)


class TestAllShapes:
    """Properties every shape must satisfy."""

    @pytest.mark.parametrize("name", sorted(GEOMETRIES))
    def test_monotonic(self, name):
        """Test volume never decreases as the level rises."""
        tank = GEOMETRIES[name]
        height = full_height(tank)
        volumes = [volume(tank, height * i / 40).volume for i in range(41)]
        for lower, upper in zip(volumes, volumes[1:]):
            assert upper >= lower - 1e-9

    @pytest.mark.parametrize("name", sorted(GEOMETRIES))
    def test_full_at_full_height(self, name):
        """Test the full height gives max volume and 100%."""
        tank = GEOMETRIES[name]
        result = volume(tank, full_height(tank))
        assert result.volume == pytest.approx(max_volume(tank))
        assert result.fill_percentage == pytest.approx(100.0)

    @pytest.mark.parametrize("name", sorted(GEOMETRIES))
    def test_empty_at_zero(self, name):
        """Test level 0 holds nothing."""
        assert volume(GEOMETRIES[name], 0.0).volume == pytest.approx(0.0)

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("cylindrical_vertical", 3.0),
            ("cylindrical_horizontal", 2.0),
            ("rectangular", 2.0),
            ("spherical", 2.0),
            ("conical", 2.0),
            ("silo", 5.0),
            ("oval_horizontal", 1.0),
            ("oval_vertical", 2.0),
            ("capsule_horizontal", 2.0),
            ("capsule_vertical", 4.0),
            ("dish_ends", 2.0),
            ("unknown", 2.0),
        ],
    )
    def test_full_height(self, name, expected):
        """Test the effective height per shape."""
        assert full_height(GEOMETRIES[name]) == pytest.approx(expected)


class TestComputeVolume:
    """Tests for the raw reading entry point."""

    def test_ultrasonic(self):
        """Test a distance reading on a vertical cylinder."""
        result = compute_volume(GEOMETRIES["cylindrical_vertical"], 1.2, "ultrasonic")
        assert result.level == pytest.approx(1.8)
        assert result.volume == pytest.approx(1.8 * math.pi)
        assert result.fill_percentage == pytest.approx(60.0)

    def test_offset_depth_is_mount_offset(self):
        """Test the geometry's offset depth shifts the level."""
        tank = TankGeometry(shape="cylindrical", diameter=2.0, height=3.0, offset_depth=0.2)
        result = compute_volume(tank, 1.0, "ultrasonic")
        assert result.level == pytest.approx(1.8)

    def test_pressure(self):
        """Test a pressure reading with a conversion factor."""
        config = LevelSensorConfig(pressure_to_height_factor=0.1)
        result = compute_volume(GEOMETRIES["rectangular"], 10.0, "pressure", config=config)
        assert result.level == pytest.approx(1.0)
        assert result.volume == pytest.approx(3.0)

    def test_sphere_uses_diameter_as_height(self):
        """Test distance readings on a sphere are measured against its diameter."""
        result = compute_volume(GEOMETRIES["spherical"], 1.0, "radar")
        assert result.level == pytest.approx(1.0)
        assert result.volume == pytest.approx(2 / 3 * math.pi)

    def test_out_of_range_is_empty(self):
        """Test readings past the sensor range give an empty tank."""
        result = compute_volume(GEOMETRIES["cylindrical_vertical"], 50.0, "ultrasonic")
        assert result.volume == 0.0
        assert result.fill_percentage == 0.0

    def test_invalid_geometry_propagates(self):
        """Test geometry errors are raised, not defaulted."""
        with pytest.raises(InvalidDimensionError):
            compute_volume(TankGeometry(shape="conical", radius=1.0), 0.5, "ultrasonic")

    def test_unknown_sensor_type_is_volume_error(self):
        """Test an unrecognized sensor type fails with a VolumeError."""
        with pytest.raises(VolumeError):
            compute_volume(GEOMETRIES["rectangular"], 1.0, "thermometer")

    def test_engine_repr(self):
        """Test string representation."""
        assert "cylindrical" in repr(VolumeEngine())
