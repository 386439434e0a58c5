"""Tests for tank reading processing."""

import logging
import math

import pytest
from pydantic import ValidationError

from levelsense.exceptions import InvalidDimensionError
from levelsense.models.readings import SensorKind, SensorReading
from levelsense.models.tank import MeasurementPrinciple, TankGeometry
from levelsense.monitor import TankConfig, principal_measurement, process_tank_reading
from levelsense.parsers.frame_decoder import decode_frame


@pytest.fixture
def tank():
    """Vertical cylinder with an ultrasonic sensor."""
    return TankConfig(
        geometry=TankGeometry(shape="cylindrical", diameter=2.0, height=3.0),
        principle="ultrasonic",
        density=1000.0,
        name="T1",
    )


class TestTankConfig:
    """Tests for TankConfig."""

    def test_sensor_type_name(self, tank):
        """Test sensor type names resolve to a principle."""
        assert tank.principle is MeasurementPrinciple.DISTANCE

    def test_principle_value(self):
        """Test principle values are accepted."""
        config = TankConfig(geometry=TankGeometry(shape="spherical", radius=1.0), principle="pressure")
        assert config.principle is MeasurementPrinciple.PRESSURE

    def test_unknown_sensor_type(self):
        """Test unknown sensor types fail validation."""
        with pytest.raises(ValidationError):
            TankConfig(geometry=TankGeometry(shape="spherical", radius=1.0), principle="thermometer")

    def test_label(self):
        """Test the label falls back to the geometry tag."""
        config = TankConfig(geometry=TankGeometry(shape="spherical", radius=1.0))
        assert config.label == "spherical_vertical"


class TestPrincipalMeasurement:
    """Tests for principal_measurement()."""

    def test_air_quality(self, build_air_quality_frame):
        """Test ultrasonic distance is the principal measurement."""
        reading = decode_frame(build_air_quality_frame(distance=1))
        assert principal_measurement(reading) == 1

    def test_weather_station(self, weather_frame):
        """Test weather stations have no level measurement."""
        assert principal_measurement(decode_frame(weather_frame)) is None


class TestProcessTankReading:
    """Tests for process_tank_reading()."""

    def test_volume(self, tank, build_air_quality_frame):
        """Test a distance reading becomes a volume."""
        reading = decode_frame(build_air_quality_frame(distance=1))
        result = process_tank_reading(tank, reading)
        assert result.device_id == "16098522754E"
        assert result.level == pytest.approx(2.0)
        assert result.volume == pytest.approx(2 * math.pi)
        assert result.liters == pytest.approx(2000 * math.pi)
        assert result.fill_percentage == pytest.approx(200 / 3)
        assert result.estimated_mass == pytest.approx(2000 * math.pi)
        assert result.data_quality == "good"
        assert result.method == "cylindrical_vertical"

    def test_no_density_no_mass(self, build_air_quality_frame):
        """Test mass is only estimated with a density."""
        config = TankConfig(geometry=TankGeometry(shape="rectangular", length=1.0, width=1.0, height=2.0))
        result = process_tank_reading(config, decode_frame(build_air_quality_frame(distance=1)))
        assert result.volume == pytest.approx(1.0)
        assert result.estimated_mass is None

    def test_weather_reading_skipped(self, tank, weather_frame):
        """Test readings without a level give None."""
        assert process_tank_reading(tank, decode_frame(weather_frame)) is None

    def test_clamped_level_logged(self, tank, build_air_quality_frame, caplog):
        """Test clamped levels are flagged and logged."""
        reading = decode_frame(build_air_quality_frame(distance=10))
        with caplog.at_level(logging.WARNING, logger="levelsense.monitor"):
            result = process_tank_reading(tank, reading)
        assert result.data_quality == "clamped"
        assert result.volume == 0.0
        assert "clamped" in caplog.text

    def test_device_error_logged(self, tank, build_air_quality_frame, caplog):
        """Test device error codes are logged."""
        reading = decode_frame(build_air_quality_frame(distance=1, error=3))
        with caplog.at_level(logging.WARNING, logger="levelsense.monitor"):
            process_tank_reading(tank, reading)
        assert "error code 3" in caplog.text

    def test_invalid_geometry_raises(self, caplog):
        """Test volume errors are logged and re-raised."""
        config = TankConfig(geometry=TankGeometry(shape="rectangular", length=1.0, height=2.0))
        reading = SensorReading(
            kind=SensorKind.AIR_QUALITY_ULTRASONIC,
            device_id="16098522754E",
            session_id=0,
            ultrasonic_distance=1.0,
        )
        with caplog.at_level(logging.ERROR, logger="levelsense.monitor"):
            with pytest.raises(InvalidDimensionError):
                process_tank_reading(config, reading)
        assert "width" in caplog.text
