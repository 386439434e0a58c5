"""
levelsense - Telemetry decoding and tank volume computation for IoT level sensors.

This library decodes hex telemetry frames from field sensors into typed
readings and converts level-sensor values into liquid volumes for tanks of
many shapes (cylinders, spheres, cones, silos, ovals, capsules, dished ends).

Example:
    >>> from levelsense import TankGeometry, compute_volume, decode_frame
    >>>
    >>> reading = decode_frame("FE DC 01 16 09 85 22 75 4E ...")
    >>> tank = TankGeometry(shape="cylindrical", diameter=2.0, height=3.0)
    >>> result = compute_volume(tank, 1.2, "ultrasonic")
    >>> print(result)
    5.655 m³ (60.0%, cylindrical_vertical)
"""

from levelsense.exceptions import (
    BadHeaderError,
    FrameError,
    InvalidDimensionError,
    InvalidLevelError,
    LevelSenseError,
    TruncatedFrameError,
    UnknownDeviceError,
    UnsupportedShapeError,
    VolumeError,
)
from levelsense.models import (
    FrameHeader,
    LevelSensorConfig,
    MeasurementPrinciple,
    Orientation,
    SensorKind,
    SensorReading,
    TankGeometry,
    TankShape,
    VolumeResult,
)
from levelsense.monitor import TankConfig, TankVolumeReading, principal_measurement, process_tank_reading
from levelsense.parsers import FrameDecoder, HexFrameReader, decode_frame, identify, read_field
from levelsense.replay import LogLine, LogReplayer, ReplayReport, parse_log_line
from levelsense.volume import (
    VolumeEngine,
    compute_volume,
    convert_level,
    full_height,
    max_volume,
    pressure_to_height_factor,
    to_level,
    usage_and_additions,
    volume,
)

__version__ = "0.1.0"
__all__ = [
    # Decoding
    "decode_frame",
    "identify",
    "read_field",
    "FrameDecoder",
    "HexFrameReader",
    # Volume
    "compute_volume",
    "volume",
    "full_height",
    "max_volume",
    "to_level",
    "convert_level",
    "pressure_to_height_factor",
    "usage_and_additions",
    "VolumeEngine",
    # Monitoring and replay
    "TankConfig",
    "TankVolumeReading",
    "principal_measurement",
    "process_tank_reading",
    "LogLine",
    "LogReplayer",
    "ReplayReport",
    "parse_log_line",
    # Models
    "SensorKind",
    "FrameHeader",
    "SensorReading",
    "TankShape",
    "Orientation",
    "MeasurementPrinciple",
    "TankGeometry",
    "LevelSensorConfig",
    "VolumeResult",
    # Exceptions
    "LevelSenseError",
    "FrameError",
    "BadHeaderError",
    "TruncatedFrameError",
    "UnknownDeviceError",
    "VolumeError",
    "InvalidDimensionError",
    "InvalidLevelError",
    "UnsupportedShapeError",
    # Version
    "__version__",
]
