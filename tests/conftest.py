"""Shared telemetry frames."""

import pytest

WEATHER_FRAME = (
    "FE DC 01 12 4A 7D A9 08 49 00 00 00 00 03 00 30 "
    "00 00 00 ED 00 00 02 C2 00 01 58 78 00 00 00 1A "
    "00 00 00 26 00 00 00 07 00 00 00 C4 00 00 00 00 "
    "00 00 00 00 00 00 00 1F 00 00 00 00 00 00 00 75 00"
)

AIR_QUALITY_FRAME = (
    "FE DC 01 16 09 85 22 75 4E 00 00 00 00 03 00 24 "
    "00 00 01 27 00 00 02 1E 00 00 00 20 00 00 00 2E "
    "00 00 01 2C 00 00 00 00 00 00 00 1A 00 00 00 00 "
    "00 00 00 75 00"
)

# Same layout as the air quality frame, unlisted device identifier
UNKNOWN_DEVICE_FRAME = AIR_QUALITY_FRAME.replace("16 09 85 22 75 4E", "AA BB CC DD EE FF")


@pytest.fixture
def weather_frame():
    """Weather station frame as captured."""
    return WEATHER_FRAME


@pytest.fixture
def air_quality_frame_hex():
    """Air quality/ultrasonic frame as captured."""
    return AIR_QUALITY_FRAME


@pytest.fixture
def unknown_device_frame():
    """Frame from a device identifier not in the table."""
    return UNKNOWN_DEVICE_FRAME


@pytest.fixture
def build_air_quality_frame():
    """Factory for air quality frames with a chosen distance, signal and error code."""

    def build(distance: int = 0, signal: int = 0x1A, error: int = 0) -> str:
        return (
            "FEDC01" "16098522754E" "00000000" "03" "0024"
            "00000127" "0000021E" "00000020" "0000002E" "0000012C"
            f"{distance:08X}{signal:08X}{error:08X}" "00000075"
        )

    return build
