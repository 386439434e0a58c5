"""
Exception hierarchy for levelsense.

All exceptions inherit from LevelSenseError, providing a clean hierarchy
for error handling. The design follows these principles:

1. Wire-data errors (FrameError) are distinct from tank configuration errors
   (VolumeError)
2. Frame errors are recoverable per record: skip the line and continue a batch
3. Volume errors are fatal for a single computation and name what was wrong
4. All exceptions provide meaningful error messages
"""

from __future__ import annotations


class LevelSenseError(Exception):
    """
    Base exception for all levelsense errors.

    All library-specific exceptions inherit from this class, allowing
    callers to catch all levelsense errors with a single except clause.
    """

    pass


class FrameError(LevelSenseError):
    """
    Telemetry frame error.

    Raised when a frame cannot be interpreted, such as:
    - Non-hex characters or an odd number of hex digits
    - Wrong header marker
    - Frame shorter than its layout requires
    """

    def __init__(
        self,
        message: str,
        *,
        offset: int | None = None,
        raw_data: str | None = None,
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.raw_data = raw_data

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.offset is not None:
            parts.append(f"offset={self.offset}")
        if self.raw_data:
            # Truncate raw data for display
            display_data = self.raw_data[:40] + "..." if len(self.raw_data) > 40 else self.raw_data
            parts.append(f"data={display_data}")
        return " ".join(parts) if len(parts) > 1 else parts[0]


class BadHeaderError(FrameError):
    """
    Frame does not start with the protocol header marker.

    The received marker is kept in `header` for diagnostics.
    """

    def __init__(self, header: int, *, raw_data: str | None = None) -> None:
        self.header = header
        super().__init__(
            f"Invalid frame header 0x{header:04X}, expected 0xFEDC",
            offset=0,
            raw_data=raw_data,
        )


class TruncatedFrameError(FrameError):
    """
    Frame is shorter than required.

    Raised instead of returning a partially-populated reading.
    """

    pass


class UnknownDeviceError(FrameError):
    """
    Device identifier is not in the known-device table.

    Unknown devices are a normal condition during ingestion; this error is
    only raised when a caller asks to decode a frame of unknown kind.
    """

    def __init__(self, device_id: str, *, raw_data: str | None = None) -> None:
        self.device_id = device_id
        super().__init__(f"Unknown device identifier {device_id}", offset=3, raw_data=raw_data)


class VolumeError(LevelSenseError):
    """
    Volume computation error.

    Raised for invalid tank configuration or physically impossible input.
    A volume is never substituted with a default when this is raised.
    """

    pass


class InvalidDimensionError(VolumeError):
    """
    A dimension required by the tank shape is missing, non-positive or not finite.

    The offending dimension name is available as `dimension`.
    """

    def __init__(
        self,
        dimension: str,
        value: float | None = None,
        *,
        shape: str | None = None,
    ) -> None:
        self.dimension = dimension
        self.value = value
        self.shape = shape
        if value is None:
            message = f"Missing required dimension '{dimension}'"
        else:
            message = f"Invalid dimension '{dimension}': {value!r} (must be positive and finite)"
        if shape:
            message = f"{message} for {shape} tank"
        super().__init__(message)


class InvalidLevelError(VolumeError):
    """
    Liquid level or sensor input cannot be used.

    Raised for negative or non-finite levels, non-finite sensor readings,
    and non-positive tank heights.
    """

    def __init__(self, message: str, *, value: float | None = None) -> None:
        super().__init__(message)
        self.value = value


class UnsupportedShapeError(VolumeError):
    """
    Tank shape has no geometric formula and no linear fallback is possible.

    Unknown shapes normally fall back to a linear approximation over the rated
    capacity; this is raised only when that fallback lacks its inputs.
    """

    def __init__(self, shape: str, reason: str) -> None:
        self.shape = shape
        super().__init__(f"Unsupported tank shape '{shape}': {reason}")
