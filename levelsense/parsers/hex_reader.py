"""
HexFrameReader - Reader for fixed-offset fields in hex telemetry frames.

Telemetry frames are transmitted as ASCII hex strings where each byte is
represented as two hex characters, often separated by spaces
("FE DC 01 12 ..."). Whitespace is stripped once, on construction; after
that every position is a fixed byte offset.

All multi-byte fields are big-endian unsigned integers.

Key features:
- Absolute reads by byte offset (read_field)
- Cursor reads for walking a payload (read_uint32, skip_bytes, ...)
- Bounds checking that raises TruncatedFrameError

Example:
    >>> from levelsense.parsers import HexFrameReader
    >>> reader = HexFrameReader("FE DC 01 00 00 00 ED")
    >>> hex(reader.read_field(0, 2))
    '0xfedc'
    >>> reader.seek_byte(3)
    >>> reader.read_uint32()
    237
"""

from __future__ import annotations

from levelsense.exceptions import TruncatedFrameError
from levelsense.protocol.encoding import clean_hex


class HexFrameReader:
    """
    Reader for big-endian fields in a hex-encoded frame.

    Attributes:
        position: Current cursor position in bytes.
        remaining_bytes: Number of bytes after the cursor.
        data: The cleaned, uppercase hex string.

    Example:
        >>> reader = HexFrameReader("00 00 01 27 00 00 02 1E")
        >>> reader.read_uint32()
        295
        >>> reader.position
        4
    """

    __slots__ = ("_data", "_position", "_size")

    def __init__(self, data: str | bytes | bytearray | memoryview) -> None:
        """
        Initialize the reader.

        Args:
            data: Hex text (whitespace tolerated) or raw frame bytes.

        Raises:
            FrameError: If the text contains non-hex characters or an odd
                number of hex digits.
        """
        self._data = clean_hex(data)
        self._position = 0
        self._size = len(self._data) // 2

    @property
    def data(self) -> str:
        """The cleaned hex string."""
        return self._data

    @property
    def size(self) -> int:
        """Total frame size in bytes."""
        return self._size

    @property
    def position(self) -> int:
        """Current cursor position in bytes (0-indexed)."""
        return self._position

    @property
    def remaining_bytes(self) -> int:
        """Number of bytes after the cursor."""
        return self._size - self._position

    def is_at_end(self) -> bool:
        """Check if the cursor has reached the end of data."""
        return self._position >= self._size

    def has_bytes(self, count: int) -> bool:
        """Check if at least `count` bytes are available after the cursor."""
        return self.remaining_bytes >= count

    def _check_bounds(self, byte_offset: int, byte_length: int, operation: str) -> None:
        """Verify a region lies inside the frame."""
        if byte_offset < 0 or byte_length < 0 or byte_offset + byte_length > self._size:
            raise TruncatedFrameError(
                f"Cannot {operation}: need {byte_length} bytes at offset {byte_offset}, "
                f"frame has {self._size}",
                offset=byte_offset,
                raw_data=self._data,
            )

    # ===== Absolute Reads =====

    def read_field(self, byte_offset: int, byte_length: int) -> int:
        """
        Read a big-endian unsigned integer at a fixed byte offset.

        Does not move the cursor.

        Args:
            byte_offset: Offset of the first byte.
            byte_length: Width of the field in bytes.

        Returns:
            Unsigned integer value.

        Raises:
            TruncatedFrameError: If the field extends past the end of the frame.
        """
        self._check_bounds(byte_offset, byte_length, f"read {byte_length}-byte field")
        if byte_length == 0:
            return 0
        start = byte_offset * 2
        return int(self._data[start : start + byte_length * 2], 16)

    def hex_at(self, byte_offset: int, byte_length: int) -> str:
        """
        Get the hex text of a region without moving the cursor.

        Raises:
            TruncatedFrameError: If the region extends past the end of the frame.
        """
        self._check_bounds(byte_offset, byte_length, f"slice {byte_length} bytes")
        start = byte_offset * 2
        return self._data[start : start + byte_length * 2]

    # ===== Position Control =====

    def seek_byte(self, byte_position: int) -> None:
        """
        Move the cursor to an absolute byte position.

        Raises:
            TruncatedFrameError: If position is outside the frame.
        """
        self._check_bounds(byte_position, 0, f"seek to {byte_position}")
        self._position = byte_position

    def skip_bytes(self, byte_count: int) -> None:
        """
        Skip forward by the specified number of bytes.

        Raises:
            TruncatedFrameError: If skip would exceed the frame.
        """
        self._check_bounds(self._position, byte_count, "skip")
        self._position += byte_count

    def reset(self) -> None:
        """Reset the cursor to the beginning of the frame."""
        self._position = 0

    # ===== Cursor Reads =====

    def read_uint(self, byte_length: int) -> int:
        """
        Read a big-endian unsigned integer at the cursor and advance.

        Raises:
            TruncatedFrameError: If insufficient data available.
        """
        value = self.read_field(self._position, byte_length)
        self._position += byte_length
        return value

    def read_uint8(self) -> int:
        """Read one unsigned byte and advance."""
        return self.read_uint(1)

    def read_uint16(self) -> int:
        """Read a big-endian unsigned 16-bit value and advance."""
        return self.read_uint(2)

    def read_uint32(self) -> int:
        """Read a big-endian unsigned 32-bit value and advance."""
        return self.read_uint(4)

    def slice(self, byte_count: int) -> str:
        """
        Get the hex text of the next `byte_count` bytes and advance.

        Raises:
            TruncatedFrameError: If insufficient data available.
        """
        hex_str = self.hex_at(self._position, byte_count)
        self._position += byte_count
        return hex_str

    def __repr__(self) -> str:
        return f"HexFrameReader(pos={self._position}, remaining={self.remaining_bytes}, total={self._size})"

    def __len__(self) -> int:
        """Return total length in bytes."""
        return self._size


def read_field(frame: str | bytes, byte_offset: int, byte_length: int) -> int:
    """
    Read one big-endian unsigned field from a frame.

    Args:
        frame: Hex text (whitespace tolerated) or raw frame bytes.
        byte_offset: Offset of the first byte.
        byte_length: Width of the field in bytes.

    Returns:
        Unsigned integer value.

    Raises:
        FrameError: If the frame is not valid hex.
        TruncatedFrameError: If the field extends past the end of the frame.

    Example:
        >>> read_field("FEDC01", 0, 2)
        65244
    """
    return HexFrameReader(frame).read_field(byte_offset, byte_length)
