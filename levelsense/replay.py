"""
Replay of captured telemetry logs.

Gateways log every received frame as a text line:

    2024-03-05 14:22:07.481 [INFO] Received 68 bytes. Bytes in Hex: FE DC 01 ...

or in the compact form written by capture tools:

    2024-03-05 14:22:07.481 FEDC0112...

LogReplayer decodes such lines in order. Lines that carry no frame are
skipped, frames from unknown devices are counted, and malformed frames are
logged and counted per error class so one bad line never stops a batch.

Example:
    >>> replayer = LogReplayer()
    >>> with open("gateway.log", encoding="utf-8") as f:
    ...     report = replayer.replay(f)
    >>> print(f"{len(report.readings)} readings, {report.success_rate:.0%} decoded")
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from levelsense.exceptions import FrameError
from levelsense.models.readings import SensorReading
from levelsense.parsers.frame_decoder import DEFAULT_DECODER, FrameDecoder
from levelsense.protocol.constants import FrameConstants

# Module logger
logger = logging.getLogger(__name__)

_TIMESTAMP: Final[str] = r"\d{4}-\d{2}-\d{2}[ T]\d{2}:\d{2}:\d{2}(?:\.\d{3}(?:\d{3})?)?"

_MARKER_LINE: Final[re.Pattern[str]] = re.compile(
    rf"^\s*(?P<timestamp>{_TIMESTAMP})\b.*?{re.escape(FrameConstants.LOG_HEX_MARKER)}(?P<hex>.*)$"
)
_COMPACT_LINE: Final[re.Pattern[str]] = re.compile(
    rf"^\s*(?P<timestamp>{_TIMESTAMP})\s+(?P<hex>[0-9A-Fa-f][0-9A-Fa-f\s]*)$"
)


class LogLine(BaseModel):
    """One log line that carries a frame."""

    model_config = ConfigDict(frozen=True)

    captured_at: datetime = Field(description="Timestamp at the start of the line")
    hex_data: str = Field(min_length=1, description="Frame hex text, spacing as logged")


def parse_log_line(line: str) -> LogLine | None:
    """
    Extract the timestamp and frame hex from a log line.

    Args:
        line: One line of a gateway or capture log.

    Returns:
        LogLine, or None if the line has no timestamp or no frame.

    Example:
        >>> entry = parse_log_line("2024-03-05 14:22:07.481 Bytes in Hex: FE DC 01")
        >>> entry.hex_data
        'FE DC 01'
    """
    line = line.rstrip("\r\n")
    match = _MARKER_LINE.match(line) or _COMPACT_LINE.match(line)
    if match is None:
        return None

    hex_data = match.group("hex").strip()
    if not hex_data:
        return None
    try:
        captured_at = datetime.fromisoformat(match.group("timestamp"))
    except ValueError:
        return None
    return LogLine(captured_at=captured_at, hex_data=hex_data)


class ReplayReport(BaseModel):
    """
    Outcome of replaying a log.

    Attributes:
        readings: Decoded readings in log order.
        lines: Number of lines read.
        skipped: Lines that carried no frame.
        unknown_devices: Frames from device identifiers not in the table.
        rejected: Malformed frames by error class name.
    """

    model_config = ConfigDict(frozen=True)

    readings: tuple[SensorReading, ...] = ()
    lines: int = Field(default=0, ge=0)
    skipped: int = Field(default=0, ge=0)
    unknown_devices: int = Field(default=0, ge=0)
    rejected: dict[str, int] = Field(default_factory=dict)

    @property
    def frames(self) -> int:
        """Lines that carried a frame."""
        return self.lines - self.skipped

    @property
    def rejected_total(self) -> int:
        return sum(self.rejected.values())

    @property
    def success_rate(self) -> float:
        """Fraction of frames decoded into readings (0.0 when there were none)."""
        if self.frames == 0:
            return 0.0
        return len(self.readings) / self.frames

    def __str__(self) -> str:
        return (
            f"{len(self.readings)}/{self.frames} frames decoded "
            f"({self.unknown_devices} unknown, {self.rejected_total} rejected, "
            f"{self.skipped} lines skipped)"
        )


class LogReplayer:
    """
    Decodes telemetry log lines in order.

    Example:
        >>> replayer = LogReplayer(strict=True)
        >>> report = replayer.replay(lines)  # raises on the first bad frame
    """

    __slots__ = ("_decoder", "_strict")

    def __init__(self, decoder: FrameDecoder | None = None, *, strict: bool = False) -> None:
        """
        Initialize the replayer.

        Args:
            decoder: Frame decoder. Defaults to the built-in layouts.
            strict: Re-raise the first FrameError instead of counting it.
        """
        self._decoder = decoder or DEFAULT_DECODER
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def replay(self, lines: Iterable[str]) -> ReplayReport:
        """
        Decode every frame in a sequence of log lines.

        Args:
            lines: Log lines, e.g. an open text file.

        Returns:
            ReplayReport with readings and counters.

        Raises:
            FrameError: Only in strict mode, for the first malformed frame.
        """
        readings: list[SensorReading] = []
        rejected: Counter[str] = Counter()
        line_count = 0
        skipped = 0
        unknown = 0

        for line_number, line in enumerate(lines, start=1):
            line_count += 1
            entry = parse_log_line(line)
            if entry is None:
                skipped += 1
                continue

            try:
                reading = self._decoder.decode_frame(entry.hex_data, entry.captured_at)
            except FrameError as e:
                if self._strict:
                    raise
                rejected[type(e).__name__] += 1
                logger.warning("Line %d: rejected frame: %s", line_number, e)
                continue

            if reading is None:
                unknown += 1
                logger.debug("Line %d: frame from unknown device", line_number)
                continue

            logger.debug("Line %d: decoded %r", line_number, reading)
            readings.append(reading)

        report = ReplayReport(
            readings=tuple(readings),
            lines=line_count,
            skipped=skipped,
            unknown_devices=unknown,
            rejected=dict(rejected),
        )
        logger.info("Replay finished: %s", report)
        return report

    def replay_file(self, path: str | Path, encoding: str = "utf-8") -> ReplayReport:
        """Replay a log file line by line."""
        with open(path, encoding=encoding) as f:
            return self.replay(f)

    def __repr__(self) -> str:
        return f"LogReplayer(strict={self._strict})"
