"""Consumption and refill totals over a series of volume readings."""

from __future__ import annotations

import math
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from levelsense.exceptions import InvalidLevelError


class UsageSummary(BaseModel):
    """
    Totals over an ordered series of volumes.

    Attributes:
        used: Sum of all decreases between consecutive volumes.
        added: Sum of all increases between consecutive volumes.
        net_change: Last volume minus first volume (added - used).
        samples: Number of volumes in the series.
    """

    model_config = ConfigDict(frozen=True)

    used: float = Field(default=0.0, ge=0, description="Total decrease")
    added: float = Field(default=0.0, ge=0, description="Total increase")
    net_change: float = Field(default=0.0, description="Added minus used")
    samples: int = Field(default=0, ge=0, description="Number of volumes")


def usage_and_additions(volumes: Iterable[float]) -> UsageSummary:
    """
    Split volume changes into usage and additions.

    Args:
        volumes: Volumes in time order, in any consistent unit.

    Returns:
        UsageSummary. Fewer than two volumes give zero totals.

    Raises:
        InvalidLevelError: If a volume is not finite.

    Example:
        >>> usage_and_additions([10.0, 8.0, 9.5, 7.0])
        UsageSummary(used=4.5, added=1.5, net_change=-3.0, samples=4)
    """
    used = 0.0
    added = 0.0
    samples = 0
    previous: float | None = None

    for value in volumes:
        if value is None or not math.isfinite(value):
            raise InvalidLevelError(f"Volume must be a finite number, got {value!r}", value=value)
        samples += 1
        if previous is not None:
            delta = value - previous
            if delta < 0:
                used -= delta
            else:
                added += delta
        previous = value

    return UsageSummary(used=used, added=added, net_change=added - used, samples=samples)
