"""Conversion of raw counters into usage percentages."""

import math

from termistat.models import CpuSample, MemorySample


def clamp_percent(value: float) -> float:
    """Clamp a percentage into [0, 100]; NaN becomes 0."""
    if math.isnan(value):
        return 0.0
    return min(max(value, 0.0), 100.0)


def memory_percent(sample: MemorySample) -> float:
    """Percentage of memory in use, 0.0 if the total is unknown."""
    if sample.total_kb <= 0:
        return 0.0
    return clamp_percent(100.0 * sample.used_kb / sample.total_kb)


def disk_percent(used: int, total: int) -> float:
    """Percentage of a filesystem in use, 0.0 for an empty filesystem."""
    if total <= 0:
        return 0.0
    return 100.0 * used / total


class CpuUsageCalculator:
    """
    CPU busy percentage from consecutive /proc/stat samples.

    Holds the previous sample between refresh cycles. The first update has
    nothing to compare against and reports 0.0.
    """

    def __init__(self, previous: CpuSample | None = None) -> None:
        """
        Initialize the calculator.

        Args:
            previous: Sample to diff the first update against.
        """
        self._previous = previous

    @property
    def previous(self) -> CpuSample | None:
        """Get the last sample seen."""
        return self._previous

    def update(self, sample: CpuSample) -> float:
        """Store the new sample and return busy percent since the previous one."""
        previous = self._previous
        self._previous = sample
        if previous is None:
            return 0.0

        delta_total = sample.total_time - previous.total_time
        delta_idle = sample.idle_time - previous.idle_time
        # Counter wrap or a /proc/stat read failure can move totals backwards
        if delta_total <= 0:
            return 0.0
        return clamp_percent(100.0 * (delta_total - delta_idle) / delta_total)
