"""Data models for termistat."""

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class MemorySample:
    """Memory totals from /proc/meminfo, in kB."""

    total_kb: int
    available_kb: int

    @property
    def used_kb(self) -> int:
        return self.total_kb - self.available_kb


@dataclass(slots=True, frozen=True)
class CpuSample:
    """Aggregate CPU time accounting from /proc/stat, in jiffies."""

    user: int
    nice: int
    system: int
    idle: int
    iowait: int
    irq: int
    softirq: int

    @classmethod
    def zero(cls) -> "CpuSample":
        """Sample used when /proc/stat cannot be parsed."""
        return cls(0, 0, 0, 0, 0, 0, 0)

    @property
    def idle_time(self) -> int:
        return self.idle + self.iowait

    @property
    def total_time(self) -> int:
        return self.user + self.nice + self.system + self.irq + self.softirq + self.idle_time


@dataclass(slots=True, frozen=True)
class BatteryInfo:
    """Battery charge and status."""

    capacity: int  # 0 - 100, -1 when unavailable
    status: str  # 'Charging', 'Discharging', 'Full', 'Unknown', etc.
    available: bool


@dataclass(slots=True, frozen=True)
class DiskMount:
    """Usage of a single mounted filesystem."""

    mountpoint: str
    total_bytes: int
    free_bytes: int
    used_bytes: int
    used_percent: float


@dataclass(slots=True, frozen=True)
class NetInterfaceStats:
    """Byte counters for one network interface."""

    name: str
    rx_bytes: int
    tx_bytes: int
