"""Raw metric readers for procfs, sysfs, statvfs and iwconfig.

Every reader degrades to a sentinel value (zeros, -1, empty) when the kernel
does not expose the data, so the renderer can simply omit that line.
"""

import logging
import os
import re
import subprocess
from collections.abc import Callable

import psutil

from termistat.constants import (
    BATTERY_DIR,
    EXCLUDED_MOUNT_MARKERS,
    FAN_CANDIDATES,
    FAN_UNAVAILABLE,
    HWMON_DIR,
    MEMINFO_PATH,
    MOUNTS_PATH,
    NET_DEV_PATH,
    SIGNAL_MARKER,
    STAT_PATH,
    TEMPERATURE_UNAVAILABLE,
    THERMAL_PATH,
    WIRELESS_COMMAND,
    WIRELESS_QUERY_TIMEOUT,
)
from termistat.models import BatteryInfo, CpuSample, DiskMount, MemorySample, NetInterfaceStats
from termistat.usage import disk_percent

logger = logging.getLogger(__name__)

# /proc/mounts escapes whitespace in paths as octal, e.g. "\040" for a space
_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")


def _read_first_line(path: str) -> str:
    with open(path) as f:
        return f.readline()


def read_memory(path: str = MEMINFO_PATH) -> MemorySample:
    """Read MemTotal and MemAvailable (kB). Missing keys read as 0."""
    total = 0
    available = 0
    try:
        with open(path) as f:
            for line in f:
                if line.startswith("MemTotal:"):
                    total = _first_number(line, "MemTotal:")
                elif line.startswith("MemAvailable:"):
                    available = _first_number(line, "MemAvailable:")
    except (OSError, ValueError):
        logger.debug("Memory info unavailable at %s", path)
    return MemorySample(total_kb=total, available_kb=available)


def _first_number(line: str, label: str) -> int:
    """First number after the label; the space after the colon is optional."""
    try:
        return int(line[len(label):].split()[0])
    except (IndexError, ValueError):
        return 0


def read_cpu_times(path: str = STAT_PATH) -> CpuSample:
    """Read the aggregate 'cpu' line of /proc/stat."""
    try:
        fields = _read_first_line(path).split()
        return CpuSample(*(int(value) for value in fields[1:8]))
    except (OSError, ValueError, TypeError):
        # TypeError covers a line with fewer than 7 counters
        logger.debug("Could not parse CPU counters from %s", path)
        return CpuSample.zero()


def read_temperature(path: str = THERMAL_PATH) -> float:
    """
    Read the CPU temperature in degrees Celsius.

    Returns:
        Temperature, or TEMPERATURE_UNAVAILABLE if the zone is missing.
    """
    try:
        return int(_read_first_line(path).strip()) / 1000.0
    except (OSError, ValueError, OverflowError):
        return TEMPERATURE_UNAVAILABLE


def read_fan_rpm(hwmon_dir: str = HWMON_DIR) -> int:
    """
    Find a spinning fan among the hwmon chips.

    Every chip with a readable ``name`` file is checked for ``fan1_input``
    through ``fan5_input``. The first strictly positive reading wins; a fan
    reporting 0 RPM counts as no signal.
    """
    try:
        entries = sorted(os.listdir(hwmon_dir))
    except OSError:
        return FAN_UNAVAILABLE

    for entry in entries:
        chip_dir = os.path.join(hwmon_dir, entry)
        try:
            chip_name = _read_first_line(os.path.join(chip_dir, "name")).strip()
        except (OSError, ValueError):
            continue

        for index in range(1, FAN_CANDIDATES + 1):
            fan_path = os.path.join(chip_dir, f"fan{index}_input")
            try:
                rpm = int(_read_first_line(fan_path).strip())
            except (OSError, ValueError):
                continue
            if rpm > 0:
                logger.debug("Fan reading %d RPM from %s (%s)", rpm, fan_path, chip_name)
                return rpm

    return FAN_UNAVAILABLE


def read_battery(battery_dir: str = BATTERY_DIR) -> BatteryInfo:
    """Read capacity and status of the first battery."""
    capacity_path = os.path.join(battery_dir, "capacity")
    status_path = os.path.join(battery_dir, "status")
    try:
        with open(capacity_path) as cap_file, open(status_path) as status_file:
            capacity = int(cap_file.readline().strip())
            status = status_file.readline().rstrip("\n")
    except (OSError, ValueError):
        return BatteryInfo(capacity=-1, status="Unknown", available=False)

    return BatteryInfo(capacity=capacity, status=status, available=True)


def _unescape_mountpoint(raw: str) -> str:
    return _OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), raw)


def is_excluded_mount(mountpoint: str) -> bool:
    """
    Check whether a mountpoint is treated as a pseudo-filesystem.

    This is a plain substring test, so real mounts such as ``/mnt/devtools``
    or ``/srv/sysimages`` are excluded along with ``/dev`` and ``/sys``.
    """
    return any(marker in mountpoint for marker in EXCLUDED_MOUNT_MARKERS)


def read_disk_mounts(path: str = MOUNTS_PATH) -> list[DiskMount]:
    """
    List usage for every mounted filesystem outside /dev and /sys.

    Mounts whose statistics query fails are skipped.
    """
    mounts: list[DiskMount] = []
    try:
        with open(path) as f:
            lines = f.readlines()
    except (OSError, ValueError):
        logger.debug("Mount table unavailable at %s", path)
        return mounts

    for line in lines:
        fields = line.split()
        if len(fields) < 2:
            continue

        mountpoint = _unescape_mountpoint(fields[1])
        if is_excluded_mount(mountpoint):
            continue

        try:
            usage = psutil.disk_usage(mountpoint)
        except (OSError, ValueError):
            logger.debug("Skipping filesystem at %s (statvfs failed)", mountpoint)
            continue

        # psutil reports used as (f_blocks - f_bfree) * f_frsize
        free = usage.total - usage.used
        mounts.append(
            DiskMount(
                mountpoint=mountpoint,
                total_bytes=usage.total,
                free_bytes=free,
                used_bytes=usage.used,
                used_percent=disk_percent(usage.used, usage.total),
            )
        )

    return mounts


def read_network_interfaces(path: str = NET_DEV_PATH) -> list[NetInterfaceStats]:
    """
    Read per-interface byte counters from /proc/net/dev.

    After the two header lines each row is ``name: rx_bytes <7 rx fields>
    tx_bytes ...``, so tx_bytes is the ninth counter after the colon.
    """
    interfaces: list[NetInterfaceStats] = []
    try:
        with open(path) as f:
            lines = f.readlines()[2:]
    except (OSError, ValueError):
        logger.debug("Network counters unavailable at %s", path)
        return interfaces

    for line in lines:
        name, sep, counters = line.partition(":")
        if not sep:
            continue
        fields = counters.split()
        try:
            rx_bytes = int(fields[0])
            tx_bytes = int(fields[8])
        except (IndexError, ValueError):
            continue
        interfaces.append(
            NetInterfaceStats(name=name.replace(" ", ""), rx_bytes=rx_bytes, tx_bytes=tx_bytes)
        )

    return interfaces


def query_iwconfig() -> str | None:
    """Run iwconfig and return its output, or None if it is unavailable."""
    try:
        return subprocess.check_output(
            WIRELESS_COMMAND,
            stderr=subprocess.DEVNULL,
            timeout=WIRELESS_QUERY_TIMEOUT,
            text=True,
        )
    except (OSError, subprocess.SubprocessError):
        return None


def read_wireless_signal(query: Callable[[], str | None] = query_iwconfig) -> str:
    """
    Extract the wireless signal level from a wireless-status query.

    Args:
        query: Callable returning the tool's text output, or None.

    Returns:
        The text from ``Signal level=`` to the end of that line, or "".
    """
    output = query()
    if not output:
        return ""

    for line in output.splitlines():
        pos = line.find(SIGNAL_MARKER)
        if pos != -1:
            return line[pos:].strip()
    return ""
