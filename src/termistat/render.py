"""Terminal rendering for termistat sections."""

import math

from rich.console import Console
from rich.text import Text

from termistat.constants import (
    BANNER,
    BAR_WIDTH,
    COLOR_FILLER,
    INVERTED_THRESHOLDS,
    INVERTED_TOP_COLOR,
    NORMAL_THRESHOLDS,
    NORMAL_TOP_COLOR,
    USAGE_HINT,
)
from termistat.models import BatteryInfo, DiskMount, MemorySample, NetInterfaceStats
from termistat.usage import memory_percent

MB = 1024 * 1024


def filled_cells(percent: float, width: int = BAR_WIDTH) -> int:
    """Number of colored cells for a bar, clamped to [0, width]."""
    if math.isnan(percent):
        return 0
    pos = math.floor(percent * width / 100)
    return min(max(pos, 0), width)


def bar_color(percent: float, inverted: bool = False) -> str:
    """
    Pick the fill color for a percentage.

    Normal bars go green, yellow, red as usage rises. Inverted bars (battery)
    go red, yellow, green as the value rises.
    """
    if inverted:
        thresholds, top = INVERTED_THRESHOLDS, INVERTED_TOP_COLOR
    else:
        thresholds, top = NORMAL_THRESHOLDS, NORMAL_TOP_COLOR

    for upper, color in thresholds:
        if percent < upper:
            return color
    return top


def progress_bar(percent: float, width: int = BAR_WIDTH, inverted: bool = False) -> Text:
    """Build ``[<cells>] 42.0%`` with colored background cells."""
    filled = filled_cells(percent, width)
    bar = Text("[")
    bar.append(" " * filled, style=f"on {bar_color(percent, inverted)}")
    bar.append(" " * (width - filled), style=f"on {COLOR_FILLER}")
    bar.append(f"] {percent:.1f}%")
    return bar


class Renderer:
    """Writes dashboard sections to a rich Console."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the Renderer."""
        self.console = console or Console(highlight=False)

    def _print(self, *parts: str | Text) -> None:
        self.console.print(Text.assemble(*parts), soft_wrap=True)

    def clear(self) -> None:
        """Clear the screen and move the cursor home."""
        self.console.clear()

    def print_hint(self) -> None:
        """Print the one-line usage hint shown before the first frame."""
        self._print(USAGE_HINT)

    def draw_banner(self) -> None:
        """Print the program banner followed by a blank line."""
        self._print(Text(BANNER, style="bold green"))
        self._print()

    def draw_title(self, name: str) -> None:
        """Print a bold blue section header."""
        self._print(Text(f"==== {name} ====", style="bold blue"))

    def draw_progress_bar(
        self,
        percent: float,
        width: int = BAR_WIDTH,
        inverted: bool = False,
        label: str = "",
    ) -> None:
        """Print a progress bar, optionally prefixed by a label."""
        self._print(label, progress_bar(percent, width, inverted))

    def show_memory(self, sample: MemorySample) -> None:
        """Render used/total memory in MB with a usage bar."""
        self.draw_title("Memory")
        self._print(f"Used: {sample.used_kb // 1024} MB / {sample.total_kb // 1024} MB")
        self.draw_progress_bar(memory_percent(sample))
        self._print()

    def show_cpu(self, usage: float, temperature: float, fan_rpm: int) -> None:
        """
        Render CPU usage, then temperature and fan speed when available.

        Args:
            usage: Busy percent since the previous frame.
            temperature: Degrees Celsius, or the -1.0 sentinel.
            fan_rpm: Fan speed, or the -1 sentinel.
        """
        self.draw_title("CPU")
        self.draw_progress_bar(usage, label="Usage: ")
        if temperature > 0:
            self._print(f"Temp: {temperature:.1f} °C")
        if fan_rpm > 0:
            self._print(f"Fan:  {fan_rpm} RPM")
        self._print()

    def show_battery(self, info: BatteryInfo) -> None:
        """Render battery status and charge, or a notice when there is no battery."""
        self.draw_title("Battery")
        if info.available:
            self._print(info.status)
            # High charge is good, so the bar uses inverted colors
            self.draw_progress_bar(info.capacity, inverted=True)
        else:
            self._print("Battery info not available")
        self._print()

    def show_disk(self, mounts: list[DiskMount]) -> None:
        """Render one usage line per mount, skipping empty filesystems."""
        self.draw_title("Disks")
        for mount in mounts:
            if mount.total_bytes <= 0:
                continue
            self._print(
                f"{mount.mountpoint}: {mount.used_bytes // MB} MB / "
                f"{mount.total_bytes // MB} MB ({mount.used_percent:.1f}%)"
            )
        self._print()

    def show_network(self, interfaces: list[NetInterfaceStats], signal: str = "") -> None:
        """Render per-interface RX/TX in KB and the wireless signal if known."""
        self.draw_title("Network")
        for iface in interfaces:
            self._print(
                f"{iface.name} → RX: {iface.rx_bytes // 1024} KB, TX: {iface.tx_bytes // 1024} KB"
            )
        if signal:
            self._print()
            self._print(f"WiFi Signal: {signal}")
        self._print()
