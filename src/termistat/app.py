"""termistat - Main refresh loop."""

import logging
import sys
import time
from collections.abc import Callable
from enum import Enum

from rich.console import Console

from termistat.constants import MIN_REFRESH_INTERVAL, POLL_SLICES, REFRESH_INTERVAL
from termistat.render import Renderer
from termistat.sources import (
    query_iwconfig,
    read_battery,
    read_cpu_times,
    read_disk_mounts,
    read_fan_rpm,
    read_memory,
    read_network_interfaces,
    read_temperature,
    read_wireless_signal,
)
from termistat.terminal import RawInput
from termistat.usage import CpuUsageCalculator

logger = logging.getLogger(__name__)

# Sections in display order; each maps to a Dashboard.show_<name> method
SECTIONS = ("memory", "cpu", "battery", "disk", "network")


class LoopState(Enum):
    """States of the refresh loop."""

    RUNNING = "running"
    TERMINATED = "terminated"


class Dashboard:
    """
    Refresh loop that samples every metric family and redraws the screen.

    Each frame clears the terminal and renders SECTIONS in order, then the
    loop waits out the refresh interval in short slices so that an Enter
    keypress ends it within one slice.
    """

    def __init__(
        self,
        console: Console | None = None,
        input_watcher: RawInput | None = None,
        wireless_query: Callable[[], str | None] = query_iwconfig,
        refresh_interval: float = REFRESH_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the Dashboard.

        Args:
            console: Console to draw on. Defaults to the real terminal.
            input_watcher: Keyboard watcher. Defaults to stdin.
            wireless_query: Callable returning wireless-status text or None.
            refresh_interval: Seconds between frames. Default 1.0s.
            sleep: Sleep function used between input polls.
        """
        self.renderer = Renderer(console)
        self._input = input_watcher
        self._wireless_query = wireless_query
        self._refresh_interval = max(MIN_REFRESH_INTERVAL, refresh_interval)
        self._sleep = sleep
        self.cpu = CpuUsageCalculator()
        self.state = LoopState.RUNNING

    @property
    def refresh_interval(self) -> float:
        """Get the refresh interval."""
        return self._refresh_interval

    @refresh_interval.setter
    def refresh_interval(self, value: float) -> None:
        """Set the refresh interval."""
        self._refresh_interval = max(MIN_REFRESH_INTERVAL, value)

    def show_memory(self) -> None:
        """Sample and draw the memory section."""
        self.renderer.show_memory(read_memory())

    def show_cpu(self) -> None:
        """Sample CPU counters, temperature and fan, and draw the CPU section."""
        usage = self.cpu.update(read_cpu_times())
        self.renderer.show_cpu(usage, read_temperature(), read_fan_rpm())

    def show_battery(self) -> None:
        """Sample and draw the battery section."""
        self.renderer.show_battery(read_battery())

    def show_disk(self) -> None:
        """Sample and draw the disk section."""
        self.renderer.show_disk(read_disk_mounts())

    def show_network(self) -> None:
        """Sample interfaces and wireless signal, and draw the network section."""
        interfaces = read_network_interfaces()
        self.renderer.show_network(interfaces, read_wireless_signal(self._wireless_query))

    def render_frame(self) -> None:
        """Clear the screen and draw every section once."""
        self.renderer.clear()
        self.renderer.draw_banner()
        for name in SECTIONS:
            try:
                getattr(self, f"show_{name}")()
            except Exception:
                # One broken section must not take down the dashboard
                logger.debug("Section %s failed to render", name, exc_info=True)

    def wait_for_exit(self) -> bool:
        """
        Sleep out one refresh interval while polling for Enter.

        Returns:
            True as soon as an exit key is read.
        """
        slice_seconds = self._refresh_interval / POLL_SLICES
        for _ in range(POLL_SLICES):
            self._sleep(slice_seconds)
            if self._input is not None and self._input.poll_for_exit():
                return True
        return False

    def run(self) -> int:
        """
        Run the dashboard until Enter is pressed.

        Returns:
            Process exit code.
        """
        if self._input is None:
            self._input = RawInput()

        self.renderer.print_hint()
        with self._input:
            while self.state is LoopState.RUNNING:
                self.render_frame()
                if self.wait_for_exit():
                    self.state = LoopState.TERMINATED
        return 0


def main() -> None:
    """Entry point for termistat."""
    dashboard = Dashboard()
    try:
        code = dashboard.run()
    except KeyboardInterrupt:
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    main()
