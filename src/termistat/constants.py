"""Hardcoded settings for termistat: source paths, cadence, and styling."""

# ---- Kernel sources ----
MEMINFO_PATH = "/proc/meminfo"
STAT_PATH = "/proc/stat"
MOUNTS_PATH = "/proc/mounts"
NET_DEV_PATH = "/proc/net/dev"
THERMAL_PATH = "/sys/class/thermal/thermal_zone0/temp"
HWMON_DIR = "/sys/class/hwmon"
BATTERY_DIR = "/sys/class/power_supply/BAT0"

WIRELESS_COMMAND = ["iwconfig"]
WIRELESS_QUERY_TIMEOUT = 2.0  # seconds
SIGNAL_MARKER = "Signal level="

# Up to fan5_input is checked on every hwmon chip
FAN_CANDIDATES = 5

# Substring match on the mountpoint, so /mnt/devtools is excluded too
EXCLUDED_MOUNT_MARKERS = ("/dev", "/sys")

# ---- Sentinels ----
TEMPERATURE_UNAVAILABLE = -1.0
FAN_UNAVAILABLE = -1

# ---- Refresh cadence ----
REFRESH_INTERVAL = 1.0  # seconds between frames
MIN_REFRESH_INTERVAL = 0.1
POLL_SLICES = 10  # exit latency is REFRESH_INTERVAL / POLL_SLICES

# ---- Rendering ----
BAR_WIDTH = 40

COLOR_SUCCESS = "green"
COLOR_WARNING = "yellow"
COLOR_DANGER = "red"
COLOR_FILLER = "bright_black"

# (upper bound exclusive, color); anything above the last bound is the final color
NORMAL_THRESHOLDS = ((60.0, COLOR_SUCCESS), (85.0, COLOR_WARNING))
NORMAL_TOP_COLOR = COLOR_DANGER
INVERTED_THRESHOLDS = ((30.0, COLOR_DANGER), (75.0, COLOR_WARNING))
INVERTED_TOP_COLOR = COLOR_SUCCESS

BANNER = "*** TermiStat ***"
USAGE_HINT = "Press ENTER to quit"
