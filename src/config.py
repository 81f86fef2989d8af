import os
from pathlib import Path


def _default_data_root() -> str:
    """
    Determine a writable data root for Stockroom.

    Priority:
      1. STOCKROOM_DATA_DIR environment variable (explicit override)
      2. XDG data directory: $XDG_DATA_HOME/stockroom or ~/.local/share/stockroom
    """
    override = os.environ.get("STOCKROOM_DATA_DIR")
    if override:
        return override

    home = str(Path.home())
    xdg_data_home = os.environ.get("XDG_DATA_HOME", os.path.join(home, ".local", "share"))
    return os.path.join(xdg_data_home, "stockroom")


# Writable application data root (per-user by default)
PARENT_DIR = _default_data_root()

# Paths
INVENTORY_LOG_FILE = os.path.join(PARENT_DIR, "inventory_log.json")
# Electronics and groceries are snapshotted side by side in one folder,
# one file per store.
WAREHOUSE_DIR = os.path.join(PARENT_DIR, "warehouse")
STUDENTS_INPUT_FILE = os.path.join(PARENT_DIR, "students_input.txt")
STUDENTS_REPORT_FILE = os.path.join(PARENT_DIR, "students_report.txt")

# Snapshot layout
SNAPSHOT_INDENT = 2

# ---------------------------------------------------------------------------
# Student grading
# ---------------------------------------------------------------------------

MIN_SCORE = 0
MAX_SCORE = 100

# Lower bound of each grade band, checked from the top down.
GRADE_BOUNDARIES = [
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
]
FAILING_GRADE = "F"

# ---------------------------------------------------------------------------
# Finance
# ---------------------------------------------------------------------------

DEFAULT_ACCOUNT_NUMBER = "ACC12345"
DEFAULT_OPENING_BALANCE = "1000"
