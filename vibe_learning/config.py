"""Runtime settings for Vibe Learning.

Everything lives in module-level constants so the rest of the package can
import them directly. Environment variables override the defaults.
"""

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
DATA_DIR = Path(os.environ.get("VIBE_LEARNING_HOME", Path.home() / ".vibe_learning"))
PROFILE_FILE = DATA_DIR / "userData.json"
STATS_FILE = DATA_DIR / "dictionary_stats.json"

# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------
MAX_WORD_LENGTH = 240

# ---------------------------------------------------------------------------
# Display / diagnostics
# ---------------------------------------------------------------------------
TIMEZONE = os.environ.get("VIBE_LEARNING_TZ") or None  # None = local zone
TIMESTAMP_FORMAT = "%d/%m/%Y, %H:%M:%S"
LOG_LEVEL = os.environ.get("VIBE_LEARNING_LOG_LEVEL", "WARNING")


def profile_file(data_dir: Path | None = None) -> Path:
    return Path(data_dir) / PROFILE_FILE.name if data_dir else PROFILE_FILE


def stats_file(data_dir: Path | None = None) -> Path:
    return Path(data_dir) / STATS_FILE.name if data_dir else STATS_FILE
