"""Runtime configuration loaded from the environment."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Default data directory (repo-root/data, next to src/)
DATA_DIR = Path(
    os.getenv("FITTRACK_DATA_DIR", Path(__file__).parent.parent.parent / "data")
)
DB_PATH = os.getenv("FITTRACK_DB_PATH", "")

APP_NAME = os.getenv("FITTRACK_APP_NAME", "fit-track")
APP_VERSION = "0.1.0"

# Single-user deployment: API requests act on behalf of this user
DEFAULT_USER_ID = int(os.getenv("FITTRACK_USER_ID", "1"))

LOG_LEVEL = os.getenv("FITTRACK_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Goal defaults applied when a user has no active goal set
DEFAULT_WEIGHT_GOAL = float(os.getenv("FITTRACK_DEFAULT_WEIGHT_GOAL", "175"))
DEFAULT_CALORIE_GOAL = int(os.getenv("FITTRACK_DEFAULT_CALORIE_GOAL", "2500"))
DEFAULT_PROTEIN_GOAL = float(os.getenv("FITTRACK_DEFAULT_PROTEIN_GOAL", "150"))
DEFAULT_WORKOUT_GOAL = int(os.getenv("FITTRACK_DEFAULT_WORKOUT_GOAL", "5"))


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for CLI and server processes."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
