"""Load and validate configuration from environment."""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
# Directory scanned (recursively) for SKILL.md and *.skill.md files
SKILLS_DIR = Path(os.getenv("SKILLS_DIR", str(PROJECT_ROOT / "skills"))).expanduser()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Matching thresholds used by the tool layer when the caller gives none
MIN_MATCH_CONFIDENCE = float(os.getenv("MIN_MATCH_CONFIDENCE", "0.3"))
HIGH_MATCH_CONFIDENCE = float(os.getenv("HIGH_MATCH_CONFIDENCE", "0.7"))
CONFLICT_OVERLAP_THRESHOLD = float(os.getenv("CONFLICT_OVERLAP_THRESHOLD", "0.8"))

# Request limits
MAX_TASK_DESCRIPTION_LENGTH = int(os.getenv("MAX_TASK_DESCRIPTION_LENGTH", "10000"))


def validate_for_loader(skills_dir: Path | None = None) -> None:
    """Validate that the skills directory exists (when loading skills from disk)."""
    directory = skills_dir or SKILLS_DIR
    if not directory.is_dir():
        raise ValueError(f"SKILLS_DIR does not exist or is not a directory: {directory}. Set it in .env.")
