"""Filesystem locations the settings classes read from."""

from pathlib import Path

# taskboard/paths.py -> repository root
PROJECT_ROOT = Path(__file__).resolve().parent.parent

ENV_FILE = PROJECT_ROOT / ".env"
