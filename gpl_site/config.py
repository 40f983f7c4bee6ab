"""Runtime configuration, read from environment variables.

The first ``.env`` file found is loaded first. It never overrides variables
that are already set, so systemd units and Docker Compose keep their own values.
"""

from os import getenv
from pathlib import Path
from typing import FrozenSet, List, Optional

from dotenv import load_dotenv

ENV_FILE_PATHS = [
    Path("/opt/gpl-site/.env"),
    Path(__file__).parent.parent / ".env",
]


def load_env_file(paths: List[Path] = ENV_FILE_PATHS) -> Optional[Path]:
    """Load the first existing .env file. Returns its path, or None if there is none."""
    for env_file in paths:
        if env_file.is_file():
            load_dotenv(env_file, override=False)
            return env_file
    return None


def split_list(value: str) -> List[str]:
    """Split a comma separated setting, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


ENV_FILE = load_env_file()

DEBUG = getenv("APP_DEBUG", "false").lower() == "true"

# Default DATABASE_URL is for local dev only (Docker Compose)
DATABASE_URL = getenv(
    "DATABASE_URL",
    "postgresql+asyncpg://postgres:postgres@db:5432/gpl_site"
)

CORS_ORIGINS = split_list(getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"))

# Admin sign-in (Google OAuth)
GOOGLE_CLIENT_ID = getenv("GOOGLE_CLIENT_ID")
GOOGLE_CLIENT_SECRET = getenv("GOOGLE_CLIENT_SECRET")
ADMIN_EMAILS: FrozenSet[str] = frozenset(e.lower() for e in split_list(getenv("ADMIN_EMAILS", "")))
SUPER_ADMIN_EMAILS: FrozenSet[str] = frozenset(e.lower() for e in split_list(getenv("SUPER_ADMIN_EMAILS", "")))

# Quoted in failure messages of safety-relevant submissions
EMERGENCY_HOTLINE = getenv("EMERGENCY_HOTLINE", "0475")
