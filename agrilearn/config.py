"""
Runtime configuration for AgriLearn.

Settings come from environment variables, optionally loaded from a `.env`
file in the project root:

- GEMINI_API_KEY: key for the lesson/quiz/Q&A generation service
- AGRILEARN_MODEL: Gemini model name
- AGRILEARN_DATA_DIR: directory holding the offline lesson database
- AGRILEARN_FORCE_OFFLINE: treat the host as offline regardless of probes
- AGRILEARN_LOG_LEVEL: logging level name
- AGRILEARN_PROBE_HOST / AGRILEARN_PROBE_PORT: connectivity probe target
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_DATA_DIR = Path.home() / ".agrilearn"
DEFAULT_DB_NAME = "offline.db"
DEFAULT_PROBE_HOST = "8.8.8.8"
DEFAULT_PROBE_PORT = 53
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Resolved application settings."""
    gemini_api_key: Optional[str]
    model: str = DEFAULT_MODEL
    data_dir: Path = DEFAULT_DATA_DIR
    force_offline: bool = False
    log_level: str = "INFO"
    probe_host: str = DEFAULT_PROBE_HOST
    probe_port: int = DEFAULT_PROBE_PORT

    @property
    def db_path(self) -> Path:
        """Path of the SQLite file backing the offline lesson store."""
        return self.data_dir / DEFAULT_DB_NAME

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """
        Build settings from the environment.

        Args:
            env_file: Optional .env file (default: PROJECT_ROOT/.env)

        Returns:
            Settings with defaults filled in for unset variables
        """
        load_dotenv(env_file or PROJECT_ROOT / ".env")

        data_dir = os.environ.get("AGRILEARN_DATA_DIR")
        probe_port = os.environ.get("AGRILEARN_PROBE_PORT")

        return cls(
            gemini_api_key=os.environ.get("GEMINI_API_KEY") or None,
            model=os.environ.get("AGRILEARN_MODEL", DEFAULT_MODEL),
            data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
            force_offline=os.environ.get("AGRILEARN_FORCE_OFFLINE", "").strip().lower() in _TRUTHY,
            log_level=os.environ.get("AGRILEARN_LOG_LEVEL", "INFO").upper(),
            probe_host=os.environ.get("AGRILEARN_PROBE_HOST", DEFAULT_PROBE_HOST),
            probe_port=int(probe_port) if probe_port else DEFAULT_PROBE_PORT,
        )


def setup_logging(level: str = "INFO"):
    """Configure root logging for the app."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
    )
