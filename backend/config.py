"""
Backend Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy import make_url
from sqlalchemy.exc import ArgumentError

from curation.models.config import CurationConfig

from .db import SUPPORTED_DIALECTS

# Single .env at the project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent
_root_env = PROJECT_ROOT / ".env"
if _root_env.exists():
    load_dotenv(_root_env)

DEFAULT_DATABASE_URL = f"sqlite:///{PROJECT_ROOT / 'data' / 'curator.db'}"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class BackendConfig:
    """Backend configuration."""

    # SQLAlchemy URL for the items, feedback and model tables
    database_url: str = DEFAULT_DATABASE_URL
    sql_echo: bool = False

    log_level: str = "INFO"

    # Optional JSON file with curation overrides (see CurationConfig.from_dict)
    curation_config_path: Optional[Path] = None
    curation: CurationConfig = field(default_factory=CurationConfig)

    @classmethod
    def from_env(cls) -> "BackendConfig":
        """Load configuration from environment variables."""

        def _path_env(key: str) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return None
            p = Path(v)
            return p if p.is_absolute() else (PROJECT_ROOT / p).resolve()

        curation_path = _path_env("CURATION_CONFIG_PATH")
        return cls(
            database_url=os.getenv("DATABASE_URL", "").strip() or DEFAULT_DATABASE_URL,
            sql_echo=os.getenv("SQL_ECHO", "").strip().lower() in ("1", "true", "yes"),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
            curation_config_path=curation_path,
            curation=load_curation_config(curation_path),
        )

    @property
    def sqlite_path(self) -> Optional[Path]:
        """Filesystem path of a file-backed sqlite database, else None."""
        prefix = "sqlite:///"
        if not self.database_url.startswith(prefix):
            return None
        raw = self.database_url[len(prefix):]
        if not raw or raw == ":memory:":
            return None
        return Path(raw)

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if not self.database_url:
            errors.append("DATABASE_URL is empty")
        else:
            try:
                backend = make_url(self.database_url).get_backend_name()
            except ArgumentError:
                errors.append(f"Invalid DATABASE_URL: {self.database_url}")
            else:
                if backend not in SUPPORTED_DIALECTS:
                    errors.append(f"Unsupported database backend: {backend}")

        if logging.getLevelName(self.log_level) == f"Level {self.log_level}":
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        if self.curation_config_path and not self.curation_config_path.exists():
            errors.append(f"Curation config not found: {self.curation_config_path}")

        return len(errors) == 0, errors

    def ensure_directories(self):
        """Create the sqlite parent directory if needed."""
        path = self.sqlite_path
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)


def load_curation_config(path: Optional[Path]) -> CurationConfig:
    """Read curation overrides from a JSON file; defaults when path is None or missing."""
    if path is None or not path.exists():
        return CurationConfig()
    with open(path) as f:
        return CurationConfig.from_dict(json.load(f))


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler; later calls only adjust the level."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


# Global config instance
_config: Optional[BackendConfig] = None


def get_config() -> BackendConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = BackendConfig.from_env()
        _config.ensure_directories()
    return _config


def reload_config() -> BackendConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
