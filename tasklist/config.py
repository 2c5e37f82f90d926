from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

def _resolve_project_root() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


PROJECT_ROOT = _resolve_project_root()


def load_env() -> None:
    env_name = os.getenv("APP_ENV", "development")
    candidates = [Path.cwd(), PROJECT_ROOT]
    for base in candidates:
        env_path = base / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            break

    for base in candidates:
        env_specific = base / f".env.{env_name}"
        if env_specific.exists():
            load_dotenv(env_specific, override=True)
            break


def _default_storage_url() -> str:
    return f"sqlite:///{(PROJECT_ROOT / 'data' / 'tasklist.db').as_posix()}"


@dataclass(frozen=True)
class Settings:
    storage_url: str
    storage_scope: str = "local"
    log_level: str = "INFO"
    log_dir: str = "logs"


load_env()

SETTINGS = Settings(
    storage_url=os.getenv("STORAGE_URL", "").strip() or _default_storage_url(),
    storage_scope=os.getenv("STORAGE_SCOPE", "").strip() or "local",
    log_level=os.getenv("LOG_LEVEL", "INFO"),
    log_dir=os.getenv("LOG_DIR", "logs"),
)
