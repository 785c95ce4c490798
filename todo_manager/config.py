from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_PROJECT_KEY = "TASK"


def resolve_app_root() -> Path:
    home = os.getenv("TODO_HOME", "").strip()
    if home:
        return Path(home).expanduser().resolve()
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path.cwd()


def load_env() -> None:
    env_name = os.getenv("APP_ENV", "development")
    candidates = list(dict.fromkeys([Path.cwd(), resolve_app_root()]))
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


@dataclass(frozen=True)
class Settings:
    default_project_key: str = DEFAULT_PROJECT_KEY
    log_level: str = "INFO"
    log_dir: str = "logs"


def build_settings() -> Settings:
    return Settings(
        default_project_key=os.getenv("TODO_DEFAULT_PROJECT_KEY", "").strip() or DEFAULT_PROJECT_KEY,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_dir=os.getenv("LOG_DIR", "logs"),
    )


load_env()

SETTINGS = build_settings()
