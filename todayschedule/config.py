"""
Runtime configuration.

Values come from the environment (optionally a .env file) and can be
overridden per command on the CLI.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from todayschedule.projector import COURSES_KEY


def _get_env_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip() in {"1", "true", "True", "yes", "YES", "y"}


def _get_env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    try:
        return int(val)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer") from exc


@dataclass
class Config:
    prefs_path: Optional[Path]
    prefs_key: str
    api_level: int
    package_name: str
    exact_alarms_permitted: bool
    log_level: str


def load_config(env_path: Optional[Path] = None) -> Config:
    if env_path is not None:
        load_dotenv(env_path)
    else:
        load_dotenv()

    prefs_path = os.getenv("TODAYSCHEDULE_PREFS_PATH")

    return Config(
        prefs_path=Path(prefs_path) if prefs_path else None,
        prefs_key=os.getenv("TODAYSCHEDULE_PREFS_KEY") or COURSES_KEY,
        # 0 = desktop / no permission gating
        api_level=_get_env_int("TODAYSCHEDULE_API_LEVEL", 0),
        package_name=os.getenv("TODAYSCHEDULE_PACKAGE") or "com.example.tkt",
        exact_alarms_permitted=_get_env_bool("TODAYSCHEDULE_EXACT_ALARMS", True),
        log_level=(os.getenv("TODAYSCHEDULE_LOG_LEVEL") or "WARNING").upper(),
    )


def setup_logging(log_level: str = "WARNING") -> None:
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        handlers=[console_handler],
    )
