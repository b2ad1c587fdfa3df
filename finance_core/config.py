"""Environment-driven settings for the finance ledger."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .logging_setup import LOG_LEVEL_ENV

DATA_FILE_ENV = "FINANCE_LEDGER_DATA_FILE"
DEFAULT_DATA_FILE = "data.csv"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    data_file: str = DEFAULT_DATA_FILE
    log_level: str = DEFAULT_LOG_LEVEL


def get_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from ``environ`` (defaults to ``os.environ``).

    Empty values fall back to the defaults.
    """
    env = os.environ if environ is None else environ
    data_file = (env.get(DATA_FILE_ENV) or "").strip() or DEFAULT_DATA_FILE
    log_level = (env.get(LOG_LEVEL_ENV) or "").strip().upper() or DEFAULT_LOG_LEVEL
    return Settings(data_file=data_file, log_level=log_level)
