"""Environment-driven settings for the backend and the desktop tool."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .records import RECORDS_SLOT

BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BASE_DIR.parent
DEFAULT_STORE_PATH = BASE_DIR / "data" / "storage.json"


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False
    store_path: Path = DEFAULT_STORE_PATH
    records_slot: str = RECORDS_SLOT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.environ.get("HOST", "127.0.0.1"),
            port=int(os.environ.get("PORT", "8000")),
            reload=os.environ.get("UVICORN_RELOAD", "0") == "1",
            store_path=Path(os.environ.get("MEASUREMENT_STORE_PATH", str(DEFAULT_STORE_PATH))),
            records_slot=os.environ.get("MEASUREMENT_SLOT", RECORDS_SLOT),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr with a timestamped format."""

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
