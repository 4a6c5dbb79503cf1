from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

LOG_LEVEL = os.getenv("TEAMCAL_LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("TEAMCAL_LOG_DIR", Path.cwd() / "logs"))

_INITIALIZED = False


def configure_logging(*, level: Optional[str] = None, log_dir: Optional[Path] = None) -> None:
    """Configure application-wide logging with a console stream and a dated log file."""

    global _INITIALIZED
    if _INITIALIZED:
        return

    resolved_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    directory = log_dir or LOG_DIR
    directory.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d")
    log_path = directory / f"teamcal-{stamp}.log"

    handlers: list[logging.Handler] = [
        logging.StreamHandler(),
        logging.FileHandler(log_path, encoding="utf-8"),
    ]

    logging.basicConfig(
        level=resolved_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )

    _INITIALIZED = True
    logging.getLogger(__name__).debug("Logging configured. Output file: %s", log_path)
