from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List

from loguru import logger

_CONFIGURED = False
_HANDLER_IDS: List[int] = []


def _package_filter(level: str | None = None) -> Callable[[dict], bool]:
    def _filter(record: dict) -> bool:
        if not record["name"].startswith("presence"):
            return False
        return level is None or record["level"].name == level

    return _filter


def configure_logging(
    service: str = "presence",
    version: str = os.getenv("PRESENCE_VERSION", "0.1.0"),
    environment: str = os.getenv("PRESENCE_ENV", "dev"),
) -> None:
    """
    Configure Loguru for the presence package without touching handlers
    the host application already added.

    With neither PRESENCE_LOG_LEVEL nor PRESENCE_LOG_DIR set, records from
    presence are disabled (logger.enable("presence") turns them back on).
    Otherwise presence records go to:
      • stderr at PRESENCE_LOG_LEVEL, when set
      • <PRESENCE_LOG_DIR>/YYYY-MM-DD/debug.json, info.json, error.json
    File sinks are JSON lines carrying the service/version/env fields.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    level = os.getenv("PRESENCE_LOG_LEVEL")
    log_dir = os.getenv("PRESENCE_LOG_DIR")

    if not level and not log_dir:
        logger.disable("presence")
        _CONFIGURED = True
        return

    logger.enable("presence")

    if level:
        _HANDLER_IDS.append(
            logger.add(
                sys.stderr,
                level=level,
                filter=_package_filter(),
                colorize=sys.stderr.isatty(),
                enqueue=False,
            )
        )

    if log_dir:
        day_dir = Path(log_dir) / datetime.now(timezone.utc).strftime("%Y-%m-%d")
        day_dir.mkdir(parents=True, exist_ok=True)

        common_kwargs = {
            "serialize": True,
            "rotation": "10 MB",
            "retention": "30 days",
            "enqueue": True,
        }

        for file_level, filename in (("DEBUG", "debug.json"), ("INFO", "info.json"), ("ERROR", "error.json")):
            _HANDLER_IDS.append(
                logger.add(
                    day_dir / filename,
                    level=file_level,
                    filter=_package_filter(file_level),
                    **common_kwargs,
                )
            )

    logger.configure(
        extra={
            "service": service,
            "version": version,
            "env": environment,
        }
    )

    _CONFIGURED = True


def reset_logging() -> None:
    """Remove the handlers configure_logging added and allow it to run again."""
    global _CONFIGURED
    while _HANDLER_IDS:
        logger.remove(_HANDLER_IDS.pop())
    _CONFIGURED = False
