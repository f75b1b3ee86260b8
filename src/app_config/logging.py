from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

from app_config.config.models import LoggingSettings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_installed: list[logging.Handler] = []


def init_logging(settings: LoggingSettings, *, level_override: Optional[str] = None) -> None:
    """
    Configure the root logger: stderr always, plus a daily rotated file when configured.

    Safe to call more than once; handlers from an earlier call are replaced and any
    handlers installed by someone else are left alone.
    """
    formatter = logging.Formatter(LOG_FORMAT)
    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(formatter)
    handlers: list[logging.Handler] = [stream]

    if settings.file is not None:
        path = Path(settings.file.path).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            path,
            when="midnight",
            backupCount=settings.file.rotation.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    root = logging.getLogger()
    while _installed:
        handler = _installed.pop()
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
        _installed.append(handler)
    root.setLevel(level_override or settings.level)
