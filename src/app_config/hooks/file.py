from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from app_config.errors import HookIOError

logger = logging.getLogger(__name__)


class FileSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    outfile: str

    def build(self) -> "FileHook":
        return FileHook(outfile=os.path.expanduser(self.outfile))


@dataclass(frozen=True, slots=True)
class FileHook:
    """Writes the payload verbatim to ``outfile``, replacing any previous content."""

    name: ClassVar[str] = "file"

    outfile: str

    def run(self, payload: str) -> None:
        write_text(self.outfile, payload)
        logger.info("hook.file_written path=%s chars=%d", self.outfile, len(payload))


def write_text(path: str, text: str) -> None:
    try:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
    except OSError as exc:
        raise HookIOError(f"Could not open {path}: {exc}") from exc
