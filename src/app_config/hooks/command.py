from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from app_config.errors import CommandFailedError, HookIOError

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "/bin/sh"


class CommandSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    command: str
    pipe_data: bool = False
    shell: str = DEFAULT_SHELL

    def build(self) -> "CommandHook":
        return CommandHook(command=self.command, pipe_data=self.pipe_data, shell=self.shell)


@dataclass(frozen=True, slots=True)
class CommandHook:
    """
    Runs a shell command whenever new data arrives.

    With ``pipe_data`` the payload is written to the command's stdin. Either way the
    command's stdout is discarded and a non-zero exit status fails the hook.
    """

    name: ClassVar[str] = "command"

    command: str
    pipe_data: bool = False
    shell: str = DEFAULT_SHELL

    def run(self, payload: str) -> None:
        argv = [self.shell, "-c", self.command]
        logger.info("hook.command_start command=%s pipe_data=%s", self.command, self.pipe_data)
        try:
            if self.pipe_data:
                status = self._run_piped(argv, payload)
            else:
                status = subprocess.run(argv, stdin=subprocess.DEVNULL, stdout=subprocess.DEVNULL).returncode
        except OSError as exc:
            raise HookIOError(f"Failed to spawn {self.shell} for cmd {self.command}: {exc}") from exc

        if status != 0:
            raise CommandFailedError(self.command, status)
        logger.info("hook.command_done command=%s", self.command)

    @staticmethod
    def _run_piped(argv: list[str], payload: str) -> int:
        # communicate() writes all of stdin, closes it, then waits; the context
        # manager reaps the child even if the write raises.
        with subprocess.Popen(argv, stdin=subprocess.PIPE, stdout=subprocess.DEVNULL) as proc:
            proc.communicate(payload.encode("utf-8"))
        return proc.returncode
