from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Process exit statuses, following the BSD sysexits convention."""

    OK = 0
    UNAVAILABLE = 69
    SOFTWARE = 70
    OSFILE = 72
    CANTCREAT = 73
    CONFIG = 78


class AppConfigError(Exception):
    """Base error. The CLI maps each subclass to its exit status."""

    exit_code: ExitCode = ExitCode.SOFTWARE


# Configuration


class ConfigError(AppConfigError):
    exit_code = ExitCode.CONFIG


class ConfigParseError(ConfigError):
    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__(f"Could not parse {path}: {cause}")
        self.path = path
        self.cause = cause


class MissingProviderError(ConfigError):
    def __init__(self) -> None:
        super().__init__("Configuration must include a backend provider")


class AmbiguousProviderError(ConfigError):
    def __init__(self, names: list[str]) -> None:
        super().__init__(f"Configuration must include only one backend provider, found: {', '.join(names)}")
        self.names = names


class UnknownProviderError(ConfigError):
    def __init__(self, name: str, known: list[str]) -> None:
        super().__init__(f"Unknown provider '{name}'. Expected one of: {', '.join(known)}")
        self.name = name


class InvalidSectionError(ConfigError):
    def __init__(self, section: str, cause: object) -> None:
        super().__init__(f"Could not parse {section} config: {cause}")
        self.section = section
        self.cause = cause


# Providers


class ProviderError(AppConfigError):
    pass


class ProviderUnavailableError(ProviderError):
    exit_code = ExitCode.UNAVAILABLE


class ParameterNotFoundError(ProviderUnavailableError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Parameter not found: {key}")
        self.key = key


class StoreInitError(ProviderError):
    exit_code = ExitCode.CANTCREAT


class CacheUnavailableError(ProviderError):
    pass


# Hooks


class HookError(AppConfigError):
    pass


class HookIOError(HookError):
    pass


class RenderError(HookError):
    pass


class DeserializeError(HookError):
    pass


class CommandFailedError(HookError):
    def __init__(self, command: str, status: Optional[int]) -> None:
        super().__init__(f"Failed to execute cmd: {command} (exit status {status})")
        self.command = command
        self.status = status


class HookPipelineError(HookError):
    """A hook failed; hooks after it in the pipeline were not run."""

    def __init__(self, position: int, hook: str, cause: HookError) -> None:
        super().__init__(f"Error running hook #{position} ({hook}): {cause}")
        self.position = position
        self.hook = hook
        self.cause = cause
