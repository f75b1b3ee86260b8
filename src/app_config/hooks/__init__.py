"""Actions run against newly detected configuration data."""

from app_config.hooks.command import CommandHook, CommandSettings
from app_config.hooks.file import FileHook, FileSettings
from app_config.hooks.interfaces import Hook
from app_config.hooks.raw import RawHook, RawSettings
from app_config.hooks.template import TemplateHook, TemplateSettings

__all__ = [
    "CommandHook",
    "CommandSettings",
    "FileHook",
    "FileSettings",
    "Hook",
    "RawHook",
    "RawSettings",
    "TemplateHook",
    "TemplateSettings",
]
