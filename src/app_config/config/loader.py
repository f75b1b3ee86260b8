from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import toml
import yaml
from dotenv import load_dotenv

from app_config.config.models import ConfigLoadRequest
from app_config.errors import ConfigError, ConfigParseError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def _read_document(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        raw = path.read_bytes().decode("utf-8")
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(raw)
        else:
            data = toml.loads(raw)
    except (UnicodeDecodeError, yaml.YAMLError, toml.TomlDecodeError) as e:
        raise ConfigParseError(str(path), e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(str(path), ValueError(f"top level must be a mapping, got: {type(data).__name__}"))
    return data


def _load_dotenv_if_present(dotenv_path: Path) -> None:
    if not dotenv_path.is_file():
        logger.debug("config.dotenv_missing path=%s", dotenv_path)
        return
    load_dotenv(dotenv_path=dotenv_path, override=False)


def _setting_path(env_var: str, prefix: str) -> tuple[str, ...]:
    """``APP_CONFIG__HOOKS__COMMAND__COMMAND`` -> ``("hooks", "command", "command")``."""
    path = tuple(part.lower() for part in env_var[len(prefix) :].split("__") if part)
    if not path:
        raise ConfigError(f"{env_var} does not name a setting")
    return path


def _override_setting(document: dict[str, Any], path: tuple[str, ...], value: str, env_var: str) -> None:
    """
    Replace one string setting that the document already defines.

    Only existing string values can be replaced, so an override can never add a hook or
    provider section, and a section keeps its position in the hook order.
    """
    dotted = ".".join(path)
    section: Any = document
    for part in path[:-1]:
        section = section.get(part) if isinstance(section, dict) else None
    setting = path[-1]

    if not isinstance(section, dict) or setting not in section:
        raise ConfigError(f"{env_var} overrides {dotted}, which is not set in the config file")
    if not isinstance(section[setting], str):
        raise ConfigError(
            f"{env_var} overrides {dotted}, which is a {type(section[setting]).__name__}; "
            "only string settings can be overridden"
        )
    section[setting] = value
    logger.info("config.env_override setting=%s source=%s", dotted, env_var)


class FileDocumentLoader:
    """Loads a TOML or YAML document, chosen by file suffix."""

    def load(self, request: ConfigLoadRequest) -> dict[str, Any]:
        path = Path(request.path).expanduser()
        document = _read_document(path)

        if request.dotenv_path is not None:
            _load_dotenv_if_present(Path(request.dotenv_path).expanduser())

        for env_var, value in sorted(os.environ.items()):
            if env_var.startswith(request.env_prefix):
                _override_setting(document, _setting_path(env_var, request.env_prefix), value, env_var)
        return document
