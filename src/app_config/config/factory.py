"""Builds the provider and hook pipeline from a parsed configuration document."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Type

from pydantic import BaseModel, ValidationError

from app_config.config.models import Config, LoggingSettings
from app_config.errors import (
    AmbiguousProviderError,
    InvalidSectionError,
    MissingProviderError,
    UnknownProviderError,
)
from app_config.hooks import CommandSettings, FileSettings, Hook, RawSettings, TemplateSettings
from app_config.providers import AppConfigSettings, MockSettings, ParamStoreSettings, Provider

logger = logging.getLogger(__name__)

PROVIDERS: Mapping[str, Type[BaseModel]] = {
    "mock": MockSettings,
    "aws": AppConfigSettings,
    "param_store": ParamStoreSettings,
}

HOOKS: Mapping[str, Type[BaseModel]] = {
    "template": TemplateSettings,
    "file": FileSettings,
    "raw": RawSettings,
    "command": CommandSettings,
}


def _section(document: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = document[name]
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidSectionError(name, f"expected a table, got {type(value).__name__}")
    return value


def _validate(model: Type[BaseModel], section: str, raw: Any) -> Any:
    try:
        return model.model_validate({} if raw is None else raw)
    except ValidationError as exc:
        raise InvalidSectionError(section, exc) from exc


def parse_provider_settings(document: Mapping[str, Any]) -> BaseModel:
    """Validate the ``providers`` section, which must name exactly one known provider."""
    if "providers" not in document:
        raise MissingProviderError()
    providers = _section(document, "providers")
    names = list(providers)
    if not names:
        raise MissingProviderError()
    if len(names) > 1:
        raise AmbiguousProviderError(names)

    name = names[0]
    model = PROVIDERS.get(name)
    if model is None:
        raise UnknownProviderError(name, list(PROVIDERS))
    return _validate(model, name, providers[name])


def parse_hook_settings(document: Mapping[str, Any]) -> list[BaseModel]:
    """
    Validate hook sections in document order.

    Unknown hook names are skipped rather than rejected, unlike providers.
    """
    if "hooks" not in document:
        return []
    settings: list[BaseModel] = []
    for name, raw in _section(document, "hooks").items():
        model = HOOKS.get(name)
        if model is None:
            logger.warning("config.unknown_hook_skipped hook=%s known=%s", name, ",".join(HOOKS))
            continue
        settings.append(_validate(model, name, raw))
    return settings


def parse_logging_settings(document: Mapping[str, Any]) -> LoggingSettings:
    if "logging" not in document:
        return LoggingSettings()
    return _validate(LoggingSettings, "logging", document["logging"])


def build(document: Mapping[str, Any]) -> Config:
    """
    Turn a parsed document into one provider and its ordered hooks.

    Every section is validated before anything is constructed, so a bad hook never
    leaves a provider's cache open behind it.
    """
    provider_settings = parse_provider_settings(document)
    hook_settings = parse_hook_settings(document)
    logging_settings = parse_logging_settings(document)

    hooks: list[Hook] = [s.build() for s in hook_settings]
    provider: Provider = provider_settings.build()
    logger.debug(
        "config.built provider=%s hooks=%s",
        provider.name,
        ",".join(h.name for h in hooks) or "-",
    )
    return Config(provider=provider, hooks=tuple(hooks), logging=logging_settings)
