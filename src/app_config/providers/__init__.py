"""Configuration sources with local change detection."""

from app_config.providers.appconfig import AppConfigProvider, AppConfigSettings
from app_config.providers.interfaces import Provider
from app_config.providers.mock import MockProvider, MockSettings
from app_config.providers.param_store import ParamStoreProvider, ParamStoreSettings

__all__ = [
    "AppConfigProvider",
    "AppConfigSettings",
    "MockProvider",
    "MockSettings",
    "ParamStoreProvider",
    "ParamStoreSettings",
    "Provider",
]
