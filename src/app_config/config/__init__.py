from app_config.config.factory import build
from app_config.config.loader import FileDocumentLoader
from app_config.config.models import Config, ConfigLoadRequest, LoggingSettings

__all__ = ["Config", "ConfigLoadRequest", "FileDocumentLoader", "LoggingSettings", "build"]
