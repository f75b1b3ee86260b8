from __future__ import annotations

import logging
from typing import Any, Optional

from botocore.exceptions import BotoCoreError
from pydantic import BaseModel, ConfigDict

from app_config import aws
from app_config.errors import ProviderUnavailableError
from app_config.providers.base import CachedProvider
from app_config.store import Snapshot

logger = logging.getLogger(__name__)


class AppConfigSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    application: str
    environment: str
    configuration: str
    client_id: str
    state_file: Optional[str] = None
    region: Optional[str] = None

    def build(self, *, client: Any = None) -> "AppConfigProvider":
        return AppConfigProvider(self, client=client)


class AppConfigProvider(CachedProvider):
    """
    Watches an AWS AppConfig configuration.

    The last seen configuration version and content are cached locally, and the
    version is sent with every request so unchanged polls stay cheap.
    """

    name = "aws"
    table = "app_config"

    def __init__(self, settings: AppConfigSettings, *, client: Any = None) -> None:
        super().__init__(state_file=settings.state_file)
        self.settings = settings
        self._client = client

    def __repr__(self) -> str:
        s = self.settings
        return (
            f"AppConfigProvider(application={s.application!r}, environment={s.environment!r}, "
            f"configuration={s.configuration!r}, client_id={s.client_id!r})"
        )

    def _get_client(self) -> Any:
        if self._client is None:
            try:
                self._client = aws.appconfig_client(self.settings.region)
            except BotoCoreError as exc:
                raise ProviderUnavailableError(f"Error creating AppConfig client: {exc}") from exc
        return self._client

    def poll(self) -> Optional[str]:
        cached = self._store.read()
        result = aws.get_configuration(
            self._get_client(),
            application=self.settings.application,
            environment=self.settings.environment,
            configuration=self.settings.configuration,
            client_id=self.settings.client_id,
            current_version=cached.version,
        )

        if result.version == cached.version:
            logger.info("provider.unchanged provider=aws version=%s", cached.version)
            return None

        try:
            data = result.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ProviderUnavailableError(f"Configuration content is not valid UTF-8: {exc}") from exc

        logger.info("provider.changed provider=aws old_version=%s new_version=%s", cached.version, result.version)
        self._remember(Snapshot(version=result.version, data=data))
        return data
