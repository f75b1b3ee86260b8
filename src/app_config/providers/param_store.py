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


class ParamStoreSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    state_file: Optional[str] = None
    region: Optional[str] = None
    with_decryption: bool = True

    def build(self, *, client: Any = None) -> "ParamStoreProvider":
        return ParamStoreProvider(self, client=client)


class ParamStoreProvider(CachedProvider):
    """
    Watches a single SSM Parameter Store value.

    The service offers no version token here, so the cached value itself is the
    identity: a poll reports new data whenever the text differs.
    """

    name = "param_store"
    table = "param_store"

    def __init__(self, settings: ParamStoreSettings, *, client: Any = None) -> None:
        super().__init__(state_file=settings.state_file)
        self.settings = settings
        self._client = client

    def __repr__(self) -> str:
        return f"ParamStoreProvider(key={self.settings.key!r})"

    def _get_client(self) -> Any:
        if self._client is None:
            try:
                self._client = aws.ssm_client(self.settings.region)
            except BotoCoreError as exc:
                raise ProviderUnavailableError(f"Error creating SSM client: {exc}") from exc
        return self._client

    def poll(self) -> Optional[str]:
        value = aws.get_parameter(
            self.settings.key,
            client=self._get_client(),
            with_decryption=self.settings.with_decryption,
        )

        cached = self._store.read()
        if value == cached.data:
            logger.info("provider.unchanged provider=param_store key=%s", self.settings.key)
            return None

        logger.info("provider.changed provider=param_store key=%s", self.settings.key)
        self._remember(Snapshot(version=cached.version + 1, data=value))
        return value
