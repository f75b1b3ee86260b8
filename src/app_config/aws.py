"""Blocking calls to AWS AppConfig and SSM Parameter Store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app_config.errors import ParameterNotFoundError, ProviderUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConfigurationResult:
    version: int
    content: bytes


def appconfig_client(region: Optional[str] = None) -> Any:
    return boto3.client("appconfig", region_name=region)


def ssm_client(region: Optional[str] = None) -> Any:
    return boto3.client("ssm", region_name=region)


def get_configuration(
    client: Any,
    *,
    application: str,
    environment: str,
    configuration: str,
    client_id: str,
    current_version: int,
) -> ConfigurationResult:
    """
    Fetch a configuration from AppConfig.

    ``current_version`` is sent as the client's version so the service can return an
    empty body when nothing changed.
    """
    try:
        response = client.get_configuration(
            Application=application,
            Environment=environment,
            Configuration=configuration,
            ClientId=client_id,
            ClientConfigurationVersion=str(current_version),
        )
    except (BotoCoreError, ClientError) as exc:
        raise ProviderUnavailableError(f"An error occurred when trying to fetch configuration: {exc}") from exc

    raw_version = response.get("ConfigurationVersion")
    if raw_version is None:
        raise ProviderUnavailableError("An error occurred - no data received.")
    try:
        version = int(raw_version)
    except (TypeError, ValueError) as exc:
        raise ProviderUnavailableError(f"Unexpected configuration version: {raw_version!r}") from exc
    if version < 0:
        raise ProviderUnavailableError(f"Unexpected configuration version: {raw_version!r}")

    body = response.get("Content")
    if body is None:
        content = b""
    elif isinstance(body, (bytes, bytearray)):
        content = bytes(body)
    else:
        try:
            content = body.read()
        except (BotoCoreError, OSError) as exc:
            raise ProviderUnavailableError(f"Error reading configuration content: {exc}") from exc

    logger.debug(
        "aws.get_configuration application=%s environment=%s version=%s bytes=%d",
        application,
        environment,
        version,
        len(content),
    )
    return ConfigurationResult(version=version, content=content)


def get_parameter(
    key: str,
    *,
    client: Any = None,
    region: Optional[str] = None,
    with_decryption: bool = True,
) -> str:
    if client is None:
        try:
            client = ssm_client(region)
        except BotoCoreError as exc:
            raise ProviderUnavailableError(f"Error creating SSM client: {exc}") from exc
    try:
        response = client.get_parameters(Names=[key], WithDecryption=with_decryption)
    except (BotoCoreError, ClientError) as exc:
        raise ProviderUnavailableError(f"Error when fetching parameter {key}: {exc}") from exc

    parameters = response.get("Parameters") or []
    if not parameters:
        raise ParameterNotFoundError(key)
    value = parameters[-1].get("Value")
    if value is None:
        raise ProviderUnavailableError(f"Parameter Store value empty: {key}")
    return value
