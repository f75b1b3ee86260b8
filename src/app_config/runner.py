from __future__ import annotations

import logging
from typing import Sequence

from app_config.config.models import Config
from app_config.errors import HookError, HookPipelineError
from app_config.hooks.interfaces import Hook

logger = logging.getLogger(__name__)


def run_hooks(hooks: Sequence[Hook], payload: str) -> None:
    """Run hooks in order against one payload, stopping at the first failure."""
    for position, hook in enumerate(hooks, start=1):
        logger.debug("runner.hook_start position=%d hook=%s", position, hook.name)
        try:
            hook.run(payload)
        except HookError as exc:
            raise HookPipelineError(position, hook.name, exc) from exc


def check(config: Config) -> bool:
    """
    Poll the provider and, if it reports new data, run every hook on it.

    Returns whether new data was found.
    """
    payload = config.provider.poll()
    if payload is None:
        logger.info("runner.no_change provider=%s", config.provider.name)
        return False

    logger.info("runner.change_detected provider=%s hooks=%d", config.provider.name, len(config.hooks))
    run_hooks(config.hooks, payload)
    return True


def query(config: Config) -> str:
    """Return the provider's cached payload without contacting the source."""
    return config.provider.query()
