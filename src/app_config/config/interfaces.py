from __future__ import annotations

from typing import Any, Protocol

from app_config.config.models import ConfigLoadRequest


class DocumentLoader(Protocol):
    """
    Reads a configuration document into plain, insertion-ordered mappings.

    Key order must match the source text: hook execution order depends on it.
    """

    def load(self, request: ConfigLoadRequest) -> dict[str, Any]:
        ...
