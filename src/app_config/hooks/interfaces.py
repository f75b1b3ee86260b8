from __future__ import annotations

from typing import Protocol


class Hook(Protocol):
    """An action run once for each newly detected payload."""

    name: str

    def run(self, payload: str) -> None:
        """Perform the side effect. Raise a ``HookError`` on failure."""
