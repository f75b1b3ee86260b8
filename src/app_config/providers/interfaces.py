from __future__ import annotations

from typing import Optional, Protocol


class Provider(Protocol):
    """
    A source of configuration data with change detection.

    ``poll`` contacts the source and returns the payload only when it differs from the
    cached snapshot. ``query`` returns the cached payload without contacting the source.
    """

    name: str

    def poll(self) -> Optional[str]:
        ...

    def query(self) -> str:
        ...

    def close(self) -> None:
        ...
