from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict


class MockSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    data: str

    def build(self) -> "MockProvider":
        return MockProvider(data=self.data)


@dataclass(frozen=True, slots=True)
class MockProvider:
    """
    A provider that always reports its fixed data as new.

    Useful for dialing in templates: every ``check`` feeds the same sample payload
    through the hooks. It keeps no cache.
    """

    name: ClassVar[str] = "mock"

    data: str

    def poll(self) -> Optional[str]:
        return self.data

    def query(self) -> str:
        return self.data

    def close(self) -> None:
        return None
