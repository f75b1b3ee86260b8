from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class RawSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def build(self) -> "RawHook":
        return RawHook()


@dataclass(frozen=True, slots=True)
class RawHook:
    """Prints the payload to stdout as received."""

    name: ClassVar[str] = "raw"

    def run(self, payload: str) -> None:
        print(payload)
