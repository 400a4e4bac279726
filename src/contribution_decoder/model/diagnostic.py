"""Diagnostic — a non-fatal decode event reported through the diagnostic channel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from . import SkipReason


@dataclass(frozen=True, slots=True)
class Diagnostic:
    reason: SkipReason
    message: str
    index: Optional[int] = None   # None for whole-payload events
    item: Any = None
    error: Optional[BaseException] = None

    def to_dict(self) -> dict:
        d: dict = {"reason": self.reason.value, "message": self.message}
        if self.index is not None:
            d["index"] = self.index
        return d
