"""Diagnostic channel injected into the decoder.

The decoder never prints; every skipped item and structural mismatch is
reported as a :class:`~contribution_decoder.model.diagnostic.Diagnostic` to
whatever sink the caller passes in.

Usage::

    from contribution_decoder.diagnostics import CollectingDiagnostics

    diags = CollectingDiagnostics()
    decode_payload(payload, diagnostics=diags)
    assert diags.reasons() == [SkipReason.ZERO_VALUE]
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, runtime_checkable

from contribution_decoder.model import SkipReason
from contribution_decoder.model.diagnostic import Diagnostic

logger = logging.getLogger(__name__)

__all__ = [
    "DiagnosticSink",
    "LoggingDiagnostics",
    "CollectingDiagnostics",
    "FanOutDiagnostics",
]

_LEVELS = {
    SkipReason.STRUCTURE_MISMATCH: logging.ERROR,
    SkipReason.INVALID_ITEM: logging.WARNING,
    SkipReason.ZERO_VALUE: logging.INFO,
    SkipReason.CONVERSION_ERROR: logging.ERROR,
}


@runtime_checkable
class DiagnosticSink(Protocol):
    def report(self, diagnostic: Diagnostic) -> None: ...


class LoggingDiagnostics:
    """Default sink: forwards each diagnostic to :mod:`logging`."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def report(self, diagnostic: Diagnostic) -> None:
        level = _LEVELS.get(diagnostic.reason, logging.WARNING)
        if diagnostic.index is None:
            self._log.log(level, "%s", diagnostic.message)
        else:
            self._log.log(
                level,
                "item %d: %s (item: %r)",
                diagnostic.index,
                diagnostic.message,
                diagnostic.item,
                exc_info=diagnostic.error,
            )


class CollectingDiagnostics:
    """Keeps every diagnostic in memory (tests, API responses)."""

    def __init__(self) -> None:
        self.items: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)

    def reasons(self) -> list[SkipReason]:
        return [d.reason for d in self.items]

    def indices(self, reason: SkipReason | None = None) -> list[int]:
        return [
            d.index
            for d in self.items
            if d.index is not None and (reason is None or d.reason == reason)
        ]

    def __len__(self) -> int:
        return len(self.items)


class FanOutDiagnostics:
    """Forwards each diagnostic to several sinks, in order."""

    def __init__(self, sinks: Iterable[DiagnosticSink]) -> None:
        self._sinks = list(sinks)

    def report(self, diagnostic: Diagnostic) -> None:
        for sink in self._sinks:
            sink.report(diagnostic)
