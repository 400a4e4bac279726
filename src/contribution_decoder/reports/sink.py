"""Output sinks: where a rendered contribution table goes.

The decoder knows nothing about displays. ``run_decoder`` hands the
finished list (or the fatal error) to an :class:`OutputSink`. Each call
replaces what the sink showed before, so when two runs overlap the one
that finishes last wins.
"""

from __future__ import annotations

from typing import IO, Callable, Optional, Protocol, Sequence, runtime_checkable

from contribution_decoder.model.contribution import Contribution
from contribution_decoder.reports.exporters import export_contributions, export_error


@runtime_checkable
class OutputSink(Protocol):
    def render(self, contributions: Sequence[Contribution]) -> None: ...

    def render_error(self, exc: BaseException) -> None: ...


class StreamSink:
    """Writes each rendering to a text stream (stdout, a file...)."""

    def __init__(self, stream: IO[str], fmt: str = "text", **export_kwargs) -> None:
        self.stream = stream
        self.fmt = fmt
        self._kwargs = export_kwargs

    def render(self, contributions: Sequence[Contribution]) -> None:
        self.stream.write(export_contributions(contributions, self.fmt, **self._kwargs))

    def render_error(self, exc: BaseException) -> None:
        self.stream.write(export_error(exc, self.fmt))


class MemorySink:
    """Keeps only the latest rendering, like a table body being overwritten."""

    def __init__(self, fmt: str = "text", **export_kwargs) -> None:
        self.fmt = fmt
        self._kwargs = export_kwargs
        self.contributions: list[Contribution] = []
        self.error: Optional[BaseException] = None
        self.text = ""
        self.renders = 0

    def render(self, contributions: Sequence[Contribution]) -> None:
        self.contributions = list(contributions)
        self.error = None
        self.text = export_contributions(self.contributions, self.fmt, **self._kwargs)
        self.renders += 1

    def render_error(self, exc: BaseException) -> None:
        self.contributions = []
        self.error = exc
        self.text = export_error(exc, self.fmt)
        self.renders += 1


class CallbackSink:
    """Adapts two plain callables to the :class:`OutputSink` protocol."""

    def __init__(
        self,
        on_render: Callable[[Sequence[Contribution]], None],
        on_error: Optional[Callable[[BaseException], None]] = None,
    ) -> None:
        self._on_render = on_render
        self._on_error = on_error

    def render(self, contributions: Sequence[Contribution]) -> None:
        self._on_render(contributions)

    def render_error(self, exc: BaseException) -> None:
        if self._on_error is None:
            raise exc
        self._on_error(exc)
