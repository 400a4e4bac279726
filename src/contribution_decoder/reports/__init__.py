"""Renderers and output sinks for decoded contributions."""

from contribution_decoder.reports.exporters import (
    export_contributions,
    export_error,
)
from contribution_decoder.reports.sink import (
    CallbackSink,
    MemorySink,
    OutputSink,
    StreamSink,
)

__all__ = [
    "export_contributions",
    "export_error",
    "OutputSink",
    "StreamSink",
    "MemorySink",
    "CallbackSink",
]
