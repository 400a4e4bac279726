"""
contribution_decoder.api
========================

Programmatic entrypoints for decoding contribution payloads.

Goals:
  - No argparse / HTTP dependencies
  - Diagnostics and output go to injected sinks, never straight to stdout
  - Fatal payload errors are exceptions; everything else is "fewer rows"

Non-goals:
  - Encoding payloads
  - Owning presentation — callers pick a sink / export format

Usage::

    from contribution_decoder.api import decode_payload, run_decoder
    from contribution_decoder.reports import StreamSink

    rows = decode_payload("oWRkYXRhgaJmYnVja2V0QQFldmFsdWVBAg==")
    result = run_decoder(payload, StreamSink(sys.stdout, "markdown"))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from contribution_decoder.core import decoder as _decoder
from contribution_decoder.core.errors import PayloadError
from contribution_decoder.diagnostics import (
    CollectingDiagnostics,
    DiagnosticSink,
    FanOutDiagnostics,
    LoggingDiagnostics,
)
from contribution_decoder.model.contribution import Contribution
from contribution_decoder.model.diagnostic import Diagnostic
from contribution_decoder.reports.sink import OutputSink

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DecodeResult:
    """Outcome of one :func:`run_decoder` call.

    ``error`` is set only for fatal payload errors, which keeps
    "could not decode" apart from "decoded, nothing to show".
    """

    contributions: list[Contribution] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    error: Optional[PayloadError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def empty(self) -> bool:
        return self.ok and not self.contributions


# ── decode_payload ──────────────────────────────────────────────────


def decode_payload(
    payload: str,
    *,
    diagnostics: Optional[DiagnosticSink] = None,
) -> list[Contribution]:
    """Decode a base64 CBOR payload into non-zero contributions.

    Parameters
    ----------
    payload:
        Standard base64 of a CBOR map ``{data: [{bucket, value}, ...]}``.
    diagnostics:
        Receives one diagnostic per skipped item (and for a structural
        mismatch). Defaults to logging.

    Returns
    -------
    Surviving contributions in payload order; empty when the envelope has
    no ``data`` array or every item was skipped.

    Raises
    ------
    Base64DecodeError
        If *payload* is not valid base64.
    CBORPayloadError
        If the decoded bytes are not CBOR.
    """
    return _decoder.decode(payload, diagnostics)


async def decode_payload_async(
    payload: str,
    *,
    diagnostics: Optional[DiagnosticSink] = None,
) -> list[Contribution]:
    """Awaitable :func:`decode_payload`; the CBOR step runs off the event loop."""
    return await _decoder.decode_async(payload, diagnostics)


# ── run_decoder ─────────────────────────────────────────────────────


def run_decoder(
    payload: Optional[str],
    sink: OutputSink,
    *,
    diagnostics: Optional[DiagnosticSink] = None,
) -> DecodeResult:
    """Decode *payload* and render the outcome into *sink*.

    The sink is cleared first. A blank payload leaves it in the "no data"
    state. Fatal payload errors are rendered with ``sink.render_error`` and
    returned in ``DecodeResult.error`` instead of being raised.
    """
    collected = CollectingDiagnostics()
    fan_out = FanOutDiagnostics(
        [collected, diagnostics if diagnostics is not None else LoggingDiagnostics()]
    )

    sink.render([])

    if not payload or not payload.strip():
        logger.info("input payload is empty")
        return DecodeResult()

    try:
        contributions = _decoder.decode(payload, fan_out)
    except PayloadError as e:
        logger.error("error during decoding: %s", e)
        sink.render_error(e)
        return DecodeResult(diagnostics=collected.items, error=e)

    sink.render(contributions)
    return DecodeResult(contributions=contributions, diagnostics=collected.items)


# ── validate_instance ──────────────────────────────────────────────


def validate_instance(instance: dict[str, Any], schema_name: str) -> None:
    """Validate a dict (e.g. a JSON export) against a bundled schema.

    Raises
    ------
    jsonschema.ValidationError
        If validation fails.
    """
    from contribution_decoder.contracts.load import validate_instance as _validate

    _validate(instance, schema_name)
