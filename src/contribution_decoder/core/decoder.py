"""Payload decode pipeline.

    base64 text ──► raw bytes ──► first CBOR item ──► envelope check
                                                        │
                         per item: shape check → zero filter → text columns

Only the first two steps can fail the whole payload (``PayloadError``).
Everything after them is absorbed into fewer output records, with one
diagnostic per skipped item.
"""

from __future__ import annotations

import asyncio
import base64
import io
import logging
from typing import Any, Optional

import cbor2

from contribution_decoder.core.convert import bytes_to_int
from contribution_decoder.core.envelope import (
    StructuralError,
    check_envelope,
    item_problem,
)
from contribution_decoder.core.errors import Base64DecodeError, CBORPayloadError
from contribution_decoder.diagnostics import DiagnosticSink, LoggingDiagnostics
from contribution_decoder.model import SkipReason
from contribution_decoder.model.contribution import Contribution
from contribution_decoder.model.diagnostic import Diagnostic

logger = logging.getLogger(__name__)

# atob() tolerates ASCII whitespace and missing trailing padding; strict b64decode does not.
_WHITESPACE = str.maketrans("", "", " \t\n\r\f")


# ── envelope steps (fatal on failure) ───────────────────────────────


def b64_to_bytes(payload: str) -> bytes:
    """Standard-alphabet, strict base64 decode; trailing ``=`` padding is optional."""
    if not isinstance(payload, str):
        raise Base64DecodeError(
            f"payload must be text, got {type(payload).__name__}"
        )
    text = payload.translate(_WHITESPACE)
    # A length of 1 mod 4 can never be valid, padded or not.
    if "=" not in text and len(text) % 4 in (2, 3):
        text += "=" * (4 - len(text) % 4)
    try:
        return base64.b64decode(text, validate=True)
    except ValueError as e:  # binascii.Error, or non-ASCII text
        raise Base64DecodeError(f"invalid base64 payload: {e}") from e


def cbor_first_item(raw: bytes) -> Any:
    """Decode the first top-level CBOR item in *raw*; trailing items are ignored."""
    try:
        return cbor2.CBORDecoder(io.BytesIO(raw)).decode()
    except cbor2.CBORDecodeError as e:
        raise CBORPayloadError(f"invalid CBOR payload: {e}") from e


# ── per-item transform ──────────────────────────────────────────────


def contributions_from(
    decoded: Any,
    diagnostics: Optional[DiagnosticSink] = None,
) -> list[Contribution]:
    """Validate, filter and convert the items of a decoded envelope.

    Order of surviving items is the order of ``data``. Never raises for
    malformed content.
    """
    sink = diagnostics if diagnostics is not None else LoggingDiagnostics()

    check = check_envelope(decoded)
    if isinstance(check, StructuralError):
        sink.report(
            Diagnostic(
                reason=SkipReason.STRUCTURE_MISMATCH,
                message=(
                    "decoded CBOR structure mismatch, expected {data: [...]}: "
                    f"{check.reason} (got {check.got_type})"
                ),
                item=decoded,
            )
        )
        return []

    out: list[Contribution] = []
    for index, item in enumerate(check.items):
        problem = item_problem(item)
        if problem is not None:
            sink.report(
                Diagnostic(
                    reason=SkipReason.INVALID_ITEM,
                    message=f"skipping invalid item: {problem}",
                    index=index,
                    item=item,
                )
            )
            continue

        value_int = bytes_to_int(item["value"])
        if value_int == 0:
            sink.report(
                Diagnostic(
                    reason=SkipReason.ZERO_VALUE,
                    message="filtering out contribution with zero value",
                    index=index,
                    item=item,
                )
            )
            continue

        try:
            out.append(
                Contribution.from_parts(
                    index, item["bucket"], item["value"], value_int=value_int
                )
            )
        except Exception as e:
            sink.report(
                Diagnostic(
                    reason=SkipReason.CONVERSION_ERROR,
                    message=f"error processing item: {e}",
                    index=index,
                    item=item,
                    error=e,
                )
            )

    logger.debug(
        "decoded %d of %d contribution(s)", len(out), len(check.items)
    )
    return out


# ── entrypoints ─────────────────────────────────────────────────────


def decode(
    payload: str,
    diagnostics: Optional[DiagnosticSink] = None,
) -> list[Contribution]:
    raw = b64_to_bytes(payload)
    return contributions_from(cbor_first_item(raw), diagnostics)


async def decode_async(
    payload: str,
    diagnostics: Optional[DiagnosticSink] = None,
) -> list[Contribution]:
    """Same as :func:`decode`; suspends only while the CBOR item is decoded."""
    raw = b64_to_bytes(payload)
    decoded = await asyncio.to_thread(cbor_first_item, raw)
    return contributions_from(decoded, diagnostics)
