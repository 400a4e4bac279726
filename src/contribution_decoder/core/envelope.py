"""Explicit shape checks for the decoded CBOR value.

The expected envelope is ``{"data": [{"bucket": b"...", "value": b"..."}, ...]}``.
Nothing is coerced: integers, text strings and tagged values in ``bucket`` or
``value`` are rejected.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

_SEQUENCE_TYPES = (list, tuple)
_BYTE_TYPES = (bytes, bytearray)


@dataclass(frozen=True, slots=True)
class ValidEnvelope:
    items: tuple


@dataclass(frozen=True, slots=True)
class StructuralError:
    reason: str
    got_type: str


EnvelopeCheck = Union[ValidEnvelope, StructuralError]


def _type_name(obj: Any) -> str:
    return "null" if obj is None else type(obj).__name__


def check_envelope(decoded: Any) -> EnvelopeCheck:
    """Return :class:`ValidEnvelope` or :class:`StructuralError` for *decoded*."""
    if not isinstance(decoded, Mapping):
        return StructuralError(
            reason="expected a map with a 'data' array at the top level",
            got_type=_type_name(decoded),
        )
    if "data" not in decoded:
        return StructuralError(
            reason="top-level map has no 'data' key",
            got_type=_type_name(decoded),
        )
    data = decoded["data"]
    if not isinstance(data, _SEQUENCE_TYPES):
        return StructuralError(
            reason="'data' is not an array",
            got_type=_type_name(data),
        )
    return ValidEnvelope(items=tuple(data))


def is_byte_string(obj: Any) -> bool:
    return isinstance(obj, _BYTE_TYPES)


def item_problem(item: Any) -> str | None:
    """Describe why *item* is not a ``{bucket, value}`` byte-string pair, or None."""
    if not isinstance(item, Mapping):
        return f"expected a map, got {_type_name(item)}"
    problems = []
    for key in ("bucket", "value"):
        if key not in item:
            problems.append(f"missing '{key}'")
        elif not is_byte_string(item[key]):
            problems.append(f"'{key}' is {_type_name(item[key])}, not a byte string")
    return "; ".join(problems) or None
