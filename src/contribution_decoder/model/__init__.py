"""Enums shared across the decoder, diagnostics and report layers."""

from __future__ import annotations

from enum import Enum


class SkipReason(str, Enum):
    """Why a payload (or one of its items) produced no output rows."""

    STRUCTURE_MISMATCH = "structure_mismatch"
    INVALID_ITEM = "invalid_item"
    ZERO_VALUE = "zero_value"
    CONVERSION_ERROR = "conversion_error"
