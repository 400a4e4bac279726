"""Contribution — one decoded, non-zero (bucket, value) pair."""

from __future__ import annotations

from dataclasses import dataclass

from contribution_decoder.core.convert import (
    bytes_to_int,
    int_to_binary,
    int_to_decimal,
)


@dataclass(frozen=True, slots=True)
class Contribution:
    """Immutable decoded record.

    ``to_dict()`` corresponds to ``contributions[]`` in
    ``decode_result.schema.json``.
    """

    index: int                 # position in the payload's ``data`` array
    bucket: bytes
    value: bytes
    bucket_in_binary: str
    value_in_binary: str
    bucket_in_decimal: str
    value_in_decimal: str

    @classmethod
    def from_parts(
        cls,
        index: int,
        bucket: bytes,
        value: bytes,
        *,
        value_int: int | None = None,
    ) -> "Contribution":
        """Derive the text columns from raw bytes.

        *value_int* lets the caller reuse an integer it already computed for
        the zero-value check. Raises whatever the integer rendering raises.
        """
        if value_int is None:
            value_int = bytes_to_int(value)
        bucket_int = bytes_to_int(bucket)
        return cls(
            index=index,
            bucket=bytes(bucket),
            value=bytes(value),
            bucket_in_binary=int_to_binary(bucket_int),
            value_in_binary=int_to_binary(value_int),
            bucket_in_decimal=int_to_decimal(bucket_int),
            value_in_decimal=int_to_decimal(value_int),
        )

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "bucketInBinary": self.bucket_in_binary,
            "valueInBinary": self.value_in_binary,
            "bucketInDecimal": self.bucket_in_decimal,
            "valueInDecimal": self.value_in_decimal,
        }

    def row(self) -> tuple[str, str, str, str]:
        """Cells in display-column order."""
        return (
            self.bucket_in_binary,
            self.value_in_binary,
            self.bucket_in_decimal,
            self.value_in_decimal,
        )
