"""Tests for the decode pipeline: base64 → CBOR → filtered contributions."""

from __future__ import annotations

import base64
import logging

import cbor2
import pytest

from contribution_decoder.core.decoder import (
    b64_to_bytes,
    cbor_first_item,
    contributions_from,
    decode,
)
from contribution_decoder.core.errors import (
    Base64DecodeError,
    CBORPayloadError,
    PayloadError,
)
from contribution_decoder.diagnostics import CollectingDiagnostics
from contribution_decoder.model import SkipReason


def _payload(obj) -> str:
    return base64.b64encode(cbor2.dumps(obj)).decode("ascii")


def _item(bucket: bytes, value: bytes) -> dict:
    return {"bucket": bucket, "value": value}


# ── worked examples ─────────────────────────────────────────────────


class TestWorkedExamples:
    def test_single_pair(self) -> None:
        rows = decode(_payload({"data": [_item(b"\x01", b"\x02")]}))
        assert len(rows) == 1
        row = rows[0]
        assert row.bucket_in_binary == "1"
        assert row.value_in_binary == "10"
        assert row.bucket_in_decimal == "1"
        assert row.value_in_decimal == "2"

    def test_known_literal_payload(self) -> None:
        rows = decode("oWRkYXRhgaJmYnVja2V0QQFldmFsdWVBAg==")
        assert [r.to_dict() for r in rows] == [
            {
                "index": 0,
                "bucketInBinary": "1",
                "valueInBinary": "10",
                "bucketInDecimal": "1",
                "valueInDecimal": "2",
            }
        ]

    def test_zero_value_filtered(self) -> None:
        assert decode(_payload({"data": [_item(b"\x00", b"\x00")]})) == []

    def test_middle_zero_filtered_order_kept(self) -> None:
        payload = _payload(
            {
                "data": [
                    _item(b"\xff", b"\x01"),
                    _item(b"\x00", b"\x00"),
                    _item(b"\x10", b"\x10"),
                ]
            }
        )
        rows = decode(payload)
        assert [r.index for r in rows] == [0, 2]
        assert rows[0].bucket_in_decimal == "255"
        assert rows[0].bucket_in_binary == "11111111"
        assert rows[1].bucket_in_binary == "10000"
        assert rows[1].value_in_decimal == "16"


# ── filtering invariants ────────────────────────────────────────────


class TestFiltering:
    def test_zero_value_dropped_regardless_of_bucket(self) -> None:
        payload = _payload(
            {
                "data": [
                    _item(b"\xff" * 16, b""),
                    _item(b"\x01", b"\x00\x00\x00\x00"),
                ]
            }
        )
        assert decode(payload) == []

    def test_empty_bucket_is_zero_bucket(self) -> None:
        (row,) = decode(_payload({"data": [_item(b"", b"\x07")]}))
        assert row.bucket_in_binary == "0"
        assert row.bucket_in_decimal == "0"
        assert row.value_in_binary == "111"

    def test_output_never_longer_than_input(self) -> None:
        data = [
            _item(b"\x01", b"\x01"),
            {"bucket": 1, "value": b"\x01"},
            _item(b"\x02", b"\x00"),
            "junk",
            _item(b"\x03", b"\x03"),
        ]
        rows = decode(_payload({"data": data}))
        assert len(rows) <= len(data)
        assert [r.index for r in rows] == [0, 4]

    def test_all_kept_means_equal_length(self) -> None:
        data = [_item(bytes([i]), bytes([i])) for i in range(1, 6)]
        assert len(decode(_payload({"data": data}))) == len(data)

    def test_large_integers(self) -> None:
        bucket = (2**127 + 5).to_bytes(16, "big")
        value = (2**64).to_bytes(9, "big")
        (row,) = decode(_payload({"data": [_item(bucket, value)]}))
        assert row.bucket_in_decimal == str(2**127 + 5)
        assert row.value_in_binary == "1" + "0" * 64
        assert int(row.bucket_in_binary, 2) == 2**127 + 5

    def test_leading_zero_bytes_do_not_change_value(self) -> None:
        (row,) = decode(_payload({"data": [_item(b"\x00\x00\x01", b"\x00\x02")]}))
        assert row.bucket_in_binary == "1"
        assert row.value_in_decimal == "2"

    def test_raw_bytes_kept_on_record(self) -> None:
        (row,) = decode(_payload({"data": [_item(b"\x00\x01", b"\x02")]}))
        assert row.bucket == b"\x00\x01"
        assert row.value == b"\x02"


# ── diagnostics ─────────────────────────────────────────────────────


class TestDiagnostics:
    def test_skip_reasons_and_indices(self) -> None:
        diags = CollectingDiagnostics()
        data = [
            _item(b"\x01", b"\x01"),
            {"bucket": b"\x01"},
            _item(b"\x01", b"\x00"),
            {"bucket": "01", "value": b"\x01"},
        ]
        rows = decode(_payload({"data": data}), diags)
        assert [r.index for r in rows] == [0]
        assert diags.reasons() == [
            SkipReason.INVALID_ITEM,
            SkipReason.ZERO_VALUE,
            SkipReason.INVALID_ITEM,
        ]
        assert diags.indices(SkipReason.INVALID_ITEM) == [1, 3]
        assert diags.indices(SkipReason.ZERO_VALUE) == [2]

    def test_structure_mismatch_reported_once(self) -> None:
        diags = CollectingDiagnostics()
        assert decode(_payload({"rows": []}), diags) == []
        assert diags.reasons() == [SkipReason.STRUCTURE_MISMATCH]
        assert diags.items[0].index is None
        assert "expected {data: [...]}" in diags.items[0].message

    def test_non_map_top_level_is_not_fatal(self) -> None:
        diags = CollectingDiagnostics()
        assert decode(_payload([1, 2, 3]), diags) == []
        assert diags.reasons() == [SkipReason.STRUCTURE_MISMATCH]

    def test_valid_payload_has_no_diagnostics(self) -> None:
        diags = CollectingDiagnostics()
        decode(_payload({"data": [_item(b"\x01", b"\x01")]}), diags)
        assert len(diags) == 0

    def test_conversion_failure_skips_only_that_item(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        import contribution_decoder.model.contribution as contribution_mod

        real = contribution_mod.int_to_decimal

        def failing(n: int) -> str:
            if n == 0xBAD:
                raise ArithmeticError("cannot render")
            return real(n)

        monkeypatch.setattr(contribution_mod, "int_to_decimal", failing)
        diags = CollectingDiagnostics()
        data = [_item(b"\x0b\xad", b"\x01"), _item(b"\x01", b"\x01")]
        rows = decode(_payload({"data": data}), diags)
        assert [r.index for r in rows] == [1]
        assert diags.reasons() == [SkipReason.CONVERSION_ERROR]
        assert diags.items[0].index == 0
        assert isinstance(diags.items[0].error, ArithmeticError)

    def test_values_past_int_str_limit_are_kept(self) -> None:
        # 2000 bytes is ~4800 decimal digits, over the default str() limit.
        huge = b"\xff" * 2000
        diags = CollectingDiagnostics()
        (row,) = decode(_payload({"data": [_item(huge, huge)]}), diags)
        assert len(diags) == 0
        n = 2 ** (8 * 2000) - 1
        text = row.value_in_decimal
        assert text.isdigit() and text[0] != "0"
        assert 10 ** (len(text) - 1) <= n < 10 ** len(text)
        assert int(text[-30:]) == n % 10**30
        assert row.bucket_in_decimal == text
        assert row.value_in_binary == "1" * 16000

    def test_default_sink_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="contribution_decoder"):
            decode(_payload({"data": [_item(b"\x01", b"\x00"), {"x": 1}]}))
        text = caplog.text
        assert "item 0: filtering out contribution with zero value" in text
        assert "item 1: skipping invalid item" in text
        assert "(item: {'x': 1})" in text


# ── fatal errors ────────────────────────────────────────────────────


class TestFatalErrors:
    @pytest.mark.parametrize("bad", ["@@@@", "abc$", "a===", "ab=c"])
    def test_malformed_base64_raises(self, bad: str) -> None:
        with pytest.raises(Base64DecodeError):
            decode(bad)

    def test_base64_error_is_payload_error(self) -> None:
        with pytest.raises(PayloadError, match="invalid base64"):
            decode("not base64!")

    @pytest.mark.parametrize("strip", [1, 2])
    def test_missing_padding_tolerated(self, strip: int) -> None:
        raw = cbor2.dumps({"data": [_item(b"\x01", b"\x02")]})
        # pad raw so the encoding ends in exactly `strip` '=' characters
        raw += b"\x00" * ((3 - len(raw) % 3 - strip) % 3)
        payload = base64.b64encode(raw).decode("ascii")
        assert payload.endswith("=" * strip) and not payload.endswith("=" * (strip + 1))
        rows = decode(payload.rstrip("="))
        assert [r.value_in_decimal for r in rows] == ["2"]

    def test_unpadded_length_one_mod_four_is_fatal(self) -> None:
        with pytest.raises(Base64DecodeError):
            decode("oWRkY")

    def test_whitespace_tolerated(self) -> None:
        payload = _payload({"data": [_item(b"\x01", b"\x02")]})
        wrapped = payload[:8] + "\n" + payload[8:] + "\n"
        assert len(decode(wrapped)) == 1

    def test_non_text_payload_rejected(self) -> None:
        with pytest.raises(Base64DecodeError, match="must be text"):
            b64_to_bytes(b"oWRkYXRh")  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "raw",
        [
            b"",                      # nothing to decode
            b"\xa1\x64dat",           # truncated map key
            b"\x5a\x00\x00",          # truncated byte-string length
            b"\x1c",                  # reserved additional-info value
        ],
    )
    def test_undecodable_cbor_raises(self, raw: bytes) -> None:
        with pytest.raises(CBORPayloadError):
            decode(base64.b64encode(raw).decode("ascii"))

    def test_cbor_error_chains_cause(self) -> None:
        with pytest.raises(CBORPayloadError) as info:
            cbor_first_item(b"\xa1")
        assert isinstance(info.value.__cause__, cbor2.CBORDecodeError)


# ── first-item semantics ────────────────────────────────────────────


class TestFirstItemOnly:
    def test_trailing_items_ignored(self) -> None:
        first = cbor2.dumps({"data": [_item(b"\x01", b"\x01")]})
        second = cbor2.dumps({"data": [_item(b"\x02", b"\x02")]})
        payload = base64.b64encode(first + second).decode("ascii")
        rows = decode(payload)
        assert [r.bucket_in_decimal for r in rows] == ["1"]

    def test_contributions_from_accepts_decoded_value(self) -> None:
        rows = contributions_from({"data": [_item(b"\x03", b"\x04")]})
        assert rows[0].value_in_binary == "100"
