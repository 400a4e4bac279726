"""Fatal payload errors — the only failures that cross the decode boundary."""

from __future__ import annotations


class PayloadError(ValueError):
    """Base class for payloads that cannot be decoded at all."""


class Base64DecodeError(PayloadError):
    """The payload text is not valid standard base64."""


class CBORPayloadError(PayloadError):
    """The base64-decoded bytes do not hold a decodable CBOR item."""
