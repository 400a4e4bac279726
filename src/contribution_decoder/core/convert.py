"""Big-endian byte sequences → unsigned integers → binary / decimal text."""

from __future__ import annotations

import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Returned by bytes_to_binary() instead of raising; never a valid base-2 string.
CONVERSION_ERROR = "Error"

BytesLike = Optional[bytes | bytearray | memoryview]

# sys.set_int_max_str_digits() never accepts a limit below 640.
_DECIMAL_CHUNK_DIGITS = 500
_DECIMAL_CHUNK = 10 ** _DECIMAL_CHUNK_DIGITS


def bytes_to_int(data: BytesLike) -> int:
    """Interpret *data* as an unsigned big-endian integer (empty → 0)."""
    if not data:
        return 0
    return int.from_bytes(data, "big", signed=False)


def int_to_binary(n: int) -> str:
    if n < 0:
        raise ValueError(f"expected a non-negative integer, got {n}")
    return format(n, "b")


def int_to_decimal(n: int) -> str:
    """Base-10 text of *n*, for any size of *n*.

    ``str()`` alone refuses ints past ``sys.get_int_max_str_digits()``, so
    large values are rendered in fixed-width chunks that each stay under the
    smallest limit the interpreter allows.
    """
    if n < 0:
        raise ValueError(f"expected a non-negative integer, got {n}")
    if n < _DECIMAL_CHUNK:
        return str(n)
    chunks = []
    while n >= _DECIMAL_CHUNK:
        n, low = divmod(n, _DECIMAL_CHUNK)
        chunks.append(str(low).zfill(_DECIMAL_CHUNK_DIGITS))
    chunks.append(str(n))
    return "".join(reversed(chunks))


def bytes_to_binary(data: BytesLike) -> str:
    """Render *data* as the base-2 text of its unsigned big-endian value.

    Empty or missing input yields ``"0"``. Leading zero bytes vanish in the
    output, so ``b"\\x00\\x05"`` and ``b"\\x05"`` both give ``"101"``.

    Never raises: on any failure the error is logged and
    :data:`CONVERSION_ERROR` is returned. Callers that cannot tolerate the
    sentinel must check :func:`is_conversion_error`.
    """
    try:
        return int_to_binary(bytes_to_int(data))
    except Exception:
        logger.error("binary conversion failed for input %r", data, exc_info=True)
        return CONVERSION_ERROR


def is_conversion_error(text: str) -> bool:
    return text == CONVERSION_ERROR
