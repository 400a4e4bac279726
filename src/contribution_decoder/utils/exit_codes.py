"""Centralized exit-code contract for the CLI.

Code  Meaning
----  -------
  0   Success — at least one contribution decoded
  1   Empty — payload decoded, but no item survived validation and filtering
  2   Error — bad base64 / CBOR, usage error, unreadable input file

``validate`` reuses code 1 as VIOLATION (instance does not match the schema).
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    EMPTY = 1
    VIOLATION = 1
    ERROR = 2
