"""contribution_decoder — base64/CBOR contribution payloads to binary and decimal tables."""

__all__ = [
    "__version__",
    "decode_payload",
    "decode_payload_async",
    "run_decoder",
    "validate_instance",
    "Contribution",
    "DecodeResult",
    "PayloadError",
    "Base64DecodeError",
    "CBORPayloadError",
]
__version__ = "0.1.0"

from contribution_decoder.api import (  # noqa: E402, F401
    DecodeResult,
    decode_payload,
    decode_payload_async,
    run_decoder,
    validate_instance,
)
from contribution_decoder.core.errors import (  # noqa: E402, F401
    Base64DecodeError,
    CBORPayloadError,
    PayloadError,
)
from contribution_decoder.model.contribution import Contribution  # noqa: E402, F401
