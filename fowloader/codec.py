"""
Object payload encoding.

The host consumes object descriptions as JSON text. These helpers are the only
place payloads are encoded or decoded.
"""

import json
from typing import Any


def encode_payload(payload: Any) -> str:
    """Encode a payload for the host. Raises TypeError/ValueError on non-JSON input."""
    return json.dumps(payload, ensure_ascii=False, allow_nan=False)


def decode_payload(text: str) -> Any:
    """Decode a payload produced by encode_payload."""
    return json.loads(text)
