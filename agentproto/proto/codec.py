from __future__ import annotations

import json
from typing import Any

from .errors import EncodingFailure, EnvelopeParseError
from .payloads import b64encode


def _default(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, (bytes, bytearray)):
        return b64encode(bytes(value))
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_data(value: Any) -> bytes:
    """Encode a handler result as strict JSON.

    Payload records are written through their ``to_dict`` and bytes as base64.
    Raises EncodingFailure when the value cannot be represented.
    """
    try:
        return json.dumps(value, default=_default, allow_nan=False, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError, RecursionError) as e:
        raise EncodingFailure(str(e)) from e


def decode_data(data: bytes | None) -> Any:
    if not data:
        return None
    return json.loads(data.decode("utf-8"))


def load_document(raw: bytes | str) -> dict:
    try:
        obj = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise EnvelopeParseError(code="ENVELOPE_PARSE_ERROR", message=str(e)) from e
    if not isinstance(obj, dict):
        raise EnvelopeParseError(code="ENVELOPE_PARSE_ERROR", message=f"expected a JSON object, got {type(obj).__name__}")
    return obj


def dump_document(obj: dict) -> bytes:
    return json.dumps(obj, ensure_ascii=False).encode("utf-8")
