"""Transport encoding: base64/UTF-8 conversions and the JSON byte form of documents."""
import base64
import binascii
import json
from typing import Any


def b64_encode(data: bytes) -> str:
    """Standard base64 with padding, as text."""
    return base64.b64encode(data).decode("ascii")


def b64_decode(text: str) -> bytes:
    """
    Strict base64 decode; raises ``ValueError`` (``binascii.Error``) on bad input.

    Only the canonical encoding is accepted: non-zero padding bits in the last
    character would otherwise let two different strings decode to the same bytes.
    """
    data = base64.b64decode(text, validate=True)
    if b64_encode(data) != text:
        raise binascii.Error("Non-canonical base64 encoding")
    return data


def utf8_encode(text: str) -> bytes:
    return text.encode("utf-8")


def utf8_decode(data: bytes) -> str:
    return data.decode("utf-8")


def dumps_canonical(obj: Any) -> bytes:
    """
    Serialize a JSON-compatible value to UTF-8 bytes.

    Compact separators and no ASCII escaping, so the bytes match what a
    JavaScript ``JSON.stringify`` peer produces for the same value. NaN and
    infinities are rejected rather than written as non-standard tokens.
    """
    return utf8_encode(json.dumps(obj, separators=(",", ":"), ensure_ascii=False, allow_nan=False))


def loads_canonical(data: bytes) -> Any:
    return json.loads(utf8_decode(data))
