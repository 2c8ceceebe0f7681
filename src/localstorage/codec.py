"""
JSON codec used between caller values and the text-only engines.

Output matches what a browser's ``JSON.stringify`` produces for the same
data (compact separators, no ASCII escaping), so stored values can be read
by any JSON tool.
"""

from __future__ import annotations

import json
from typing import Any

from localstorage.exceptions import DecodeError


def encode(value: Any) -> str:
    """
    Encode a JSON-representable value as text.

    Raises:
        TypeError: If value contains objects JSON cannot represent
        ValueError: If value is cyclic or contains NaN/Infinity
        RecursionError: If value is nested too deeply to encode
    """
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def decode(text: str) -> Any:
    """
    Decode stored text.

    Raises:
        DecodeError: If text is not valid JSON
    """
    try:
        return json.loads(text)
    except (TypeError, ValueError, RecursionError) as e:
        raise DecodeError(f"Stored value is not valid JSON: {e}") from e
