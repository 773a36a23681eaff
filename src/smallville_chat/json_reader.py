"""
Lenient JSON reading for model responses.
Never raises: malformed input comes back as a failed ParseOutcome.
"""

from __future__ import annotations
import json
import logging
import re
from typing import Any

from .outcome import ParseOutcome, EMPTY, INVALID_JSON, NO_OBJECT

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?")
_DECODER = json.JSONDecoder()


def try_parse(text: str, log: logging.Logger = logger) -> ParseOutcome[Any]:
    """Parse `text` as JSON, ignoring markdown code fences."""
    cleaned = _CODE_FENCE.sub("", text or "").strip().rstrip("`").strip()
    if not cleaned:
        log.error("Failed to parse json: empty response")
        return ParseOutcome.failure(EMPTY)
    try:
        return ParseOutcome.success(json.loads(cleaned))
    except (json.JSONDecodeError, ValueError) as exc:
        log.error("Failed to parse json (%s). Continuing anyways...", exc)
        return ParseOutcome.failure(INVALID_JSON)


def extract_object(text: str, log: logging.Logger = logger) -> ParseOutcome[dict]:
    """Parse the JSON object starting at the first '{', allowing leading prose."""
    start = (text or "").find("{")
    if start == -1:
        log.error("No json object found in response")
        return ParseOutcome.failure(NO_OBJECT)

    # Trailing prose or a closing code fence after the object is ignored.
    try:
        value, _ = _DECODER.raw_decode(text[start:])
    except (json.JSONDecodeError, ValueError) as exc:
        log.error("Failed to parse json object (%s). Continuing anyways...", exc)
        return ParseOutcome.failure(INVALID_JSON)
    return ParseOutcome.success(value)
