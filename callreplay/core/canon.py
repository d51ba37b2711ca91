"""Canonical text form of call records.

Guarantees:
- render_record(r) is deterministic: same record always yields identical text
- "args" comes before "result"; "success" comes before "data"/"error"
- Keys inside args and payloads keep the order the serializer produced
- Four-space indentation and a trailing newline, so diffs are stable
- NaN and infinities are rejected rather than written as invalid JSON
"""
from __future__ import annotations

import json
from typing import Any

from .types import CallRecord, Outcome, ParseResult

INDENT = 4


def render_record(record: CallRecord) -> str:
    """Render a record to the text stored on disk."""
    return render_json(record.to_json())


def render_json(value: Any) -> str:
    return json.dumps(value, indent=INDENT, ensure_ascii=False, allow_nan=False) + "\n"


def parse_record(text: str) -> ParseResult:
    """Parse stored text into a CallRecord.

    Never raises for bad content; the reason is returned on the result.
    """
    try:
        obj = json.loads(text)
    except ValueError as e:
        return ParseResult(error=f"invalid JSON: {e}")

    if not isinstance(obj, dict):
        return ParseResult(error="record must be a JSON object")
    if "args" not in obj:
        return ParseResult(error="record has no 'args'")
    if "result" not in obj:
        return ParseResult(error="record has no 'result'")

    result = obj["result"]
    if not isinstance(result, dict):
        return ParseResult(error="'result' must be a JSON object")

    success = result.get("success")
    if success is True:
        if "data" not in result:
            return ParseResult(error="successful 'result' has no 'data'")
        outcome = Outcome.ok(result["data"])
    elif success is False:
        if "error" not in result:
            return ParseResult(error="failed 'result' has no 'error'")
        outcome = Outcome.failed(result["error"])
    else:
        return ParseResult(error="'result.success' must be true or false")

    return ParseResult(record=CallRecord(args=obj["args"], outcome=outcome))
