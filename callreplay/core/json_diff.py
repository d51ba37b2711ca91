"""Deterministic JSON diff patch generation for callreplay.

Produces a stable, ordered list of diff operations for JSON-like values. Kinds
come from json_kind, so the diff agrees with json_equals: an empty patch means
the values are equal.

Ordering guarantees:
- object: removed keys (sorted), then added keys (sorted), then common keys (sorted, recursed)
- array: by index; removes at tail, then adds at tail
- Kind mismatch: replace whole node
- int vs float are both numbers and only differ by value

Output patch format:
    [{"op":"remove","path":"$.a.b","old":...},
     {"op":"add","path":"$.x","value":...},
     {"op":"replace","path":"$.k","old":...,"new":...}]
"""
from __future__ import annotations

from typing import Any, Dict, List

from .json_equals import ARRAY, OBJECT, json_kind


def json_diff(old: Any, new: Any, path: str = "$") -> List[Dict[str, Any]]:
    """Produce a deterministic JSON diff patch between two values."""
    ops: List[Dict[str, Any]] = []
    kind = json_kind(old)

    if kind != json_kind(new):
        ops.append({"op": "replace", "path": path, "old": old, "new": new})
        return ops

    if kind == OBJECT:
        old_keys = set(old.keys())
        new_keys = set(new.keys())
        for k in sorted(old_keys - new_keys):
            ops.append({"op": "remove", "path": f"{path}.{k}", "old": old[k]})
        for k in sorted(new_keys - old_keys):
            ops.append({"op": "add", "path": f"{path}.{k}", "value": new[k]})
        for k in sorted(old_keys & new_keys):
            ops.extend(json_diff(old[k], new[k], f"{path}.{k}"))
        return ops

    if kind == ARRAY:
        min_len = min(len(old), len(new))
        for i in range(min_len):
            ops.extend(json_diff(old[i], new[i], f"{path}[{i}]"))
        if len(old) > len(new):
            for i in range(len(new), len(old)):
                ops.append({"op": "remove", "path": f"{path}[{i}]", "old": old[i]})
        elif len(new) > len(old):
            for i in range(len(old), len(new)):
                ops.append({"op": "add", "path": f"{path}[{i}]", "value": new[i]})
        return ops

    if old != new:
        ops.append({"op": "replace", "path": path, "old": old, "new": new})
    return ops


def format_ops(ops: List[Dict[str, Any]], limit: int = 10) -> List[str]:
    """One display line per operation, capped at ``limit`` lines plus a tail note."""
    lines = [f"{op['op']} {op['path']}: {_compact_value(op)}" for op in ops[:limit]]
    if len(ops) > limit:
        lines.append(f"... and {len(ops) - limit} more operations")
    return lines


def _compact(value: Any) -> str:
    text = repr(value)
    if len(text) > 40:
        text = text[:37] + "..."
    return text


def _compact_value(op: Dict[str, Any]) -> str:
    if op["op"] == "replace":
        return f"{_compact(op['old'])} -> {_compact(op['new'])}"
    if op["op"] == "add":
        return _compact(op["value"])
    return _compact(op["old"])
