"""
Declarative mock for an ordered list of expected calls.

The in-memory sibling of record-and-replay fixtures: no files, no update
modes. Calls must arrive in order with matching arguments.

Example:
    add = CallListMock(
        [ExpectedCall(args=(1, 2), return_value=3), ExpectedCall(args=(5, 7), return_value=12)]
    )
    assert add(1, 2) == 3
    assert add(5, 7) == 12
    assert add.is_fulfilled()
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .canon import render_json
from .codecs import serialize_call_args
from .errors import RecordMismatchError
from .fulfillment import FulfillmentResult
from .json_diff import format_ops, json_diff
from .json_equals import json_equals
from .types import JsonValue


@dataclass(frozen=True)
class ExpectedCall:
    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)
    return_value: Any = None


class CallListMock:
    """Returns the configured value for each expected call, in order."""

    def __init__(
        self,
        expected_calls: Sequence[ExpectedCall],
        serialize: Optional[Callable[[Tuple[Any, ...], Dict[str, Any]], JsonValue]] = None,
    ):
        self.expected_calls: List[ExpectedCall] = list(expected_calls)
        self.serialize = serialize or serialize_call_args
        self._lock = threading.Lock()
        self._index = 0

    @property
    def call_count(self) -> int:
        return self._index

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        with self._lock:
            index = self._index
            self._index += 1

        actual = self.serialize(args, kwargs)
        location = f"expected call #{index + 1}"

        if index >= len(self.expected_calls):
            raise RecordMismatchError(
                f"{len(self.expected_calls)} calls were available (this was #{index + 1})",
                location=location,
                expected=None,
                actual=render_json(actual),
            )

        expected_call = self.expected_calls[index]
        expected = self.serialize(expected_call.args, expected_call.kwargs)
        if not json_equals(actual, expected):
            lines = [f"Arguments of call #{index + 1} differ from the expected call"]
            lines.extend(f"  {line}" for line in format_ops(json_diff(expected, actual)))
            raise RecordMismatchError(
                "\n".join(lines),
                location=location,
                expected=render_json(expected),
                actual=render_json(actual),
            )
        return expected_call.return_value

    def is_fulfilled(self) -> FulfillmentResult:
        remaining = len(self.expected_calls) - self._index
        if remaining > 0:
            return FulfillmentResult.unfulfilled(f"{remaining} expected calls were not made")
        return FulfillmentResult.fulfilled()
