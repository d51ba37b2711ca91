from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

# Recursive JSON shape: None, bool, int, float, str, list/tuple, dict[str, ...]
JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


@dataclass(frozen=True)
class Outcome:
    """
    Tagged result of one real call.

    Attributes:
        success: True when the function returned, False when it raised
        data: Serialized return value (success only)
        error: Serialized exception (failure only)
    """

    success: bool
    data: JsonValue = None
    error: JsonValue = None

    @classmethod
    def ok(cls, data: JsonValue) -> "Outcome":
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, error: JsonValue) -> "Outcome":
        return cls(success=False, error=error)

    def to_json(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error}


@dataclass(frozen=True)
class CallRecord:
    """One persisted call: the serialized arguments and what came back."""

    args: JsonValue
    outcome: Outcome

    def to_json(self) -> Dict[str, Any]:
        # Key order is part of the stored format: args first, then result
        return {"args": self.args, "result": self.outcome.to_json()}


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing stored text into a CallRecord."""

    record: Optional[CallRecord] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.record is not None
