"""Checks that every stored record of a fixture was replayed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..storage.store import RecordStore


@dataclass(frozen=True)
class FulfillmentResult:
    success: bool
    error: Optional[str] = None

    @classmethod
    def fulfilled(cls) -> "FulfillmentResult":
        return cls(success=True)

    @classmethod
    def unfulfilled(cls, error: str) -> "FulfillmentResult":
        return cls(success=False, error=error)

    def __bool__(self) -> bool:
        return self.success


def is_fulfilled(store: "RecordStore", name: str, consumed: int) -> FulfillmentResult:
    """
    Compare the calls made so far against the records stored for ``name``.

    Every stored index above ``consumed`` is reported. Consuming more calls
    than there are records counts as fulfilled.

    Args:
        store: Where the fixture's records live
        name: Fixture name
        consumed: Number of calls made to the fixture

    Returns:
        FulfillmentResult; on failure ``error`` names each unconsumed record
    """
    indices = store.list_indices(name)
    missing = [index for index in indices if index > consumed]
    if not missing:
        return FulfillmentResult.fulfilled()

    lines = [
        f"{consumed} of {len(indices)} calls were made.",
        "The following recorded calls were missing:",
    ]
    lines.extend(f"  - {store.describe(name, index)}" for index in missing)
    lines.append("If they are no longer relevant, delete these files.")
    return FulfillmentResult.unfulfilled("\n".join(lines))
