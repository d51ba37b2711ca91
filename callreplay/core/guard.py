from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class UpdateGuard:
    """
    Caps record overwrites within one test.

    With ``only_one`` set, the first overwrite is allowed and every later one
    is refused, so each drifted record can be reviewed before the next is
    re-recorded. Fixtures of one test may share a guard to share the budget.
    """

    only_one: bool = False
    updates: int = field(default=0, init=False)

    def may_update(self) -> bool:
        return not self.only_one or self.updates == 0

    def record_update(self) -> None:
        self.updates += 1
