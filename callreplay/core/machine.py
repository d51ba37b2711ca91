"""
Decision table for one fixture invocation.

Rows are checked in order; the first match wins:

    record exists | args match | mode              | action
    --------------+------------+-------------------+------------------
    no            | -          | NONE              | FAIL_MISSING
    no            | -          | CREATE, C_AND_U   | CREATE
    yes           | yes        | any               | REPLAY
    yes           | no         | CREATE_AND_UPDATE | UPDATE
    yes           | no         | NONE, CREATE      | FAIL_MISMATCH

Only CREATE and UPDATE call the real function.
"""

from __future__ import annotations

from enum import Enum

from .modes import UpdateMode


class Action(Enum):
    FAIL_MISSING = "fail_missing"
    CREATE = "create"
    REPLAY = "replay"
    UPDATE = "update"
    FAIL_MISMATCH = "fail_mismatch"

    @property
    def calls_function(self) -> bool:
        return self in (Action.CREATE, Action.UPDATE)


def decide(record_exists: bool, args_match: bool, mode: UpdateMode) -> Action:
    if not record_exists:
        return Action.CREATE if mode.may_create else Action.FAIL_MISSING
    if args_match:
        return Action.REPLAY
    return Action.UPDATE if mode.may_update else Action.FAIL_MISMATCH
