"""
Record update modes.

The mode decides whether a fixture may write records:

    NONE               "none"  nothing is written; missing or drifted records fail
    CREATE             "new"   missing records are created, existing ones are kept
    CREATE_AND_UPDATE  "all"   missing records are created, drifted ones overwritten

The ambient mode is resolved on every call, never memoized:
1. an active ``update_mode(...)`` context
2. the CALLREPLAY_UPDATE environment variable
3. NONE when CI is set
4. CREATE otherwise
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Generator, Optional, Union

from ..config import Settings
from .errors import InvalidUpdateModeError


class UpdateMode(Enum):
    NONE = "none"
    CREATE = "new"
    CREATE_AND_UPDATE = "all"

    @property
    def may_create(self) -> bool:
        return self is not UpdateMode.NONE

    @property
    def may_update(self) -> bool:
        return self is UpdateMode.CREATE_AND_UPDATE


ModeProvider = Callable[[], UpdateMode]
ModeOption = Union[UpdateMode, str, ModeProvider, None]

# Works across threads and asyncio tasks
_mode_override: contextvars.ContextVar[Optional[UpdateMode]] = contextvars.ContextVar(
    "callreplay_update_mode", default=None
)


def parse_update_mode(value: Union[UpdateMode, str]) -> UpdateMode:
    """
    Map a textual mode ("none", "new", "all") to an UpdateMode.

    Raises:
        InvalidUpdateModeError: For any other value.
    """
    if isinstance(value, UpdateMode):
        return value
    if isinstance(value, str):
        for mode in UpdateMode:
            if mode.value == value.strip().lower():
                return mode
    raise InvalidUpdateModeError(value)


def current_update_mode() -> UpdateMode:
    """Resolve the ambient update mode (see module docstring for precedence)."""
    override = _mode_override.get()
    if override is not None:
        return override

    settings = Settings.from_env()
    if settings.update is not None:
        return parse_update_mode(settings.update)
    if settings.ci:
        return UpdateMode.NONE
    return UpdateMode.CREATE


@contextmanager
def update_mode(mode: Union[UpdateMode, str]) -> Generator[UpdateMode, None, None]:
    """
    Context manager that overrides the ambient update mode.

    Example:
        with update_mode("all"):
            await fetch_user(42)  # drifted records get re-recorded
    """
    resolved = parse_update_mode(mode)
    token = _mode_override.set(resolved)
    try:
        yield resolved
    finally:
        _mode_override.reset(token)


def resolve_mode_provider(mode: ModeOption) -> ModeProvider:
    """
    Turn a fixture's ``mode=`` argument into a provider called once per invocation.

    A fixed mode is validated up front; a callable is trusted to return
    an UpdateMode (or a textual mode) each time it is called.
    """
    if mode is None:
        return current_update_mode
    if isinstance(mode, (UpdateMode, str)):
        fixed = parse_update_mode(mode)
        return lambda: fixed
    if callable(mode):
        provider = mode
        return lambda: parse_update_mode(provider())
    raise InvalidUpdateModeError(mode)
