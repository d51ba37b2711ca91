"""
Exceptions raised by callreplay.

Two families matter to a test run:
- usage errors (FixtureUsageError and subclasses) mean the fixture or its
  records are set up wrong and are raised immediately;
- mismatch errors (RecordMismatchError, FixtureNotFulfilledError) are
  AssertionErrors, so test runners report them as failures with a diff.
"""

from __future__ import annotations

import difflib
from typing import Optional


class CallReplayError(Exception):
    """Base exception for callreplay errors."""

    pass


class FixtureUsageError(CallReplayError):
    """Raised when a fixture is misused or misconfigured."""

    pass


class InvalidUpdateModeError(FixtureUsageError, ValueError):
    """Raised for an update mode value that maps to no known mode."""

    def __init__(self, value: object):
        super().__init__(
            f"Unsupported record update mode: {value!r} "
            f"(expected one of 'none', 'new', 'all')"
        )
        self.value = value


class UnsupportedErrorTypeError(FixtureUsageError, TypeError):
    """Raised when an error codec is handed an exception it cannot represent."""

    def __init__(self, error: object, supported: str = "plain Exception only"):
        type_name = type(error).__name__
        kind = "exception" if isinstance(error, BaseException) else "non-exception object"
        super().__init__(
            f"Cannot serialize {kind} of type {type_name} with this error codec "
            f"(supported: {supported}). "
            f"Extend serialize.error/deserialize.error to support that error type."
        )
        self.error = error


class RecordMismatchError(CallReplayError, AssertionError):
    """
    Raised when a call does not match its stored record.

    Carries both sides as text so the failure renders as a diff:
    ``expected`` is the stored content (None if nothing is stored) and
    ``actual`` is the content the current call would have written.
    """

    def __init__(
        self,
        message: str,
        location: str,
        expected: Optional[str],
        actual: str,
    ):
        super().__init__(message)
        self.location = location
        self.expected = expected
        self.actual = actual

    @property
    def diff(self) -> str:
        lines = difflib.unified_diff(
            (self.expected or "").splitlines(),
            self.actual.splitlines(),
            fromfile=f"{self.location} (stored)" if self.expected is not None else "(no record)",
            tofile=f"{self.location} (current call)",
            lineterm="",
        )
        return "\n".join(lines)

    def __str__(self) -> str:
        return f"{self.args[0]}\n{self.diff}"


class UpdateLimitError(CallReplayError):
    """Raised on a second record update in a run limited to one update."""

    def __init__(self, fixture: str, index: int):
        super().__init__(
            f"Record update already performed in this test (fixture '{fixture}', "
            f"call #{index}). Review the updated record and re-run the test to continue."
        )
        self.fixture = fixture
        self.index = index


class FixtureNotFulfilledError(CallReplayError, AssertionError):
    """Raised by assert_fulfilled when stored records were not replayed."""

    pass
