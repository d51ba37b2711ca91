"""
Record-and-replay fixtures.

A fixture stands in for a real, side-effecting function during tests. Each
call is matched by position against a stored record:

- no record yet: call the real function and record arguments and outcome
  (only when the update mode allows writing)
- record with the same arguments: replay the stored return value or raise
  the stored exception, without calling the real function
- record with different arguments: re-record when the mode allows updates,
  otherwise fail with a diff

Core Invariants:
- The real function is never called unless the mode licenses a write
- The Nth call to a fixture corresponds to the Nth record, whatever order
  concurrent calls finish in
- The call index is claimed synchronously, before any await
- Mismatches fail loudly; nothing is guessed or skipped
"""

from __future__ import annotations

import inspect
import os
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

import structlog

from ..config import DEFAULT_RECORDS_DIRNAME, Settings
from ..storage.store import FileRecordStore, RecordStore, WriteStatus
from .canon import render_record
from .codecs import Deserializers, Serializers
from .errors import FixtureUsageError, RecordMismatchError, UpdateLimitError
from .fulfillment import FulfillmentResult, is_fulfilled
from .guard import UpdateGuard
from .json_diff import format_ops, json_diff
from .json_equals import json_equals
from .machine import Action, decide
from .modes import ModeOption, UpdateMode, resolve_mode_provider
from .types import CallRecord, JsonValue, Outcome

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PendingCall:
    """Everything decided about one invocation before the real function runs."""

    index: int
    args: Tuple[Any, ...]
    kwargs: Dict[str, Any]
    args_json: JsonValue
    record: Optional[CallRecord]
    mode: UpdateMode
    action: Action


def is_async_callable(fn: Callable[..., Any]) -> bool:
    """
    Whether calling ``fn`` produces a coroutine.

    Sees through ``functools.wraps`` decorators and recognises objects whose
    ``__call__`` is ``async def``.
    """
    target = inspect.unwrap(fn)
    if inspect.iscoroutinefunction(fn) or inspect.iscoroutinefunction(target):
        return True
    if inspect.isclass(target):
        return False
    return inspect.iscoroutinefunction(getattr(target, "__call__", None))


class RecordAndReplayFixture:
    """
    Replays recorded calls of ``fn``, recording them first when allowed.

    Use record_and_replay() to build one. The fixture is callable with the
    same signature as ``fn``; when ``fn`` is async (see is_async_callable),
    calling the fixture returns a coroutine.

    Attributes:
        name: Fixture name, the prefix of every record
        store: Where records are read and written
        guard: Update budget for the test
    """

    def __init__(
        self,
        name: str,
        fn: Callable[..., Any],
        serialize: Serializers,
        deserialize: Deserializers,
        store: RecordStore,
        mode: ModeOption = None,
        guard: Optional[UpdateGuard] = None,
    ):
        if not name:
            raise FixtureUsageError("Fixture name must not be empty")
        self.name = name
        self.fn = fn
        self.serialize = serialize
        self.deserialize = deserialize
        self.store = store
        self.guard = guard if guard is not None else UpdateGuard()
        self._mode = resolve_mode_provider(mode)
        self._is_async = is_async_callable(fn)
        self._lock = threading.Lock()
        self._call_count = 0
        self._update_count = 0

    def __repr__(self) -> str:
        return (
            f"RecordAndReplayFixture(name={self.name!r}, "
            f"calls={self._call_count}, store={self.store!r})"
        )

    @property
    def call_count(self) -> int:
        """Calls made so far; also the highest claimed record index."""
        return self._call_count

    @property
    def update_count(self) -> int:
        """Records this fixture has overwritten."""
        return self._update_count

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        index = self._claim_index()
        if self._is_async:
            return self._call_async(index, args, kwargs)
        return self._call_sync(index, args, kwargs)

    def is_fulfilled(self) -> FulfillmentResult:
        """Check that every stored record was consumed by a call."""
        return is_fulfilled(self.store, self.name, self._call_count)

    # -------------------------------------------------------------------------
    # Invocation
    # -------------------------------------------------------------------------

    def _claim_index(self) -> int:
        with self._lock:
            self._call_count += 1
            return self._call_count

    def _prepare(self, index: int, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> PendingCall:
        record = self.store.load(self.name, index)
        args_json = self.serialize.args(args, kwargs)
        args_match = record is not None and json_equals(args_json, record.args)
        mode = self._mode()
        return PendingCall(
            index=index,
            args=args,
            kwargs=kwargs,
            args_json=args_json,
            record=record,
            mode=mode,
            action=decide(record is not None, args_match, mode),
        )

    def _call_sync(self, index: int, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        call = self._prepare(index, args, kwargs)
        if call.action is Action.REPLAY:
            return self._replay(call)
        self._check_call_allowed(call)

        try:
            value = self.fn(*args, **kwargs)
        except Exception as err:
            self._persist(call, self._error_outcome(err))
            raise
        if inspect.isawaitable(value):
            # An async function the constructor could not recognise
            return self._settle(call, value)
        self._persist(call, Outcome.ok(self.serialize.success(value)))
        return value

    async def _call_async(self, index: int, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        call = self._prepare(index, args, kwargs)
        if call.action is Action.REPLAY:
            return self._replay(call)
        self._check_call_allowed(call)

        try:
            value = self.fn(*args, **kwargs)
            if inspect.isawaitable(value):
                value = await value
        except Exception as err:
            self._persist(call, self._error_outcome(err))
            raise
        self._persist(call, Outcome.ok(self.serialize.success(value)))
        return value

    async def _settle(self, call: PendingCall, awaitable: Any) -> Any:
        try:
            value = await awaitable
        except Exception as err:
            self._persist(call, self._error_outcome(err))
            raise
        self._persist(call, Outcome.ok(self.serialize.success(value)))
        return value

    def _check_call_allowed(self, call: PendingCall) -> None:
        """Fail the non-calling actions and take the update budget for UPDATE."""
        if call.action is Action.FAIL_MISSING:
            self._fail_missing(call)
        if call.action is Action.FAIL_MISMATCH:
            self._fail_mismatch(call)
        if call.action is Action.UPDATE:
            # Claimed before the real call, so a concurrent second update is refused
            if not self.guard.may_update():
                raise UpdateLimitError(self.name, call.index)
            self.guard.record_update()
            self._update_count += 1

    def _replay(self, call: PendingCall) -> Any:
        outcome = call.record.outcome
        logger.debug(
            "Replaying recorded call",
            fixture=self.name,
            index=call.index,
            success=outcome.success,
        )
        if outcome.success:
            return self.deserialize.success(outcome.data)

        err = self.deserialize.error(outcome.error)
        if not isinstance(err, BaseException):
            raise FixtureUsageError(
                f"deserialize.error for fixture '{self.name}' returned "
                f"{type(err).__name__}, expected an exception instance"
            )
        raise err

    def _error_outcome(self, err: Exception) -> Outcome:
        # Raised inside the caller's except block: a codec failure chains to err
        return Outcome.failed(self.serialize.error(err))

    # -------------------------------------------------------------------------
    # Writing and failing
    # -------------------------------------------------------------------------

    def _persist(self, call: PendingCall, outcome: Outcome) -> None:
        content = render_record(CallRecord(args=call.args_json, outcome=outcome))
        status = self.store.match(self.name, call.index, content, call.mode)
        location = self.store.describe(self.name, call.index)
        if status is WriteStatus.CREATED:
            logger.info("Call record created", fixture=self.name, index=call.index, location=location)
        elif status is WriteStatus.UPDATED:
            logger.info(
                "Call record updated",
                fixture=self.name,
                index=call.index,
                location=location,
                mode=call.mode.value,
            )

    def _fail_missing(self, call: PendingCall) -> None:
        location = self.store.describe(self.name, call.index)
        logger.warning(
            "No call record and mode forbids recording",
            fixture=self.name,
            index=call.index,
            location=location,
            mode=call.mode.value,
        )
        message = (
            f"No record for call #{call.index} of fixture '{self.name}' at {location}; "
            f"update mode '{call.mode.value}' does not allow creating it"
        )
        self._propose(call, Outcome.ok(None), message)

    def _fail_mismatch(self, call: PendingCall) -> None:
        location = self.store.describe(self.name, call.index)
        logger.warning(
            "Call arguments differ from record",
            fixture=self.name,
            index=call.index,
            location=location,
            mode=call.mode.value,
        )
        lines = [
            f"Arguments of call #{call.index} of fixture '{self.name}' differ from "
            f"the record at {location}; update mode '{call.mode.value}' does not "
            f"allow updating it",
        ]
        lines.extend(f"  {line}" for line in format_ops(json_diff(call.record.args, call.args_json)))
        self._propose(call, call.record.outcome, "\n".join(lines))

    def _propose(self, call: PendingCall, outcome: Outcome, message: str) -> None:
        """Offer a record the mode will refuse, so the failure carries a diff."""
        content = render_record(CallRecord(args=call.args_json, outcome=outcome))
        self.store.match(self.name, call.index, content, call.mode, message=message)
        # match() only accepts this content if the store changed underneath us
        raise RecordMismatchError(
            message,
            location=self.store.describe(self.name, call.index),
            expected=self.store.read_text(self.name, call.index),
            actual=content,
        )


def default_records_folder(caller_file: Optional[str]) -> str:
    """
    Folder used when a fixture is built without one.

    CALLREPLAY_RECORDS_DIR wins; otherwise ``__records__`` next to the module
    that built the fixture, or in the working directory if that is unknown.
    """
    settings = Settings.from_env()
    if settings.records_dir:
        return settings.records_dir
    if caller_file:
        return os.path.join(os.path.dirname(os.path.abspath(caller_file)), DEFAULT_RECORDS_DIRNAME)
    return DEFAULT_RECORDS_DIRNAME


def record_and_replay(
    name: str,
    fn: Callable[..., Any],
    *,
    serialize: Optional[Serializers] = None,
    deserialize: Optional[Deserializers] = None,
    records_folder: Optional[str] = None,
    allow_only_one_update_per_test: bool = False,
    mode: ModeOption = None,
    store: Optional[RecordStore] = None,
    guard: Optional[UpdateGuard] = None,
) -> RecordAndReplayFixture:
    """
    Wrap ``fn`` in a record-and-replay fixture.

    Args:
        name: Fixture name; records are stored as ``{name}-{index:03d}.json``
        fn: The real function (plain or ``async def``)
        serialize: Turns args, return values and exceptions into JSON
        deserialize: Turns stored JSON back into return values and exceptions
        records_folder: Where record files live (see default_records_folder)
        allow_only_one_update_per_test: Refuse every record overwrite after the first
        mode: Update mode, textual mode, or a provider called on every call;
              None reads the ambient mode each time
        store: Record store to use instead of a FileRecordStore
        guard: Update budget shared with other fixtures of the same test

    Returns:
        A callable fixture with ``is_fulfilled()``

    Example:
        async def div(a, b):
            return a / b

        div_fixture = record_and_replay("div", div, allow_only_one_update_per_test=True)
        assert await div_fixture(6, 2) == 3
        assert div_fixture.is_fulfilled()
    """
    if store is None:
        if records_folder is None:
            frame = inspect.currentframe()
            caller = frame.f_back if frame is not None else None
            caller_file = caller.f_globals.get("__file__") if caller is not None else None
            records_folder = default_records_folder(caller_file)
        store = FileRecordStore(folder=records_folder)
    elif records_folder is not None:
        raise FixtureUsageError("Pass either records_folder or store, not both")

    if guard is None:
        guard = UpdateGuard(only_one=allow_only_one_update_per_test)

    return RecordAndReplayFixture(
        name=name,
        fn=fn,
        serialize=serialize or Serializers(),
        deserialize=deserialize or Deserializers(),
        store=store,
        mode=mode,
        guard=guard,
    )
