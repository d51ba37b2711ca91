"""Core types and logic for callreplay."""

from .call_list import CallListMock, ExpectedCall
from .canon import parse_record, render_record
from .codecs import (
    Deserializers,
    ErrorCodec,
    Serializers,
    deserialize_error,
    identity,
    serialize_call_args,
    serialize_error,
)
from .errors import (
    CallReplayError,
    FixtureNotFulfilledError,
    FixtureUsageError,
    InvalidUpdateModeError,
    RecordMismatchError,
    UnsupportedErrorTypeError,
    UpdateLimitError,
)
from .fixture import RecordAndReplayFixture, record_and_replay
from .fulfillment import FulfillmentResult, is_fulfilled
from .guard import UpdateGuard
from .json_diff import json_diff
from .json_equals import json_equals, json_kind
from .machine import Action, decide
from .modes import (
    UpdateMode,
    current_update_mode,
    parse_update_mode,
    update_mode,
)
from .types import CallRecord, Outcome, ParseResult

__all__ = [
    # Core types
    "CallRecord",
    "Outcome",
    "ParseResult",
    # Comparison
    "json_equals",
    "json_kind",
    "json_diff",
    # Record text
    "render_record",
    "parse_record",
    # Update modes
    "UpdateMode",
    "current_update_mode",
    "parse_update_mode",
    "update_mode",
    # Decision table
    "Action",
    "decide",
    # Fixtures
    "RecordAndReplayFixture",
    "record_and_replay",
    "UpdateGuard",
    "FulfillmentResult",
    "is_fulfilled",
    "CallListMock",
    "ExpectedCall",
    # Codecs
    "Serializers",
    "Deserializers",
    "ErrorCodec",
    "identity",
    "serialize_call_args",
    "serialize_error",
    "deserialize_error",
    # Exceptions
    "CallReplayError",
    "FixtureUsageError",
    "InvalidUpdateModeError",
    "UnsupportedErrorTypeError",
    "RecordMismatchError",
    "UpdateLimitError",
    "FixtureNotFulfilledError",
]
