from .core import (
    # Fixtures
    Action,
    CallListMock,
    # Core types
    CallRecord,
    # Exceptions
    CallReplayError,
    # Codecs
    Deserializers,
    ErrorCodec,
    ExpectedCall,
    FixtureNotFulfilledError,
    FixtureUsageError,
    FulfillmentResult,
    InvalidUpdateModeError,
    Outcome,
    ParseResult,
    RecordAndReplayFixture,
    RecordMismatchError,
    Serializers,
    UnsupportedErrorTypeError,
    UpdateGuard,
    UpdateLimitError,
    # Update modes
    UpdateMode,
    current_update_mode,
    decide,
    deserialize_error,
    identity,
    is_fulfilled,
    # Comparison
    json_diff,
    json_equals,
    json_kind,
    parse_record,
    parse_update_mode,
    record_and_replay,
    render_record,
    serialize_call_args,
    serialize_error,
    update_mode,
)
from .storage import (
    FileRecordStore,
    MemoryRecordStore,
    RecordStore,
    WriteStatus,
    record_filename,
)
from .testing import FixtureAssertionsMixin, assert_fulfilled
from .version import CALLREPLAY_VERSION, RECORD_FORMAT

__all__ = [
    # Version
    "CALLREPLAY_VERSION",
    "RECORD_FORMAT",
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
    # Storage
    "RecordStore",
    "FileRecordStore",
    "MemoryRecordStore",
    "WriteStatus",
    "record_filename",
    # Update modes
    "UpdateMode",
    "current_update_mode",
    "parse_update_mode",
    "update_mode",
    # Fixtures
    "Action",
    "decide",
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
    # unittest helpers
    "assert_fulfilled",
    "FixtureAssertionsMixin",
    # Exceptions
    "CallReplayError",
    "FixtureUsageError",
    "InvalidUpdateModeError",
    "UnsupportedErrorTypeError",
    "RecordMismatchError",
    "UpdateLimitError",
    "FixtureNotFulfilledError",
]
