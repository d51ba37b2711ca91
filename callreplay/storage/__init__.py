"""Storage implementations for callreplay."""

from .store import (
    FileRecordStore,
    MemoryRecordStore,
    RecordStore,
    WriteStatus,
    record_filename,
)

__all__ = [
    "FileRecordStore",
    "MemoryRecordStore",
    "RecordStore",
    "WriteStatus",
    "record_filename",
]
