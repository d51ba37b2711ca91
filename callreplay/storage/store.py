from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

import structlog

from ..core.canon import parse_record
from ..core.errors import FixtureUsageError, RecordMismatchError
from ..core.modes import UpdateMode
from ..core.types import CallRecord

logger = structlog.get_logger(__name__)


class WriteStatus(Enum):
    """What RecordStore.match did with the proposed content."""

    UNCHANGED = "unchanged"
    CREATED = "created"
    UPDATED = "updated"


def record_filename(name: str, index: int) -> str:
    """
    Filename of the record for call ``index`` (1-based) of fixture ``name``.

    Indices are zero-padded to at least three digits; 1000 and above simply
    use more digits. Enumeration sorts numerically, so order is preserved.
    """
    if index < 1:
        raise FixtureUsageError(f"Record index must be >= 1, got {index}")
    return f"{name}-{index:03d}.json"


def _filename_pattern(name: str) -> "re.Pattern[str]":
    return re.compile(rf"^{re.escape(name)}-(\d{{3,}})\.json$")


_ANY_RECORD = re.compile(r"^(.+)-(\d{3,})\.json$")


def _names_from_filenames(filenames) -> List[str]:
    return sorted({m.group(1) for m in map(_ANY_RECORD.match, filenames) if m})


class RecordStore(ABC):
    """
    Persisted call records, addressed by (fixture name, 1-based index).

    Subclasses provide raw text access; loading, validation and the
    compare-then-write protocol are shared.
    """

    @abstractmethod
    def read_text(self, name: str, index: int) -> Optional[str]:
        """Stored text for a record, or None if there is none."""

    @abstractmethod
    def write_text(self, name: str, index: int, content: str) -> None:
        """Store text for a record, replacing any previous content."""

    @abstractmethod
    def list_indices(self, name: str) -> List[int]:
        """Stored indices for ``name``, ascending."""

    @abstractmethod
    def describe(self, name: str, index: int) -> str:
        """Human-readable location of a record, for messages."""

    @abstractmethod
    def list_names(self) -> List[str]:
        """Fixture names that have at least one stored record, sorted."""

    def load(self, name: str, index: int) -> Optional[CallRecord]:
        """
        Load and validate a record.

        Malformed content is logged and reported as absent so the call can
        go on to re-create it.
        """
        text = self.read_text(name, index)
        if text is None:
            return None

        parsed = parse_record(text)
        if not parsed.ok:
            logger.warning(
                "Invalid call record content, treating record as absent",
                location=self.describe(name, index),
                reason=parsed.error,
            )
            return None
        return parsed.record

    def save(self, name: str, index: int, content: str) -> None:
        self.write_text(name, index, content)

    def match(
        self,
        name: str,
        index: int,
        content: str,
        mode: UpdateMode,
        message: str = "",
    ) -> WriteStatus:
        """
        Compare proposed content with the stored record and write it if allowed.

        Args:
            name: Fixture name
            index: 1-based call index
            content: Canonical record text the current call produced
            mode: Active update mode; decides whether a write is accepted
            message: Context for the failure message

        Returns:
            WriteStatus describing what happened

        Raises:
            RecordMismatchError: If content differs and the mode refuses the write
        """
        previous = self.read_text(name, index)
        if previous == content:
            return WriteStatus.UNCHANGED

        if previous is None and mode.may_create:
            self.save(name, index, content)
            return WriteStatus.CREATED
        if previous is not None and mode.may_update:
            self.save(name, index, content)
            return WriteStatus.UPDATED

        location = self.describe(name, index)
        if not message:
            message = f"Call record mismatch at {location} (mode: {mode.value})"
        raise RecordMismatchError(
            message,
            location=location,
            expected=previous,
            actual=content,
        )


@dataclass
class FileRecordStore(RecordStore):
    """
    Records as JSON files in one folder: ``{folder}/{name}-{index:03d}.json``.

    The folder is created on first write, so read-only runs never touch disk.
    """

    folder: str = "__records__"

    def path(self, name: str, index: int) -> str:
        return os.path.join(self.folder, record_filename(name, index))

    def read_text(self, name: str, index: int) -> Optional[str]:
        path = self.path(name, index)
        if not os.path.isfile(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def write_text(self, name: str, index: int, content: str) -> None:
        os.makedirs(self.folder, exist_ok=True)
        with open(self.path(name, index), "w", encoding="utf-8", newline="\n") as f:
            f.write(content)

    def list_indices(self, name: str) -> List[int]:
        if not os.path.isdir(self.folder):
            return []
        pattern = _filename_pattern(name)
        indices = []
        for filename in os.listdir(self.folder):
            m = pattern.match(filename)
            if m:
                indices.append(int(m.group(1)))
        return sorted(indices)

    def list_names(self) -> List[str]:
        if not os.path.isdir(self.folder):
            return []
        return _names_from_filenames(os.listdir(self.folder))

    def describe(self, name: str, index: int) -> str:
        return os.path.relpath(self.path(name, index))


@dataclass
class MemoryRecordStore(RecordStore):
    """In-memory records, keyed by filename. Useful for tests."""

    records: Dict[str, str] = field(default_factory=dict)

    def read_text(self, name: str, index: int) -> Optional[str]:
        return self.records.get(record_filename(name, index))

    def write_text(self, name: str, index: int, content: str) -> None:
        self.records[record_filename(name, index)] = content

    def list_indices(self, name: str) -> List[int]:
        pattern = _filename_pattern(name)
        return sorted(
            int(m.group(1)) for m in map(pattern.match, self.records) if m
        )

    def list_names(self) -> List[str]:
        return _names_from_filenames(self.records)

    def describe(self, name: str, index: int) -> str:
        return record_filename(name, index)
