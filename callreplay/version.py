"""
Callreplay version constants.

The record file format has no version field of its own: a record is always
``{"args": ..., "result": ...}``. ``RECORD_FORMAT`` names that layout so the
CLI can report what it validates against.
"""

# Library version (matches pyproject.toml)
CALLREPLAY_VERSION = "0.1.0"

# Layout of a stored call record
RECORD_FORMAT = "call_record_v1"
