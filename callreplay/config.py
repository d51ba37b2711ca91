"""
Environment-driven settings.

Settings are read fresh on every call to Settings.from_env(); nothing here is
cached, so a test session can change the environment between runs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

UPDATE_ENV = "CALLREPLAY_UPDATE"
RECORDS_DIR_ENV = "CALLREPLAY_RECORDS_DIR"
CI_ENV = "CI"

DEFAULT_RECORDS_DIRNAME = "__records__"

_FALSY = {"", "0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """
    Ambient configuration for fixtures.

    Attributes:
        update: Raw update mode text ("none", "new", "all"), None if unset
        records_dir: Folder for record files, None to derive one per fixture
        ci: True when running under CI
    """

    update: Optional[str] = None
    records_dir: Optional[str] = None
    ci: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        update = env.get(UPDATE_ENV) or None
        records_dir = env.get(RECORDS_DIR_ENV) or None
        ci = env.get(CI_ENV, "").strip().lower() not in _FALSY
        return cls(update=update, records_dir=records_dir, ci=ci)
