"""Configuration defaults, env vars, and runtime options for tasker."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


VERSION = "1.0.0"

DEFAULT_STORE_FILE = "tasks.json"
STORE_FILE_ENV = "TASKER_FILE"


@dataclass
class Config:
    """Runtime configuration for one command invocation."""

    # Store
    store_file: str = ""

    # Misc
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.store_file:
            self.store_file = os.environ.get(STORE_FILE_ENV) or DEFAULT_STORE_FILE

    @property
    def store_path(self) -> Path:
        return Path(self.store_file).expanduser()
