"""Configuration schema dataclasses for tfvc-bridge.

All fields are optional so partial configs (system, user, project) merge
together cleanly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any


@dataclass
class TfvcConfig:
    """Where the TF tool lives and how to talk to it.

    Example config.yaml:
        tfvc:
          location: ~/tools/TEE-CLC-14.134.0/tf
          proxy: http://tfsproxy:8081
          restrict_workspace: true
    """

    location: str | None = None  # Full path to tf / tf.exe (including filename)
    proxy: str | None = None  # TFS proxy URL, CLC only
    restrict_workspace: bool = False  # Limit status/workspace lookup to the open folder

    def __post_init__(self) -> None:
        if self.location:
            self.location = self.location.strip()
            if self.location.startswith("~"):
                self.location = os.path.expanduser(self.location)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str | None = None  # TRACE, DEBUG, VERBOSE, INFO, WARNING, ERROR
    verbose: int | None = None  # 0-4, overrides level when set
    file: str | None = None  # Log file path


@dataclass
class Config:
    """Root configuration object."""

    tfvc: TfvcConfig = field(default_factory=TfvcConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Unrecognised top-level sections are kept for callers that extend the file
    extra: dict[str, Any] = field(default_factory=dict)
