"""Which build of the TF tool is being driven."""

from __future__ import annotations

from enum import Enum


class ToolVariant(Enum):
    """INTERACTIVE is the cross-platform CLC (``tf``/``tf.cmd``); BATCH is ``tf.exe``."""

    INTERACTIVE = "clc"
    BATCH = "exe"

    @classmethod
    def for_exe(cls, is_exe: bool) -> ToolVariant:
        return cls.BATCH if is_exe else cls.INTERACTIVE
