"""Fatal error types.

Recoverable problems (a glossary line or dictionary entry that does not fit its
grammar) are never raised; they are logged and counted where they occur.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class EnhanceError(Exception):
    """Base class for errors that abort a run."""


class ConfigError(EnhanceError):
    """No usable glossary was declared, or the settings are invalid."""


class FileError(EnhanceError):
    """A declared glossary, corpus file or output location is unusable."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class MalformedBlobError(EnhanceError):
    """A corpus blob contains no entry anchor at all."""

    def __init__(self, bucket: str) -> None:
        super().__init__(f"malformed corpus blob '{bucket}': no entry anchor found")
        self.bucket = bucket
