"""Shared infrastructure for the dictionary enhancement toolchain."""

from __future__ import annotations

from .errors import ConfigError, EnhanceError, FileError, MalformedBlobError

__all__ = [
    "ConfigError",
    "EnhanceError",
    "FileError",
    "MalformedBlobError",
]
