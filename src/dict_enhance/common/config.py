from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Literal, Optional, Sequence

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

SourceType = Literal["edict2", "japanese3"]

SOURCE_TYPES: tuple[str, ...] = ("edict2", "japanese3")
ENV_PATHS = {
    "edict2": "DICT_ENHANCE_EDICT",
    "japanese3": "DICT_ENHANCE_JAPANESE3",
}
DEFAULT_PATHS = {
    "edict2": "edict2",
    "japanese3": "japanese3-data",
}


class DictionarySpec(BaseModel):
    source: SourceType
    path: Path

    @field_validator("path", mode="before")
    def expand_path(cls, v: object) -> object:
        if isinstance(v, str):
            return Path(os.path.expanduser(v.strip()))
        return v


class EnhanceSettings(BaseModel):
    """Run settings: glossaries in priority order plus processing switches."""

    dictionaries: List[DictionarySpec] = Field(default_factory=list)
    merge_all: bool = False
    workers: int = Field(default=1, ge=1)
    compressed: bool = True


def default_dictionary_paths() -> dict[str, Path]:
    """Return glossary locations, honouring the ``DICT_ENHANCE_*`` overrides."""

    return {
        source: Path(os.environ.get(env_name) or DEFAULT_PATHS[source])
        for source, env_name in ENV_PATHS.items()
    }


def load_settings(path: Path) -> EnhanceSettings:
    """Read an :class:`EnhanceSettings` document from YAML."""

    try:
        raw = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read settings file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Settings file {path} is not valid YAML: {exc}") from exc

    try:
        return EnhanceSettings.model_validate(raw or {})
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings in {path}: {exc}") from exc


def resolve_dictionaries(
    requested: Optional[Sequence[str]],
    paths: dict[str, Path],
) -> List[DictionarySpec]:
    """Turn requested source names into specs, auto-detecting when none given.

    Without an explicit request every known glossary whose file is readable is
    used, edict2 first. An explicit request is taken as-is; missing files are
    reported later when the glossary is loaded.
    """
    if requested:
        specs: List[DictionarySpec] = []
        for name in _dedupe(requested):
            if name not in SOURCE_TYPES:
                raise ConfigError(f"Unknown dictionary: {name}")
            specs.append(DictionarySpec(source=name, path=paths[name]))
        return specs

    specs = [
        DictionarySpec(source=name, path=paths[name])
        for name in SOURCE_TYPES
        if _is_readable(paths[name])
    ]
    if not specs:
        raise ConfigError("No dictionary found or not readable.")
    logger.info(
        "Auto-detected dictionaries: %s", ", ".join(spec.source for spec in specs)
    )
    return specs


def _dedupe(names: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    ordered: List[str] = []
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        ordered.append(name)
    return ordered


def _is_readable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)
