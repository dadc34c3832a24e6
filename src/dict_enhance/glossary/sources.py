"""Glossary file formats.

Each format turns one UTF-8, newline-terminated text file into a
:class:`GlossaryTable`. Lines that do not fit a format are skipped; a broken
line never aborts loading, but an unreadable file does.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from dict_enhance.common.errors import ConfigError, FileError

from .table import GlossaryTable

logger = logging.getLogger(__name__)

RE_ENTL_TAG = re.compile(r"EntL[0-9]*X?/$")
PRIORITY_MARK = "(P)"

ParsedLine = Tuple[List[str], str]


class GlossarySource:
    """Base class for line-oriented glossary formats."""

    source_id: str = ""

    def parse_line(self, line: str, lineno: int) -> Optional[ParsedLine]:
        """Return ``(headwords, gloss)`` for one line, or ``None`` to skip it."""
        raise NotImplementedError

    def load(self, path: Path) -> GlossaryTable:
        path = Path(path)
        entries: Dict[str, str] = {}
        skipped = 0
        logger.info("Loading %s glossary from %s", self.source_id, path)
        for lineno, line in _read_lines(path):
            parsed = self.parse_line(line, lineno)
            if parsed is None:
                skipped += 1
                continue
            headwords, gloss = parsed
            for headword in headwords:
                entries[headword] = gloss
        logger.info(
            "Loaded %d %s headwords (%d lines skipped)",
            len(entries),
            self.source_id,
            skipped,
        )
        return GlossaryTable(self.source_id, path, entries, skipped=skipped)


class EdictFormat(GlossarySource):
    """EDICT2: ``KANJI1;KANJI2(P) [KANA1;KANA2] /gloss/gloss/EntL1234567X/``.

    Pure kana entries have no bracketed reading; the gloss follows the headword
    field directly.
    """

    source_id = "edict2"

    def parse_line(self, line: str, lineno: int) -> Optional[ParsedLine]:
        fields = line.split(None, 1)
        if len(fields) < 2:
            logger.warning("Skipping edict2 line %d: %r", lineno, line)
            return None

        headfield, rest = fields
        if rest.startswith("/"):
            raw_gloss = rest
        else:
            # bracketed kana list; the resolver only works on kanji keys
            parts = rest.split(None, 1)
            raw_gloss = parts[1] if len(parts) > 1 else ""

        gloss = trim_edict_gloss(raw_gloss)
        if not gloss:
            logger.warning("Skipping edict2 line %d (empty gloss): %r", lineno, line)
            return None

        headwords = [strip_priority_mark(word) for word in headfield.split(";")]
        return [word for word in headwords if word], gloss


class Japanese3Format(GlossarySource):
    """Japanese3 export: ``headword|reading|gloss``.

    The reading column is carried by the export but not used for lookups.
    """

    source_id = "japanese3"

    def parse_line(self, line: str, lineno: int) -> Optional[ParsedLine]:
        fields = line.split("|", 2)
        headword = fields[0]
        gloss = fields[2] if len(fields) > 2 else ""
        if not headword or not gloss:
            return None
        return [headword], gloss


SOURCE_FORMATS: Dict[str, GlossarySource] = {
    EdictFormat.source_id: EdictFormat(),
    Japanese3Format.source_id: Japanese3Format(),
}


def load_glossary(source: str, path: Path) -> GlossaryTable:
    try:
        fmt = SOURCE_FORMATS[source]
    except KeyError as exc:
        raise ConfigError(f"Unknown dictionary: {source}") from exc
    return fmt.load(path)


def trim_edict_gloss(raw: str) -> str:
    """Strip the framing slashes and the trailing ``EntL`` sequence tag."""

    gloss = raw.strip()
    if gloss.startswith("/"):
        gloss = gloss[1:]
    gloss = RE_ENTL_TAG.sub("", gloss, count=1)
    if gloss.endswith("/"):
        gloss = gloss[:-1]
    return gloss


def strip_priority_mark(headword: str) -> str:
    if headword.endswith(PRIORITY_MARK):
        return headword[: -len(PRIORITY_MARK)]
    return headword


def _read_lines(path: Path) -> Iterator[Tuple[int, str]]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            for lineno, line in enumerate(handle, start=1):
                yield lineno, line.rstrip("\r\n")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileError(f"Cannot read glossary {path}: {exc}", path=path) from exc
