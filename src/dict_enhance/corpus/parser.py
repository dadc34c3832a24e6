from __future__ import annotations

import logging

from .grammar import HEAD_PATTERN, HEADWORD_PATTERN
from .models import ParsedEntry, RawEntry
from .variants import split_variants

logger = logging.getLogger(__name__)

CONTEXT_CHARS = 80


class EntryParser:
    """Extract the head fields of one raw entry.

    An entry that does not fit the head grammar is returned with
    ``splice_at=None`` and its full text as body, so it is written back
    byte-for-byte.
    """

    def parse(self, entry: RawEntry | str) -> ParsedEntry:
        raw = entry.text if isinstance(entry, RawEntry) else entry
        match = HEAD_PATTERN.match(raw)
        if match is None:
            headword = _headword_of(raw)
            logger.debug(
                "Structural mismatch for entry %r: %r", headword, raw[:CONTEXT_CHARS]
            )
            return ParsedEntry(headword=headword, raw=raw, body=raw)

        end = match.end()
        return ParsedEntry(
            headword=match.group("headword"),
            raw=raw,
            body=raw[end:],
            reading=match.group("reading") or "",
            annotation=match.group("annotation"),
            kanji_variants=split_variants(match.group("variants")),
            splice_at=end,
        )


def _headword_of(raw: str) -> str:
    found = HEADWORD_PATTERN.match(raw)
    return found.group("headword") if found else ""
