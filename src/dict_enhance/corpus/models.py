from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class CorpusBlob:
    """Text of one dictionary file, keyed by its bucket (the file stem)."""

    key: str
    text: str


@dataclass(frozen=True)
class RawEntry:
    """One entry's text, from its anchor up to the next anchor or end of blob."""

    text: str
    offset: int
    ordinal: int


@dataclass(frozen=True)
class ParsedEntry:
    headword: str
    raw: str
    body: str
    reading: str = ""
    annotation: Optional[str] = None
    kanji_variants: Tuple[str, ...] = field(default_factory=tuple)
    # offset in ``raw`` just past the paragraph break that closes the head;
    # None marks an entry that did not fit the grammar
    splice_at: Optional[int] = None

    @property
    def well_formed(self) -> bool:
        return self.splice_at is not None
