from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from dict_enhance.common.config import DictionarySpec

from .sources import load_glossary
from .table import GlossaryTable

PARAGRAPH_BREAK = "<p>"


@dataclass(frozen=True)
class ResolutionResult:
    """Glosses found for one lookup key; the empty result means no match."""

    glosses: Tuple[str, ...] = ()
    sources: Tuple[str, ...] = ()
    key: Optional[str] = None

    def __bool__(self) -> bool:
        return bool(self.glosses)

    @property
    def gloss(self) -> str:
        return PARAGRAPH_BREAK.join(self.glosses)


NO_MATCH = ResolutionResult()


class GlossaryStack:
    """Glossary tables in priority order.

    With ``merge_all`` every table holding the key contributes its gloss;
    otherwise the first table in priority order wins and the rest are not
    consulted.
    """

    def __init__(self, tables: Iterable[GlossaryTable], *, merge_all: bool = False) -> None:
        self._tables: Tuple[GlossaryTable, ...] = tuple(tables)
        self._merge_all = merge_all

    @classmethod
    def from_config(
        cls,
        specs: Iterable[DictionarySpec],
        *,
        merge_all: bool = False,
    ) -> "GlossaryStack":
        tables = [load_glossary(spec.source, spec.path) for spec in specs]
        return cls(tables, merge_all=merge_all)

    def __repr__(self) -> str:
        return f"GlossaryStack({self.source_ids!r}, merge_all={self._merge_all})"

    @property
    def tables(self) -> Tuple[GlossaryTable, ...]:
        return self._tables

    @property
    def merge_all(self) -> bool:
        return self._merge_all

    @property
    def source_ids(self) -> List[str]:
        return [table.source_id for table in self._tables]

    def resolve(self, key: str, *, record: bool = True) -> ResolutionResult:
        """Look ``key`` up; ``record=False`` leaves the usage counters alone."""
        glosses: List[str] = []
        sources: List[str] = []
        for table in self._tables:
            gloss = table.get(key)
            if not gloss:
                continue
            if record:
                table.record_use()
            glosses.append(gloss)
            sources.append(table.source_id)
            if not self._merge_all:
                break
        if not glosses:
            return NO_MATCH
        return ResolutionResult(glosses=tuple(glosses), sources=tuple(sources), key=key)

    def lookup_all(self, key: str) -> List[Tuple[str, str]]:
        """Return ``(source_id, gloss)`` for every table holding ``key``.

        Usage counters are left untouched.
        """
        hits: List[Tuple[str, str]] = []
        for table in self._tables:
            gloss = table.get(key)
            if gloss:
                hits.append((table.source_id, gloss))
        return hits

    def usage(self) -> dict[str, int]:
        return {table.source_id: table.uses for table in self._tables}
