"""Candidate lookup keys for the kanji variants of an entry.

Dictionary variant fields use two notations a glossary does not:

* alternate spellings separated by ``／`` (``岳／嶽``);
* okurigana that may be omitted, in full-width parentheses
  (``素晴（ら）しい`` is written ``素晴らしい`` or ``素晴しい``).
"""
from __future__ import annotations

import re
from typing import Iterable, Iterator, List, NamedTuple, Sequence, Tuple

from .grammar import VARIANT_SEPARATOR

OPEN_PAREN = "（"
CLOSE_PAREN = "）"
RE_PAREN_GROUP = re.compile(f"{OPEN_PAREN}[^{CLOSE_PAREN}]*{CLOSE_PAREN}")


def split_variants(field: str | None) -> Tuple[str, ...]:
    """Split a ``【…】`` field body on ``／``, dropping empty parts."""
    if not field:
        return ()
    return tuple(part for part in field.split(VARIANT_SEPARATOR) if part)


class VariantCandidates(NamedTuple):
    variant: str
    candidates: List[str]


def candidate_keys(variant: str) -> List[str]:
    """Return lookup keys for one variant in trial order.

    The variant itself comes first, then the variant with the parentheses
    dropped (keeping the kana), then with the parenthesized groups removed.
    Duplicates are not repeated.
    """
    keys = [variant]
    unbracketed = variant.replace(OPEN_PAREN, "").replace(CLOSE_PAREN, "")
    if unbracketed != variant:
        keys.append(unbracketed)
    elided = RE_PAREN_GROUP.sub("", variant)
    if elided != variant and elided != unbracketed:
        keys.append(elided)
    return keys


class VariantExpander:
    """Restartable iterable of :class:`VariantCandidates` for a variant field.

    Accepts either the raw field text (``"岳／嶽"``) or the already split
    variant list.
    """

    def __init__(self, variants: str | Sequence[str]) -> None:
        if isinstance(variants, str):
            self.variants = split_variants(variants)
        else:
            self.variants = tuple(variants)

    def __iter__(self) -> Iterator[VariantCandidates]:
        for variant in self.variants:
            yield VariantCandidates(variant, candidate_keys(variant))

    def __len__(self) -> int:
        return len(self.variants)

    def keys(self) -> Iterable[str]:
        """All candidate keys flattened in trial order."""
        for _, candidates in self:
            yield from candidates
