from __future__ import annotations

from dict_enhance.glossary.stack import NO_MATCH, GlossaryStack, ResolutionResult

from .models import ParsedEntry
from .variants import VariantExpander


class Resolver:
    """Find the gloss for an entry by trying its kanji variants in order.

    Variants are tried in the order the entry lists them and, within a variant,
    candidates in :func:`~dict_enhance.corpus.variants.candidate_keys` order.
    The first key any glossary knows wins. Entries without kanji variants are
    not looked up at all.
    """

    def __init__(self, stack: GlossaryStack) -> None:
        self.stack = stack

    def resolve(self, entry: ParsedEntry, *, record: bool = True) -> ResolutionResult:
        if not entry.kanji_variants:
            return NO_MATCH
        for key in VariantExpander(entry.kanji_variants).keys():
            result = self.stack.resolve(key, record=record)
            if result:
                return result
        return NO_MATCH
