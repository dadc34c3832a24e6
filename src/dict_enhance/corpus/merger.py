from __future__ import annotations

from dict_enhance.glossary.stack import PARAGRAPH_BREAK, ResolutionResult

from .models import ParsedEntry


def merge(entry: ParsedEntry, result: ResolutionResult) -> str:
    """Return the entry text with the resolved gloss as its first paragraph.

    The gloss and a paragraph break are inserted right after the paragraph
    break that closes the head (``<b>reading</b>【variants】<p>``), so the
    original body follows unchanged. Nothing guards against merging the same
    entry twice.
    """
    if not result or entry.splice_at is None:
        return entry.raw
    at = entry.splice_at
    return entry.raw[:at] + result.gloss + PARAGRAPH_BREAK + entry.raw[at:]
