from __future__ import annotations

from typing import Iterator, NamedTuple

from dict_enhance.common.errors import MalformedBlobError

from .grammar import ANCHOR
from .models import RawEntry


class ScannedBlob(NamedTuple):
    header: str
    entries: Iterator[RawEntry]


class EntryScanner:
    """Split a corpus blob into its header and raw entries.

    The scan is a single forward pass: everything before the first anchor is
    the header, and each entry runs from its anchor to the next one (or the end
    of the blob). ``header + "".join(e.text for e in entries)`` reproduces the
    blob exactly. The entry iterator is lazy and can only be consumed once.
    """

    def scan(self, text: str, *, bucket: str = "") -> ScannedBlob:
        first = text.find(ANCHOR)
        if first < 0:
            raise MalformedBlobError(bucket)
        return ScannedBlob(header=text[:first], entries=self._entries(text, first))

    @staticmethod
    def _entries(text: str, start: int) -> Iterator[RawEntry]:
        ordinal = 0
        length = len(text)
        while start < length:
            following = text.find(ANCHOR, start + len(ANCHOR))
            end = following if following >= 0 else length
            yield RawEntry(text=text[start:end], offset=start, ordinal=ordinal)
            ordinal += 1
            start = end
