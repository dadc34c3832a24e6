from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional

from tqdm import tqdm

from dict_enhance.glossary.stack import GlossaryStack, ResolutionResult

from .merger import merge
from .models import CorpusBlob, ParsedEntry
from .parser import EntryParser
from .resolver import Resolver
from .scanner import EntryScanner

logger = logging.getLogger(__name__)


@dataclass
class EngineStats:
    blobs: int = 0
    entries: int = 0
    merged: int = 0
    mismatches: int = 0
    no_match: int = 0
    without_variants: int = 0
    resolved: Counter = field(default_factory=Counter)

    def add(self, other: "EngineStats") -> None:
        self.blobs += other.blobs
        self.entries += other.entries
        self.merged += other.merged
        self.mismatches += other.mismatches
        self.no_match += other.no_match
        self.without_variants += other.without_variants
        self.resolved.update(other.resolved)

    def as_dict(self) -> Dict[str, object]:
        return {
            "blobs": self.blobs,
            "entries": self.entries,
            "merged": self.merged,
            "mismatches": self.mismatches,
            "no_match": self.no_match,
            "without_variants": self.without_variants,
            "resolved": dict(self.resolved),
        }

    def summary(self, source_ids: Optional[Iterable[str]] = None) -> str:
        order = list(source_ids) if source_ids is not None else sorted(self.resolved)
        per_source = ", ".join(f"{sid}: {self.resolved.get(sid, 0)}" for sid in order)
        return (
            f"total entries {self.entries}, matches: {self.merged} ({per_source}); "
            f"no match: {self.no_match}, without variants: {self.without_variants}, "
            f"unparsable: {self.mismatches}"
        )


class BlobResult(NamedTuple):
    blob: CorpusBlob
    stats: EngineStats


class EntryTrace(NamedTuple):
    bucket: str
    entry: ParsedEntry
    result: ResolutionResult


class CorpusEngine:
    """Scan, parse, resolve and merge every entry of every corpus blob.

    Each blob is handled independently and gets its own :class:`EngineStats`,
    so with ``workers > 1`` blobs are processed on a thread pool and the
    per-blob statistics are folded into :attr:`stats` in blob order.
    """

    def __init__(
        self,
        stack: GlossaryStack,
        *,
        workers: int = 1,
        progress: bool = False,
    ) -> None:
        self.stack = stack
        self.workers = max(1, int(workers))
        self.progress = progress
        self.scanner = EntryScanner()
        self.parser = EntryParser()
        self.resolver = Resolver(stack)
        self.stats = EngineStats()

    def process_blob(self, blob: CorpusBlob) -> BlobResult:
        stats = EngineStats(blobs=1)
        scanned = self.scanner.scan(blob.text, bucket=blob.key)
        parts: List[str] = [scanned.header]
        for raw in scanned.entries:
            stats.entries += 1
            entry = self.parser.parse(raw)
            if not entry.well_formed:
                stats.mismatches += 1
                parts.append(raw.text)
                continue
            if not entry.kanji_variants:
                stats.without_variants += 1
                parts.append(raw.text)
                continue

            result = self.resolver.resolve(entry)
            if not result:
                stats.no_match += 1
                parts.append(raw.text)
                continue

            stats.merged += 1
            stats.resolved.update(result.sources)
            logger.debug(
                "Merged %s via %r from %s", entry.headword, result.key, ",".join(result.sources)
            )
            parts.append(merge(entry, result))

        if stats.mismatches:
            logger.debug("%s: %d entries passed through unparsed", blob.key, stats.mismatches)
        return BlobResult(CorpusBlob(blob.key, "".join(parts)), stats)

    def run(self, blobs: Iterable[CorpusBlob]) -> Iterator[CorpusBlob]:
        """Yield the rewritten blobs in input order, accumulating :attr:`stats`."""
        if self.workers == 1:
            results: Iterable[BlobResult] = map(self.process_blob, blobs)
            yield from self._collect(results)
            return

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            yield from self._collect(executor.map(self.process_blob, blobs))

    def check_headword(
        self, blobs: Iterable[CorpusBlob], headword: str
    ) -> List[EntryTrace]:
        """Resolve every entry named ``headword``.

        Nothing is rewritten and glossary usage counters are not touched.
        """
        traces: List[EntryTrace] = []
        for blob in blobs:
            scanned = self.scanner.scan(blob.text, bucket=blob.key)
            for raw in scanned.entries:
                entry = self.parser.parse(raw)
                if entry.headword != headword:
                    continue
                traces.append(
                    EntryTrace(blob.key, entry, self.resolver.resolve(entry, record=False))
                )
        return traces

    def _collect(self, results: Iterable[BlobResult]) -> Iterator[CorpusBlob]:
        for outcome in tqdm(
            results, desc="Merging glossaries", unit="file", disable=not self.progress
        ):
            self.stats.add(outcome.stats)
            yield outcome.blob
