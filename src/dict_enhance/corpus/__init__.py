"""Entry scanning, glossary resolution and merging for dictionary files."""

from .engine import CorpusEngine, EngineStats
from .merger import merge
from .models import CorpusBlob, ParsedEntry, RawEntry
from .parser import EntryParser
from .resolver import Resolver
from .scanner import EntryScanner
from .store import CorpusStore
from .variants import VariantExpander, candidate_keys

__all__ = [
    "CorpusBlob",
    "CorpusEngine",
    "CorpusStore",
    "EngineStats",
    "EntryParser",
    "EntryScanner",
    "ParsedEntry",
    "RawEntry",
    "Resolver",
    "VariantExpander",
    "candidate_keys",
    "merge",
]
