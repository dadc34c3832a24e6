"""Glossary loading and prioritized lookup."""

from .sources import EdictFormat, GlossarySource, Japanese3Format, load_glossary
from .stack import NO_MATCH, PARAGRAPH_BREAK, GlossaryStack, ResolutionResult
from .table import GlossaryTable

__all__ = [
    "EdictFormat",
    "GlossarySource",
    "GlossaryStack",
    "GlossaryTable",
    "Japanese3Format",
    "NO_MATCH",
    "PARAGRAPH_BREAK",
    "ResolutionResult",
    "load_glossary",
]
