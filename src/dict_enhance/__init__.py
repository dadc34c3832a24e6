"""Merge bilingual glossary definitions into Kobo dictionary entries."""

__version__ = "0.4.0"
