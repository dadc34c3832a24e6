"""Unpacked dictionary directory.

A Kobo dictionary unpacks into ``*.html`` files (one per bucket, each
gzip-compressed despite the extension), ``*.gif`` images and ``words*``
index files. Only the html files are rewritten; the rest is copied as-is.
"""
from __future__ import annotations

import gzip
import logging
import shutil
from pathlib import Path
from typing import Iterator, List

from dict_enhance.common.errors import FileError
from dict_enhance.common.fileio import atomic_write_bytes

from .models import CorpusBlob

logger = logging.getLogger(__name__)

BLOB_SUFFIX = ".html"
COMPANION_PATTERNS = ("*.gif", "words*")


class CorpusStore:
    def __init__(self, directory: Path, *, compressed: bool = True) -> None:
        self.directory = Path(directory)
        self.compressed = compressed

    def bucket_keys(self) -> List[str]:
        if not self.directory.is_dir():
            raise FileError(
                f"Dictionary directory {self.directory} does not exist",
                path=self.directory,
            )
        return sorted(path.stem for path in self.directory.glob(f"*{BLOB_SUFFIX}"))

    def path_for(self, key: str, directory: Path | None = None) -> Path:
        return Path(directory or self.directory) / f"{key}{BLOB_SUFFIX}"

    def read(self, key: str) -> CorpusBlob:
        path = self.path_for(key)
        try:
            if self.compressed:
                with gzip.open(path, "rb") as handle:
                    data = handle.read()
            else:
                with path.open("rb") as handle:
                    data = handle.read()
            text = data.decode("utf-8")
        except (OSError, EOFError, UnicodeDecodeError) as exc:
            raise FileError(f"Cannot read {path}: {exc}", path=path) from exc
        return CorpusBlob(key, text)

    def blobs(self) -> Iterator[CorpusBlob]:
        for key in self.bucket_keys():
            yield self.read(key)

    def write(self, output_dir: Path, blob: CorpusBlob) -> Path:
        path = self.path_for(blob.key, output_dir)
        data = blob.text.encode("utf-8")
        if self.compressed:
            data = gzip.compress(data)
        atomic_write_bytes(path, data)
        return path

    def copy_companions(self, output_dir: Path) -> int:
        """Copy images and word index files next to the rewritten html."""
        output_dir = Path(output_dir)
        copied = 0
        for pattern in COMPANION_PATTERNS:
            for source in sorted(self.directory.glob(pattern)):
                if not source.is_file():
                    continue
                target = output_dir / source.name
                try:
                    output_dir.mkdir(parents=True, exist_ok=True)
                    shutil.copy2(source, target)
                except OSError as exc:
                    raise FileError(f"Cannot copy {source} to {target}: {exc}", path=target) from exc
                copied += 1
        logger.info("Copied %d companion files to %s", copied, output_dir)
        return copied
