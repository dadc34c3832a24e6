from __future__ import annotations

import threading
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional


class GlossaryTable:
    """Read-only headword -> gloss mapping loaded from one glossary file.

    The mapping never changes after construction; only the usage counter does,
    and it is safe to bump from several worker threads.
    """

    def __init__(
        self,
        source_id: str,
        path: Path,
        entries: Mapping[str, str],
        *,
        skipped: int = 0,
    ) -> None:
        self.source_id = source_id
        self.path = Path(path)
        self._entries: Mapping[str, str] = MappingProxyType(dict(entries))
        self.skipped = skipped
        self._uses = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return (
            f"GlossaryTable({self.source_id!r}, {str(self.path)!r}, "
            f"entries={len(self)}, uses={self._uses})"
        )

    @property
    def entries(self) -> Mapping[str, str]:
        return self._entries

    @property
    def uses(self) -> int:
        return self._uses

    def get(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def record_use(self, count: int = 1) -> None:
        with self._lock:
            self._uses += count
