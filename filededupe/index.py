"""In-memory content and name indexes for a single run."""
from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from .models import Record


class FingerprintIndex:
    """Map of fingerprint to its canonical Record. The first Record wins."""

    def __init__(self) -> None:
        self._records: Dict[str, Record] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._records

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records.values())

    def get(self, fingerprint: str) -> Optional[Record]:
        return self._records.get(fingerprint)

    def add(self, record: Record) -> bool:
        """Insert ``record`` unless its fingerprint is already indexed."""
        if record.fingerprint in self._records:
            return False
        self._records[record.fingerprint] = record
        return True

    def unstored(self) -> List[Record]:
        return [r for r in self._records.values() if not r.stored]

    def missing(self) -> List[Record]:
        return [r for r in self._records.values() if r.stored and not r.seen]


class NameIndex:
    """Base name to ``{fingerprint: path}`` for every name observed.

    A disabled index records nothing and never reports a collision.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._names: Dict[str, Dict[str, str]] = {}

    def add(self, record: Record) -> None:
        if self.enabled:
            self._names.setdefault(record.name, {})[record.fingerprint] = record.path

    def collides(self, name: str, fingerprint: str) -> bool:
        seen = self._names.get(name)
        return bool(seen) and fingerprint not in seen
