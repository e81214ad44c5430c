from __future__ import annotations

import os
from typing import Optional

from .config import HashConfig
from .index import FingerprintIndex, NameIndex
from .models import Candidate, Classification, Counters, Record, Tag
from .util import hash_file


def record_path(directory: str) -> str:
    return "" if directory in (".", "./") else directory


class Classifier:
    """Fingerprint a candidate and place it relative to the index.

    ``classify`` raises OSError for an unreadable file before touching any
    counter or index entry, so the caller can skip it cleanly.
    """

    def __init__(
        self,
        index: FingerprintIndex,
        names: NameIndex,
        counters: Counters,
        hash_config: Optional[HashConfig] = None,
    ) -> None:
        self.index = index
        self.names = names
        self.counters = counters
        self.hash_config = hash_config or HashConfig()

    def fingerprint(self, path: str) -> str:
        return hash_file(path, self.hash_config.algorithm, self.hash_config.chunk_bytes)

    def classify(self, candidate: Candidate) -> Classification:
        fingerprint = self.fingerprint(candidate.path)
        st = os.stat(candidate.path)
        self.counters.files += 1

        existing = self.index.get(fingerprint)
        if existing is not None:
            if existing.stored:
                existing.seen = True
                self.counters.in_list += 1
                return Classification(fingerprint, Tag.IN_LIST, record=existing)
            return Classification(fingerprint, Tag.NEW_DUPLICATE, record=existing)

        record = Record(
            fingerprint=fingerprint,
            size=st.st_size,
            modified=int(st.st_mtime),
            path=record_path(candidate.directory),
            name=candidate.name,
        )
        self.index.add(record)
        self.counters.new += 1
        name_duplicate = self.names.collides(record.name, fingerprint)
        self.names.add(record)
        return Classification(fingerprint, Tag.NEW, name_duplicate=name_duplicate, record=record)
