"""One dedupe run: load the list, scan the roots, act, store, report."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, TextIO

from .actions import ActionEngine
from .classify import Classifier
from .config import DedupeConfig
from .errors import ConfigError, DestinationDirectoryError, SourceDirectoryError
from .index import FingerprintIndex, NameIndex
from .listfile import append_list, load_list
from .models import Counters
from .report import Reporter
from .walker import normalize_root, walk_root

LogCallback = Callable[[str], None]


class Session:
    """Owns the indexes and counters for a single run."""

    def __init__(
        self,
        cfg: DedupeConfig,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        log_cb: Optional[LogCallback] = None,
    ) -> None:
        self.cfg = cfg
        self.counters = Counters()
        self.index = FingerprintIndex()
        self.names = NameIndex(enabled=cfg.verbose)
        self.reporter = Reporter(cfg.verbose, out=out, err=err, log_cb=log_cb)
        self.classifier = Classifier(self.index, self.names, self.counters, cfg.hash)
        self.engine = ActionEngine(cfg.actions, self.reporter)

    @property
    def list_name(self) -> Optional[str]:
        if not self.cfg.list_path:
            return None
        return os.path.basename(self.cfg.list_path.rstrip("/"))

    def validate(self, roots: Sequence[str]) -> List[str]:
        if not roots:
            raise SourceDirectoryError("Source directory is required")
        cleaned = [normalize_root(r) for r in roots]
        for root in cleaned:
            if not os.path.isdir(root):
                raise SourceDirectoryError(f"Source directory '{root}' is not a directory")
        if self.cfg.store_new and not self.cfg.list_path:
            raise ConfigError("Storing new files requires a list file")
        acts = self.cfg.actions
        if acts.copy_dir and not os.path.isdir(acts.copy_dir):
            raise DestinationDirectoryError(f"Copy destination directory '{acts.copy_dir}' is not a directory")
        if acts.move_dir and not os.path.isdir(acts.move_dir):
            raise DestinationDirectoryError(f"Move destination directory '{acts.move_dir}' is not a directory")
        return cleaned

    def load(self) -> int:
        if not self.cfg.list_path:
            return 0
        for record in load_list(self.cfg.list_path):
            if self.index.add(record):
                self.names.add(record)
        self.counters.loaded = len(self.index)
        self.reporter.info(f"Loaded {self.counters.loaded} files from list")
        return self.counters.loaded

    def scan(self, roots: Iterable[str]) -> None:
        for root in roots:
            for candidate in walk_root(root, self.cfg.scan, self.list_name, self.reporter, self.counters):
                try:
                    result = self.classifier.classify(candidate)
                except OSError as e:
                    self.reporter.notice(f"Skipping, Error opening '{candidate.path}': {e.strerror or e}")
                    continue
                applied = self.engine.apply(candidate.path, result)
                self.reporter.file_line(candidate.path, result, applied)

    def store(self) -> int:
        if not self.cfg.list_path:
            return 0
        pending = len(self.index.unstored())
        written = append_list(Path(self.cfg.list_path), self.index.unstored(), self.reporter)
        self.counters.stored += written
        self.counters.rejected += pending - written
        self.reporter.info(f"Stored {written} new files in list '{self.cfg.list_path}'")
        return written

    def run(self, roots: Sequence[str]) -> Counters:
        cleaned = self.validate(roots)
        self.load()
        self.scan(cleaned)
        if self.cfg.store_new:
            self.store()
        if self.cfg.missing_accounting:
            self.reporter.missing(self.index, self.counters)
        if self.cfg.verbose:
            self.reporter.totals(self.counters)
        self.counters.warnings = self.reporter.warnings
        return self.counters


def run_dedupe(
    roots: Sequence[str],
    cfg: DedupeConfig,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
    log_cb: Optional[LogCallback] = None,
) -> Counters:
    return Session(cfg, out=out, err=err, log_cb=log_cb).run(roots)
