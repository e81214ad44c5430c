from __future__ import annotations

import sys
from typing import Callable, Iterable, Optional, TextIO

from .index import FingerprintIndex
from .models import NAME_DUPLICATE_LABEL, Action, Classification, Counters

LogCallback = Callable[[str], None]

TOTAL_LINE = "%-32s %5d"


class Reporter:
    """Writes per-file tags, skip notices, warnings and run totals.

    ``info`` lines only appear in verbose mode. ``notice`` and ``warn`` are
    unconditional. Every emitted line is mirrored to ``log_cb`` when given.
    """

    def __init__(
        self,
        verbose: bool = False,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        log_cb: Optional[LogCallback] = None,
    ) -> None:
        self.verbose = verbose
        self.out = out
        self.err = err
        self.log_cb = log_cb
        self.warnings = 0

    def _emit(self, message: str, stream: Optional[TextIO]) -> None:
        print(message, file=stream or sys.stdout)
        if not self.log_cb:
            return
        try:
            self.log_cb(message)
        except Exception:
            pass

    def info(self, message: str) -> None:
        if self.verbose:
            self._emit(message, self.out)

    def notice(self, message: str) -> None:
        self._emit(message, self.out)

    def warn(self, message: str) -> None:
        self.warnings += 1
        self._emit(f"Warning: {message}", self.err or sys.stderr)

    def file_line(self, path: str, result: Classification, actions: Iterable[Action]) -> None:
        if not self.verbose:
            return
        tags = [result.tag.label()]
        if result.name_duplicate:
            tags.append(NAME_DUPLICATE_LABEL)
        tags.extend(a.label() for a in actions)
        self._emit(f"   Found file: '{path}': " + " ".join(tags), self.out)

    def totals(self, counters: Counters) -> None:
        self.notice("")
        self.notice(TOTAL_LINE % ("Files loaded from list:", counters.loaded))
        self.notice(TOTAL_LINE % ("Directories scanned:", counters.directories))
        self.notice(TOTAL_LINE % ("Files scanned:", counters.files))
        self.notice(TOTAL_LINE % ("Files found already in the list:", counters.in_list))
        self.notice(TOTAL_LINE % ("New files found:", counters.new))
        self.notice("")

    def missing(self, index: FingerprintIndex, counters: Counters) -> int:
        """List stored records never matched during the scan.

        Read-only with respect to the records themselves.
        """
        self.info("")
        self.info("Files in the list not found during the scan:")
        found = 0
        for record in index.missing():
            self.info(f"   {record.display_path}")
            found += 1
        counters.missing += found
        self.notice(TOTAL_LINE % ("Total missing files:", counters.missing))
        return found
