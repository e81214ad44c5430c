"""Tab-separated list of previously seen files.

One record per line, seven fields in this order::

    fingerprint  size  modified  orig_path  orig_name  path  name

Lines starting with ``#`` are comments. The file is only ever appended to.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .errors import ListFileError
from .models import Record
from .report import Reporter

FIELD_COUNT = 7
_UNSAFE = re.compile(r"[\t\r\n]")
_WHITESPACE = re.compile(r"\s+")


def parse_line(line: str) -> Optional[Record]:
    if line.startswith("#"):
        return None
    parts = line.rstrip("\r\n").split("\t")
    parts += [""] * (FIELD_COUNT - len(parts))
    fingerprint, size, modified, orig_path, orig_name, path, name = parts[:FIELD_COUNT]
    fingerprint = _WHITESPACE.sub("", fingerprint)
    if not fingerprint or not name.strip():
        return None
    return Record(
        fingerprint=fingerprint,
        size=size,
        modified=modified,
        orig_path=orig_path,
        orig_name=orig_name,
        path=path,
        name=name,
        stored=True,
    )


def format_line(record: Record) -> str:
    return "\t".join(record.fields()) + "\n"


def is_writable(record: Record) -> bool:
    return not any(_UNSAFE.search(value) for value in record.fields())


def load_list(path: Union[str, Path]) -> List[Record]:
    """Read every valid record from ``path``; each is marked stored.

    Raises ListFileError when the file is missing or unreadable.
    """
    list_path = Path(path)
    if not list_path.is_file():
        raise ListFileError(f"List file '{path}' not found")
    try:
        with list_path.open("r", encoding="utf-8", newline="") as f:
            records = [r for r in (parse_line(line) for line in f) if r is not None]
    except (OSError, UnicodeDecodeError) as e:
        raise ListFileError(f"List file '{path}' could not be opened: {e}")
    return records


def append_list(
    path: Union[str, Path],
    records: Iterable[Record],
    reporter: Optional[Reporter] = None,
) -> int:
    """Append the records not yet stored, ordered by name.

    Records whose fields hold a tab or line break are left out with a
    warning. The records are not modified: ``stored`` keeps meaning
    "loaded from the list" for the rest of the run. Returns the number of
    lines written.
    """
    pending = sorted((r for r in records if not r.stored), key=lambda r: r.name)
    written = 0
    try:
        with Path(path).open("a", encoding="utf-8", newline="") as f:
            for record in pending:
                if not is_writable(record):
                    if reporter:
                        reporter.warn(f"Not storing '{record.display_path}': name contains a tab or line break")
                    continue
                f.write(format_line(record))
                written += 1
    except OSError as e:
        raise ListFileError(f"List file '{path}' could not be opened: {e}")
    return written
