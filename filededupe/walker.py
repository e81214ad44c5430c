"""Depth-first, name-ordered enumeration of candidate files."""
from __future__ import annotations

import os
import re
import stat
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Set, Tuple, Union

from .config import ScanOptions
from .errors import SourceDirectoryError
from .models import Candidate, Counters
from .report import Reporter


@dataclass(frozen=True)
class _Frame:
    path: str
    depth: int


def normalize_root(root: str) -> str:
    stripped = root.rstrip("/")
    return stripped or root


def join_entry(directory: str, name: str) -> str:
    if directory in (".", "./"):
        return name
    if directory.endswith("/"):
        return directory + name
    return f"{directory}/{name}"


def walk(
    roots: Iterable[str],
    options: ScanOptions,
    list_name: Optional[str] = None,
    reporter: Optional[Reporter] = None,
    counters: Optional[Counters] = None,
) -> Iterator[Candidate]:
    """Yield every candidate file under ``roots``, one root after another."""
    for root in roots:
        yield from walk_root(root, options, list_name, reporter, counters)


def walk_root(
    root: str,
    options: ScanOptions,
    list_name: Optional[str] = None,
    reporter: Optional[Reporter] = None,
    counters: Optional[Counters] = None,
) -> Iterator[Candidate]:
    """Yield the candidate files under a single root.

    A root that cannot be listed raises SourceDirectoryError. Unlistable
    subdirectories and every skipped entry are reported and passed over.
    With ``recurse_disabled`` the root and its immediate subdirectories are
    still listed, anything deeper is skipped.
    """
    reporter = reporter or Reporter()
    counters = counters if counters is not None else Counters()
    exclude = options.exclude_re()
    visited: Set[Tuple[int, int]] = set()

    stack: List[Tuple[_Frame, Iterator[str]]] = []
    opened = _open(_Frame(normalize_root(root), 0), options, exclude, visited, reporter, counters)
    if opened is not None:
        stack.append(opened)

    while stack:
        frame, names = stack[-1]
        name = next(names, None)
        if name is None:
            stack.pop()
            continue
        entry = join_entry(frame.path, name)
        found = _inspect(entry, name, frame, options, exclude, list_name, reporter)
        if isinstance(found, _Frame):
            opened = _open(found, options, exclude, visited, reporter, counters)
            if opened is not None:
                stack.append(opened)
        elif found is not None:
            yield found


def _open(
    frame: _Frame,
    options: ScanOptions,
    exclude: Optional[re.Pattern],
    visited: Set[Tuple[int, int]],
    reporter: Reporter,
    counters: Counters,
) -> Optional[Tuple[_Frame, Iterator[str]]]:
    directory = frame.path
    if exclude is not None and exclude.search(directory):
        reporter.notice(f"Directory '{directory}' matches exclude regex, skipping")
        return None

    try:
        st = os.stat(directory)
        names = sorted(os.listdir(directory))
    except OSError as e:
        if frame.depth == 0:
            raise SourceDirectoryError(f"Directory '{directory}' cannot be opened: {e.strerror or e}")
        reporter.warn(f"Error opening directory '{directory}', skipping: {e.strerror or e}")
        return None

    if options.follow_symlinks:
        key = (st.st_dev, st.st_ino)
        if key in visited:
            reporter.info(f"  Skipping directory already scanned: '{directory}'")
            return None
        visited.add(key)

    counters.directories += 1
    reporter.info(f"Scanning directory '{directory}'")
    return frame, iter(names)


def _inspect(
    entry: str,
    name: str,
    frame: _Frame,
    options: ScanOptions,
    exclude: Optional[re.Pattern],
    list_name: Optional[str],
    reporter: Reporter,
) -> Union[_Frame, Candidate, None]:
    try:
        st = os.lstat(entry)
        if stat.S_ISLNK(st.st_mode):
            if not options.follow_symlinks:
                reporter.info(f"  Skipping symbolic link: '{entry}'")
                return None
            st = os.stat(entry)
    except OSError:
        reporter.info(f"  Skipping, not a file or directory: '{entry}'")
        return None

    if stat.S_ISDIR(st.st_mode):
        if options.recurse_disabled and frame.depth >= 1:
            reporter.info(f"  Skipping directory: '{entry}'")
            return None
        return _Frame(entry, frame.depth + 1)

    if not stat.S_ISREG(st.st_mode):
        reporter.info(f"  Skipping, not a file or directory: '{entry}'")
        return None

    if exclude is not None and exclude.search(entry):
        reporter.notice(f"  Skipping, File '{entry}' matches exclude regex")
        return None

    if st.st_size == 0:
        reporter.info(f"  Skipping, empty file: '{entry}'")
        return None

    if list_name and name == list_name:
        reporter.info(f"  Skipping list file: '{entry}'")
        return None

    return Candidate(path=entry, directory=frame.path, name=name)
