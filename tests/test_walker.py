from __future__ import annotations

import os
from pathlib import Path

import pytest

from filededupe import walker
from filededupe.config import ScanOptions
from filededupe.errors import SourceDirectoryError
from filededupe.models import Counters
from filededupe.report import Reporter
from filededupe.walker import walk, walk_root
from tests.helpers import write


def _paths(root: Path, options: ScanOptions = ScanOptions(), **kwargs) -> list:
    return [c.path for c in walk_root(str(root), options, **kwargs)]


def test_walk_is_depth_first_in_name_order(tmp_path: Path) -> None:
    write(tmp_path / "b" / "inner.txt")
    write(tmp_path / "a.txt")
    write(tmp_path / "c.txt")
    write(tmp_path / "b" / "a" / "deep.txt")
    counters = Counters()

    paths = _paths(tmp_path, counters=counters)

    root = str(tmp_path)
    assert paths == [
        f"{root}/a.txt",
        f"{root}/b/a/deep.txt",
        f"{root}/b/inner.txt",
        f"{root}/c.txt",
    ]
    assert counters.directories == 3


def test_empty_files_and_the_list_file_are_never_yielded(tmp_path: Path) -> None:
    write(tmp_path / "data.bin")
    (tmp_path / "empty.txt").touch()
    write(tmp_path / "nested" / "filelist.tsv", "abc\t1\t1\t\t\t\tx\n")

    assert _paths(tmp_path, list_name="filelist.tsv") == [f"{tmp_path}/data.bin"]


def test_exclude_pattern_skips_files_and_whole_directories(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    write(tmp_path / "keep.txt")
    write(tmp_path / "drop.bak")
    write(tmp_path / ".svn" / "entries")
    counters = Counters()

    paths = _paths(tmp_path, ScanOptions(exclude=r"\.svn$|\.bak$"), counters=counters)

    assert paths == [f"{tmp_path}/keep.txt"]
    assert counters.directories == 1
    out = capsys.readouterr().out
    assert "matches exclude regex" in out
    assert f"Directory '{tmp_path}/.svn' matches exclude regex, skipping" in out


def test_excluded_root_yields_nothing(tmp_path: Path) -> None:
    write(tmp_path / "skipme" / "file.txt")
    assert _paths(tmp_path / "skipme", ScanOptions(exclude="skipme")) == []


def test_symlinks_skipped_unless_following(tmp_path: Path) -> None:
    target = write(tmp_path / "real" / "file.txt")
    os.symlink(target, tmp_path / "real" / "link.txt")

    assert _paths(tmp_path / "real") == [f"{tmp_path}/real/file.txt"]
    assert _paths(tmp_path / "real", ScanOptions(follow_symlinks=True)) == [
        f"{tmp_path}/real/file.txt",
        f"{tmp_path}/real/link.txt",
    ]


def test_following_a_symlink_loop_terminates(tmp_path: Path) -> None:
    write(tmp_path / "root" / "file.txt")
    os.symlink(tmp_path / "root", tmp_path / "root" / "loop")
    counters = Counters()

    paths = _paths(tmp_path / "root", ScanOptions(follow_symlinks=True), counters=counters)

    assert paths == [f"{tmp_path}/root/file.txt"]
    assert counters.directories == 1


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires named pipes")
def test_special_files_are_skipped(tmp_path: Path) -> None:
    write(tmp_path / "file.txt")
    os.mkfifo(tmp_path / "pipe")
    assert _paths(tmp_path) == [f"{tmp_path}/file.txt"]


def test_files_only_still_lists_first_level_subdirectories(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    # -f still lists the immediate subdirectories of a root; directories
    # below them are not scanned.
    write(tmp_path / "top.txt")
    write(tmp_path / "sub" / "one.txt")
    write(tmp_path / "sub" / "deeper" / "two.txt")
    counters = Counters()

    paths = _paths(
        tmp_path,
        ScanOptions(recurse_disabled=True),
        reporter=Reporter(verbose=True),
        counters=counters,
    )

    assert paths == [f"{tmp_path}/sub/one.txt", f"{tmp_path}/top.txt"]
    assert counters.directories == 2
    assert f"  Skipping directory: '{tmp_path}/sub/deeper'" in capsys.readouterr().out


def test_unreadable_root_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(SourceDirectoryError, match="cannot be opened"):
        list(walk_root(str(tmp_path / "missing"), ScanOptions()))


def test_unreadable_nested_directory_is_skipped(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    write(tmp_path / "locked" / "secret.txt")
    write(tmp_path / "open.txt")
    real_listdir = os.listdir

    def listdir(path):
        if str(path).endswith("locked"):
            raise PermissionError(13, "Permission denied")
        return real_listdir(path)

    monkeypatch.setattr(walker.os, "listdir", listdir)

    assert _paths(tmp_path) == [f"{tmp_path}/open.txt"]
    assert "Error opening directory" in capsys.readouterr().err


def test_current_directory_root_yields_bare_names(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    write(tmp_path / "here.txt")
    write(tmp_path / "sub" / "there.txt")

    found = list(walk_root(".", ScanOptions()))

    assert [c.path for c in found] == ["here.txt", "sub/there.txt"]
    assert [c.directory for c in found] == [".", "sub"]


def test_walk_visits_roots_in_argument_order(tmp_path: Path) -> None:
    write(tmp_path / "z" / "first.txt")
    write(tmp_path / "a" / "second.txt")

    paths = [c.path for c in walk([f"{tmp_path}/z/", f"{tmp_path}/a"], ScanOptions())]

    assert paths == [f"{tmp_path}/z/first.txt", f"{tmp_path}/a/second.txt"]
