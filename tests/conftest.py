from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers import write


@pytest.fixture
def scenario(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Two source trees, run from their parent so paths stay relative.

    testdir2/saywatcopy duplicates testdir1/wat/saywat and testdir2/hello
    shares a name, but not content, with testdir1/hello.
    """
    monkeypatch.chdir(tmp_path)
    write(tmp_path / "testdir1" / "hello", "hello world\n")
    write(tmp_path / "testdir1" / "there", "hello there\n")
    write(tmp_path / "testdir1" / "wat" / "saywat", "say what?\n")
    write(tmp_path / "testdir2" / "hello", "a different hello\n")
    write(tmp_path / "testdir2" / "newfilehere", "brand new file\n")
    write(tmp_path / "testdir2" / "saywatcopy", "say what?\n")
    return tmp_path
