from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from filededupe.config import DedupeConfig, HashConfig, ScanOptions, load_config


def test_defaults_match_the_command_line_defaults() -> None:
    cfg = DedupeConfig()
    assert cfg.list_path is None
    assert not (cfg.store_new or cfg.missing_accounting or cfg.verbose)
    assert not (cfg.scan.recurse_disabled or cfg.scan.follow_symlinks)
    assert not (cfg.actions.delete or cfg.actions.clobber)
    assert cfg.actions.max_unique_attempts == 10000
    assert cfg.hash.algorithm == "md5"


def test_load_config_reads_nested_sections(tmp_path: Path) -> None:
    path = tmp_path / "dedupe.yaml"
    path.write_text(
        "list_path: seen.tsv\n"
        "verbose: true\n"
        "actions:\n"
        "  copy_dir: /srv/merged\n"
        "hash:\n"
        "  algorithm: BLAKE3\n",
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert cfg.list_path == "seen.tsv"
    assert cfg.verbose
    assert cfg.actions.copy_dir == "/srv/merged"
    assert cfg.hash.algorithm == "blake3"


def test_empty_config_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == DedupeConfig()


def test_exclude_regex_is_validated() -> None:
    with pytest.raises(ValidationError):
        ScanOptions(exclude="[unclosed")
    assert ScanOptions(exclude="").exclude is None
    assert ScanOptions(exclude=r"\.bak$").exclude_re().search("x.bak")


def test_unknown_hash_algorithm_is_rejected() -> None:
    with pytest.raises(ValidationError):
        HashConfig(algorithm="crc32")


def test_sample_config_in_repository_loads() -> None:
    cfg = load_config(Path(__file__).resolve().parent.parent / "config" / "dedupe.yaml")
    assert cfg.list_path == "filelist.tsv"
    assert cfg.scan.exclude_re().search("project/.svn")
