"""CLI command for finding duplicates and reconciling directories."""
from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, Optional, Sequence

from pydantic import ValidationError

from .. import __version__
from ..config import HASH_ALGORITHMS, DedupeConfig, read_config
from ..errors import ConfigError, FatalError
from ..session import run_dedupe

DESCRIPTION = """\
Compare the files in one or more directories to identify duplicates and
optionally operate on them. Files are compared by content checksum.
Previously seen files can be stored in a list file for use in future
comparisons. Empty files are ignored.
"""

EPILOG = """\
legend:
  In verbose mode each file found is listed with one or more tags.

  checksum match:
    [In-List]        The file checksum matches a file listed in the list file.
    [New-Duplicate]  The file checksum is not in the list but has been seen.
    [Delete]         The file has been deleted.

  no checksum match:
    [New]            The file checksum is not in the list file.
    [Name-Duplicate] The file name has been seen with different content.
    [Copy]           The file has been copied.
    [Move]           The file has been moved.

examples:
  filededupe -v testdir1/ testdir2
  touch filelist.tsv && filededupe -vs -l filelist.tsv testdir1/
  filededupe -vs -l filelist.tsv -c nondupes/ testdir2/
"""


def _configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("sourcedir", nargs="*", help="Directory to scan (may repeat)")
    parser.add_argument("-f", dest="files_only", action="store_true", help="Only read files, do not recurse below the first directory level")
    parser.add_argument("-v", dest="verbose", action="store_true", help="Verbose output")
    parser.add_argument("-l", dest="list_path", metavar="LISTFILE", help="Load a list of files with checksums in addition to the sourcedir")
    parser.add_argument("-s", dest="store_new", action="store_true", help="Store files not found in the list (non duplicates)")
    parser.add_argument("-b", dest="follow_symlinks", action="store_true", help="Follow symbolic links when recursing (not recommended)")
    parser.add_argument("-e", dest="exclude", metavar="REGEX", help=r"Exclude files/directories matching a regex, ex: '\.svn$', '\.old|\.bak'")
    parser.add_argument("-a", dest="missing_accounting", action="store_true", help="Account for files in the list not found during the scan")
    parser.add_argument("-o", dest="clobber", action="store_true", help="Overwrite on move/copy if a file with the same name exists at the destination")
    parser.add_argument("-d", dest="delete", action="store_true", help="Delete the duplicates found")
    parser.add_argument("-c", dest="copy_dir", metavar="DESTDIR", help="Copy the non duplicate files to the destination directory")
    parser.add_argument("-m", dest="move_dir", metavar="DESTDIR", help="Move the non duplicate files to the destination directory")
    parser.add_argument("--config", help="YAML configuration file supplying defaults for the options above")
    parser.add_argument("--hash", dest="hash_algorithm", choices=HASH_ALGORITHMS, help="Checksum algorithm (default: md5)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog or "filededupe",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _configure_parser(parser)
    return parser


def config_from_args(args: argparse.Namespace) -> DedupeConfig:
    """Layer command-line flags over the optional YAML configuration."""
    cfg = read_config(args.config) if args.config else DedupeConfig()

    data: Dict[str, Any] = cfg.model_dump()
    for flag in ("verbose", "store_new", "missing_accounting"):
        if getattr(args, flag):
            data[flag] = True
    if args.list_path is not None:
        data["list_path"] = args.list_path
    if args.files_only:
        data["scan"]["recurse_disabled"] = True
    if args.follow_symlinks:
        data["scan"]["follow_symlinks"] = True
    if args.exclude is not None:
        data["scan"]["exclude"] = args.exclude
    for flag in ("delete", "clobber"):
        if getattr(args, flag):
            data["actions"][flag] = True
    for opt in ("copy_dir", "move_dir"):
        if getattr(args, opt) is not None:
            data["actions"][opt] = getattr(args, opt)
    if args.hash_algorithm:
        data["hash"]["algorithm"] = args.hash_algorithm

    try:
        return DedupeConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid option: {e}")


def run_from_args(args: argparse.Namespace, parser: Optional[argparse.ArgumentParser] = None) -> int:
    try:
        cfg = config_from_args(args)
        run_dedupe(args.sourcedir, cfg)
    except FatalError as e:
        print(f"Error: {e}")
        (parser or build_parser()).print_help(sys.stdout)
        return 1
    return 0


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    return run_from_args(args, parser)


__all__ = ["build_parser", "config_from_args", "run_cli", "run_from_args"]
