"""CLI command for exporting a list file to Parquet."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from ..config import read_config
from ..errors import FatalError
from ..export import export_list


def _configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Configuration file (used when --list omitted)")
    parser.add_argument("--list", dest="list_path", help="List file to export")
    parser.add_argument("--out", default="data/parquet/records.parquet", help="Destination Parquet file")


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog or "filededupe-export", description="Export a dedupe list file to Parquet")
    _configure_parser(parser)
    return parser


def run_from_args(args: argparse.Namespace) -> int:
    list_path = args.list_path
    if not list_path and args.config:
        try:
            list_path = read_config(args.config).list_path
        except FatalError as e:
            print(f"Error: {e}")
            return 1
    if not list_path:
        print("Error: No list file given. Provide --list or set list_path in --config.")
        return 1
    try:
        rows = export_list(Path(list_path), Path(args.out))
    except FatalError as e:
        print(f"Error: {e}")
        return 1
    print(f"[OK] {rows} records written to {args.out}")
    return 0


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    return run_from_args(args)


__all__ = ["build_parser", "run_cli", "run_from_args"]
