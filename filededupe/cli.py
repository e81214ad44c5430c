"""Console entry points for filededupe."""
from __future__ import annotations

from typing import Optional, Sequence

from .commands import dedupe, export


def main(argv: Optional[Sequence[str]] = None) -> int:
    return dedupe.run_cli(argv)


def export_main(argv: Optional[Sequence[str]] = None) -> int:
    return export.run_cli(argv)


if __name__ == "__main__":
    raise SystemExit(main())
