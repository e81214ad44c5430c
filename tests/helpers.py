from __future__ import annotations

from pathlib import Path
from typing import List


def write(path: Path, content: str = "data\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def found_lines(output: str) -> List[str]:
    return [line for line in output.splitlines() if line.startswith("   Found file:")]
