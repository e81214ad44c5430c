"""Argparse command modules for the filededupe console scripts."""
from __future__ import annotations

from . import dedupe, export

__all__ = ["dedupe", "export"]
