"""Find duplicate files by content checksum and reconcile directories."""
from __future__ import annotations

__version__ = "3.5.0"
