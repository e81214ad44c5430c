from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Optional, Union


class Tag(enum.Enum):
    IN_LIST = "In-List"
    NEW_DUPLICATE = "New-Duplicate"
    NEW = "New"

    @property
    def is_duplicate(self) -> bool:
        return self is not Tag.NEW

    def label(self) -> str:
        return f"[{self.value}]"


NAME_DUPLICATE_LABEL = "[Name-Duplicate]"


class Action(enum.Enum):
    DELETE = "Delete"
    COPY = "Copy"
    MOVE = "Move"

    def label(self) -> str:
        return f"[{self.value}]"


@dataclass
class Record:
    """First-seen occurrence of one piece of content.

    ``size`` and ``modified`` keep whatever the list file held when loaded,
    so a stored record is written back byte for byte.
    """

    fingerprint: str
    size: Union[int, str]
    modified: Union[int, str]
    path: str
    name: str
    orig_path: str = ""
    orig_name: str = ""
    stored: bool = False
    seen: bool = False

    @property
    def display_path(self) -> str:
        return f"{self.path}/{self.name}" if self.path else self.name

    def fields(self) -> tuple:
        return (
            self.fingerprint,
            str(self.size),
            str(self.modified),
            self.orig_path,
            self.orig_name,
            self.path,
            self.name,
        )


@dataclass(frozen=True)
class Candidate:
    """A regular, non-empty file produced by the walker."""

    path: str
    directory: str
    name: str


@dataclass
class Classification:
    fingerprint: str
    tag: Tag
    name_duplicate: bool = False
    record: Optional[Record] = None


@dataclass
class Counters:
    loaded: int = 0
    directories: int = 0
    files: int = 0
    in_list: int = 0
    new: int = 0
    missing: int = 0
    rejected: int = 0
    stored: int = 0
    warnings: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "loaded": self.loaded,
            "directories": self.directories,
            "files": self.files,
            "in_list": self.in_list,
            "new": self.new,
            "missing": self.missing,
            "rejected": self.rejected,
            "stored": self.stored,
            "warnings": self.warnings,
        }
