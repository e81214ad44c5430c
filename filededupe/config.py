from __future__ import annotations
import re
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, ValidationError, field_validator
import yaml

from .errors import ConfigError

HASH_ALGORITHMS = ("md5", "sha1", "sha256", "xxh64", "blake3")

class ScanOptions(BaseModel):
    recurse_disabled: bool = False
    follow_symlinks: bool = False
    exclude: Optional[str] = None

    @field_validator("exclude")
    @classmethod
    def _check_exclude(cls, value: Optional[str]) -> Optional[str]:
        if value:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"invalid exclude regex {value!r}: {e}")
        return value or None

    def exclude_re(self) -> Optional[re.Pattern]:
        return re.compile(self.exclude) if self.exclude else None

class ActionConfig(BaseModel):
    delete: bool = False
    copy_dir: Optional[str] = None
    move_dir: Optional[str] = None
    clobber: bool = False
    max_unique_attempts: int = 10000  # rename attempts before giving up

class HashConfig(BaseModel):
    algorithm: str = "md5"
    chunk_bytes: int = 1024 * 1024  # 1 MB streaming chunks

    @field_validator("algorithm")
    @classmethod
    def _check_algorithm(cls, value: str) -> str:
        value = value.lower()
        if value not in HASH_ALGORITHMS:
            raise ValueError(f"unsupported hash algorithm {value!r}, choose from {', '.join(HASH_ALGORITHMS)}")
        return value

class DedupeConfig(BaseModel):
    list_path: Optional[str] = None
    store_new: bool = False
    missing_accounting: bool = False
    verbose: bool = False
    scan: ScanOptions = ScanOptions()
    actions: ActionConfig = ActionConfig()
    hash: HashConfig = HashConfig()

def load_config(path: Path) -> DedupeConfig:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    return DedupeConfig(**(data or {}))

def read_config(path: str) -> DedupeConfig:
    """``load_config`` with read and validation failures raised as ConfigError."""
    try:
        return load_config(Path(path))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Configuration file '{path}' could not be read: {e}")
    except (ValidationError, TypeError) as e:
        raise ConfigError(f"Configuration file '{path}' is invalid: {e}")
