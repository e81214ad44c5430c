from __future__ import annotations
from pathlib import Path
import hashlib
from typing import Any, Union

_xxhash: Any
try:
    import xxhash as _xxhash
except Exception:
    _xxhash = None

xxhash: Any = _xxhash

def new_hasher(algorithm: str) -> Any:
    if algorithm == "xxh64":
        if xxhash is None:
            raise RuntimeError("The 'xxhash' package is not installed. Install it with 'pip install xxhash'.")
        return xxhash.xxh64()
    if algorithm == "blake3":
        try:
            import blake3  # type: ignore
        except Exception:
            raise RuntimeError("The 'blake3' package is not installed. Install it with 'pip install blake3'.")
        return blake3.blake3()
    return hashlib.new(algorithm)

def hash_file(path: Union[str, Path], algorithm: str = "md5", chunk_size: int = 1024 * 1024) -> str:
    """Stream the whole file through ``algorithm`` and return the hex digest.

    Raises OSError when the file cannot be opened or read.
    """
    h = new_hasher(algorithm)
    with open(path, "rb") as f:
        while True:
            b = f.read(chunk_size)
            if not b:
                break
            h.update(b)
    return h.hexdigest()
