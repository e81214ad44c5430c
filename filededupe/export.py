from __future__ import annotations
from pathlib import Path

import duckdb

from .listfile import load_list

COLUMNS = (
    ("fingerprint", "VARCHAR"),
    ("size", "VARCHAR"),
    ("modified", "VARCHAR"),
    ("orig_path", "VARCHAR"),
    ("orig_name", "VARCHAR"),
    ("path", "VARCHAR"),
    ("name", "VARCHAR"),
)


def export_list(list_path: Path, out_path: Path) -> int:
    """Write every record of a list file to a Parquet file. Returns the row count."""
    records = load_list(list_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    con = duckdb.connect(database=":memory:")
    try:
        cols = ", ".join(f"{name} {kind}" for name, kind in COLUMNS)
        con.execute(f"CREATE TABLE records ({cols});")
        if records:
            placeholders = ", ".join("?" for _ in COLUMNS)
            con.executemany(
                f"INSERT INTO records VALUES ({placeholders})",
                [list(r.fields()) for r in records],
            )
        # DuckDB doesn't support parameter placeholders for COPY targets.
        # Safely quote paths by doubling single quotes.
        out_quoted = str(out_path).replace("'", "''")
        con.execute(f"COPY records TO '{out_quoted}' (FORMAT PARQUET);")
    finally:
        con.close()
    return len(records)

