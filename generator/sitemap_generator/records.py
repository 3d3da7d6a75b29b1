from __future__ import annotations

from pathlib import Path

import polars as pl

from .models import UrlRecord

RECORD_COLUMNS = ["loc", "lastmod", "changefreq", "priority"]

_NDJSON_SUFFIXES = {".jsonl", ".ndjson"}


def _read_frame(path: Path) -> pl.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        # Every column as a string; UrlRecord does the parsing and validation.
        return pl.read_csv(path, infer_schema=False)
    if suffix in _NDJSON_SUFFIXES:
        # Scan the whole file so columns that start out null are typed correctly.
        return pl.read_ndjson(path, infer_schema_length=None)
    raise ValueError(f"Unsupported records file (expected .csv, .jsonl or .ndjson): {path}")


def load_url_records(path: Path) -> list[UrlRecord]:
    if not path.exists():
        raise FileNotFoundError(f"Missing records file: {path}")

    df = _read_frame(path)
    if "loc" not in df.columns:
        raise ValueError(f"Records file has no 'loc' column: {path}")

    missing = [col for col in RECORD_COLUMNS if col not in df.columns]
    if missing:
        df = df.with_columns([pl.lit(None, dtype=pl.Utf8).alias(col) for col in missing])

    return [
        UrlRecord(
            location=row["loc"],
            lastmod=row["lastmod"],
            changefreq=row["changefreq"],
            priority=row["priority"],
        )
        for row in df.select(RECORD_COLUMNS).iter_rows(named=True)
    ]
