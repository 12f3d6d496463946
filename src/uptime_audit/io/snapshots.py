from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator

import pandas as pd

from uptime_audit.config import SnapshotColumnsConfig
from uptime_audit.errors import SnapshotFormatError


@dataclass(frozen=True)
class Snapshot:
    """Identifiers present at one observation time (one hour)."""

    valid_after: datetime | None
    identifiers: frozenset[str]

    def __iter__(self) -> Iterator[str]:
        return iter(self.identifiers)

    def __len__(self) -> int:
        return len(self.identifiers)


def iter_csv_snapshots(path: Path, columns: SnapshotColumnsConfig) -> Iterator[Snapshot]:
    """Yield snapshots from a long table with one row per (snapshot, identifier).

    A row with a blank identifier records a snapshot in which nobody was present.
    """
    # utf-8-sig strips BOM-prefixed headers commonly found in exported CSV files.
    df = pd.read_csv(path, encoding="utf-8-sig", dtype=str)
    missing = [name for name in (columns.snapshot, columns.identifier) if name not in df.columns]
    if missing:
        raise SnapshotFormatError(f"Missing required columns in CSV: {', '.join(missing)}")

    timestamps = pd.to_datetime(df[columns.snapshot], errors="coerce")
    if timestamps.isna().any():
        bad_rows = int(timestamps.isna().sum())
        raise SnapshotFormatError(
            f"{bad_rows} rows in {path} have an unparseable '{columns.snapshot}' value"
        )

    identifiers = df[columns.identifier].fillna("").astype(str).str.strip()
    working = pd.DataFrame({"valid_after": timestamps, "identifier": identifiers})
    for valid_after, group in working.groupby("valid_after", sort=True):
        present = group.loc[group["identifier"] != "", "identifier"]
        yield Snapshot(
            valid_after=pd.Timestamp(valid_after).to_pydatetime(),
            identifiers=frozenset(present.tolist()),
        )
