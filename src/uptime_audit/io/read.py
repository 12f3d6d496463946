from __future__ import annotations

from pathlib import Path
from typing import Iterator

from uptime_audit.config import InputConfig
from uptime_audit.io.consensus import iter_consensus_snapshots
from uptime_audit.io.snapshots import Snapshot, iter_csv_snapshots


def iter_snapshots(path: Path, config: InputConfig) -> Iterator[Snapshot]:
    """Open the configured snapshot source at ``path``."""
    if config.mode == "csv":
        return iter_csv_snapshots(path, config.columns)
    return iter_consensus_snapshots(path, pattern=config.consensus_glob)
