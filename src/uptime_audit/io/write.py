from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Mapping

import numpy as np
import pandas as pd

from uptime_audit.paths import OutputPaths

LOGGER = logging.getLogger(__name__)

TABLE_WRITERS: dict[str, Callable[[pd.DataFrame, Path], None]] = {
    "csv": lambda df, path: df.to_csv(path, index=False),
    "parquet": lambda df, path: df.to_parquet(path, index=False),
}


def write_table(df: pd.DataFrame, path: Path, fmt: str = "csv") -> Path:
    writer = TABLE_WRITERS.get(fmt)
    if writer is None:
        raise ValueError(f"Unsupported table format: {fmt}")
    path.parent.mkdir(parents=True, exist_ok=True)
    writer(df, path)
    LOGGER.debug("Wrote %d rows to %s", len(df), path)
    return path


def write_tables(tables: Mapping[str, pd.DataFrame], paths: OutputPaths, fmt: str) -> list[Path]:
    return [write_table(table, paths.table(name, fmt), fmt=fmt) for name, table in tables.items()]


def _summary_default(value: Any) -> Any:
    # Detector summaries may carry numpy scalars or frozensets of column positions.
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return str(value)


def write_summary(data: Mapping[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(data, indent=2, sort_keys=True, default=_summary_default), encoding="utf-8"
    )
    return path
