from __future__ import annotations

from typing import Collection

import pandas as pd

from uptime_audit.features.ordering import OrderedColumns

COLUMN_TABLE_COLUMNS = [
    "position",
    "identifier",
    "total_uptime",
    "uptime_fraction",
    "median_hour",
    "highlighted",
]


def build_column_table(columns: OrderedColumns, highlights: Collection[int]) -> pd.DataFrame:
    rows: list[dict[str, object]] = []
    for position, column in enumerate(columns):
        history = column.history
        uptime = history.total_uptime()
        rows.append(
            {
                "position": position,
                "identifier": column.identifier,
                "total_uptime": uptime,
                "uptime_fraction": uptime / history.total_hours if history.total_hours else 0.0,
                "median_hour": history.median() if uptime > 0 else float("nan"),
                "highlighted": position in highlights,
            }
        )
    return pd.DataFrame(rows, columns=COLUMN_TABLE_COLUMNS)
