from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pandas as pd

from uptime_audit.features.ordering import OrderedColumns


@dataclass(frozen=True)
class DetectorResult:
    detector: str
    summary: dict[str, Any]
    tables: dict[str, pd.DataFrame]
    flagged_columns: frozenset[int] = frozenset()


class Detector:
    name: str

    def run(self, columns: OrderedColumns) -> DetectorResult:
        raise NotImplementedError
