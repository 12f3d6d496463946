from __future__ import annotations

import logging
from pathlib import Path
from typing import Collection

import matplotlib.pyplot as plt
import numpy as np

from uptime_audit.config import RenderConfig
from uptime_audit.features.ordering import OrderedColumns
from uptime_audit.history.day import HOURS_PER_DAY

LOGGER = logging.getLogger(__name__)


def build_uptime_raster(
    columns: OrderedColumns,
    highlights: Collection[int],
    palette: RenderConfig | None = None,
) -> np.ndarray:
    """RGB raster with one pixel per (absolute hour, column).

    Rows are hours from the start of the stream, columns follow display order.
    Online hours of highlighted columns take the highlight color.
    """
    palette = palette or RenderConfig()
    n_columns = len(columns)
    n_hours = columns.n_days * HOURS_PER_DAY

    raster = np.empty((n_hours, n_columns, 3), dtype=np.uint8)
    raster[:, :] = palette.offline_color
    if n_columns == 0 or n_hours == 0:
        return raster

    online = np.column_stack([history.hourly_states() for history in columns.histories])
    flagged = np.zeros(n_columns, dtype=bool)
    flagged_indices = np.array(
        [index for index in highlights if 0 <= index < n_columns], dtype=np.intp
    )
    flagged[flagged_indices] = True

    raster[online & ~flagged] = palette.online_color
    raster[online & flagged] = palette.highlight_color
    return raster


def write_uptime_image(
    columns: OrderedColumns,
    highlights: Collection[int],
    output_path: Path,
    palette: RenderConfig | None = None,
) -> Path:
    raster = build_uptime_raster(columns, highlights, palette)
    LOGGER.info("Generating %dx%d uptime image.", raster.shape[1], raster.shape[0])

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() in {".jpg", ".jpeg"}:
        plt.imsave(output_path, raster, pil_kwargs={"quality": 100})
    else:
        plt.imsave(output_path, raster)
    return output_path
