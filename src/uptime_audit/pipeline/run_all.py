from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from uptime_audit.config import AppConfig
from uptime_audit.features.aggregates import build_column_table
from uptime_audit.io.snapshots import Snapshot
from uptime_audit.io.write import write_summary, write_tables
from uptime_audit.paths import build_output_paths
from uptime_audit.pipeline.analyse import analyse_uptimes
from uptime_audit.viz.uptime_image import write_uptime_image

LOGGER = logging.getLogger(__name__)


def run_all(snapshots: Iterable[Snapshot], out_dir: Path, config: AppConfig) -> Path:
    """Analyse ``snapshots`` and write the image, tables and summary under ``out_dir``."""
    analysis = analyse_uptimes(snapshots, config.analysis)
    paths = build_output_paths(out_dir)

    tables = {
        "ordered_columns": build_column_table(analysis.columns, analysis.highlights),
        **analysis.detector_result.tables,
    }
    write_tables(tables, paths, fmt=config.outputs.tables_format)

    summary = analysis.summary()
    summary["analysis"] = config.analysis.model_dump()
    write_summary(summary, paths.summary)

    image_path = paths.image(config.outputs.image_name, config.outputs.image_format)
    write_uptime_image(
        analysis.columns,
        analysis.highlights,
        image_path,
        palette=config.render,
    )
    LOGGER.info("Wrote image file to: %s", image_path)
    return image_path
