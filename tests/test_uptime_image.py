from __future__ import annotations

from pathlib import Path

import numpy as np

from uptime_audit.config import RenderConfig
from uptime_audit.features.ordering import OrderedColumns
from uptime_audit.history.sequence import OnlineHistory
from uptime_audit.viz.uptime_image import build_uptime_raster, write_uptime_image


def _history_at(absolute_hours: list[int], n_days: int = 2) -> OnlineHistory:
    history = OnlineHistory.with_days(n_days)
    for index in absolute_hours:
        history.days[index // 24].mark_online(index % 24)
    return history


def _columns() -> OrderedColumns:
    return OrderedColumns(
        identifiers=["plain", "flagged"],
        histories=[_history_at([0, 30]), _history_at([1, 47])],
    )


def test_build_uptime_raster_colors_each_state() -> None:
    raster = build_uptime_raster(_columns(), highlights={1})

    assert raster.shape == (48, 2, 3)
    assert raster.dtype == np.uint8
    assert raster[0, 0].tolist() == [0, 0, 0]
    assert raster[30, 0].tolist() == [0, 0, 0]
    assert raster[1, 0].tolist() == [255, 255, 255]
    assert raster[1, 1].tolist() == [255, 0, 0]
    assert raster[47, 1].tolist() == [255, 0, 0]
    assert raster[0, 1].tolist() == [255, 255, 255]


def test_build_uptime_raster_uses_palette() -> None:
    palette = RenderConfig(
        offline_color=(10, 10, 10),
        online_color=(20, 20, 20),
        highlight_color=(30, 30, 30),
    )

    raster = build_uptime_raster(_columns(), highlights=set(), palette=palette)

    assert raster[0, 0].tolist() == [20, 20, 20]
    assert raster[1, 1].tolist() == [20, 20, 20]
    assert raster[2, 0].tolist() == [10, 10, 10]


def test_write_uptime_image_writes_png_and_jpg(tmp_path: Path) -> None:
    png_path = write_uptime_image(_columns(), {0}, tmp_path / "figures" / "uptimes.png")
    jpg_path = write_uptime_image(_columns(), {0}, tmp_path / "uptimes.jpg")

    assert png_path.exists()
    assert png_path.read_bytes().startswith(b"\x89PNG")
    assert jpg_path.exists()
    assert jpg_path.read_bytes().startswith(b"\xff\xd8")
