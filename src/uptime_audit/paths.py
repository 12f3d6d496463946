from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

SUMMARY_FILE_NAME = "summary.json"


@dataclass(frozen=True)
class OutputPaths:
    """Where one run puts its tables, its uptime image and its summary."""

    root: Path

    @property
    def tables(self) -> Path:
        return self.root / "tables"

    @property
    def figures(self) -> Path:
        return self.root / "figures"

    @property
    def summary(self) -> Path:
        return self.root / "summary" / SUMMARY_FILE_NAME

    def table(self, name: str, fmt: str) -> Path:
        return self.tables / f"{name}.{fmt}"

    def image(self, name: str, fmt: str) -> Path:
        return self.figures / f"{name}.{fmt}"


def build_output_paths(out_dir: Path) -> OutputPaths:
    paths = OutputPaths(root=out_dir)
    for directory in (paths.tables, paths.figures, paths.summary.parent):
        directory.mkdir(parents=True, exist_ok=True)
    return paths
