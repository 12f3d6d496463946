from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

RGBColor = tuple[int, int, int]

INPUT_ENV_VAR = "UPTIME_AUDIT_INPUT"


class AnalysisConfig(BaseModel):
    tolerance: int = Field(default=3, ge=1)
    block_length: int = Field(default=5, ge=1)
    max_distance: float = Field(default=0.0002, gt=0.0)
    min_interesting_uptime: int = Field(default=5, ge=0)


class SnapshotColumnsConfig(BaseModel):
    snapshot: str = "valid_after"
    identifier: str = "fingerprint"


class InputConfig(BaseModel):
    mode: Literal["csv", "consensus"] = "consensus"
    path: str | None = None
    columns: SnapshotColumnsConfig = Field(default_factory=SnapshotColumnsConfig)
    consensus_glob: str = "*consensus*"


class RenderConfig(BaseModel):
    offline_color: RGBColor = (255, 255, 255)
    online_color: RGBColor = (0, 0, 0)
    highlight_color: RGBColor = (255, 0, 0)


class OutputsConfig(BaseModel):
    tables_format: Literal["csv", "parquet"] = "csv"
    image_format: Literal["png", "jpg"] = "png"
    image_name: str = "uptimes"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _resolve_optional_path(path_value: str | None, base_dir: Path) -> str | None:
    if not path_value:
        return None
    candidate = Path(path_value)
    if candidate.is_absolute():
        return str(candidate)
    return str((base_dir / candidate).resolve())


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)
    base_dir = path.resolve().parent

    config.input.path = _resolve_optional_path(config.input.path, base_dir) or os.getenv(
        INPUT_ENV_VAR
    )
    return config
