from __future__ import annotations

from pathlib import Path
from typing import Literal

import typer

from uptime_audit.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from uptime_audit.features.distance import uptime_distance
from uptime_audit.io.read import iter_snapshots
from uptime_audit.logging import configure_logging
from uptime_audit.pipeline.accumulate import accumulate_snapshots
from uptime_audit.pipeline.run_all import run_all

app = typer.Typer(no_args_is_help=True, add_completion=False)

InputMode = Literal["csv", "consensus"]


def _configure_logging(log_level: str) -> None:
    try:
        configure_logging(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


def _load_app_config(config_path: Path) -> AppConfig:
    return load_config(config_path)


def _resolve_input(input_path: Path | None, cfg: AppConfig) -> Path:
    if input_path is not None:
        return input_path
    if cfg.input.path:
        return Path(cfg.input.path)
    raise typer.BadParameter(
        "Missing --input. Pass a consensus directory or snapshot CSV, "
        "or set input.path in config or UPTIME_AUDIT_INPUT."
    )


def _apply_mode_override(cfg: AppConfig, mode: InputMode | None) -> None:
    if mode is not None:
        cfg.input.mode = mode


@app.command("run-all")
def run_all_command(
    input: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    mode: InputMode | None = typer.Option(
        None,
        help="Override input.mode: consensus documents or a long snapshot CSV.",
    ),
    log_level: str = typer.Option("INFO", help="Logging level for progress output."),
) -> None:
    """Build the uptime image, column tables and summary for a snapshot stream."""
    _configure_logging(log_level)
    cfg = _load_app_config(config)
    _apply_mode_override(cfg, mode)
    source = _resolve_input(input, cfg)
    image_path = run_all(iter_snapshots(source, cfg.input), out_dir=out, config=cfg)
    typer.echo(f"Run complete. Image: {image_path}")


@app.command()
def compare(
    first: str = typer.Option(..., help="Identifier of the first participant."),
    second: str = typer.Option(..., help="Identifier of the second participant."),
    input: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    mode: InputMode | None = typer.Option(None, help="Override input.mode."),
    log_level: str = typer.Option("WARNING", help="Logging level for progress output."),
) -> None:
    """Print the uptime distance between two participants."""
    _configure_logging(log_level)
    cfg = _load_app_config(config)
    _apply_mode_override(cfg, mode)
    source = _resolve_input(input, cfg)
    store = accumulate_snapshots(iter_snapshots(source, cfg.input))

    missing = [identifier for identifier in (first, second) if identifier not in store]
    if missing:
        raise typer.BadParameter(f"Never observed: {', '.join(missing)}")

    first_history = store[first]
    second_history = store[second]
    typer.echo(f"- days: {store.elapsed_days}")
    typer.echo(f"- {first} uptime: {first_history.total_uptime()}")
    typer.echo(f"- {second} uptime: {second_history.total_uptime()}")
    typer.echo(f"- distance: {uptime_distance(first_history, second_history):.6f}")


if __name__ == "__main__":
    app()
