"""Typer CLI entrypoint for the team builder."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError as PydanticValidationError

from .config import load_settings
from .container import create_container
from .errors import ValidationError
from .events import ERROR, StreamSink
from .logging import configure_logging

app = typer.Typer(help="Assemble a team that covers a set of skills.")


@app.command()
def run(
    skills: str = typer.Option(..., help="Comma-separated skills to cover, e.g. python,sql."),
    size: Optional[str] = typer.Option(None, help="Team size (1-10, default 3)."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    max_workers: Optional[int] = typer.Option(None, min=1, help="Concurrent genome fetches."),
) -> None:
    """Run one team search and stream its events to stdout."""
    configure_logging(log_level)

    try:
        app_config = load_settings(config)
    except (ValueError, PydanticValidationError) as exc:
        raise typer.BadParameter(f"Invalid configuration: {exc}", param_name="config") from exc

    settings = app_config.to_settings()
    if max_workers is not None:
        settings.setdefault("enrichment", {})["max_workers"] = max_workers

    container = create_container(settings=settings)
    pipeline = container.pipeline()
    sink = StreamSink(sys.stdout)

    try:
        outcome = pipeline.run(skills.split(","), size, sink)
    except ValidationError as exc:
        sink.emit(ERROR, {"message": str(exc)})
        raise typer.Exit(code=2) from exc

    if outcome.state == "error":
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
