from pathlib import Path
from typing import Optional

import typer

from . import __version__
from .config import load_config
from .errors import ConfigError, user_facing_error
from .logging import configure_logging


app = typer.Typer(
    name="multilaunch",
    add_completion=False,
    help=(
        "Launch a set of named shell commands and watch their output side by side.\n\n"
        "Usage:\n"
        "  multilaunch <config.json>\n\n"
        "The config is a JSON array of {name, command, cwd, startedWhen?, section?}.\n"
        "Keys: UP/DOWN select, ENTER start, CTRL+C stop, d dump log, ESC quit."
    ),
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.command()
def main(
    config: Path = typer.Argument(..., help="JSON file describing the launches", show_default=False),
    log_level: str = typer.Option("WARNING", "--log-level", help="DEBUG|INFO|WARNING|ERROR"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write diagnostics to this file"),
    dump_dir: Optional[Path] = typer.Option(None, "--dump-dir", help="Where 'd' writes <name>.log (default: cwd)"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        is_eager=True,
        callback=_version_callback,
    ),
):
    """Open the launcher UI for the commands in CONFIG."""
    logger = configure_logging(log_level, log_file=log_file)
    try:
        launches = load_config(config)
    except ConfigError as e:
        typer.echo(user_facing_error(e), err=True)
        raise typer.Exit(code=e.code)
    logger.info("loaded %d launches from %s", len(launches), config)

    # Lazy import keeps `--help` and config errors free of Textual start-up cost
    from .dash.app import run_dash

    rc = run_dash(launches, dump_dir=dump_dir)
    raise typer.Exit(code=int(rc))


def run() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    run()
