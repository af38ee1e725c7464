"""Main CLI entry point for the supamarker command.

This module provides the Typer application that serves as the entry point
for the supamarker command-line tool. Global options (config file,
verbosity, logging, color) are handled by the app callback; each
subcommand wraps one command handler.
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import typer

from supamarker import __version__
from supamarker.supabase_client.errors import (
    APIUnreachableError,
    InvalidCredentialsError,
    MissingCredentialsError,
    SupamarkerError,
)
from .delete_command import DeleteCommand
from .gen_config_command import GenConfigCommand
from .list_command import ListCommand
from .models import ExitCode
from .output import OutputHandler
from .publish_command import PublishCommand

app = typer.Typer(
    name="supamarker",
    help="""Publish markdown posts to Supabase (storage + posts table).

QUICK START:
  supamarker gen-config                 # Write a sample config
  supamarker publish ./posts/hello.md   # Upload file + upsert metadata
  supamarker list                       # Show slugs and where they exist
  supamarker delete hello               # Remove file and metadata
  supamarker delete hello --soft        # Remove metadata, keep the file""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    """Global options shared by all subcommands."""
    config_path: Optional[str]
    output: OutputHandler


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'supamarker' namespace logger to avoid affecting
    third-party libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("supamarker")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"supamarker_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _exit_code_for(error: SupamarkerError) -> ExitCode:
    """Map a typed error to the process exit code."""
    if isinstance(error, (MissingCredentialsError, InvalidCredentialsError)):
        return ExitCode.AUTH_ERROR
    if isinstance(error, APIUnreachableError):
        return ExitCode.NETWORK_ERROR
    return ExitCode.GENERAL_ERROR


def _execute(state: CLIState, action: Callable[[], object]) -> None:
    """Run a command handler and convert failures into exit codes.

    Args:
        state: Global CLI state
        action: Zero-argument callable running the command
    """
    output = state.output
    try:
        action()
    except SupamarkerError as e:
        logger.error(f"{type(e).__name__}: {e}")
        output.error(str(e))
        raise typer.Exit(_exit_code_for(e))
    except (typer.Exit, typer.Abort):
        raise
    except Exception as e:
        logger.exception("Unexpected error")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"supamarker version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to a config file (TOML). Skips the default search path.",
        metavar="PATH",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Publish markdown posts to Supabase (storage + posts table)."""
    _configure_logging(verbosity, logdir)
    ctx.obj = CLIState(
        config_path=config,
        output=OutputHandler(verbosity=verbosity, no_color=no_color),
    )


@app.command("publish")
def publish(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Markdown file to publish"),
) -> None:
    """Publish a local markdown file."""
    state: CLIState = ctx.obj

    def action():
        PublishCommand(output_handler=state.output, config_path=state.config_path).run(path)

    _execute(state, action)


@app.command("delete")
def delete(
    ctx: typer.Context,
    slug: str = typer.Argument(..., help="Post slug"),
    soft: bool = typer.Option(
        False,
        "--soft",
        help="Remove only the database row; keep the file in the bucket",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Do not ask for confirmation",
    ),
) -> None:
    """Delete a post by slug."""
    state: CLIState = ctx.obj

    def action():
        DeleteCommand(output_handler=state.output, config_path=state.config_path).run(
            slug, soft=soft, assume_yes=yes
        )

    _execute(state, action)


@app.command("list")
def list_posts(ctx: typer.Context) -> None:
    """List slugs and where they exist."""
    state: CLIState = ctx.obj

    def action():
        ListCommand(output_handler=state.output, config_path=state.config_path).run()

    _execute(state, action)


@app.command("gen-config")
def gen_config(ctx: typer.Context) -> None:
    """Generate a sample config at the per-user default path.

    Use `supamarker --config ./config.toml gen-config` to write it to the
    working directory instead, where it is found first.
    """
    state: CLIState = ctx.obj

    def action():
        path = GenConfigCommand(config_path=state.config_path).run()
        state.output.success(
            f"Sample config written to {path}. "
            "Update the values before running publish/list/delete."
        )

    _execute(state, action)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m supamarker.cli.main
if __name__ == "__main__":
    main()
