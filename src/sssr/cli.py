"""
CLI application for recovering Shamir-shared secrets from JSON share files.

Usage:
    sssr test1.json test2.json [more.json ...]

Each file is one independent reconstruction task. Tasks run in order and
the first failure halts the batch with a non-zero exit status.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, List

import typer

from .core.loader import recover_from_file
from .crypto.shamir import ArithmeticMode
from .errors import SSSRError


app = typer.Typer(
    name="sssr", help="Recover secrets from Shamir secret shares"
)

# Minimum number of share files per invocation
MIN_TASKS = 2

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _print_usage() -> None:
    typer.echo("Usage: sssr FILE FILE [FILE ...]", err=True)
    typer.echo(
        f"Please provide at least {MIN_TASKS} JSON files containing the secret shares",
        err=True,
    )


@app.command()
def recover(
    files: Optional[List[Path]] = typer.Argument(
        None, help="JSON share documents, one reconstruction task each"
    ),
    mode: ArithmeticMode = typer.Option(
        ArithmeticMode.TRUNCATE,
        "--mode",
        "-m",
        envvar="SSSR_MODE",
        case_sensitive=False,
        help="Lagrange term division: truncate (reference) or exact",
    ),
    verify: bool = typer.Option(
        False,
        "--verify",
        envvar="SSSR_VERIFY",
        help="Check that shares beyond the threshold lie on the same polynomial",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
) -> None:
    """
    Reconstruct the secret stored in each share file.

    Each file holds a "keys" object with n and k, plus one entry per share
    mapping the share's x coordinate to {"base": ..., "value": ...}.

    Example:
        sssr test1.json test2.json
        sssr --mode exact --verify test1.json test2.json
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT
    )

    # Secrets and messages may hold integers of any length
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)

    files = files or []
    if len(files) < MIN_TASKS:
        _print_usage()
        raise typer.Exit(1)

    for index, path in enumerate(files, start=1):
        if index > 1:
            typer.echo("")
        typer.echo(f"Processing Test Case {index}:")

        try:
            secret = recover_from_file(path, mode=mode, verify=verify)
        except (SSSRError, OSError) as e:
            typer.echo(f"Error during secret reconstruction: {e}", err=True)
            typer.echo("Please check your input files and try again.", err=True)
            raise typer.Exit(1)

        typer.echo(f"Recovered Secret: {secret}")


if __name__ == "__main__":
    app()
