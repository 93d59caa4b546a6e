"""Shared CLI utilities for javacopts commands.

Provides common Typer options, config-loading helpers, and standardised
output / error helpers.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from javacopts.config import ProjectConfig, load_config

# Re-usable Typer option for --root
RootOption: Path | None = typer.Option(
    None,
    "--root",
    "-r",
    help="Directory containing javacopts.toml (default: search upward from cwd).",
)

JsonOption: bool = typer.Option(False, "--json", help="Emit machine-readable JSON.")


def get_config(root: Path | None = None, *, required: bool = False) -> ProjectConfig:
    """Load the project config, falling back to empty defaults.

    With ``required=False`` a missing ``javacopts.toml`` is not an error; the
    returned config has no default options and is rooted at *root* or cwd.
    Malformed files always raise.
    """
    try:
        return load_config(root)
    except FileNotFoundError:
        if required or root is not None:
            raise
        return ProjectConfig(root=Path.cwd())


# ---------------------------------------------------------------------------
# Standardised output helpers
# ---------------------------------------------------------------------------

_err_console = Console(stderr=True)


def error_exit(msg: str, *, json_mode: bool = False, code: int = 1) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    if json_mode:
        print(json.dumps({"error": msg}, indent=2))
    else:
        _err_console.print(f"[red bold]error:[/red bold] {escape(msg)}")
    raise typer.Exit(code=code)


def json_print(data: dict[str, Any] | list[Any]) -> None:
    """Print *data* as pretty-printed JSON to stdout."""
    print(json.dumps(data, indent=2))
