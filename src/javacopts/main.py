"""main.py – CLI entry point for javacopts.

Commands::

    javacopts build -cp lib/antlr.jar -cp build/classes --release 17
    javacopts build --json
    javacopts probe

Settings from ``javacopts.toml`` are applied first; command-line values
are merged on top of them.
"""

import shlex
from pathlib import Path

import typer

from javacopts.cli import JsonOption, RootOption, error_exit, get_config, json_print
from javacopts.config import ProjectConfig
from javacopts.options import builder_from_config
from javacopts.runtime import (
    RELEASE_MIN_VERSION,
    java_spec_version,
    supports_release,
)

app = typer.Typer(
    help="Assemble javac option tokens for in-memory compilation.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]
  javacopts build -cp a.jar -cp b.jar        Merge classpath entries
  javacopts build --release 11               --release or -source/-target
  javacopts build --spec-version 1.8 --json  Pretend to run on JDK 8
  javacopts probe                            Show the detected Java version

[dim]Defaults are read from javacopts.toml when one is found.[/dim]""",
)


@app.command()
def build(
    classpath: list[str] | None = typer.Option(
        None, "--classpath", "-cp", help="Classpath entry (repeatable, merged in order)."
    ),
    release: str | None = typer.Option(None, "--release", help="Release version (JDK 9+)."),
    source: str | None = typer.Option(None, "--source", help="Source version."),
    target: str | None = typer.Option(None, "--target", help="Target version."),
    spec_version: str | None = typer.Option(
        None,
        "--spec-version",
        help="Assume this java.specification.version instead of probing.",
    ),
    no_config: bool = typer.Option(False, "--no-config", help="Ignore javacopts.toml."),
    root: Path | None = RootOption,
    json_output: bool = JsonOption,
) -> None:
    """Print the assembled option tokens."""
    if no_config:
        cfg = ProjectConfig(root=root or Path.cwd())
    else:
        try:
            cfg = get_config(root)
        except (FileNotFoundError, ValueError) as exc:
            error_exit(str(exc), json_mode=json_output)

    if spec_version:
        cfg.spec_version = spec_version

    builder = builder_from_config(cfg)
    for entry in classpath or []:
        builder.set_classpath(entry)
    builder.set_release(release)
    builder.set_source(source)
    builder.set_target(target)

    tokens = builder.build().snapshot()
    if json_output:
        json_print(list(tokens))
    else:
        typer.echo(shlex.join(tokens))


@app.command()
def probe(
    java: str | None = typer.Option(None, "--java", help="java launcher to probe."),
    root: Path | None = RootOption,
    json_output: bool = JsonOption,
) -> None:
    """Show the Java specification version and whether --release is used."""
    try:
        cfg = get_config(root)
    except (FileNotFoundError, ValueError) as exc:
        error_exit(str(exc), json_mode=json_output)

    if java:
        version = java_spec_version(java)
    else:
        version = cfg.spec_version or java_spec_version(cfg.launcher)
    supported = supports_release(version)

    if json_output:
        json_print(
            {
                "spec_version": version or None,
                "release_supported": supported,
                "release_min_version": RELEASE_MIN_VERSION,
            }
        )
        return

    typer.echo(f"java.specification.version: {version or 'unknown'}")
    if supported:
        typer.echo("--release: supported")
    else:
        typer.echo(f"--release: not supported (needs {RELEASE_MIN_VERSION}+), using -source/-target")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
