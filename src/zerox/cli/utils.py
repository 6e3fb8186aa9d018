"""
zerox CLI Utilities.

Shared utility functions used across CLI modules.
"""

import logging
import platform
from pathlib import Path

import typer

from zerox import get_version
from zerox.core.compiler import EditorDiagnostic


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        typer.echo(f"zerox version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {python_impl} {python_version}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")

        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logs to stderr; debug level with ``--verbose``."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def display_path(file: Path, root: Path) -> Path:
    try:
        return file.resolve().relative_to(root.resolve())
    except ValueError:
        return file


def print_human_diagnostics(
    diagnostics: dict[Path, list[EditorDiagnostic]], root: Path
) -> None:
    """Print diagnostics in human-readable format."""
    errors = [(f, d) for f, ds in diagnostics.items() for d in ds if d.severity == "error"]
    warnings = [(f, d) for f, ds in diagnostics.items() for d in ds if d.severity == "warning"]

    if errors:
        typer.echo("Validation failed:\n", err=True)
        for file, diag in errors:
            location = f"{display_path(file, root)}:{diag.line + 1}:{diag.character + 1}"
            typer.echo(f"ERROR: {location}: {diag.message}", err=True)

    if warnings:
        typer.echo("Validation warnings:\n", err=False)
        for file, diag in warnings:
            location = f"{display_path(file, root)}:{diag.line + 1}:{diag.character + 1}"
            typer.echo(f"WARNING: {location}: {diag.message}", err=False)

    if not errors and not warnings:
        typer.echo(f"OK: {len(diagnostics)} file(s) checked.")


def print_vscode_diagnostics(
    diagnostics: dict[Path, list[EditorDiagnostic]], root: Path
) -> None:
    """
    Print diagnostics in VS Code format: file:line:col: severity: message
    """
    count = 0
    for file, file_diagnostics in diagnostics.items():
        rel_path = display_path(file, root)
        for diag in file_diagnostics:
            count += 1
            typer.echo(
                f"{rel_path}:{diag.line + 1}:{diag.character + 1}: {diag.severity}: {diag.message}",
                err=True,
            )

    if not count:
        typer.echo("::notice: Validation successful")
