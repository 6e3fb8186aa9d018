"""
Project commands for zerox CLI.

- check: Parse and validate source files
- tokens: Print the token stream of a file
- ast: Print the syntax tree of a file as JSON
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from zerox.cli.utils import print_human_diagnostics, print_vscode_diagnostics
from zerox.core.compiler import EditorDiagnostic, check_source
from zerox.core.errors import ConfigError, LexError, ParseError
from zerox.core.fileset import discover_source_files
from zerox.core.lexer import tokenize
from zerox.core.manifest import MANIFEST_FILENAME, ProjectManifest, load_manifest
from zerox.core.parser import parse_modules

console = Console()

OUTPUT_FORMATS = ("human", "vscode", "json")


def _load_project(manifest: str) -> tuple[Path, ProjectManifest]:
    """Load the manifest, exiting with status 1 when it is malformed."""
    manifest_path = Path(manifest).resolve()
    try:
        return manifest_path.parent, load_manifest(manifest_path)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def check_command(
    files: list[Path] | None = typer.Argument(
        None, help="Files to check. Defaults to the sources listed in the manifest."
    ),
    manifest: str = typer.Option(
        MANIFEST_FILENAME, "--manifest", "-m", help=f"Path to {MANIFEST_FILENAME}"
    ),
    format: str = typer.Option(
        "human", "--format", "-f", help="Output format: 'human', 'vscode' or 'json'"
    ),
) -> None:
    """
    Parse and validate source files.

    Exits with status 1 when any file has errors, or warnings when the
    manifest sets ``fail_on_warnings``.
    """
    if format not in OUTPUT_FORMATS:
        typer.echo(f"Error: unknown format '{format}'", err=True)
        raise typer.Exit(code=2)

    root, mf = _load_project(manifest)

    source_files = list(files) if files else discover_source_files(root, mf)
    if not source_files:
        typer.echo("Error: no source files found", err=True)
        raise typer.Exit(code=1)

    diagnostics: dict[Path, list[EditorDiagnostic]] = {}
    for f in source_files:
        try:
            text = f.read_text(encoding="utf-8")
        except OSError as e:
            typer.echo(f"Error: cannot read {f}: {e}", err=True)
            raise typer.Exit(code=1)
        diagnostics[f] = check_source(text, mf.compiler, file=f)

    if format == "json":
        payload = [
            {"file": str(f), **d.model_dump()} for f, ds in diagnostics.items() for d in ds
        ]
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    elif format == "vscode":
        print_vscode_diagnostics(diagnostics, root)
    else:
        print_human_diagnostics(diagnostics, root)

    severities = {d.severity for ds in diagnostics.values() for d in ds}
    if "error" in severities or (mf.compiler.fail_on_warnings and "warning" in severities):
        raise typer.Exit(code=1)


def tokens_command(
    file: Path = typer.Argument(..., help="Source file to tokenize"),
    manifest: str = typer.Option(
        MANIFEST_FILENAME, "--manifest", "-m", help=f"Path to {MANIFEST_FILENAME}"
    ),
) -> None:
    """Print the token stream of a source file."""
    _, mf = _load_project(manifest)
    try:
        tokens = tokenize(
            file.read_text(encoding="utf-8"),
            file,
            strict_indentation=mf.compiler.strict_indentation,
        )
    except LexError as e:
        typer.echo(f"Lex error: {e}", err=True)
        raise typer.Exit(code=1)
    except OSError as e:
        typer.echo(f"Error: cannot read {file}: {e}", err=True)
        raise typer.Exit(code=1)

    table = Table(title=f"Tokens: {file.name}")
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Type")
    table.add_column("Value")
    for token in tokens:
        table.add_row(str(token.line), str(token.column), token.type.value, repr(token.value))
    console.print(table)


def ast_command(
    file: Path = typer.Argument(..., help="Source file to parse"),
    manifest: str = typer.Option(
        MANIFEST_FILENAME, "--manifest", "-m", help=f"Path to {MANIFEST_FILENAME}"
    ),
) -> None:
    """Print the syntax tree of a source file as JSON."""
    _, mf = _load_project(manifest)
    try:
        (module,) = parse_modules([file], strict_indentation=mf.compiler.strict_indentation)
    except (LexError, ParseError) as e:
        typer.echo(f"Parse error: {e}", err=True)
        raise typer.Exit(code=1)
    except OSError as e:
        typer.echo(f"Error: cannot read {file}: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(
        json.dumps(
            [n.model_dump(mode="json") for n in module.nodes], indent=2, ensure_ascii=False
        )
    )
