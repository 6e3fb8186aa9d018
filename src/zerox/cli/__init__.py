"""
zerox CLI Package.

This package contains the command line interface:

- project.py: check, tokens and ast commands
- utils.py: Version callback, logging setup and diagnostic printers
"""

import typer

from zerox import __version__, get_version
from zerox.cli.project import ast_command, check_command, tokens_command
from zerox.cli.utils import configure_logging, version_callback

app = typer.Typer(
    help="""zerox: 0x DSL compiler front end

Commands:
  • check   Parse and validate source files (uses zerox.toml when present)
  • tokens  Print the token stream of a file
  • ast     Print the syntax tree of a file as JSON
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """zerox CLI main callback for global options."""
    configure_logging(verbose)


app.command(name="check")(check_command)
app.command(name="tokens")(tokens_command)
app.command(name="ast")(ast_command)


def main() -> None:
    app(standalone_mode=True)


__all__ = [
    "__version__",
    "app",
    "main",
    "get_version",
    "version_callback",
]
