import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "zerox.toml"
DEFAULT_EXTENSION = ".ai"


@dataclass
class CompilerConfig:
    """Compiler behaviour switches."""

    strict_indentation: bool = False  # Reject dedents to a level never opened
    fail_on_warnings: bool = False  # CLI exits 1 on validator warnings


@dataclass
class SourcesConfig:
    """Where source files live, relative to the project root."""

    paths: list[str] = field(default_factory=lambda: ["./"])
    extension: str = DEFAULT_EXTENSION


@dataclass
class ProjectManifest:
    """
    Project manifest loaded from zerox.toml.

    Every section is optional; a missing file or section yields defaults.

    Example zerox.toml:

        [project]
        name = "my-app"
        version = "0.1.0"

        [sources]
        paths = ["src/"]
        extension = ".ai"

        [compiler]
        strict_indentation = false
        fail_on_warnings = false
    """

    name: str = "untitled"
    version: str = "0.0.0"
    project_root: str = "."
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    compiler: CompilerConfig = field(default_factory=CompilerConfig)


def _section(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: [{name}] must be a table")
    return section


def _typed(section: dict[str, Any], key: str, expected: type, default: Any, path: Path) -> Any:
    value = section.get(key, default)
    if not isinstance(value, expected):
        raise ConfigError(f"{path}: '{key}' must be of type {expected.__name__}")
    return value


def load_manifest(path: Path) -> ProjectManifest:
    """
    Load a zerox.toml manifest.

    Args:
        path: Path to the manifest file

    Returns:
        ProjectManifest, with defaults when the file does not exist

    Raises:
        ConfigError: If the file is not valid TOML or a known key has the wrong type
    """
    if not path.exists():
        logger.debug("No manifest at %s, using defaults", path)
        return ProjectManifest(project_root=str(path.parent))

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    project = _section(data, "project", path)
    sources_data = _section(data, "sources", path)
    compiler_data = _section(data, "compiler", path)

    paths = _typed(sources_data, "paths", list, ["./"], path)
    if not all(isinstance(p, str) for p in paths):
        raise ConfigError(f"{path}: 'paths' must be a list of strings")

    sources = SourcesConfig(
        paths=paths,
        extension=_typed(sources_data, "extension", str, DEFAULT_EXTENSION, path),
    )
    compiler = CompilerConfig(
        strict_indentation=_typed(compiler_data, "strict_indentation", bool, False, path),
        fail_on_warnings=_typed(compiler_data, "fail_on_warnings", bool, False, path),
    )

    return ProjectManifest(
        name=_typed(project, "name", str, "untitled", path),
        version=_typed(project, "version", str, "0.0.0", path),
        project_root=str(path.parent),
        sources=sources,
        compiler=compiler,
    )
