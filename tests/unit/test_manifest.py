"""Tests for zerox.toml loading, source discovery and module parsing."""

from pathlib import Path

import pytest

from zerox.core import ast
from zerox.core.errors import ConfigError, ParseError
from zerox.core.fileset import discover_source_files
from zerox.core.manifest import (
    MANIFEST_FILENAME,
    CompilerConfig,
    ProjectManifest,
    SourcesConfig,
    load_manifest,
)
from zerox.core.parser import parse_modules


def write_manifest(root: Path, content: str) -> Path:
    path = root / MANIFEST_FILENAME
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadManifest:
    """Tests for load_manifest."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        manifest = load_manifest(tmp_path / MANIFEST_FILENAME)

        assert manifest.name == "untitled"
        assert manifest.version == "0.0.0"
        assert manifest.project_root == str(tmp_path)
        assert manifest.sources == SourcesConfig()
        assert manifest.compiler == CompilerConfig()

    def test_full_manifest(self, tmp_path: Path) -> None:
        path = write_manifest(
            tmp_path,
            """
[project]
name = "todo"
version = "1.2.0"

[sources]
paths = ["src/", "shared/"]
extension = ".0x"

[compiler]
strict_indentation = true
fail_on_warnings = true
""",
        )

        manifest = load_manifest(path)

        assert manifest.name == "todo"
        assert manifest.version == "1.2.0"
        assert manifest.sources.paths == ["src/", "shared/"]
        assert manifest.sources.extension == ".0x"
        assert manifest.compiler.strict_indentation is True
        assert manifest.compiler.fail_on_warnings is True

    def test_partial_manifest_keeps_defaults(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, '[project]\nname = "demo"\n')

        manifest = load_manifest(path)

        assert manifest.name == "demo"
        assert manifest.sources.paths == ["./"]
        assert manifest.compiler.fail_on_warnings is False

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, "[project\nname = ")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_manifest(path)

    def test_wrong_value_type(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, '[compiler]\nfail_on_warnings = "yes"\n')

        with pytest.raises(ConfigError, match="'fail_on_warnings' must be of type bool"):
            load_manifest(path)

    def test_paths_must_be_strings(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, "[sources]\npaths = [1, 2]\n")

        with pytest.raises(ConfigError, match="'paths' must be a list of strings"):
            load_manifest(path)

    def test_section_must_be_table(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, 'sources = "src"\n')

        with pytest.raises(ConfigError, match=r"\[sources\] must be a table"):
            load_manifest(path)


class TestDiscoverSourceFiles:
    """Tests for discover_source_files."""

    def test_finds_files_recursively(self, tmp_path: Path) -> None:
        (tmp_path / "pages").mkdir()
        (tmp_path / "app.ai").write_text("app A:\n  cart\n", encoding="utf-8")
        (tmp_path / "pages" / "home.ai").write_text("page Home:\n  cart\n", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignore me", encoding="utf-8")

        files = discover_source_files(tmp_path, ProjectManifest())

        assert [f.name for f in files] == ["app.ai", "home.ai"]

    def test_extension_without_dot(self, tmp_path: Path) -> None:
        (tmp_path / "a.0x").write_text("page A:\n  cart\n", encoding="utf-8")
        manifest = ProjectManifest(sources=SourcesConfig(extension="0x"))

        assert [f.name for f in discover_source_files(tmp_path, manifest)] == ["a.0x"]

    def test_missing_paths_are_skipped(self, tmp_path: Path) -> None:
        manifest = ProjectManifest(sources=SourcesConfig(paths=["nope/"]))
        assert discover_source_files(tmp_path, manifest) == []

    def test_file_paths_and_duplicates(self, tmp_path: Path) -> None:
        (tmp_path / "main.ai").write_text("page A:\n  cart\n", encoding="utf-8")
        manifest = ProjectManifest(sources=SourcesConfig(paths=["main.ai", "./"]))

        files = discover_source_files(tmp_path, manifest)

        assert files == [(tmp_path / "main.ai").resolve()]


class TestParseModules:
    """Tests for parse_modules."""

    def test_parses_each_file(self, tmp_path: Path) -> None:
        home = tmp_path / "home.ai"
        home.write_text('page Home:\n  text "Hi"\n', encoding="utf-8")

        (module,) = parse_modules([home])

        assert module.name == "home"
        assert module.file == home
        assert module.source == 'page Home:\n  text "Hi"\n'
        assert isinstance(module.nodes[0], ast.Page)

    def test_errors_name_the_file(self, tmp_path: Path) -> None:
        broken = tmp_path / "broken.ai"
        broken.write_text("page Home\n", encoding="utf-8")

        with pytest.raises(ParseError) as exc_info:
            parse_modules([broken])
        assert str(exc_info.value).startswith(f"{broken}:1:10")
