"""Tests for the zerox command line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from zerox import get_version
from zerox.cli import app

runner = CliRunner()

CLEAN = 'page Home:\n  text "Hi"\n'
UNUSED = "page Home:\n  state count: int = 0\n"
BROKEN = "page Home\n"
MISALIGNED = "page A:\n  layout col:\n      text 1\n    text 2\n"
STRICT = "[compiler]\nstrict_indentation = true\n"


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run commands from an empty project directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestVersion:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"zerox version {get_version()}" in result.output
        assert "Python:" in result.output


class TestCheckCommand:
    """Tests for ``zerox check``."""

    def test_clean_file(self, project: Path) -> None:
        home = write(project / "home.ai", CLEAN)

        result = runner.invoke(app, ["check", str(home)])

        assert result.exit_code == 0
        assert "OK: 1 file(s) checked." in result.output

    def test_syntax_error_fails(self, project: Path) -> None:
        home = write(project / "home.ai", BROKEN)

        result = runner.invoke(app, ["check", str(home)])

        assert result.exit_code == 1
        assert "Validation failed:" in result.output
        assert (
            "ERROR: home.ai:1:10: Unexpected end of line: expected PUNCTUATION ':'"
            in result.output
        )

    def test_warnings_do_not_fail_by_default(self, project: Path) -> None:
        home = write(project / "home.ai", UNUSED)

        result = runner.invoke(app, ["check", str(home)])

        assert result.exit_code == 0
        assert "WARNING: home.ai:2:3: State 'count' is declared but never used" in result.output

    def test_fail_on_warnings_from_manifest(self, project: Path) -> None:
        write(project / "zerox.toml", "[compiler]\nfail_on_warnings = true\n")
        home = write(project / "home.ai", UNUSED)

        result = runner.invoke(app, ["check", str(home)])

        assert result.exit_code == 1

    def test_json_format(self, project: Path) -> None:
        home = write(project / "home.ai", UNUSED)

        result = runner.invoke(app, ["check", str(home), "--format", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == [
            {
                "file": str(home),
                "severity": "warning",
                "line": 1,
                "character": 2,
                "end_character": 7,
                "message": "State 'count' is declared but never used",
                "source": "0x",
            }
        ]

    def test_vscode_format(self, project: Path) -> None:
        home = write(project / "home.ai", BROKEN)

        result = runner.invoke(app, ["check", str(home), "-f", "vscode"])

        assert result.exit_code == 1
        assert (
            "home.ai:1:10: error: Unexpected end of line: expected PUNCTUATION ':'"
            in result.output
        )

    def test_vscode_format_success(self, project: Path) -> None:
        home = write(project / "home.ai", CLEAN)

        result = runner.invoke(app, ["check", str(home), "-f", "vscode"])

        assert result.exit_code == 0
        assert "::notice: Validation successful" in result.output

    def test_unknown_format(self, project: Path) -> None:
        home = write(project / "home.ai", CLEAN)

        result = runner.invoke(app, ["check", str(home), "--format", "xml"])

        assert result.exit_code == 2
        assert "unknown format 'xml'" in result.output

    def test_no_source_files(self, project: Path) -> None:
        result = runner.invoke(app, ["check"])

        assert result.exit_code == 1
        assert "no source files found" in result.output

    def test_discovers_sources_from_manifest(self, project: Path) -> None:
        write(project / "zerox.toml", '[sources]\npaths = ["src/"]\n')
        write(project / "src" / "home.ai", CLEAN)
        write(project / "src" / "pages" / "about.ai", CLEAN)
        write(project / "other" / "broken.ai", BROKEN)

        result = runner.invoke(app, ["check"])

        assert result.exit_code == 0
        assert "OK: 2 file(s) checked." in result.output

    def test_explicit_manifest_path(self, project: Path) -> None:
        write(project / "app" / "zerox.toml", "")
        write(project / "app" / "main.ai", CLEAN)

        result = runner.invoke(app, ["check", "--manifest", str(project / "app" / "zerox.toml")])

        assert result.exit_code == 0
        assert "OK: 1 file(s) checked." in result.output

    def test_invalid_manifest(self, project: Path) -> None:
        write(project / "zerox.toml", "[compiler\n")

        result = runner.invoke(app, ["check"])

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output

    def test_unreadable_file(self, project: Path) -> None:
        result = runner.invoke(app, ["check", str(project / "missing.ai")])

        assert result.exit_code == 1
        assert "cannot read" in result.output


class TestTokensCommand:
    """Tests for ``zerox tokens``."""

    def test_prints_token_table(self, project: Path) -> None:
        home = write(project / "home.ai", CLEAN)

        result = runner.invoke(app, ["tokens", str(home)])

        assert result.exit_code == 0
        assert "KEYWORD" in result.output
        assert "IDENTIFIER" in result.output
        assert "EOF" in result.output

    def test_strict_indentation_from_manifest(self, project: Path) -> None:
        home = write(project / "home.ai", MISALIGNED)

        assert runner.invoke(app, ["tokens", str(home)]).exit_code == 0

        write(project / "zerox.toml", STRICT)
        result = runner.invoke(app, ["tokens", str(home)])

        assert result.exit_code == 1
        assert "Inconsistent indentation (expected 2 spaces, got 4)" in result.output

    def test_lex_error(self, project: Path) -> None:
        home = write(project / "home.ai", 'text "open\n')

        result = runner.invoke(app, ["tokens", str(home)])

        assert result.exit_code == 1
        assert "Unterminated string literal" in result.output


class TestAstCommand:
    """Tests for ``zerox ast``."""

    def test_prints_json(self, project: Path) -> None:
        home = write(project / "home.ai", CLEAN)

        result = runner.invoke(app, ["ast", str(home)])

        assert result.exit_code == 0
        (page,) = json.loads(result.stdout)
        assert page["type"] == "Page"
        assert page["name"] == "Home"
        assert page["body"][0]["type"] == "Text"
        assert page["body"][0]["content"] == {
            "kind": "string",
            "value": "Hi",
            "loc": {"line": 2, "column": 8},
        }

    def test_parse_error(self, project: Path) -> None:
        home = write(project / "home.ai", BROKEN)

        result = runner.invoke(app, ["ast", str(home)])

        assert result.exit_code == 1
        assert "Parse error:" in result.output

    def test_strict_indentation_from_manifest(self, project: Path) -> None:
        write(project / "app" / "zerox.toml", STRICT)
        home = write(project / "home.ai", MISALIGNED)

        assert runner.invoke(app, ["ast", str(home)]).exit_code == 0

        result = runner.invoke(app, ["ast", str(home), "-m", str(project / "app" / "zerox.toml")])

        assert result.exit_code == 1
        assert "Parse error:" in result.output
        assert "Inconsistent indentation" in result.output

    def test_unreadable_file(self, project: Path) -> None:
        result = runner.invoke(app, ["ast", str(project / "missing.ai")])

        assert result.exit_code == 1
        assert "cannot read" in result.output

    def test_invalid_manifest(self, project: Path) -> None:
        write(project / "zerox.toml", "[compiler\n")
        home = write(project / "home.ai", CLEAN)

        result = runner.invoke(app, ["ast", str(home)])

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output
