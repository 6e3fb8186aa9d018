"""Tests for semantic validation."""

import textwrap

from zerox.core.parser import parse
from zerox.core.validator import Diagnostic, ValidationResult, validate


def validate_source(source: str) -> ValidationResult:
    return validate(parse(textwrap.dedent(source).strip("\n") + "\n"))


def messages(diagnostics: list[Diagnostic]) -> list[str]:
    return [d.message for d in diagnostics]


class TestDuplicateDeclarations:
    """Tests for names declared twice in one container."""

    def test_duplicate_across_kinds(self) -> None:
        result = validate_source("""
            page Counter:
              state count: int = 0
              fn count():
                reset()
              text "{count}"
        """)

        assert messages(result.errors) == [
            "Duplicate declaration 'count' (fn), previously declared as state at line 2"
        ]
        assert (result.errors[0].line, result.errors[0].column) == (3, 3)
        assert not result.valid

    def test_every_repeat_is_reported_against_the_first(self) -> None:
        result = validate_source("""
            component Card:
              prop title: str
              derived title = "x"
              state title: str = ""
        """)

        assert messages(result.errors) == [
            "Duplicate declaration 'title' (derived), previously declared as prop at line 2",
            "Duplicate declaration 'title' (state), previously declared as prop at line 2",
        ]

    def test_containers_have_separate_namespaces(self) -> None:
        result = validate_source("""
            page A:
              state n: int = 0
              text "{n}"
            page B:
              state n: int = 0
              text "{n}"
        """)
        assert result.errors == []

    def test_other_body_nodes_do_not_collide(self) -> None:
        result = validate_source("""
            page A:
              state todos: list[str] = []
              data todos = load()
              text "{todos}"
        """)
        assert result.errors == []


class TestCircularDerived:
    """Tests for cycles between derived values."""

    def test_two_node_cycle_reports_once(self) -> None:
        result = validate_source("""
            page A:
              derived a = b + 1
              derived b = a * 2
        """)

        assert messages(result.errors) == ["Circular dependency detected in derived 'a'"]
        assert (result.errors[0].line, result.errors[0].column) == (2, 3)

    def test_self_reference(self) -> None:
        result = validate_source("""
            page A:
              derived total = total + 1
        """)
        assert messages(result.errors) == ["Circular dependency detected in derived 'total'"]

    def test_cycle_through_templates(self) -> None:
        result = validate_source("""
            page A:
              derived greeting = "Hi {name}"
              derived name = "{greeting}!"
        """)
        assert len(result.errors) == 1

    def test_separate_cycles_each_reported(self) -> None:
        result = validate_source("""
            page A:
              derived a = b
              derived b = a
              derived c = d
              derived d = c
        """)

        assert messages(result.errors) == [
            "Circular dependency detected in derived 'a'",
            "Circular dependency detected in derived 'c'",
        ]

    def test_chain_without_cycle(self) -> None:
        result = validate_source("""
            page A:
              state count: int = 0
              derived doubled = count * 2
              derived label = "{doubled} items"
              text label
        """)
        assert result.errors == []
        assert result.warnings == []


class TestUnusedState:
    """Tests for the unused-state warning."""

    def test_unused_state_warns(self) -> None:
        result = validate_source("""
            page A:
              state count: int = 0
        """)

        assert messages(result.warnings) == ["State 'count' is declared but never used"]
        assert (result.warnings[0].line, result.warnings[0].column) == (2, 3)
        assert result.valid

    def test_read_in_function(self) -> None:
        result = validate_source("""
            page A:
              state count: int = 0
              fn increment():
                count += 1
        """)
        assert result.warnings == []

    def test_bindings_count_as_use(self) -> None:
        result = validate_source("""
            page A:
              state query: str = ""
              state mode: str = "all"
              state settings: map[str, bool] = {}
              input query
              select mode options=["all", "done"]
              toggle settings.dark
        """)
        assert result.warnings == []

    def test_watch_counts_as_use(self) -> None:
        result = validate_source("""
            page A:
              state query: str = ""
              watch query:
                search()
        """)
        assert result.warnings == []

    def test_use_inside_ui_tree(self) -> None:
        result = validate_source("""
            page A:
              state items: list[str] = []
              layout col:
                for item in items:
                  text item
        """)
        assert result.warnings == []

    def test_reading_from_another_state_does_not_count(self) -> None:
        result = validate_source("""
            page A:
              state base: int = 1
              state other: int = base
              text "{other}"
        """)
        assert messages(result.warnings) == ["State 'base' is declared but never used"]


class TestValidate:
    """Tests for validate() and its result types."""

    def test_non_container_nodes_are_ignored(self) -> None:
        result = validate_source("""
            model Todo:
              title: str
            dev:
              port: 3000
        """)
        assert result == ValidationResult()

    def test_empty_program(self) -> None:
        assert validate([]).valid

    def test_diagnostic_str(self) -> None:
        diagnostic = Diagnostic(message="State 'x' is declared but never used", line=2, column=3)
        assert str(diagnostic) == "Line 2, Col 3: State 'x' is declared but never used"

    def test_todo_fixture_is_clean(self, todo_source: str) -> None:
        result = validate(parse(todo_source))
        assert result.errors == []
        assert result.warnings == []
