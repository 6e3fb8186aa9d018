"""
Data layer parsing: models, data sources, forms, tables, realtime channels.

DSL Syntax:

    model Todo:
      title: str
      done: bool = false
      validate:
        title.length > 0 "Title is required"
      permission:
        delete: admin
      search: title
      sort: createdAt, title

    data todos = api.get("/todos"):
      loading: skeleton
      error: "Could not load todos"
      empty: "Nothing here yet"

    form signup:
      field email: str
        label: "Email"
        required: "Email is required"
        format: email "Enter a valid email"
      submit "Create account" -> register(signup):
        success: navigate("/welcome")

    table users:
      column "Name" name sortable searchable
      column "Joined" createdAt format=date
      select
      actions: [edit, delete]
      features:
        pagination: 20

    realtime chat = subscribe("room"):
      on message: messages.push(event)

    emit "typing" data=user.id
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ast
from ..lexer import TokenType

COLUMN_FLAGS = ("sortable", "searchable", "filterable")

FORM_RULES_WITH_VALUE = ("min", "max")


class DataParserMixin:
    """Parser mixin for models, data declarations, forms, tables and realtime."""

    if TYPE_CHECKING:
        advance: Any
        loc: Any
        current_token: Any
        peek_token: Any
        match: Any
        match_keyword: Any
        match_punct: Any
        match_op: Any
        match_word: Any
        error: Any
        unexpected: Any
        expect_keyword: Any
        expect_punct: Any
        expect_op: Any
        expect_name: Any
        expect_string: Any
        at_line_end: Any
        parse_dotted_name: Any
        parse_name_list: Any
        parse_inline_props: Any
        parse_props_block: Any
        block_lines: Any
        parse_expression: Any
        parse_assignment: Any
        parse_type_expr: Any
        parse_statement_suite: Any

    def _at_labelled(self, *labels: str) -> bool:
        """Check for ``label:`` where ``label`` is one of ``labels``."""
        following = self.peek_token()
        return (
            self.match_word(*labels)
            and following.type == TokenType.PUNCTUATION
            and following.value == ":"
        )

    # -------------------------------------------------------------------------
    # Model
    # -------------------------------------------------------------------------

    def parse_model(self) -> ast.Model:
        loc = self.loc()
        self.expect_keyword("model")
        name = self.expect_name()
        self.expect_punct(":")

        fields: list[ast.ModelField] = []
        rules: list[ast.ModelRule] = []
        permissions: list[ast.ModelPermission] = []
        lists: dict[str, list[str]] = {"search": [], "sort": [], "filter": []}

        for _ in self.block_lines():
            if self._at_labelled("validate"):
                self.advance()
                self.advance()
                for _ in self.block_lines():
                    condition = self.parse_expression()
                    rules.append(ast.ModelRule(condition=condition, message=self.expect_string()))

            elif self._at_labelled("permission"):
                self.advance()
                self.advance()
                for _ in self.block_lines():
                    action = self.expect_name()
                    self.expect_punct(":")
                    permissions.append(ast.ModelPermission(action=action, role=self.expect_name()))

            elif self._at_labelled(*lists):
                key = self.advance().value
                self.advance()
                lists[key].extend(self.parse_name_list())

            else:
                field_name = self.expect_name()
                self.expect_punct(":")
                field_type = self.parse_type_expr()
                default_value = None
                if self.match_op("="):
                    self.advance()
                    default_value = self.parse_expression()
                fields.append(
                    ast.ModelField(name=field_name, field_type=field_type, default_value=default_value)
                )

        return ast.Model(
            name=name,
            fields=fields,
            rules=rules,
            permissions=permissions,
            search=lists["search"],
            sort=lists["sort"],
            filter=lists["filter"],
            loc=loc,
        )

    # -------------------------------------------------------------------------
    # Data
    # -------------------------------------------------------------------------

    def parse_data(self) -> ast.DataDecl:
        """Parse ``data name = query`` with optional loading/error/empty states."""
        loc = self.loc()
        self.expect_keyword("data")
        name = self.expect_name()
        self.expect_op("=")
        query = self.parse_expression()

        options: dict[str, Any] = {"loading": None, "error": None, "empty": None}
        if self.match_punct(":"):
            self.advance()
            for _ in self.block_lines():
                option = self.current_token()
                key = self.expect_name()
                self.expect_punct(":")
                if key == "loading":
                    options[key] = self.parse_expression()
                elif key in ("error", "empty"):
                    options[key] = self.expect_string()
                else:
                    raise self.error(f"Unknown data option '{key}'", option)

        return ast.DataDecl(name=name, query=query, loc=loc, **options)

    # -------------------------------------------------------------------------
    # Form
    # -------------------------------------------------------------------------

    def parse_form(self) -> ast.FormDecl:
        loc = self.loc()
        self.expect_keyword("form")
        name = self.expect_name()
        self.expect_punct(":")

        fields: list[ast.FormField] = []
        submit = None
        for _ in self.block_lines():
            if self.match_keyword("field"):
                fields.append(self._parse_form_field())
            elif self.match_keyword("submit"):
                submit = self._parse_form_submit()
            else:
                raise self.unexpected("'field' or 'submit'")

        return ast.FormDecl(name=name, fields=fields, submit=submit, loc=loc)

    def _parse_form_field(self) -> ast.FormField:
        """
        Parse ``field name: T`` and its option block.

        Validation rules carry their message as a trailing string; any
        other ``key: value`` line becomes a prop.
        """
        self.expect_keyword("field")
        name = self.expect_name()
        self.expect_punct(":")
        field_type = self.parse_type_expr()

        label = name
        validations: list[ast.FormValidation] = []
        props: dict[str, ast.Expr] = {}
        if self.match_punct(":"):
            self.advance()
        for _ in self.block_lines():
            key_loc = self.loc()
            key = self.expect_name()
            self.expect_punct(":")

            if key == "label":
                label = self.expect_string()
            elif key == "required":
                validations.append(
                    ast.FormValidation(rule="required", message=self.expect_string())
                )
            elif key in FORM_RULES_WITH_VALUE:
                value = self.parse_expression()
                validations.append(
                    ast.FormValidation(rule=key, value=value, message=self.expect_string())
                )
            elif key == "format":
                value = ast.StringLiteral(value=self.expect_name(), loc=key_loc)
                validations.append(
                    ast.FormValidation(rule="format", value=value, message=self.expect_string())
                )
            elif key == "pattern":
                value = ast.StringLiteral(value=self.expect_string(), loc=key_loc)
                validations.append(
                    ast.FormValidation(rule="pattern", value=value, message=self.expect_string())
                )
            else:
                props[key] = self.parse_expression()

        return ast.FormField(
            name=name, field_type=field_type, label=label, validations=validations, props=props
        )

    def _parse_form_submit(self) -> ast.FormSubmit:
        """Parse ``submit "Label" -> action`` with optional success/error handlers."""
        self.expect_keyword("submit")
        label = self.expect_string()
        self.expect_op("->")
        action = self.parse_assignment()

        handlers: dict[str, ast.Expr | None] = {"success": None, "error": None}
        if self.match_punct(":"):
            self.advance()
            for _ in self.block_lines():
                option = self.current_token()
                key = self.expect_name()
                if key not in handlers:
                    raise self.error(f"Unknown submit option '{key}'", option)
                self.expect_punct(":")
                handlers[key] = self.parse_assignment()

        return ast.FormSubmit(label=label, action=action, **handlers)

    # -------------------------------------------------------------------------
    # Table
    # -------------------------------------------------------------------------

    def parse_table(self) -> ast.Table:
        loc = self.loc()
        self.expect_keyword("table")
        data_source = self.parse_dotted_name()
        self.expect_punct(":")

        columns: list[ast.TableColumn] = []
        features: dict[str, ast.Expr] = {}
        for _ in self.block_lines():
            if self._at_labelled("features"):
                self.advance()
                self.advance()
                features.update(self.parse_props_block())
            elif self._at_labelled("columns"):
                self.advance()
                self.advance()
                for _ in self.block_lines():
                    columns.append(self._parse_table_entry())
            else:
                columns.append(self._parse_table_entry())

        return ast.Table(data_source=data_source, columns=columns, features=features, loc=loc)

    def _parse_table_entry(self) -> ast.TableColumn:
        if self.match_keyword("column"):
            return self._parse_table_column()
        if self.match_keyword("select"):
            self.advance()
            return ast.TableColumn(kind="select")
        if self._at_labelled("actions"):
            self.advance()
            self.advance()
            return ast.TableColumn(kind="actions", actions=self._parse_action_names())
        raise self.unexpected("'column', 'select', 'actions' or 'features'")

    def _parse_table_column(self) -> ast.TableColumn:
        """Parse ``column "Label" field[.sub] [sortable] [searchable] [filterable] [format=name]``."""
        self.expect_keyword("column")
        label = self.expect_string()
        field = self.parse_dotted_name()

        flags = dict.fromkeys(COLUMN_FLAGS, False)
        column_format = None
        while not self.at_line_end():
            modifier = self.current_token()
            word = self.expect_name()
            if word in flags:
                flags[word] = True
            elif word == "format":
                self.expect_op("=")
                column_format = self.expect_name()
                if self.match_punct("("):
                    self.advance()
                    column_format += f"({self.expect_name()})"
                    self.expect_punct(")")
            else:
                raise self.error(f"Unknown column modifier '{word}'", modifier)

        return ast.TableColumn(kind="field", field=field, label=label, format=column_format, **flags)

    def _parse_action_names(self) -> list[str]:
        """Parse ``[edit, delete, "archive"]``."""
        self.expect_punct("[")
        names = []
        while not self.match_punct("]"):
            if self.match(TokenType.STRING):
                names.append(self.advance().value)
            else:
                names.append(self.expect_name())
            if self.match_punct(","):
                self.advance()
            elif not self.match_punct("]"):
                raise self.unexpected("',' or ']'")
        self.expect_punct("]")
        return names

    # -------------------------------------------------------------------------
    # Realtime
    # -------------------------------------------------------------------------

    def parse_realtime(self) -> ast.RealtimeDecl:
        loc = self.loc()
        self.expect_keyword("realtime")
        name = self.expect_name()
        self.expect_op("=")

        following = self.peek_token()
        if (
            self.match_keyword("subscribe")
            and following.type == TokenType.PUNCTUATION
            and following.value == "("
        ):
            self.advance()
            self.expect_punct("(")
            channel = self.parse_expression()
            self.expect_punct(")")
        else:
            channel = self.parse_expression()

        handlers = []
        if self.match_punct(":"):
            self.advance()
            for _ in self.block_lines():
                self.expect_keyword("on")
                event = self.expect_name()
                self.expect_punct(":")
                handlers.append(
                    ast.RealtimeHandler(event=event, body=self.parse_statement_suite())
                )

        return ast.RealtimeDecl(name=name, channel=channel, handlers=handlers, loc=loc)

    def parse_emit(self) -> ast.Emit:
        """Parse ``emit channel key=value ...``; ``data=`` is the payload."""
        loc = self.loc()
        self.expect_keyword("emit")
        channel = self.parse_expression()
        props = self.parse_inline_props()
        data = props.pop("data", None) or ast.NullLiteral(loc=loc)
        return ast.Emit(channel=channel, data=data, props=props, loc=loc)
