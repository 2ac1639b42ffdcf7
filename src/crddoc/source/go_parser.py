"""🔍 Go Source Parser - Extract struct declarations from a Go package.

Scans every `.go` file in one directory and collects:
- The package name and package doc comment
- Exported `type X struct {...}` declarations with their doc comments
- Exported fields with type expression, struct tag and doc comment

Only what the documentation builder needs is understood. Function bodies,
constants and variables are skipped.

Example:
    parser = GoSourceParser()
    package = parser.parse_directory("api/v1")
    # SourcePackage(name="v1", doc="+groupName=example.com\\n", types=[...])
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from ..exceptions import SourceParseError
from .declarations import (
    ArrayType,
    DeclaredField,
    DeclaredType,
    Ident,
    MapType,
    Selector,
    SourcePackage,
    Star,
    TypeExpr,
    UnsupportedExpr,
)


@dataclass
class Token:
    """A lexical token with its starting line."""

    kind: str  # ident, string, number, punct, newline, comment
    value: str
    line: int
    end_line: int = 0

    def __post_init__(self):
        if not self.end_line:
            self.end_line = self.line


@dataclass
class CommentGroup:
    """Adjacent comments, as Go groups them."""

    lines: list[str]
    end_line: int
    trailing: bool = False
    code_mark: int = 0  # last code line seen when the group started

    def text(self) -> str:
        """Render like go/ast CommentGroup.Text()."""
        lines = [line.rstrip() for line in self.lines]
        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()

        out: list[str] = []
        for line in lines:
            if not line and out and not out[-1]:
                continue
            out.append(line)

        if not out:
            return ""
        return "\n".join(out) + "\n"


class GoLexer:
    """Split Go source into the tokens the declaration parser needs."""

    TOKEN_PATTERN = re.compile(
        r"(?P<newline>\n)"
        r"|(?P<space>[ \t\r\f]+)"
        r"|(?P<line_comment>//[^\n]*)"
        r"|(?P<block_comment>/\*.*?\*/)"
        r"|(?P<raw_string>`[^`]*`)"
        r"|(?P<string>\"(?:\\.|[^\"\\\n])*\")"
        r"|(?P<rune>'(?:\\.|[^'\\\n])*')"
        r"|(?P<ident>[A-Za-z_][A-Za-z0-9_]*)"
        r"|(?P<number>[0-9][0-9A-Za-z_.]*)"
        r"|(?P<punct><-|\.\.\.|[{}()\[\]*.,;=:+\-/%&|^!<>~])"
        r"|(?P<other>\S)",
        re.DOTALL,
    )

    def tokenize(self, source: str) -> list[Token]:
        tokens: list[Token] = []
        line = 1
        pos = 0

        while pos < len(source):
            match = self.TOKEN_PATTERN.match(source, pos)
            if not match:
                raise SourceParseError(
                    f"Unexpected character {source[pos]!r} on line {line}"
                )
            kind = match.lastgroup
            value = match.group()
            newlines = value.count("\n")

            if kind == "newline":
                tokens.append(Token("newline", value, line))
            elif kind in ("line_comment", "block_comment"):
                tokens.append(Token("comment", value, line, line + newlines))
            elif kind in ("raw_string", "string", "rune"):
                tokens.append(Token("string", value, line, line + newlines))
            elif kind != "space":
                tokens.append(Token(kind, value, line))

            line += newlines
            pos = match.end()

        return tokens


DIRECTIVE_PATTERN = re.compile(r"^(?:line |extern |export |[a-z0-9]+:[a-z0-9])")


def _comment_lines(comment: str) -> list[str]:
    """Strip comment markers and the first space of line comments.

    Tool directives such as `//go:build` are not documentation and are dropped.
    """
    if comment.startswith("//"):
        text = comment[2:]
        if DIRECTIVE_PATTERN.match(text):
            return []
        return [text[1:] if text.startswith(" ") else text]

    body = comment[2:-2]
    return [line.strip() for line in body.split("\n")]


def _unquote_tag(literal: str) -> str:
    """Return the content of a backquoted or double-quoted tag literal."""
    if literal.startswith("`"):
        return literal[1:-1]
    body = literal[1:-1]
    return re.sub(r"\\(.)", r"\1", body)


class GoFileParser:
    """Parse the tokens of one file into package info and type declarations."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0
        self._last_group: CommentGroup | None = None
        self._last_code_line = 0

        self.package_name = ""
        self.package_doc = ""
        self.types: list[DeclaredType] = []

    # Token navigation

    def _peek(self, offset: int = 0) -> Token | None:
        index = self._pos
        while index < len(self._tokens):
            token = self._tokens[index]
            index += 1
            if token.kind == "comment":
                continue
            if offset == 0:
                return token
            offset -= 1
        return None

    def _advance(self) -> Token | None:
        """Move to the next non-comment token, collecting comment groups."""
        while self._pos < len(self._tokens):
            token = self._tokens[self._pos]
            self._pos += 1
            if token.kind == "comment":
                self._collect_comment(token)
                continue
            if token.kind != "newline":
                self._last_code_line = token.end_line
            return token
        return None

    def _collect_comment(self, token: Token) -> None:
        lines = _comment_lines(token.value)
        group = self._last_group
        trailing = token.line == self._last_code_line

        if (
            group is not None
            and not trailing
            and not group.trailing
            and group.code_mark == self._last_code_line
            and group.end_line + 1 >= token.line
        ):
            group.lines.extend(lines)
            group.end_line = token.end_line
            return

        self._last_group = CommentGroup(
            lines=lines,
            end_line=token.end_line,
            trailing=trailing,
            code_mark=self._last_code_line,
        )

    def _skip_comments(self) -> None:
        """Consume comments ahead of the cursor so doc lookup sees them."""
        while self._pos < len(self._tokens):
            token = self._tokens[self._pos]
            if token.kind != "comment":
                return
            self._collect_comment(token)
            self._pos += 1

    def _doc_for(self, token: Token) -> str:
        group = self._last_group
        if group is None or group.trailing or group.end_line != token.line - 1:
            return ""
        return group.text()

    def _skip_newlines(self) -> None:
        while True:
            self._skip_comments()
            token = self._peek()
            if token is None or token.kind != "newline":
                return
            self._advance()

    def _expect(self, value: str) -> Token:
        token = self._advance()
        if token is None or token.value != value:
            found = token.value if token else "end of file"
            line = token.line if token else "?"
            raise SourceParseError(f"Expected {value!r}, found {found!r} on line {line}")
        return token

    def _skip_balanced(self, open_: str, close: str) -> None:
        """Skip tokens up to and including the bracket closing the current one."""
        depth = 1
        while depth:
            token = self._advance()
            if token is None:
                raise SourceParseError(f"Unbalanced {open_!r}")
            if token.value == open_:
                depth += 1
            elif token.value == close:
                depth -= 1

    # Declarations

    def parse(self) -> None:
        depth = 0
        while True:
            self._skip_comments()
            token = self._peek()
            if token is None:
                return

            if depth == 0 and token.kind == "ident" and token.value == "package":
                self.package_doc = self._doc_for(token)
                self._advance()
                name = self._advance()
                self.package_name = name.value if name else ""
                continue

            if depth == 0 and token.kind == "ident" and token.value == "type":
                decl_doc = self._doc_for(token)
                self._advance()
                self._parse_type_decl(decl_doc)
                continue

            self._advance()
            if token.value in ("{", "(", "["):
                depth += 1
            elif token.value in ("}", ")", "]"):
                depth -= 1

    def _parse_type_decl(self, decl_doc: str) -> None:
        token = self._peek()
        if token is not None and token.value == "(":
            self._advance()
            specs: list[DeclaredType] = []
            while True:
                self._skip_newlines()
                token = self._peek()
                if token is None:
                    raise SourceParseError("Unterminated type group")
                if token.value == ")":
                    self._advance()
                    break
                if token.value == ";":
                    self._advance()
                    continue
                specs.append(self._parse_type_spec(self._doc_for(token)))
            # A lone spec in a group inherits the group doc, as go/doc does.
            if len(specs) == 1 and not specs[0].doc:
                specs[0].doc = decl_doc
            self._add_types(specs)
            return

        self._add_types([self._parse_type_spec(decl_doc)])

    def _add_types(self, specs: list[DeclaredType]) -> None:
        for spec in specs:
            if spec.name[:1].isupper():
                self.types.append(spec)

    def _parse_type_spec(self, doc: str) -> DeclaredType:
        name = self._advance()
        if name is None or name.kind != "ident":
            raise SourceParseError("Expected type name after 'type'")

        token = self._peek()
        if token is not None and token.value == "[":
            following = self._peek(1)
            if following is not None and following.kind == "ident":
                # Type parameters
                self._advance()
                self._skip_balanced("[", "]")
        token = self._peek()
        if token is not None and token.value == "=":
            self._advance()

        declared = DeclaredType(name=name.value, doc=doc)
        token = self._peek()
        if token is not None and token.value == "struct":
            self._advance()
            declared.fields = self._parse_struct_body()
        else:
            self._parse_type_expr()
        return declared

    def _parse_struct_body(self) -> list[DeclaredField]:
        self._expect("{")
        fields: list[DeclaredField] = []

        while True:
            self._skip_newlines()
            token = self._peek()
            if token is None:
                raise SourceParseError("Unterminated struct")
            if token.value == "}":
                self._advance()
                return fields
            if token.value == ";":
                self._advance()
                continue

            doc = self._doc_for(token)
            declared = self._parse_field(doc)
            if declared is not None:
                fields.append(declared)

    def _parse_field(self, doc: str) -> DeclaredField | None:
        first = self._peek()
        following = self._peek(1)

        embedded = first.value == "*" or (
            first.kind == "ident"
            and following is not None
            and (
                following.value in (".", ";", "}")
                or following.kind in ("newline", "string")
            )
        )

        name: str | None = None
        if embedded:
            type_expr = self._parse_type_expr()
        else:
            name_token = self._advance()
            name = name_token.value
            while self._peek() is not None and self._peek().value == ",":
                # Extra names share the first field's declaration.
                self._advance()
                self._advance()
            type_expr = self._parse_type_expr()

        tag = None
        token = self._peek()
        if token is not None and token.kind == "string":
            tag = _unquote_tag(self._advance().value)

        exported_name = name if name is not None else _base_name(type_expr)
        if not exported_name[:1].isupper():
            return None

        return DeclaredField(type_expr=type_expr, name=name, tag=tag, doc=doc)

    def _parse_type_expr(self) -> TypeExpr:
        token = self._advance()
        if token is None:
            raise SourceParseError("Unexpected end of file in type expression")

        if token.value == "*":
            return Star(self._parse_type_expr())

        if token.value == "[":
            self._skip_balanced("[", "]")
            return ArrayType(self._parse_type_expr())

        if token.value == "(":
            inner = self._parse_type_expr()
            self._expect(")")
            return inner

        if token.kind == "ident" and token.value == "map":
            self._expect("[")
            key = self._parse_type_expr()
            self._expect("]")
            return MapType(key, self._parse_type_expr())

        if token.kind == "ident" and token.value in ("struct", "interface"):
            self._expect("{")
            self._skip_balanced("{", "}")
            return UnsupportedExpr(f"{token.value}{{...}}")

        if (token.kind == "ident" and token.value in ("func", "chan")) or token.value == "<-":
            self._skip_to_end_of_field()
            return UnsupportedExpr(token.value)

        if token.kind == "ident":
            following = self._peek()
            if following is not None and following.value == ".":
                self._advance()
                selected = self._advance()
                if selected is None or selected.kind != "ident":
                    raise SourceParseError(
                        f"Expected identifier after '{token.value}.' on line {token.line}"
                    )
                return Selector(token.value, selected.value)
            return Ident(token.value)

        raise SourceParseError(
            f"Unexpected {token.value!r} in type expression on line {token.line}"
        )

    def _skip_to_end_of_field(self) -> None:
        depth = 0
        while True:
            token = self._peek()
            if token is None:
                return
            if depth == 0 and (
                token.kind in ("newline", "string") or token.value in (";", "}")
            ):
                return
            self._advance()
            if token.value in ("(", "[", "{"):
                depth += 1
            elif token.value in (")", "]", "}"):
                depth -= 1


def _base_name(expr: TypeExpr) -> str:
    """Name used for an embedded field: the type name without package or pointer."""
    if isinstance(expr, Star):
        return _base_name(expr.x)
    if isinstance(expr, Selector):
        return expr.name
    if isinstance(expr, Ident):
        return expr.name
    return ""


class GoSourceParser:
    """Build a SourcePackage from the Go files of one directory.

    Declared types are sorted by name, matching go/doc ordering.
    """

    def parse_directory(self, folder: Path | str) -> SourcePackage:
        """Parse all non-test Go files in a directory.

        Args:
            folder: Directory holding the API package

        Returns:
            SourcePackage with package doc and declared types

        Raises:
            SourceParseError: If the directory or a file cannot be read or scanned
        """
        folder = Path(folder)
        try:
            files = sorted(
                path
                for path in folder.iterdir()
                if path.is_file()
                and path.suffix == ".go"
                and not path.name.endswith("_test.go")
            )
        except OSError as e:
            raise SourceParseError(f"read directory {folder}: {e}") from e

        package = SourcePackage(name="")
        docs: list[str] = []
        for path in files:
            try:
                source = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise SourceParseError(f"read {path}: {e}") from e

            try:
                parsed = self._parse_file(source)
            except SourceParseError as e:
                raise SourceParseError(f"parse {path.name}: {e}") from e

            if not package.name:
                package.name = parsed.package_name
            if parsed.package_doc:
                docs.append(parsed.package_doc)
            package.types.extend(parsed.types)

        package.doc = "\n".join(docs)
        package.types.sort(key=lambda declared: declared.name)
        return package

    def parse_string(self, source: str) -> SourcePackage:
        """Parse a single Go source string."""
        parsed = self._parse_file(source)
        types = sorted(parsed.types, key=lambda declared: declared.name)
        return SourcePackage(name=parsed.package_name, doc=parsed.package_doc, types=types)

    def _parse_file(self, source: str) -> GoFileParser:
        tokens = GoLexer().tokenize(source)
        parser = GoFileParser(tokens)
        parser.parse()
        return parser


def parse_go_package(folder: Path | str) -> SourcePackage:
    """Convenience function to parse a Go package directory.

    Args:
        folder: Directory holding the API package

    Returns:
        SourcePackage
    """
    return GoSourceParser().parse_directory(folder)
