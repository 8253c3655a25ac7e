"""
Go Import-Only Parser

Converts a token stream from the lexer into a small AST holding the package
clause and the top-level import declarations. Parsing stops at the first
top-level token that does not belong to an import declaration, so the
remainder of the file is never tokenized.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from goimportgroups.parser.lexer import Lexer, Token, TokenType


@dataclass
class ImportSpec:
    """One imported package: optional name (alias, '.' or '_') and path."""
    path: str
    name: Optional[str] = None
    line: int = 0
    column: int = 0

    def __repr__(self):
        if self.name:
            return f"ImportSpec({self.name} {self.path!r})"
        return f"ImportSpec({self.path!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            '_type': 'import_spec',
            'path': self.path,
            'name': self.name,
            'line': self.line,
            'column': self.column,
        }


@dataclass
class ImportDecl:
    """A top-level ``import`` declaration.

    ``start`` points at the ``import`` keyword and ``end`` just past the
    closing parenthesis (or past the path string for the single form).
    Both are character offsets into the source text.
    """
    start: int
    end: int
    line: int = 0
    column: int = 0
    parenthesized: bool = False
    specs: List[ImportSpec] = field(default_factory=list)

    def __repr__(self):
        return f"ImportDecl({self.start}:{self.end}, {len(self.specs)} specs)"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            '_type': 'import_decl',
            'start': self.start,
            'end': self.end,
            'line': self.line,
            'column': self.column,
            'parenthesized': self.parenthesized,
            'specs': [s.to_dict() for s in self.specs],
        }


@dataclass
class GoFile:
    """Root of the AST: package clause plus import declarations."""
    package: str
    imports: List[ImportDecl] = field(default_factory=list)
    filename: str = "<unknown>"

    def __repr__(self):
        return f"GoFile({self.filename}, package {self.package}, {len(self.imports)} import decls)"

    @property
    def import_paths(self) -> List[str]:
        """All imported paths in declaration order."""
        return [spec.path for decl in self.imports for spec in decl.specs]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            '_type': 'file',
            'filename': self.filename,
            'package': self.package,
            'imports': [d.to_dict() for d in self.imports],
        }


class ParseError(Exception):
    """Error during parsing."""
    def __init__(self, message: str, token: Token = None):
        self.token = token
        self.line = token.line if token else 0
        self.column = token.column if token else 0
        self.message = message
        if token:
            super().__init__(f"Parse error at line {token.line}, column {token.column}: {message}")
        else:
            super().__init__(f"Parse error: {message}")


class Parser:
    """
    Import-only parser for Go source files.

    Usage:
        parser = Parser(lexer.tokenize())
        go_file = parser.parse()

    Tokens are pulled lazily, one lookahead at a time.
    """

    def __init__(self, tokens: Iterator[Token], filename: str = "<unknown>"):
        self.tokens = iter(tokens)
        self.filename = filename
        self._lookahead: Optional[Token] = None

    def _current(self) -> Token:
        """Get the current token (EOF once the stream is exhausted)."""
        if self._lookahead is None:
            self._lookahead = next(self.tokens, None)
            if self._lookahead is None:
                raise ParseError("Token stream ended without EOF")
        return self._lookahead

    def _advance(self) -> Token:
        """Consume and return the current token."""
        token = self._current()
        if token.type != TokenType.EOF:
            self._lookahead = None
        return token

    def _expect(self, token_type: TokenType, message: str = None) -> Token:
        """Expect a specific token type, raise error if not found."""
        token = self._current()
        if token.type != token_type:
            raise ParseError(
                message or f"Expected {token_type.name}, got {token.type.name}",
                token
            )
        return self._advance()

    def _is_keyword(self, token: Token, keyword: str) -> bool:
        return token.type == TokenType.IDENTIFIER and token.value == keyword

    def _skip_semicolons(self) -> None:
        while self._current().type == TokenType.SEMICOLON:
            self._advance()

    def parse(self) -> GoFile:
        """Parse the package clause and every import declaration after it."""
        self._skip_semicolons()
        token = self._current()
        if not self._is_keyword(token, 'package'):
            raise ParseError("Expected 'package' clause", token)
        self._advance()
        name = self._expect(TokenType.IDENTIFIER, "Expected package name")

        go_file = GoFile(package=name.value, filename=self.filename)

        while True:
            self._skip_semicolons()
            token = self._current()
            if not self._is_keyword(token, 'import'):
                break
            go_file.imports.append(self._parse_import_decl())

        return go_file

    def _parse_import_decl(self) -> ImportDecl:
        keyword = self._advance()
        decl = ImportDecl(
            start=keyword.offset,
            end=keyword.end,
            line=keyword.line,
            column=keyword.column,
        )

        if self._current().type == TokenType.LPAREN:
            self._advance()
            decl.parenthesized = True
            while True:
                self._skip_semicolons()
                token = self._current()
                if token.type == TokenType.RPAREN:
                    decl.end = self._advance().end
                    break
                if token.type == TokenType.EOF:
                    raise ParseError("Unclosed import declaration", keyword)
                spec, _ = self._parse_import_spec()
                decl.specs.append(spec)
        else:
            spec, path_token = self._parse_import_spec()
            decl.specs.append(spec)
            decl.end = path_token.end

        return decl

    def _parse_import_spec(self):
        """Parse ``[name] "path"``; returns the spec and its path token."""
        token = self._current()
        name = None
        if token.type in (TokenType.IDENTIFIER, TokenType.DOT):
            name = self._advance().value
        path = self._expect(TokenType.STRING, "Expected import path")
        if not path.value:
            raise ParseError("Invalid import path: empty string", path)
        spec = ImportSpec(path=path.value, name=name, line=token.line, column=token.column)
        return spec, path


def parse_source(source: str, filename: str = "<unknown>") -> GoFile:
    """Parse source code string into AST."""
    lexer = Lexer(source, filename)
    parser = Parser(lexer.tokenize(), filename)
    return parser.parse()


def parse_file(filepath: str) -> GoFile:
    """Parse a file into AST. Go sources are UTF-8; a BOM is tolerated."""
    with open(filepath, 'r', encoding='utf-8-sig') as f:
        source = f.read()
    return parse_source(source, filepath)
