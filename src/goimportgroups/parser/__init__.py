"""
goimportgroups.parser - Go import-only parser

Lexer and parser for the head of Go source files.
Converts source text into a GoFile holding the package clause and the
top-level import declarations with their source offsets.
"""

from goimportgroups.parser.lexer import Lexer, Token, TokenType, LexerError
from goimportgroups.parser.parser import (
    Parser,
    ParseError,
    parse_file,
    parse_source,
    # AST Node types
    GoFile,
    ImportDecl,
    ImportSpec,
)

__all__ = [
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "LexerError",
    # Parser
    "Parser",
    "ParseError",
    "parse_file",
    "parse_source",
    # AST Nodes
    "GoFile",
    "ImportDecl",
    "ImportSpec",
]
