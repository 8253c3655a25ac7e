"""
Go Source Lexer (Tokenizer)

Converts Go source text into a stream of tokens.
Handles: identifiers, keywords, strings, runes, numbers, comments, operators.

Only as much of the Go lexical grammar as the import-only parser needs is
distinguished; every other operator is reported as a single OPERATOR token.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional


class TokenType(Enum):
    """Types of tokens in Go source."""
    IDENTIFIER = auto()      # fmt, main, import, package
    STRING = auto()          # "interpreted" or `raw`
    RUNE = auto()            # 'a', '\n'
    NUMBER = auto()          # 123, 0x1F, 1.5e3
    LPAREN = auto()          # (
    RPAREN = auto()          # )
    LBRACE = auto()          # {
    RBRACE = auto()          # }
    LBRACKET = auto()        # [
    RBRACKET = auto()        # ]
    SEMICOLON = auto()       # ;
    COMMA = auto()           # ,
    DOT = auto()             # . (also the dot-import name)
    OPERATOR = auto()        # + := <- ... and friends
    COMMENT = auto()         # // line or /* block */
    NEWLINE = auto()         # \n
    EOF = auto()             # End of file


@dataclass
class Token:
    """A single token from the lexer.

    ``offset`` and ``end`` are character offsets into the source text,
    ``end`` being exclusive.
    """
    type: TokenType
    value: str
    line: int
    column: int
    offset: int
    end: int

    def __repr__(self):
        if self.type == TokenType.NEWLINE:
            return f"Token({self.type.name}, '\\n', L{self.line}:{self.column})"
        return f"Token({self.type.name}, {self.value!r}, L{self.line}:{self.column})"


class LexerError(Exception):
    """Error during lexical analysis."""
    def __init__(self, message: str, line: int, column: int):
        self.line = line
        self.column = column
        super().__init__(f"Lexer error at line {line}, column {column}: {message}")


# Longest first so that multi-character operators win
_OPERATORS = (
    "<<=", ">>=", "&^=", "...",
    "&&", "||", "<-", "++", "--", "==", "!=", "<=", ">=", ":=",
    "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "<<", ">>", "&^",
    "+", "-", "*", "/", "%", "&", "|", "^", "<", ">", "=", "!", ":", "~",
)

_PUNCTUATION = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
}

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


class Lexer:
    """
    Tokenizer for Go source files.

    Usage:
        lexer = Lexer(source_text)
        tokens = list(lexer.tokenize())
    """

    @staticmethod
    def _is_ident_start(ch: str) -> bool:
        """Check if character can start an identifier (letter or underscore)."""
        return ch == '_' or ch.isalpha()

    @staticmethod
    def _is_ident_cont(ch: str) -> bool:
        """Check if character can continue an identifier."""
        return ch == '_' or ch.isalnum()

    def __init__(self, source: str, filename: str = "<unknown>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.length = len(source)

    def _current(self) -> Optional[str]:
        """Get current character or None if at end."""
        if self.pos >= self.length:
            return None
        return self.source[self.pos]

    def _peek(self, offset: int = 1) -> Optional[str]:
        """Peek ahead by offset characters."""
        pos = self.pos + offset
        if pos >= self.length:
            return None
        return self.source[pos]

    def _advance(self) -> Optional[str]:
        """Advance one character and return it."""
        ch = self._current()
        if ch is not None:
            self.pos += 1
            if ch == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return ch

    def _skip_whitespace(self) -> None:
        """Skip spaces, tabs and BOMs (but not newlines)."""
        while self._current() in (' ', '\t', '\r', '\ufeff'):
            self._advance()

    def _read_escape(self, quote_char: str, start_line: int, start_col: int) -> str:
        """Read one escape sequence after the backslash has been consumed."""
        esc = self._current()
        if esc is None:
            raise LexerError("Unterminated escape sequence", start_line, start_col)
        if esc in _SIMPLE_ESCAPES:
            if esc in ("'", '"') and esc != quote_char:
                raise LexerError(f"Unknown escape sequence \\{esc}", self.line, self.column)
            self._advance()
            return _SIMPLE_ESCAPES[esc]

        # Numeric escapes: \x hh, \u hhhh, \U hhhhhhhh, \ooo
        if esc in ('x', 'u', 'U'):
            width = {'x': 2, 'u': 4, 'U': 8}[esc]
            base = 16
            self._advance()
        elif esc in '01234567':
            width = 3
            base = 8
        else:
            raise LexerError(f"Unknown escape sequence \\{esc}", self.line, self.column)

        allowed = '01234567' if base == 8 else '0123456789abcdefABCDEF'
        digits = []
        for _ in range(width):
            ch = self._current()
            if ch is None or ch not in allowed:
                raise LexerError("Malformed numeric escape", self.line, self.column)
            digits.append(ch)
            self._advance()
        # Byte escapes (\x, \ooo) are kept as code points so the value stays a str
        try:
            return chr(int(''.join(digits), base))
        except ValueError:
            raise LexerError("Escape sequence is invalid Unicode code point", start_line, start_col)

    def _read_string(self) -> str:
        """Read an interpreted "..." string, decoding escapes."""
        start_line = self.line
        start_col = self.column

        # Skip opening quote
        self._advance()

        result = []
        while True:
            ch = self._current()
            if ch is None or ch == '\n':
                raise LexerError("Unterminated string", start_line, start_col)
            if ch == '"':
                self._advance()  # Skip closing quote
                break
            if ch == '\\':
                self._advance()
                result.append(self._read_escape('"', start_line, start_col))
            else:
                result.append(ch)
                self._advance()

        return ''.join(result)

    def _read_raw_string(self) -> str:
        """Read a `raw` string. Carriage returns are discarded, as in Go."""
        start_line = self.line
        start_col = self.column

        self._advance()

        result = []
        while True:
            ch = self._current()
            if ch is None:
                raise LexerError("Unterminated raw string", start_line, start_col)
            self._advance()
            if ch == '`':
                break
            if ch != '\r':
                result.append(ch)

        return ''.join(result)

    def _read_rune(self) -> str:
        """Read a 'x' rune literal."""
        start_line = self.line
        start_col = self.column

        self._advance()

        result = []
        while True:
            ch = self._current()
            if ch is None or ch == '\n':
                raise LexerError("Unterminated rune literal", start_line, start_col)
            if ch == "'":
                self._advance()
                break
            if ch == '\\':
                self._advance()
                result.append(self._read_escape("'", start_line, start_col))
            else:
                result.append(ch)
                self._advance()

        if len(result) != 1:
            raise LexerError("Rune literal must hold exactly one character", start_line, start_col)
        return result[0]

    def _read_identifier(self) -> str:
        """Read an identifier or keyword."""
        result = []
        while True:
            ch = self._current()
            if ch is None or not self._is_ident_cont(ch):
                break
            result.append(ch)
            self._advance()
        return ''.join(result)

    def _read_number(self) -> str:
        """Read an integer, float or imaginary literal.

        Validation is loose: digits, letters, underscores and dots are
        consumed, plus a sign directly after an exponent marker.
        """
        result = []
        while True:
            ch = self._current()
            if ch is None:
                break
            if ch.isalnum() or ch in '_.':
                result.append(ch)
                self._advance()
                if ch in 'eEpP' and self._current() in ('+', '-'):
                    is_hex = ''.join(result[:2]).lower() == '0x'
                    if ch in 'pP' or not is_hex:
                        result.append(self._advance())
            else:
                break
        return ''.join(result)

    def _read_line_comment(self) -> str:
        """Read a comment from // to end of line."""
        result = []
        self._advance()
        self._advance()
        while True:
            ch = self._current()
            if ch is None or ch == '\n':
                break
            result.append(ch)
            self._advance()
        return ''.join(result)

    def _read_block_comment(self) -> str:
        """Read a /* ... */ comment, which may span lines."""
        start_line = self.line
        start_col = self.column
        result = []
        self._advance()
        self._advance()
        while True:
            ch = self._current()
            if ch is None:
                raise LexerError("Unterminated block comment", start_line, start_col)
            if ch == '*' and self._peek() == '/':
                self._advance()
                self._advance()
                break
            result.append(ch)
            self._advance()
        return ''.join(result)

    def _read_operator(self) -> str:
        """Read the longest operator at the current position."""
        for op in _OPERATORS:
            if self.source.startswith(op, self.pos):
                for _ in op:
                    self._advance()
                return op
        raise LexerError(f"Unexpected character {self._current()!r}", self.line, self.column)

    def tokenize(self, include_comments: bool = False, include_newlines: bool = False) -> Iterator[Token]:
        """
        Generate tokens from the source.

        Args:
            include_comments: If True, emit COMMENT tokens. Otherwise skip them.
            include_newlines: If True, emit NEWLINE tokens. Otherwise skip them.
        """
        while True:
            self._skip_whitespace()

            ch = self._current()
            start_line = self.line
            start_col = self.column
            start = self.pos

            if ch is None:
                yield Token(TokenType.EOF, '', start_line, start_col, start, start)
                break

            if ch == '\n':
                self._advance()
                if include_newlines:
                    yield Token(TokenType.NEWLINE, '\n', start_line, start_col, start, self.pos)
                continue

            if ch == '/' and self._peek() in ('/', '*'):
                if self._peek() == '/':
                    comment = self._read_line_comment()
                else:
                    comment = self._read_block_comment()
                if include_comments:
                    yield Token(TokenType.COMMENT, comment, start_line, start_col, start, self.pos)
                continue

            if ch == '"':
                value = self._read_string()
                yield Token(TokenType.STRING, value, start_line, start_col, start, self.pos)
                continue

            if ch == '`':
                value = self._read_raw_string()
                yield Token(TokenType.STRING, value, start_line, start_col, start, self.pos)
                continue

            if ch == "'":
                value = self._read_rune()
                yield Token(TokenType.RUNE, value, start_line, start_col, start, self.pos)
                continue

            if ch in _PUNCTUATION:
                self._advance()
                yield Token(_PUNCTUATION[ch], ch, start_line, start_col, start, self.pos)
                continue

            # .5 is a number, ... an operator, a lone . a selector or dot-import
            if ch == '.':
                nxt = self._peek()
                if nxt is not None and nxt.isdigit():
                    value = self._read_number()
                    yield Token(TokenType.NUMBER, value, start_line, start_col, start, self.pos)
                elif self.source.startswith('...', self.pos):
                    value = self._read_operator()
                    yield Token(TokenType.OPERATOR, value, start_line, start_col, start, self.pos)
                else:
                    self._advance()
                    yield Token(TokenType.DOT, '.', start_line, start_col, start, self.pos)
                continue

            if ch.isdigit():
                value = self._read_number()
                yield Token(TokenType.NUMBER, value, start_line, start_col, start, self.pos)
                continue

            if self._is_ident_start(ch):
                value = self._read_identifier()
                yield Token(TokenType.IDENTIFIER, value, start_line, start_col, start, self.pos)
                continue

            value = self._read_operator()
            yield Token(TokenType.OPERATOR, value, start_line, start_col, start, self.pos)

    def tokenize_all(self, include_comments: bool = False, include_newlines: bool = False) -> List[Token]:
        """Convenience method to get all tokens as a list."""
        return list(self.tokenize(include_comments, include_newlines))
