"""
yali Lexer - turns source text into tokens for the parser

Single left-to-right pass with one character of lookahead (two for the
fractional part of a number). Errors don't stop the scan: each one is
recorded and the lexer carries on from the next character, so a single
run reports every lexical problem in the file.

xwest
"""

import logging
import string
from typing import List, Mapping, Optional, Tuple

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, SINGLE_CHAR_TOKENS,
    EQUAL_SUFFIXED_TOKENS
)
from .errors import (
    Diagnostic, LexerError, create_unexpected_character_error,
    create_unterminated_string_error, create_invalid_number_error
)

logger = logging.getLogger(__name__)

_DIGITS = frozenset(string.digits)
_IDENTIFIER_START = frozenset(string.ascii_letters + "_")
_IDENTIFIER_CONTINUE = _IDENTIFIER_START | _DIGITS
_WHITESPACE = frozenset(" \r\t")


class Lexer:
    """
    yali lexical analyzer.

    Converts source code text into a list of tokens terminated by a single
    EOF token, collecting a diagnostic for every lexical error instead of
    stopping at the first one.
    """

    def __init__(
        self,
        source: str,
        filename: str = "<string>",
        keywords: Mapping[str, TokenType] = KEYWORDS
    ):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
            keywords: Reserved word table; identifiers whose full text is a
                key are emitted with the mapped token type
        """
        self.source = source
        self.filename = filename
        self.keywords = keywords

        # Scan cursor
        self.start = 0
        self.current = 0
        self.line = 1
        self.column = 1
        self._start_line = 1
        self._start_column = 1

        self.tokens: List[Token] = []
        self.errors: List[LexerError] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens ending with exactly one EOF token
        """
        self.start = 0
        self.current = 0
        self.line = 1
        self.column = 1
        self.tokens.clear()
        self.errors.clear()

        while not self._is_at_end():
            self.start = self.current
            self._start_line = self.line
            self._start_column = self.column
            try:
                self._scan_token()
            except LexerError as e:
                # Every rule consumes at least one character before raising,
                # so the loop still makes progress.
                self.errors.append(e)

        self.tokens.append(Token(TokenType.EOF, "", None, self._current_location()))

        logger.debug(
            "Scanned %s: %d tokens, %d errors",
            self.filename, len(self.tokens), len(self.errors)
        )
        return self.tokens

    def _scan_token(self):
        c = self._advance()

        if c in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[c])
        elif c in EQUAL_SUFFIXED_TOKENS:
            single, compound = EQUAL_SUFFIXED_TOKENS[c]
            self._add_token(compound if self._match("=") else single)
        elif c == "/":
            if self._match("/"):
                # Line comment runs up to, not including, the newline
                while not self._is_at_end() and self._peek() != "\n":
                    self._advance()
            else:
                self._add_token(TokenType.SLASH)
        elif c in _WHITESPACE or c == "\n":
            pass  # _advance already bumped the line for '\n'
        elif c == '"':
            self._string()
        elif c in _DIGITS:
            self._number()
        elif c in _IDENTIFIER_START:
            self._identifier()
        else:
            raise create_unexpected_character_error(c, self._start_location())

    def _string(self):
        """Scan a string literal; the opening quote is already consumed."""
        while not self._is_at_end() and self._peek() != '"':
            self._advance()

        if self._is_at_end():
            # Reported where the scan ran out, not at the opening quote
            raise create_unterminated_string_error(self._current_location())

        self._advance()  # Closing quote

        # No escape processing: the interior is taken verbatim
        value = self.source[self.start + 1:self.current - 1]
        self._add_token(TokenType.STRING, value)

    def _number(self):
        """Scan a number literal; the first digit is already consumed."""
        while self._peek() in _DIGITS:
            self._advance()

        # A '.' belongs to the number only when a digit follows it
        if self._peek() == "." and self._peek_next() in _DIGITS:
            self._advance()
            while self._peek() in _DIGITS:
                self._advance()

        lexeme = self.source[self.start:self.current]
        try:
            value = float(lexeme)
        except ValueError:
            raise create_invalid_number_error(
                lexeme,
                self._start_location(),
                "Cannot parse floating-point number"
            ) from None

        self._add_token(TokenType.NUMBER, value)

    def _identifier(self):
        while self._peek() in _IDENTIFIER_CONTINUE:
            self._advance()

        text = self.source[self.start:self.current]
        self._add_token(self.keywords.get(text, TokenType.IDENTIFIER))

    def _add_token(self, token_type: TokenType, value=None):
        lexeme = self.source[self.start:self.current]
        self.tokens.append(Token(token_type, lexeme, value, self._start_location()))

    def _start_location(self) -> SourceLocation:
        return SourceLocation(self.filename, self._start_line, self._start_column, self.start)

    def _current_location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.current)

    def _is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def _advance(self) -> str:
        """Consume one character, updating line/column."""
        char = self.source[self.current]
        self.current += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def _match(self, expected: str) -> bool:
        """Consume the next character only if it is ``expected``."""
        if self._is_at_end() or self.source[self.current] != expected:
            return False
        self._advance()
        return True

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self.source[self.current]

    def _peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return len(self.errors) > 0

    def get_diagnostics(self) -> List[Diagnostic]:
        """Get the diagnostics of every recorded error, in source order."""
        return [error.diagnostic for error in self.errors]


def scan(
    source: str,
    filename: str = "<string>",
    keywords: Mapping[str, TokenType] = KEYWORDS
) -> Tuple[List[Token], List[Diagnostic]]:
    """
    Scan ``source`` in one pass.

    Returns:
        The token list (always ending with EOF) and the diagnostics of every
        lexical error found. Valid tokens are returned even when there are
        diagnostics; deciding whether to go on to parsing is up to the caller.
    """
    lexer = Lexer(source, filename, keywords)
    tokens = lexer.tokenize()
    return tokens, lexer.get_diagnostics()


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if lexer.has_errors():
        # Raise the first error encountered
        raise lexer.errors[0]

    return tokens


def tokenize_file(filepath: str, encoding: Optional[str] = "utf-8") -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        OSError: If file cannot be read
    """
    with open(filepath, 'r', encoding=encoding) as f:
        source = f.read()

    return tokenize_string(source, filepath)
