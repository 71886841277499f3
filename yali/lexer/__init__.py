"""
yali Lexer Package

Implements the lexical analyzer (tokenizer) for the yali language.

Key Features:
- Single and two character operators with longest-match disambiguation
- String and number literals, identifiers and reserved keywords
- Error recovery: every lexical error is collected in one pass
- Line and column tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .lexer import Lexer, scan, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "Diagnostic",
    "LexerError",
    "scan",
    "tokenize_string",
    "tokenize_file",
]
