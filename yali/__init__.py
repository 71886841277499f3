"""
yali Package

Front end of a tree-walking interpreter for a small dynamically typed
scripting language.

Architecture:
    yali/
    ├── lexer/           # Tokenization and lexical analysis
    └── cli.py           # `yali [script]` command

Author: xwest
License: MIT
"""

__version__ = "0.1.0-alpha"
__author__ = "xwest"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, Diagnostic, LexerError, scan

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "Diagnostic",
    "LexerError",
    "scan",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
