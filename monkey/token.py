"""Token vocabulary for the Monkey language.

A token is the smallest lexical unit produced by the lexer: its type and the
literal slice of source text it was scanned from. Keywords are ordinary
identifiers that appear in the `KEYWORDS` table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class TokenType(Enum):
    ILLEGAL = 'ILLEGAL'
    EOF = 'EOF'

    # Identifiers and literals
    IDENT = 'IDENT'
    INT = 'INT'

    # Operators
    ASSIGN = '='
    PLUS = '+'
    MINUS = '-'
    BANG = '!'
    ASTERISK = '*'
    SLASH = '/'
    LT = '<'
    GT = '>'
    EQ = '=='
    NOT_EQ = '!='

    # Delimiters
    COMMA = ','
    SEMICOLON = ';'
    LPAREN = '('
    RPAREN = ')'
    LBRACE = '{'
    RBRACE = '}'

    # Keywords
    FUNCTION = 'FUNCTION'
    LET = 'LET'
    TRUE = 'TRUE'
    FALSE = 'FALSE'
    IF = 'IF'
    ELSE = 'ELSE'
    RETURN = 'RETURN'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    type: TokenType
    literal: str
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)


KEYWORDS: Dict[str, TokenType] = {
    'fn': TokenType.FUNCTION,
    'let': TokenType.LET,
    'true': TokenType.TRUE,
    'false': TokenType.FALSE,
    'if': TokenType.IF,
    'else': TokenType.ELSE,
    'return': TokenType.RETURN,
}


def lookup_ident(ident: str) -> TokenType:
    """Return the keyword type for `ident`, or IDENT when it is not a keyword."""
    return KEYWORDS.get(ident, TokenType.IDENT)
