"""Lexer for the Monkey language.

The lexer scans source text on demand: each call to `next_token` skips
whitespace and returns the next token. Once the input is exhausted it keeps
returning EOF tokens. Lexing never fails; characters that do not belong to
the language are returned as ILLEGAL tokens and left for the parser to report.
"""

from __future__ import annotations

from typing import Iterator, List

from .token import Token, TokenType, lookup_ident


SINGLE_CHAR_TOKENS = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.ASTERISK,
    '/': TokenType.SLASH,
    '<': TokenType.LT,
    '>': TokenType.GT,
    ',': TokenType.COMMA,
    ';': TokenType.SEMICOLON,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
}

WHITESPACE = ' \t\n\r'


def is_letter(c: str) -> bool:
    # `_` may appear anywhere in identifiers and keywords
    return ('a' <= c <= 'z') or ('A' <= c <= 'Z') or c == '_'


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        # empty string marks the end of input
        self.ch = source[0] if source else ''

    def advance(self):
        if self.ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1
        self.ch = self.source[self.pos] if self.pos < len(self.source) else ''

    def peek_char(self) -> str:
        if self.pos + 1 < len(self.source):
            return self.source[self.pos + 1]
        return ''

    def skip_whitespace(self):
        while self.ch and self.ch in WHITESPACE:
            self.advance()

    def read_while(self, pred) -> str:
        start = self.pos
        while self.ch and pred(self.ch):
            self.advance()
        return self.source[start:self.pos]

    def next_token(self) -> Token:
        self.skip_whitespace()
        line, column = self.line, self.column
        c = self.ch

        if c == '':
            return Token(TokenType.EOF, '', line, column)

        # Two-character operators need one character of look-ahead
        if c == '=' or c == '!':
            if self.peek_char() == '=':
                self.advance()
                self.advance()
                kind = TokenType.EQ if c == '=' else TokenType.NOT_EQ
                return Token(kind, c + '=', line, column)
            self.advance()
            kind = TokenType.ASSIGN if c == '=' else TokenType.BANG
            return Token(kind, c, line, column)

        if c in SINGLE_CHAR_TOKENS:
            self.advance()
            return Token(SINGLE_CHAR_TOKENS[c], c, line, column)

        if is_letter(c):
            ident = self.read_while(is_letter)
            return Token(lookup_ident(ident), ident, line, column)

        if is_digit(c):
            number = self.read_while(is_digit)
            return Token(TokenType.INT, number, line, column)

        self.advance()
        return Token(TokenType.ILLEGAL, c, line, column)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF token."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == TokenType.EOF:
                return


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens ending with EOF."""
    return list(Lexer(source))
