"""Parser for the Monkey language.

This module implements a Pratt (top-down operator precedence) parser. Each
token type may have a *prefix* handler, used when the token starts an
expression, and an *infix* handler, used when the token follows an already
parsed left-hand expression. Binding strength comes from the `Precedence`
table: `parse_expression` keeps folding the left expression into infix
handlers while the next operator binds tighter than the caller's precedence.

The parser never raises on malformed input. Each structural problem is
recorded as a diagnostic string in `Parser.errors`, the offending statement
is dropped, and parsing resumes at the next token so that a whole batch of
diagnostics is reported at once.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from .ast import (
    Program, Statement, Expression, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral,
    BooleanLiteral, PrefixExpression, InfixExpression, IfExpression,
    FunctionLiteral, CallExpression,
)
from .lexer import Lexer
from .token import Token, TokenType


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # ==
    LESSGREATER = 3  # > or <
    SUM = 4          # + or -
    PRODUCT = 5      # * or /
    PREFIX = 6       # -x or !x
    CALL = 7         # fn(x)


PRECEDENCES: Dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}


PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Expression], Optional[Expression]]


class Parser:
    def __init__(self, lexer: Lexer, debug: Optional[Callable[[str], None]] = None):
        self.lexer = lexer
        self.errors: List[str] = []
        self.debug = debug

        self.cur_token: Token = lexer.next_token()
        self.peek_token: Token = lexer.next_token()

        self.prefix_parse_fns: Dict[TokenType, PrefixParseFn] = {
            TokenType.IDENT: self.parse_identifier,
            TokenType.INT: self.parse_integer_literal,
            TokenType.TRUE: self.parse_boolean,
            TokenType.FALSE: self.parse_boolean,
            TokenType.BANG: self.parse_prefix_expression,
            TokenType.MINUS: self.parse_prefix_expression,
            TokenType.LPAREN: self.parse_grouped_expression,
            TokenType.IF: self.parse_if_expression,
            TokenType.FUNCTION: self.parse_function_literal,
        }
        self.infix_parse_fns: Dict[TokenType, InfixParseFn] = {
            TokenType.PLUS: self.parse_infix_expression,
            TokenType.MINUS: self.parse_infix_expression,
            TokenType.ASTERISK: self.parse_infix_expression,
            TokenType.SLASH: self.parse_infix_expression,
            TokenType.EQ: self.parse_infix_expression,
            TokenType.NOT_EQ: self.parse_infix_expression,
            TokenType.LT: self.parse_infix_expression,
            TokenType.GT: self.parse_infix_expression,
            TokenType.LPAREN: self.parse_call_expression,
        }

    # Token helpers

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, t: TokenType) -> bool:
        return self.cur_token.type == t

    def peek_token_is(self, t: TokenType) -> bool:
        return self.peek_token.type == t

    def expect_peek(self, t: TokenType) -> bool:
        """Advance if the next token has type `t`, otherwise record an error."""
        if self.peek_token_is(t):
            self.next_token()
            return True
        self.peek_error(t)
        return False

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # Diagnostics

    def error(self, msg: str, tok: Token):
        self.errors.append(msg)
        if self.debug is not None:
            self.debug(f"parse error at {tok.line}:{tok.column}: {msg}")

    def peek_error(self, t: TokenType):
        self.error(f"expected next token type to be {t}, got {self.peek_token.type} instead",
                   self.peek_token)

    def no_prefix_parse_fn_error(self, t: TokenType):
        self.error(f"no prefix parse function for {t} found", self.cur_token)

    # Statements

    def parse_program(self) -> Program:
        statements: List[Statement] = []
        while not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        return Program(statements)

    def parse_statement(self) -> Optional[Statement]:
        if self.cur_token_is(TokenType.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TokenType.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        tok = self.cur_token
        if not self.expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.cur_token.literal, self.cur_token)
        if not self.expect_peek(TokenType.ASSIGN):
            return None
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        if value is None:
            return None
        return LetStatement(name, value, tok)

    def parse_return_statement(self) -> Optional[ReturnStatement]:
        tok = self.cur_token
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        if value is None:
            return None
        return ReturnStatement(value, tok)

    def parse_expression_statement(self) -> Optional[ExpressionStatement]:
        tok = self.cur_token
        expr = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        if expr is None:
            return None
        return ExpressionStatement(expr, tok)

    def parse_block_statement(self) -> BlockStatement:
        tok = self.cur_token
        statements: List[Statement] = []
        self.next_token()
        while not self.cur_token_is(TokenType.RBRACE) and not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        return BlockStatement(statements, tok)

    # Expressions (Pratt parser)

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None
        left = prefix()
        # Operators of equal precedence stop here and are folded in by the
        # caller's loop, which makes them left-associative.
        while not self.peek_token_is(TokenType.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None or left is None:
                return left
            self.next_token()
            left = infix(left)
        return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token.literal, self.cur_token)

    def parse_integer_literal(self) -> Optional[Expression]:
        tok = self.cur_token
        literal = tok.literal
        # A leading zero marks an octal literal
        base = 8 if len(literal) > 1 and literal.startswith('0') else 10
        value = None
        # No int64 needs more than 22 digits, even in octal
        if len(literal) <= 22:
            try:
                value = int(literal, base)
            except ValueError:
                value = None
        if value is None or not INT64_MIN <= value <= INT64_MAX:
            self.error(f'could not parse "{tok.literal}" as integer', tok)
            return None
        return IntegerLiteral(value, tok)

    def parse_boolean(self) -> Expression:
        return BooleanLiteral(self.cur_token_is(TokenType.TRUE), self.cur_token)

    def parse_prefix_expression(self) -> Optional[Expression]:
        tok = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(tok.literal, right, tok)

    def parse_infix_expression(self, left: Expression) -> Optional[Expression]:
        tok = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(left, tok.literal, right, tok)

    def parse_grouped_expression(self) -> Optional[Expression]:
        self.next_token()
        expr = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenType.RPAREN):
            return None
        return expr

    def parse_if_expression(self) -> Optional[Expression]:
        tok = self.cur_token
        if not self.expect_peek(TokenType.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenType.RPAREN):
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        consequence = self.parse_block_statement()
        alternative = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            if not self.expect_peek(TokenType.LBRACE):
                return None
            alternative = self.parse_block_statement()
        if condition is None:
            return None
        return IfExpression(condition, consequence, alternative, tok)

    def parse_function_literal(self) -> Optional[Expression]:
        tok = self.cur_token
        if not self.expect_peek(TokenType.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        body = self.parse_block_statement()
        return FunctionLiteral(parameters, body, tok)

    def parse_function_parameters(self) -> Optional[List[Identifier]]:
        identifiers: List[Identifier] = []
        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return identifiers
        if not self.expect_peek(TokenType.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token.literal, self.cur_token))
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token.literal, self.cur_token))
        if not self.expect_peek(TokenType.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function: Expression) -> Optional[Expression]:
        tok = self.cur_token
        arguments = self.parse_call_arguments()
        if arguments is None:
            return None
        return CallExpression(function, arguments, tok)

    def parse_call_arguments(self) -> Optional[List[Expression]]:
        args: List[Expression] = []
        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return args
        self.next_token()
        arg = self.parse_expression(Precedence.LOWEST)
        if arg is None:
            return None
        args.append(arg)
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            arg = self.parse_expression(Precedence.LOWEST)
            if arg is None:
                return None
            args.append(arg)
        if not self.expect_peek(TokenType.RPAREN):
            return None
        return args


def parse(source: str, debug: Optional[Callable[[str], None]] = None) -> Tuple[Program, List[str]]:
    """Parse Monkey source code into a Program and a list of diagnostics.

    The program should only be evaluated when the diagnostics list is empty.
    """
    parser = Parser(Lexer(source), debug=debug)
    program = parser.parse_program()
    return program, parser.errors
