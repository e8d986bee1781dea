"""Abstract Syntax Tree (AST) definitions for the Monkey language.

The AST classes defined in this module represent the syntactic structure of
parsed Monkey programs. Statements are evaluated for their effect (or to
produce a block result), expressions always produce a value. Every node
re-prints itself with `str()`; the printed form is fully parenthesized and
parses back into the same tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .token import Token


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


class Statement(Node):
    pass


class Expression(Node):
    pass


def join_statements(statements: List[Statement]) -> str:
    # expression statements need an explicit ';' between them, otherwise
    # `a` followed by `(b)` would re-parse as the call `a(b)`
    parts = []
    for i, stmt in enumerate(statements):
        text = str(stmt)
        if isinstance(stmt, ExpressionStatement) and i < len(statements) - 1:
            text += ';'
        parts.append(text)
    return ' '.join(parts)


@dataclass
class Program(Node):
    statements: List[Statement]

    def __str__(self) -> str:
        return join_statements(self.statements)


# Expressions

@dataclass
class Identifier(Expression):
    value: str
    token: Optional[Token] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        return self.value


@dataclass
class IntegerLiteral(Expression):
    value: int
    token: Optional[Token] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class BooleanLiteral(Expression):
    value: bool
    token: Optional[Token] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclass
class PrefixExpression(Expression):
    operator: str
    right: Expression
    token: Optional[Token] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    left: Expression
    operator: str
    right: Expression
    token: Optional[Token] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Expression):
    condition: Expression
    consequence: 'BlockStatement'
    alternative: Optional['BlockStatement'] = None
    token: Optional[Token] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass
class FunctionLiteral(Expression):
    parameters: List[Identifier]
    body: 'BlockStatement'
    token: Optional[Token] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass
class CallExpression(Expression):
    function: Expression  # Identifier or FunctionLiteral, or any callee expression
    arguments: List[Expression]
    token: Optional[Token] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        args = ', '.join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


# Statements

@dataclass
class LetStatement(Statement):
    name: Identifier
    value: Expression
    token: Optional[Token] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass
class ReturnStatement(Statement):
    return_value: Expression
    token: Optional[Token] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        return f"return {self.return_value};"


@dataclass
class ExpressionStatement(Statement):
    expression: Expression
    token: Optional[Token] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        return str(self.expression)


@dataclass
class BlockStatement(Statement):
    statements: List[Statement]
    token: Optional[Token] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        if not self.statements:
            return '{ }'
        return '{ ' + join_statements(self.statements) + ' }'
