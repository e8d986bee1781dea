"""JSON serialization/deserialization for the Monkey AST.

This module converts between Monkey AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for all node types. Source tokens are not serialized; nodes read
back from JSON carry no token.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Program,
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    BlockStatement,
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
)


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {"type": "Program", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, LetStatement):
        return {"type": "LetStatement", "name": ast_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, ReturnStatement):
        return {"type": "ReturnStatement", "return_value": ast_to_obj(node.return_value)}
    if isinstance(node, ExpressionStatement):
        return {"type": "ExpressionStatement", "expression": ast_to_obj(node.expression)}
    if isinstance(node, BlockStatement):
        return {"type": "BlockStatement", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "value": node.value}
    if isinstance(node, IntegerLiteral):
        return {"type": "IntegerLiteral", "value": node.value}
    if isinstance(node, BooleanLiteral):
        return {"type": "BooleanLiteral", "value": node.value}
    if isinstance(node, PrefixExpression):
        return {"type": "PrefixExpression", "operator": node.operator, "right": ast_to_obj(node.right)}
    if isinstance(node, InfixExpression):
        return {
            "type": "InfixExpression",
            "left": ast_to_obj(node.left),
            "operator": node.operator,
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, IfExpression):
        return {
            "type": "IfExpression",
            "condition": ast_to_obj(node.condition),
            "consequence": ast_to_obj(node.consequence),
            "alternative": ast_to_obj(node.alternative),
        }
    if isinstance(node, FunctionLiteral):
        return {
            "type": "FunctionLiteral",
            "parameters": [ast_to_obj(p) for p in node.parameters],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, CallExpression):
        return {
            "type": "CallExpression",
            "function": ast_to_obj(node.function),
            "arguments": [ast_to_obj(a) for a in node.arguments],
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "LetStatement":
        return LetStatement(name=ast_from_obj(obj["name"]), value=ast_from_obj(obj["value"]))
    if t == "ReturnStatement":
        return ReturnStatement(return_value=ast_from_obj(obj["return_value"]))
    if t == "ExpressionStatement":
        return ExpressionStatement(expression=ast_from_obj(obj["expression"]))
    if t == "BlockStatement":
        return BlockStatement(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "Identifier":
        return Identifier(value=obj["value"])
    if t == "IntegerLiteral":
        return IntegerLiteral(value=int(obj["value"]))
    if t == "BooleanLiteral":
        return BooleanLiteral(value=bool(obj["value"]))
    if t == "PrefixExpression":
        return PrefixExpression(operator=obj["operator"], right=ast_from_obj(obj["right"]))
    if t == "InfixExpression":
        return InfixExpression(
            left=ast_from_obj(obj["left"]),
            operator=obj["operator"],
            right=ast_from_obj(obj["right"]),
        )
    if t == "IfExpression":
        return IfExpression(
            condition=ast_from_obj(obj["condition"]),
            consequence=ast_from_obj(obj["consequence"]),
            alternative=ast_from_obj(obj.get("alternative")),
        )
    if t == "FunctionLiteral":
        return FunctionLiteral(
            parameters=[ast_from_obj(p) for p in obj["parameters"]],
            body=ast_from_obj(obj["body"]),
        )
    if t == "CallExpression":
        return CallExpression(
            function=ast_from_obj(obj["function"]),
            arguments=[ast_from_obj(a) for a in obj["arguments"]],
        )

    raise ValueError(f"Unknown AST node type: {t}")
