"""Tree-walking evaluator for the Monkey language.

The `Interpreter` walks the AST produced by `monkey.parser` and computes a
runtime value for each node, resolving names through a chain of
`Environment` scopes. Runtime errors are ordinary `Error` values: every
evaluation step checks the results of its sub-evaluations and hands an error
back unchanged as soon as one appears. Return statements produce a
`ReturnValue` wrapper that stops the enclosing statement sequence and is
unwrapped exactly once, at the function call boundary (or at the top of the
program).
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Node, Program, LetStatement, ReturnStatement, ExpressionStatement,
    BlockStatement, Identifier, IntegerLiteral, BooleanLiteral,
    PrefixExpression, InfixExpression, IfExpression, FunctionLiteral,
    CallExpression,
)
from .environment import Environment
from .errors import MonkeyError, ParseError
from .parser import parse
from .types import (
    Object, Integer, ReturnValue, Error, Function, NULL,
    INTEGER_OBJ, native_bool_to_boolean, is_truthy, is_error,
)


def wrap_int64(value: int) -> int:
    """Reduce `value` to the signed 64-bit range, wrapping on overflow."""
    return ((value + 2 ** 63) % 2 ** 64) - 2 ** 63


def truncating_div(a: int, b: int) -> int:
    # Python's // floors; integer division here truncates toward zero
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


class Interpreter:
    """Core interpreter that evaluates Monkey AST nodes."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt'):
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def parse(self, source: str) -> Program:
        """Parse source, raising ParseError when the parser reported diagnostics."""
        program, errors = parse(source, debug=self.debug if self.debug_level > 0 else None)
        if errors:
            raise ParseError(errors)
        return program

    def run(self, program: Program, env: Optional[Environment] = None) -> Optional[Object]:
        if env is None:
            env = self.global_env
        return self.evaluate(program, env)

    def evaluate(self, node: Node, env: Environment) -> Optional[Object]:
        # Statements
        if isinstance(node, Program):
            return self.eval_program(node, env)
        if isinstance(node, ExpressionStatement):
            return self.evaluate(node.expression, env)
        if isinstance(node, BlockStatement):
            return self.eval_block_statement(node, env)
        if isinstance(node, LetStatement):
            value = self.evaluate(node.value, env)
            if is_error(value):
                return value
            env.set(node.name.value, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name.value} = {value.inspect()}")
            return None
        if isinstance(node, ReturnStatement):
            value = self.evaluate(node.return_value, env)
            if is_error(value):
                return value
            return ReturnValue(value)

        # Expressions
        if isinstance(node, IntegerLiteral):
            return Integer(node.value)
        if isinstance(node, BooleanLiteral):
            return native_bool_to_boolean(node.value)
        if isinstance(node, PrefixExpression):
            right = self.evaluate(node.right, env)
            if is_error(right):
                return right
            return self.eval_prefix_expression(node.operator, right)
        if isinstance(node, InfixExpression):
            left = self.evaluate(node.left, env)
            if is_error(left):
                return left
            right = self.evaluate(node.right, env)
            if is_error(right):
                return right
            return self.eval_infix_expression(node.operator, left, right)
        if isinstance(node, IfExpression):
            return self.eval_if_expression(node, env)
        if isinstance(node, Identifier):
            value = env.get(node.value)
            if value is None:
                return Error(f"identifier not found: {node.value}")
            return value
        if isinstance(node, FunctionLiteral):
            return Function(node.parameters, node.body, env)
        if isinstance(node, CallExpression):
            function = self.evaluate(node.function, env)
            if is_error(function):
                return function
            args = self.eval_expressions(node.arguments, env)
            if len(args) == 1 and is_error(args[0]):
                return args[0]
            return self.apply_function(function, args)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node).__name__}")

    def eval_program(self, program: Program, env: Environment) -> Optional[Object]:
        result: Optional[Object] = None
        for stmt in program.statements:
            if self.debug_level >= 1:
                self.debug(f"eval {stmt}")
            result = self.evaluate(stmt, env)
            if isinstance(result, ReturnValue):
                return result.value
            if is_error(result):
                return result
        return result

    def eval_block_statement(self, block: BlockStatement, env: Environment) -> Object:
        result: Optional[Object] = None
        for stmt in block.statements:
            result = self.evaluate(stmt, env)
            # return values stay wrapped so the enclosing call can unwrap them
            if isinstance(result, ReturnValue) or is_error(result):
                return result
        return result if result is not None else NULL

    def eval_prefix_expression(self, operator: str, right: Object) -> Object:
        if operator == '!':
            return native_bool_to_boolean(not is_truthy(right))
        if operator == '-':
            if right.type() != INTEGER_OBJ:
                return Error(f"unknown operator: -{right.type()}")
            return Integer(wrap_int64(-right.value))
        return Error(f"unknown operator: {operator}{right.type()}")

    def eval_infix_expression(self, operator: str, left: Object, right: Object) -> Object:
        if left.type() == INTEGER_OBJ and right.type() == INTEGER_OBJ:
            return self.eval_integer_infix_expression(operator, left, right)
        if operator == '==':
            return native_bool_to_boolean(left is right)
        if operator == '!=':
            return native_bool_to_boolean(left is not right)
        if left.type() != right.type():
            return Error(f"type mismatch: {left.type()} {operator} {right.type()}")
        return Error(f"unknown operator: {left.type()} {operator} {right.type()}")

    def eval_integer_infix_expression(self, operator: str, left: Integer, right: Integer) -> Object:
        a = left.value
        b = right.value
        if operator == '+':
            return Integer(wrap_int64(a + b))
        if operator == '-':
            return Integer(wrap_int64(a - b))
        if operator == '*':
            return Integer(wrap_int64(a * b))
        if operator == '/':
            if b == 0:
                return Error('division by zero')
            return Integer(wrap_int64(truncating_div(a, b)))
        if operator == '<':
            return native_bool_to_boolean(a < b)
        if operator == '>':
            return native_bool_to_boolean(a > b)
        if operator == '==':
            return native_bool_to_boolean(a == b)
        if operator == '!=':
            return native_bool_to_boolean(a != b)
        return Error(f"unknown operator: {left.type()} {operator} {right.type()}")

    def eval_if_expression(self, node: IfExpression, env: Environment) -> Object:
        condition = self.evaluate(node.condition, env)
        if is_error(condition):
            return condition
        truthy = is_truthy(condition)
        if self.debug_level >= 3:
            self.debug(f"if condition {condition.inspect()} -> {truthy}")
        if truthy:
            return self.evaluate(node.consequence, env)
        if node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return NULL

    def eval_expressions(self, expressions: List[Node], env: Environment) -> List[Object]:
        """Evaluate left to right; on the first error return a list holding only it."""
        result: List[Object] = []
        for expr in expressions:
            value = self.evaluate(expr, env)
            if is_error(value):
                return [value]
            result.append(value)
        return result

    def apply_function(self, fn: Object, args: List[Object]) -> Object:
        if not isinstance(fn, Function):
            return Error(f"not a function: {fn.type()}")
        if len(args) != len(fn.parameters):
            return Error(f"wrong number of arguments: want={len(fn.parameters)}, got={len(args)}")
        if self.debug_level >= 2:
            self.debug(f"call {fn!r} with ({', '.join(a.inspect() for a in args)})")
        # the call scope encloses the function's defining scope, not the caller's
        call_env = Environment.enclosed(fn.env)
        for param, arg in zip(fn.parameters, args):
            call_env.set(param.value, arg)
        result = self.evaluate(fn.body, call_env)
        if isinstance(result, ReturnValue):
            return result.value
        return result


_default_interpreter = Interpreter()


def evaluate(node: Node, env: Environment) -> Optional[Object]:
    """Evaluate `node` in `env` without debug tracing."""
    return _default_interpreter.evaluate(node, env)


def parse_program(source: str) -> Program:
    """Parse the given source code into a Program AST, raising ParseError on diagnostics."""
    return Interpreter(debug_level=0).parse(source)


def run_program(source: str, env: Optional[Environment] = None, debug_level: int = 0) -> Optional[Object]:
    """Convenience function to parse and evaluate a Monkey program from a source string."""
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run(interpreter.parse(source), env)
    finally:
        interpreter.close()


def compile_file(file_path: str, debug_level: int = 0) -> Optional[Object]:
    """Parse and evaluate a Monkey file.

    Returns the value of the program. Raises ParseError when the file does not
    parse and MonkeyError when evaluation ends in a runtime error.
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    result = run_program(source, debug_level=debug_level)
    if is_error(result):
        raise MonkeyError(result)
    return result
