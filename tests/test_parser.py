import pytest

from monkey.ast import (
    BlockStatement, BooleanLiteral, CallExpression, ExpressionStatement,
    FunctionLiteral, Identifier, IfExpression, InfixExpression, IntegerLiteral,
    LetStatement, PrefixExpression, ReturnStatement,
)
from monkey.parser import parse


def parse_ok(source):
    program, errors = parse(source)
    assert errors == [], errors
    return program


def single_expression(source):
    program = parse_ok(source)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert isinstance(stmt, ExpressionStatement)
    return stmt.expression


def test_let_statements():
    program = parse_ok('let x = 5; let y = true; let foobar = y;')
    assert [s.name.value for s in program.statements] == ['x', 'y', 'foobar']
    assert all(isinstance(s, LetStatement) for s in program.statements)
    assert program.statements[0].value == IntegerLiteral(5)
    assert program.statements[1].value == BooleanLiteral(True)
    assert program.statements[2].value == Identifier('y')


def test_return_statements_with_optional_semicolon():
    program = parse_ok('return 5; return 10\nreturn add(1, 2)')
    assert len(program.statements) == 3
    assert all(isinstance(s, ReturnStatement) for s in program.statements)
    assert str(program.statements[2].return_value) == 'add(1, 2)'


def test_integer_and_boolean_literals():
    assert single_expression('5;') == IntegerLiteral(5)
    assert single_expression('false') == BooleanLiteral(False)


def test_prefix_expressions():
    assert single_expression('!5;') == PrefixExpression('!', IntegerLiteral(5))
    assert single_expression('-15;') == PrefixExpression('-', IntegerLiteral(15))
    assert single_expression('!true') == PrefixExpression('!', BooleanLiteral(True))


@pytest.mark.parametrize('op', ['+', '-', '*', '/', '>', '<', '==', '!='])
def test_infix_expressions(op):
    assert single_expression(f'5 {op} 5;') == InfixExpression(IntegerLiteral(5), op, IntegerLiteral(5))


@pytest.mark.parametrize('source, expected', [
    ('-a * b', '((-a) * b)'),
    ('!-a', '(!(-a))'),
    ('a + b + c', '((a + b) + c)'),
    ('a + b - c', '((a + b) - c)'),
    ('a * b * c', '((a * b) * c)'),
    ('a * b / c', '((a * b) / c)'),
    ('a + b / c', '(a + (b / c))'),
    ('1 + 2 * 3', '(1 + (2 * 3))'),
    ('a + b * c + d / e - f', '(((a + (b * c)) + (d / e)) - f)'),
    ('3 + 4; -5 * 5', '(3 + 4); ((-5) * 5)'),
    ('5 > 4 == 3 < 4', '((5 > 4) == (3 < 4))'),
    ('5 < 4 != 3 > 4', '((5 < 4) != (3 > 4))'),
    ('3 + 4 * 5 == 3 * 1 + 4 * 5', '((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))'),
    ('true == !false', '(true == (!false))'),
    ('1 + (2 + 3) + 4', '((1 + (2 + 3)) + 4)'),
    ('(5 + 5) * 2', '((5 + 5) * 2)'),
    ('-(5 + 5)', '(-(5 + 5))'),
    ('a + add(b * c) + d', '((a + add((b * c))) + d)'),
    ('add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))', 'add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))'),
    ('add(a + b + c * d / f + g)', 'add((((a + b) + ((c * d) / f)) + g))'),
])
def test_operator_precedence(source, expected):
    assert str(parse_ok(source)) == expected


@pytest.mark.parametrize('source', [
    '1 + 2 * 3',
    'let x = fn(a, b) { let c = a * b; return (c - 1); };',
    'if (x < y) { x } else { y; z }',
    'a; (b + c); f(g)(h)',
    'fn() { }',
    'let neg = !-a == -(-b);',
])
def test_reprinted_program_reparses_to_same_tree(source):
    program = parse_ok(source)
    reparsed = parse_ok(str(program))
    assert reparsed == program
    assert str(reparsed) == str(program)


def test_if_expression():
    expr = single_expression('if (x < y) { x }')
    assert isinstance(expr, IfExpression)
    assert expr.condition == InfixExpression(Identifier('x'), '<', Identifier('y'))
    assert expr.consequence == BlockStatement([ExpressionStatement(Identifier('x'))])
    assert expr.alternative is None


def test_if_else_expression():
    expr = single_expression('if (x < y) { x } else { y }')
    assert expr.alternative == BlockStatement([ExpressionStatement(Identifier('y'))])


def test_function_literal():
    expr = single_expression('fn(x, y) { x + y; }')
    assert isinstance(expr, FunctionLiteral)
    assert [p.value for p in expr.parameters] == ['x', 'y']
    assert str(expr.body) == '{ (x + y) }'


@pytest.mark.parametrize('source, params', [
    ('fn() {};', []),
    ('fn(x) {};', ['x']),
    ('fn(x, y, z) {};', ['x', 'y', 'z']),
])
def test_function_parameters(source, params):
    assert [p.value for p in single_expression(source).parameters] == params


def test_call_expression():
    expr = single_expression('add(1, 2 * 3, 4 + 5);')
    assert isinstance(expr, CallExpression)
    assert expr.function == Identifier('add')
    assert [str(a) for a in expr.arguments] == ['1', '(2 * 3)', '(4 + 5)']


def test_call_on_function_literal():
    expr = single_expression('fn(x) { x }(5)')
    assert isinstance(expr, CallExpression)
    assert isinstance(expr.function, FunctionLiteral)
    assert expr.arguments == [IntegerLiteral(5)]


def test_block_ends_at_eof():
    program, errors = parse('if (true) { 1')
    assert errors == []
    assert str(program) == 'if (true) { 1 }'


@pytest.mark.parametrize('source, expected', [
    ('let = 5;', ['expected next token type to be IDENT, got = instead',
                  'no prefix parse function for = found']),
    ('let x 5;', ['expected next token type to be =, got INT instead']),
    ('(1 + 2', ['expected next token type to be ), got EOF instead']),
    ('if x { 1 }', ['expected next token type to be (, got IDENT instead']),
    ('@', ['no prefix parse function for ILLEGAL found']),
    ('9223372036854775808', ['could not parse "9223372036854775808" as integer']),
    ('9' * 5000, [f'could not parse "{"9" * 5000}" as integer']),
    ('09', ['could not parse "09" as integer']),
    ('fn(x, 1) { x }', ['expected next token type to be IDENT, got INT instead',
                        'no prefix parse function for ) found']),
])
def test_diagnostics(source, expected):
    _, errors = parse(source)
    assert errors[:len(expected)] == expected


def test_diagnostics_do_not_stop_parsing():
    program, errors = parse('let = 1; let y = 2;')
    assert len(errors) == 2
    assert [s.name.value for s in program.statements if isinstance(s, LetStatement)] == ['y']


def test_largest_int64_literal_parses():
    assert single_expression('9223372036854775807') == IntegerLiteral(2 ** 63 - 1)
    assert single_expression('0777777777777777777777') == IntegerLiteral(2 ** 63 - 1)


def test_leading_zero_means_octal():
    assert single_expression('010') == IntegerLiteral(8)
    assert single_expression('0') == IntegerLiteral(0)
    assert single_expression('007') == IntegerLiteral(7)


def test_parse_errors_are_traced_with_positions():
    messages = []
    parse('let x 5;', debug=messages.append)
    assert messages == ['parse error at 1:7: expected next token type to be =, got INT instead']
