from monkey.lexer import Lexer, tokenize
from monkey.token import Token, TokenType, lookup_ident


def kinds_and_literals(source):
    return [(tok.type, tok.literal) for tok in tokenize(source)]


def test_let_statement_tokens():
    assert kinds_and_literals('let x = 5 + 10;') == [
        (TokenType.LET, 'let'),
        (TokenType.IDENT, 'x'),
        (TokenType.ASSIGN, '='),
        (TokenType.INT, '5'),
        (TokenType.PLUS, '+'),
        (TokenType.INT, '10'),
        (TokenType.SEMICOLON, ';'),
        (TokenType.EOF, ''),
    ]


def test_full_vocabulary():
    source = """let five = 5;
let add = fn(x, y) {
  x + y;
};
!-/*5;
5 < 10 > 5;
if (5 < 10) {
    return true;
} else {
    return false;
}
10 == 10;
10 != 9;
"""
    expected = [
        (TokenType.LET, 'let'), (TokenType.IDENT, 'five'), (TokenType.ASSIGN, '='),
        (TokenType.INT, '5'), (TokenType.SEMICOLON, ';'),
        (TokenType.LET, 'let'), (TokenType.IDENT, 'add'), (TokenType.ASSIGN, '='),
        (TokenType.FUNCTION, 'fn'), (TokenType.LPAREN, '('), (TokenType.IDENT, 'x'),
        (TokenType.COMMA, ','), (TokenType.IDENT, 'y'), (TokenType.RPAREN, ')'),
        (TokenType.LBRACE, '{'), (TokenType.IDENT, 'x'), (TokenType.PLUS, '+'),
        (TokenType.IDENT, 'y'), (TokenType.SEMICOLON, ';'), (TokenType.RBRACE, '}'),
        (TokenType.SEMICOLON, ';'),
        (TokenType.BANG, '!'), (TokenType.MINUS, '-'), (TokenType.SLASH, '/'),
        (TokenType.ASTERISK, '*'), (TokenType.INT, '5'), (TokenType.SEMICOLON, ';'),
        (TokenType.INT, '5'), (TokenType.LT, '<'), (TokenType.INT, '10'),
        (TokenType.GT, '>'), (TokenType.INT, '5'), (TokenType.SEMICOLON, ';'),
        (TokenType.IF, 'if'), (TokenType.LPAREN, '('), (TokenType.INT, '5'),
        (TokenType.LT, '<'), (TokenType.INT, '10'), (TokenType.RPAREN, ')'),
        (TokenType.LBRACE, '{'), (TokenType.RETURN, 'return'), (TokenType.TRUE, 'true'),
        (TokenType.SEMICOLON, ';'), (TokenType.RBRACE, '}'), (TokenType.ELSE, 'else'),
        (TokenType.LBRACE, '{'), (TokenType.RETURN, 'return'), (TokenType.FALSE, 'false'),
        (TokenType.SEMICOLON, ';'), (TokenType.RBRACE, '}'),
        (TokenType.INT, '10'), (TokenType.EQ, '=='), (TokenType.INT, '10'),
        (TokenType.SEMICOLON, ';'),
        (TokenType.INT, '10'), (TokenType.NOT_EQ, '!='), (TokenType.INT, '9'),
        (TokenType.SEMICOLON, ';'),
        (TokenType.EOF, ''),
    ]
    assert kinds_and_literals(source) == expected


def test_eof_repeats_after_end_of_input():
    lexer = Lexer('x')
    assert lexer.next_token() == Token(TokenType.IDENT, 'x')
    assert lexer.next_token() == Token(TokenType.EOF, '')
    assert lexer.next_token() == Token(TokenType.EOF, '')


def test_empty_and_whitespace_only_input():
    assert kinds_and_literals('') == [(TokenType.EOF, '')]
    assert kinds_and_literals(' \t\r\n ') == [(TokenType.EOF, '')]


def test_unknown_characters_become_illegal_tokens():
    assert kinds_and_literals('a @ 1 $') == [
        (TokenType.IDENT, 'a'),
        (TokenType.ILLEGAL, '@'),
        (TokenType.INT, '1'),
        (TokenType.ILLEGAL, '$'),
        (TokenType.EOF, ''),
    ]


def test_identifiers_allow_underscores_but_not_digits():
    assert kinds_and_literals('foo_bar _x abc1') == [
        (TokenType.IDENT, 'foo_bar'),
        (TokenType.IDENT, '_x'),
        (TokenType.IDENT, 'abc'),
        (TokenType.INT, '1'),
        (TokenType.EOF, ''),
    ]


def test_keyword_lookup():
    assert lookup_ident('fn') == TokenType.FUNCTION
    assert lookup_ident('return') == TokenType.RETURN
    assert lookup_ident('fnord') == TokenType.IDENT


def test_token_positions():
    tokens = tokenize('let a = 1;\n  a == 2')
    eq = [t for t in tokens if t.type == TokenType.EQ][0]
    assert (eq.line, eq.column) == (2, 5)
    assert (tokens[0].line, tokens[0].column) == (1, 1)
