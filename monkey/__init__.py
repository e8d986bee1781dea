# Monkey language package
# This package provides a lexer, a Pratt parser and a tree-walking evaluator for the Monkey language.
from .environment import Environment
from .errors import MonkeyError, ParseError
from .interpreter import Interpreter, evaluate, parse_program, run_program, compile_file
from .parser import parse

__all__ = [
    'Environment',
    'Interpreter',
    'MonkeyError',
    'ParseError',
    'compile_file',
    'evaluate',
    'parse',
    'parse_program',
    'run_program',
]
