"""Read-eval-print loop for Monkey.

Each line read from `input` is parsed and evaluated in one global
environment that persists for the whole session, so bindings made on one line
are visible on the next. Parser diagnostics are printed instead of evaluating
the line.
"""

import sys
from typing import List, Optional, TextIO

from .errors import ParseError
from .interpreter import Interpreter

PROMPT = '>> '

PARSER_ERROR_BANNER = 'Woops! a parser error has occurred:'


def print_parser_errors(output: TextIO, errors: List[str]):
    for msg in errors:
        output.write(f"{PARSER_ERROR_BANNER}\n \t{msg}\n")


def start_repl(input: Optional[TextIO] = None, output: Optional[TextIO] = None,
               interpreter: Optional[Interpreter] = None):
    input = input if input is not None else sys.stdin
    output = output if output is not None else sys.stdout
    if interpreter is None:
        interpreter = Interpreter()
    env = interpreter.global_env
    while True:
        output.write(PROMPT)
        output.flush()
        line = input.readline()
        if not line:
            # end of input
            output.write('\n')
            return
        try:
            program = interpreter.parse(line)
        except ParseError as e:
            print_parser_errors(output, e.errors)
            continue
        result = interpreter.evaluate(program, env)
        if result is not None:
            output.write(result.inspect() + '\n')
