"""CLI entry point for the Monkey interpreter.

Usage:
    python -m monkey [-v|-vv|-vvv]                 start the REPL
    python -m monkey [-v...] <program_file>
    python -m monkey [-v...] --emit-ast <program_file>
    python -m monkey [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .monkey file and emit an AST JSON file
  --ast         Evaluate a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. When a program is evaluated, the value of its
last statement is printed.
"""

import argparse
import getpass
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj, ast_from_obj
from .errors import ParseError
from .interpreter import Interpreter
from .repl import start_repl, print_parser_errors
from .types import is_error


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def report(interpreter: Interpreter, program) -> None:
    result = interpreter.run(program)
    if is_error(result):
        print(result.inspect(), file=sys.stderr)
        sys.exit(1)
    if result is not None:
        print(result.inspect())


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Monkey language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='MONKEY_FILE', help='emit AST JSON for the given .monkey file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='evaluate AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Monkey program file (.monkey) to evaluate')
    args = parser.parse_args(argv)

    interpreter = Interpreter(debug_level=args.v)
    try:
        # Emit AST mode
        if args.emit_ast:
            program_file = Path(args.emit_ast)
            source = read_source(program_file)
            try:
                program = interpreter.parse(source)
            except ParseError as e:
                print_parser_errors(sys.stderr, e.errors)
                sys.exit(1)
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(ast_to_obj(program), out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        # Evaluate from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            data = json.loads(read_source(ast_path))
            report(interpreter, ast_from_obj(data))
            return

        # No program: interactive session
        if not args.program:
            print(f"Hello {getpass.getuser()}! This is a simple interpreter!")
            print("Feel free to type in commands")
            start_repl(sys.stdin, sys.stdout, interpreter)
            return

        source = read_source(Path(args.program))
        try:
            program = interpreter.parse(source)
        except ParseError as e:
            print_parser_errors(sys.stderr, e.errors)
            sys.exit(1)
        report(interpreter, program)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
