"""CLI entry point for the minijs interpreter.

Usage:
    python -m minijs [-v|-vv|-vvv|-vvvv] <program_file>
    python -m minijs [-v...]
    python -m minijs --tokens <program_file>
    python -m minijs --emit-ast <program_file>
    python -m minijs [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --tokens      Print the token stream of the given file
  --emit-ast    Parse the given file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file the interpreter starts a REPL: each line is parsed
and run against the same global scope, errors are reported and the loop
goes on. Debug information is written to `debug.txt` in the current
directory when verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import ast_from_obj, ast_to_obj
from .errors import MiniJSError
from .interpreter import Interpreter
from .parser import parse_program
from .scanner import Scanner
from .types import NullVal, to_string


def read_source(path_arg: str) -> str:
    program_file = Path(path_arg)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def repl(interpreter: Interpreter, stdin=None) -> None:
    stdin = stdin or sys.stdin
    while True:
        print('>> ', end='', flush=True)
        line = stdin.readline()
        if not line:
            print()
            return
        try:
            result = interpreter.run(parse_program(line))
        except MiniJSError as e:
            print(e, file=sys.stderr)
            continue
        if not isinstance(result, NullVal):
            print(to_string(result))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='minijs', description="minijs language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--tokens', metavar='PROGRAM_FILE', help='print the token stream of the given file')
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='program file to execute; omit to start a REPL')
    args = parser.parse_args(argv)

    # Token dump mode
    if args.tokens:
        source = read_source(args.tokens)
        try:
            for token in Scanner(source).tokens():
                print(repr(token))
        except MiniJSError as e:
            print(e, file=sys.stderr)
            sys.exit(1)
        return

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(args.emit_ast)
        try:
            statements = parse_program(source)
        except MiniJSError as e:
            print(e, file=sys.stderr)
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(statements), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    interpreter = Interpreter(debug_level=args.v)
    try:
        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                print(f"Error: file {ast_path} not found", file=sys.stderr)
                sys.exit(1)
            with open(ast_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            try:
                interpreter.run(ast_from_obj(data))
            except MiniJSError as e:
                print(e, file=sys.stderr)
                sys.exit(1)
            return

        # No program: interactive mode
        if not args.program:
            repl(interpreter)
            return

        source = read_source(args.program)
        try:
            interpreter.run(parse_program(source))
        except MiniJSError as e:
            print(e, file=sys.stderr)
            sys.exit(1)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
