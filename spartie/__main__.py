"""CLI entry point for the Spartie interpreter.

Usage:
    python -m spartie [-v|-vv|-vvv|-vvvv] [--strict] <program_file>
    python -m spartie [-v...] --emit-ast <program_file>
    python -m spartie [-v...] [--strict] --ast <ast_json_file>
    python -m spartie [-v...] [--strict]

Options:
  -v            Increase debug verbosity (can be repeated)
  --strict      Reading an undefined variable is an error instead of null
  --emit-ast    Parse the given .sp file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file an interactive prompt is started. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.

Exit statuses: 0 on success, 65 on a syntax error, 66 when the input
file cannot be read and 70 on a runtime error.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .errors import ExitCode, SpartieError, exit_code_for
from .interpreter import Interpreter
from .parser import parse_program
from .repl import repl


def report_error(error: SpartieError) -> ExitCode:
    """Single reporting hook: describe the error on stderr, pick a status."""
    print(f"{error.name}: {error}", file=sys.stderr)
    return exit_code_for(error)


def read_source(path: Path) -> Optional[str]:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        return None
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {path}: {e}", file=sys.stderr)
        return None


def execute(program: Program, args: argparse.Namespace) -> ExitCode:
    interpreter = Interpreter(debug_level=args.v, strict_reads=args.strict)
    try:
        interpreter.run(program)
    except SpartieError as e:
        return report_error(e)
    finally:
        interpreter.close()
    return ExitCode.SUCCESS


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(prog='spartie', description="Spartie language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--strict', action='store_true', help='treat reads of undefined variables as errors')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='SPARTIE_FILE', help='emit AST JSON for the given .sp file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Spartie program file (.sp) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        if source is None:
            return ExitCode.FILE_ERROR
        try:
            ast_program = parse_program(source)
        except SpartieError as e:
            return report_error(e)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(ast_program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return ExitCode.SUCCESS

    # Execute from AST JSON
    if args.ast:
        source = read_source(Path(args.ast))
        if source is None:
            return ExitCode.FILE_ERROR
        try:
            ast_program = ast_from_obj(json.loads(source))
        except (ValueError, TypeError, KeyError) as e:
            print(f"Error: invalid AST file {args.ast}: {e}", file=sys.stderr)
            return ExitCode.FILE_ERROR
        if not isinstance(ast_program, Program):
            print(f"Error: {args.ast} does not contain a Program", file=sys.stderr)
            return ExitCode.FILE_ERROR
        return execute(ast_program, args)

    # Interactive prompt
    if not args.program:
        interpreter = Interpreter(debug_level=args.v, strict_reads=args.strict)
        try:
            repl(interpreter)
        finally:
            interpreter.close()
        return ExitCode.SUCCESS

    # Default: execute source file
    source = read_source(Path(args.program))
    if source is None:
        return ExitCode.FILE_ERROR
    try:
        ast_program = parse_program(source)
    except SpartieError as e:
        return report_error(e)
    return execute(ast_program, args)


if __name__ == '__main__':
    sys.exit(main())
